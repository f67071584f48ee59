"""Tracking of explicitly-set optional request fields."""

from collections.abc import Iterator


class FieldPresence:
    """Set of optional fields the caller has explicitly set.

    Rendering copies a field into the wire payload only when it is marked,
    so "not set" stays distinct from "set to zero or empty" and the server
    applies its own defaults. There is no way to unmark a field.
    """

    def __init__(self) -> None:
        self._marked: dict[str, bool] = {}

    def mark(self, field: str) -> None:
        """Record that ``field`` was explicitly set."""
        self._marked[field] = True

    def is_marked(self, field: str) -> bool:
        """Whether ``field`` was explicitly set."""
        return self._marked.get(field, False)

    def marked_fields(self) -> list[str]:
        """Marked fields in the order they were first set."""
        return list(self._marked)

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and self.is_marked(field)

    def __iter__(self) -> Iterator[str]:
        return iter(self.marked_fields())

    def __len__(self) -> int:
        return len(self._marked)

    def __repr__(self) -> str:
        return f"FieldPresence({self.marked_fields()!r})"
