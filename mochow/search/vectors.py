"""Query vector representations.

Each variant knows the wire field it is sent under and how to encode
itself into a JSON-compatible value:

- FloatVector: ``vectorFloats``, a JSON array of numbers.
- BinaryVector: ``vector``, base64 text of the packed bits.
- SparseFloatVector: ``vector``, a JSON object of dimension index to weight.
"""

import base64
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from mochow.exceptions import ErrorCode, ValidationError


def _finite(value: Any) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not finite")
    return number


class Vector(ABC):
    """A query vector."""

    wire_name: ClassVar[str]

    @abstractmethod
    def encode(self) -> Any:
        """Encode the vector as a JSON-compatible value."""
        ...


@dataclass(frozen=True)
class FloatVector(Vector):
    """Dense vector of 32-bit floats."""

    wire_name: ClassVar[str] = "vectorFloats"

    values: tuple[float, ...]

    def __init__(self, values: Iterable[float]) -> None:
        try:
            coerced = tuple(_finite(v) for v in values)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"FloatVector values must be finite numbers: {e}",
                code=ErrorCode.INVALID_VECTOR,
            ) from e
        object.__setattr__(self, "values", coerced)

    def encode(self) -> list[float]:
        return list(self.values)

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True)
class BinaryVector(Vector):
    """Bit vector packed into bytes."""

    wire_name: ClassVar[str] = "vector"

    data: bytes

    def __init__(self, data: bytes | bytearray | Iterable[int]) -> None:
        try:
            packed = bytes(data)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"BinaryVector data must be bytes: {e}",
                code=ErrorCode.INVALID_VECTOR,
            ) from e
        object.__setattr__(self, "data", packed)

    def encode(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class SparseFloatVector(Vector):
    """Sparse vector mapping dimension index to weight.

    Keys are kept as decimal strings in the order given.
    """

    wire_name: ClassVar[str] = "vector"

    entries: tuple[tuple[str, float], ...]

    def __init__(self, entries: Mapping[str | int, float]) -> None:
        coerced: list[tuple[str, float]] = []
        for key, weight in entries.items():
            index = str(key)
            if isinstance(key, bool) or not index.isdecimal():
                raise ValidationError(
                    f"Sparse vector keys must be decimal dimension indices, got {key!r}",
                    code=ErrorCode.INVALID_VECTOR,
                )
            try:
                coerced.append((index, _finite(weight)))
            except (TypeError, ValueError) as e:
                raise ValidationError(
                    f"Sparse vector weight of key {index} must be a finite number: {e}",
                    code=ErrorCode.INVALID_VECTOR,
                ) from e
        object.__setattr__(self, "entries", tuple(coerced))

    def encode(self) -> dict[str, float]:
        return dict(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
