"""Tests for the field-presence tracker."""

from mochow.search import FieldPresence, FloatVector, VectorTopkSearchRequest


class TestFieldPresence:
    """Tests for FieldPresence."""

    def test_empty(self) -> None:
        """A new tracker has no marked fields."""
        presence = FieldPresence()
        assert len(presence) == 0
        assert presence.is_marked("filter") is False
        assert "filter" not in presence

    def test_mark(self) -> None:
        """Marked fields are reported as marked."""
        presence = FieldPresence()
        presence.mark("limit")
        assert presence.is_marked("limit") is True
        assert "limit" in presence

    def test_mark_is_idempotent(self) -> None:
        """Marking twice keeps one entry in first-set order."""
        presence = FieldPresence()
        presence.mark("limit")
        presence.mark("filter")
        presence.mark("limit")
        assert presence.marked_fields() == ["limit", "filter"]
        assert list(presence) == ["limit", "filter"]

    def test_non_string_membership(self) -> None:
        """Non-string keys are never members."""
        presence = FieldPresence()
        presence.mark("1")
        assert 1 not in presence

    def test_no_removal(self) -> None:
        """The tracker exposes no way to unmark a field."""
        presence = FieldPresence()
        assert not hasattr(presence, "unmark")
        assert not hasattr(presence, "remove")


class TestPresenceInRequests:
    """Tests for presence tracking through request setters."""

    def test_zero_value_still_rendered_when_set(self) -> None:
        """A field set to an empty value is rendered; an unset one is not."""
        request = VectorTopkSearchRequest("vector", FloatVector([0.1]), 5)
        assert "filter" not in request.to_dict()["anns"]

        request.set_filter("")
        assert request.to_dict()["anns"]["filter"] == ""

    def test_setters_mark_fields(self) -> None:
        """Every setter marks its field."""
        request = VectorTopkSearchRequest("vector", FloatVector([0.1]), 5)
        request.set_projections([]).set_partition_key({}).set_read_consistency("STRONG")

        assert request.presence.is_marked("projections")
        assert request.presence.is_marked("partitionKey")
        assert request.presence.is_marked("readConsistency")

        rendered = request.to_dict()
        assert rendered["projections"] == []
        assert rendered["partitionKey"] == {}
        assert rendered["readConsistency"] == "STRONG"
