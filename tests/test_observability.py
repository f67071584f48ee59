"""Tests for observability module."""

from prometheus_client import REGISTRY

from mochow.observability import (
    get_metrics,
    track_iterator_rows,
    track_request,
    track_retry,
)


def sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricsFunctions:
    """Tests for metrics tracking functions."""

    def test_get_metrics_returns_bytes(self) -> None:
        """get_metrics returns bytes."""
        assert isinstance(get_metrics(), bytes)

    def test_track_request_success(self) -> None:
        """track_request records duration and count."""
        labels = {"operation": "obs-search", "status": "success"}
        before = sample("mochow_requests_total", labels)

        track_request("obs-search", 0.05)

        assert sample("mochow_requests_total", labels) == before + 1
        metrics = get_metrics().decode()
        assert "mochow_request_duration_seconds" in metrics

    def test_track_request_failure_status(self) -> None:
        """track_request labels failures by status."""
        labels = {"operation": "obs-upsert", "status": "transport_error"}
        before = sample("mochow_requests_total", labels)

        track_request("obs-upsert", 0.5, status="transport_error")

        assert sample("mochow_requests_total", labels) == before + 1

    def test_track_retry(self) -> None:
        """track_retry counts retries per operation."""
        labels = {"operation": "obs-query"}
        before = sample("mochow_request_retries_total", labels)

        track_retry("obs-query")
        track_retry("obs-query")

        assert sample("mochow_request_retries_total", labels) == before + 2

    def test_track_iterator_rows(self) -> None:
        """track_iterator_rows adds delivered rows."""
        before = sample("mochow_iterator_rows_total")
        track_iterator_rows(400)
        assert sample("mochow_iterator_rows_total") == before + 400

    def test_track_iterator_rows_ignores_empty_batches(self) -> None:
        """Empty batches do not change the counter."""
        before = sample("mochow_iterator_rows_total")
        track_iterator_rows(0)
        assert sample("mochow_iterator_rows_total") == before
