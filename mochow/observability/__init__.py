"""Observability module for client metrics."""

from mochow.observability.metrics import (
    get_metrics,
    track_iterator_rows,
    track_request,
    track_retry,
)

__all__ = [
    "get_metrics",
    "track_iterator_rows",
    "track_request",
    "track_retry",
]
