"""Prometheus metrics for the Mochow client.

Provides metrics instrumentation for:
- Service request latency and counts per operation
- Transport retries
- Rows delivered through search iterators
"""

from prometheus_client import Counter, Histogram, generate_latest

# Request Metrics
MOCHOW_REQUEST_DURATION = Histogram(
    "mochow_request_duration_seconds",
    "Mochow service request duration in seconds",
    ["operation", "status"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

MOCHOW_REQUEST_TOTAL = Counter(
    "mochow_requests_total",
    "Total Mochow service requests",
    ["operation", "status"],
)

MOCHOW_REQUEST_RETRIES = Counter(
    "mochow_request_retries_total",
    "Total retried Mochow service requests",
    ["operation"],
)

# Iterator Metrics
MOCHOW_ITERATOR_ROWS = Counter(
    "mochow_iterator_rows_total",
    "Total rows delivered by search iterators",
)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def track_request(
    operation: str,
    duration: float,
    status: str = "success",
) -> None:
    """Track one service request.

    Args:
        operation: Operation selector (e.g. "search", "batchSearch").
        duration: Request duration in seconds.
        status: One of "success", "service_error", "transport_error".
    """
    MOCHOW_REQUEST_DURATION.labels(operation=operation, status=status).observe(duration)
    MOCHOW_REQUEST_TOTAL.labels(operation=operation, status=status).inc()


def track_retry(operation: str) -> None:
    """Track a retried request."""
    MOCHOW_REQUEST_RETRIES.labels(operation=operation).inc()


def track_iterator_rows(count: int) -> None:
    """Track rows returned by a search iterator batch."""
    if count > 0:
        MOCHOW_ITERATOR_ROWS.inc(count)
