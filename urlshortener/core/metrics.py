"""Prometheus request latency metrics."""

from prometheus_client import CollectorRegistry, Histogram, REGISTRY

# Upper bounds in seconds; each bucket counts requests at or under its bound.
LATENCY_BUCKETS = (0.3, 1.0, 5.0, 10.0)

METRICS_PATH = "/metrics"


def create_request_histogram(registry: CollectorRegistry = REGISTRY) -> Histogram:
    return Histogram(
        "http_request_duration_seconds",
        "Duration of HTTP requests in seconds",
        buckets=LATENCY_BUCKETS,
        registry=registry,
    )


REQUEST_DURATION = create_request_histogram()


def observe_request(duration: float, histogram: Histogram = REQUEST_DURATION) -> None:
    """Record one handled request taking ``duration`` seconds."""
    histogram.observe(duration)
