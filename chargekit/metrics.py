"""
Prometheus metrics for chargekit

The host application is responsible for exposing the prometheus_client
registry.
"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger("chargekit.metrics")

REQUEST_COUNT = Counter(
    "chargekit_requests_total",
    "Total number of API requests",
    ["endpoint", "code"],
)

REQUEST_LATENCY = Histogram(
    "chargekit_request_latency_seconds",
    "API request latency in seconds",
    ["endpoint"],
)

LIST_PAGES = Counter(
    "chargekit_list_pages_total",
    "List pages fetched by list iterators",
    ["endpoint"],
)


def metrics_request(endpoint: str, code: int, latency: float) -> None:
    """
    Record one backend call.

    Args:
        endpoint: Logical endpoint name (e.g. 'charges.create')
        code: HTTP status code, 0 when no response was received
        latency: Duration in seconds
    """
    try:
        REQUEST_COUNT.labels(endpoint=endpoint, code=str(code)).inc()
        REQUEST_LATENCY.labels(endpoint=endpoint).observe(latency)
    except Exception as e:
        logger.debug("Failed to record metrics: %s", e)


def metrics_page(endpoint: str) -> None:
    try:
        LIST_PAGES.labels(endpoint=endpoint).inc()
    except Exception as e:
        logger.debug("Failed to record metrics: %s", e)
