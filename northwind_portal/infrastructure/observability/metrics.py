"""Prometheus metrics for upstream API health, transfer outcomes and HTTP latency"""

from prometheus_client import Counter, Histogram

# Upstream Northwind API metrics
upstream_request_counter = Counter(
    "northwind_upstream_requests_total",
    "Requests sent to the Northwind API",
    ["method", "status"],
)

upstream_latency_histogram = Histogram(
    "northwind_upstream_latency_seconds",
    "Northwind API response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

upstream_failure_counter = Counter(
    "northwind_upstream_failures_total",
    "Failed Northwind API calls",
    ["kind"],  # api_error | transport
)

# Transfer metrics
transfer_submission_counter = Counter(
    "northwind_transfer_submissions_total",
    "Transfer form submissions",
    ["outcome"],  # initiated | rejected | failed
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_upstream_call(method: str, status: int | str) -> None:
    """Count one upstream call by method and response status"""
    upstream_request_counter.labels(method=method, status=str(status)).inc()


def record_transfer_submission(outcome: str) -> None:
    """Record the outcome of a transfer form submission"""
    transfer_submission_counter.labels(outcome=outcome).inc()
