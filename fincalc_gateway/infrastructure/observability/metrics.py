"""Prometheus metrics for monitoring the rate cache, provider health, and calculator usage"""

from prometheus_client import Counter, Histogram

# Rate cache metrics
rate_cache_requests_counter = Counter(
    "fincalc_rate_cache_requests_total",
    "Rate cache reads",
    ["result"],  # hit | miss
)

rate_refresh_histogram = Histogram(
    "fincalc_rate_refresh_seconds",
    "Time spent refreshing rates from the provider",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Provider metrics
rate_fetch_failures_counter = Counter(
    "fincalc_rate_fetch_failures_total",
    "Failed rate series fetches",
    ["series"],
)

rate_fallback_counter = Counter(
    "fincalc_rate_fallback_total",
    "Refreshes that fell back to the full fallback rate set",
)

# Calculator metrics
calculation_counter = Counter(
    "fincalc_calculations_total",
    "Calculator requests served",
    ["calculator"],  # mortgage | auto_loan | credit_card | debt_consolidation
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(calculator: str) -> None:
    """Count a served calculation by calculator type"""
    calculation_counter.labels(calculator=calculator).inc()
