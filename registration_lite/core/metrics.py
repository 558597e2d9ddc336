"""
Metrics instrumentation for observability.
Prometheus-compatible collectors; the host page or process decides how to expose them.
"""

from prometheus_client import Counter, Histogram

# Ordering API metrics
api_requests = Counter(
    'registration_api_requests_total',
    'Total calls made to the ordering API',
    ['method', 'outcome']  # success, failure, timeout
)

api_request_latency = Histogram(
    'registration_api_request_latency_seconds',
    'Ordering API call latency',
    ['method'],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Reservation metrics
reservation_attempts = Counter(
    'registration_reservation_attempts_total',
    'Total reservation creation attempts',
    ['outcome']  # created, precondition_failed, not_found, server_error, timeout, auth_failure
)

# Payment metrics
payment_dispatches = Counter(
    'registration_payment_dispatches_total',
    'Payment provider dispatches',
    ['provider', 'outcome']  # completed, failed
)

# Catalog metrics
catalog_fetches = Counter(
    'registration_catalog_fetches_total',
    'Catalog (ticket types + tax types) fetches',
    ['result']  # loaded, failed
)


def record_api_request(method: str, outcome: str, duration: float):
    """Record one ordering API call. Outcome: success, failure, timeout"""
    api_requests.labels(method=method, outcome=outcome).inc()
    api_request_latency.labels(method=method).observe(duration)

def record_reservation_attempt(outcome: str):
    reservation_attempts.labels(outcome=outcome).inc()

def record_payment_dispatch(provider: str, completed: bool):
    """Record payment provider outcome."""
    outcome = "completed" if completed else "failed"
    payment_dispatches.labels(provider=provider, outcome=outcome).inc()

def record_catalog_fetch(loaded: bool):
    result = "loaded" if loaded else "failed"
    catalog_fetches.labels(result=result).inc()
