# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Prometheus metrics for the people-api service."""
from prometheus_client import Counter, Histogram

PEOPLE_CREATED = Counter(
    "people_created_total", "Total person records created"
)
PEOPLE_UPDATED = Counter(
    "people_updated_total", "Total person records updated"
)
PEOPLE_DELETED = Counter(
    "people_deleted_total", "Total person records deleted"
)
PEOPLE_SEARCH_LATENCY = Histogram(
    "people_search_duration_seconds",
    "Time spent building and running a people search",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
LOGIN_ATTEMPTS = Counter(
    "auth_login_attempts_total", "Login attempts by outcome", ["result"]
)
REQUEST_COUNT = Counter(
    "http_requests_total", "Total HTTP requests", ["method", "endpoint", "status"]
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds", "HTTP request latency", ["method", "endpoint"]
)
HTTP_ERRORS = Counter(
    "http_errors_total", "Total HTTP errors", ["method", "endpoint", "status"]
)
