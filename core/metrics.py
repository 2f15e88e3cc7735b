"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
license_activations_total = Counter(
    "license_activations_total",
    "Total activation attempts by outcome",
    ["outcome"],
)

license_keys_issued_total = Counter(
    "license_keys_issued_total",
    "Total license keys generated",
    ["tier"],
)

licenses_banned_total = Counter(
    "licenses_banned_total",
    "Total licenses banned",
    ["source"],
)

# Device metrics
device_bans_total = Counter(
    "device_bans_total",
    "Total device identifiers added to the ban registry",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
