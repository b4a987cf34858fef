"""
Prometheus metrics for the license registry.

Custom metrics for registry operations and HTTP performance.
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

# Registry metrics
licenses_granted_total = Counter(
    "licenses_granted_total",
    "Total licenses granted",
)

license_batches_total = Counter(
    "license_batches_total",
    "Total batch grants completed",
)

license_batch_entries_skipped_total = Counter(
    "license_batch_entries_skipped_total",
    "Total batch entries skipped after issuance started",
)

licenses_transferred_total = Counter(
    "licenses_transferred_total",
    "Total license transfers",
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked",
)

license_metadata_updates_total = Counter(
    "license_metadata_updates_total",
    "Total license metadata updates",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
