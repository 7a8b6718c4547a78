"""
Prometheus metrics for the license console.

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
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["scope_kind"],
)

licenses_removed_total = Counter(
    "licenses_removed_total",
    "Total licenses removed",
    ["scope_kind"],
)

quota_rejections_total = Counter(
    "quota_rejections_total",
    "License creations rejected for lack of quota",
    ["scope_kind"],
)

# Notification metrics
notifications_total = Counter(
    "notifications_total",
    "Notifications dispatched",
    ["kind", "outcome"],
)

# Purchase metrics
purchases_applied_total = Counter(
    "purchases_applied_total",
    "Purchase confirmations applied to a quota",
    ["scope_kind", "replayed"],
)

licenses_purchased_total = Counter(
    "licenses_purchased_total",
    "Licenses added to quotas by purchases",
    ["scope_kind"],
)

# Team metrics
team_events_total = Counter(
    "team_events_total",
    "Team membership events",
    ["event_type"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
