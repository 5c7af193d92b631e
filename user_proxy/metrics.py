from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "user_proxy_requests_total",
    "Total number of requests",
    ["method", "endpoint", "status_code"]
)

REQUEST_LATENCY = Histogram(
    "user_proxy_request_duration_seconds",
    "Request latency",
    ["method", "endpoint", "status_code"]
)

UPSTREAM_CALLS = Counter(
    "user_proxy_upstream_calls_total",
    "Calls made to the upstream users API",
    ["method", "outcome"]
)
