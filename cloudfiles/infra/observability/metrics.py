from prometheus_client import Counter, Histogram

# endpoint 标签只取 storage / cdn，避免容器名、对象名导致高基数
REQUESTS = Counter(
    "cloudfiles_requests_total",
    "Total requests issued against the storage and CDN endpoints",
    ["method", "endpoint", "status"],
)

LATENCY = Histogram(
    "cloudfiles_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
