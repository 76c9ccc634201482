"""
Prometheus metrics registry for the relay service.

Served in exposition format by the GET /metrics handler.
"""

from prometheus_client import Counter, Histogram

# HTTP request metrics
http_request_duration_seconds = Histogram(
    "relay_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path", "status_code"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

http_requests_total = Counter(
    "relay_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)

# Inbound webhooks
webhooks_received_total = Counter(
    "relay_webhooks_received_total",
    "Total Linkding webhooks received by outcome",
    ["result"],  # relayed | unauthorized | invalid | failed
)

# Outbound Slack delivery
slack_deliveries_total = Counter(
    "relay_slack_deliveries_total",
    "Total Slack delivery attempts by outcome",
    ["outcome"],  # delivered | unconfigured | rejected | transport_error
)
