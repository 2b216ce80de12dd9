"""Prometheus metrics for monitoring auction closings, payment scheduling, and webhook performance"""

from prometheus_client import Counter, Histogram

# Closing pass
auctions_closed_counter = Counter(
    "auction_closed_total",
    "Auctions closed and persisted",
)

closing_failure_counter = Counter(
    "auction_closing_failures_total",
    "Per-auction failures during the closing pass",
    ["stage"],  # update | notify
)

# Payment pass
payments_scheduled_counter = Counter(
    "auction_payments_scheduled_total",
    "Payments generated for closed auctions",
)

payment_failure_counter = Counter(
    "auction_payment_failures_total",
    "Per-auction failures during payment generation",
    ["stage"],  # evaluate | save
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "notification_webhook_latency_seconds",
    "Notification webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "notification_webhook_failures_total",
    "Failed notification webhook deliveries",
)


def record_closing_failure(stage: str) -> None:
    closing_failure_counter.labels(stage=stage).inc()


def record_payment_failure(stage: str) -> None:
    payment_failure_counter.labels(stage=stage).inc()
