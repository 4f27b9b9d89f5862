"""Prometheus metric definitions shared across payment and shipping code."""

from prometheus_client import Counter, Histogram, generate_latest


transactions_total = Counter(
    "transactions_total",
    "Payment transactions by terminal outcome",
    ["provider", "outcome"],
)
refunds_total = Counter("refunds_total", "Refund attempts by outcome", ["provider", "outcome"])
payment_fees_total = Counter("payment_fees_total", "Sum of provider fees charged", ["provider"])
shipping_quotes_total = Counter(
    "shipping_quotes_total",
    "Shipping quotes by strategy and outcome",
    ["strategy", "outcome"],
)
carrier_rate_seconds = Histogram(
    "carrier_rate_seconds",
    "Carrier express-rate lookup duration seconds",
    ["client"],
)


def metrics_text() -> str:
    """Render all registered Prometheus metrics in text exposition format."""

    return generate_latest().decode("utf-8")
