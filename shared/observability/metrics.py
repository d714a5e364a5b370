from prometheus_client import Counter, Histogram

# Business Metrics
bazaar_orders_created_total = Counter(
    "bazaar_orders_created_total",
    "Total orders created",
    ["payment_method"] # Labels: 'Cash on Delivery', 'Stripe', etc.
)

bazaar_order_creation_duration_seconds = Histogram(
    "bazaar_order_creation_duration_seconds",
    "Order creation (pricing + persistence) duration in seconds"
)

bazaar_order_status_transitions_total = Counter(
    "bazaar_order_status_transitions_total",
    "Order status transitions applied",
    ["from_status", "to_status"]
)

bazaar_order_cancellations_total = Counter(
    "bazaar_order_cancellations_total",
    "Orders soft-cancelled through DELETE /orders/{id}"
)

bazaar_payment_updates_total = Counter(
    "bazaar_payment_updates_total",
    "Payment status updates applied",
    ["payment_status"]
)
