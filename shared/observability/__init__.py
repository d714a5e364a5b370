from .setup import setup_observability
from .metrics import (
    bazaar_orders_created_total,
    bazaar_order_creation_duration_seconds,
    bazaar_order_status_transitions_total,
    bazaar_order_cancellations_total,
    bazaar_payment_updates_total
)
