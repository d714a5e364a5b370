"""Order domain constants.

Status enumerations are shared by the state machine, the ORM model, the
request schemas and the query filters.
"""

import enum
from decimal import Decimal


class OrderStatus(str, enum.Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    RETURNED = "Returned"


class PaymentStatus(str, enum.Enum):
    PENDING = "Pending"
    PAID = "Paid"
    FAILED = "Failed"
    REFUNDED = "Refunded"


class PaymentMethod(str, enum.Enum):
    CASH_ON_DELIVERY = "Cash on Delivery"
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"
    STRIPE = "Stripe"
    BANK_TRANSFER = "Bank Transfer"


SHIPPING_PRICE = Decimal("50")
TAX_RATE = Decimal("0.05")

MAX_LINE_QUANTITY = 100
MAX_LINE_PRICE = 1_000_000

DEFAULT_COUNTRY = "Pakistan"
