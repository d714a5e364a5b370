from shared.errors import InvalidTransitionError

from .constants import OrderStatus

ORDER_STATUS_FLOW: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.RETURNED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.RETURNED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.RETURNED: frozenset(),
}


def is_legal(current, target) -> bool:
    """True when `current -> target` is an edge of the order status graph.

    Accepts enum members or their string values; unknown statuses are never
    legal.
    """
    try:
        current, target = OrderStatus(current), OrderStatus(target)
    except ValueError:
        return False
    return target in ORDER_STATUS_FLOW[current]


def ensure_transition(current, target) -> None:
    if not is_legal(current, target):
        raise InvalidTransitionError(str(getattr(current, "value", current)), str(getattr(target, "value", target)))
