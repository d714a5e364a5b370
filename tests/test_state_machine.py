"""Tests for the order status graph."""

import pytest

from services.order_service.constants import OrderStatus
from services.order_service.state_machine import (
    ORDER_STATUS_FLOW,
    ensure_transition,
    is_legal,
)
from shared.errors import ConflictError, InvalidTransitionError


class TestIsLegal:
    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.RETURNED),
            (OrderStatus.DELIVERED, OrderStatus.RETURNED),
        ],
    )
    def test_graph_edges_are_legal(self, current, target):
        assert is_legal(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (OrderStatus.PENDING, OrderStatus.SHIPPED),
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.CANCELLED),
            (OrderStatus.DELIVERED, OrderStatus.CANCELLED),
            (OrderStatus.DELIVERED, OrderStatus.PENDING),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
            (OrderStatus.RETURNED, OrderStatus.DELIVERED),
        ],
    )
    def test_other_pairs_are_illegal(self, current, target):
        assert not is_legal(current, target)

    def test_accepts_string_values(self):
        assert is_legal("Pending", "Processing")
        assert not is_legal("Pending", "Delivered")

    def test_unknown_status_is_never_legal(self):
        assert not is_legal("Lost", OrderStatus.PENDING)
        assert not is_legal(OrderStatus.PENDING, "Teleported")

    def test_self_loops_are_not_edges(self):
        for status in OrderStatus:
            assert not is_legal(status, status)


def test_cancelled_and_returned_are_terminal():
    terminal = {status for status, targets in ORDER_STATUS_FLOW.items() if not targets}
    assert terminal == {OrderStatus.CANCELLED, OrderStatus.RETURNED}


def test_every_status_is_in_the_graph():
    assert set(ORDER_STATUS_FLOW) == set(OrderStatus)


def test_ensure_transition_raises_conflict_with_both_statuses():
    with pytest.raises(InvalidTransitionError) as exc_info:
        ensure_transition(OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    error = exc_info.value
    assert isinstance(error, ConflictError)
    assert error.status_code == 409
    assert error.from_status == "Delivered"
    assert error.to_status == "Cancelled"
    assert error.message == "Cannot change status from Delivered to Cancelled"


def test_ensure_transition_passes_for_legal_edge():
    ensure_transition(OrderStatus.PENDING, OrderStatus.PROCESSING)
