"""Optimistic concurrency on order updates."""

import pytest

from services.order_service.constants import OrderStatus, PaymentMethod, PaymentStatus
from services.order_service.models import Order, OrderItem
from services.order_service.repository import OrderRepository
from shared.config.database import AsyncSessionLocal
from shared.errors import ConflictError
from shared.identifiers import new_id


async def _seed_order() -> str:
    async with AsyncSessionLocal() as db:
        order = Order(
            shipping_address={"fullName": "Bilal Ahmed"},
            payment_method=PaymentMethod.CASH_ON_DELIVERY,
            items_price=100.0,
            shipping_price=50.0,
            tax_price=5.0,
            total_price=155.0,
            items=[OrderItem(position=0, product_id=new_id(), quantity=1, price=100.0, store_id=new_id())],
        )
        order = await OrderRepository.create_order(db, order)
        return order.id


async def test_second_writer_on_stale_version_gets_conflict():
    order_id = await _seed_order()

    async with AsyncSessionLocal() as first, AsyncSessionLocal() as second:
        mine = await OrderRepository.get_order(first, order_id)
        theirs = await OrderRepository.get_order(second, order_id)
        assert mine.version == theirs.version == 1

        mine.order_status = OrderStatus.PROCESSING
        await OrderRepository.save(first, mine)

        theirs.order_status = OrderStatus.CANCELLED
        with pytest.raises(ConflictError):
            await OrderRepository.save(second, theirs)

    async with AsyncSessionLocal() as db:
        stored = await OrderRepository.get_order(db, order_id)
        assert stored.order_status == OrderStatus.PROCESSING
        assert stored.version == 2


async def test_sequential_writers_each_bump_the_version():
    order_id = await _seed_order()

    async with AsyncSessionLocal() as db:
        order = await OrderRepository.get_order(db, order_id)
        order.payment_status = PaymentStatus.PAID
        order = await OrderRepository.save(db, order)
        assert order.version == 2

    async with AsyncSessionLocal() as db:
        order = await OrderRepository.get_order(db, order_id)
        order.order_status = OrderStatus.PROCESSING
        order = await OrderRepository.save(db, order)
        assert order.version == 3
