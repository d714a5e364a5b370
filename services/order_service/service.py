import math
from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.repository import ProductRepository
from services.store_service.repository import StoreRepository
from shared.errors import ConflictError, NotFoundError
from shared.identifiers import ensure_valid_id
from shared.observability import (
    bazaar_order_cancellations_total,
    bazaar_order_creation_duration_seconds,
    bazaar_order_status_transitions_total,
    bazaar_orders_created_total,
    bazaar_payment_updates_total,
)

from .constants import OrderStatus, PaymentMethod
from .models import Order, OrderItem
from .pricing import CartLine, price_cart
from .repository import OrderFilter, OrderRepository
from .schemas import (
    OrderCreate,
    OrderResponse,
    OrderStats,
    OrderStatusUpdate,
    Pagination,
    PaymentStatusUpdate,
    StatusBucket,
)
from .state_machine import ensure_transition, is_legal

logger = structlog.get_logger(__name__)


class OrderService:
    @staticmethod
    async def create_order(
        db: AsyncSession, data: OrderCreate, seller_id: Optional[str] = None
    ) -> OrderResponse:
        with bazaar_order_creation_duration_seconds.time():
            lines = [
                CartLine(
                    product_id=str(line.product),
                    quantity=line.quantity,
                    price=line.price,
                    store_id=str(line.store_id) if line.store_id else None,
                )
                for line in data.products
            ]

            async def lookup(product_id: str):
                return await ProductRepository.get_product_by_id(db, product_id)

            async def store_lookup(store_id: str):
                return await StoreRepository.get_store_by_id(db, store_id)

            cart = await price_cart(lines, lookup, seller_id=seller_id, store_lookup=store_lookup)

            payment_method = data.payment_method or PaymentMethod.CASH_ON_DELIVERY
            order = Order(
                user_id=str(data.user_id) if data.user_id else None,
                shipping_address=data.shipping_address.model_dump(by_alias=True),
                payment_method=payment_method,
                items_price=cart.items_price,
                shipping_price=cart.shipping_price,
                tax_price=cart.tax_price,
                total_price=cart.total_price,
                notes=data.notes or None,
                items=[
                    OrderItem(
                        position=index,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=line.price,
                        store_id=line.store_id,
                    )
                    for index, line in enumerate(cart.lines)
                ],
            )
            order = await OrderRepository.create_order(db, order)

        bazaar_orders_created_total.labels(payment_method=payment_method.value).inc()
        logger.info(
            "order_created",
            order_id=order.id,
            user_id=order.user_id,
            lines=len(order.items),
            total_price=order.total_price,
        )
        return await OrderService._respond(db, order)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> OrderResponse:
        order = await OrderService._load(db, order_id)
        return await OrderService._respond(db, order)

    @staticmethod
    async def list_orders(
        db: AsyncSession, filters: OrderFilter, page: int, limit: int
    ) -> tuple[list[OrderResponse], Pagination]:
        orders, total = await OrderRepository.list_orders(db, filters, page, limit)
        refs = await OrderRepository.load_references(db, orders)
        pagination = Pagination(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_orders=total,
            limit=limit,
        )
        return [OrderResponse.from_order(o, refs) for o in orders], pagination

    @staticmethod
    async def list_user_orders(db: AsyncSession, user_id: str, page: int, limit: int):
        user_id = ensure_valid_id(user_id, "user")
        return await OrderService.list_orders(db, OrderFilter(user_id=user_id), page, limit)

    @staticmethod
    async def list_store_orders(db: AsyncSession, store_id: str, page: int, limit: int):
        store_id = ensure_valid_id(store_id, "store")
        return await OrderService.list_orders(db, OrderFilter(store_id=store_id), page, limit)

    @staticmethod
    async def update_status(db: AsyncSession, order_id: str, data: OrderStatusUpdate) -> OrderResponse:
        order = await OrderService._load(db, order_id)
        current = order.order_status
        target = data.order_status

        # Re-applying the current status is a no-op apart from the tracking number
        if target != current:
            ensure_transition(current, target)
            order.order_status = target
        if target == OrderStatus.DELIVERED and order.delivered_at is None:
            order.delivered_at = datetime.now(timezone.utc)
        if data.tracking_number:
            order.tracking_number = data.tracking_number

        order = await OrderRepository.save(db, order)

        if target != current:
            bazaar_order_status_transitions_total.labels(
                from_status=current.value, to_status=target.value
            ).inc()
            logger.info("order_status_changed", order_id=order.id, from_status=current.value, to_status=target.value)
        return await OrderService._respond(db, order)

    @staticmethod
    async def update_payment(db: AsyncSession, order_id: str, data: PaymentStatusUpdate) -> OrderResponse:
        order = await OrderService._load(db, order_id)
        previous = order.payment_status
        order.payment_status = data.payment_status
        order = await OrderRepository.save(db, order)

        bazaar_payment_updates_total.labels(payment_status=data.payment_status.value).inc()
        logger.info(
            "order_payment_changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=data.payment_status.value,
        )
        return await OrderService._respond(db, order)

    @staticmethod
    async def cancel_order(db: AsyncSession, order_id: str) -> OrderResponse:
        order = await OrderService._load(db, order_id)
        current = order.order_status

        if current != OrderStatus.CANCELLED:
            if not is_legal(current, OrderStatus.CANCELLED):
                raise ConflictError(f"Cannot cancel {current.value.lower()} orders")
            order.order_status = OrderStatus.CANCELLED
            order = await OrderRepository.save(db, order)
            bazaar_order_cancellations_total.inc()
            logger.info("order_cancelled", order_id=order.id, from_status=current.value)

        return await OrderService._respond(db, order)

    @staticmethod
    async def stats(db: AsyncSession) -> OrderStats:
        buckets, total_orders, revenue = await OrderRepository.order_stats(db)
        return OrderStats(
            orders_by_status=[
                StatusBucket(status=status, count=count, total_amount=amount)
                for status, count, amount in buckets
            ],
            total_orders=total_orders,
            total_revenue=revenue,
        )

    @staticmethod
    async def _load(db: AsyncSession, order_id: str) -> Order:
        order_id = ensure_valid_id(order_id, "order")
        order = await OrderRepository.get_order(db, order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    async def _respond(db: AsyncSession, order: Order) -> OrderResponse:
        refs = await OrderRepository.load_references(db, [order])
        return OrderResponse.from_order(order, refs)
