from dataclasses import dataclass, field
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from services.identity_service.repository import UserRepository
from services.product_service.repository import ProductRepository
from services.store_service.repository import StoreRepository
from shared.errors import ConflictError, InternalError

from .constants import OrderStatus, PaymentStatus
from .models import Order, OrderItem

logger = structlog.get_logger(__name__)


@dataclass
class OrderFilter:
    order_status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    user_id: Optional[str] = None
    store_id: Optional[str] = None

    def conditions(self) -> list:
        clauses = []
        if self.order_status:
            clauses.append(Order.order_status == self.order_status)
        if self.payment_status:
            clauses.append(Order.payment_status == self.payment_status)
        if self.user_id:
            clauses.append(Order.user_id == self.user_id)
        if self.store_id:
            clauses.append(Order.items.any(OrderItem.store_id == self.store_id))
        return clauses


@dataclass
class OrderReferences:
    """Catalog and account rows referenced by a batch of orders, keyed by id."""

    products: dict = field(default_factory=dict)
    stores: dict = field(default_factory=dict)
    users: dict = field(default_factory=dict)


class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, order: Order) -> Order:
        db.add(order)
        try:
            await db.commit()
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error("order_persist_failed", error=str(exc))
            raise InternalError() from exc
        await db.refresh(order)
        return order

    @staticmethod
    async def get_order(db: AsyncSession, order_id: str) -> Optional[Order]:
        result = await db.execute(select(Order).where(Order.id == order_id))
        return result.scalars().first()

    @staticmethod
    async def list_orders(
        db: AsyncSession, filters: OrderFilter, page: int, limit: int
    ) -> tuple[list[Order], int]:
        conditions = filters.conditions()
        stmt = (
            select(Order)
            .where(*conditions)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await db.execute(stmt)
        total = await db.scalar(select(func.count()).select_from(Order).where(*conditions))
        return list(result.scalars().all()), total or 0

    @staticmethod
    async def save(db: AsyncSession, order: Order) -> Order:
        """Flush pending changes on `order` as one versioned UPDATE."""
        # Rollback expires the instance; attribute reads after it would lazy-load
        order_id = order.id
        try:
            await db.commit()
        except StaleDataError as exc:
            await db.rollback()
            logger.warning("order_version_conflict", order_id=order_id)
            raise ConflictError("Order was modified by another request, reload and retry") from exc
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.error("order_update_failed", order_id=order_id, error=str(exc))
            raise InternalError() from exc
        await db.refresh(order)
        return order

    @staticmethod
    async def order_stats(db: AsyncSession) -> tuple[list[tuple[OrderStatus, int, float]], int, float]:
        grouped = await db.execute(
            select(
                Order.order_status,
                func.count(Order.id),
                func.coalesce(func.sum(Order.total_price), 0),
            ).group_by(Order.order_status)
        )
        buckets = [(status, count, float(amount)) for status, count, amount in grouped.all()]
        total_orders = await db.scalar(select(func.count()).select_from(Order))
        revenue = await db.scalar(
            select(func.coalesce(func.sum(Order.total_price), 0)).where(
                Order.payment_status == PaymentStatus.PAID
            )
        )
        return buckets, total_orders or 0, float(revenue or 0)

    @staticmethod
    async def load_references(db: AsyncSession, orders: list[Order]) -> OrderReferences:
        """Read-side hydration: fetch the rows an order snapshot points at.

        Rows deleted since the order was placed are simply absent.
        """
        product_ids, store_ids, user_ids = set(), set(), set()
        for order in orders:
            if order.user_id:
                user_ids.add(order.user_id)
            for item in order.items:
                product_ids.add(item.product_id)
                store_ids.add(item.store_id)

        products = await ProductRepository.get_products(db, product_ids)
        stores = await StoreRepository.get_stores(db, store_ids)
        users = await UserRepository.get_many(db, user_ids)
        return OrderReferences(
            products={p.id: p for p in products},
            stores={s.id: s for s in stores},
            users={u.id: u for u in users},
        )
