from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.identifiers import ensure_valid_id
from shared.security import get_optional_seller_id, limiter
from shared.security.rate_limiter import ORDER_CREATE_RATE_LIMIT

from .constants import OrderStatus, PaymentStatus
from .repository import OrderFilter
from .schemas import (
    OrderCreate,
    OrderEnvelope,
    OrderListEnvelope,
    OrderStatsEnvelope,
    OrderStatusUpdate,
    PaymentStatusUpdate,
)
from .service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
public_router = APIRouter()

PAGE = Query(default=1, ge=1, le=1000)
LIMIT = Query(default=10, ge=1, le=100)


@public_router.get("/orders/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}


@router.post("", response_model=OrderEnvelope, status_code=status.HTTP_201_CREATED)
@limiter.limit(ORDER_CREATE_RATE_LIMIT)
async def create_order(
    request: Request,
    order: OrderCreate,
    seller_id: Optional[str] = Depends(get_optional_seller_id),
    db: AsyncSession = Depends(get_db),
):
    created = await OrderService.create_order(db, order, seller_id=seller_id)
    return OrderEnvelope(message="Order created successfully", data=created)


@router.get("", response_model=OrderListEnvelope)
async def list_orders(
    page: int = PAGE,
    limit: int = LIMIT,
    order_status: Optional[OrderStatus] = Query(default=None, alias="status"),
    payment_status: Optional[PaymentStatus] = Query(default=None, alias="paymentStatus"),
    user_id: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    filters = OrderFilter(
        order_status=order_status,
        payment_status=payment_status,
        user_id=ensure_valid_id(user_id, "user") if user_id else None,
    )
    orders, pagination = await OrderService.list_orders(db, filters, page, limit)
    return OrderListEnvelope(data=orders, pagination=pagination)


@router.get("/stats", response_model=OrderStatsEnvelope)
async def order_stats(db: AsyncSession = Depends(get_db)):
    return OrderStatsEnvelope(data=await OrderService.stats(db))


@router.get("/user/{user_id}", response_model=OrderListEnvelope)
async def list_user_orders(
    user_id: str,
    page: int = PAGE,
    limit: int = LIMIT,
    db: AsyncSession = Depends(get_db),
):
    orders, pagination = await OrderService.list_user_orders(db, user_id, page, limit)
    return OrderListEnvelope(data=orders, pagination=pagination)


@router.get("/store/{store_id}", response_model=OrderListEnvelope)
async def list_store_orders(
    store_id: str,
    page: int = PAGE,
    limit: int = LIMIT,
    db: AsyncSession = Depends(get_db),
):
    orders, pagination = await OrderService.list_store_orders(db, store_id, page, limit)
    return OrderListEnvelope(data=orders, pagination=pagination)


@router.get("/{order_id}", response_model=OrderEnvelope)
async def get_order(order_id: str, db: AsyncSession = Depends(get_db)):
    return OrderEnvelope(data=await OrderService.get_order(db, order_id))


@router.put("/{order_id}/status", response_model=OrderEnvelope)
async def update_order_status(
    order_id: str, payload: OrderStatusUpdate, db: AsyncSession = Depends(get_db)
):
    order = await OrderService.update_status(db, order_id, payload)
    return OrderEnvelope(message="Order updated successfully", data=order)


@router.put("/{order_id}/payment", response_model=OrderEnvelope)
async def update_payment_status(
    order_id: str, payload: PaymentStatusUpdate, db: AsyncSession = Depends(get_db)
):
    order = await OrderService.update_payment(db, order_id, payload)
    return OrderEnvelope(message="Payment status updated successfully", data=order)


# Soft-cancel: the order stays retrievable with status Cancelled
@router.delete("/{order_id}", response_model=OrderEnvelope)
async def cancel_order(order_id: str, db: AsyncSession = Depends(get_db)):
    order = await OrderService.cancel_order(db, order_id)
    return OrderEnvelope(message="Order cancelled successfully", data=order)
