import re
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_COUNTRY,
    MAX_LINE_PRICE,
    MAX_LINE_QUANTITY,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)

_PHONE = re.compile(r"^(\+92|0)?[0-9]{10,11}$")


class OrderLineCreate(BaseModel):
    product: UUID
    quantity: int = Field(..., ge=1, le=MAX_LINE_QUANTITY)
    price: Optional[float] = Field(None, ge=0, le=MAX_LINE_PRICE)
    store_id: Optional[UUID] = None


class ShippingAddress(BaseModel):
    full_name: str = Field(..., alias="fullName", min_length=2, max_length=100)
    address_line: str = Field(..., alias="addressLine", min_length=5, max_length=200)
    city: str = Field(..., min_length=2, max_length=50)
    postal_code: str = Field(..., alias="postalCode", pattern=r"^[0-9]{5}$")
    country: str = Field(DEFAULT_COUNTRY, max_length=50)
    phone: str

    class Config:
        populate_by_name = True
        str_strip_whitespace = True

    @field_validator("phone")
    @classmethod
    def valid_phone(cls, value: str) -> str:
        if not _PHONE.match(re.sub(r"[-\s]", "", value)):
            raise ValueError("Invalid phone number format")
        return value


class OrderCreate(BaseModel):
    user_id: Optional[UUID] = None
    products: List[OrderLineCreate] = Field(..., min_length=1)
    shipping_address: ShippingAddress = Field(..., alias="shippingAddress")
    payment_method: Optional[PaymentMethod] = Field(None, alias="paymentMethod")
    notes: Optional[str] = Field(None, max_length=500)

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class OrderStatusUpdate(BaseModel):
    order_status: OrderStatus = Field(..., alias="orderStatus")
    tracking_number: Optional[str] = Field(None, alias="trackingNumber", min_length=5, max_length=50)

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus = Field(..., alias="paymentStatus")

    class Config:
        populate_by_name = True


class ProductSummary(BaseModel):
    id: str
    name: str
    price: float
    images: List[str] = []

    class Config:
        from_attributes = True


class StoreSummary(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class UserSummary(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class OrderLineResponse(BaseModel):
    product_id: str
    product: Optional[ProductSummary] = None
    quantity: int
    price: float
    store_id: str
    store: Optional[StoreSummary] = None


class OrderResponse(BaseModel):
    id: str
    user_id: Optional[str] = None
    user: Optional[UserSummary] = None
    products: List[OrderLineResponse]
    shipping_address: ShippingAddress = Field(alias="shippingAddress")
    payment_method: PaymentMethod = Field(alias="paymentMethod")
    payment_status: PaymentStatus = Field(alias="paymentStatus")
    order_status: OrderStatus = Field(alias="orderStatus")
    items_price: float = Field(alias="itemsPrice")
    shipping_price: float = Field(alias="shippingPrice")
    tax_price: float = Field(alias="taxPrice")
    total_price: float = Field(alias="totalPrice")
    tracking_number: Optional[str] = Field(None, alias="trackingNumber")
    delivered_at: Optional[datetime] = Field(None, alias="deliveredAt")
    notes: Optional[str] = None
    version: int
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_order(cls, order, refs) -> "OrderResponse":
        """Build the response from the persisted snapshot plus hydrated references."""
        lines = []
        for item in order.items:
            product = refs.products.get(item.product_id)
            store = refs.stores.get(item.store_id)
            lines.append(
                OrderLineResponse(
                    product_id=item.product_id,
                    product=ProductSummary.model_validate(product) if product else None,
                    quantity=item.quantity,
                    price=item.price,
                    store_id=item.store_id,
                    store=StoreSummary.model_validate(store) if store else None,
                )
            )
        user = refs.users.get(order.user_id) if order.user_id else None
        return cls(
            id=order.id,
            user_id=order.user_id,
            user=UserSummary.model_validate(user) if user else None,
            products=lines,
            shipping_address=ShippingAddress.model_validate(order.shipping_address),
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            order_status=order.order_status,
            items_price=order.items_price,
            shipping_price=order.shipping_price,
            tax_price=order.tax_price,
            total_price=order.total_price,
            tracking_number=order.tracking_number,
            delivered_at=order.delivered_at,
            notes=order.notes,
            version=order.version,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class Pagination(BaseModel):
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_orders: int = Field(alias="totalOrders")
    limit: int

    class Config:
        populate_by_name = True


class StatusBucket(BaseModel):
    status: OrderStatus
    count: int
    total_amount: float = Field(alias="totalAmount")

    class Config:
        populate_by_name = True


class OrderStats(BaseModel):
    orders_by_status: List[StatusBucket] = Field(alias="ordersByStatus")
    total_orders: int = Field(alias="totalOrders")
    total_revenue: float = Field(alias="totalRevenue")

    class Config:
        populate_by_name = True


class OrderEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: OrderResponse


class OrderListEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: List[OrderResponse]
    pagination: Pagination


class OrderStatsEnvelope(BaseModel):
    success: bool = True
    data: OrderStats
