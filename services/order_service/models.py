from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shared.config.database import Base
from shared.identifiers import new_id

from .constants import OrderStatus, PaymentMethod, PaymentStatus


def _utcnow():
    return datetime.now(timezone.utc)


def _enum_column(enum_cls, length: int):
    return Enum(enum_cls, native_enum=False, length=length, values_callable=lambda e: [m.value for m in e])


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=new_id)
    # No foreign keys to users/products/stores: an order is a snapshot that
    # outlives the catalog rows it was priced from. Null user_id = guest.
    user_id = Column(String(36), nullable=True, index=True)
    shipping_address = Column(JSON, nullable=False)
    payment_method = Column(_enum_column(PaymentMethod, 20), nullable=False, default=PaymentMethod.CASH_ON_DELIVERY)
    payment_status = Column(_enum_column(PaymentStatus, 20), nullable=False, default=PaymentStatus.PENDING, index=True)
    order_status = Column(_enum_column(OrderStatus, 20), nullable=False, default=OrderStatus.PENDING, index=True)
    items_price = Column(Float, nullable=False)
    shipping_price = Column(Float, nullable=False)
    tax_price = Column(Float, nullable=False, default=0)
    total_price = Column(Float, nullable=False)
    tracking_number = Column(String(50), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(String(500), nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        order_by="OrderItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    # UPDATE ... WHERE version = <read version>; a lost race raises StaleDataError
    __mapper_args__ = {"version_id_col": version}


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    product_id = Column(String(36), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    store_id = Column(String(36), nullable=False, index=True)

    order = relationship("Order", back_populates="items")
