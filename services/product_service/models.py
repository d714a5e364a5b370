import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Enum, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from shared.config.database import Base
from shared.identifiers import new_id


class ProductCategory(str, enum.Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    HOME_GARDEN = "Home & Garden"
    SPORTS = "Sports"
    BOOKS = "Books"
    TOYS = "Toys"
    BEAUTY = "Beauty"
    AUTOMOTIVE = "Automotive"
    FOOD = "Food"
    OTHER = "Other"


def _utcnow():
    return datetime.now(timezone.utc)


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    price = Column(Float, nullable=False)
    sale_price = Column(Float, nullable=True)
    category = Column(
        Enum(ProductCategory, native_enum=False, length=30, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    images = Column(JSON, nullable=False, default=list)
    quantity = Column(Integer, nullable=False, default=1)
    store_id = Column(String(36), ForeignKey("stores.id"), nullable=False, index=True)
    sale_ending_date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    # Owning store travels with every product read; ownership checks need it
    store = relationship("Store", lazy="selectin")
