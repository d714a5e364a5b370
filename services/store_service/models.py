import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, String
from sqlalchemy.orm import relationship

from shared.config.database import Base
from shared.identifiers import new_id


class StoreCategory(str, enum.Enum):
    HANDMADE_CLOTHING = "Handmade Clothing"
    TRADITIONAL_TEXTILES = "Traditional Textiles"
    CROCHET_KNITTING = "Crochet & Knitting"
    JEWELRY_ACCESSORIES = "Jewelry & Accessories"
    BAGS_PURSES = "Bags & Purses"
    HOME_DECOR = "Home Decor"
    KITCHEN_DINING = "Kitchen & Dining"
    LOCAL_CRAFTS = "Local Crafts"
    ORGANIC_HERBAL = "Organic & Herbal"
    BEAUTY_CARE = "Beauty & Care"
    FOOD_HOMEMADE = "Food & Homemade Items"
    PET_KIDS = "Pet & Kids Items"


def _utcnow():
    return datetime.now(timezone.utc)


class Store(Base):
    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    category = Column(
        Enum(StoreCategory, native_enum=False, length=40, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True,
    )
    description = Column(String(500), nullable=False)
    banner = Column(String, nullable=True)
    logo = Column(String, nullable=True)
    seller_id = Column(String(36), ForeignKey("sellers.id"), nullable=False, index=True)
    contact_info = Column(JSON, nullable=True)
    social_links = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    seller = relationship("Seller", lazy="selectin")
