from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String

from shared.config.database import Base
from shared.identifiers import new_id


def _utcnow():
    return datetime.now(timezone.utc)


class Seller(Base):
    __tablename__ = "sellers"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


class User(Base):
    """Customer account. Orders reference it through `user_id`."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
