from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Seller, User


class SellerRepository:

    @staticmethod
    async def create(db: AsyncSession, seller: Seller) -> Seller:
        db.add(seller)
        await db.commit()
        await db.refresh(seller)
        return seller

    @staticmethod
    async def get_by_id(db: AsyncSession, seller_id: str) -> Optional[Seller]:
        result = await db.execute(select(Seller).where(Seller.id == seller_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[Seller]:
        result = await db.execute(select(Seller).where(Seller.email == email))
        return result.scalars().first()

    @staticmethod
    async def update(db: AsyncSession, seller: Seller, updates: dict) -> Seller:
        for field, value in updates.items():
            setattr(seller, field, value)
        await db.commit()
        await db.refresh(seller)
        return seller


class UserRepository:

    @staticmethod
    async def create(db: AsyncSession, user: User) -> User:
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    @staticmethod
    async def get_many(db: AsyncSession, user_ids: Iterable[str]) -> list[User]:
        ids = set(user_ids)
        if not ids:
            return []
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())
