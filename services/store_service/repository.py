from typing import Iterable, Optional

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.models import Product
from shared.errors import ConflictError

from .models import Store, StoreCategory


class StoreRepository:

    @staticmethod
    async def create_store(db: AsyncSession, store: Store) -> Store:
        db.add(store)
        await StoreRepository._commit_unique_name(db)
        await db.refresh(store)
        return store

    @staticmethod
    async def get_store_by_id(db: AsyncSession, store_id: str) -> Optional[Store]:
        result = await db.execute(select(Store).where(Store.id == store_id))
        return result.scalars().first()

    @staticmethod
    async def get_store_by_name(db: AsyncSession, name: str) -> Optional[Store]:
        result = await db.execute(select(Store).where(Store.name == name))
        return result.scalars().first()

    @staticmethod
    async def get_stores(db: AsyncSession, store_ids: Iterable[str]) -> list[Store]:
        ids = set(store_ids)
        if not ids:
            return []
        result = await db.execute(select(Store).where(Store.id.in_(ids)))
        return list(result.scalars().all())

    @staticmethod
    async def list_stores(
        db: AsyncSession,
        category: Optional[StoreCategory] = None,
        search: Optional[str] = None,
    ) -> list[Store]:
        stmt = select(Store)
        if category:
            stmt = stmt.where(Store.category == category)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Store.name.ilike(pattern), Store.description.ilike(pattern)))
        result = await db.execute(stmt.order_by(Store.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def list_seller_stores(db: AsyncSession, seller_id: str) -> list[Store]:
        result = await db.execute(
            select(Store).where(Store.seller_id == seller_id).order_by(Store.created_at.desc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def update_store(db: AsyncSession, store: Store, updates: dict) -> Store:
        for field, value in updates.items():
            setattr(store, field, value)
        await StoreRepository._commit_unique_name(db)
        await db.refresh(store)
        return store

    @staticmethod
    async def _commit_unique_name(db: AsyncSession) -> None:
        # Unique index on name backs up the lookup done before the write
        try:
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            raise ConflictError("Store name already exists") from exc

    @staticmethod
    async def delete_store(db: AsyncSession, store: Store) -> None:
        # Catalog entries go with their store; order snapshots keep their copies
        await db.execute(delete(Product).where(Product.store_id == store.id))
        await db.delete(store)
        await db.commit()
