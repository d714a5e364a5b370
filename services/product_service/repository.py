from typing import Iterable, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.store_service.models import Store

from .models import Product, ProductCategory


class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: str) -> Optional[Product]:
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def get_products(db: AsyncSession, product_ids: Iterable[str]) -> list[Product]:
        ids = set(product_ids)
        if not ids:
            return []
        result = await db.execute(select(Product).where(Product.id.in_(ids)))
        return list(result.scalars().all())

    @staticmethod
    async def search_products(
        db: AsyncSession,
        page: int,
        limit: int,
        category: Optional[ProductCategory] = None,
        search: Optional[str] = None,
        store_id: Optional[str] = None,
        seller_id: Optional[str] = None,
    ) -> tuple[list[Product], int]:
        conditions = []
        if category:
            conditions.append(Product.category == category)
        if store_id:
            conditions.append(Product.store_id == store_id)
        if seller_id:
            seller_stores = select(Store.id).where(Store.seller_id == seller_id)
            conditions.append(Product.store_id.in_(seller_stores))
        if search:
            pattern = f"%{search}%"
            conditions.append(or_(Product.name.ilike(pattern), Product.description.ilike(pattern)))

        stmt = (
            select(Product)
            .where(*conditions)
            .order_by(Product.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await db.execute(stmt)
        total = await db.scalar(select(func.count()).select_from(Product).where(*conditions))
        return list(result.scalars().all()), total or 0

    @staticmethod
    async def update_product(db: AsyncSession, product: Product, updates: dict):
        for field, value in updates.items():
            setattr(product, field, value)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product: Product) -> None:
        await db.delete(product)
        await db.commit()
