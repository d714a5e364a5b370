import math
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.store_service.service import StoreService
from shared.errors import AuthorizationError, NotFoundError, ValidationError
from shared.identifiers import ensure_valid_id

from .models import Product, ProductCategory
from .repository import ProductRepository
from .schemas import ProductCreate, ProductPagination, ProductUpdate

logger = structlog.get_logger(__name__)

PRODUCT_UPDATABLE_FIELDS = (
    "name", "description", "price", "sale_price", "category", "images", "quantity", "sale_ending_date"
)


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, seller_id: str, data: ProductCreate) -> Product:
        store = await StoreService.get_store(db, data.store_id)
        if store.seller_id != seller_id:
            raise AuthorizationError("Not authorized to add products to this store")

        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            sale_price=data.sale_price,
            category=data.category,
            images=data.images,
            quantity=data.quantity,
            store_id=store.id,
            sale_ending_date=data.sale_ending_date,
        )
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id, store_id=store.id)
        return product

    @staticmethod
    async def get_product(db: AsyncSession, product_id: str) -> Product:
        product_id = ensure_valid_id(product_id, "product")
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    @staticmethod
    async def list_products(
        db: AsyncSession,
        page: int,
        limit: int,
        category: Optional[ProductCategory] = None,
        search: Optional[str] = None,
        store_id: Optional[str] = None,
        seller_id: Optional[str] = None,
    ) -> tuple[list[Product], ProductPagination]:
        if store_id:
            store_id = ensure_valid_id(store_id, "store")
        products, total = await ProductRepository.search_products(
            db, page, limit, category=category, search=search, store_id=store_id, seller_id=seller_id
        )
        pagination = ProductPagination(
            current_page=page,
            total_pages=math.ceil(total / limit),
            total_products=total,
            products_per_page=limit,
        )
        return products, pagination

    @staticmethod
    async def get_owned_product(db: AsyncSession, product_id: str, seller_id: str, action: str) -> Product:
        product = await ProductService.get_product(db, product_id)
        if product.store is None or product.store.seller_id != seller_id:
            raise AuthorizationError(f"Not authorized to {action} this product")
        return product

    @staticmethod
    async def update_product(db: AsyncSession, product_id: str, seller_id: str, data: ProductUpdate) -> Product:
        product = await ProductService.get_owned_product(db, product_id, seller_id, "update")

        provided = data.model_dump(exclude_unset=True)
        updates = {
            field: value
            for field, value in provided.items()
            if field in PRODUCT_UPDATABLE_FIELDS and (value is not None or field == "sale_price")
        }

        price = updates.get("price", product.price)
        sale_price = updates.get("sale_price", product.sale_price)
        if sale_price is not None and sale_price >= price:
            raise ValidationError("Sale price must be less than regular price")

        return await ProductRepository.update_product(db, product, updates)

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: str, seller_id: str) -> None:
        product = await ProductService.get_owned_product(db, product_id, seller_id, "delete")
        await ProductRepository.delete_product(db, product)
        logger.info("product_deleted", product_id=product.id)
