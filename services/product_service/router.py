from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.identity_service.dependencies import get_current_seller
from services.identity_service.models import Seller
from shared.config.database import get_db

from .models import ProductCategory
from .schemas import (
    MessageEnvelope,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdate,
)
from .service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])
public_router = APIRouter()


@public_router.get("/products/health", include_in_schema=False)
async def health_check():
    return {"service": "product", "status": "running"}


@router.post("", response_model=ProductEnvelope, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db)
):
    created = await ProductService.create_product(db, seller.id, product)
    return ProductEnvelope(message="Product created successfully", product=ProductResponse.from_product(created))


@router.get("", response_model=ProductListEnvelope)
async def list_products(
    category: Optional[ProductCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=100),
    store_id: Optional[str] = Query(default=None),
    page: int = Query(default=1, ge=1, le=1000),
    limit: int = Query(default=30, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    products, pagination = await ProductService.list_products(
        db, page, limit, category=category, search=search, store_id=store_id
    )
    return ProductListEnvelope(
        message="Products retrieved successfully",
        products=[ProductResponse.from_product(p) for p in products],
        pagination=pagination,
    )


@router.get("/seller/my-products", response_model=ProductListEnvelope)
async def list_my_products(
    category: Optional[ProductCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1, le=1000),
    limit: int = Query(default=10, ge=1, le=100),
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db)
):
    products, pagination = await ProductService.list_products(
        db, page, limit, category=category, search=search, seller_id=seller.id
    )
    return ProductListEnvelope(
        message="Seller products retrieved successfully",
        products=[ProductResponse.from_product(p) for p in products],
        pagination=pagination,
    )


@router.get("/store/{store_id}", response_model=ProductListEnvelope)
async def list_store_products(
    store_id: str,
    category: Optional[ProductCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=100),
    page: int = Query(default=1, ge=1, le=1000),
    limit: int = Query(default=10, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    products, pagination = await ProductService.list_products(
        db, page, limit, category=category, search=search, store_id=store_id
    )
    return ProductListEnvelope(
        message="Store products retrieved successfully",
        products=[ProductResponse.from_product(p) for p in products],
        pagination=pagination,
    )


@router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(product_id: str, db: AsyncSession = Depends(get_db)):
    product = await ProductService.get_product(db, product_id)
    return ProductEnvelope(message="Product retrieved successfully", product=ProductResponse.from_product(product))


@router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db)
):
    product = await ProductService.update_product(db, product_id, seller.id, payload)
    return ProductEnvelope(message="Product updated successfully", product=ProductResponse.from_product(product))


@router.delete("/{product_id}", response_model=MessageEnvelope)
async def delete_product(
    product_id: str,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db)
):
    await ProductService.delete_product(db, product_id, seller.id)
    return MessageEnvelope(message="Product deleted successfully")
