from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.identity_service.dependencies import get_current_seller
from services.identity_service.models import Seller
from shared.config.database import get_db

from .models import StoreCategory
from .schemas import (
    MessageEnvelope,
    StoreCreate,
    StoreEnvelope,
    StoreListEnvelope,
    StoreResponse,
    StoreUpdate,
)
from .service import StoreService

router = APIRouter(prefix="/stores", tags=["Stores"])
public_router = APIRouter()


@public_router.get("/stores/health", include_in_schema=False)
async def health_check():
    return {"service": "store", "status": "running"}


@router.post("", response_model=StoreEnvelope, status_code=status.HTTP_201_CREATED)
async def create_store(
    payload: StoreCreate,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db),
):
    store = await StoreService.create_store(db, seller.id, payload)
    return StoreEnvelope(message="Store created successfully", store=StoreResponse.from_store(store))


@router.get("", response_model=StoreListEnvelope)
async def list_stores(
    category: Optional[StoreCategory] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=100),
    db: AsyncSession = Depends(get_db),
):
    stores = await StoreService.list_stores(db, category, search)
    return StoreListEnvelope(
        message="Stores retrieved successfully",
        count=len(stores),
        stores=[StoreResponse.from_store(s) for s in stores],
    )


@router.get("/seller/my-stores", response_model=StoreListEnvelope)
async def list_my_stores(
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db),
):
    stores = await StoreService.list_seller_stores(db, seller.id)
    return StoreListEnvelope(
        message="Seller stores retrieved successfully",
        count=len(stores),
        stores=[StoreResponse.from_store(s) for s in stores],
    )


@router.get("/{store_id}", response_model=StoreEnvelope)
async def get_store(store_id: str, db: AsyncSession = Depends(get_db)):
    store = await StoreService.get_store(db, store_id)
    return StoreEnvelope(message="Store retrieved successfully", store=StoreResponse.from_store(store))


@router.put("/{store_id}", response_model=StoreEnvelope)
async def update_store(
    store_id: str,
    payload: StoreUpdate,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db),
):
    store = await StoreService.update_store(db, store_id, seller.id, payload)
    return StoreEnvelope(message="Store updated successfully", store=StoreResponse.from_store(store))


@router.delete("/{store_id}", response_model=MessageEnvelope)
async def delete_store(
    store_id: str,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db),
):
    await StoreService.delete_store(db, store_id, seller.id)
    return MessageEnvelope(message="Store deleted successfully")
