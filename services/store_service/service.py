from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AuthorizationError, ConflictError, NotFoundError
from shared.identifiers import ensure_valid_id

from .models import Store, StoreCategory
from .repository import StoreRepository
from .schemas import StoreCreate, StoreUpdate

logger = structlog.get_logger(__name__)

STORE_UPDATABLE_FIELDS = (
    "name", "category", "description", "banner", "logo", "contact_info", "social_links"
)


class StoreService:

    @staticmethod
    async def create_store(db: AsyncSession, seller_id: str, data: StoreCreate) -> Store:
        if await StoreRepository.get_store_by_name(db, data.name):
            raise ConflictError("Store name already exists")

        payload = data.model_dump(mode="json", exclude_none=True)
        store = Store(
            name=data.name,
            category=data.category,
            description=data.description,
            banner=data.banner,
            logo=data.logo,
            seller_id=seller_id,
            contact_info=payload.get("contact_info"),
            social_links=payload.get("social_links"),
        )
        store = await StoreRepository.create_store(db, store)
        logger.info("store_created", store_id=store.id, seller_id=seller_id)
        return store

    @staticmethod
    async def list_stores(
        db: AsyncSession, category: Optional[StoreCategory], search: Optional[str]
    ) -> list[Store]:
        return await StoreRepository.list_stores(db, category, search)

    @staticmethod
    async def list_seller_stores(db: AsyncSession, seller_id: str) -> list[Store]:
        return await StoreRepository.list_seller_stores(db, seller_id)

    @staticmethod
    async def get_store(db: AsyncSession, store_id: str) -> Store:
        store_id = ensure_valid_id(store_id, "store")
        store = await StoreRepository.get_store_by_id(db, store_id)
        if not store:
            raise NotFoundError("Store not found")
        return store

    @staticmethod
    async def get_owned_store(db: AsyncSession, store_id: str, seller_id: str, action: str) -> Store:
        store = await StoreService.get_store(db, store_id)
        if store.seller_id != seller_id:
            raise AuthorizationError(f"Not authorized to {action} this store")
        return store

    @staticmethod
    async def update_store(db: AsyncSession, store_id: str, seller_id: str, data: StoreUpdate) -> Store:
        store = await StoreService.get_owned_store(db, store_id, seller_id, "update")

        payload = data.model_dump(mode="json", exclude_unset=True)
        updates = {}
        for field in STORE_UPDATABLE_FIELDS:
            if field in payload and payload[field] is not None:
                updates[field] = getattr(data, field) if field == "category" else payload[field]

        if "name" in updates and updates["name"] != store.name:
            if await StoreRepository.get_store_by_name(db, updates["name"]):
                raise ConflictError("Store name already exists")

        return await StoreRepository.update_store(db, store, updates)

    @staticmethod
    async def delete_store(db: AsyncSession, store_id: str, seller_id: str) -> None:
        store = await StoreService.get_owned_store(db, store_id, seller_id, "delete")
        await StoreRepository.delete_store(db, store)
        logger.info("store_deleted", store_id=store.id, seller_id=seller_id)
