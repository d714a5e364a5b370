from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.errors import AuthenticationError
from shared.security.dependencies import get_current_seller_id

from .models import Seller
from .repository import SellerRepository


async def get_current_seller(
    seller_id: str = Depends(get_current_seller_id),
    db: AsyncSession = Depends(get_db),
) -> Seller:
    """Resolve the bearer token to a seller that still exists."""
    seller = await SellerRepository.get_by_id(db, seller_id)
    if not seller:
        raise AuthenticationError("Token is no longer valid")
    return seller
