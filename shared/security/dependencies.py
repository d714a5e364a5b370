from typing import Optional

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer
from .jwt_handler import verify_access_token, SELLER_TOKEN, CUSTOMER_TOKEN

# Defines the expected header format (Bearer <token>)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/seller/login", auto_error=False)


def _credentials_exception(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _subject_for(request: Request, token: Optional[str], token_type: str) -> str:
    if not token:
        raise _credentials_exception("Not authorized, no token provided")

    payload = verify_access_token(token)
    if payload is None or payload.get("type") != token_type:
        raise _credentials_exception("Not authorized, token failed")

    subject: str = payload.get("sub")
    if subject is None:
        raise _credentials_exception("Not authorized, token failed")

    # Stored in request state for downstream use (like rate limiting)
    request.state.user_id = subject
    return subject


async def get_current_seller_id(request: Request, token: str = Depends(oauth2_scheme)) -> str:
    """Dependency to validate a seller JWT and return the seller ID (sub)."""
    return _subject_for(request, token, SELLER_TOKEN)


async def get_current_customer_id(request: Request, token: str = Depends(oauth2_scheme)) -> str:
    """Dependency to validate a customer JWT and return the user ID (sub)."""
    return _subject_for(request, token, CUSTOMER_TOKEN)


async def get_optional_seller_id(token: str = Depends(oauth2_scheme)) -> Optional[str]:
    """Seller ID when a valid seller token is presented, None for anyone else."""
    if not token:
        return None
    payload = verify_access_token(token)
    if payload is None or payload.get("type") != SELLER_TOKEN:
        return None
    return payload.get("sub")
