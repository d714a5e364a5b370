from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import get_current_customer_id, limiter
from shared.security.rate_limiter import LOGIN_RATE_LIMIT

from .dependencies import get_current_seller
from .models import Seller
from .schemas import (
    SellerAuthEnvelope,
    SellerCreate,
    SellerEnvelope,
    SellerLogin,
    SellerUpdate,
    UserAuthEnvelope,
    UserCreate,
    UserEnvelope,
    UserLogin,
)
from .service import SellerService, UserService

seller_router = APIRouter(prefix="/seller", tags=["Sellers"])
auth_router = APIRouter(prefix="/auth", tags=["Customers"])
public_router = APIRouter()


@public_router.get("/identity/health", include_in_schema=False)
async def health_check():
    return {"service": "identity", "status": "running"}


@seller_router.post("/signup", response_model=SellerAuthEnvelope, status_code=status.HTTP_201_CREATED)
async def seller_signup(payload: SellerCreate, db: AsyncSession = Depends(get_db)):
    seller, token = await SellerService.signup(db, payload)
    return {"message": "Seller registered successfully", "token": token, "seller": seller}


@seller_router.post("/login", response_model=SellerAuthEnvelope)
@limiter.limit(LOGIN_RATE_LIMIT)
async def seller_login(request: Request, payload: SellerLogin, db: AsyncSession = Depends(get_db)):
    seller, token = await SellerService.login(db, payload)
    return {"message": "Seller login successful", "token": token, "seller": seller}


@seller_router.get("/profile", response_model=SellerEnvelope)
async def get_seller_profile(seller: Seller = Depends(get_current_seller)):
    return {"seller": seller}


@seller_router.put("/profile", response_model=SellerEnvelope)
async def update_seller_profile(
    payload: SellerUpdate,
    seller: Seller = Depends(get_current_seller),
    db: AsyncSession = Depends(get_db),
):
    updated = await SellerService.update_profile(db, seller.id, payload)
    return {"message": "Profile updated successfully", "seller": updated}


@auth_router.post("/signup", response_model=UserAuthEnvelope, status_code=status.HTTP_201_CREATED)
async def user_signup(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    user, token = await UserService.signup(db, payload)
    return {"message": "User registered successfully", "token": token, "user": user}


@auth_router.post("/login", response_model=UserAuthEnvelope)
@limiter.limit(LOGIN_RATE_LIMIT)
async def user_login(request: Request, payload: UserLogin, db: AsyncSession = Depends(get_db)):
    user, token = await UserService.login(db, payload)
    return {"message": "Login successful", "token": token, "user": user}


@auth_router.get("/profile", response_model=UserEnvelope)
async def get_user_profile(
    user_id: str = Depends(get_current_customer_id),
    db: AsyncSession = Depends(get_db),
):
    return {"user": await UserService.get_user(db, user_id)}
