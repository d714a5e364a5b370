import structlog
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from shared.errors import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from shared.security.jwt_handler import create_customer_token, create_seller_token

from .models import Seller, User
from .repository import SellerRepository, UserRepository
from .schemas import SellerCreate, SellerLogin, SellerUpdate, UserCreate, UserLogin

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

SELLER_UPDATABLE_FIELDS = ("name", "phone")


def _hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def _verify_password(plain: str, hashed: str) -> bool:
    return _pwd_context.verify(plain, hashed)


class SellerService:

    @staticmethod
    async def signup(db: AsyncSession, data: SellerCreate) -> tuple[Seller, str]:
        if await SellerRepository.get_by_email(db, data.email):
            raise ConflictError("Seller already exists with this email")

        seller = Seller(
            name=data.name,
            email=data.email,
            hashed_password=_hash_password(data.password),
            phone=data.phone,
        )
        seller = await SellerRepository.create(db, seller)
        logger.info("seller_registered", seller_id=seller.id)
        return seller, create_seller_token(seller.id)

    @staticmethod
    async def login(db: AsyncSession, data: SellerLogin) -> tuple[Seller, str]:
        seller = await SellerRepository.get_by_email(db, data.email)
        if not seller or not _verify_password(data.password, seller.hashed_password):
            raise AuthenticationError("Invalid credentials")
        return seller, create_seller_token(seller.id)

    @staticmethod
    async def get_seller(db: AsyncSession, seller_id: str) -> Seller:
        seller = await SellerRepository.get_by_id(db, seller_id)
        if not seller:
            raise NotFoundError("Seller not found")
        return seller

    @staticmethod
    async def update_profile(db: AsyncSession, seller_id: str, data: SellerUpdate) -> Seller:
        seller = await SellerService.get_seller(db, seller_id)
        updates = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if field in SELLER_UPDATABLE_FIELDS and value is not None
        }
        return await SellerRepository.update(db, seller, updates)


class UserService:

    @staticmethod
    async def signup(db: AsyncSession, data: UserCreate) -> tuple[User, str]:
        if await UserRepository.get_by_email(db, data.email):
            raise ConflictError("User already exists with this email")

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=_hash_password(data.password),
            phone=data.phone,
        )
        user = await UserRepository.create(db, user)
        logger.info("user_registered", user_id=user.id)
        return user, create_customer_token(user.id)

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin) -> tuple[User, str]:
        user = await UserRepository.get_by_email(db, data.email)
        if not user or not _verify_password(data.password, user.hashed_password):
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise AuthorizationError("Account is disabled")
        return user, create_customer_token(user.id)

    @staticmethod
    async def get_user(db: AsyncSession, user_id: str) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
