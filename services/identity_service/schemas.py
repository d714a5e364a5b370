import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

PHONE_PATTERN = r"^\+?[\d\s\-\(\)]+$"
_PASSWORD_STRENGTH = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class SellerCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: str = Field(..., pattern=PHONE_PATTERN)

    class Config:
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _PASSWORD_STRENGTH.match(value):
            raise ValueError(
                "Password must contain at least one uppercase letter, one lowercase letter, and one number"
            )
        return value


class SellerLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class SellerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)

    class Config:
        str_strip_whitespace = True


class SellerResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SellerAuthEnvelope(BaseModel):
    success: bool = True
    message: str
    token: str
    seller: SellerResponse


class SellerEnvelope(BaseModel):
    success: bool = True
    message: Optional[str] = None
    seller: SellerResponse


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)

    class Config:
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    is_active: bool

    class Config:
        from_attributes = True


class UserAuthEnvelope(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserResponse


class UserEnvelope(BaseModel):
    success: bool = True
    user: UserResponse
