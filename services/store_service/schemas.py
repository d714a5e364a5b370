from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from .models import StoreCategory

PHONE_PATTERN = r"^\+?[\d\s\-\(\)]+$"


class ContactInfo(BaseModel):
    phone: Optional[str] = Field(None, pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None


class SocialLinks(BaseModel):
    website: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    category: StoreCategory
    description: str = Field(..., min_length=10, max_length=500)
    banner: Optional[str] = None
    logo: Optional[str] = None
    contact_info: Optional[ContactInfo] = Field(None, alias="contactInfo")
    social_links: Optional[SocialLinks] = Field(None, alias="socialLinks")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class StoreUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    category: Optional[StoreCategory] = None
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    banner: Optional[str] = None
    logo: Optional[str] = None
    contact_info: Optional[ContactInfo] = Field(None, alias="contactInfo")
    social_links: Optional[SocialLinks] = Field(None, alias="socialLinks")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class SellerSummary(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True


class StoreResponse(BaseModel):
    id: str
    name: str
    category: StoreCategory
    description: str
    banner: Optional[str] = None
    logo: Optional[str] = None
    seller_id: str
    seller: Optional[SellerSummary] = None
    contact_info: Optional[ContactInfo] = Field(None, alias="contactInfo")
    social_links: Optional[SocialLinks] = Field(None, alias="socialLinks")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_store(cls, store) -> "StoreResponse":
        return cls(
            id=store.id,
            name=store.name,
            category=store.category,
            description=store.description,
            banner=store.banner,
            logo=store.logo,
            seller_id=store.seller_id,
            seller=SellerSummary.model_validate(store.seller) if store.seller else None,
            contact_info=store.contact_info,
            social_links=store.social_links,
            created_at=store.created_at,
            updated_at=store.updated_at,
        )


class StoreEnvelope(BaseModel):
    success: bool = True
    message: str
    store: StoreResponse


class StoreListEnvelope(BaseModel):
    success: bool = True
    message: str
    count: int
    stores: List[StoreResponse]


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
