from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from services.store_service.models import StoreCategory

from .models import ProductCategory


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    price: float = Field(..., ge=0)
    sale_price: Optional[float] = Field(None, ge=0)
    category: ProductCategory
    images: List[str] = Field(default_factory=list)
    quantity: int = Field(1, ge=0)
    store_id: str
    sale_ending_date: Optional[datetime] = Field(None, alias="saleEndingDate")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True

    @model_validator(mode="after")
    def sale_below_price(self):
        if self.sale_price is not None and self.sale_price >= self.price:
            raise ValueError("Sale price must be less than regular price")
        return self


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=1000)
    price: Optional[float] = Field(None, ge=0)
    sale_price: Optional[float] = Field(None, ge=0)
    category: Optional[ProductCategory] = None
    images: Optional[List[str]] = None
    quantity: Optional[int] = Field(None, ge=0)
    sale_ending_date: Optional[datetime] = Field(None, alias="saleEndingDate")

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class StoreSummary(BaseModel):
    id: str
    name: str
    category: StoreCategory

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    sale_price: Optional[float] = None
    category: ProductCategory
    images: List[str] = []
    quantity: int
    store_id: str
    store: Optional[StoreSummary] = None
    sale_ending_date: Optional[datetime] = Field(None, alias="saleEndingDate")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    class Config:
        populate_by_name = True

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            sale_price=product.sale_price,
            category=product.category,
            images=product.images or [],
            quantity=product.quantity,
            store_id=product.store_id,
            store=StoreSummary.model_validate(product.store) if product.store else None,
            sale_ending_date=product.sale_ending_date,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductPagination(BaseModel):
    current_page: int
    total_pages: int
    total_products: int
    products_per_page: int


class ProductEnvelope(BaseModel):
    success: bool = True
    message: str
    product: ProductResponse


class ProductListEnvelope(BaseModel):
    success: bool = True
    message: str
    products: List[ProductResponse]
    pagination: ProductPagination


class MessageEnvelope(BaseModel):
    success: bool = True
    message: str
