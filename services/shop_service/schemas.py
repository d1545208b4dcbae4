"""Pydantic schemas for shop service."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

# ============================================================================
# SHARED
# ============================================================================


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ============================================================================
# CATEGORY SCHEMAS
# ============================================================================


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=20)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = Field(None, max_length=100)
    color: Optional[str] = Field(None, max_length=20)


class CategoryResponse(CategoryBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


# ============================================================================
# PRODUCT SCHEMAS
# ============================================================================


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str
    rich_description: str = ""
    image: str = Field("", max_length=500)
    brand: str = Field("", max_length=255)
    price: Decimal = Field(Decimal("0"), ge=0)
    category_id: uuid.UUID
    count_in_stock: int = Field(..., ge=0, le=255)
    rating: Decimal = Field(Decimal("0"), ge=0)
    num_reviews: int = Field(0, ge=0)
    is_featured: bool = False


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    rich_description: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    brand: Optional[str] = Field(None, max_length=255)
    price: Optional[Decimal] = Field(None, ge=0)
    category_id: Optional[uuid.UUID] = None
    count_in_stock: Optional[int] = Field(None, ge=0, le=255)
    rating: Optional[Decimal] = Field(None, ge=0)
    num_reviews: Optional[int] = Field(None, ge=0)
    is_featured: Optional[bool] = None


class ProductResponse(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    # Nullable once the referenced category has been deleted
    category_id: Optional[uuid.UUID] = None
    category: Optional[CategoryResponse] = None
    date_created: datetime
    updated_at: datetime


class ProductCountResponse(BaseModel):
    product_count: int


# ============================================================================
# USER SCHEMAS
# ============================================================================


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., max_length=50)
    is_admin: bool = False
    street: str = Field("", max_length=255)
    apartment: str = Field("", max_length=255)
    zip: str = Field("", max_length=20)
    city: str = Field("", max_length=100)
    country: str = Field("", max_length=100)


class UserCreate(UserBase):
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    # Re-hashed only when present
    password: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = Field(None, max_length=50)
    is_admin: Optional[bool] = None
    street: Optional[str] = Field(None, max_length=255)
    apartment: Optional[str] = Field(None, max_length=255)
    zip: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)


class UserResponse(UserBase):
    """Public user view. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    user: str
    token: str


class UserCountResponse(BaseModel):
    user_count: int


# ============================================================================
# ORDER SCHEMAS
# ============================================================================


class OrderItemCreate(BaseModel):
    product_id: uuid.UUID
    quantity: int = Field(..., gt=0)


class OrderCreate(BaseModel):
    order_items: list[OrderItemCreate] = Field(..., min_length=1)
    shipping_address1: str = Field(..., min_length=1, max_length=255)
    shipping_address2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    zip: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=50)
    status: Optional[str] = Field(None, max_length=50)
    user_id: Optional[uuid.UUID] = None


class OrderStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1, max_length=50)


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    quantity: int
    product_id: Optional[uuid.UUID]
    product: Optional[ProductResponse] = None


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    order_items: list[OrderItemResponse] = Field(
        default_factory=list, validation_alias="items"
    )
    shipping_address1: str
    shipping_address2: Optional[str]
    city: str
    zip: str
    country: str
    phone: str
    status: str
    total_price: Decimal
    user_id: Optional[uuid.UUID]
    user: Optional[UserSummary] = None
    date_ordered: datetime


class TotalSalesResponse(BaseModel):
    total_sales: Decimal


class OrderCountResponse(BaseModel):
    order_count: int
