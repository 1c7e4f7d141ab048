# storefront/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

OrderStatus = Literal["created", "processing", "fulfilled", "cancelled"]


class CamelModel(BaseModel):
    """Wire format is camelCase, python side stays snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# envelopes
# =====================================================
class Envelope(CamelModel, Generic[T]):
    success: bool = True
    data: T


class PageEnvelope(CamelModel, Generic[T]):
    success: bool = True
    data: List[T]
    count: int
    current_page: int
    total_pages: int


class DeletedOut(CamelModel):
    id: str
    deleted: bool = True


# =====================================================
# cart
# =====================================================
class ItemIn(CamelModel):
    """Single product add."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, description="Must be > 0")


class BulkAddIn(CamelModel):
    product_ids: List[str]
    quantity: int = Field(..., gt=0)
    origin_tag: Optional[str] = None


class CollectionAddIn(CamelModel):
    collection_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0)


class ProductSummary(CamelModel):
    id: str
    name: str
    price: Decimal
    images: List[str] = []
    slug: str


class CartItemOut(CamelModel):
    id: str
    product_id: str
    quantity: int
    collection_id: Optional[str] = None
    product: ProductSummary


class CartOut(CamelModel):
    cart_id: Optional[str] = None
    items: List[CartItemOut] = []
    total: Decimal = Decimal("0.00")


# =====================================================
# wishlist
# =====================================================
class WishlistItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)


class WishlistItemOut(CamelModel):
    id: str
    product_id: str
    created_at: datetime
    product: ProductSummary


class WishlistOut(CamelModel):
    items: List[WishlistItemOut] = []


# =====================================================
# orders
# =====================================================
class ShippingAddress(CamelModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: str = Field(..., min_length=1)


class OrderItemIn(CamelModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)


class OrderCreate(CamelModel):
    """No `items` means: take them from the caller's cart."""

    shipping_address: ShippingAddress
    items: Optional[List[OrderItemIn]] = None


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class OrderItemOut(CamelModel):
    id: str
    product_id: str
    quantity: int
    price: Decimal


class OrderOut(CamelModel):
    id: str
    user_id: str
    shipping_address: Dict[str, Any]
    total_amount: Decimal
    status: str
    created_at: datetime
    items: List[OrderItemOut] = []


class OrderSummaryOut(CamelModel):
    id: str
    user_id: str
    shipping_address: Dict[str, Any]
    total_amount: Decimal
    status: str
    created_at: datetime


# =====================================================
# catalog
# =====================================================
class CategoryCreate(CamelModel):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None


class CategoryUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class CategoryRef(CamelModel):
    name: str
    slug: str


class CategoryOut(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime


class ProductCreate(CamelModel):
    name: str
    slug: str
    price: Decimal = Field(..., ge=0)
    description: Optional[str] = None
    original_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    category_id: Optional[str] = None
    is_active: Optional[bool] = None
    images: Optional[List[str]] = None
    is_trending: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    rating: Optional[Decimal] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    seller_name: Optional[str] = None
    seller_location: Optional[str] = None
    units_sold: Optional[int] = Field(None, ge=0)


class ProductUpdate(CamelModel):
    """
    Fields left out of the payload are not touched, explicit null clears.
    `imagesToDelete` lists storage paths to remove after the update.
    """

    name: Optional[str] = None
    slug: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    original_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    category_id: Optional[str] = None
    is_active: Optional[bool] = None
    images: Optional[List[str]] = None
    is_trending: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    rating: Optional[Decimal] = Field(None, ge=0, le=5)
    review_count: Optional[int] = Field(None, ge=0)
    seller_name: Optional[str] = None
    seller_location: Optional[str] = None
    units_sold: Optional[int] = Field(None, ge=0)
    images_to_delete: Optional[List[str]] = None


class ProductOut(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    price: Decimal
    original_price: Optional[Decimal] = None
    stock_quantity: int
    category_id: Optional[str] = None
    category: Optional[CategoryRef] = None
    is_active: bool
    images: List[str] = []
    is_trending: bool
    is_featured: bool
    is_new_arrival: bool
    rating: Optional[Decimal] = None
    review_count: int
    seller_name: Optional[str] = None
    seller_location: Optional[str] = None
    units_sold: int
    created_at: datetime
    updated_at: datetime


class CollectionOut(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    cover_image_url: Optional[str] = None
    status: str
    created_at: datetime


# =====================================================
# listing parameters
# =====================================================
class ListParams(BaseModel):
    page: int = Field(1, ge=1)
    limit: int = Field(..., ge=1, le=100)
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
