"""Pydantic request/response schemas for the ChairUp API.

These are separate from Protean commands: the API layer is the external
contract, commands are internal domain concepts. Wire names are camelCase as
the mobile client sends them; snake_case is accepted on input too.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class AddProductRequest(WireModel):
    name: str = Field(min_length=1, max_length=255)
    price: float = Field(ge=0)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None
    image: str | None = Field(default=None, max_length=500)
    stock_quantity: int = Field(default=0, ge=0)


class UpdateProductRequest(WireModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: float | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, max_length=100)
    description: str | None = None
    image: str | None = Field(default=None, max_length=500)


class AdjustStockRequest(WireModel):
    quantity_change: int
    reason: str = Field(min_length=1, max_length=255)


class ProductResponse(WireModel):
    id: str
    name: str
    price: float
    category: str | None = None
    description: str | None = None
    image: str | None = None
    stock_quantity: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductSummary(WireModel):
    id: str
    name: str | None = None
    image: str | None = None
    price: float | None = None
    stock_quantity: int | None = None
    category: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class SetCartItemRequest(WireModel):
    product_id: str
    quantity: int = Field(ge=1)


class CartItemResponse(WireModel):
    product: ProductSummary
    quantity: int


class CartResponse(WireModel):
    id: str | None = None
    user: str
    items: list[CartItemResponse] = []
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineRequest(WireModel):
    product: str = Field(validation_alias=AliasChoices("product", "productId", "product_id"))
    quantity: int = Field(ge=1)


class ShippingAddressSchema(WireModel):
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class PlaceOrderRequest(WireModel):
    order_items: list[OrderLineRequest] = Field(min_length=1)
    shipping_address: ShippingAddressSchema
    phone_number: str = Field(min_length=1)
    payment_method: str = "creditCard"
    shipping_price: float | None = Field(default=None, ge=0)
    discount: float | None = Field(default=None, ge=0)
    promo_code: str | None = None


class ChangeStatusRequest(WireModel):
    status: str


class OrderItemResponse(WireModel):
    product: ProductSummary
    quantity: int
    price: float


class OrderOwner(WireModel):
    id: str
    name: str | None = None
    email: str | None = None


class OrderResponse(WireModel):
    id: str
    user: OrderOwner
    order_items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema
    phone_number: str
    payment_method: str
    items_price: float
    shipping_price: float
    discount: float
    total_price: float
    promo_code: str | None = None
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class SubmitReviewRequest(WireModel):
    rating: int = Field(ge=1, le=5)
    comment: str | None = None


class EditReviewRequest(WireModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = None


class ReviewAuthor(WireModel):
    id: str
    name: str | None = None


class ReviewResponse(WireModel):
    id: str
    product: ProductSummary
    user: ReviewAuthor
    rating: int
    comment: str | None = None
    verified: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductReviewsResponse(WireModel):
    reviews: list[ReviewResponse]
    average_rating: float
    count: int


class EligibilityResponse(WireModel):
    can_review: bool


# ---------------------------------------------------------------------------
# Promotions
# ---------------------------------------------------------------------------
class CreatePromotionRequest(WireModel):
    code: str = Field(min_length=1, max_length=50)
    discount_percent: int = Field(ge=1, le=100)
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None


class PromotionResponse(WireModel):
    id: str
    code: str
    title: str | None = None
    description: str | None = None
    discount_percent: int
    is_active: bool


class MessageResponse(WireModel):
    message: str
