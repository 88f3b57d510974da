"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept apart from the internal Protean commands.
Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(CamelModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Auth & Users
# ---------------------------------------------------------------------------
class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)
    phone: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Ada Lens",
                    "email": "ada@example.com",
                    "password": "shutter42",
                    "phone": "+94 77 123 4567",
                }
            ]
        },
    )


class LoginRequest(CamelModel):
    email: str
    password: str


class UpdateProfileRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = None
    address: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    is_admin: bool = False
    phone: str | None = None
    address: str | None = None
    favorites: list[str] = []
    registered_at: datetime | None = None


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    long_description: str | None = None
    price: float = Field(ge=0)
    brand: str = Field(min_length=1, max_length=100)
    category: str = Field(min_length=1, max_length=100)
    stock: int = Field(ge=0, default=0)
    images: list[str] = []
    compatibility: list[str] = []

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "name": "Mirrorless Body X100",
                    "description": "24MP full-frame mirrorless body",
                    "price": 1299.0,
                    "brand": "Optika",
                    "category": "Camera",
                    "stock": 5,
                    "images": ["https://cdn.example.com/x100.jpg"],
                }
            ]
        },
    )


class UpdateProductRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    long_description: str | None = None
    price: float | None = Field(default=None, ge=0)
    brand: str | None = None
    category: str | None = None
    stock: int | None = Field(default=None, ge=0)
    images: list[str] | None = None
    compatibility: list[str] | None = None


class ToggleStockRequest(CamelModel):
    restock_quantity: int = Field(default=1, ge=1)


class ProductSummaryResponse(CamelModel):
    id: str
    name: str
    description: str
    price: float
    brand: str
    category: str
    images: list[str] = []
    stock: int
    in_stock: bool


class CompatibleProductResponse(CamelModel):
    id: str
    name: str
    brand: str


class ProductDetailResponse(ProductSummaryResponse):
    long_description: str | None = None
    compatibility: list[CompatibleProductResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListResponse(CamelModel):
    products: list[ProductSummaryResponse]
    total: int
    page: int
    limit: int


class CompatibilityResponse(CamelModel):
    compatible: bool


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartItemRequest(CamelModel):
    product_id: str
    quantity: StrictInt


class CartItemResponse(CamelModel):
    product_id: str
    product: ProductSummaryResponse | None = None
    quantity: int


class CartResponse(CamelModel):
    id: str | None = None
    user_id: str | None = None
    items: list[CartItemResponse] = []
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CamelModel):
    shipping_address: str = Field(min_length=1)
    payment_method: str = Field(min_length=1, max_length=50)
    phone: str = Field(min_length=1, max_length=20)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "shippingAddress": "12 Galle Road, Colombo 03",
                    "paymentMethod": "Bank Transfer",
                    "phone": "+94 77 123 4567",
                }
            ]
        },
    )


class UpdateOrderStatusRequest(CamelModel):
    status: str


class OrderUserResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: str | None = None


class OrderItemResponse(CamelModel):
    product_id: str
    product: ProductSummaryResponse | None = None
    quantity: int
    price: float


class OrderResponse(CamelModel):
    id: str
    order_id: str
    user: OrderUserResponse | None = None
    items: list[OrderItemResponse]
    total_amount: float
    shipping_address: str
    payment_method: str
    phone: str
    status: str
    created_at: datetime | None = None


class PlaceOrderResponse(CamelModel):
    order_id: str
    order: OrderResponse


class OrderStatusResponse(CamelModel):
    message: str
    order: OrderResponse
