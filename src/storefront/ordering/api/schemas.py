"""Pydantic request/response schemas for the cart and order endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from storefront.shared.schemas import ApiModel

# --- Cart ---


class AddCartItemRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    quantity: int = Field(..., ge=1)


class CartProductResponse(ApiModel):
    id: str
    name: str
    slug: str
    price: float
    inventory: int
    is_active: bool
    image_url: str | None = None


class CartItemResponse(ApiModel):
    id: str
    product_id: str
    quantity: int
    product: CartProductResponse | None = None


class CartResponse(ApiModel):
    id: str
    user_id: str
    items: list[CartItemResponse] = []
    subtotal: float = 0.0


# --- Order ---


class ShippingAddressSchema(ApiModel):
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    address1: str = Field(..., min_length=1, max_length=255)
    address2: str | None = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=30)


class PlaceOrderRequest(ApiModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "shippingAddress": {
                        "firstName": "Jane",
                        "lastName": "Doe",
                        "address1": "1 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zipCode": "62701",
                        "country": "US",
                    },
                    "notes": "Leave at the door",
                }
            ]
        },
    )

    # Optional here so that a missing address reaches the domain check
    shipping_address: ShippingAddressSchema | None = None
    notes: str | None = None


class UpdateOrderStatusRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    status: str


class OrderItemResponse(ApiModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    price: float


class OrderResponse(ApiModel):
    id: str
    order_number: str
    user_id: str
    status: str
    items: list[OrderItemResponse] = []
    shipping_address: ShippingAddressSchema | None = None
    subtotal: float
    tax: float
    shipping_cost: float
    total: float
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderListResponse(ApiModel):
    orders: list[OrderResponse]
    pagination: Pagination
