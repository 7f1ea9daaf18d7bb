"""Pydantic request/response schemas for the Catalogue API.

These form the anti-corruption layer between HTTP payloads and domain
commands: unknown fields are rejected and responses never leak
aggregate internals.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from storefront.shared.schemas import ApiModel

# --- Category ---


class CreateCategoryRequest(ApiModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"examples": [{"name": "Energy Drinks", "description": "Caffeinated beverages"}]},
    )

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)


class UpdateCategoryRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = None
    image: str | None = Field(None, max_length=500)


class CategoryResponse(ApiModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image: str | None = None
    product_count: int = 0


class CategoryIdResponse(ApiModel):
    category_id: str


# --- Product ---


class CreateProductRequest(ApiModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "name": "Sparkling Water 12-pack",
                    "description": "Lightly carbonated spring water",
                    "price": 6.99,
                    "inventory": 120,
                    "categoryId": "a1b2c3",
                    "isFeatured": True,
                }
            ]
        },
    )

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: float = Field(..., ge=0)
    inventory: int = Field(0, ge=0)
    category_id: str
    is_active: bool = True
    is_featured: bool = False


class UpdateProductRequest(ApiModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)
    inventory: int | None = Field(None, ge=0)
    category_id: str | None = None
    is_active: bool | None = None
    is_featured: bool | None = None


class ProductImageResponse(ApiModel):
    id: str
    original_url: str
    thumbnail_url: str
    medium_url: str
    large_url: str
    webp_url: str
    file_name: str
    file_size: int | None = None
    mime_type: str | None = None
    width: int | None = None
    height: int | None = None
    storage_type: str
    storage_key: str | None = None
    alt_text: str | None = None
    display_order: int
    is_primary: bool


class ProductResponse(ApiModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    price: float
    inventory: int
    is_active: bool
    is_featured: bool
    category_id: str
    images: list[ProductImageResponse] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Pagination(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


class ProductListResponse(ApiModel):
    products: list[ProductResponse]
    pagination: Pagination


class ProductIdResponse(ApiModel):
    product_id: str


# --- Images ---


class ImageOrder(ApiModel):
    model_config = ConfigDict(extra="forbid")

    image_id: str
    display_order: int = Field(..., ge=0)


class ReorderImagesRequest(ApiModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "examples": [{"imageOrders": [{"imageId": "img-1", "displayOrder": 1}, {"imageId": "img-2", "displayOrder": 0}]}]
        },
    )

    image_orders: list[ImageOrder] = Field(..., min_length=1)


class ImageListResponse(ApiModel):
    success: bool = True
    message: str | None = None
    data: list[ProductImageResponse]


class StatusResponse(ApiModel):
    status: str = "ok"
