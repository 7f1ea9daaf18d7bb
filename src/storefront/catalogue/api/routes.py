"""FastAPI endpoints for categories, products and product images."""

import json
import math

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    CategoryIdResponse,
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ImageListResponse,
    Pagination,
    ProductIdResponse,
    ProductImageResponse,
    ProductListResponse,
    ProductResponse,
    ReorderImagesRequest,
    StatusResponse,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.media.pipeline import remove_product_image, upload_product_images
from storefront.catalogue.media.renditions import IncomingImage
from storefront.catalogue.product.images import ReorderProductImages, SetPrimaryProductImage
from storefront.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.identity.api.dependencies import require_admin
from storefront.shared.schemas import sort_field

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _image_response(image) -> ProductImageResponse:
    return ProductImageResponse(
        id=str(image.id),
        original_url=image.original_url,
        thumbnail_url=image.thumbnail_url,
        medium_url=image.medium_url,
        large_url=image.large_url,
        webp_url=image.webp_url,
        file_name=image.file_name,
        file_size=image.file_size,
        mime_type=image.mime_type,
        width=image.width,
        height=image.height,
        storage_type=image.storage_type,
        storage_key=image.storage_key,
        alt_text=image.alt_text,
        display_order=image.display_order,
        is_primary=bool(image.is_primary),
    )


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        slug=product.slug,
        description=product.description,
        price=product.price,
        inventory=product.inventory,
        is_active=bool(product.is_active),
        is_featured=bool(product.is_featured),
        category_id=str(product.category_id),
        images=[_image_response(i) for i in product.sorted_images],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=str(category.id),
        name=category.name,
        slug=category.slug,
        description=category.description,
        image=category.image,
        product_count=current_domain.repository_for(Product).count_in_category(category.id),
    )


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    categories = current_domain.repository_for(Category).list_by_name()
    return [_category_response(c) for c in categories]


@category_router.get("/{id_or_slug}", response_model=CategoryResponse)
async def get_category(id_or_slug: str) -> CategoryResponse:
    repo = current_domain.repository_for(Category)
    category = repo.find_by_slug(id_or_slug)
    if category is None:
        category = repo.get(id_or_slug)
    return _category_response(category)


@category_router.post(
    "", status_code=201, response_model=CategoryIdResponse, dependencies=[Depends(require_admin)]
)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(name=body.name, description=body.description, image=body.image)
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@category_router.put("/{category_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def update_category(category_id: str, body: UpdateCategoryRequest) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        description=body.description,
        image=body.image,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@category_router.delete("/{category_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def delete_category(category_id: str) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse(status="deleted")


# --- Product endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category_id: str | None = Query(None, alias="categoryId"),
    min_price: float | None = Query(None, ge=0, alias="minPrice"),
    max_price: float | None = Query(None, ge=0, alias="maxPrice"),
    search: str | None = None,
    featured: bool | None = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", pattern="^(asc|desc)$", alias="sortOrder"),
) -> ProductListResponse:
    products, total = current_domain.repository_for(Product).search(
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        search=search,
        featured=featured,
        page=page,
        limit=limit,
        sort_by=sort_field(sort_by),
        sort_order=sort_order,
    )
    return ProductListResponse(
        products=[_product_response(p) for p in products],
        pagination=Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit)),
    )


@product_router.get("/featured", response_model=list[ProductResponse])
async def featured_products(limit: int = Query(6, ge=1, le=50)) -> list[ProductResponse]:
    return [_product_response(p) for p in current_domain.repository_for(Product).featured(limit=limit)]


@product_router.get("/{id_or_slug}", response_model=ProductResponse)
async def get_product(id_or_slug: str) -> ProductResponse:
    product = current_domain.repository_for(Product).find_active(id_or_slug)
    if product is None:
        raise ObjectNotFoundError("Product not found")
    return _product_response(product)


@product_router.post("", status_code=201, response_model=ProductIdResponse, dependencies=[Depends(require_admin)])
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        inventory=body.inventory,
        category_id=body.category_id,
        is_active=body.is_active,
        is_featured=body.is_featured,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(require_admin)])
async def update_product(product_id: str, body: UpdateProductRequest) -> ProductResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump(exclude_unset=True))
    current_domain.process(command, asynchronous=False)
    return _product_response(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=StatusResponse, dependencies=[Depends(require_admin)])
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse(status="deleted")


# --- Image endpoints ---


def _upload_in_domain_context(product_id: str, incoming: list[IncomingImage]) -> list:
    # Rendering and storage writes block, so they run on a worker thread
    with storefront.domain_context():
        return upload_product_images(product_id, incoming)


@product_router.post(
    "/{product_id}/images",
    status_code=201,
    response_model=ImageListResponse,
    dependencies=[Depends(require_admin)],
)
async def upload_images(product_id: str, images: list[UploadFile] | None = File(None)) -> ImageListResponse:
    incoming = []
    for upload in images or []:
        incoming.append(
            IncomingImage(
                filename=upload.filename or "upload",
                content_type=upload.content_type or "",
                data=await upload.read(),
            )
        )
    created = await run_in_threadpool(_upload_in_domain_context, product_id, incoming)
    return ImageListResponse(
        message=f"{len(created)} image(s) uploaded successfully",
        data=[_image_response(i) for i in created],
    )


@product_router.get("/{product_id}/images", response_model=ImageListResponse)
async def list_images(product_id: str) -> ImageListResponse:
    product = current_domain.repository_for(Product).get(product_id)
    return ImageListResponse(data=[_image_response(i) for i in product.sorted_images])


@product_router.put(
    "/{product_id}/images/reorder",
    response_model=ImageListResponse,
    dependencies=[Depends(require_admin)],
)
async def reorder_images(product_id: str, body: ReorderImagesRequest) -> ImageListResponse:
    command = ReorderProductImages(
        product_id=product_id,
        image_orders=json.dumps([entry.model_dump() for entry in body.image_orders]),
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ImageListResponse(
        message="Images reordered successfully",
        data=[_image_response(i) for i in product.sorted_images],
    )


@product_router.put(
    "/{product_id}/images/{image_id}/primary",
    response_model=ImageListResponse,
    dependencies=[Depends(require_admin)],
)
async def set_primary_image(product_id: str, image_id: str) -> ImageListResponse:
    current_domain.process(SetPrimaryProductImage(product_id=product_id, image_id=image_id), asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ImageListResponse(
        message="Primary image updated successfully",
        data=[_image_response(i) for i in product.sorted_images],
    )


@product_router.delete(
    "/{product_id}/images/{image_id}",
    response_model=ImageListResponse,
    dependencies=[Depends(require_admin)],
)
async def delete_image(product_id: str, image_id: str) -> ImageListResponse:
    remove_product_image(product_id, image_id)
    product = current_domain.repository_for(Product).get(product_id)
    return ImageListResponse(
        message="Image deleted successfully",
        data=[_image_response(i) for i in product.sorted_images],
    )
