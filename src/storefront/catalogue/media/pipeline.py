"""Product image upload pipeline.

Upload flow for a batch of files:

1. the product must exist;
2. every file is validated before anything is written;
3. each file is rendered and its five renditions written to storage;
4. the new images are recorded on the product in one command.

If step 3 or 4 fails, every rendition written for this batch is removed
again before the error propagates.
"""

import json
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.media import get_storage, storage_for
from storefront.catalogue.media.port import StoredRendition, rendition_file_name
from storefront.catalogue.media.renditions import IncomingImage, render_variants, validate_image
from storefront.catalogue.product.images import AddProductImages, RemoveProductImage
from storefront.catalogue.product.product import Product
from storefront.config import get_settings

logger = structlog.get_logger(__name__)


def _store_image(storage, product_id: str, image: IncomingImage, settings, written: list) -> dict:
    rendered = render_variants(image.data, settings)
    file_name = f"{uuid4()}.jpg"

    urls = {}
    keys = {}
    for rendition in rendered.renditions:
        stored: StoredRendition = storage.save(
            product_id,
            rendition.variant,
            rendition_file_name(file_name, rendition.variant),
            rendition.data,
            rendition.content_type,
        )
        written.append((rendition.variant, rendition_file_name(file_name, rendition.variant)))
        urls[rendition.variant] = stored.url
        keys[rendition.variant] = stored.key

    return {
        "original_url": urls["original"],
        "thumbnail_url": urls["thumbnail"],
        "medium_url": urls["medium"],
        "large_url": urls["large"],
        "webp_url": urls["webp"],
        "file_name": file_name,
        "file_size": image.size,
        "mime_type": image.content_type,
        "width": rendered.width,
        "height": rendered.height,
        "storage_type": storage.storage_type,
        "storage_key": keys["original"],
    }


def _compensate(storage, product_id: str, written: list) -> None:
    for variant, file_name in written:
        try:
            storage.delete(product_id, variant, file_name)
        except Exception as exc:
            logger.warning(
                "upload_compensation_failed",
                product_id=product_id,
                variant=variant,
                file_name=file_name,
                error=str(exc),
            )


def upload_product_images(product_id: str, files: list[IncomingImage]) -> list:
    """Validate, render, store and record a batch of images. Returns the new ProductImage entities."""
    settings = get_settings()

    # Raises ObjectNotFoundError for unknown products
    current_domain.repository_for(Product).get(product_id)

    if not files:
        raise ValidationError({"images": ["No files uploaded"]})
    if len(files) > settings.max_images_per_upload:
        raise ValidationError({"images": [f"Cannot upload more than {settings.max_images_per_upload} files at once"]})

    for image in files:
        validate_image(image, settings.max_image_size)

    storage = get_storage()
    written: list[tuple[str, str]] = []
    try:
        records = [_store_image(storage, product_id, image, settings, written) for image in files]
        image_ids = current_domain.process(
            AddProductImages(product_id=product_id, images=json.dumps(records)),
            asynchronous=False,
        )
    except Exception:
        logger.error("image_upload_failed", product_id=product_id, renditions_written=len(written))
        _compensate(storage, product_id, written)
        raise

    logger.info("images_uploaded", product_id=product_id, count=len(image_ids))

    product = current_domain.repository_for(Product).get(product_id)
    by_id = {str(i.id): i for i in product.images}
    return [by_id[image_id] for image_id in image_ids if image_id in by_id]


def remove_product_image(product_id: str, image_id: str) -> None:
    """Remove an image from the product, then delete its renditions best-effort.

    Renditions are deleted from the backend recorded on the image, which is
    not necessarily the one new uploads go to.
    """
    removed_image = current_domain.process(
        RemoveProductImage(product_id=product_id, image_id=image_id),
        asynchronous=False,
    )
    storage = storage_for(removed_image["storage_type"])
    removed = storage.delete_renditions(product_id, removed_image["file_name"])
    logger.info("image_removed", product_id=product_id, image_id=image_id, renditions_removed=removed)
