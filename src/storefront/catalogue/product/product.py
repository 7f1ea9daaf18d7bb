"""Product aggregate root with the ProductImage entity.

The product owns its stock level (``inventory``) and its image gallery.
Both are guarded here so that every caller (checkout, the admin API,
the image upload pipeline) goes through the same rules:

* inventory never drops below zero;
* a product with images has exactly one primary image.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.slug import slugify


class StorageType(Enum):
    LOCAL = "local"
    S3 = "s3"


@storefront.entity(part_of="Product")
class ProductImage:
    """One uploaded picture and the URLs of its five renditions."""

    original_url: String(required=True, max_length=1000)
    thumbnail_url: String(required=True, max_length=1000)
    medium_url: String(required=True, max_length=1000)
    large_url: String(required=True, max_length=1000)
    webp_url: String(required=True, max_length=1000)
    file_name: String(required=True, max_length=255)
    file_size: Integer(min_value=0)
    mime_type: String(max_length=50)
    width: Integer(min_value=0)
    height: Integer(min_value=0)
    storage_type: String(choices=StorageType, default=StorageType.LOCAL.value)
    storage_key: String(max_length=1000)
    alt_text: String(max_length=255)
    display_order: Integer(default=0)
    is_primary: Boolean(default=False)
    created_at: DateTime()


@storefront.aggregate
class Product:
    """A sellable item in the storefront catalogue."""

    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=280, unique=True)
    description: Text(default="")
    price: Float(required=True, min_value=0.0)
    inventory: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    category_id: Identifier(required=True)
    images: HasMany(ProductImage)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def exactly_one_primary_image_when_images_exist(self):
        if not self.images:
            return
        primaries = [i for i in self.images if i.is_primary]
        if len(primaries) != 1:
            raise ValidationError({"images": ["Exactly one image must be marked as primary"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        category_id,
        description=None,
        inventory=0,
        is_active=True,
        is_featured=False,
    ):
        from storefront.catalogue.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name,
            slug=slugify(name),
            description=description or "",
            price=price,
            inventory=inventory,
            is_active=is_active,
            is_featured=is_featured,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                slug=product.slug,
                price=price,
                inventory=inventory,
                category_id=category_id,
                created_at=now,
            )
        )
        return product

    def update_details(
        self,
        name=None,
        description=None,
        price=None,
        inventory=None,
        category_id=None,
        is_active=None,
        is_featured=None,
    ):
        from storefront.catalogue.product.events import ProductDetailsUpdated, ProductPriceChanged

        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if inventory is not None:
            self.inventory = inventory
        if category_id is not None:
            self.category_id = category_id
        if is_active is not None:
            self.is_active = is_active
        if is_featured is not None:
            self.is_featured = is_featured

        if price is not None and price != self.price:
            previous_price = self.price
            self.price = price
            self.raise_(ProductPriceChanged(product_id=self.id, previous_price=previous_price, new_price=price))

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                slug=self.slug,
                inventory=self.inventory,
                is_active=self.is_active,
            )
        )

    # -------------------------------------------------------------------
    # Inventory
    # -------------------------------------------------------------------
    def reduce_inventory(self, quantity, order_id=None):
        """Take ``quantity`` units out of stock for an order."""
        from storefront.catalogue.product.events import InventoryReduced

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if self.inventory < quantity:
            raise ValidationError({"inventory": [f"Insufficient inventory for {self.name}"]})

        self.inventory -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            InventoryReduced(
                product_id=self.id,
                quantity=quantity,
                remaining=self.inventory,
                order_id=order_id,
            )
        )

    # -------------------------------------------------------------------
    # Image gallery
    # -------------------------------------------------------------------
    @property
    def sorted_images(self):
        return sorted(self.images, key=lambda i: i.display_order)

    def next_display_order(self) -> int:
        if not self.images:
            return 0
        return max(i.display_order for i in self.images) + 1

    def add_image(
        self,
        original_url,
        thumbnail_url,
        medium_url,
        large_url,
        webp_url,
        file_name,
        file_size=None,
        mime_type=None,
        width=None,
        height=None,
        storage_type=StorageType.LOCAL.value,
        storage_key=None,
        alt_text=None,
    ):
        """Append an image after the current last one.

        The first image a product receives becomes its primary image.
        """
        from storefront.catalogue.product.events import ProductImageAdded

        with atomic_change(self):
            is_primary = not self.images
            image = ProductImage(
                original_url=original_url,
                thumbnail_url=thumbnail_url,
                medium_url=medium_url,
                large_url=large_url,
                webp_url=webp_url,
                file_name=file_name,
                file_size=file_size,
                mime_type=mime_type,
                width=width,
                height=height,
                storage_type=storage_type,
                storage_key=storage_key,
                alt_text=alt_text,
                display_order=self.next_display_order(),
                is_primary=is_primary,
                created_at=datetime.now(UTC),
            )
            self.add_images(image)

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductImageAdded(
                product_id=self.id,
                image_id=image.id,
                url=original_url,
                display_order=image.display_order,
                is_primary=is_primary,
            )
        )
        return image

    def _find_image(self, image_id):
        image = next((i for i in self.images if str(i.id) == str(image_id)), None)
        if image is None:
            raise ObjectNotFoundError(f"Image {image_id} not found")
        return image

    def remove_image(self, image_id):
        """Remove an image; promote the lowest-ordered survivor if it was primary.

        Returns the removed image so the caller can clean up its files.
        """
        from storefront.catalogue.product.events import ProductImageRemoved

        image = self._find_image(image_id)
        was_primary = image.is_primary

        with atomic_change(self):
            self.remove_images(image)
            if was_primary and self.images:
                self.sorted_images[0].is_primary = True

        self.updated_at = datetime.now(UTC)
        self.raise_(ProductImageRemoved(product_id=self.id, image_id=image_id, file_name=image.file_name))
        return image

    def set_primary_image(self, image_id):
        from storefront.catalogue.product.events import PrimaryImageChanged

        target = self._find_image(image_id)

        with atomic_change(self):
            for img in self.images:
                if img.is_primary and img is not target:
                    img.is_primary = False
            target.is_primary = True

        self.updated_at = datetime.now(UTC)
        self.raise_(PrimaryImageChanged(product_id=self.id, image_id=image_id))

    def reorder_images(self, display_orders):
        """Apply ``{image_id: display_order}``; unknown image ids are skipped."""
        from storefront.catalogue.product.events import ProductImagesReordered

        by_id = {str(i.id): i for i in self.images}
        applied = 0
        for image_id, display_order in display_orders.items():
            image = by_id.get(str(image_id))
            if image is None:
                continue
            image.display_order = display_order
            applied += 1

        self.updated_at = datetime.now(UTC)
        self.raise_(ProductImagesReordered(product_id=self.id, reordered_count=applied))
        return applied
