"""Product management: Commands and handler for admin catalogue edits."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.media import storage_for
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.slug import slugify

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    inventory: Integer(default=0, min_value=0)
    category_id: Identifier(required=True)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    inventory: Integer(min_value=0)
    category_id: Identifier()
    is_active: Boolean()
    is_featured: Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _assert_slug_available(slug, product_id=None):
    existing = current_domain.repository_for(Product).find_by_slug(slug)
    if existing is not None and str(existing.id) != str(product_id):
        raise ValidationError({"name": ["Product with this name already exists"]})


def _assert_category_exists(category_id):
    # Raises ObjectNotFoundError (404) when the category is unknown
    current_domain.repository_for(Category).get(category_id)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _assert_slug_available(slugify(command.name))
        _assert_category_exists(command.category_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            category_id=command.category_id,
            description=command.description,
            inventory=command.inventory or 0,
            is_active=command.is_active if command.is_active is not None else True,
            is_featured=bool(command.is_featured),
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), slug=product.slug)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if command.name:
            _assert_slug_available(slugify(command.name), product_id=product.id)
        if command.category_id:
            _assert_category_exists(command.category_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            inventory=command.inventory,
            category_id=command.category_id,
            is_active=command.is_active,
            is_featured=command.is_featured,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        from storefront.ordering.order.repository import order_lines_reference

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        if order_lines_reference(product.id):
            raise ValidationError(
                {"product": ["Cannot delete a product that appears in orders; deactivate it instead"]}
            )

        images = list(product.images)
        repo.remove(product)
        logger.info("product_deleted", product_id=str(product.id), image_count=len(images))

        for image in images:
            storage_for(image.storage_type).delete_renditions(str(product.id), image.file_name)
