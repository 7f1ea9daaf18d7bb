"""Image gallery management: Commands and handler.

File handling (validation, rendering, storage writes and deletes) happens
in ``storefront.catalogue.media.pipeline``; these commands only record the
outcome on the Product aggregate.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProductImages:
    product_id: Identifier(required=True)
    images: Text(required=True)  # JSON: list of rendition records


@storefront.command(part_of="Product")
class RemoveProductImage:
    product_id: Identifier(required=True)
    image_id: Identifier(required=True)


@storefront.command(part_of="Product")
class SetPrimaryProductImage:
    product_id: Identifier(required=True)
    image_id: Identifier(required=True)


@storefront.command(part_of="Product")
class ReorderProductImages:
    product_id: Identifier(required=True)
    image_orders: Text(required=True)  # JSON: list of {image_id, display_order}


@storefront.command_handler(part_of=Product)
class ManageImagesHandler:
    @handle(AddProductImages)
    def add_images(self, command):
        records = json.loads(command.images) if isinstance(command.images, str) else command.images

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        added = [product.add_image(**record) for record in records]
        repo.add(product)
        return [str(image.id) for image in added]

    @handle(RemoveProductImage)
    def remove_image(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        removed = product.remove_image(command.image_id)
        repo.add(product)
        return {"file_name": removed.file_name, "storage_type": removed.storage_type}

    @handle(SetPrimaryProductImage)
    def set_primary(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_primary_image(command.image_id)
        repo.add(product)

    @handle(ReorderProductImages)
    def reorder(self, command):
        orders = json.loads(command.image_orders) if isinstance(command.image_orders, str) else command.image_orders

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        applied = product.reorder_images({entry["image_id"]: int(entry["display_order"]) for entry in orders})
        repo.add(product)
        return applied
