"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    price: Float(required=True)
    inventory: Integer(required=True)
    category_id: Identifier(required=True)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    slug: String(required=True)
    inventory: Integer()
    is_active: Boolean()


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """The catalogue price changed. Existing order lines keep their snapshot."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price: Float(required=True)
    new_price: Float(required=True)


@storefront.event(part_of="Product")
class InventoryReduced:
    """Stock was taken out for an order."""

    __version__ = 1

    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    remaining: Integer(required=True)
    order_id: Identifier()


@storefront.event(part_of="Product")
class ProductImageAdded:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)
    url: String(required=True)
    display_order: Integer(required=True)
    is_primary: Boolean(required=True)


@storefront.event(part_of="Product")
class ProductImageRemoved:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)
    file_name: String()


@storefront.event(part_of="Product")
class PrimaryImageChanged:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)


@storefront.event(part_of="Product")
class ProductImagesReordered:
    __version__ = 1

    product_id: Identifier(required=True)
    reordered_count: Integer(required=True)
