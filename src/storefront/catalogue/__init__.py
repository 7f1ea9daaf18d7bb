"""Catalogue: categories, products and product media.

Domain elements live two levels below the domain file, out of reach of
Protean's traversal, so they are registered here on package import.
"""

from storefront.catalogue.category import category, events, management, repository  # noqa: F401
from storefront.catalogue.product import events as product_events  # noqa: F401
from storefront.catalogue.product import images, product  # noqa: F401
from storefront.catalogue.product import management as product_management  # noqa: F401
from storefront.catalogue.product import repository as product_repository  # noqa: F401
