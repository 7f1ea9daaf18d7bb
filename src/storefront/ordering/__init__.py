"""Ordering: carts, checkout and order tracking.

Importing the package registers every cart and order element with the
storefront domain.
"""

from storefront.ordering.cart import cart, events, management, repository  # noqa: F401
from storefront.ordering.order import events as order_events  # noqa: F401
from storefront.ordering.order import order, placement, status  # noqa: F401
from storefront.ordering.order import repository as order_repository  # noqa: F401
