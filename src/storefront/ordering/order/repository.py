"""Repository for the Order aggregate, plus order-line lookups."""

from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, OrderItem

SORTABLE_FIELDS = {"created_at", "updated_at", "total", "order_number", "status"}


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_order_number(self, order_number: str) -> Order | None:
        return self._dao.query.filter(order_number=order_number).all().first

    def find_by_idempotency_key(self, user_id, key: str) -> Order | None:
        return self._dao.query.filter(user_id=str(user_id), idempotency_key=key).all().first

    def search(
        self,
        user_id=None,
        status=None,
        page: int = 1,
        limit: int = 10,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ):
        """Orders matching the filters; returns ``(items, total)``."""
        query = self._dao.query
        if user_id:
            query = query.filter(user_id=str(user_id))
        if status:
            query = query.filter(status=status)

        field = sort_by if sort_by in SORTABLE_FIELDS else "created_at"
        ordering = f"-{field}" if sort_order == "desc" else field

        results = query.order_by(ordering).offset((page - 1) * limit).limit(limit).all()
        return results.items, results.total

    def for_user(self, user_id) -> list[Order]:
        """Every order of a user, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items


def order_lines_reference(product_id) -> int:
    """Number of order lines that point at ``product_id``."""
    dao = current_domain.repository_for(OrderItem)._dao
    return dao.query.filter(product_id=str(product_id)).all().total
