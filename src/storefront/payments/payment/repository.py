"""Repository for the Payment aggregate."""

from storefront.domain import storefront
from storefront.payments.payment.payment import Payment


@storefront.repository(part_of=Payment)
class PaymentRepository:
    def find_by_order(self, order_id) -> Payment | None:
        return self._dao.query.filter(order_id=str(order_id)).all().first

    def find_by_stripe_id(self, stripe_id: str) -> Payment | None:
        return self._dao.query.filter(stripe_id=stripe_id).all().first

    def history(self, user_id=None, limit: int = 100) -> list[Payment]:
        """Payments newest first, optionally restricted to one user's orders."""
        query = self._dao.query
        if user_id:
            query = query.filter(user_id=str(user_id))
        return query.order_by("-created_at").limit(limit).all().items
