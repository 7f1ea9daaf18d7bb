"""Repository for the Product aggregate."""

from protean.utils.query import Q

from storefront.catalogue.product.product import Product
from storefront.domain import storefront

SORTABLE_FIELDS = {"created_at", "updated_at", "name", "price"}


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        """Like ``get``, but answers ``None`` for unknown ids."""
        return self._dao.query.filter(id=str(product_id)).all().first

    def find_by_slug(self, slug: str) -> Product | None:
        return self._dao.query.filter(slug=slug).all().first

    def find_active(self, id_or_slug: str) -> Product | None:
        """Look a product up by id, falling back to slug. Inactive products are hidden."""
        product = self._dao.query.filter(id=id_or_slug, is_active=True).all().first
        if product is None:
            product = self._dao.query.filter(slug=id_or_slug, is_active=True).all().first
        return product

    def count_in_category(self, category_id, active_only: bool = True) -> int:
        filters = {"category_id": str(category_id)}
        if active_only:
            filters["is_active"] = True
        return self._dao.query.filter(**filters).all().total

    def search(
        self,
        category_id=None,
        min_price=None,
        max_price=None,
        search=None,
        featured=None,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ):
        """Active products matching the filters; returns ``(items, total)``."""
        query = self._dao.query.filter(is_active=True)
        if category_id:
            query = query.filter(category_id=str(category_id))
        if min_price is not None:
            query = query.filter(price__gte=min_price)
        if max_price is not None:
            query = query.filter(price__lte=max_price)
        if search:
            query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))
        if featured is not None:
            query = query.filter(is_featured=featured)

        field = sort_by if sort_by in SORTABLE_FIELDS else "created_at"
        ordering = f"-{field}" if sort_order == "desc" else field

        results = query.order_by(ordering).offset((page - 1) * limit).limit(limit).all()
        return results.items, results.total

    def featured(self, limit: int = 6) -> list[Product]:
        """Newest active featured products."""
        query = self._dao.query.filter(is_active=True, is_featured=True)
        return query.order_by("-created_at").limit(limit).all().items

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
