"""Category aggregate root for grouping products in the storefront."""

from datetime import UTC, datetime

from protean.fields import DateTime, String, Text

from storefront.domain import storefront
from storefront.shared.slug import slugify


@storefront.aggregate
class Category:
    """A flat grouping of products (Juice, Soda, Water, ...).

    The slug is always derived from the name, so renaming a category moves
    its URL as well.
    """

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120, unique=True)
    description: Text()
    image: String(max_length=500)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name, description=None, image=None):
        from storefront.catalogue.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name,
            slug=slugify(name),
            description=description,
            image=image,
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategoryCreated(category_id=category.id, name=name, slug=category.slug))
        return category

    def update_details(self, name=None, description=None, image=None):
        from storefront.catalogue.category.events import CategoryDetailsUpdated

        if name is not None:
            self.name = name
            self.slug = slugify(name)
        if description is not None:
            self.description = description
        if image is not None:
            self.image = image

        self.updated_at = datetime.now(UTC)
        self.raise_(CategoryDetailsUpdated(category_id=self.id, name=self.name, slug=self.slug))
