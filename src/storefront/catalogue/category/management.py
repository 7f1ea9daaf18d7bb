"""Category management: Commands and handlers."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.slug import slugify


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: Text()
    image: String(max_length=500)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id: Identifier(required=True)
    name: String(max_length=100)
    description: Text()
    image: String(max_length=500)


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


def _assert_slug_available(slug, category_id=None):
    existing = current_domain.repository_for(Category).find_by_slug(slug)
    if existing is not None and str(existing.id) != str(category_id):
        raise ValidationError({"name": ["Category with this name already exists"]})


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        _assert_slug_available(slugify(command.name))

        category = Category.create(
            name=command.name,
            description=command.description,
            image=command.image,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if command.name:
            _assert_slug_available(slugify(command.name), category_id=category.id)

        category.update_details(
            name=command.name,
            description=command.description,
            image=command.image,
        )
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if current_domain.repository_for(Product).count_in_category(category.id, active_only=False):
            raise ValidationError({"category": ["Cannot delete category with existing products"]})

        repo.remove(category)
