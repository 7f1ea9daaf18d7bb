"""Application tests for category management via domain.process()."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.catalogue.category.category import Category
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory


class TestCreateCategory:
    def test_create(self):
        category_id = current_domain.process(CreateCategory(name="Soda"), asynchronous=False)
        category = current_domain.repository_for(Category).get(category_id)
        assert category.slug == "soda"

    def test_duplicate_name_rejected(self, make_category):
        make_category(name="Soda")
        with pytest.raises(ValidationError) as exc:
            current_domain.process(CreateCategory(name="soda"), asynchronous=False)
        assert exc.value.messages["name"] == ["Category with this name already exists"]


class TestUpdateCategory:
    def test_rename(self, make_category):
        category_id = make_category(name="Tea")
        current_domain.process(UpdateCategory(category_id=category_id, name="Iced Tea"), asynchronous=False)
        assert current_domain.repository_for(Category).get(category_id).slug == "iced-tea"

    def test_rename_onto_existing_name_rejected(self, make_category):
        make_category(name="Tea")
        category_id = make_category(name="Water")
        with pytest.raises(ValidationError):
            current_domain.process(UpdateCategory(category_id=category_id, name="Tea"), asynchronous=False)

    def test_keeping_own_name_is_allowed(self, make_category):
        category_id = make_category(name="Tea")
        current_domain.process(
            UpdateCategory(category_id=category_id, name="Tea", description="Hot and iced"),
            asynchronous=False,
        )
        assert current_domain.repository_for(Category).get(category_id).description == "Hot and iced"

    def test_unknown_category(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateCategory(category_id="missing", name="X"), asynchronous=False)


class TestDeleteCategory:
    def test_delete_empty_category(self, make_category):
        category_id = make_category(name="Water")
        current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Category).get(category_id)

    def test_delete_blocked_while_products_exist(self, make_product):
        product = make_product()
        with pytest.raises(ValidationError) as exc:
            current_domain.process(DeleteCategory(category_id=str(product.category_id)), asynchronous=False)
        assert exc.value.messages["category"] == ["Cannot delete category with existing products"]

    def test_inactive_products_also_block_delete(self, make_product):
        product = make_product(is_active=False)
        with pytest.raises(ValidationError):
            current_domain.process(DeleteCategory(category_id=str(product.category_id)), asynchronous=False)
