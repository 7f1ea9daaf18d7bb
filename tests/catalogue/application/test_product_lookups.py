"""Application tests for the Product repository's lookup helpers."""

from protean import current_domain

from storefront.catalogue.product.product import Product


def _repo():
    return current_domain.repository_for(Product)


class TestFindById:
    def test_known_id(self, make_product):
        product = make_product()
        assert _repo().find_by_id(product.id).name == "Orange Juice"

    def test_unknown_id_is_none(self):
        assert _repo().find_by_id("no-such-product") is None


class TestFeatured:
    def test_only_active_featured_products(self, make_product):
        make_product(name="Mango Smoothie", is_featured=True)
        make_product(name="Berry Blast", is_featured=True, is_active=False)
        make_product(name="Plain Water")

        assert [p.name for p in _repo().featured()] == ["Mango Smoothie"]

    def test_limit(self, make_product):
        for n in range(8):
            make_product(name=f"Featured Drink {n}", is_featured=True)

        assert len(_repo().featured()) == 6
        assert len(_repo().featured(limit=3)) == 3
