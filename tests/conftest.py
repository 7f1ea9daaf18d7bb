import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the storefront domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed, tmp_path):
    """Run each test inside the domain context with fresh adapters, then wipe all stores."""
    from storefront.catalogue.media import reset_storage, set_storage
    from storefront.catalogue.media.local_adapter import LocalImageStorage
    from storefront.notifications.channel import reset_channels
    from storefront.payments.gateway import reset_gateway
    from storefront.shared.rate_limit import reset_rate_limits

    set_storage(LocalImageStorage(root_path=str(tmp_path / "uploads"), url_prefix="/uploads/products"))

    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()

    reset_storage()
    reset_gateway()
    reset_channels()
    reset_rate_limits()


# ---------------------------------------------------------------------------
# Builders shared by every context's tests
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    from protean.utils.globals import current_domain

    from storefront.identity.user import User

    def _make(email="shopper@example.com", password="password123", role="USER", first_name="Sam", verified=True):
        user = User.register(email=email, password=password, first_name=first_name, last_name="Shopper", role=role)
        if verified:
            user.verify_email()
        current_domain.repository_for(User).add(user)
        return current_domain.repository_for(User).get(user.id)

    return _make


@pytest.fixture()
def make_category():
    from protean.utils.globals import current_domain

    from storefront.catalogue.category.management import CreateCategory

    def _make(name="Juice", description="Fresh and natural juices"):
        return current_domain.process(CreateCategory(name=name, description=description), asynchronous=False)

    return _make


@pytest.fixture()
def make_product(make_category):
    from protean.utils.globals import current_domain

    from storefront.catalogue.category.category import Category
    from storefront.catalogue.product.management import CreateProduct
    from storefront.catalogue.product.product import Product

    def _make(name="Orange Juice", price=4.99, inventory=100, category_id=None, is_active=True, is_featured=False):
        if category_id is None:
            existing = current_domain.repository_for(Category).find_by_slug("juice")
            category_id = str(existing.id) if existing else make_category()
        product_id = current_domain.process(
            CreateProduct(
                name=name,
                description=f"{name} description",
                price=price,
                inventory=inventory,
                category_id=category_id,
                is_active=is_active,
                is_featured=is_featured,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(Product).get(product_id)

    return _make


@pytest.fixture()
def shipping_address():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "address1": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "US",
    }


@pytest.fixture()
def auth_headers():
    from storefront.identity.tokens import create_access_token

    def _headers(user):
        token = create_access_token(user_id=str(user.id), email=user.email, role=user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def api_client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from storefront.shared.http import register_exception_handlers
    from storefront.web import include_routers

    app = FastAPI()
    include_routers(app)
    register_exception_handlers(app)
    return TestClient(app, raise_server_exceptions=False)
