import json
import os

import pytest

ADDRESS = {
    "street": "123 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "USA",
}


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def create_product():
    """Factory that creates a product through the domain and returns its id."""
    from protean.utils.globals import current_domain

    from storefront.product.management import CreateProduct

    def _create(**overrides):
        data = {
            "name": "Fresh Organic Apples",
            "description": "Crisp and sweet organic apples, perfect for snacking.",
            "price": 4.99,
            "category": "fruits",
            "stock": 100,
            "image_url": "https://example.com/apples.jpg",
        }
        data.update(overrides)
        return current_domain.process(CreateProduct(**data), asynchronous=False)

    return _create


@pytest.fixture()
def place_order():
    """Factory that places an order through the domain and returns its id."""
    from protean.utils.globals import current_domain

    from storefront.order.placement import PlaceOrder

    def _place(user_id, items, shipping_address=None):
        command = PlaceOrder(
            user_id=user_id,
            items=json.dumps(items),
            shipping_address=json.dumps(shipping_address or ADDRESS),
        )
        return current_domain.process(command, asynchronous=False)

    return _place
