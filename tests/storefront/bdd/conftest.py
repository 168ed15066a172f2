"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then
from storefront.errors import InsufficientStock, InvalidTransition, OrderNotFound
from storefront.product.management import CreateProduct
from storefront.product.product import Product


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def products():
    """Product ids keyed by name."""
    return {}


@pytest.fixture()
def context():
    """The order under test and the error raised by the last action."""
    return {"order_id": None, "exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced at {price:f} with {stock:d} units in stock'))
def product_in_stock(products, name, price, stock):
    products[name] = current_domain.process(
        CreateProduct(
            name=name,
            description=f"{name} from the storefront catalogue.",
            price=price,
            category="dairy",
            stock=stock,
            image_url="https://example.com/product.jpg",
        ),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} units in stock'))
def product_has_stock(products, name, stock):
    assert current_domain.repository_for(Product).get(products[name]).stock == stock


@then("the order is rejected for insufficient stock")
def rejected_for_stock(context):
    assert isinstance(context["exc"], InsufficientStock)


@then("the cancellation is rejected")
def cancellation_rejected(context):
    assert isinstance(context["exc"], InvalidTransition)


@then("the order is reported as not found")
def order_not_found(context):
    assert isinstance(context["exc"], OrderNotFound)
