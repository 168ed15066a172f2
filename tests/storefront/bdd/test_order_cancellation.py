"""BDD tests for order placement and cancellation."""

import json

from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.errors import StorefrontError
from storefront.order.lifecycle import CancelOrder, UpdateOrderStatus
from storefront.order.order import Order
from storefront.order.placement import PlaceOrder

scenarios("features/order_cancellation.feature")

ADDRESS = {"street": "123 Main St", "city": "Springfield", "state": "IL", "zip_code": "62701"}


def _order(products, user_id, quantity, name):
    command = PlaceOrder(
        user_id=user_id,
        items=json.dumps([{"product_id": products[name], "quantity": quantity}]),
        shipping_address=json.dumps(ADDRESS),
    )
    return current_domain.process(command, asynchronous=False)


def _cancel(context, user_id):
    command = CancelOrder(order_id=context["order_id"], user_id=user_id)
    current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('"{user_id}" has ordered {quantity:d} units of "{name}"'))
def existing_order(products, context, user_id, quantity, name):
    context["order_id"] = _order(products, user_id, quantity, name)


@given(parsers.cfparse('"{user_id}" has cancelled the order'))
def existing_cancellation(context, user_id):
    _cancel(context, user_id)


@given("the order has been delivered")
def delivered_order(context):
    current_domain.process(
        UpdateOrderStatus(order_id=context["order_id"], updated_by="admin-1", order_status="delivered"),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{user_id}" orders {quantity:d} units of "{name}"'))
def order_units(products, context, user_id, quantity, name):
    try:
        order_id = _order(products, user_id, quantity, name)
    except StorefrontError as exc:
        context["exc"] = exc
    else:
        context["order_id"] = order_id


@when(parsers.cfparse('"{user_id}" cancels the order'))
def cancel_the_order(context, user_id):
    try:
        _cancel(context, user_id)
    except StorefrontError as exc:
        context["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the order total is {total:f}"))
def order_total(context, total):
    assert current_domain.repository_for(Order).get(context["order_id"]).total_amount == total


@then(parsers.cfparse('the order status is "{status}"'))
def order_status(context, status):
    assert current_domain.repository_for(Order).get(context["order_id"]).order_status == status
