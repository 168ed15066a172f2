"""Tests for the Order aggregate and its line items."""

import pytest
from protean.exceptions import ValidationError
from storefront.order.events import OrderPlaced
from storefront.order.order import Order, OrderItem, ShippingAddress


def _address(**overrides):
    data = {
        "street": "123 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
    }
    data.update(overrides)
    return ShippingAddress(**data)


def _place(items=None, **overrides):
    items = items or [
        {"product_id": "prod-a", "quantity": 3, "price": 2.50},
        {"product_id": "prod-b", "quantity": 1, "price": 4.00},
    ]
    data = {"user_id": "user-1", "items_data": items, "shipping_address": _address()}
    data.update(overrides)
    return Order.place(**data)


class TestShippingAddress:
    def test_country_defaults_to_usa(self):
        assert _address().country == "USA"

    def test_zip_plus_four_accepted(self):
        assert _address(zip_code="62701-1234").zip_code == "62701-1234"

    def test_invalid_zip_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _address(zip_code="ABCDE")
        assert "zip_code" in exc.value.messages

    def test_blank_street_rejected(self):
        with pytest.raises(ValidationError):
            _address(street="   ")

    def test_missing_city_rejected(self):
        with pytest.raises(ValidationError):
            ShippingAddress(street="123 Main St", state="IL", zip_code="62701")


class TestOrderItem:
    def test_subtotal(self):
        item = OrderItem(product_id="prod-a", quantity=3, price=2.50)
        assert item.subtotal == 7.50

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            OrderItem(product_id="prod-a", quantity=0, price=2.50)


class TestOrderPlacement:
    def test_place_computes_total(self):
        order = _place()
        assert order.total_amount == 11.50
        assert len(order.items) == 2

    def test_place_sets_initial_statuses(self):
        order = _place()
        assert order.order_status == "processing"
        assert order.payment_status == "pending"
        assert order.created_at is not None

    def test_place_keeps_line_order(self):
        order = _place()
        assert [item.product_id for item in order.items] == ["prod-a", "prod-b"]

    def test_place_raises_order_placed(self):
        order = _place()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == str(order.id)
        assert event.item_count == 2
        assert event.total_amount == 11.50

    def test_place_without_items_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order.place(user_id="user-1", items_data=[], shipping_address=_address())
        assert "items" in exc.value.messages

    def test_mismatched_total_rejected(self):
        with pytest.raises(ValidationError) as exc:
            Order(
                user_id="user-1",
                items=[OrderItem(product_id="prod-a", quantity=2, price=1.0)],
                total_amount=5.0,
                shipping_address=_address(),
            )
        assert "total_amount" in exc.value.messages

    def test_owned_by(self):
        order = _place()
        assert order.owned_by("user-1")
        assert not order.owned_by("user-2")
