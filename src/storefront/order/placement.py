"""Order placement: command and handler.

Validation (product lookup, stock check, pricing) only reads. The order
insert and every stock reservation are then persisted inside the handler's
Unit of Work, so either all of them commit or none do.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import InsufficientStock
from storefront.order.order import Order, ShippingAddress
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {"product_id", "quantity"}
    shipping_address = Text(required=True)  # JSON: address dict


def _parse_requested_items(raw_items):
    items = json.loads(raw_items) if isinstance(raw_items, str) else raw_items
    if not items:
        raise ValidationError({"items": ["Order must contain at least one item"]})

    requested = []
    for item in items:
        quantity = int(item.get("quantity", 0))
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        requested.append((str(item["product_id"]), quantity))
    return requested


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = _parse_requested_items(command.items)
        address_data = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        shipping_address = ShippingAddress(**address_data)

        product_repo = current_domain.repository_for(Product)
        product_repo.lock(product_id for product_id, _ in requested)

        # Load each product once; quantities for the same product add up
        products = {}
        reserved = {}
        items_data = []
        for product_id, quantity in requested:
            product = products.get(product_id)
            if product is None:
                product = product_repo.fetch(product_id)
                products[product_id] = product

            wanted = reserved.get(product_id, 0) + quantity
            if product.stock < wanted:
                raise InsufficientStock(product.name, product.stock)
            reserved[product_id] = wanted

            items_data.append({"product_id": product_id, "quantity": quantity, "price": product.price})

        order = Order.place(
            user_id=command.user_id,
            items_data=items_data,
            shipping_address=shipping_address,
        )

        for product_id, quantity in reserved.items():
            products[product_id].reserve_stock(quantity, order_id=order.id)

        current_domain.repository_for(Order).add(order)
        for product in products.values():
            product_repo.add(product)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            item_count=len(items_data),
            total_amount=order.total_amount,
        )
        return str(order.id)
