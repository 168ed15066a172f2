"""Order lifecycle: cancellation and administrative status updates."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import ProductNotFound
from storefront.order.order import Order, OrderStatus, PaymentStatus
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_admin = Boolean(default=False)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    updated_by = Identifier(required=True)
    order_status = String(choices=OrderStatus)
    payment_status = String(choices=PaymentStatus)


def _release_reservation(order):
    """Put every line item's quantity back into its product's stock."""
    product_repo = current_domain.repository_for(Product)

    quantities = {}
    for item in order.items:
        product_id = str(item.product_id)
        quantities[product_id] = quantities.get(product_id, 0) + item.quantity

    product_repo.lock(quantities)
    for product_id, quantity in quantities.items():
        try:
            product = product_repo.fetch(product_id)
        except ProductNotFound:
            logger.warning(
                "Skipping stock restoration for deleted product",
                order_id=str(order.id),
                product_id=product_id,
                quantity=quantity,
            )
            continue
        product.restore_stock(quantity, order_id=order.id)
        product_repo.add(product)


def _cancel(order, cancelled_by):
    order.cancel(cancelled_by=cancelled_by)
    current_domain.repository_for(Order).add(order)
    _release_reservation(order)
    logger.info("Order cancelled", order_id=str(order.id), cancelled_by=str(cancelled_by))


@storefront.command_handler(part_of=Order)
class OrderLifecycleHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        repo = current_domain.repository_for(Order)
        repo.lock(command.order_id)
        order = repo.fetch_visible(command.order_id, command.user_id, is_admin=command.is_admin)
        _cancel(order, cancelled_by=command.user_id)

    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        if not command.order_status and not command.payment_status:
            raise ValidationError({"order_status": ["Provide an order status or a payment status"]})

        repo = current_domain.repository_for(Order)
        repo.lock(command.order_id)
        order = repo.fetch(command.order_id)

        if command.payment_status:
            order.change_payment_status(command.payment_status)

        if command.order_status and OrderStatus(command.order_status) == OrderStatus.CANCELLED:
            _cancel(order, cancelled_by=command.updated_by)
            return

        if command.order_status:
            order.change_status(command.order_status)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            order_status=order.order_status,
            payment_status=order.payment_status,
            updated_by=str(command.updated_by),
        )
