"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and its stock was reserved."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_amount = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled by its owner or an admin."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_by = Identifier(required=True)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to a new fulfilment status."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class PaymentStatusChanged:
    """An admin recorded a new payment status."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
