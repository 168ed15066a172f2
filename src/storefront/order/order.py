"""Order aggregate: placed orders and their lifecycle.

State Machine:
    PROCESSING → SHIPPED → DELIVERED
    PROCESSING / SHIPPED → CANCELLED
DELIVERED and CANCELLED are terminal. Line-item prices are captured when the
order is placed and never follow later catalogue price changes.
"""

import math
import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.errors import InvalidTransition
from storefront.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    PaymentStatusChanged,
)

_ZIP_CODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


_VALID_TRANSITIONS = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address captured when the order is placed."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=10)
    country = String(max_length=100, default="USA")

    @invariant.post
    def zip_code_must_be_valid(self):
        if self.zip_code and not _ZIP_CODE_PATTERN.match(self.zip_code):
            raise ValidationError({"zip_code": ["Please provide a valid zip code"]})

    @invariant.post
    def fields_must_not_be_blank(self):
        for field_name in ("street", "city", "state"):
            value = getattr(self, field_name)
            if value is not None and not value.strip():
                raise ValidationError({field_name: [f"{field_name.capitalize()} is required"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line item: product reference, quantity and the unit price paid."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)

    @property
    def subtotal(self):
        return self.price * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    shipping_address = ValueObject(ShippingAddress, required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_line_items(self):
        if not self.items:
            return
        expected = sum(item.subtotal for item in self.items)
        if not math.isclose(self.total_amount, expected, abs_tol=1e-9):
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount} does not match line items ({expected})"]}
            )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, items_data, shipping_address):
        """Create a new order in ``processing`` / ``pending`` state.

        Args:
            user_id: The principal placing the order.
            items_data: List of dicts with product_id, quantity and price,
                        where price is the product's price right now.
            shipping_address: A ``ShippingAddress`` value object.
        """
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})

        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=str(item["product_id"]),
                quantity=item["quantity"],
                price=item["price"],
            )
            for item in items_data
        ]

        order = cls(
            user_id=str(user_id),
            items=items,
            total_amount=sum(item.subtotal for item in items),
            payment_status=PaymentStatus.PENDING.value,
            order_status=OrderStatus.PROCESSING.value,
            shipping_address=shipping_address,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(items),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    def cancel(self, cancelled_by):
        """Cancel the order. The caller must release its stock reservation."""
        current = OrderStatus(self.order_status)
        if OrderStatus.CANCELLED not in _VALID_TRANSITIONS[current]:
            message = (
                "Order is already cancelled"
                if current == OrderStatus.CANCELLED
                else f"Cannot cancel a {current.value} order"
            )
            raise InvalidTransition(message, current.value, OrderStatus.CANCELLED.value)

        now = datetime.now(UTC)
        self.order_status = OrderStatus.CANCELLED.value
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=current.value,
                cancelled_by=str(cancelled_by),
                cancelled_at=now,
            )
        )

    def change_status(self, target_status):
        """Administrative overwrite of the fulfilment status.

        Shipped and delivered are accepted from any live state; a cancelled
        order has already released its stock and cannot be revived.
        Cancellation goes through ``cancel``.
        """
        current = OrderStatus(self.order_status)
        target = OrderStatus(target_status)

        if target == OrderStatus.CANCELLED:
            raise InvalidTransition("Use cancellation to cancel an order", current.value, target.value)
        if current == OrderStatus.CANCELLED:
            raise InvalidTransition(
                f"Cannot move a cancelled order to {target.value}", current.value, target.value
            )
        if current == target:
            return

        now = datetime.now(UTC)
        self.order_status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

    def change_payment_status(self, target_status):
        current = PaymentStatus(self.payment_status)
        target = PaymentStatus(target_status)
        if current == target:
            return

        now = datetime.now(UTC)
        self.payment_status = target.value
        self.updated_at = now

        self.raise_(
            PaymentStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )

