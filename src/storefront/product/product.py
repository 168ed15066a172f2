"""Product aggregate root.

Stock is the only field touched outside admin edits: order placement
reserves it and cancellation restores it. Both go through ``reserve_stock`` /
``restore_stock`` on an aggregate loaded after ``ProductRepository.lock``,
inside a command run by ``process_with_retry``, so no other writer can change
the stock between the check and the commit.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Integer, String, Text

from storefront.domain import storefront
from storefront.errors import InsufficientStock

_URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


class ProductCategory(Enum):
    FRUITS = "fruits"
    VEGETABLES = "vegetables"
    DAIRY = "dairy"
    MEAT = "meat"
    BAKERY = "bakery"
    BEVERAGES = "beverages"
    SNACKS = "snacks"
    FROZEN = "frozen"
    PANTRY = "pantry"
    READY_MEALS = "ready-meals"


@storefront.aggregate
class Product:
    name = String(required=True, min_length=2, max_length=100)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, choices=ProductCategory)
    stock = Integer(required=True, min_value=0)
    image_url = String(required=True, max_length=500)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def description_length_must_be_valid(self):
        if self.description is not None and not 10 <= len(self.description.strip()) <= 500:
            raise ValidationError({"description": ["Description must be between 10 and 500 characters"]})

    @invariant.post
    def image_url_must_be_valid(self):
        if self.image_url and not _URL_PATTERN.match(self.image_url):
            raise ValidationError({"image_url": ["Please provide a valid image URL"]})

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def create(cls, name, description, price, category, stock, image_url):
        from storefront.product.events import ProductCreated

        now = datetime.now(UTC)
        product = cls(
            name=name.strip(),
            description=description.strip(),
            price=price,
            category=category,
            stock=stock,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                category=product.category,
                price=product.price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category=None, stock=None, image_url=None):
        """Apply an admin edit. Fields left as ``None`` keep their value."""
        from storefront.product.events import ProductUpdated

        if name is not None:
            self.name = name.strip()
        if description is not None:
            self.description = description.strip()
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if stock is not None:
            self.stock = stock
        if image_url is not None:
            self.image_url = image_url

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                category=self.category,
                price=self.price,
                stock=self.stock,
                updated_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Stock reservation
    # -------------------------------------------------------------------
    def reserve_stock(self, quantity, order_id):
        """Take ``quantity`` units out of stock for an order.

        Raises ``InsufficientStock`` without touching the aggregate when the
        current stock cannot cover the request.
        """
        from storefront.product.events import StockReserved

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if self.stock < quantity:
            raise InsufficientStock(self.name, self.stock)

        previous_stock = self.stock
        self.stock = previous_stock - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                reserved_at=self.updated_at,
            )
        )

    def restore_stock(self, quantity, order_id):
        """Return ``quantity`` units reserved by a cancelled order."""
        from storefront.product.events import StockRestored

        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous_stock = self.stock
        self.stock = previous_stock + quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockRestored(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                restored_at=self.updated_at,
            )
        )
