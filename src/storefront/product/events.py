"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductUpdated:
    """An admin changed a product's details, price or stock."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    name = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Stock was taken out for a newly placed order."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    reserved_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockRestored:
    """Stock held by a cancelled order was put back."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    restored_at = DateTime(required=True)
