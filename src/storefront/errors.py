"""Error taxonomy for the storefront.

Every failure a caller can act on is a ``StorefrontError`` carrying an
``ErrorKind``. Services raise them; only the API layer turns a kind into an
HTTP status code.
"""

from enum import Enum


class ErrorKind(Enum):
    PRODUCT_NOT_FOUND = "product_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    ORDER_NOT_FOUND = "order_not_found"
    INVALID_TRANSITION = "invalid_transition"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"


class StorefrontError(Exception):
    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProductNotFound(StorefrontError):
    kind = ErrorKind.PRODUCT_NOT_FOUND

    def __init__(self, product_id):
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = str(product_id)


class InsufficientStock(StorefrontError):
    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_name: str, available: int):
        super().__init__(f"Insufficient stock for {product_name}. Available: {available}")
        self.product_name = product_name
        self.available = available


class OrderNotFound(StorefrontError):
    kind = ErrorKind.ORDER_NOT_FOUND

    def __init__(self, order_id):
        super().__init__("Order not found")
        self.order_id = str(order_id)


class InvalidTransition(StorefrontError):
    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, message: str, current_status: str, target_status: str):
        super().__init__(message)
        self.current_status = current_status
        self.target_status = target_status


class Unauthorized(StorefrontError):
    """The caller is not authenticated, or lacks the role an action needs."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Access denied. Authentication required.", forbidden: bool = False):
        super().__init__(message)
        if forbidden:
            self.kind = ErrorKind.FORBIDDEN
