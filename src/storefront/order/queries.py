"""Admin order listing parameters."""

from enum import Enum

from protean.fields import Integer, String

from storefront.domain import storefront
from storefront.order.order import OrderStatus, PaymentStatus
from storefront.shared.pagination import SortOrder


class OrderSortKey(Enum):
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TOTAL_AMOUNT = "total_amount"


@storefront.value_object
class OrderQuery:
    """Validated filter, sort and page settings for the admin order listing."""

    order_status = String(choices=OrderStatus)
    payment_status = String(choices=PaymentStatus)
    page = Integer(min_value=1, default=1)
    limit = Integer(min_value=1, max_value=100, default=10)
    sort_by = String(choices=OrderSortKey, default=OrderSortKey.CREATED_AT.value)
    sort_order = String(choices=SortOrder, default=SortOrder.DESC.value)
