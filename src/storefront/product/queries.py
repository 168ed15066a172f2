"""Catalogue listing parameters."""

from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String

from storefront.domain import storefront
from storefront.product.product import ProductCategory
from storefront.shared.pagination import SortOrder


class ProductSortKey(Enum):
    CREATED_AT = "created_at"
    PRICE = "price"
    NAME = "name"
    STOCK = "stock"


@storefront.value_object
class ProductQuery:
    """Validated filter, sort and page settings for a catalogue listing."""

    category = String(choices=ProductCategory)
    search = String(max_length=100)
    min_price = Float(min_value=0.0)
    max_price = Float(min_value=0.0)
    page = Integer(min_value=1, default=1)
    limit = Integer(min_value=1, max_value=100, default=12)
    sort_by = String(choices=ProductSortKey, default=ProductSortKey.CREATED_AT.value)
    sort_order = String(choices=SortOrder, default=SortOrder.DESC.value)

    @invariant.post
    def price_range_must_be_ordered(self):
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValidationError({"min_price": ["Minimum price cannot exceed maximum price"]})

    @invariant.post
    def search_must_not_be_blank(self):
        if self.search is not None and not self.search.strip():
            raise ValidationError({"search": ["Search term cannot be empty"]})
