"""Tests for the listing query value objects."""

import pytest
from protean.exceptions import ValidationError
from storefront.order.queries import OrderQuery
from storefront.product.queries import ProductQuery
from storefront.shared.pagination import Page, order_by_clause


class TestProductQuery:
    def test_defaults(self):
        query = ProductQuery()
        assert query.page == 1
        assert query.limit == 12
        assert query.sort_by == "created_at"
        assert query.sort_order == "desc"

    def test_min_price_above_max_rejected(self):
        with pytest.raises(ValidationError) as exc:
            ProductQuery(min_price=10.0, max_price=5.0)
        assert "min_price" in exc.value.messages

    def test_limit_above_hundred_rejected(self):
        with pytest.raises(ValidationError):
            ProductQuery(limit=101)

    def test_page_zero_rejected(self):
        with pytest.raises(ValidationError):
            ProductQuery(page=0)

    def test_unknown_sort_key_rejected(self):
        with pytest.raises(ValidationError):
            ProductQuery(sort_by="popularity")

    def test_blank_search_rejected(self):
        with pytest.raises(ValidationError):
            ProductQuery(search="   ")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            ProductQuery(category="toys")


class TestOrderQuery:
    def test_defaults(self):
        query = OrderQuery()
        assert query.limit == 10
        assert query.sort_by == "created_at"

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            OrderQuery(order_status="lost")

    def test_sort_by_total_amount(self):
        assert OrderQuery(sort_by="total_amount", sort_order="asc").sort_by == "total_amount"


class TestPagination:
    def test_order_by_clause(self):
        assert order_by_clause("price", "asc") == "price"
        assert order_by_clause("price", "desc") == "-price"

    def test_page_metadata(self):
        page = Page(items=[], page=2, limit=10, total=25)
        assert page.total_pages == 3
        assert page.has_next
        assert page.has_prev

    def test_last_page(self):
        page = Page(items=[], page=3, limit=10, total=25)
        assert not page.has_next

    def test_empty_result(self):
        page = Page(items=[], page=1, limit=10, total=0)
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_prev
