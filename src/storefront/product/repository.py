"""Repository for the Product aggregate."""

from collections import defaultdict

from protean.exceptions import ObjectNotFoundError
from protean.utils.query import Q

from storefront.domain import storefront
from storefront.errors import ProductNotFound
from storefront.product.product import Product
from storefront.shared.locking import lock_records
from storefront.shared.pagination import order_by_clause, paginate, scan


@storefront.repository(part_of=Product)
class ProductRepository:
    def fetch(self, product_id) -> Product:
        """Load a product or raise ``ProductNotFound``."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            raise ProductNotFound(product_id) from None

    def lock(self, product_ids) -> None:
        """Hold the given products until the current transaction ends."""
        lock_records(self._dao, [f"product:{product_id}" for product_id in product_ids])

    def remove(self, product) -> None:
        self._dao.delete(product)

    def search(self, query):
        """Return one page of products matching a ``ProductQuery``."""
        queryset = self._dao.query
        if query.category:
            queryset = queryset.filter(category=query.category)
        if query.search:
            term = query.search.strip()
            queryset = queryset.filter(Q(name__icontains=term) | Q(description__icontains=term))
        if query.min_price is not None:
            queryset = queryset.filter(price__gte=query.min_price)
        if query.max_price is not None:
            queryset = queryset.filter(price__lte=query.max_price)

        queryset = queryset.order_by(order_by_clause(query.sort_by, query.sort_order))
        return paginate(queryset, query.page, query.limit)

    def by_category(self, category, page=1, limit=12):
        queryset = self._dao.query.filter(category=category).order_by("-created_at")
        return paginate(queryset, page, limit)

    def category_summary(self):
        """Count and average price per category, sorted by category name."""
        totals = defaultdict(lambda: {"count": 0, "price_sum": 0.0})
        for product in scan(self._dao.query.order_by("created_at")):
            bucket = totals[product.category]
            bucket["count"] += 1
            bucket["price_sum"] += product.price

        return [
            {
                "category": category,
                "count": bucket["count"],
                "average_price": round(bucket["price_sum"] / bucket["count"], 2),
            }
            for category, bucket in sorted(totals.items())
        ]

    def count(self) -> int:
        return self._dao.query.all().total
