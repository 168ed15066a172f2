"""Repository for the Order aggregate."""

from collections import Counter

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.errors import OrderNotFound
from storefront.order.order import Order
from storefront.shared.locking import lock_records
from storefront.shared.pagination import order_by_clause, paginate, scan


@storefront.repository(part_of=Order)
class OrderRepository:
    def fetch(self, order_id) -> Order:
        """Load an order or raise ``OrderNotFound``."""
        try:
            return self.get(str(order_id))
        except ObjectNotFoundError:
            raise OrderNotFound(order_id) from None

    def lock(self, order_id) -> None:
        """Hold the order until the current transaction ends."""
        lock_records(self._dao, [f"order:{order_id}"])

    def fetch_visible(self, order_id, user_id, is_admin=False) -> Order:
        """Load an order the principal may see.

        Someone else's order is reported as missing rather than forbidden.
        """
        order = self.fetch(order_id)
        if not is_admin and not order.owned_by(user_id):
            raise OrderNotFound(order_id)
        return order

    def for_user(self, user_id, page=1, limit=10):
        queryset = self._dao.query.filter(user_id=str(user_id)).order_by("-created_at")
        return paginate(queryset, page, limit)

    def search(self, query):
        """Return one page of orders matching an ``OrderQuery``."""
        queryset = self._dao.query
        if query.order_status:
            queryset = queryset.filter(order_status=query.order_status)
        if query.payment_status:
            queryset = queryset.filter(payment_status=query.payment_status)

        queryset = queryset.order_by(order_by_clause(query.sort_by, query.sort_order))
        return paginate(queryset, query.page, query.limit)

    def statistics(self) -> dict:
        """Order count, revenue and status breakdowns over every order."""
        total_orders = 0
        total_revenue = 0.0
        by_order_status = Counter()
        by_payment_status = Counter()

        for order in scan(self._dao.query.order_by("created_at")):
            total_orders += 1
            total_revenue += order.total_amount
            by_order_status[order.order_status] += 1
            by_payment_status[order.payment_status] += 1

        return {
            "total_orders": total_orders,
            "total_revenue": round(total_revenue, 2),
            "average_order_value": round(total_revenue / total_orders, 2) if total_orders else 0.0,
            "by_order_status": dict(by_order_status),
            "by_payment_status": dict(by_payment_status),
        }
