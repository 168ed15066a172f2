"""Pagination helpers shared by the product and order queries."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Page size used when walking a whole collection
_SCAN_BATCH = 100


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


def order_by_clause(sort_by: str, sort_order: str) -> str:
    """Translate a sort key and direction into a Protean ``order_by`` value."""
    return sort_by if SortOrder(sort_order) == SortOrder.ASC else f"-{sort_by}"


@dataclass
class Page:
    items: list[Any] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def paginate(queryset, page: int, limit: int) -> Page:
    """Apply offset/limit to a queryset and wrap the result in a ``Page``."""
    result = queryset.offset((page - 1) * limit).limit(limit).all()
    return Page(items=list(result.items), page=page, limit=limit, total=result.total)


def scan(queryset):
    """Yield every record matched by a queryset, one batch at a time."""
    offset = 0
    while True:
        result = queryset.offset(offset).limit(_SCAN_BATCH).all()
        yield from result.items
        offset += _SCAN_BATCH
        if not result.items or offset >= result.total:
            break
