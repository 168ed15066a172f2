"""Storefront domain: product catalogue and orders.

Both aggregates live in one domain so that a single Unit of Work spans an
order insert and every stock update it causes.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

configure_logging(log_file_prefix="storefront")

storefront = Domain(name="storefront")
