"""Serialized processing for commands that touch product stock.

Two layers keep stock check-and-write pairs from interleaving:

- In-process, ``process_with_retry`` runs one stock command at a time, from
  loading the aggregates until the Unit of Work commits. This is the only
  guard for the memory provider.
- On PostgreSQL, handlers take transaction-scoped record locks through
  ``ProductRepository.lock`` / ``OrderRepository.lock`` before loading, so
  workers in other processes wait for the commit and then see fresh stock.

A save from a stale copy that slips past both (a write made outside
``process_with_retry``, for instance) is still rejected by the version check with
``ExpectedVersionError``; the command is then processed again from scratch.
"""

import threading

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from storefront.config import settings

logger = structlog.get_logger(__name__)

_stock_writer = threading.RLock()


def process_with_retry(command, attempts: int | None = None):
    """Process ``command`` synchronously, re-running it on version conflicts.

    At least one attempt is always made.
    """
    attempts = max(attempts if attempts is not None else settings.stock_conflict_retries, 1)
    for attempt in range(1, attempts + 1):
        try:
            with _stock_writer:
                return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            logger.warning(
                "Version conflict while processing command",
                command=command.__class__.__name__,
                attempt=attempt,
                attempts=attempts,
                error=str(exc),
            )
            if attempt == attempts:
                raise
