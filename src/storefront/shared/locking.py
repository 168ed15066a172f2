"""Transaction-scoped record locks for SQL-backed repositories.

On PostgreSQL a repository can take advisory locks inside the current Unit
of Work. They are held until the transaction commits or rolls back, so a
second transaction touching the same records waits, then reads the
committed state. Other providers are serialized in-process by
``storefront.utils.concurrency.process_with_retry``.
"""

from protean.utils.globals import current_uow
from sqlalchemy import text

_ADVISORY_LOCK = text("SELECT pg_advisory_xact_lock(hashtext(:key))")


def lock_records(dao, keys) -> None:
    """Block until the current transaction holds a lock on every key."""
    if dao.provider.conn_info["provider"] != "postgresql" or not current_uow:
        return

    session = current_uow.get_session(dao.provider.name)
    # Sorted, so two transactions never wait on each other in opposite order
    for key in sorted(set(keys)):
        session.execute(_ADVISORY_LOCK, {"key": key})
