"""psycopg3 connection pool construction and clean shutdown.

The pool is built once per process run by the CLI entry point and handed to
the store; nothing here keeps module-level state.
"""

# stdlib + third-party imports
from typing import Optional
from psycopg_pool import ConnectionPool

# local imports
from movie_rentals.config import database_url

POOL_MAX_SIZE = 4  # one operation at a time per run
POOL_TIMEOUT = 5.0  # seconds to wait for a connection before giving up


def create_pool(url: Optional[str] = None) -> ConnectionPool:
    """Return a new ConnectionPool for url (defaults to the configured URL)."""
    # min_size=0 so no connection is opened until the first operation
    return ConnectionPool(url or database_url(), min_size=0, max_size=POOL_MAX_SIZE,
                          timeout=POOL_TIMEOUT, open=True)


def close_pool(pool: Optional[ConnectionPool]) -> None:
    """Close the pool and stop worker threads (safe to call with None)."""
    # explicit shutdown to avoid "couldn't stop thread ..." messages
    if pool is not None:
        pool.close()
