# coverage: ignore file
"""Tiny DB visibility checker.

Prints:
- config source (env vs ini) and masked URL,
- current_database, current_user, current_schema,
- whether each of movies/customers/rentals exists, with its row count.
"""

import logging
import sys

import psycopg

from movie_rentals.config import database_url_and_source, masked_url
from movie_rentals.dal.pool import close_pool, create_pool
from movie_rentals.dal.schema import TABLES
from movie_rentals.dal.store import RentalStore

logger = logging.getLogger(__name__)


def check(store) -> None:
    # session identity first, then per-table visibility
    with store.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT current_database(), current_user, current_schema()")
            db, user, schema = cur.fetchone()
    print(f"db={db} user={user} schema={schema}")

    for name in TABLES:
        exists = store.table_exists(name)
        rows = store.count_rows(name) if exists else None
        print(f"{name}_exists={exists}" + (f" rows={rows}" if rows is not None else ""))


def main() -> int:
    try:
        url, src = database_url_and_source()
    except RuntimeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 0
    print(f"config_source={src}")
    print(f"url={masked_url(url)}")

    pool = create_pool(url)  # reuse the URL already resolved above
    try:
        check(RentalStore(pool))
    except psycopg.Error as exc:
        logger.error("Error checking database: %s", exc)
    finally:
        close_pool(pool)
    return 0


if __name__ == "__main__":
    sys.exit(main())
