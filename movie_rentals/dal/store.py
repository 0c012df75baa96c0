"""Data-access layer: every SQL statement the CLI issues lives here.

RentalStore wraps a psycopg_pool ConnectionPool. Each method borrows one
pooled connection for the duration of the call; the pool commits on a clean
exit and rolls back when an exception escapes the block.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from psycopg.rows import dict_row

from movie_rentals.dal.schema import DROP_ALL_SQL, SCHEMA_SQL, TABLE_EXISTS_SQL, TABLES

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

INSERT_MOVIE_SQL = """
INSERT INTO movies (title, release_year, genre, director_name)
VALUES (%s, %s, %s, %s)
ON CONFLICT (title) DO NOTHING
RETURNING *;
"""

UPDATE_EMAIL_SQL = """
UPDATE customers
   SET email = %s
 WHERE customer_id = %s
RETURNING *;
"""

DELETE_RENTALS_SQL = "DELETE FROM rentals WHERE customer_id = %s;"
DELETE_CUSTOMER_SQL = "DELETE FROM customers WHERE customer_id = %s;"

# table names come from TABLES only, never from user input
SELECT_ALL_SQL = {name: f"SELECT * FROM {name};" for name in TABLES}
COUNT_SQL = {name: f"SELECT COUNT(*) AS n FROM {name};" for name in TABLES}

SEED_MOVIE_SQL = """
INSERT INTO movies (title, release_year, genre, director_name)
VALUES (%s, %s, %s, %s)
ON CONFLICT (title) DO NOTHING;
"""
SEED_CUSTOMER_SQL = """
INSERT INTO customers (first_name, last_name, email, phone_number)
VALUES (%s, %s, %s, %s);
"""
SEED_RENTAL_SQL = """
INSERT INTO rentals (customer_id, movie_id, rental_date, return_date)
VALUES (%s, %s, %s, %s);
"""


class RentalStore:
    """Store handle passed to every operation handler."""

    def __init__(self, pool):
        self.pool = pool

    def connection(self):
        """Return a pooled connection; auto-returns to the pool on context exit."""
        return self.pool.connection()

    # -- schema ------------------------------------------------------------

    def table_exists(self, name: str) -> bool:
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(TABLE_EXISTS_SQL, (name,))
                row = cur.fetchone()
                return bool(row[0]) if row else False

    def create_table(self, name: str) -> None:
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL[name])
            conn.commit()
        logger.info("created table %s", name)

    def drop_all_tables(self) -> None:
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(DROP_ALL_SQL)
            conn.commit()
        logger.info("dropped tables %s", ", ".join(TABLES))

    # -- writes --------------------------------------------------------------

    def insert_movie(self, title: str, year: int, genre: str, director: str) -> Optional[Row]:
        """Insert a movie; return the new row, or None when the title already exists."""
        with self.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(INSERT_MOVIE_SQL, (title, year, genre, director))
                row = cur.fetchone()
            conn.commit()
        return row

    def update_customer_email(self, customer_id: int, email: str) -> Optional[Row]:
        """Set a customer's email; return the updated row, or None if no such id."""
        with self.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(UPDATE_EMAIL_SQL, (email, customer_id))
                row = cur.fetchone()
            conn.commit()
        return row

    def remove_customer(self, customer_id: int) -> Tuple[bool, int]:
        """Delete a customer's rentals, then the customer, in one transaction.

        Returns (customer_removed, rentals_deleted); rentals_deleted may be 0
        for a customer who never rented anything.
        """
        with self.connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.execute(DELETE_RENTALS_SQL, (customer_id,))
                    rentals = cur.rowcount or 0
                    cur.execute(DELETE_CUSTOMER_SQL, (customer_id,))
                    removed = (cur.rowcount or 0) > 0
        return removed, rentals

    def insert_mock_data(
        self,
        movies: Sequence[tuple],
        customers: Sequence[tuple],
        rentals: Sequence[tuple],
    ) -> Tuple[int, int, int]:
        """Insert the seed batch atomically; return rows inserted per table."""
        counts = []
        with self.connection() as conn:
            with conn.transaction():
                with conn.cursor() as cur:
                    for sql, rows in (
                        (SEED_MOVIE_SQL, movies),
                        (SEED_CUSTOMER_SQL, customers),
                        (SEED_RENTAL_SQL, rentals),
                    ):
                        cur.executemany(sql, rows)
                        counts.append(cur.rowcount if cur.rowcount is not None else 0)
        return counts[0], counts[1], counts[2]

    # -- reads ---------------------------------------------------------------

    def list_rows(self, table: str) -> List[Row]:
        """Return every row of table in storage order."""
        with self.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(SELECT_ALL_SQL[table])
                return cur.fetchall()

    def list_movies(self) -> List[Row]:
        return self.list_rows("movies")

    def list_customers(self) -> List[Row]:
        return self.list_rows("customers")

    def list_rentals(self) -> List[Row]:
        return self.list_rows("rentals")

    def count_rows(self, table: str) -> int:
        """Return the number of rows in table."""
        with self.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(COUNT_SQL[table])
                return int(cur.fetchone()["n"])
