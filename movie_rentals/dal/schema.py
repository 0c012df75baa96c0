"""DDL for the movies, customers and rentals tables.

- Tables are created only when missing from the current schema (idempotent).
- Creation follows TABLES order so rentals' foreign keys always resolve.
"""

from __future__ import annotations

from typing import List

# canonical DDL, keyed by table name
SCHEMA_SQL = {
    "movies": """
CREATE TABLE movies (
  movie_id SERIAL PRIMARY KEY,
  title VARCHAR(255) UNIQUE NOT NULL,
  release_year INT CHECK (release_year >= 1800),
  genre VARCHAR(50) NOT NULL,
  director_name VARCHAR(100) NOT NULL
);
""",
    "customers": """
CREATE TABLE customers (
  customer_id SERIAL PRIMARY KEY,
  first_name VARCHAR(50) NOT NULL,
  last_name VARCHAR(50) NOT NULL,
  email VARCHAR(100) UNIQUE NOT NULL,
  phone_number TEXT NOT NULL
);
""",
    "rentals": """
CREATE TABLE rentals (
  rental_id SERIAL PRIMARY KEY,
  customer_id INT REFERENCES customers(customer_id),
  movie_id INT REFERENCES movies(movie_id),
  rental_date DATE NOT NULL,
  return_date DATE NOT NULL
);
""",
}

TABLES = ("movies", "customers", "rentals")

TABLE_EXISTS_SQL = """
SELECT EXISTS (
  SELECT 1
    FROM information_schema.tables
   WHERE table_schema = current_schema() AND table_name = %s
)
"""

# children first; CASCADE takes any other dependent constraint with it
DROP_ALL_SQL = "DROP TABLE IF EXISTS rentals, customers, movies CASCADE;"


def init_schema(store) -> List[str]:
    """Create whichever of the three tables are missing; return the names created.

    Prints a one-line confirmation only when at least one table was created.
    Existing tables and their rows are never touched.
    """
    created: List[str] = []
    for name in TABLES:
        if not store.table_exists(name):
            store.create_table(name)
            created.append(name)
    if created:
        print("Tables created successfully")
    return created
