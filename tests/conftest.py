# -*- coding: utf-8 -*-
"""
conftest.py - shared fakes for the movie rental tests.

Purpose:
  - Replace the real PostgreSQL pool with a tiny fake (no network, no tables)
    so the data-access layer can be checked by the SQL it sends
  - Provide an in-memory stand-in for RentalStore so handlers and the
    dispatcher can be exercised end to end
  - Keep DATABASE_URL / MRS_LOG_LEVEL from the developer's shell out of tests
"""

import contextlib
import datetime as dt

import psycopg
import pytest

from movie_rentals.dal.schema import TABLES
from movie_rentals.dal.store import RentalStore


# =============================================================================
# 1) Fake psycopg objects: record SQL, serve queued results
# =============================================================================
class FakeCursor:
    """
    Minimal cursor:
      - records SQL you "execute"
      - returns values you preloaded into queues for fetchone()/fetchall()
      - rowcount comes from a queue too (default 0)
    """

    def __init__(self):
        self.executed = []  # list of (sql, params) the code ran
        self.row_factories = []  # row_factory passed to each cursor() call
        self._one_queue = []
        self._all_queue = []
        self._rowcount_queue = []
        self.rowcount = 0

    # ---- test helpers ----
    def push_one(self, value):
        """Next call to fetchone() will return this value."""
        self._one_queue.append(value)

    def push_all(self, rows):
        """Next call to fetchall() will return this list of rows."""
        self._all_queue.append(rows)

    def push_rowcount(self, n):
        """Next execute()/executemany() will leave rowcount = n."""
        self._rowcount_queue.append(n)

    # ---- what the app code will call ----
    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        self.rowcount = self._rowcount_queue.pop(0) if self._rowcount_queue else 0

    def executemany(self, sql, seq):
        self.execute(sql, list(seq))

    def fetchone(self):
        return self._one_queue.pop(0) if self._one_queue else None

    def fetchall(self):
        return self._all_queue.pop(0) if self._all_queue else []

    def __enter__(self):
        return self

    def __exit__(self, *_):
        return False


class FakeConnection:
    """Connection that always hands out the same FakeCursor."""

    def __init__(self, cursor):
        self._cursor = cursor
        self.commits = 0
        self.transactions = 0

    def cursor(self, row_factory=None):
        self._cursor.row_factories.append(row_factory)
        return self._cursor

    def commit(self):
        self.commits += 1

    @contextlib.contextmanager
    def transaction(self):
        self.transactions += 1
        yield

    def __enter__(self):
        return self

    def __exit__(self, *_):
        return False


class FakePool:
    """Stands in for psycopg_pool.ConnectionPool."""

    def __init__(self, conninfo="", **kwargs):
        self.conninfo = conninfo
        self.kwargs = kwargs
        self.cur = FakeCursor()
        self.conn = FakeConnection(self.cur)
        self.closed = False

    def connection(self):
        return self.conn

    def close(self):
        self.closed = True


@pytest.fixture
def fake_pool():
    return FakePool("postgresql://u@localhost:5432/db")


@pytest.fixture
def fake_db(fake_pool):
    """
    RentalStore over the fake pool. Usage in tests:
        store, cur = fake_db
        cur.push_one({"movie_id": 1})   # next fetchone()
        cur.push_rowcount(3)            # rowcount after the next execute
    """
    return RentalStore(fake_pool), fake_pool.cur


# =============================================================================
# 2) In-memory store with the same surface as RentalStore
# =============================================================================
class MemoryStore:
    """Dict-backed tables that honour the same constraints the schema declares."""

    def __init__(self):
        self.tables = {}  # name -> list of row dicts; absent key == table missing
        self._ids = {}
        self.calls = []  # names of store methods invoked, for "no write" checks
        self.fail_with = None  # set to a psycopg.Error to make the next call raise

    # ---- helpers ----
    def _enter(self, name):
        self.calls.append(name)
        if self.fail_with is not None:
            exc, self.fail_with = self.fail_with, None
            raise exc

    def _table(self, name):
        if name not in self.tables:
            raise psycopg.ProgrammingError(f'relation "{name}" does not exist')
        return self.tables[name]

    def _next_id(self, name):
        self._ids[name] = self._ids.get(name, 0) + 1
        return self._ids[name]

    def _add_movie(self, title, year, genre, director):
        movies = self._table("movies")
        if any(m["title"] == title for m in movies):
            return None
        row = {"movie_id": self._next_id("movies"), "title": title, "release_year": year,
               "genre": genre, "director_name": director}
        movies.append(row)
        return row

    def _add_customer(self, first, last, email, phone):
        customers = self._table("customers")
        if any(c["email"] == email for c in customers):
            raise psycopg.IntegrityError("duplicate key value violates unique constraint")
        row = {"customer_id": self._next_id("customers"), "first_name": first,
               "last_name": last, "email": email, "phone_number": phone}
        customers.append(row)
        return row

    def _add_rental(self, customer_id, movie_id, rental_date, return_date):
        if not any(c["customer_id"] == customer_id for c in self._table("customers")):
            raise psycopg.IntegrityError("violates foreign key constraint (customer)")
        if not any(m["movie_id"] == movie_id for m in self._table("movies")):
            raise psycopg.IntegrityError("violates foreign key constraint (movie)")
        row = {"rental_id": self._next_id("rentals"), "customer_id": customer_id,
               "movie_id": movie_id, "rental_date": rental_date, "return_date": return_date}
        self._table("rentals").append(row)
        return row

    # ---- RentalStore surface ----
    def table_exists(self, name):
        self._enter("table_exists")
        return name in self.tables

    def create_table(self, name):
        self._enter("create_table")
        if name in self.tables:
            raise psycopg.ProgrammingError(f'relation "{name}" already exists')
        self.tables[name] = []
        self._ids[name] = 0

    def drop_all_tables(self):
        self._enter("drop_all_tables")
        self.tables.clear()
        self._ids.clear()

    def insert_movie(self, title, year, genre, director):
        self._enter("insert_movie")
        return self._add_movie(title, year, genre, director)

    def update_customer_email(self, customer_id, email):
        self._enter("update_customer_email")
        customers = self._table("customers")
        for row in customers:
            if row["customer_id"] == customer_id:
                if any(c["email"] == email and c is not row for c in customers):
                    raise psycopg.IntegrityError("duplicate key value violates unique constraint")
                row["email"] = email
                return dict(row)
        return None

    def remove_customer(self, customer_id):
        self._enter("remove_customer")
        rentals = self._table("rentals")
        kept = [r for r in rentals if r["customer_id"] != customer_id]
        deleted = len(rentals) - len(kept)
        customers = self._table("customers")
        remaining = [c for c in customers if c["customer_id"] != customer_id]
        removed = len(remaining) != len(customers)
        self.tables["rentals"] = kept
        self.tables["customers"] = remaining
        return removed, deleted

    def insert_mock_data(self, movies, customers, rentals):
        self._enter("insert_mock_data")
        snapshot = {k: [dict(r) for r in v] for k, v in self.tables.items()}
        ids = dict(self._ids)
        try:
            m = sum(1 for row in movies if self._add_movie(*row) is not None)
            for row in customers:
                self._add_customer(*row)
            for row in rentals:
                self._add_rental(*row)
        except psycopg.Error:
            self.tables, self._ids = snapshot, ids  # rollback
            raise
        return m, len(customers), len(rentals)

    def list_movies(self):
        self._enter("list_movies")
        return [dict(r) for r in self._table("movies")]

    def list_customers(self):
        self._enter("list_customers")
        return [dict(r) for r in self._table("customers")]

    def list_rentals(self):
        self._enter("list_rentals")
        return [dict(r) for r in self._table("rentals")]

    def count_rows(self, name):
        self._enter("count_rows")
        return len(self._table(name))

    # ---- test helpers ----
    def writes(self):
        reads = {"table_exists", "list_movies", "list_customers", "list_rentals", "count_rows"}
        return [c for c in self.calls if c not in reads]


@pytest.fixture
def memory_store():
    """Fresh in-memory store with the three tables already created."""
    store = MemoryStore()
    for name in TABLES:
        store.tables[name] = []
    return store


@pytest.fixture
def empty_store():
    """In-memory store with no tables at all."""
    return MemoryStore()


@pytest.fixture
def seeded_store(memory_store):
    """Two customers (one with three rentals) and two movies."""
    s = memory_store
    s._add_movie("Alien", 1979, "Horror", "Ridley Scott")
    s._add_movie("Heat", 1995, "Crime", "Michael Mann")
    s._add_customer("Ann", "Archer", "ann@example.com", "555-0001")
    s._add_customer("Ben", "Baker", "ben@example.com", "555-0002")
    for movie_id in (1, 2, 1):
        s._add_rental(1, movie_id, dt.date(2024, 1, 1), dt.date(2024, 1, 8))
    s.calls.clear()
    return s


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's DATABASE_URL and log level out of tests."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("MRS_LOG_LEVEL", raising=False)
