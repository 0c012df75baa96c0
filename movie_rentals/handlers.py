"""Operation handlers, one per CLI command.

Each handler takes the store handle first, validates its arguments before
touching the database, prints human-readable status lines, and returns True
when the operation changed or read data. Store failures are logged and end
the current operation only.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Dict, List, Optional

import psycopg

from movie_rentals import mock_data
from movie_rentals.confirm import DeleteConfirmation
from movie_rentals.validation import (
    is_utf8_text,
    is_valid_email,
    parse_customer_id,
    parse_release_year,
)

logger = logging.getLogger(__name__)


def _error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def format_row(row: Dict[str, Any]) -> str:
    """One-line `column=value` rendering of a result row."""
    return ", ".join(f"{key}={value}" for key, value in row.items())


# -- writes ----------------------------------------------------------------

def insert_movie(store, title: str, year, genre: str, director: str) -> bool:
    """Insert a movie unless the year is out of range or the title exists."""
    release_year = parse_release_year(year)
    if release_year is None:
        _error("Invalid release year.")
        return False
    if not all(is_utf8_text(text) for text in (title, genre, director)):
        _error("Arguments must be valid UTF-8 text.")
        return False
    try:
        row = store.insert_movie(title, release_year, genre, director)
    except psycopg.Error as exc:
        logger.error("Error inserting movie: %s", exc)
        return False
    if row is None:
        print("Movie already exists in the database.")
        return False
    print(f"Movie inserted: {format_row(row)}")
    return True


def update_customer_email(store, customer_id, new_email: str) -> bool:
    """Change a customer's email after checking its syntax."""
    cid = parse_customer_id(customer_id)
    if cid is None:
        _error("Invalid customer id.")
        return False
    if not is_valid_email(new_email):
        _error("Invalid email address.")
        return False
    try:
        row = store.update_customer_email(cid, new_email)
    except psycopg.Error as exc:
        logger.error("Error updating customer: %s", exc)
        return False
    if row is None:
        print("Customer not found.")
        return False
    print(f"Customer updated: {format_row(row)}")
    return True


def remove_customer(store, customer_id) -> bool:
    """Remove a customer together with their rental history."""
    cid = parse_customer_id(customer_id)
    if cid is None:
        _error("Invalid customer id.")
        return False
    try:
        removed, rentals = store.remove_customer(cid)
    except psycopg.Error as exc:
        logger.error("Error removing customer: %s", exc)
        return False
    if not removed:
        print("Customer not found.")
        return False
    logger.info("removed customer %s and %d rental(s)", cid, rentals)
    print(f"Customer removed. ID: {cid}")
    return True


def insert_mock_data(store) -> bool:
    try:
        movies, customers, rentals = store.insert_mock_data(
            mock_data.MOVIES, mock_data.CUSTOMERS, mock_data.RENTALS
        )
    except psycopg.Error as exc:
        logger.error("Error inserting mock data: %s", exc)
        return False
    logger.info("mock rows inserted: movies=%d customers=%d rentals=%d", movies, customers, rentals)
    print("Mock data inserted successfully")
    return True


def delete_all_data(store, ask: Optional[Callable[[str], str]] = None) -> bool:
    """Drop every table once both confirmation answers are given.

    `ask` receives the prompt and returns the user's reply; end of input
    counts as declining.
    """
    ask = ask or input
    confirmation = DeleteConfirmation()
    while not confirmation.done:
        try:
            reply = ask(confirmation.prompt)
        except EOFError:
            reply = ""
        confirmation.answer(reply)

    if not confirmation.confirmed:
        print("Operation cancelled.")
        return False
    try:
        store.drop_all_tables()
    except psycopg.Error as exc:
        logger.error("Error deleting all data: %s", exc)
        return False
    print("All tables dropped successfully. Database cleared.")
    return True


# -- reads -----------------------------------------------------------------

def _display(fetch: Callable[[], List[Dict[str, Any]]], entity: str) -> bool:
    try:
        rows = fetch()
    except psycopg.Error as exc:
        logger.error("Error displaying %s: %s", entity, exc)
        return False
    if not rows:
        print(f"No {entity} in the database.")
        return False
    for row in rows:
        print(format_row(row))
    return True


def display_movies(store) -> bool:
    return _display(store.list_movies, "movies")


def display_customers(store) -> bool:
    return _display(store.list_customers, "customers")


def display_rentals(store) -> bool:
    return _display(store.list_rentals, "rentals")
