"""Command-line entry point for the movie rental database.

Usage:
  mrs insert <title> <year> <genre> <director>
  mrs update <customer_id> <new_email>
  mrs remove <customer_id>
  mrs showMovies | showCustomers | showRentals
  mrs insertMock
  mrs deleteAll

Bad or missing arguments print the usage text; the exit status is 0 on every
path, including store failures (those are logged).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

import psycopg

from movie_rentals import config, handlers
from movie_rentals.dal.pool import close_pool, create_pool
from movie_rentals.dal.schema import init_schema
from movie_rentals.dal.store import RentalStore

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class Command(NamedTuple):
    args: Tuple[str, ...]
    handler: Callable[..., bool]
    help: str


# fixed command table; argument names double as argparse dests
COMMANDS: Dict[str, Command] = {
    "insert": Command(("title", "year", "genre", "director"), handlers.insert_movie, "Insert a movie"),
    "update": Command(("customer_id", "new_email"), handlers.update_customer_email,
                      "Update a customer's email"),
    "remove": Command(("customer_id",), handlers.remove_customer, "Remove a customer from the database"),
    "showMovies": Command((), handlers.display_movies, "Show all movies"),
    "showCustomers": Command((), handlers.display_customers, "Show all customers"),
    "showRentals": Command((), handlers.display_rentals, "Show all rentals"),
    "insertMock": Command((), handlers.insert_mock_data, "Insert mock data into the database"),
    "deleteAll": Command((), handlers.delete_all_data, "Delete all data from the database"),
}


class UsageError(Exception):
    """Raised instead of argparse's exit(2) on malformed arguments."""


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def usage_lines() -> List[str]:
    lines = ["Usage:"]
    for name, cmd in COMMANDS.items():
        signature = " ".join([name] + [f"<{arg}>" for arg in cmd.args])
        lines.append(f"  {signature} - {cmd.help}")
    return lines


def print_help() -> None:
    """Print the usage text to stdout."""
    print("\n".join(usage_lines()))


def build_parsers() -> Dict[str, argparse.ArgumentParser]:
    """One positional-only parser per command, keyed by command name."""
    parsers = {}
    for name, cmd in COMMANDS.items():
        p = _Parser(prog=f"mrs {name}", description=cmd.help, add_help=False)
        for arg in cmd.args:
            p.add_argument(arg)
        parsers[name] = p
    return parsers


def parse_command(argv: Sequence[str]) -> Optional[Tuple[str, List[str]]]:
    """Return (command, positional args), or None when argv is not a valid command."""
    if not argv or argv[0] not in COMMANDS:
        return None
    name = argv[0]
    try:
        # "--" keeps values such as "-Pi" or "-x@a.com" from being read as options
        ns = build_parsers()[name].parse_args(["--", *argv[1:]])
    except UsageError as exc:
        logger.debug("usage error: %s", exc)
        return None
    return name, [getattr(ns, arg) for arg in COMMANDS[name].args]


def run(argv: Sequence[str], store) -> int:
    """Ensure the schema, then dispatch one command against store."""
    parsed = parse_command(argv)
    if parsed is None:
        print_help()
        return 0
    name, args = parsed

    try:
        init_schema(store)
    except psycopg.Error as exc:
        logger.error("Error creating tables: %s", exc)
        return 0

    COMMANDS[name].handler(store, *args)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    level = logging.getLevelName(config.log_level())
    logging.basicConfig(level=level if isinstance(level, int) else logging.WARNING, format=LOG_FORMAT)

    if parse_command(argv) is None:
        print_help()
        return 0

    pool = None
    try:
        pool = create_pool()
        return run(argv, RentalStore(pool))
    except RuntimeError as exc:
        # configuration problems: no DATABASE_URL / INI, missing keys
        print(f"Error: {exc}", file=sys.stderr)
        return 0
    finally:
        close_pool(pool)


if __name__ == "__main__":
    sys.exit(main())
