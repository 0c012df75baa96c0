"""Input checks run before any database access."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

MIN_RELEASE_YEAR = 1800

# local@domain.tld: no whitespace or extra '@', at least one dot after the '@'
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _to_int(text) -> Optional[int]:
    """Parse an integer argument, or None if it is not one."""
    if isinstance(text, int):
        return text
    try:
        return int(str(text).strip())
    except (TypeError, ValueError):
        return None


def parse_release_year(text, today: Optional[dt.date] = None) -> Optional[int]:
    """Return the year as int if it lies in [1800, current year], else None."""
    year = _to_int(text)
    if year is None:
        return None
    current = (today or dt.date.today()).year
    if year < MIN_RELEASE_YEAR or year > current:
        return None
    return year


def parse_customer_id(text) -> Optional[int]:
    return _to_int(text)


def is_utf8_text(text: str) -> bool:
    """False for strings psycopg cannot send, e.g. surrogate-escaped argv bytes."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def is_valid_email(email: str) -> bool:
    return is_utf8_text(email or "") and bool(EMAIL_RE.match(email or ""))
