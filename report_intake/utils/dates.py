"""Lenient date parsing for report event dates."""

import re
from datetime import date, datetime
from typing import Any, Optional

_ISO_DAY = re.compile(r'^\d{4}-\d{2}-\d{2}')
_YEAR_MONTH = re.compile(r'^(\d{4})-(\d{2})$')
_YEAR = re.compile(r'^(\d{4})$')


def parse_date(date_val: Any) -> Optional[date]:
    """Parse various date formats into a date object.

    Accepts date/datetime objects, ISO-8601 strings (with or without time and
    ``Z`` suffix), and year-month or bare-year strings which resolve to the first
    day of the period. Anything else yields None.
    """
    if not date_val:
        return None
    if isinstance(date_val, datetime):
        return date_val.date()
    if isinstance(date_val, date):
        return date_val
    if not isinstance(date_val, str):
        return None

    text = date_val.strip()
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        pass
    try:
        return datetime.strptime(text[:10], '%Y-%m-%d').date()
    except ValueError:
        pass

    match = _YEAR_MONTH.match(text)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), 1)
        except ValueError:
            return None
    match = _YEAR.match(text)
    if match:
        year = int(match.group(1))
        return date(year, 1, 1) if year >= 1 else None
    return None


def is_full_iso_date(date_val: Any) -> bool:
    """True when the value pins an exact day (YYYY-MM-DD or a date object)."""
    if isinstance(date_val, date):
        return True
    return isinstance(date_val, str) and bool(_ISO_DAY.match(date_val.strip())) and parse_date(date_val) is not None


def days_between(first: Any, second: Any) -> Optional[int]:
    """Absolute day difference, or None when either side does not parse."""
    d1 = parse_date(first)
    d2 = parse_date(second)
    if d1 is None or d2 is None:
        return None
    return abs((d1 - d2).days)
