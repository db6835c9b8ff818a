"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as date_parser

# Day zero of spreadsheet serial dates; 1 is 31 Dec 1899 and 43831 is 1 Jan 2020.
SERIAL_DATE_EPOCH = date(1899, 12, 30)

_ISO_DATE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}")

# Defaults differing in day, month and year, for detecting partial dates
_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def parse_date(date_str: str) -> date:
    """Parse a ledger date string into a date object.

    Supports:
    - ISO dates, optionally with a time part: "2020-01-31", "2020-01-31T00:00:00"
    - Day-first dates: "31/01/2020", "31-01-2020", "31 Jan 2020"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    if date_str is None or not str(date_str).strip():
        raise ValueError("Empty date string")

    date_str = str(date_str).strip()

    # dayfirst would swap month and day of an ISO date
    dayfirst = not _ISO_DATE.match(date_str)

    try:
        first = date_parser.parse(date_str, dayfirst=dayfirst, default=_DEFAULT_A)
        second = date_parser.parse(date_str, dayfirst=dayfirst, default=_DEFAULT_B)
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

    # Any difference means dateutil filled a missing day, month or year
    if first.date() != second.date():
        raise ValueError(f"Date '{date_str}' is missing a day, month or year")
    return first.date()


def parse_serial_date(serial: Union[str, int]) -> date:
    """Convert a spreadsheet serial day count into a date.

    Args:
        serial: Whole number of days since 30 Dec 1899, as int or string

    Returns:
        Date object

    Raises:
        ValueError: If the serial is not a whole number or out of range
    """
    if isinstance(serial, bool):
        raise ValueError(f"Could not parse serial date '{serial}'")

    try:
        days = int(str(serial).strip())
    except (ValueError, TypeError):
        raise ValueError(f"Could not parse serial date '{serial}'")

    try:
        return SERIAL_DATE_EPOCH + timedelta(days=days)
    except OverflowError:
        raise ValueError(f"Serial date '{serial}' is out of range")
