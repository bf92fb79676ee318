"""
utils/dates.py
--------------
Conversion from the date values callers hand us to the DATE the store expects.
"""

from datetime import date, datetime
from typing import Union

from dateutil import parser as date_parser

DateLike = Union[date, datetime, str]

_DEFAULT_A = datetime(2000, 1, 1)
_DEFAULT_B = datetime(2001, 2, 2)


def to_sql_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a plain ``datetime.date``.

    Args:
        value: A date, a datetime (time part is dropped) or a string such as
            '1990-04-21' or '21/04/1990' (day first). Day, month and year
            must all be present.

    Returns:
        The calendar date.

    Raises:
        ValueError: If the value is empty, incomplete or cannot be parsed.
        TypeError: If the value is not a supported type.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        # ISO strings are unambiguous; anything else is read day-first.
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        # dateutil fills missing fields from `default`; two defaults expose partial input.
        first = date_parser.parse(text, dayfirst=True, default=_DEFAULT_A)
        second = date_parser.parse(text, dayfirst=True, default=_DEFAULT_B)
        if first.date() != second.date():
            raise ValueError(f"Incomplete date: {value!r}")
        return first.date()
    raise TypeError(f"Unsupported date value: {value!r}")
