"""
Date handling for site metadata

Dates are written as YYYY-MM-DD. YAML already turns unquoted dates into
datetime.date objects, so both dates and strings are accepted.
"""

from datetime import date, datetime
from typing import Any

from .errors import DateFormatError


DATE_FORMAT = "%Y-%m-%d"


def date_parse(value: Any) -> date:
    """
    Parse a YYYY-MM-DD date

    Args:
        value: date, datetime or string

    Returns:
        datetime.date

    Raises:
        DateFormatError: If the value is not a valid date

    Example:
        >>> date_parse("2022-05-01")
        datetime.date(2022, 5, 1)
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise DateFormatError(f"The date value {value!r} is invalid, expected YYYY-MM-DD")

    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError as e:
        raise DateFormatError(f"The date value {value!r} is invalid, expected YYYY-MM-DD") from e


def date_format(value: date) -> str:
    """Format a date as YYYY-MM-DD"""
    return value.isoformat()
