"""Value normalization shared by sorting and presentation"""

import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Optional

from dateutil import parser as date_parser

# Only strings shaped like a date are parsed as dates; dateutil alone would
# happily read "May" or "Sun" as a date.
_DATE_SHAPES = (
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}([ T].*)?$"),  # 2024-03-01, 2024-03-01T10:00:00Z
    re.compile(r"^\d{1,2}/\d{1,2}/\d{2,4}( .*)?$"),  # 3/1/2024, 03/01/2024 10:00 AM
    re.compile(r"^\d{1,2}-[A-Za-z]{3}-\d{2,4}( .*)?$"),  # 01-Mar-2024
)

_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def looks_like_date(text: str) -> bool:
    return any(shape.match(text) for shape in _DATE_SHAPES)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a date/datetime or a date-shaped string; None when it is not one"""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _naive_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or not looks_like_date(text):
        return None
    try:
        return _naive_utc(date_parser.parse(text))
    except (ValueError, OverflowError):
        return None


def parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if _NUMBER.match(text):
            return float(text)
    return None


# Kind ranks: mixed columns order numbers, then dates, then text
NUMBER_RANK = 0
DATE_RANK = 1
TEXT_RANK = 2


def comparable(value: Any) -> tuple[int, Any]:
    """
    Map a non-null cell value onto a (rank, key) pair that always compares.

    Numbers and numeric strings compare numerically, dates and date-shaped
    strings chronologically, everything else as case-folded text.
    """
    number = parse_number(value)
    if number is not None:
        return (NUMBER_RANK, number)
    moment = parse_date(value)
    if moment is not None:
        return (DATE_RANK, moment)
    return (TEXT_RANK, str(value).casefold())
