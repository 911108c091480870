"""Timezone resolution and temporal formatting helpers.

Timezones are either IANA names ("Europe/Paris"), resolved through
dateutil's tz database, or fixed UTC offsets ("+02:00", "-0530").
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone as dt_timezone, tzinfo
from decimal import Decimal
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil import tz

from coltypes.core.config import config
from coltypes.exceptions import ConfigurationError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def parse_offset(value: str) -> Optional[dt_timezone]:
    """Parse a fixed UTC offset string.

    Returns:
        A fixed-offset tzinfo, or None if the string is not an offset

    Examples:
        >>> parse_offset("+02:00")
        datetime.timezone(datetime.timedelta(seconds=7200))
        >>> parse_offset("Europe/Paris") is None
        True
    """
    match = _OFFSET_RE.match(value.strip())
    if not match:
        return None
    sign, hours, minutes = match.groups()
    delta = timedelta(hours=int(hours), minutes=int(minutes))
    return dt_timezone(-delta if sign == "-" else delta)


def named_zone(name: Optional[str]) -> Optional[tzinfo]:
    """Look up an IANA zone by name; None when the name is not a known zone."""
    if not name or parse_offset(name) is not None:
        return None
    return tz.gettz(name)


def resolve_timezone(name: Optional[str] = None) -> tzinfo:
    """Resolve a zone name or offset, falling back to the configured default.

    Raises:
        ConfigurationError: If the name is neither a known zone nor an offset
    """
    name = name or config.timezone
    zone = named_zone(name)
    if zone is not None:
        return zone
    offset = parse_offset(name)
    if offset is not None:
        return offset
    raise ConfigurationError(f"Unknown timezone: {name}")


def to_datetime(value: Any) -> datetime:
    """Coerce a value to an aware datetime.

    Naive datetimes are taken as UTC instants, dates as UTC midnight,
    numbers as epoch milliseconds and strings are parsed.
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return datetime.fromtimestamp(float(value) / 1000.0, tz=dt_timezone.utc)
    elif isinstance(value, str):
        result = date_parser.parse(value)
    else:
        raise TypeError(f"Cannot convert {type(value).__name__} to datetime")

    if result.tzinfo is None:
        result = result.replace(tzinfo=dt_timezone.utc)
    return result


def apply_timezone(value: Any, timezone: Optional[str] = None) -> datetime:
    """Convert a temporal value to the given (or default) timezone."""
    return to_datetime(value).astimezone(resolve_timezone(timezone))


def localize(value: Any, timezone: Optional[str] = None) -> datetime:
    """Attach a timezone to a naive value read back from a driver.

    Aware values are returned unchanged.
    """
    result = date_parser.parse(value) if isinstance(value, str) else value
    if result.tzinfo is not None:
        return result
    return result.replace(tzinfo=resolve_timezone(timezone))


def format_offset(value: datetime) -> str:
    """Render the UTC offset of an aware datetime as +HH:MM."""
    offset = value.utcoffset() or timedelta(0)
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_datetime(value: datetime, milliseconds: bool = True, offset: bool = False) -> str:
    """Render a datetime as YYYY-MM-DD HH:mm:ss[.SSS][ Z].

    Examples:
        >>> dt = datetime(2020, 1, 2, 3, 4, 5, 678000, tzinfo=dt_timezone.utc)
        >>> format_datetime(dt, offset=True)
        '2020-01-02 03:04:05.678 +00:00'
        >>> format_datetime(dt, milliseconds=False)
        '2020-01-02 03:04:05'
    """
    text = value.strftime("%Y-%m-%d %H:%M:%S")
    if milliseconds:
        text += f".{value.microsecond // 1000:03d}"
    if offset:
        text += " " + format_offset(value)
    return text


def format_date(value: Any) -> str:
    """Render a date-like value as YYYY-MM-DD."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    return to_datetime(value).strftime("%Y-%m-%d")
