"""String-level value checks used by column type validation.

Values are first rendered the way a SQL driver would print them
(booleans as ``true``/``false``, None as ``null``), then matched
against the accepted textual forms.
"""

from __future__ import annotations

import json
import math
import re
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Optional

from dateutil import parser as date_parser

_FLOAT_RE = re.compile(r"^(?:[-+])?(?:[0-9]+)?(?:\.[0-9]*)?(?:[eE][+-]?(?:[0-9]+))?$")
_INT_RE = re.compile(r"^(?:[-+]?(?:0|[1-9][0-9]*))$")
_DECIMAL_RE = re.compile(r"^[-+]?([0-9]+|\.[0-9]+|[0-9]+\.[0-9]+)$")
_BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})

_UUID_PATTERNS = {
    None: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}$", re.I),
    1: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-1[0-9A-F]{3}-[0-9A-F]{4}-[0-9A-F]{12}$", re.I),
    3: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-3[0-9A-F]{3}-[0-9A-F]{4}-[0-9A-F]{12}$", re.I),
    4: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-4[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$", re.I),
    5: re.compile(r"^[0-9A-F]{8}-[0-9A-F]{4}-5[0-9A-F]{3}-[89AB][0-9A-F]{3}-[0-9A-F]{12}$", re.I),
}


def to_text(value: Any) -> str:
    """Render a value as text for pattern checks.

    Examples:
        >>> to_text(True)
        'true'
        >>> to_text(None)
        'null'
        >>> to_text(12)
        '12'
        >>> to_text(5.0)
        '5'
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def describe(value: Any) -> str:
    """JSON-like rendering of a value for error messages.

    Examples:
        >>> describe("abc")
        '"abc"'
        >>> describe(12345)
        '12345'
    """
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(value)


def is_float(value: Any) -> bool:
    text = to_text(value)
    if text in ("", ".", "-", "+"):
        return False
    return bool(_FLOAT_RE.match(text))


def is_non_finite(value: Any) -> bool:
    """True for float NaN and +/-infinity."""
    return isinstance(value, float) and (math.isnan(value) or math.isinf(value))


def is_int(value: Any) -> bool:
    return bool(_INT_RE.match(to_text(value)))


def is_decimal(value: Any) -> bool:
    return bool(_DECIMAL_RE.match(to_text(value)))


def is_boolean(value: Any) -> bool:
    return to_text(value) in _BOOLEAN_STRINGS


def is_date(value: Any) -> bool:
    """Whether a value is a temporal object or a parseable date string."""
    if isinstance(value, (datetime, date, time)):
        return True
    if isinstance(value, (bool, int, float, Decimal)) or value is None:
        return False
    try:
        date_parser.parse(str(value))
    except (ValueError, OverflowError):
        return False
    return True


def is_uuid(value: Any, version: Optional[int] = None) -> bool:
    """Whether a value is an RFC 4122 UUID string (optionally of a given version).

    Args:
        value: Candidate value (str or uuid.UUID)
        version: 1, 3, 4, 5 or None for any version

    Returns:
        True if the value matches
    """
    if isinstance(value, uuid.UUID):
        value = str(value)
    if not isinstance(value, str):
        return False
    pattern = _UUID_PATTERNS.get(version)
    if pattern is None:
        raise ValueError(f"Unsupported UUID version: {version}")
    return bool(pattern.match(value))
