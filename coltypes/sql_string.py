"""Dialect-aware SQL literal encoding.

escape() turns a runtime value into text that can be embedded directly
in generated SQL. format() and format_named() substitute positional
(``?``) and named (``:name``) placeholders with escaped values.

Examples:
    >>> escape("O'Brien", dialect="postgres")
    "'O''Brien'"
    >>> escape([1, [2, 3]], dialect="mysql")
    '1, (2, 3)'
    >>> format_named("SELECT * FROM t WHERE x = :id", {"id": 5}, dialect="mysql")
    'SELECT * FROM t WHERE x = 5'
"""

from __future__ import annotations

import math
import re
import uuid
from datetime import date, datetime, time
from decimal import Decimal
from functools import partial
from typing import Any, Mapping, Optional

from coltypes.core.config import config
from coltypes.exceptions import EncodingError, TypeMappingError
from coltypes.models.keys import DialectLike, TypeKey, to_dialect

_BACKSLASH_RE = re.compile(r"[\0\n\r\b\t\\'\"\x1a]")
_BACKSLASH_ESCAPES = {
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\b": "\\b",
    "\t": "\\t",
    "\x1a": "\\Z",
}
_NAMED_RE = re.compile(r":+(?!\d)(\w+)", re.ASCII)

# Dialects without boolean literals
_NUMERIC_BOOLEANS = frozenset({"sqlite", "mssql", "oracle"})
_DOUBLED_QUOTES = frozenset({"postgres", "sqlite", "mssql"})


def _dialect_name(dialect: Optional[DialectLike]) -> Optional[str]:
    if dialect is None:
        return None
    try:
        return to_dialect(dialect).value
    except ValueError as e:
        raise TypeMappingError(str(e)) from e


def _type_for(key: TypeKey, dialect: Optional[str]) -> Any:
    """Column type used to stringify a raw value for a dialect."""
    if dialect is None:
        from coltypes.types import BASE_TYPES

        return BASE_TYPES[key]()

    from coltypes.dialects import get_dialect

    return get_dialect(dialect).type_for(key)


def format_number(value: Any) -> str:
    """Render a number as unquoted SQL text.

    Examples:
        >>> format_number(12)
        '12'
        >>> format_number(float("-inf"))
        '-Infinity'
    """
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "-Infinity" if value < 0 else "Infinity"
    return str(value)


def quote(text: str, dialect: Optional[str] = None, national: bool = False) -> str:
    """Quote a string with the dialect's rules.

    Args:
        text: Raw string
        dialect: Dialect name or None for backslash escaping
        national: Prefix with N (MSSQL unicode literal)

    Returns:
        Quoted literal (or the text itself for Oracle date function calls)
    """
    if dialect in _DOUBLED_QUOTES:
        text = text.replace("'", "''")
        if dialect == "postgres":
            text = text.replace("\0", "\\0")
    elif dialect == "oracle":
        if "TO_TIMESTAMP" in text or "TO_DATE" in text:
            return text
        text = text.replace("'", "''")
    else:
        text = _BACKSLASH_RE.sub(lambda m: _BACKSLASH_ESCAPES.get(m.group(), "\\" + m.group()), text)

    return ("N'" if national else "'") + text + "'"


def escape(
    value: Any,
    timezone: Optional[str] = None,
    dialect: Optional[DialectLike] = None,
    format: bool = False,
) -> str:
    """Escape a value as a SQL literal.

    Args:
        value: Value to encode
        timezone: Zone name or offset for temporal values (configured default if None)
        dialect: Target dialect; None uses backslash escaping
        format: True when called for placeholder substitution (arrays are
            rendered as lists even on PostgreSQL)

    Returns:
        SQL literal text

    Raises:
        EncodingError: If the value has no SQL literal form
        TypeMappingError: If the dialect is unknown
    """
    name = _dialect_name(dialect)
    timezone = timezone or config.timezone

    if value is None:
        return "NULL"
    if isinstance(value, bool):
        if name in _NUMERIC_BOOLEANS:
            return "1" if value else "0"
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return format_number(value)

    national = False
    if isinstance(value, str):
        national = name == "mssql"
    elif isinstance(value, datetime):
        value = _type_for(TypeKey.DATE, name).stringify(value, {"timezone": timezone})
    elif isinstance(value, date):
        value = _type_for(TypeKey.DATEONLY, name).stringify(value)
    elif isinstance(value, time):
        value = value.isoformat()
    elif isinstance(value, uuid.UUID):
        value = str(value)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        return _type_for(TypeKey.BLOB, name).stringify(value)
    elif isinstance(value, (list, tuple)):
        if name == "postgres" and not format:
            element_escape = partial(escape, timezone=timezone, dialect=name, format=format)
            return _type_for(TypeKey.ARRAY, name).stringify(value, {"escape": element_escape})
        return array_to_list(value, timezone, name, format)
    else:
        raise EncodingError(f"Invalid value {value!r}")

    if not isinstance(value, str):
        raise EncodingError(f"Invalid value {value!r}")
    return quote(value, name, national)


def array_to_list(
    array: Any,
    timezone: Optional[str] = None,
    dialect: Optional[DialectLike] = None,
    format: bool = False,
) -> str:
    """Render a sequence as a comma separated list; nested sequences are parenthesized."""
    parts = []
    for value in array:
        if isinstance(value, (list, tuple)):
            parts.append(f"({array_to_list(value, timezone, dialect, format)})")
        else:
            parts.append(escape(value, timezone, dialect, format))
    return ", ".join(parts)


def format(
    sql: str,
    values: Any,
    timezone: Optional[str] = None,
    dialect: Optional[DialectLike] = None,
) -> str:
    """Replace ``?`` placeholders left to right with escaped values.

    A placeholder with no remaining value is left as is.

    Examples:
        >>> format("SELECT ? , ?", [1], dialect="mysql")
        'SELECT 1 , ?'
    """
    if not isinstance(sql, str):
        raise EncodingError(f"Invalid SQL string provided: {sql!r}")
    remaining = list(values) if isinstance(values, (list, tuple)) else [values]

    def replace(match: re.Match) -> str:
        if not remaining:
            return match.group()
        return escape(remaining.pop(0), timezone, dialect, True)

    return re.sub(r"\?", replace, sql)


def format_named(
    sql: str,
    values: Mapping[str, Any],
    timezone: Optional[str] = None,
    dialect: Optional[DialectLike] = None,
) -> str:
    """Replace ``:name`` placeholders with escaped values.

    PostgreSQL ``::type`` casts pass through untouched.

    Raises:
        EncodingError: If a referenced name is missing from values
    """
    name = _dialect_name(dialect)

    def replace(match: re.Match) -> str:
        token, key = match.group(), match.group(1)
        if name == "postgres" and token.startswith("::"):
            return token
        if key not in values:
            raise EncodingError(f'Named parameter "{token}" has no value in the given object.')
        return escape(values[key], timezone, name, True)

    return _NAMED_RE.sub(replace, sql)
