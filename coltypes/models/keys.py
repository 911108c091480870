"""Logical type keys and dialect names.

This module defines the canonical identifiers shared by every column type
and every dialect type mapper.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class TypeKey(str, Enum):
    """Canonical logical type keys.

    Dialect variants keep the key of the family they specialize, so a
    key identifies a family across all dialects.
    """

    ABSTRACT = "ABSTRACT"

    # Strings
    STRING = "STRING"
    CHAR = "CHAR"
    TEXT = "TEXT"

    # Numbers
    NUMBER = "NUMBER"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    MEDIUMINT = "MEDIUMINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    REAL = "REAL"
    DOUBLE = "DOUBLE PRECISION"
    DECIMAL = "DECIMAL"

    # Boolean
    BOOLEAN = "BOOLEAN"

    # Temporal
    TIME = "TIME"
    DATE = "DATE"
    DATEONLY = "DATEONLY"
    NOW = "NOW"

    # Structured
    HSTORE = "HSTORE"
    JSON = "JSON"
    JSONB = "JSONB"
    BLOB = "BLOB"
    RANGE = "RANGE"
    ARRAY = "ARRAY"
    ENUM = "ENUM"

    # Identifiers
    UUID = "UUID"
    UUIDV1 = "UUIDV1"
    UUIDV4 = "UUIDV4"

    # Spatial
    GEOMETRY = "GEOMETRY"
    GEOGRAPHY = "GEOGRAPHY"

    # No physical column
    VIRTUAL = "VIRTUAL"


class Dialect(str, Enum):
    """Supported SQL dialects."""

    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    MSSQL = "mssql"
    ORACLE = "oracle"


DialectLike = Union[Dialect, str]


def to_dialect(value: DialectLike) -> Dialect:
    """Coerce a dialect name to a Dialect member.

    Args:
        value: Dialect member or its name ("postgres", "mysql", ...)

    Returns:
        Dialect member

    Raises:
        ValueError: If the name is not a supported dialect
    """
    if isinstance(value, Dialect):
        return value
    try:
        return Dialect(str(value).lower())
    except ValueError:
        raise ValueError(
            f"Invalid dialect: {value}. Must be one of: {', '.join(d.value for d in Dialect)}"
        )
