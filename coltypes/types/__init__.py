"""Logical column types.

Examples:
    >>> from coltypes.types import STRING, parse_type_expression
    >>> str(STRING(100).binary())
    'VARCHAR(100) BINARY'
    >>> str(parse_type_expression("INTEGER(11) UNSIGNED"))
    'INTEGER(11) UNSIGNED'
"""

from __future__ import annotations

from typing import Any

from coltypes.core.data_type import AbstractType
from coltypes.models.keys import TypeKey
from coltypes.types import expression as _expression
from coltypes.types.containers import ARRAY, RANGE
from coltypes.types.modifiers import MODIFIERS, apply_modifier
from coltypes.types.numeric import (
    BIGINT,
    BOOLEAN,
    DECIMAL,
    DOUBLE,
    FLOAT,
    INTEGER,
    MEDIUMINT,
    NUMBER,
    REAL,
    SMALLINT,
    TINYINT,
)
from coltypes.types.spatial import GEOGRAPHY, GEOMETRY
from coltypes.types.strings import CHAR, STRING, TEXT
from coltypes.types.structured import ENUM, HSTORE, JSON, JSONB, BLOB, UUID, UUIDV1, UUIDV4, VIRTUAL
from coltypes.types.temporal import DATE, DATEONLY, NOW, TIME

ABSTRACT = AbstractType
NUMERIC = DECIMAL
DOUBLE_PRECISION = DOUBLE
NONE = VIRTUAL

BASE_TYPES: dict[TypeKey, type[AbstractType]] = {
    cls.key: cls
    for cls in (
        STRING,
        CHAR,
        TEXT,
        NUMBER,
        TINYINT,
        SMALLINT,
        MEDIUMINT,
        INTEGER,
        BIGINT,
        FLOAT,
        REAL,
        DOUBLE,
        DECIMAL,
        BOOLEAN,
        TIME,
        DATE,
        DATEONLY,
        NOW,
        HSTORE,
        JSON,
        JSONB,
        BLOB,
        RANGE,
        ARRAY,
        ENUM,
        UUID,
        UUIDV1,
        UUIDV4,
        GEOMETRY,
        GEOGRAPHY,
        VIRTUAL,
    )
}

# Names accepted in type expressions
TYPE_NAMES: dict[str, type[AbstractType]] = {
    **{key.name: cls for key, cls in BASE_TYPES.items()},
    "DOUBLE PRECISION": DOUBLE,
    "NUMERIC": DECIMAL,
    "NONE": VIRTUAL,
}


def parse_type_expression(expression: str) -> Any:
    """Build a column type from text such as ``"STRING(64) BINARY"``."""
    return _expression.parse_type_expression(expression, TYPE_NAMES)


__all__ = [
    "ABSTRACT",
    "ARRAY",
    "BASE_TYPES",
    "BIGINT",
    "BLOB",
    "BOOLEAN",
    "CHAR",
    "DATE",
    "DATEONLY",
    "DECIMAL",
    "DOUBLE",
    "DOUBLE_PRECISION",
    "ENUM",
    "FLOAT",
    "GEOGRAPHY",
    "GEOMETRY",
    "HSTORE",
    "INTEGER",
    "JSON",
    "JSONB",
    "MEDIUMINT",
    "MODIFIERS",
    "NONE",
    "NOW",
    "NUMBER",
    "NUMERIC",
    "RANGE",
    "REAL",
    "SMALLINT",
    "STRING",
    "TEXT",
    "TIME",
    "TINYINT",
    "TYPE_NAMES",
    "UUID",
    "UUIDV1",
    "UUIDV4",
    "VIRTUAL",
    "apply_modifier",
    "parse_type_expression",
]
