"""Dialect type mappers.

Each dialect package provides a TypeMapper subclass carrying its physical
type codes and the column type variants that override base behavior.

Example:
    >>> from coltypes.dialects import get_dialect
    >>> from coltypes.types import TEXT
    >>> get_dialect("mssql").to_sql(TEXT())
    'NVARCHAR(MAX)'
"""

from __future__ import annotations

import threading
from typing import Optional

from coltypes.core.type_mapper import TypeMapper
from coltypes.dialects.mssql import MSSQLTypeMapper
from coltypes.dialects.mysql import MySQLTypeMapper
from coltypes.dialects.oracle import OracleTypeMapper
from coltypes.dialects.postgres import PostgresTypeMapper
from coltypes.dialects.sqlite import SQLiteTypeMapper
from coltypes.exceptions import TypeMappingError
from coltypes.models.keys import Dialect, DialectLike, to_dialect
from coltypes.utils.logging import WarningLog

MAPPERS: dict[Dialect, type[TypeMapper]] = {
    Dialect.MYSQL: MySQLTypeMapper,
    Dialect.POSTGRES: PostgresTypeMapper,
    Dialect.SQLITE: SQLiteTypeMapper,
    Dialect.MSSQL: MSSQLTypeMapper,
    Dialect.ORACLE: OracleTypeMapper,
}

_instances: dict[Dialect, TypeMapper] = {}
_instances_lock = threading.Lock()


def get_dialect(name: DialectLike, warnings: Optional[WarningLog] = None) -> TypeMapper:
    """Return the type mapper of a dialect.

    Without a warning log the process-wide mapper is returned, built on
    first use. With one, a fresh mapper reporting to that log is built.

    Raises:
        TypeMappingError: If the dialect is unknown
    """
    try:
        dialect = to_dialect(name)
    except ValueError as e:
        raise TypeMappingError(str(e)) from e

    mapper_class = MAPPERS[dialect]
    if warnings is not None:
        return mapper_class(warnings)

    with _instances_lock:
        mapper = _instances.get(dialect)
        if mapper is None:
            mapper = _instances[dialect] = mapper_class()
    return mapper


__all__ = [
    "MAPPERS",
    "get_dialect",
    "MySQLTypeMapper",
    "PostgresTypeMapper",
    "SQLiteTypeMapper",
    "MSSQLTypeMapper",
    "OracleTypeMapper",
]
