"""MySQL type mapper implementation.

Physical codes are the buffer type names reported by the MySQL client
protocol.
"""

from __future__ import annotations

from typing import Any

from coltypes.core.data_type import CallOptionsLike
from coltypes.core.type_mapper import TypeCodes, TypeMapper
from coltypes.exceptions import SchemaError
from coltypes.models.keys import Dialect, TypeKey
from coltypes.models.options import CallOptions
from coltypes.types import BLOB as BaseBLOB
from coltypes.types import DATE as BaseDATE
from coltypes.types import DATEONLY as BaseDATEONLY
from coltypes.types import DECIMAL as BaseDECIMAL
from coltypes.types import GEOMETRY as BaseGEOMETRY
from coltypes.types import JSON as BaseJSON
from coltypes.types import UUID as BaseUUID
from coltypes.utils.geo import wkb_to_geojson
from coltypes.utils.timezones import apply_timezone, format_datetime, localize

SUPPORTED_GEOMETRY_TYPES = ("POINT", "LINESTRING", "POLYGON")


class BLOB(BaseBLOB):
    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        if isinstance(value, (bytes, bytearray)) and len(value) == 0:
            return None
        return value


class DECIMAL(BaseDECIMAL):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return super().to_sql(options) + self._flags_sql()


class DATE(BaseDATE):
    """DATETIME with optional fractional seconds precision."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        length = self.options.length
        return "DATETIME" + (f"({length})" if length else "")

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        # Fractional DATETIMEs need an explicit fsp
        return format_datetime(
            apply_timezone(value, options.timezone), milliseconds=bool(self.options.length)
        )

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        if value is None:
            return None
        return localize(value, CallOptions.coerce(options).timezone)


class DATEONLY(BaseDATEONLY):
    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return value


class UUID(BaseUUID):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "CHAR(36) BINARY"


class GEOMETRY(BaseGEOMETRY):
    """GEOMETRY restricted to POINT, LINESTRING and POLYGON.

    Raises:
        SchemaError: If another geometry type is requested
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        if self.geometry_type and self.geometry_type not in SUPPORTED_GEOMETRY_TYPES:
            raise SchemaError(
                f"Supported geometry types are: {', '.join(SUPPORTED_GEOMETRY_TYPES)}"
            )

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return self.geometry_type or self.key.value

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        # MySQL has no POINT EMPTY; an empty buffer is NULL
        if not value:
            return None
        # The first four bytes are the SRID
        return wkb_to_geojson(bytes(value[4:]))


class JSON(BaseJSON):
    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if options.operation == "where" and isinstance(value, str):
            return value
        return super()._stringify(value, options)


class MySQLTypeMapper(TypeMapper):
    """Type mapper for MySQL.

    Examples:
        >>> mapper = MySQLTypeMapper()
        >>> mapper.from_source("NEWDECIMAL")
        <TypeKey.DECIMAL: 'DECIMAL'>
    """

    dialect = Dialect.MYSQL
    DOCS_URL = "https://dev.mysql.com/doc/refman/5.7/en/data-types.html"

    TYPE_CODES = {
        TypeKey.DATE: TypeCodes(("DATETIME",)),
        TypeKey.STRING: TypeCodes(("VAR_STRING",)),
        TypeKey.CHAR: TypeCodes(("STRING",)),
        TypeKey.BLOB: TypeCodes(("TINYBLOB", "BLOB", "LONGBLOB")),
        TypeKey.TEXT: TypeCodes(("BLOB",)),
        TypeKey.TINYINT: TypeCodes(("TINY",)),
        TypeKey.SMALLINT: TypeCodes(("SHORT",)),
        TypeKey.MEDIUMINT: TypeCodes(("INT24",)),
        TypeKey.INTEGER: TypeCodes(("LONG",)),
        TypeKey.BIGINT: TypeCodes(("LONGLONG",)),
        TypeKey.FLOAT: TypeCodes(("FLOAT",)),
        TypeKey.TIME: TypeCodes(("TIME",)),
        TypeKey.DATEONLY: TypeCodes(("DATE",)),
        TypeKey.BOOLEAN: TypeCodes(("TINY",)),
        TypeKey.DECIMAL: TypeCodes(("NEWDECIMAL",)),
        TypeKey.UUID: False,
        TypeKey.ENUM: False,
        TypeKey.REAL: TypeCodes(("DOUBLE",)),
        TypeKey.DOUBLE: TypeCodes(("DOUBLE",)),
        TypeKey.GEOMETRY: TypeCodes(("GEOMETRY",)),
        TypeKey.JSON: TypeCodes(("JSON",)),
    }

    COLSPECS = (DATE, DATEONLY, UUID, GEOMETRY, DECIMAL, BLOB, JSON)
