"""MSSQL type mapper implementation.

Physical codes are the TDS type ids reported by the driver.
"""

from __future__ import annotations

from typing import Any

from coltypes.core.config import config
from coltypes.core.data_type import CallOptionsLike
from coltypes.core.type_mapper import TypeCodes, TypeMapper
from coltypes.dialects.adapters import plain_float, plain_number
from coltypes.models.keys import Dialect, TypeKey
from coltypes.models.options import CallOptions, TypeOptions
from coltypes.types import BIGINT as BaseBIGINT
from coltypes.types import BLOB as BaseBLOB
from coltypes.types import BOOLEAN as BaseBOOLEAN
from coltypes.types import DATE as BaseDATE
from coltypes.types import DATEONLY as BaseDATEONLY
from coltypes.types import ENUM as BaseENUM
from coltypes.types import FLOAT as BaseFLOAT
from coltypes.types import INTEGER as BaseINTEGER
from coltypes.types import NOW as BaseNOW
from coltypes.types import REAL as BaseREAL
from coltypes.types import SMALLINT as BaseSMALLINT
from coltypes.types import STRING as BaseSTRING
from coltypes.types import TEXT as BaseTEXT
from coltypes.types import TINYINT as BaseTINYINT
from coltypes.types import UUID as BaseUUID
from coltypes.utils.timezones import apply_timezone, format_date, format_datetime

LABEL = "MSSQL"


def _hexify(hex_value: str) -> str:
    return "0x" + hex_value


class BLOB(BaseBLOB):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        length = self.options.length
        if length:
            if str(length).lower() == "tiny":
                self.warn(
                    "MSSQL does not support BLOB with the `length` = `tiny` option. "
                    "`VARBINARY(256)` will be used instead."
                )
                return "VARBINARY(256)"
            self.warn(
                "MSSQL does not support BLOB with the `length` option. "
                "`VARBINARY(MAX)` will be used instead."
            )
        return "VARBINARY(MAX)"

    def _hexify(self, hex_value: str) -> str:
        return _hexify(hex_value)


class STRING(BaseSTRING):
    """NVARCHAR, or BINARY when binary.

    Literals are already escaped: national strings, or hex for binary.

    Examples:
        >>> STRING(4, True).stringify(b"ab")
        '0x6162'
    """

    self_escaping = True

    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.binary:
            return f"BINARY({self.length})"
        return f"NVARCHAR({self.length})"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if self.options.binary:
            data = value if isinstance(value, (bytes, bytearray, memoryview)) else str(value).encode("utf-8")
            return _hexify(bytes(data).hex())
        if options.escape is not None:
            return options.escape(value)

        from coltypes.sql_string import escape

        return escape(value, options.timezone, "mssql")


class TEXT(BaseTEXT):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        length = self.options.length
        if length:
            if str(length).lower() == "tiny":
                self.warn(
                    "MSSQL does not support TEXT with the `length` = `tiny` option. "
                    "`NVARCHAR(256)` will be used instead."
                )
                return "NVARCHAR(256)"
            self.warn(
                "MSSQL does not support TEXT with the `length` option. "
                "`NVARCHAR(MAX)` will be used instead."
            )
        return "NVARCHAR(MAX)"


class BOOLEAN(BaseBOOLEAN):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "BIT"


class UUID(BaseUUID):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "CHAR(36)"


class NOW(BaseNOW):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "GETDATE()"


class DATE(BaseDATE):
    """DATETIMEOFFSET, or DATETIME2 when ``COLTYPES_MSSQL_NO_TIMEZONE`` is set."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        if config.mssql_no_timezone:
            return "DATETIME2"
        return "DATETIMEOFFSET"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if config.mssql_no_timezone:
            return format_datetime(apply_timezone(value, options.timezone))
        return super()._stringify(value, options)


class DATEONLY(BaseDATEONLY):
    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return format_date(value)


class INTEGER(BaseINTEGER):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "INTEGER")


class TINYINT(BaseTINYINT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "TINYINT")


class SMALLINT(BaseSMALLINT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "SMALLINT")


class BIGINT(BaseBIGINT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "BIGINT")


class REAL(BaseREAL):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "REAL")


class FLOAT(BaseFLOAT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_float(options, warn, LABEL, "Float")


class ENUM(BaseENUM):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "VARCHAR(255)"


class MSSQLTypeMapper(TypeMapper):
    """Type mapper for Microsoft SQL Server.

    Examples:
        >>> from coltypes.types import STRING
        >>> MSSQLTypeMapper().to_sql(STRING(100))
        'NVARCHAR(100)'
    """

    dialect = Dialect.MSSQL
    DOCS_URL = "https://msdn.microsoft.com/en-us/library/ms187752%28v=sql.110%29.aspx"

    TYPE_CODES = {
        TypeKey.DATE: TypeCodes((43,)),
        TypeKey.STRING: TypeCodes((231, 173)),
        TypeKey.CHAR: TypeCodes((175,)),
        TypeKey.TEXT: False,
        TypeKey.TINYINT: TypeCodes((30,)),
        TypeKey.SMALLINT: TypeCodes((34,)),
        TypeKey.MEDIUMINT: False,
        TypeKey.INTEGER: TypeCodes((38,)),
        TypeKey.BIGINT: False,
        TypeKey.FLOAT: TypeCodes((109,)),
        TypeKey.TIME: TypeCodes((41,)),
        TypeKey.DATEONLY: TypeCodes((40,)),
        TypeKey.BOOLEAN: TypeCodes((104,)),
        TypeKey.BLOB: TypeCodes((165,)),
        TypeKey.DECIMAL: TypeCodes((106,)),
        TypeKey.UUID: False,
        TypeKey.ENUM: False,
        TypeKey.REAL: TypeCodes((109,)),
        TypeKey.DOUBLE: TypeCodes((109,)),
        TypeKey.GEOMETRY: False,
    }

    COLSPECS = (
        BLOB,
        BOOLEAN,
        ENUM,
        STRING,
        UUID,
        DATE,
        DATEONLY,
        NOW,
        TINYINT,
        SMALLINT,
        INTEGER,
        BIGINT,
        REAL,
        FLOAT,
        TEXT,
    )
