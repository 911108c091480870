"""Oracle type mapper implementation.

Physical codes are the column type names reported by the driver.
Temporal literals are rendered as conversion function calls.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from coltypes.core.config import config
from coltypes.core.data_type import CallOptionsLike
from coltypes.core.type_mapper import TypeCodes, TypeMapper
from coltypes.models.keys import Dialect, TypeKey
from coltypes.models.options import CallOptions, TypeOptions
from coltypes.types import BIGINT as BaseBIGINT
from coltypes.types import BLOB as BaseBLOB
from coltypes.types import BOOLEAN as BaseBOOLEAN
from coltypes.types import CHAR as BaseCHAR
from coltypes.types import DATE as BaseDATE
from coltypes.types import DATEONLY as BaseDATEONLY
from coltypes.types import DECIMAL as BaseDECIMAL
from coltypes.types import DOUBLE as BaseDOUBLE
from coltypes.types import ENUM as BaseENUM
from coltypes.types import FLOAT as BaseFLOAT
from coltypes.types import INTEGER as BaseINTEGER
from coltypes.types import NOW as BaseNOW
from coltypes.types import REAL as BaseREAL
from coltypes.types import STRING as BaseSTRING
from coltypes.types import TEXT as BaseTEXT
from coltypes.types import TIME as BaseTIME
from coltypes.types import UUID as BaseUUID
from coltypes.utils.timezones import apply_timezone, format_date, format_datetime, format_offset

MAX_RAW_LENGTH = 2000
MAX_STRING_LENGTH = 4000

_TEXT_SIZES = {
    "tiny": "NVARCHAR2(256)",
    "medium": "NVARCHAR2(2000)",
    "long": "NVARCHAR2(4000)",
}


def _hexify(hex_value: str) -> str:
    return f"hextoraw('{hex_value}')"


class BLOB(BaseBLOB):
    """BLOB, or RAW when a length is given."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        length = self.options.length
        if not length:
            return "BLOB"
        if str(length).lower() == "tiny":
            self.warn(
                "ORACLE does not support BLOB with the `length` = `tiny` option. "
                "`RAW(256)` will be used instead."
            )
            return "RAW(256)"
        self.warn(
            "ORACLE does not support BLOB with the `length` option. "
            "`RAW(2000)` will be used instead."
        )
        if not isinstance(length, int) or length > MAX_RAW_LENGTH:
            return f"RAW({MAX_RAW_LENGTH})"
        return f"RAW({length})"

    def _hexify(self, hex_value: str) -> str:
        return _hexify(hex_value)


class CHAR(BaseCHAR):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.binary:
            return f"RAW({self.length})"
        return super().to_sql(options)


class STRING(BaseSTRING):
    """NVARCHAR2, or RAW when binary. Literals are already escaped."""

    self_escaping = True

    def to_sql(self, options: CallOptionsLike = None) -> str:
        length = self.length
        if isinstance(length, int) and (
            length > MAX_STRING_LENGTH or (self.options.binary and length > MAX_RAW_LENGTH)
        ):
            self.warn(
                "Oracle 12 supports length up to 32764; be sure that your administrator has "
                "extended the MAX_STRING_SIZE parameter. Check "
                "https://docs.oracle.com/database/121/REFRN/GUID-D424D23B-0933-425F-BC69-9C0E6724693C.htm#REFRN10321"
            )
        if self.options.binary:
            return f"RAW({length})"
        return f"NVARCHAR2({length})"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if self.options.binary:
            data = value if isinstance(value, (bytes, bytearray, memoryview)) else str(value).encode("utf-8")
            return _hexify(bytes(data).hex())
        if options.escape is not None:
            return options.escape(value)

        from coltypes.sql_string import escape

        return escape(value, options.timezone, "oracle")


class TEXT(BaseTEXT):
    """CLOB, or NVARCHAR2 when a length is given."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        length = self.options.length
        if not length:
            return "CLOB"
        if isinstance(length, str) and length.lower() in _TEXT_SIZES:
            sized = _TEXT_SIZES[length.lower()]
            self.warn(
                f"ORACLE does not support TEXT with the `length` = `{length.lower()}` option. "
                f"`{sized.replace('NVARCHAR2', 'NVARCHAR')}` will be used instead."
            )
            return sized
        self.warn("As parameter length has been given, NVARCHAR2(length) will be used")
        return f"NVARCHAR2({length})"


class BOOLEAN(BaseBOOLEAN):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "NUMBER(1)"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if isinstance(value, str):
            return 0 if value == "0" else 1
        return 1 if value else 0


class UUID(BaseUUID):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "NVARCHAR2(36)"


class NOW(BaseNOW):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "CURRENT_TIMESTAMP"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        return "SELECT TO_CHAR(SYSDATE, 'YYYY-MM-DD HH24:MI:SS') \"NOW\" FROM DUAL;"


class TIME(BaseTIME):
    """Oracle has no TIME type; the time of day is stored in a timestamp."""

    self_escaping = True

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "TIMESTAMP WITH LOCAL TIME ZONE"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if isinstance(value, time):
            value = datetime.combine(date(1970, 1, 1), value)
        value = apply_timezone(value, options.timezone)
        text = f"{value.strftime('%H:%M:%S')}.{value.microsecond // 1000:03d} {format_offset(value)}"
        return f"TO_TIMESTAMP_TZ('{text}','HH24:MI:SS.FFTZH:TZM')"


class DATE(BaseDATE):
    """TIMESTAMP WITH LOCAL TIME ZONE, or TIMESTAMP when ``COLTYPES_ORACLE_NO_TIMEZONE`` is set.

    Examples:
        >>> from datetime import datetime, timezone
        >>> DATE().stringify(datetime(2020, 1, 1, tzinfo=timezone.utc), {"timezone": "+00:00"})
        "TO_TIMESTAMP_TZ('2020-01-01 00:00:00.000 +00:00','YYYY-MM-DD HH24:MI:SS.FFTZH:TZM')"
    """

    self_escaping = True

    def to_sql(self, options: CallOptionsLike = None) -> str:
        if config.oracle_no_timezone:
            return "TIMESTAMP"
        return "TIMESTAMP WITH LOCAL TIME ZONE"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        value = apply_timezone(value, options.timezone)
        if config.oracle_no_timezone:
            return f"TO_TIMESTAMP('{format_datetime(value)}','YYYY-MM-DD HH24:MI:SS.FF')"
        text = format_datetime(value, offset=True)
        return f"TO_TIMESTAMP_TZ('{text}','YYYY-MM-DD HH24:MI:SS.FFTZH:TZM')"


class DATEONLY(BaseDATEONLY):
    self_escaping = True

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        text = format_date(value).replace("-", "/")
        return f"TO_DATE('{text}','YYYY/MM/DD')"

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return format_date(value)


class DECIMAL(BaseDECIMAL):
    """NUMBER with either length/decimals or precision/scale."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        opts = self.options
        result = ""
        if opts.length:
            result = f"({opts.length}"
            if isinstance(opts.decimals, int):
                result += f",{opts.decimals}"
            result += ")"
        elif opts.precision:
            result = f"({opts.precision}"
            if isinstance(opts.scale, int):
                result += f",{opts.scale}"
            result += ")"
        return "NUMBER" + result


class INTEGER(BaseINTEGER):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        if options.zerofill:
            warn("ORACLE does not support INTEGER with options. Plain `INTEGER` will be used instead.")
            options = options.replace(zerofill=False)
        return options

    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.unsigned and self.options.length:
            return f"INTEGER({self.options.length})"
        return "INTEGER"


class BIGINT(BaseBIGINT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        warn("Oracle does not support BIGINT. Plain `NUMBER(19)` will be used instead.")
        return options.replace(length=None, unsigned=False, zerofill=False)

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "NUMBER(19)"


class REAL(BaseREAL):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "REAL"


class FLOAT(BaseFLOAT):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.length:
            return f"FLOAT({self.options.length})"
        return "FLOAT"


class DOUBLE(BaseDOUBLE):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return options.replace(length=None, unsigned=False, zerofill=False)

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "NUMBER(15,5)"


class ENUM(BaseENUM):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "NVARCHAR2(255)"


class OracleTypeMapper(TypeMapper):
    """Type mapper for Oracle.

    Examples:
        >>> from coltypes.types import BIGINT
        >>> OracleTypeMapper().to_sql(BIGINT())
        'NUMBER(19)'
    """

    dialect = Dialect.ORACLE
    DOCS_URL = "https://docs.oracle.com/database/122/SQLRF/Data-Types.htm#SQLRF30020"

    TYPE_CODES = {
        TypeKey.DATE: TypeCodes(("TIMESTAMP", "TIMESTAMP WITH LOCAL TIME ZONE")),
        TypeKey.STRING: TypeCodes(("VARCHAR2", "NVARCHAR2")),
        TypeKey.CHAR: TypeCodes(("CHAR", "RAW")),
        TypeKey.TEXT: False,
        TypeKey.INTEGER: TypeCodes(("INTEGER",)),
        TypeKey.BIGINT: False,
        TypeKey.FLOAT: False,
        TypeKey.TIME: TypeCodes(("TIMESTAMP WITH LOCAL TIME ZONE",)),
        TypeKey.DATEONLY: TypeCodes(("DATE", "DATEONLY")),
        TypeKey.BOOLEAN: TypeCodes(("NUMBER",)),
        TypeKey.BLOB: TypeCodes(("BLOB",)),
        TypeKey.DECIMAL: False,
        TypeKey.UUID: False,
        TypeKey.ENUM: False,
        TypeKey.REAL: False,
        TypeKey.DOUBLE: False,
        TypeKey.GEOMETRY: False,
    }

    COLSPECS = (
        BLOB,
        BOOLEAN,
        DOUBLE,
        ENUM,
        STRING,
        BIGINT,
        CHAR,
        UUID,
        DATEONLY,
        DATE,
        NOW,
        INTEGER,
        REAL,
        TIME,
        DECIMAL,
        FLOAT,
        TEXT,
    )
