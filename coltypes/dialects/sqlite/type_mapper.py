"""SQLite type mapper implementation.

Physical codes are the declared column type names SQLite reports back.
"""

from __future__ import annotations

import json
import math
from typing import Any

from dateutil import parser as date_parser

from coltypes.core.data_type import CallOptionsLike
from coltypes.core.type_mapper import TypeCodes, TypeMapper
from coltypes.models.keys import Dialect, TypeKey
from coltypes.models.options import CallOptions
from coltypes.types import BIGINT as BaseBIGINT
from coltypes.types import CHAR as BaseCHAR
from coltypes.types import DATE as BaseDATE
from coltypes.types import DATEONLY as BaseDATEONLY
from coltypes.types import DOUBLE as BaseDOUBLE
from coltypes.types import ENUM as BaseENUM
from coltypes.types import FLOAT as BaseFLOAT
from coltypes.types import INTEGER as BaseINTEGER
from coltypes.types import JSON as BaseJSON
from coltypes.types import MEDIUMINT as BaseMEDIUMINT
from coltypes.types import NUMBER as BaseNUMBER
from coltypes.types import REAL as BaseREAL
from coltypes.types import SMALLINT as BaseSMALLINT
from coltypes.types import STRING as BaseSTRING
from coltypes.types import TEXT as BaseTEXT
from coltypes.types import TINYINT as BaseTINYINT
from coltypes.utils.timezones import localize

_NON_FINITE = {"NaN": math.nan, "Infinity": math.inf, "-Infinity": -math.inf}


class NumberOrdering:
    """SQLite renders UNSIGNED / ZEROFILL before the length: ``INTEGER UNSIGNED(11)``."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return self.key.value + self._flags_sql() + self._length_sql()


class NonFiniteParse:
    """Read NaN / Infinity / -Infinity back from their stored text."""

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        if isinstance(value, str) and value in _NON_FINITE:
            return _NON_FINITE[value]
        return value


class NUMBER(NumberOrdering, BaseNUMBER):
    pass


class TINYINT(NumberOrdering, BaseTINYINT):
    pass


class SMALLINT(NumberOrdering, BaseSMALLINT):
    pass


class MEDIUMINT(NumberOrdering, BaseMEDIUMINT):
    pass


class INTEGER(NumberOrdering, BaseINTEGER):
    pass


class BIGINT(NumberOrdering, BaseBIGINT):
    pass


class FLOAT(NonFiniteParse, NumberOrdering, BaseFLOAT):
    pass


class REAL(NonFiniteParse, NumberOrdering, BaseREAL):
    pass


class DOUBLE(NonFiniteParse, NumberOrdering, BaseDOUBLE):
    pass


class STRING(BaseSTRING):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.binary:
            return f"VARCHAR BINARY({self.length})"
        return super().to_sql(options)


class CHAR(BaseCHAR):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.binary:
            return f"CHAR BINARY({self.length})"
        return super().to_sql(options)


class TEXT(BaseTEXT):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.length:
            self.warn("SQLite does not support TEXT with options. Plain `TEXT` will be used instead.")
        return "TEXT"


class ENUM(BaseENUM):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "TEXT"


class JSON(BaseJSON):
    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return json.loads(value)


class DATE(BaseDATE):
    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        # Rows written without an offset are read in the configured timezone
        if isinstance(value, str) and "+" not in value:
            return localize(value, CallOptions.coerce(options).timezone)
        return date_parser.parse(value) if isinstance(value, str) else value


class DATEONLY(BaseDATEONLY):
    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return value


class SQLiteTypeMapper(TypeMapper):
    """Type mapper for SQLite.

    Examples:
        >>> from coltypes.types import INTEGER
        >>> SQLiteTypeMapper().to_sql(INTEGER(11).unsigned())
        'INTEGER UNSIGNED(11)'
    """

    dialect = Dialect.SQLITE
    DOCS_URL = "https://www.sqlite.org/datatype3.html"

    TYPE_CODES = {
        TypeKey.DATE: TypeCodes(("DATETIME",)),
        TypeKey.STRING: TypeCodes(("VARCHAR", "VARCHAR BINARY")),
        TypeKey.CHAR: TypeCodes(("CHAR", "CHAR BINARY")),
        TypeKey.TEXT: TypeCodes(("TEXT",)),
        TypeKey.TINYINT: TypeCodes(("TINYINT",)),
        TypeKey.SMALLINT: TypeCodes(("SMALLINT",)),
        TypeKey.MEDIUMINT: TypeCodes(("MEDIUMINT",)),
        TypeKey.INTEGER: TypeCodes(("INTEGER",)),
        TypeKey.BIGINT: TypeCodes(("BIGINT",)),
        TypeKey.FLOAT: TypeCodes(("FLOAT",)),
        TypeKey.TIME: TypeCodes(("TIME",)),
        TypeKey.DATEONLY: TypeCodes(("DATE",)),
        TypeKey.BOOLEAN: TypeCodes(("TINYINT",)),
        TypeKey.BLOB: TypeCodes(("TINYBLOB", "BLOB", "LONGBLOB")),
        TypeKey.DECIMAL: TypeCodes(("DECIMAL",)),
        TypeKey.UUID: TypeCodes(("UUID",)),
        TypeKey.ENUM: False,
        TypeKey.REAL: TypeCodes(("REAL",)),
        TypeKey.DOUBLE: TypeCodes(("DOUBLE PRECISION",)),
        TypeKey.GEOMETRY: False,
        TypeKey.JSON: TypeCodes(("JSON", "JSONB")),
    }

    COLSPECS = (
        DATE,
        DATEONLY,
        STRING,
        CHAR,
        NUMBER,
        FLOAT,
        REAL,
        DOUBLE,
        TINYINT,
        SMALLINT,
        MEDIUMINT,
        INTEGER,
        BIGINT,
        TEXT,
        ENUM,
        JSON,
    )
