"""PostgreSQL type mapper implementation.

Physical codes are type OIDs. Ranges, arrays, hstore and geometries
render their own SQL literal text.
"""

from __future__ import annotations

import json
import math
from functools import partial
from typing import Any, Optional

from coltypes.core.data_type import CallOptionsLike
from coltypes.core.type_mapper import Code, TypeCodes, TypeMapper
from coltypes.dialects.adapters import plain_float, plain_number
from coltypes.dialects.postgres import hstore
from coltypes.dialects.postgres import range as pg_range
from coltypes.exceptions import EncodingError
from coltypes.models.keys import Dialect, TypeKey
from coltypes.models.options import CallOptions, TypeOptions
from coltypes.types import ARRAY as BaseARRAY
from coltypes.types import BIGINT as BaseBIGINT
from coltypes.types import BLOB as BaseBLOB
from coltypes.types import BOOLEAN as BaseBOOLEAN
from coltypes.types import CHAR as BaseCHAR
from coltypes.types import DATE as BaseDATE
from coltypes.types import DATEONLY as BaseDATEONLY
from coltypes.types import DOUBLE as BaseDOUBLE
from coltypes.types import ENUM as BaseENUM
from coltypes.types import FLOAT as BaseFLOAT
from coltypes.types import GEOGRAPHY as BaseGEOGRAPHY
from coltypes.types import GEOMETRY as BaseGEOMETRY
from coltypes.types import HSTORE as BaseHSTORE
from coltypes.types import INTEGER as BaseINTEGER
from coltypes.types import NOW as BaseNOW
from coltypes.types import RANGE as BaseRANGE
from coltypes.types import REAL as BaseREAL
from coltypes.types import SMALLINT as BaseSMALLINT
from coltypes.types import STRING as BaseSTRING
from coltypes.types import TEXT as BaseTEXT
from coltypes.types.numeric import to_boolean
from coltypes.utils.geo import hex_wkb_to_geojson

LABEL = "PostgreSQL"

_INFINITY_TEXT = {"infinity": math.inf, "-infinity": -math.inf}

# Range OID (and range array OID) -> element type
RANGE_ELEMENTS: dict[int, TypeKey] = {
    3904: TypeKey.INTEGER,
    3905: TypeKey.INTEGER,
    3906: TypeKey.DECIMAL,
    3907: TypeKey.DECIMAL,
    3908: TypeKey.DATE,
    3909: TypeKey.DATE,
    3910: TypeKey.DATE,
    3911: TypeKey.DATE,
    3912: TypeKey.DATEONLY,
    3913: TypeKey.DATEONLY,
    3926: TypeKey.BIGINT,
    3927: TypeKey.BIGINT,
}


def _is_infinite(value: Any) -> bool:
    return isinstance(value, float) and math.isinf(value)


def _stringify_infinite(value: float) -> str:
    return "-Infinity" if value < 0 else "Infinity"


def _infinity_from_text(value: Any) -> Optional[float]:
    if isinstance(value, str):
        return _INFINITY_TEXT.get(value.lower())
    return None


class STRING(BaseSTRING):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.binary:
            return "BYTEA"
        return super().to_sql(options)


class CHAR(BaseCHAR):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.binary:
            return "BYTEA"
        return super().to_sql(options)


class TEXT(BaseTEXT):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.length:
            self.warn("PostgreSQL does not support TEXT with options. Plain `TEXT` will be used instead.")
        return "TEXT"


class BLOB(BaseBLOB):
    """BYTEA column; literals use the bytea hex format ``E'\\\\x..'``."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.options.length:
            self.warn(
                "PostgreSQL does not support BLOB (BYTEA) with options. Plain `BYTEA` will be used instead."
            )
        return "BYTEA"

    def _hexify(self, hex_value: str) -> str:
        return "E'\\\\x" + hex_value + "'"


def _pg_boolean(value: Any) -> Any:
    return to_boolean(value, true_values=("true", "t"), false_values=("false", "f"))


class BOOLEAN(BaseBOOLEAN):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "BOOLEAN"

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        return _pg_boolean(value)

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return _pg_boolean(value)


class DATE(BaseDATE):
    """TIMESTAMP WITH TIME ZONE; accepts the infinities."""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "TIMESTAMP WITH TIME ZONE"

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if _is_infinite(value):
            return True
        return super().validate(value, options)

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if _is_infinite(value):
            return _stringify_infinite(value)
        return super()._stringify(value, options)

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        if options.raw or _is_infinite(value):
            return value
        infinity = _infinity_from_text(value)
        if infinity is not None:
            return infinity
        return super()._sanitize(value, options)


class DATEONLY(BaseDATEONLY):
    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if _is_infinite(value):
            return _stringify_infinite(value)
        return super()._stringify(value, options)

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        if options.raw or _is_infinite(value):
            return value
        infinity = _infinity_from_text(value)
        if infinity is not None:
            return infinity
        return super()._sanitize(value, options)

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        if value == "infinity":
            return math.inf
        if value == "-infinity":
            return -math.inf
        return value


class NOW(BaseNOW):
    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "CURRENT_DATE"


class SMALLINT(BaseSMALLINT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "SMALLINT")


class INTEGER(BaseINTEGER):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "INTEGER")

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return int(value)


class BIGINT(BaseBIGINT):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "BIGINT")


class REAL(BaseREAL):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "REAL")


class DOUBLE(BaseDOUBLE):
    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_number(options, warn, LABEL, "DOUBLE")


class FLOAT(BaseFLOAT):
    """FLOAT(n) where n selects REAL (1-24) or DOUBLE PRECISION (25-53)."""

    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        return plain_float(options, warn, LABEL)


class GEOMETRY(BaseGEOMETRY):
    """PostGIS geometry; literals go through ``ST_GeomFromGeoJSON``.

    Examples:
        >>> str(GEOMETRY("POINT", 4326))
        'GEOMETRY(POINT,4326)'
    """

    def to_sql(self, options: CallOptionsLike = None) -> str:
        result = self.key.value
        if self.geometry_type:
            result += "(" + self.geometry_type
            if self.srid:
                result += f",{self.srid}"
            result += ")"
        return result

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        escape = options.escape or partial(_postgres_escape, timezone=options.timezone)
        return f"ST_GeomFromGeoJSON({escape(json.dumps(value, separators=(',', ':')))})"

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return hex_wkb_to_geojson(value)


class GEOGRAPHY(GEOMETRY, BaseGEOGRAPHY):
    key = TypeKey.GEOGRAPHY


class HSTORE(BaseHSTORE):
    self_escaping = True

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        return "'" + hstore.stringify(value) + "'"

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return hstore.parse(value)


class RANGE(BaseRANGE):
    """Range literal ``'[lower,upper)'``; a single value is cast to the element type.

    Examples:
        >>> RANGE().stringify([1, 10])
        "'[1,10)'"
        >>> RANGE().stringify(5)
        "'5'::integer"
    """

    self_escaping = True

    def _bounds(self, values: Any, options: CallOptions) -> list[Any]:
        if isinstance(values, pg_range.Range):
            if values.empty:
                return []
            values = [
                {"value": values.lower, "inclusive": values.inclusive[0]},
                {"value": values.upper, "inclusive": values.inclusive[1]},
            ]

        bounds = []
        for bound in values:
            inclusive = None
            if isinstance(bound, dict) and "value" in bound:
                inclusive = bound.get("inclusive")
                bound = bound["value"]
            if not (bound is None or _is_infinite(bound)):
                bound = self.subtype.stringify(bound, options)
            bounds.append(bound if inclusive is None else {"value": bound, "inclusive": inclusive})
        return bounds

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if not isinstance(value, (list, tuple, pg_range.Range)):
            text = str(self.subtype.stringify(value, options))
            return "'" + text.replace("'", "''") + "'::" + self.to_cast_type()
        text = pg_range.stringify(self._bounds(value, options))
        return "'" + text.replace("'", "''") + "'"

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return pg_range.parse(value, CallOptions.coerce(options).type_parser)


class ARRAY(BaseARRAY):
    """``ARRAY[..]`` literal cast to the column type.

    ENUM arrays are cast to the per-column enum type, which needs
    ``table_name`` and ``field_name`` in the call options.

    Examples:
        >>> from coltypes.types import INTEGER
        >>> ARRAY(INTEGER).stringify([1, 2], {"escape": str})
        'ARRAY[1,2]::INTEGER[]'
    """

    self_escaping = True

    def _elements(self, values: Any, options: CallOptions) -> list[str]:
        escape = options.escape or partial(_postgres_escape, timezone=options.timezone)
        elements = []
        for value in values:
            if self.subtype is not None:
                value = self.subtype.stringify(value, options)
                if self.subtype.self_escaping:
                    elements.append(str(value))
                    continue
            elements.append(escape(value))
        return elements

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        text = "ARRAY[" + ",".join(self._elements(value, options)) + "]"
        if self.subtype is None:
            return text

        cast = self.to_sql(options)
        if isinstance(self.subtype, BaseENUM):
            if not (options.table_name and options.field_name):
                raise EncodingError("ENUM array literals need table_name and field_name")
            cast = f'"enum_{options.table_name}_{options.field_name}"[]'
        return text + "::" + cast


def _postgres_escape(value: Any, timezone: Optional[str] = None) -> str:
    from coltypes.sql_string import escape

    return escape(value, timezone, "postgres")


class PostgresTypeMapper(TypeMapper):
    """Type mapper for PostgreSQL.

    Examples:
        >>> from coltypes.types import INTEGER
        >>> PostgresTypeMapper().to_sql(INTEGER(11))
        'INTEGER'
        >>> PostgresTypeMapper().from_source(1184)
        <TypeKey.DATE: 'DATE'>
    """

    dialect = Dialect.POSTGRES
    DOCS_URL = "http://www.postgresql.org/docs/9.4/static/datatype.html"

    TYPE_CODES = {
        TypeKey.UUID: TypeCodes((2950,), (2951,)),
        TypeKey.JSON: TypeCodes((114,), (199,)),
        TypeKey.JSONB: TypeCodes((3802,), (3807,)),
        TypeKey.TIME: TypeCodes((1083,), (1183,)),
        TypeKey.DATEONLY: TypeCodes((1082,), (1182,)),
        TypeKey.DECIMAL: TypeCodes((1700,), (1231,)),
        TypeKey.STRING: TypeCodes((1043,), (1015,)),
        TypeKey.TEXT: TypeCodes((25,), (1009,)),
        TypeKey.CHAR: TypeCodes((18, 1042), (1002, 1014)),
        TypeKey.BOOLEAN: TypeCodes((16,), (1000,)),
        TypeKey.DATE: TypeCodes((1184,), (1185,)),
        TypeKey.SMALLINT: TypeCodes((21,), (1005,)),
        TypeKey.INTEGER: TypeCodes((23,), (1007,)),
        TypeKey.BIGINT: TypeCodes((20,), (1016,)),
        TypeKey.REAL: TypeCodes((700,), (1021,)),
        TypeKey.DOUBLE: TypeCodes((701,), (1022,)),
        TypeKey.BLOB: TypeCodes((17,), (1001,)),
        TypeKey.GEOMETRY: TypeCodes(),
        TypeKey.GEOGRAPHY: TypeCodes(),
        TypeKey.HSTORE: TypeCodes(),
        TypeKey.ENUM: TypeCodes(),
        TypeKey.RANGE: TypeCodes(
            (3904, 3906, 3908, 3910, 3912, 3926),
            (3905, 3907, 3909, 3911, 3913, 3927),
        ),
    }

    COLSPECS = (
        DATEONLY,
        NOW,
        BLOB,
        STRING,
        CHAR,
        TEXT,
        SMALLINT,
        INTEGER,
        BIGINT,
        BOOLEAN,
        DATE,
        REAL,
        DOUBLE,
        FLOAT,
        GEOMETRY,
        GEOGRAPHY,
        HSTORE,
        RANGE,
        ARRAY,
    )

    def parse(self, source_type: Code, value: Any, options: Any = None) -> Any:
        """Decode a raw value; range bounds are decoded by their element type."""
        element = RANGE_ELEMENTS.get(source_type) if isinstance(source_type, int) else None
        if element is not None:
            options = CallOptions.coerce(options)
            if options.type_parser is None:
                element_parser = self.type_class(element).parse
                options = options.with_defaults(
                    type_parser=lambda bound: element_parser(bound, options)
                )
        return super().parse(source_type, value, options)
