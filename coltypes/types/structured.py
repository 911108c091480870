"""Structured and identifier column types.

HSTORE, JSON/JSONB, BLOB, the UUID family, ENUM and VIRTUAL.
"""

from __future__ import annotations

import json
import math
import uuid
from collections.abc import Mapping
from typing import Any, ClassVar, Optional

from coltypes.core.data_type import AbstractType, CallOptionsLike, build_options, instantiate
from coltypes.models.keys import TypeKey
from coltypes.models.options import CallOptions, TypeOptions
from coltypes.sql_string import escape as default_escape
from coltypes.utils.validators import describe, is_uuid

_BLOB_SIZES = {"tiny": "TINYBLOB", "medium": "MEDIUMBLOB", "long": "LONGBLOB"}


def _same_value(value: Any, member: Any) -> bool:
    # booleans never match numbers; NaN matches NaN
    if isinstance(value, bool) != isinstance(member, bool):
        return False
    if isinstance(value, float) and isinstance(member, float) and math.isnan(value) and math.isnan(member):
        return True
    return value == member


def _finite(value: Any) -> Any:
    """Replace NaN and infinities with None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(item) for item in value]
    return value


class HSTORE(AbstractType):
    key = TypeKey.HSTORE

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not isinstance(value, dict):
            self.fail(value, "hstore")
        return True


class JSON(AbstractType):
    """JSON document. Any value is accepted; literals are compact JSON."""

    key = TypeKey.JSON

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        return json.dumps(
            _finite(value), separators=(",", ":"), ensure_ascii=False, allow_nan=False, default=str
        )


class JSONB(JSON):
    key = TypeKey.JSONB


class BLOB(AbstractType):
    """Binary data.

    Literals are hex encoded; the hex wrapper is the ``_hexify`` slot so
    dialects can swap ``X'..'`` for their own syntax.

    Examples:
        >>> BLOB().stringify(bytes([0xAB, 0xCD]))
        "X'abcd'"
        >>> str(BLOB("Medium"))
        'MEDIUMBLOB'
    """

    key = TypeKey.BLOB
    self_escaping = True

    def __init__(self, length: Any = None, **kwargs: Any):
        super().__init__(build_options(length, {"length": length}, kwargs))

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return _BLOB_SIZES.get(str(self.options.length or "").lower(), self.key.value)

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not isinstance(value, (str, bytes, bytearray, memoryview)):
            self.fail(value, "blob")
        return True

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        if isinstance(value, (list, tuple)):
            data = bytes(value)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            data = bytes(value)
        else:
            data = str(value).encode("utf-8")
        return self._hexify(data.hex())

    def _hexify(self, hex_value: str) -> str:
        return f"X'{hex_value}'"


class UUID(AbstractType):
    """UUID column; validates RFC 4122 strings of any version."""

    key = TypeKey.UUID
    version: ClassVar[Optional[int]] = None

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        options = CallOptions.coerce(options)
        if isinstance(value, uuid.UUID):
            value = str(value)
        if not isinstance(value, str):
            self.fail(value, self.key.value.lower())
        if not is_uuid(value, self.version) and not options.accept_strings:
            self.fail(value, self.key.value.lower())
        return True


class UUIDV1(UUID):
    """Default value marker for a version 1 UUID."""

    key = TypeKey.UUIDV1
    version = 1


class UUIDV4(UUID):
    """Default value marker for a version 4 UUID."""

    key = TypeKey.UUIDV4
    version = 4


class ENUM(AbstractType):
    """Enumeration of allowed values.

    Values may be given positionally, as lists, or as ``{"values": [...]}``:

        >>> ENUM("a", "b").options.enum_values == ENUM(["a", "b"]).options.enum_values
        True
    """

    key = TypeKey.ENUM

    def __init__(self, *values: Any, **kwargs: Any):
        if len(values) == 1 and isinstance(values[0], (Mapping, TypeOptions)):
            options = build_options(values[0], {}, kwargs)
        else:
            flat: list[Any] = []
            for value in values:
                flat.extend(value if isinstance(value, (list, tuple)) else [value])
            options = build_options(None, {"enum_values": tuple(flat)}, kwargs)
        if options.enum_values is None:
            options = options.replace(enum_values=())
        super().__init__(options)

    @property
    def values(self) -> tuple:
        return self.options.enum_values

    def to_sql(self, options: CallOptionsLike = None) -> str:
        escape = CallOptions.coerce(options).escape or default_escape
        return "ENUM(" + ", ".join(escape(value) for value in self.values) + ")"

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not any(_same_value(value, member) for member in self.values):
            self.fail(value, f"choice in {describe(list(self.values))}")
        return True


class VIRTUAL(AbstractType):
    """Attribute with no physical column.

    Carries an optional return type and the names of the fields it
    depends on.
    """

    key = TypeKey.VIRTUAL

    def __init__(self, return_type: Any = None, fields: Optional[list[str]] = None, **kwargs: Any):
        options = build_options(
            return_type,
            {"return_type": return_type, "field_names": tuple(fields) if fields else None},
            kwargs,
        )
        if options.return_type is not None:
            options = options.replace(return_type=instantiate(options.return_type))
        super().__init__(options)

    @property
    def return_type(self) -> Any:
        return self.options.return_type

    @property
    def fields(self) -> tuple:
        return self.options.field_names or ()
