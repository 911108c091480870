"""Numeric column types and BOOLEAN.

NUMBER is the base of every numeric family and owns the default
rendering ``KEY[(length[,decimals])][ UNSIGNED][ ZEROFILL]``.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from coltypes.core.data_type import AbstractType, CallOptionsLike, build_options
from coltypes.models.keys import TypeKey
from coltypes.models.options import CallOptions
from coltypes.types.modifiers import PrecisionModifiers, SignedModifiers
from coltypes.utils.validators import is_boolean, is_decimal, is_float, is_int, is_non_finite


class NUMBER(AbstractType):
    """Base numeric type.

    Examples:
        >>> str(NUMBER(length=10, decimals=2, unsigned=True))
        'NUMBER(10,2) UNSIGNED'
    """

    key = TypeKey.NUMBER

    def __init__(self, length: Any = None, decimals: Optional[int] = None, **kwargs: Any):
        super().__init__(build_options(length, {"length": length, "decimals": decimals}, kwargs))

    def _length_sql(self) -> str:
        if not self.options.length:
            return ""
        if isinstance(self.options.decimals, int):
            return f"({self.options.length},{self.options.decimals})"
        return f"({self.options.length})"

    def _flags_sql(self) -> str:
        result = ""
        if self.options.unsigned:
            result += " UNSIGNED"
        if self.options.zerofill:
            result += " ZEROFILL"
        return result

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return self.key.value + self._length_sql() + self._flags_sql()

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not is_float(value):
            self.fail(value, self.key.value.lower())
        return True


class INTEGER(SignedModifiers, NUMBER):
    """32 bit integer."""

    key = TypeKey.INTEGER

    def __init__(self, length: Any = None, **kwargs: Any):
        super().__init__(build_options(length, {"length": length}, kwargs))

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not is_int(value):
            self.fail(value, self.key.value.lower())
        return True


class TINYINT(INTEGER):
    key = TypeKey.TINYINT


class SMALLINT(INTEGER):
    key = TypeKey.SMALLINT


class MEDIUMINT(INTEGER):
    key = TypeKey.MEDIUMINT


class BIGINT(INTEGER):
    key = TypeKey.BIGINT


class FLOAT(SignedModifiers, NUMBER):
    """Floating point number.

    Non-finite values stringify to quoted literals (``'NaN'``,
    ``'Infinity'``, ``'-Infinity'``); finite values pass through unquoted.
    """

    key = TypeKey.FLOAT
    self_escaping = True

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not (is_non_finite(value) or is_float(value)):
            self.fail(value, self.key.value.lower())
        return True

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return "'NaN'"
        if math.isnan(number):
            return "'NaN'"
        if math.isinf(number):
            return "'-Infinity'" if number < 0 else "'Infinity'"
        return value


class REAL(FLOAT):
    key = TypeKey.REAL


class DOUBLE(FLOAT):
    key = TypeKey.DOUBLE


class DECIMAL(PrecisionModifiers, SignedModifiers, NUMBER):
    """Fixed point number.

    Examples:
        >>> str(DECIMAL())
        'DECIMAL'
        >>> str(DECIMAL(10))
        'DECIMAL(10)'
        >>> str(DECIMAL(10, 2))
        'DECIMAL(10,2)'
    """

    key = TypeKey.DECIMAL

    def __init__(self, precision: Any = None, scale: Optional[int] = None, **kwargs: Any):
        super().__init__(build_options(precision, {"precision": precision, "scale": scale}, kwargs))

    def _precision_sql(self) -> str:
        parts = [str(p) for p in (self.options.precision, self.options.scale) if p]
        return f"({','.join(parts)})" if parts else ""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "DECIMAL" + self._precision_sql()

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not is_decimal(value):
            self.fail(value, "decimal")
        return True


def to_boolean(value: Any, true_values: tuple = ("true",), false_values: tuple = ("false",)) -> Any:
    """Normalize driver and user boolean representations.

    Single-byte buffers (BIT columns) become their byte value; recognized
    strings and the numbers 1 / 0 become bools. Anything else is returned
    unchanged so validation can reject it.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (bytes, bytearray)) and len(value) == 1:
        value = value[0]

    if isinstance(value, str):
        if value in true_values:
            return True
        if value in false_values:
            return False
    elif isinstance(value, (int, float)):
        if value == 1:
            return True
        if value == 0:
            return False
    return value


class BOOLEAN(AbstractType):
    key = TypeKey.BOOLEAN

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "TINYINT(1)"

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not is_boolean(value):
            self.fail(value, "boolean")
        return True

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        return to_boolean(value)

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        return to_boolean(value)
