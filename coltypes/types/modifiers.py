"""Family-restricted column type modifiers.

Modifiers are builder methods that return a new column type with one
option set. Each is mixed into the families that support it only, so
calling ``STRING().unsigned()`` is an AttributeError rather than a no-op.

Example:
    >>> from coltypes.types import DECIMAL, INTEGER
    >>> str(INTEGER(11).unsigned().zerofill())
    'INTEGER(11) UNSIGNED ZEROFILL'
    >>> str(DECIMAL().with_precision(10).with_scale(2))
    'DECIMAL(10,2)'
"""

from __future__ import annotations

from typing import Any

from coltypes.exceptions import UnsupportedModifierError
from coltypes.models.keys import TypeKey


class SignedModifiers:
    """UNSIGNED / ZEROFILL for the numeric families."""

    def unsigned(self) -> Any:
        return self._modified(unsigned=True)

    def zerofill(self) -> Any:
        return self._modified(zerofill=True)


class BinaryModifier:
    """BINARY collation for STRING and CHAR."""

    def binary(self) -> Any:
        return self._modified(binary=True)


class PrecisionModifiers:
    """PRECISION / SCALE for DECIMAL."""

    def with_precision(self, precision: int) -> Any:
        return self._modified(precision=precision)

    def with_scale(self, scale: int) -> Any:
        return self._modified(scale=scale)


_NUMERIC_FAMILIES = frozenset(
    {
        TypeKey.TINYINT,
        TypeKey.SMALLINT,
        TypeKey.MEDIUMINT,
        TypeKey.INTEGER,
        TypeKey.BIGINT,
        TypeKey.FLOAT,
        TypeKey.DOUBLE,
        TypeKey.REAL,
        TypeKey.DECIMAL,
    }
)

# Modifier name -> (builder method, families it is defined for)
MODIFIERS: dict[str, tuple[str, frozenset[TypeKey]]] = {
    "UNSIGNED": ("unsigned", _NUMERIC_FAMILIES),
    "ZEROFILL": ("zerofill", _NUMERIC_FAMILIES),
    "BINARY": ("binary", frozenset({TypeKey.STRING, TypeKey.CHAR})),
    "PRECISION": ("with_precision", frozenset({TypeKey.DECIMAL})),
    "SCALE": ("with_scale", frozenset({TypeKey.DECIMAL})),
}


def apply_modifier(data_type: Any, name: str, *args: Any) -> Any:
    """Apply a modifier by name.

    Args:
        data_type: Column type instance
        name: Modifier name (UNSIGNED, ZEROFILL, BINARY, PRECISION, SCALE)
        *args: Modifier arguments (the value for PRECISION / SCALE)

    Returns:
        New column type with the modifier applied

    Raises:
        UnsupportedModifierError: If the modifier is unknown or not defined
            for the type's family
    """
    entry = MODIFIERS.get(name.upper())
    if entry is None:
        raise UnsupportedModifierError(
            f"Unknown modifier: {name}. Must be one of: {', '.join(MODIFIERS)}"
        )

    method, families = entry
    if data_type.key not in families:
        raise UnsupportedModifierError(
            f"{name.upper()} is not defined for {data_type.key.value}"
        )
    return getattr(data_type, method)(*args)
