"""Character column types: STRING, CHAR and TEXT."""

from __future__ import annotations

from typing import Any, Optional, Union

from coltypes.core.data_type import AbstractType, CallOptionsLike, build_options
from coltypes.models.keys import TypeKey
from coltypes.types.modifiers import BinaryModifier

_TEXT_SIZES = {"tiny": "TINYTEXT", "medium": "MEDIUMTEXT", "long": "LONGTEXT"}


class STRING(BinaryModifier, AbstractType):
    """Variable length string, VARCHAR(255) unless a length is given.

    Examples:
        >>> str(STRING())
        'VARCHAR(255)'
        >>> str(STRING(100, True)) == str(STRING({"length": 100, "binary": True}))
        True
    """

    key = TypeKey.STRING

    def __init__(self, length: Any = None, binary: Optional[bool] = None, **kwargs: Any):
        options = build_options(length, {"length": length, "binary": binary}, kwargs)
        super().__init__(options.replace(length=options.length or 255))

    @property
    def length(self) -> Union[int, str]:
        return self.options.length

    def _binary_suffix(self) -> str:
        return " BINARY" if self.options.binary else ""

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return f"VARCHAR({self.length}){self._binary_suffix()}"

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if isinstance(value, str):
            return True
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return True
        if self.options.binary and isinstance(value, (bytes, bytearray, memoryview)):
            return True
        self.fail(value, "string")


class CHAR(STRING):
    """Fixed length string."""

    key = TypeKey.CHAR

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return f"CHAR({self.length}){self._binary_suffix()}"


class TEXT(AbstractType):
    """Unlimited length text.

    ``length`` may be "tiny", "medium" or "long" (any case) to select the
    MySQL-style sized variants.
    """

    key = TypeKey.TEXT

    def __init__(self, length: Any = None, **kwargs: Any):
        super().__init__(build_options(length, {"length": length}, kwargs))

    def _sized(self, sizes: dict[str, str]) -> Optional[str]:
        return sizes.get(str(self.options.length or "").lower())

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return self._sized(_TEXT_SIZES) or self.key.value

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not isinstance(value, str):
            self.fail(value, "string")
        return True
