"""Base TypeMapper class.

This module defines the per-dialect type registry: physical driver type
codes for each logical type, and the dialect variants that override the
base rendering, validation, stringify and parse behavior.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, ClassVar, Mapping, Optional, Union

from coltypes.core.config import config
from coltypes.core.data_type import AbstractType
from coltypes.exceptions import TypeMappingError
from coltypes.models.keys import Dialect, TypeKey
from coltypes.models.options import CallOptions
from coltypes.utils.logging import WarningLog, get_logger, get_warning_log

logger = get_logger(__name__)

Code = Union[int, str]


@dataclass(frozen=True)
class TypeCodes:
    """Physical type codes a driver reports for one logical type.

    Attributes:
        codes: Codes of scalar columns (OIDs, buffer type names, ...)
        array_codes: Codes of array columns of the same element type
    """

    codes: tuple[Code, ...] = ()
    array_codes: tuple[Code, ...] = ()


class TypeMapper:
    """Base class for dialect type registries.

    Subclasses declare their tables as class attributes:

    - ``TYPE_CODES``: logical key -> TypeCodes, or False when the dialect
      does not support the type. Missing keys fall back to base behavior.
    - ``COLSPECS``: dialect variant classes, registered by their key.

    One instance per dialect is built by ``coltypes.dialects.get_dialect``;
    instances are read-only after construction and safe to share.

    Examples:
        >>> from coltypes.dialects import get_dialect
        >>> from coltypes.types import DECIMAL
        >>> mysql = get_dialect("mysql")
        >>> mysql.to_sql(DECIMAL(10, 2).unsigned())
        'DECIMAL(10,2) UNSIGNED'
        >>> mysql.from_source("NEWDECIMAL")
        <TypeKey.DECIMAL: 'DECIMAL'>
    """

    dialect: ClassVar[Dialect]
    DOCS_URL: ClassVar[str] = ""
    TYPE_CODES: ClassVar[Mapping[TypeKey, Union[TypeCodes, bool]]] = {}
    COLSPECS: ClassVar[tuple[type[AbstractType], ...]] = ()

    def __init__(self, warnings: Optional[WarningLog] = None):
        self.warnings = warnings if warnings is not None else get_warning_log()
        self.colspecs: dict[TypeKey, type[AbstractType]] = {}
        self._codes: dict[Code, tuple[TypeKey, bool]] = {}
        self._defaults: dict[TypeKey, AbstractType] = {}

        for variant in self.COLSPECS:
            self.register(variant.key, variant)

        for key, entry in self.TYPE_CODES.items():
            if not isinstance(entry, TypeCodes):
                continue
            for code in entry.codes:
                self._codes.setdefault(self.normalize_source_type(code), (key, False))
            for code in entry.array_codes:
                self._codes.setdefault(self.normalize_source_type(code), (key, True))

        logger.debug(
            "type_mapper_built",
            dialect=self.name,
            variants=len(self.colspecs),
            codes=len(self._codes),
        )

    @property
    def name(self) -> str:
        return self.dialect.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # Registry

    def register(self, key: TypeKey, variant: type[AbstractType]) -> bool:
        """Register a dialect variant for a logical key.

        Registration is idempotent: an existing entry is never replaced.

        Returns:
            True if the variant was registered, False if the key was taken
        """
        if key in self.colspecs:
            return False
        self.colspecs[key] = variant
        return True

    def supports(self, key: TypeKey) -> bool:
        """False only when the dialect explicitly marks the type unsupported."""
        return self.TYPE_CODES.get(key) is not False

    def type_codes(self, key: TypeKey) -> Optional[TypeCodes]:
        entry = self.TYPE_CODES.get(key)
        return entry if isinstance(entry, TypeCodes) else None

    def normalize_source_type(self, source_type: Code) -> Code:
        """Normalize a physical type code for lookup.

        Integer codes are returned as is; names are lowercased and stripped
        of parameters.

        Examples:
            "VARCHAR(255)" -> "varchar"
            "Timestamp With Local Time Zone" -> "timestamp with local time zone"
            1184 -> 1184
        """
        if isinstance(source_type, int):
            return source_type
        normalized = source_type.lower().strip()
        if "(" in normalized:
            normalized = normalized.split("(")[0].strip()
        return normalized

    def _lookup(self, source_type: Code) -> tuple[TypeKey, bool]:
        entry = self._codes.get(self.normalize_source_type(source_type))
        if entry is None:
            raise TypeMappingError(f"Unknown {self.name} type code: {source_type}")
        return entry

    def from_source(self, source_type: Code) -> TypeKey:
        """Logical key for a physical type code.

        Raises:
            TypeMappingError: If the code is not registered
        """
        return self._lookup(source_type)[0]

    def type_class(self, key: TypeKey) -> type[AbstractType]:
        """Dialect variant for a key, or the base family class."""
        variant = self.colspecs.get(key)
        if variant is not None:
            return variant

        from coltypes.types import BASE_TYPES

        try:
            return BASE_TYPES[key]
        except KeyError:
            raise TypeMappingError(f"No column type registered for {key}")

    def type_for(self, key: TypeKey) -> AbstractType:
        """Default-constructed column type of a family, bound to this dialect."""
        data_type = self._defaults.get(key)
        if data_type is None:
            data_type = self._defaults.setdefault(key, self.extend(self.type_class(key)()))
        return data_type

    def extend(self, data_type: AbstractType) -> AbstractType:
        """Rebuild a column type as this dialect's variant.

        Nested element and return types are extended too. Variants may
        rewrite unsupported options, warning through this mapper.
        """
        if data_type.dialect is self:
            return data_type

        variant = self.colspecs.get(data_type.key)
        if variant is None:
            variant = type(data_type) if data_type.dialect is None else self.type_class(data_type.key)

        options = data_type.options
        nested = {
            name: self.extend(getattr(options, name))
            for name in ("subtype", "return_type")
            if isinstance(getattr(options, name), AbstractType)
        }
        if nested:
            options = options.replace(**nested)

        result = variant(variant.adapt_options(options, self.warn))
        result.dialect = self
        return result

    # Behavior

    def warn(self, text: str) -> bool:
        return self.warnings.warn(self.DOCS_URL, text)

    def escape(self, value: Any, timezone: Optional[str] = None, format: bool = False) -> str:
        from coltypes.sql_string import escape

        return escape(value, timezone, self.name, format)

    def call_options(self, options: Union[CallOptions, Mapping[str, Any], None] = None) -> CallOptions:
        """Fill the default timezone and this dialect's escape callback."""
        options = CallOptions.coerce(options)
        timezone = options.timezone or config.timezone
        return options.with_defaults(
            timezone=timezone,
            escape=partial(self.escape, timezone=timezone),
        )

    def to_sql(self, data_type: AbstractType, options: Any = None) -> str:
        return self.extend(data_type).to_sql(self.call_options(options))

    def validate(self, data_type: AbstractType, value: Any, options: Any = None) -> bool:
        return self.extend(data_type).validate(value, self.call_options(options))

    def sanitize(self, data_type: AbstractType, value: Any, options: Any = None) -> Any:
        return self.extend(data_type).sanitize(value, self.call_options(options))

    def stringify(self, data_type: AbstractType, value: Any, options: Any = None) -> Any:
        return self.extend(data_type).stringify(value, self.call_options(options))

    def literal(self, data_type: AbstractType, value: Any, options: Any = None) -> str:
        """Stringify a value and escape it unless the type's output is already SQL.

        Examples:
            >>> from coltypes.dialects import get_dialect
            >>> from coltypes.types import STRING
            >>> get_dialect("postgres").literal(STRING(), "it's")
            "'it''s'"
        """
        if value is None:
            return "NULL"
        data_type = self.extend(data_type)
        options = self.call_options(options)
        result = data_type.stringify(value, options)
        if data_type.self_escaping:
            return str(result)
        return options.escape(result)

    def parse(self, source_type: Code, value: Any, options: Any = None) -> Any:
        """Decode a raw driver value by its physical type code.

        Array codes decode element-wise. NULL is returned as None.

        Raises:
            TypeMappingError: If the code is not registered
        """
        key, is_array = self._lookup(source_type)
        if value is None:
            return None

        variant = self.type_class(key)
        options = self.call_options(options)
        if is_array:
            return [None if v is None else variant.parse(v, options) for v in value]
        return variant.parse(value, options)
