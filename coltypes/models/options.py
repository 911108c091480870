"""Option models for column types.

TypeOptions is the option struct a column type is constructed from.
CallOptions is the per-call bag accepted by validate, stringify,
sanitize and parse.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field as PydanticField


class TypeOptions(BaseModel):
    """Family-specific options of a column type.

    Frozen: a column type never changes its options after construction;
    modifiers produce a copy.

    Examples:
        >>> TypeOptions(length=100, binary=True)
        >>> TypeOptions.model_validate({"type": "POINT", "srid": 4326})
    """

    length: Optional[Union[int, str]] = PydanticField(
        None,
        description="Length (numeric for strings/numbers, 'tiny'/'medium'/'long' for TEXT/BLOB)",
    )
    binary: bool = PydanticField(False, description="Binary collation for STRING/CHAR")
    zerofill: bool = PydanticField(False, description="ZEROFILL numeric flag")
    unsigned: bool = PydanticField(False, description="UNSIGNED numeric flag")
    decimals: Optional[int] = PydanticField(None, description="Decimals for NUMBER family")
    precision: Optional[int] = PydanticField(None, description="Precision for DECIMAL")
    scale: Optional[int] = PydanticField(None, description="Scale for DECIMAL")
    subtype: Optional[Any] = PydanticField(None, description="Element type of RANGE/ARRAY")
    enum_values: Optional[tuple[Any, ...]] = PydanticField(
        None, alias="values", description="Declared ENUM values"
    )
    geometry_type: Optional[str] = PydanticField(
        None, alias="type", description="GEOMETRY/GEOGRAPHY shape (POINT, ...)"
    )
    srid: Optional[int] = PydanticField(None, description="Spatial reference id")
    return_type: Optional[Any] = PydanticField(None, description="VIRTUAL return type")
    field_names: Optional[tuple[str, ...]] = PydanticField(
        None, alias="fields", description="VIRTUAL dependency fields"
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    @classmethod
    def coerce(cls, options: Union["TypeOptions", Mapping[str, Any], None]) -> "TypeOptions":
        """Build TypeOptions from a mapping, an instance, or None."""
        if options is None:
            return cls()
        if isinstance(options, TypeOptions):
            return options
        return cls.model_validate(dict(options))

    def replace(self, **changes: Any) -> "TypeOptions":
        """Return a copy with the given fields changed."""
        return self.model_copy(update=changes)


class CallOptions(BaseModel):
    """Per-call options for validate / stringify / sanitize / parse.

    Examples:
        >>> CallOptions(timezone="Europe/Paris")
        >>> CallOptions(raw=True)
    """

    raw: bool = PydanticField(False, description="Skip sanitize normalization")
    timezone: Optional[str] = PydanticField(
        None, description="Named zone or fixed offset for temporal values"
    )
    escape: Optional[Callable[..., str]] = PydanticField(
        None, description="Literal escape callback injected by the dialect"
    )
    operation: Optional[str] = PydanticField(
        None, description="Statement context (e.g. 'where')"
    )
    accept_strings: bool = PydanticField(
        False, description="UUID validation accepts arbitrary strings"
    )
    table_name: Optional[str] = PydanticField(
        None, description="Table of the column (PostgreSQL enum array casts)"
    )
    field_name: Optional[str] = PydanticField(
        None, description="Column name (PostgreSQL enum array casts)"
    )
    type_parser: Optional[Callable[[Any], Any]] = PydanticField(
        None, description="Parser for element values (PostgreSQL range bounds)"
    )

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @classmethod
    def coerce(cls, options: Union["CallOptions", Mapping[str, Any], None]) -> "CallOptions":
        """Build CallOptions from a mapping, an instance, or None."""
        if options is None:
            return cls()
        if isinstance(options, CallOptions):
            return options
        return cls.model_validate(dict(options))

    def with_defaults(self, **defaults: Any) -> "CallOptions":
        """Fill unset (None) fields from defaults, keeping explicit values."""
        updates = {k: v for k, v in defaults.items() if getattr(self, k) is None}
        if not updates:
            return self
        return self.model_copy(update=updates)
