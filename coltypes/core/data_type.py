"""Base column type.

This module defines AbstractType, the contract every logical column type
implements: DDL rendering, value validation, literal stringification,
sanitization, dirty checking and driver value parsing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional, Union

from coltypes.exceptions import ValidationError
from coltypes.models.keys import TypeKey
from coltypes.models.options import CallOptions, TypeOptions
from coltypes.utils.logging import get_warning_log
from coltypes.utils.validators import describe

if TYPE_CHECKING:
    from coltypes.core.type_mapper import TypeMapper

OptionsLike = Union[TypeOptions, Mapping[str, Any], None]
CallOptionsLike = Union[CallOptions, Mapping[str, Any], None]


def build_options(first: Any, positional: dict[str, Any], kwargs: dict[str, Any]) -> TypeOptions:
    """Resolve the two equivalent constructor call forms into TypeOptions.

    A column type can be built from positional scalars (``STRING(100, True)``)
    or from an options object (``STRING({"length": 100, "binary": True})``).

    Args:
        first: First positional argument as given by the caller
        positional: Positional arguments by option name
        kwargs: Keyword options

    Returns:
        Validated TypeOptions
    """
    if isinstance(first, TypeOptions):
        return first.replace(**kwargs) if kwargs else first
    if isinstance(first, Mapping):
        data = dict(first)
    else:
        data = {name: value for name, value in positional.items() if value is not None}
    data.update(kwargs)
    return TypeOptions.model_validate(data)


def instantiate(type_or_instance: Any) -> Any:
    """Instantiate a column type class; pass instances through."""
    if isinstance(type_or_instance, type):
        return type_or_instance()
    return type_or_instance


class AbstractType:
    """Base class for all column types.

    A column type is built once per column definition and treated as
    immutable afterwards: its options are frozen and modifiers return a
    new instance.

    Subclasses override the ``_stringify`` / ``_sanitize`` slots (identity
    by default) rather than the public methods.

    Attributes:
        key: Canonical logical key, shared by all dialect variants
        docs_url: Reference linked from dialect warnings
        self_escaping: True when stringify already yields SQL text that
            must not be quoted again
        options: Frozen TypeOptions
        dialect: TypeMapper this instance was extended for, or None
    """

    key: ClassVar[TypeKey] = TypeKey.ABSTRACT
    docs_url: ClassVar[str] = ""
    self_escaping: ClassVar[bool] = False

    def __init__(self, options: OptionsLike = None):
        self.options: TypeOptions = TypeOptions.coerce(options)
        self.dialect: Optional[TypeMapper] = None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.key.value}>"

    def __str__(self) -> str:
        return self.to_sql()

    @classmethod
    def adapt_options(cls, options: TypeOptions, warn: Any) -> TypeOptions:
        """Rewrite options a dialect variant does not support.

        Called by TypeMapper.extend before the variant is built.

        Args:
            options: Options of the base type
            warn: Callable taking a warning text

        Returns:
            Options for the variant
        """
        return options

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return self.key.value

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        return True

    def stringify(self, value: Any, options: CallOptionsLike = None) -> Any:
        """Serialize an in-memory value to its SQL literal representation."""
        return self._stringify(value, CallOptions.coerce(options))

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        return value

    def sanitize(self, value: Any, options: CallOptionsLike = None) -> Any:
        """Normalize a value right after assignment, before validation."""
        return self._sanitize(value, CallOptions.coerce(options))

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        return value

    def is_changed(self, value: Any, original: Any) -> bool:
        return value != original

    @classmethod
    def parse(cls, value: Any, options: CallOptionsLike = None) -> Any:
        """Decode a raw driver value. Identity unless a dialect overrides it."""
        return value

    def warn(self, text: str) -> bool:
        """Emit a deduplicated dialect warning."""
        if self.dialect is not None:
            return self.dialect.warn(text)
        return get_warning_log().warn(self.docs_url, text)

    def fail(self, value: Any, constraint: str) -> None:
        """Raise a ValidationError for a rejected value."""
        raise ValidationError(
            f"{describe(value)} is not a valid {constraint}", value=value, constraint=constraint
        )

    def _modified(self, **changes: Any) -> "AbstractType":
        """Return a copy of this type with some options changed."""
        clone = type(self)(self.options.replace(**changes))
        if self.dialect is not None:
            return self.dialect.extend(clone)
        return clone
