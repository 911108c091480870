"""coltypes exception hierarchy."""

from __future__ import annotations

from typing import Any, Optional


class ColTypesError(Exception):
    """Base exception for all coltypes errors."""

    pass


class ConfigurationError(ColTypesError):
    """Raised when configuration is invalid or missing."""

    pass


class ValidationError(ColTypesError):
    """Raised when a value is rejected by a column type.

    Carries the rejected value and a short description of the violated
    constraint so validation orchestrators can aggregate failures.
    """

    def __init__(self, message: str, value: Any = None, constraint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.value = value
        self.constraint = constraint


class EncodingError(ColTypesError):
    """Raised when a value cannot be rendered as a SQL literal.

    Signals a caller defect (non-coercible value, missing named parameter),
    never bad user input. Not meant to be retried.
    """

    pass


class SchemaError(ColTypesError):
    """Raised when a column type definition is invalid."""

    pass


class UnsupportedModifierError(SchemaError):
    """Raised when a modifier is applied to a type family that does not define it."""

    pass


class TypeMappingError(ColTypesError):
    """Raised when type mapping between logical and dialect types fails."""

    pass
