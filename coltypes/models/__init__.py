"""coltypes models package.

This package contains the logical type and dialect identifiers and the
Pydantic option models column types are built from.
"""

from coltypes.models.keys import Dialect, TypeKey, to_dialect
from coltypes.models.options import CallOptions, TypeOptions

__all__ = [
    # Keys
    "TypeKey",
    "Dialect",
    "to_dialect",
    # Options
    "TypeOptions",
    "CallOptions",
]
