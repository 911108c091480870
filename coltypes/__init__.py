"""coltypes - Logical column types rendered for SQL dialects."""

__version__ = "0.1.0"

# Re-export key models for convenience
from coltypes.models import CallOptions, Dialect, TypeKey, TypeOptions

# Re-export core classes for custom dialects
from coltypes.core import AbstractType

# Re-export the dialect registry and literal encoding
from coltypes.dialects import get_dialect
from coltypes.sql_string import escape, format, format_named

__all__ = [
    # Version
    "__version__",
    # Models
    "TypeKey",
    "Dialect",
    "TypeOptions",
    "CallOptions",
    # Core
    "AbstractType",
    # Dialects
    "get_dialect",
    # Literals
    "escape",
    "format",
    "format_named",
]
