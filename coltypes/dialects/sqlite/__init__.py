"""SQLite dialect for coltypes."""

from coltypes.dialects.sqlite.type_mapper import SQLiteTypeMapper

__all__ = ["SQLiteTypeMapper"]
