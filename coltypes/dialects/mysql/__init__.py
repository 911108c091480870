"""MySQL dialect for coltypes."""

from coltypes.dialects.mysql.type_mapper import MySQLTypeMapper

__all__ = ["MySQLTypeMapper"]
