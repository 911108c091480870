"""Microsoft SQL Server dialect for coltypes."""

from coltypes.dialects.mssql.type_mapper import MSSQLTypeMapper

__all__ = ["MSSQLTypeMapper"]
