"""Oracle dialect for coltypes."""

from coltypes.dialects.oracle.type_mapper import OracleTypeMapper

__all__ = ["OracleTypeMapper"]
