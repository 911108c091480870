"""PostgreSQL dialect for coltypes.

This package provides:
- PostgresTypeMapper: OID registry and column type variants
- range: range literal encoding
- hstore: hstore literal encoding
"""

from coltypes.dialects.postgres.type_mapper import PostgresTypeMapper

__all__ = ["PostgresTypeMapper"]
