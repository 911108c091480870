"""coltypes core package.

This package contains the column type contract and the per-dialect
registry base class. TypeMapper lives in coltypes.core.type_mapper.
"""

from coltypes.core.data_type import AbstractType

__all__ = ["AbstractType"]
