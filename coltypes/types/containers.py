"""Container column types: ARRAY and RANGE.

Both own their element type by value in ``options.subtype``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from coltypes.core.data_type import AbstractType, CallOptionsLike, build_options, instantiate
from coltypes.exceptions import SchemaError, ValidationError
from coltypes.models.keys import TypeKey
from coltypes.models.options import TypeOptions
from coltypes.types.numeric import INTEGER

# Element type -> (range type, cast type)
RANGE_SUBTYPES: dict[TypeKey, tuple[str, str]] = {
    TypeKey.INTEGER: ("int4range", "integer"),
    TypeKey.BIGINT: ("int8range", "bigint"),
    TypeKey.DECIMAL: ("numrange", "numeric"),
    TypeKey.DATEONLY: ("daterange", "date"),
    TypeKey.DATE: ("tstzrange", "timestamptz"),
}


def _subtype_options(first: Any, kwargs: dict[str, Any], name: str) -> TypeOptions:
    # ARRAY({"type": INTEGER}) / RANGE({"subtype": DATE}) / ARRAY(INTEGER)
    if isinstance(first, Mapping):
        data = dict(first)
        if name in data:
            data["subtype"] = data.pop(name)
        return build_options(data, {}, kwargs)
    return build_options(first, {"subtype": first}, kwargs)


class ARRAY(AbstractType):
    """Array of an element type.

    Examples:
        >>> from coltypes.types import DECIMAL
        >>> str(ARRAY(DECIMAL(10, 2)))
        'DECIMAL(10,2)[]'
    """

    key = TypeKey.ARRAY

    def __init__(self, subtype: Any = None, **kwargs: Any):
        options = _subtype_options(subtype, kwargs, "type")
        if options.subtype is not None:
            options = options.replace(subtype=instantiate(options.subtype))
        super().__init__(options)

    @property
    def subtype(self) -> Any:
        return self.options.subtype

    def to_sql(self, options: CallOptionsLike = None) -> str:
        if self.subtype is None:
            raise SchemaError("ARRAY requires an element type")
        return self.subtype.to_sql(options) + "[]"

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not isinstance(value, (list, tuple)):
            self.fail(value, "array")
        return True

    @staticmethod
    def is_array_of(obj: Any, type_cls: type) -> bool:
        """Whether obj is an ARRAY whose element type is an instance of type_cls."""
        return isinstance(obj, ARRAY) and isinstance(obj.subtype, type_cls)


class RANGE(AbstractType):
    """Range of an element type (INTEGER unless given).

    Raises:
        SchemaError: If the element type has no range counterpart

    Examples:
        >>> from coltypes.types import DATE
        >>> str(RANGE(DATE))
        'tstzrange'
        >>> RANGE().to_cast_type()
        'integer'
    """

    key = TypeKey.RANGE

    def __init__(self, subtype: Any = None, **kwargs: Any):
        options = _subtype_options(subtype, kwargs, "subtype")
        element = instantiate(options.subtype) if options.subtype is not None else None
        if element is None:
            element = INTEGER()
        if getattr(element, "key", None) not in RANGE_SUBTYPES:
            raise SchemaError(
                f"Unsupported range subtype: {getattr(element, 'key', element)}. "
                f"Must be one of: {', '.join(k.value for k in RANGE_SUBTYPES)}"
            )
        super().__init__(options.replace(subtype=element))

    @property
    def subtype(self) -> Any:
        return self.options.subtype

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return RANGE_SUBTYPES[self.subtype.key][0]

    def to_cast_type(self) -> str:
        return RANGE_SUBTYPES[self.subtype.key][1]

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if isinstance(value, Mapping) and value.get("inclusive"):
            value = value["inclusive"]
        if not isinstance(value, (list, tuple)):
            self.fail(value, "range")
        if len(value) != 2:
            raise ValidationError(
                "A range must be an array with two elements", value=value, constraint="range"
            )
        return True
