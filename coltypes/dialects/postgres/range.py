"""PostgreSQL range literal encoding and decoding.

A range is written as ``[lower,upper)`` where the brackets give bound
inclusivity, an empty bound is unbounded and ``empty`` is the empty range.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional

from coltypes.exceptions import EncodingError


@dataclass(frozen=True)
class Range:
    """Decoded range value.

    Attributes:
        lower: Lower bound (None when unbounded)
        upper: Upper bound (None when unbounded)
        inclusive: Inclusivity of the lower and upper bounds
        empty: True for the empty range
    """

    lower: Any = None
    upper: Any = None
    inclusive: tuple[bool, bool] = (True, False)
    empty: bool = False

    @property
    def bounds(self) -> list[Any]:
        return [] if self.empty else [self.lower, self.upper]


def _is_infinite(bound: Any) -> bool:
    return isinstance(bound, float) and math.isinf(bound)


def stringify_bound(bound: Any) -> str:
    if bound is None:
        return ""
    if _is_infinite(bound):
        return "-infinity" if bound < 0 else "infinity"
    return json.dumps(bound, ensure_ascii=False, default=str)


def parse_bound(bound: str, parser: Optional[Callable[[Any], Any]] = None) -> Any:
    if not bound:
        return None
    if bound == "infinity":
        return math.inf
    if bound == "-infinity":
        return -math.inf
    if len(bound) >= 2 and bound[0] == bound[-1] == '"':
        bound = bound[1:-1]
    return parser(bound) if parser else bound


def stringify(data: Any) -> Optional[str]:
    """Encode a range.

    Args:
        data: Range, an empty sequence, or a pair of bounds. A bound may be
            ``{"value": v, "inclusive": bool}`` to override its inclusivity.

    Returns:
        Range literal text (unquoted), or None for None

    Raises:
        EncodingError: If data is not a range or a sequence of 0 or 2 bounds

    Examples:
        >>> stringify([1, 10])
        '[1,10)'
        >>> stringify([{"value": 1, "inclusive": False}, None])
        '(1,)'
        >>> stringify([])
        'empty'
    """
    if data is None:
        return None

    if isinstance(data, Range):
        if data.empty:
            return "empty"
        bounds, inclusive = [data.lower, data.upper], list(data.inclusive)
    elif isinstance(data, (list, tuple)):
        if not data:
            return "empty"
        if len(data) != 2:
            raise EncodingError(
                "range array length must be 0 (empty) or 2 (lower and upper bounds)"
            )
        bounds, inclusive = list(data), [True, False]
    else:
        raise EncodingError("range must be an array")

    for index, bound in enumerate(bounds):
        if isinstance(bound, Mapping):
            if "inclusive" in bound:
                inclusive[index] = bool(bound["inclusive"])
            if "value" in bound:
                bounds[index] = bound["value"]

    return (
        ("[" if inclusive[0] else "(")
        + stringify_bound(bounds[0])
        + ","
        + stringify_bound(bounds[1])
        + ("]" if inclusive[1] else ")")
    )


def parse(value: Optional[str], parser: Optional[Callable[[Any], Any]] = None) -> Any:
    """Decode a range literal.

    Args:
        value: Range text as returned by the server
        parser: Decoder applied to each bound

    Returns:
        Range, None for None, or the input unchanged if it is not a range

    Examples:
        >>> parse("[1,10)", int)
        Range(lower=1, upper=10, inclusive=(True, False), empty=False)
    """
    if value is None:
        return None
    if value == "empty":
        return Range(inclusive=(False, False), empty=True)

    parts = value[1:-1].split(",")
    if len(parts) < 2:
        return value

    return Range(
        lower=parse_bound(parts[0], parser),
        upper=parse_bound(parts[1], parser),
        inclusive=(value[0] == "[", value[-1] == "]"),
    )
