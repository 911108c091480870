"""Parse textual column type expressions.

Expressions look like the DDL they produce::

    DECIMAL(10,2) UNSIGNED ZEROFILL
    STRING(64) BINARY
    ENUM('draft', 'published')
    ARRAY(DECIMAL(10,2))
    RANGE(DATE)
    DECIMAL PRECISION(10) SCALE(2)
"""

from __future__ import annotations

import re
from typing import Any

from coltypes.exceptions import SchemaError
from coltypes.types.modifiers import apply_modifier

_NAME_RE = re.compile(r"\s*(DOUBLE\s+PRECISION|[A-Za-z_][A-Za-z0-9_]*)", re.IGNORECASE)
_INT_RE = re.compile(r"^[-+]?\d+$")


def _closing_paren(text: str, start: int) -> int:
    """Index of the parenthesis closing the one at ``start``."""
    depth = 0
    quote = None
    for index in range(start, len(text)):
        char = text[index]
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    raise SchemaError(f"Unbalanced parentheses in type expression: {text!r}")


def _split_args(text: str) -> list[str]:
    args: list[str] = []
    depth = 0
    quote = None
    current = ""
    for char in text:
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            args.append(current.strip())
            current = ""
            continue
        current += char
    if current.strip():
        args.append(current.strip())
    return args


def _parse_arg(text: str, registry: dict[str, type]) -> Any:
    if _INT_RE.match(text):
        return int(text)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    if text.lower() in ("true", "false"):
        return text.lower() == "true"

    match = _NAME_RE.match(text)
    if match and _normalize(match.group(1)) in registry:
        return parse_type_expression(text, registry)
    return text


def _normalize(name: str) -> str:
    return " ".join(name.upper().split())


def _read_call(text: str, pos: int) -> tuple[str, list[str], int]:
    """Read ``NAME[(args)]`` at pos; return name, raw args and the new position."""
    match = _NAME_RE.match(text, pos)
    if not match:
        raise SchemaError(f"Invalid type expression: {text!r}")
    name = _normalize(match.group(1))
    pos = match.end()

    rest = text[pos:]
    stripped = rest.lstrip()
    if stripped.startswith("("):
        start = pos + len(rest) - len(stripped)
        end = _closing_paren(text, start)
        return name, _split_args(text[start + 1 : end]), end + 1
    return name, [], pos


def parse_type_expression(expression: str, registry: dict[str, type]) -> Any:
    """Build a column type from a textual expression.

    Args:
        expression: Type expression, e.g. "DECIMAL(10,2) UNSIGNED"
        registry: Type name -> column type class

    Returns:
        Column type instance

    Raises:
        SchemaError: If the expression is malformed or names an unknown type
        UnsupportedModifierError: If a modifier is not defined for the type
    """
    name, raw_args, pos = _read_call(expression, 0)
    type_cls = registry.get(name)
    if type_cls is None:
        raise SchemaError(f"Unknown column type: {name}")

    data_type = type_cls(*[_parse_arg(arg, registry) for arg in raw_args])

    while expression[pos:].strip():
        modifier, raw_args, pos = _read_call(expression, pos)
        data_type = apply_modifier(data_type, modifier, *[_parse_arg(a, registry) for a in raw_args])

    return data_type
