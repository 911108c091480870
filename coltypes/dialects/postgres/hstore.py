"""PostgreSQL hstore text encoding.

An hstore literal is a comma separated list of ``"key"=>"value"`` pairs;
a NULL value is written bare.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from coltypes.utils.validators import to_text

_PAIR_TOKEN_RE = re.compile(r'"((?:\\.|[^"\\])*)"|(NULL)')
_UNESCAPE_RE = re.compile(r"\\(.)")


def _sanitize(text: str) -> str:
    return text.replace("'", "''").replace("\\", "\\\\").replace('"', '\\"')


def _element(value: Any) -> str:
    return _sanitize(value) if isinstance(value, str) else to_text(value)


def stringify(data: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Encode a mapping as hstore text.

    Examples:
        >>> stringify({"a": "1", "b": None})
        '"a"=>"1","b"=>NULL'
    """
    if data is None:
        return None
    pairs = []
    for key, value in data.items():
        rendered = "NULL" if value is None else f'"{_element(value)}"'
        pairs.append(f'"{_element(key)}"=>{rendered}')
    return ",".join(pairs)


def parse(value: Optional[str]) -> Optional[dict[str, Optional[str]]]:
    """Decode hstore text into a dict of strings.

    Examples:
        >>> parse('"a"=>"1", "b"=>NULL')
        {'a': '1', 'b': None}
    """
    if value is None:
        return None

    tokens = []
    for match in _PAIR_TOKEN_RE.finditer(value):
        quoted, null = match.groups()
        tokens.append(None if null else _UNESCAPE_RE.sub(r"\1", quoted))

    return {tokens[i]: tokens[i + 1] for i in range(0, len(tokens) - 1, 2)}
