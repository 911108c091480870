"""Option rewrites shared by dialect variants.

Variants call these from ``adapt_options`` to drop options their dialect
cannot render, warning once per distinct message.
"""

from __future__ import annotations

from typing import Callable

from coltypes.models.options import TypeOptions

Warn = Callable[[str], bool]


def plain_number(options: TypeOptions, warn: Warn, dialect: str, name: str) -> TypeOptions:
    """Drop length, UNSIGNED and ZEROFILL from an integer or real type."""
    if options.length or options.unsigned or options.zerofill:
        warn(f"{dialect} does not support {name} with options. Plain `{name}` will be used instead.")
        return options.replace(length=None, unsigned=False, zerofill=False)
    return options


def plain_float(options: TypeOptions, warn: Warn, dialect: str, name: str = "FLOAT") -> TypeOptions:
    """Drop decimals (with the length), UNSIGNED and ZEROFILL from a FLOAT."""
    if options.decimals:
        warn(f"{dialect} does not support {name} with decimals. Plain `FLOAT` will be used instead.")
        options = options.replace(length=None, decimals=None)
    if options.unsigned:
        warn(f"{dialect} does not support {name} unsigned. `UNSIGNED` was removed.")
        options = options.replace(unsigned=False)
    if options.zerofill:
        warn(f"{dialect} does not support {name} zerofill. `ZEROFILL` was removed.")
        options = options.replace(zerofill=False)
    return options
