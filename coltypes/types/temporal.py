"""Temporal column types: TIME, DATE, DATEONLY and the NOW default marker."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from coltypes.core.data_type import AbstractType, CallOptionsLike, build_options
from coltypes.models.keys import TypeKey
from coltypes.models.options import CallOptions
from coltypes.utils.timezones import apply_timezone, format_date, format_datetime, to_datetime
from coltypes.utils.validators import is_date


def _same_empty(value: Any, original: Any) -> bool:
    # None -> None or "" -> "" is not a change; None -> "" is
    return not original and not value and type(original) is type(value) and original == value


class TIME(AbstractType):
    key = TypeKey.TIME

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "TIME"


class DATE(AbstractType):
    """Date and time.

    Literals are rendered in the call's timezone (or the configured
    default) as ``YYYY-MM-DD HH:mm:ss.SSS +HH:MM``.

    Examples:
        >>> from datetime import datetime, timezone
        >>> DATE().stringify(datetime(2020, 1, 1, tzinfo=timezone.utc), {"timezone": "+02:00"})
        '2020-01-01 02:00:00.000 +02:00'
    """

    key = TypeKey.DATE

    def __init__(self, length: Any = None, **kwargs: Any):
        super().__init__(build_options(length, {"length": length}, kwargs))

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "DATETIME"

    def validate(self, value: Any, options: CallOptionsLike = None) -> bool:
        if not is_date(value):
            self.fail(value, "date")
        return True

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        if not options.raw and value and not isinstance(value, datetime):
            try:
                return to_datetime(value)
            except (ValueError, OverflowError, TypeError):
                # left for validate() to reject
                return value
        return value

    def is_changed(self, value: Any, original: Any) -> bool:
        if original and value:
            if value is original:
                return False
            if isinstance(value, datetime) and isinstance(original, datetime) and value == original:
                return False
        if _same_empty(value, original):
            return False
        return True

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        return format_datetime(apply_timezone(value, options.timezone), offset=True)


class DATEONLY(AbstractType):
    """Date without time, rendered as ``YYYY-MM-DD``."""

    key = TypeKey.DATEONLY

    def to_sql(self, options: CallOptionsLike = None) -> str:
        return "DATE"

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        return format_date(value)

    def _sanitize(self, value: Any, options: CallOptions) -> Any:
        if not options.raw and value:
            return format_date(value)
        return value

    def is_changed(self, value: Any, original: Any) -> bool:
        if original and value and original == value:
            return False
        if _same_empty(value, original):
            return False
        return True


class NOW(AbstractType):
    """Default value marker for the current timestamp."""

    key = TypeKey.NOW
