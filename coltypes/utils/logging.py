"""Structured logging for coltypes using structlog.

Configuration is read from coltypes.core.config:
- log_level: DEBUG, INFO, WARNING, ERROR, CRITICAL. Default: INFO
- log_format: text (console renderer) or json (JSON renderer). Default: text

Usage:
    >>> from coltypes.utils.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("registry_built", dialect="mysql")
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

import structlog
from structlog.types import Processor

from coltypes.core.config import config

_configured = False
_configure_lock = threading.Lock()


def _configure_structlog() -> None:
    """Configure stdlib logging and structlog once per process."""
    global _configured
    with _configure_lock:
        if _configured:
            return

        level = getattr(logging, config.log_level, logging.INFO)
        logging.basicConfig(format="%(message)s", level=level)

        renderer: Processor
        if config.log_format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        processors: list[Processor] = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ]

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _configured = True


def get_logger(name: str) -> Any:
    """Get a structlog BoundLogger instance.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        A structlog BoundLogger
    """
    _configure_structlog()
    return structlog.get_logger(name)


class WarningLog:
    """Write-once-per-message warning sink.

    Holds the set of warning texts already emitted. Dialect type mappers
    share the process-wide instance by default; tests create their own to
    get a clean slate.

    The set is guarded by a lock, so one instance can be shared by
    threads rendering DDL concurrently.

    Examples:
        >>> log = WarningLog()
        >>> log.warn("https://www.sqlite.org/datatype3.html", "TEXT length ignored")
        True
        >>> log.warn("https://www.sqlite.org/datatype3.html", "TEXT length ignored")
        False
    """

    def __init__(self, logger: Optional[Any] = None):
        self._seen: set[str] = set()
        self._lock = threading.Lock()
        self._logger = logger

    @property
    def logger(self) -> Any:
        if self._logger is None:
            self._logger = get_logger("coltypes.warnings")
        return self._logger

    def warn(self, link: str, text: str) -> bool:
        """Emit a warning the first time a given text is seen.

        Args:
            link: Reference documentation for the dialect
            text: Warning text (the dedupe key)

        Returns:
            True if the warning was emitted, False if it was already seen
        """
        with self._lock:
            if text in self._seen:
                return False
            self._seen.add(text)

        message = f"{text} >> Check: {link}" if link else text
        self.logger.warning(message)
        return True

    def seen(self, text: str) -> bool:
        """Whether a warning text has already been emitted."""
        with self._lock:
            return text in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)


_process_warning_log = WarningLog()


def get_warning_log() -> WarningLog:
    """Return the process-wide warning log.

    It lives for the lifetime of the process and is never cleared.
    """
    return _process_warning_log
