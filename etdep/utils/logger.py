"""
Logging for etdep.

Library modules obtain loggers through :func:`get_logger` and never touch
handlers. The CLI installs one handler on the ``etdep`` logger through
:func:`setup_logging`, whose records carry a level name colored by
severity while the target stream is a terminal.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
import threading
from typing import IO, Mapping, Optional

from etdep.constants import (
    LOG_DATE_FORMAT,
    LOG_DEFAULT_FORMAT,
    LOG_VERBOSE_FORMAT,
)

_NAMESPACE = "etdep"
_HANDLER_NAME = "etdep-cli"

_lock = threading.Lock()


def stream_supports_color(stream: IO[str]) -> bool:
    """Return whether ANSI colors may be written to *stream*.

    ``NO_COLOR`` (also set by ``etdep --no-color``) and ``CI`` turn
    colors off regardless of the stream.
    """
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    isatty = getattr(stream, "isatty", None)
    if isatty is None:
        return False
    try:
        return bool(isatty())
    except (OSError, ValueError):
        return False


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color.

    The color decision is taken per record against *stream*, so toggling
    ``NO_COLOR`` after setup still applies. Records are never mutated.

    Args:
        fmt: Record format string.
        datefmt: Format for ``%(asctime)s``.
        use_color: ``False`` disables coloring outright.
        stream: Stream the owning handler writes to. Defaults to
            ``sys.stderr``.
    """

    LEVEL_COLORS: Mapping[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        fmt: str,
        *,
        datefmt: Optional[str] = None,
        use_color: bool = True,
        stream: Optional[IO[str]] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color
        self.stream = stream

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None or not self.use_color:
            return super().format(record)
        if not stream_supports_color(self.stream or sys.stderr):
            return super().format(record)

        tinted = copy.copy(record)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def setup_logging(
    *,
    level: int = logging.INFO,
    verbose: bool = False,
    stream: Optional[IO[str]] = None,
) -> None:
    """Install the CLI handler on the ``etdep`` logger.

    A handler from an earlier call is replaced, so the CLI may call this
    once per invocation.

    Args:
        level: Threshold for both the logger and the handler.
        verbose: Use the timestamped format that names the logger.
        stream: Output stream; defaults to ``sys.stderr``.
    """
    target = stream or sys.stderr
    handler = logging.StreamHandler(target)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(
        ColoredFormatter(
            LOG_VERBOSE_FORMAT if verbose else LOG_DEFAULT_FORMAT,
            datefmt=LOG_DATE_FORMAT,
            stream=target,
        )
    )

    with _lock:
        root_logger = logging.getLogger(_NAMESPACE)
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
        root_logger.setLevel(level)
        root_logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``etdep.<name>``, or the ``etdep`` logger itself.

    *name* may already carry the ``etdep.`` prefix, as ``__name__`` does.
    Until the CLI configures logging the ``etdep`` logger holds a
    ``NullHandler`` so library use stays silent.
    """
    if name and name != _NAMESPACE and not name.startswith(f"{_NAMESPACE}."):
        name = f"{_NAMESPACE}.{name}"

    root_logger = logging.getLogger(_NAMESPACE)
    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    return logging.getLogger(name or _NAMESPACE)


def is_logging_configured() -> bool:
    """Return True while the CLI handler is installed."""
    return any(
        handler.get_name() == _HANDLER_NAME
        for handler in logging.getLogger(_NAMESPACE).handlers
    )


def disable_logging() -> None:
    """Drop the CLI handler and silence all etdep records."""
    with _lock:
        root_logger = logging.getLogger(_NAMESPACE)
        root_logger.handlers.clear()
        root_logger.addHandler(logging.NullHandler())
        root_logger.setLevel(logging.NOTSET)
