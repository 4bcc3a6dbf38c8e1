"""Unit tests for etdep.utils.logger module.

Test Coverage:
- stream_supports_color environment and terminal detection
- ColoredFormatter coloring without mutating records
- setup_logging handler replacement, levels and formats
- get_logger namespacing and the silent default
- disable_logging and is_logging_configured
"""

from __future__ import annotations

import io
import logging
from typing import Generator
from unittest.mock import MagicMock, patch

import pytest

from etdep.utils.logger import (
    ColoredFormatter,
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
    stream_supports_color,
)


@pytest.fixture(autouse=True)
def clean_logger_state() -> Generator[None, None, None]:
    """Reset the etdep logger around each test."""
    root_logger = logging.getLogger("etdep")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)

    yield

    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True


def _record(level: int = logging.INFO, msg: str = "message") -> logging.LogRecord:
    return logging.LogRecord("etdep.test", level, "test.py", 1, msg, (), None)


def _tty() -> MagicMock:
    stream = MagicMock()
    stream.isatty.return_value = True
    return stream


# ============================================================================
# Color detection
# ============================================================================


@pytest.mark.unit
class TestStreamSupportsColor:
    """Tests for stream_supports_color."""

    def test_terminal_stream(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            assert stream_supports_color(_tty()) is True

    def test_plain_buffer(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            assert stream_supports_color(io.StringIO()) is False

    @pytest.mark.parametrize("env", [{"NO_COLOR": "1"}, {"CI": "true"}])
    def test_env_disables_color(self, env) -> None:
        with patch.dict("os.environ", env, clear=True):
            assert stream_supports_color(_tty()) is False

    def test_closed_stream(self) -> None:
        stream = MagicMock()
        stream.isatty.side_effect = ValueError("I/O operation on closed file")

        with patch.dict("os.environ", {}, clear=True):
            assert stream_supports_color(stream) is False


# ============================================================================
# ColoredFormatter
# ============================================================================


@pytest.mark.unit
class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def test_colors_levelname_on_terminal(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", stream=_tty())

        with patch.dict("os.environ", {}, clear=True):
            result = formatter.format(_record(logging.WARNING))

        color = ColoredFormatter.LEVEL_COLORS[logging.WARNING]
        assert result == f"{color}WARNING{ColoredFormatter.RESET}: message"

    def test_record_is_not_mutated(self) -> None:
        """Edge case: coloring must not leak into other handlers."""
        formatter = ColoredFormatter("%(levelname)s", stream=_tty())
        record = _record(logging.ERROR)

        with patch.dict("os.environ", {}, clear=True):
            formatter.format(record)

        assert record.levelname == "ERROR"

    def test_no_color_when_disabled(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", use_color=False, stream=_tty())

        assert formatter.format(_record()) == "INFO: message"

    def test_no_color_env_applies_after_construction(self) -> None:
        formatter = ColoredFormatter("%(levelname)s: %(message)s", stream=_tty())

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            assert formatter.format(_record()) == "INFO: message"

    def test_custom_level_is_left_plain(self) -> None:
        formatter = ColoredFormatter("%(levelname)s", stream=_tty())
        record = _record(logging.INFO + 5)

        with patch.dict("os.environ", {}, clear=True):
            assert formatter.format(record) == logging.getLevelName(logging.INFO + 5)


# ============================================================================
# setup_logging
# ============================================================================


@pytest.mark.unit
class TestSetupLogging:
    """Tests for setup_logging."""

    def test_writes_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.DEBUG, stream=stream)

        get_logger("tree_builder").debug("walked %d", 3)

        assert stream.getvalue() == "DEBUG: walked 3\n"
        assert is_logging_configured() is True

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.WARNING, stream=stream)

        get_logger("catalog").info("hidden")
        get_logger("catalog").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_verbose_format_includes_logger_name(self) -> None:
        stream = io.StringIO()
        setup_logging(level=logging.INFO, verbose=True, stream=stream)

        get_logger("differ").info("compared")

        assert "etdep.differ - INFO - compared" in stream.getvalue()

    def test_repeated_setup_replaces_handler(self) -> None:
        first = io.StringIO()
        setup_logging(stream=first)
        setup_logging(stream=io.StringIO())

        get_logger("cli").warning("once")

        assert len(logging.getLogger("etdep").handlers) == 1
        assert first.getvalue() == ""


# ============================================================================
# get_logger
# ============================================================================


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (None, "etdep"),
            ("etdep", "etdep"),
            ("catalog", "etdep.catalog"),
            ("etdep.core.differ", "etdep.core.differ"),
            ("etdeptool", "etdep.etdeptool"),
        ],
    )
    def test_namespacing(self, name, expected: str) -> None:
        assert get_logger(name).name == expected

    def test_silent_until_configured(self) -> None:
        get_logger("unconfigured_module")

        handlers = logging.getLogger("etdep").handlers
        assert [type(h) for h in handlers] == [logging.NullHandler]
        assert is_logging_configured() is False


# ============================================================================
# disable_logging
# ============================================================================


@pytest.mark.unit
class TestDisableLogging:
    """Tests for disable_logging."""

    def test_disable_silences_output(self) -> None:
        stream = io.StringIO()
        setup_logging(stream=stream)

        disable_logging()
        get_logger("cli").error("nothing")

        assert stream.getvalue() == ""
        assert is_logging_configured() is False
