"""Unit tests for etdep.__main__ module."""

from __future__ import annotations

import builtins
from unittest.mock import MagicMock, patch

import pytest

from etdep.__main__ import _print_startup_error, main

_real_import = builtins.__import__


def _failing_import(name, *args, **kwargs):
    if name == "etdep.cli":
        raise ImportError("No module named 'rich'")
    return _real_import(name, *args, **kwargs)


@pytest.mark.unit
class TestMain:
    """Tests for main() entry point function."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 130],
        ids=["success", "error", "interrupted"],
    )
    def test_main_returns_cli_exit_code(self, exit_code: int) -> None:
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"etdep.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_main_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        with patch("builtins.__import__", side_effect=_failing_import):
            result = main()

        assert result == 1
        captured = capsys.readouterr()
        assert "etdep CLI could not be loaded." in captured.err
        assert "ImportError: No module named 'rich'" in captured.err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error helper function."""

    def test_prints_version_and_error(self, capsys: pytest.CaptureFixture) -> None:
        from etdep.__version__ import __version__

        _print_startup_error(ImportError("broken"))

        err = capsys.readouterr().err
        assert "Python version:" in err
        assert f"etdep version: {__version__}" in err
        assert err.rstrip().endswith("ImportError: broken")
