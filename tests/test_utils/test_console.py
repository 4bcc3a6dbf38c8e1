"""Unit tests for etdep.utils.console module.

Test Coverage:
- Message helpers and markup escaping
- Table rendering
- Console caching and reconfiguration
- Update type colorization
"""

from __future__ import annotations

from typing import Generator
from unittest.mock import patch

import pytest
from rich.console import Console

import etdep.utils.console as console_module
from etdep.utils.console import (
    colorize_update_type,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture
def recording_console() -> Generator[Console, None, None]:
    """Swap the shared console for one that records plain output."""
    console = Console(
        theme=console_module.ETDEP_THEME,
        record=True,
        no_color=True,
        width=120,
        force_terminal=False,
    )
    with patch.object(console_module, "_console", console):
        yield console


@pytest.mark.unit
class TestMessages:
    """Tests for the message helpers."""

    def test_success(self, recording_console: Console) -> None:
        print_success("Compatible")

        assert recording_console.export_text() == "[OK] Compatible\n"

    def test_error_escapes_markup(self, recording_console: Console) -> None:
        """Edge case: interval brackets must be printed literally."""
        print_error("Version outside [24.0.0, 25.0.0)")

        assert "[24.0.0, 25.0.0)" in recording_console.export_text()

    def test_warning_custom_prefix(self, recording_console: Console) -> None:
        print_warning("careful", prefix="!")

        assert recording_console.export_text() == "! careful\n"


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table."""

    def test_renders_rows(self, recording_console: Console) -> None:
        print_table(
            [{"Artifact": "a", "Version": "1.0.0"}, {"Artifact": "b", "Version": "2.0.0"}],
            title="Dependencies",
        )

        output = recording_console.export_text()
        assert "Dependencies" in output
        assert "Artifact" in output
        assert "2.0.0" in output

    def test_headers_select_columns(self, recording_console: Console) -> None:
        print_table([{"Artifact": "a", "Hidden": "secret"}], headers=["Artifact"])

        assert "secret" not in recording_console.export_text()

    def test_empty_data_prints_nothing(self, recording_console: Console) -> None:
        print_table([])

        assert recording_console.export_text() == ""

    def test_row_styler_called(self, recording_console: Console) -> None:
        rows = [{"Artifact": "a"}]
        seen = []

        print_table(rows, row_styler=lambda row: seen.append(row) or "dim")

        assert seen == rows


@pytest.mark.unit
class TestConsoleCache:
    """Tests for console caching."""

    def test_console_is_cached(self) -> None:
        reconfigure_console()

        assert get_raw_console() is get_raw_console()

    def test_reconfigure_drops_cache(self) -> None:
        first = get_raw_console()

        reconfigure_console()

        assert get_raw_console() is not first

    def test_no_color_env_disables_color(self) -> None:
        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            reconfigure_console()
            assert get_raw_console().no_color is True
        reconfigure_console()


@pytest.mark.unit
class TestColorizeUpdateType:
    """Tests for colorize_update_type."""

    @pytest.mark.parametrize(
        "update_type,expected",
        [
            ("major", "[red]major[/red]"),
            ("patch", "[green]patch[/green]"),
            ("new", "[cyan]new[/cyan]"),
            ("same", "same"),
            ("unknown", "unknown"),
        ],
    )
    def test_colors(self, update_type: str, expected: str) -> None:
        assert colorize_update_type(update_type) == expected
