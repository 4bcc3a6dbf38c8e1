"""Unit tests for etdep.context module."""

from __future__ import annotations

import json
from pathlib import Path

import click
from click.testing import CliRunner
import pytest

from etdep.config import EtdepConfig
from etdep.context import EtdepContext, pass_context
from etdep.core.manager import DependencyManager
from etdep.exceptions import CatalogError


@pytest.mark.unit
class TestEtdepContext:
    """Tests for EtdepContext class."""

    def test_default_initialization(self) -> None:
        ctx = EtdepContext()

        assert ctx.config_path is None
        assert ctx.catalog_path is None
        assert ctx.config == EtdepConfig()
        assert ctx.verbose == 0
        assert ctx.color is True

    def test_instances_are_independent(self) -> None:
        ctx1 = EtdepContext()
        ctx2 = EtdepContext()

        ctx1.verbose = 2
        ctx1.config.core_version = "24.1.0"

        assert ctx2.verbose == 0
        assert ctx2.config.core_version is None

    def test_slots_prevents_arbitrary_attributes(self) -> None:
        ctx = EtdepContext()

        with pytest.raises(AttributeError):
            ctx.unknown = "value"  # type: ignore[attr-defined]


@pytest.mark.unit
class TestGetManager:
    """Tests for EtdepContext.get_manager."""

    def test_without_catalog_raises_usage_error(self) -> None:
        with pytest.raises(click.UsageError, match="No catalog given"):
            EtdepContext().get_manager()

    def test_loads_catalog_once(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"core_version": "24.1.0", "packages": []}), encoding="utf-8")
        ctx = EtdepContext()
        ctx.catalog_path = path

        manager = ctx.get_manager()

        assert isinstance(manager, DependencyManager)
        assert ctx.get_manager() is manager

    def test_config_core_version_applied(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                {
                    "core_version": "24.1.0",
                    "packages": [{"group": "g", "artifact": "a", "versions": [{"version": "1"}]}],
                }
            ),
            encoding="utf-8",
        )
        ctx = EtdepContext()
        ctx.catalog_path = path
        ctx.config.core_version = "30.0.0"

        manager = ctx.get_manager()
        package = manager.catalog.find_package("g", "a")

        assert manager.resolver.check_core_compatibility(package, "1").current_core_version == "30.0.0"

    def test_broken_catalog_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.json"
        path.write_text("{", encoding="utf-8")
        ctx = EtdepContext()
        ctx.catalog_path = path

        with pytest.raises(CatalogError):
            ctx.get_manager()


@pytest.mark.unit
class TestPassContext:
    """Tests for the pass_context decorator."""

    def test_injects_context(self) -> None:
        seen = []

        @click.command()
        @pass_context
        def command(ctx: EtdepContext) -> None:
            seen.append(ctx)

        result = CliRunner().invoke(command, [])

        assert result.exit_code == 0
        assert isinstance(seen[0], EtdepContext)
