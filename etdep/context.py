"""
Shared context object for etdep CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from etdep.config import EtdepConfig
from etdep.core.manager import DependencyManager


class EtdepContext:
    """Global context object for etdep CLI commands.

    An instance of this class is created once per CLI invocation and
    passed to commands using Click's context mechanism.

    Attributes:
        config_path: Path to the etdep configuration file, if provided.
        catalog_path: Catalog file selected by ``--catalog`` or the config.
        config: Loaded configuration.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
    """

    __slots__ = ("config_path", "catalog_path", "config", "verbose", "color", "_manager")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.catalog_path: Optional[Path] = None
        self.config: EtdepConfig = EtdepConfig()
        self.verbose: int = 0
        self.color: bool = True
        self._manager: Optional[DependencyManager] = None

    def get_manager(self) -> DependencyManager:
        """Return the manager for the selected catalog, loading it once.

        Raises:
            click.UsageError: No catalog was selected.
            CatalogError: The catalog file cannot be loaded.
        """
        if self._manager is None:
            if self.catalog_path is None:
                raise click.UsageError(
                    "No catalog given. Use --catalog or set 'catalog' in etdep.toml."
                )
            self._manager = DependencyManager.from_catalog_file(
                self.catalog_path,
                core_version=self.config.core_version,
            )
        return self._manager


#: Click decorator for injecting :class:`EtdepContext` into commands.
pass_context = click.make_pass_decorator(EtdepContext, ensure=True)
