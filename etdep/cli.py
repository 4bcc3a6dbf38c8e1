"""
Command-line interface for etdep.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from etdep.config import load_config
from etdep.__version__ import __version__
from etdep.context import EtdepContext
from etdep.exceptions import ConfigError, EtdepError
from etdep.utils.logger import get_logger, setup_logging
from etdep.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="ETDEP_CONFIG",
)
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Catalog file (JSON or TOML) describing packages and versions.",
    envvar="ETDEP_CATALOG",
)
@click.option(
    "--core-version",
    help="Installed core version, overriding the catalog and configuration.",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="ETDEP_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="etdep",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    catalog: Optional[Path],
    core_version: Optional[str],
    verbose: int,
    color: bool,
) -> None:
    """etdep: core compatibility and dependency trees for ERP modules.

    \b
    Available commands:
      etdep compat    Check a version against the installed core
      etdep best      Pick the best version of a package
      etdep tree      Show the dependency tree of a version
      etdep diff      Compare the dependencies of two versions
      etdep latest    Preview moving dependencies to their best versions

    \b
    Examples:
      etdep --catalog catalog.toml compat com.etendoerp financial.extensions 1.0.0
      etdep --catalog catalog.toml tree com.etendoerp financial.extensions 1.0.0
      etdep -v diff com.etendoerp financial.extensions 1.0.0 1.1.0

    Use ``etdep COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    if core_version:
        loaded_config.core_version = core_version

    etdep_ctx = EtdepContext()
    etdep_ctx.config_path = config or loaded_config.source_path
    etdep_ctx.catalog_path = catalog or loaded_config.catalog_path
    etdep_ctx.color = color
    etdep_ctx.verbose = verbose
    etdep_ctx.config = loaded_config
    ctx.obj = etdep_ctx

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("etdep v%s", __version__)
    logger.debug("Config path: %s", etdep_ctx.config_path)
    logger.debug("Catalog path: %s", etdep_ctx.catalog_path)
    logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from etdep.commands.best import best  # noqa: E402
from etdep.commands.compat import compat  # noqa: E402
from etdep.commands.diff import diff  # noqa: E402
from etdep.commands.latest import latest  # noqa: E402
from etdep.commands.tree import tree  # noqa: E402

cli.add_command(compat)
cli.add_command(best)
cli.add_command(tree)
cli.add_command(diff)
cli.add_command(latest)


def main() -> int:
    """Main entry point for the etdep CLI.

    Returns:
        Exit code:
            0   Success
            1   Unhandled or application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except EtdepError as exc:
        print_error(str(exc))
        logger.debug(
            "EtdepError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
