"""Compat command implementation for etdep.

Reports whether one version of a catalog package supports the installed
core version.

Typical usage::

    $ etdep --catalog catalog.toml compat com.etendoerp financial.extensions 1.0.0
    $ etdep --catalog catalog.toml compat com.etendoerp financial.extensions 1.0.0 -f json
"""

from __future__ import annotations

import sys

import click

from etdep.commands import echo_json, format_option
from etdep.context import EtdepContext, pass_context
from etdep.exceptions import EtdepError
from etdep.models import PackageId
from etdep.utils import get_logger, print_error, print_success, print_warning

logger = get_logger("commands.compat")


@click.command()
@click.argument("group")
@click.argument("artifact")
@click.argument("version")
@format_option
@pass_context
def compat(
    ctx: EtdepContext,
    group: str,
    artifact: str,
    version: str,
    output_format: str,
) -> None:
    """Check VERSION of GROUP ARTIFACT against the installed core.

    Exits with 0 when compatible and 1 otherwise.
    """
    logger.info("Checking %s:%s@%s against the installed core", group, artifact, version)
    try:
        result = ctx.get_manager().resolve_compatibility(PackageId(group, artifact), version)
    except EtdepError as e:
        print_error(f"{e}")
        sys.exit(1)

    if output_format == "json":
        echo_json(result.to_json())
    elif result.failed:
        print_error(result.error or "")
    elif result.is_compatible:
        print_success(
            f"{group}.{artifact}@{version} is compatible with core "
            f"{result.current_core_version} (range {result.core_version_range})"
        )
    else:
        print_warning(
            f"{group}.{artifact}@{version} is not compatible with core "
            f"{result.current_core_version} (range {result.core_version_range})"
        )

    sys.exit(0 if result.is_compatible else 1)
