"""Best command implementation for etdep.

Picks the version of a package to install: the newest one compatible
with the installed core, or the newest one overall when none is.
"""

from __future__ import annotations

import sys

import click

from etdep.commands import echo_json, format_option
from etdep.context import EtdepContext, pass_context
from etdep.exceptions import EtdepError
from etdep.models import PackageId
from etdep.utils import get_logger, print_error, print_success, print_warning

logger = get_logger("commands.best")


@click.command()
@click.argument("group")
@click.argument("artifact")
@format_option
@pass_context
def best(ctx: EtdepContext, group: str, artifact: str, output_format: str) -> None:
    """Pick the best version of GROUP ARTIFACT for the installed core."""
    package_id = PackageId(group, artifact)
    logger.info("Selecting best version of %s", package_id)
    try:
        manager = ctx.get_manager()
        version = manager.pick_best_version(package_id)
        result = manager.resolve_compatibility(package_id, version)
    except EtdepError as e:
        print_error(f"{e}")
        sys.exit(1)

    if output_format == "json":
        echo_json(
            {
                "group": group,
                "artifact": artifact,
                "version": version,
                **result.to_json(),
            }
        )
        return

    if result.is_compatible:
        print_success(f"{package_id}@{version}")
    else:
        print_warning(
            f"{package_id}@{version} (no version is compatible with core "
            f"{result.current_core_version})"
        )
