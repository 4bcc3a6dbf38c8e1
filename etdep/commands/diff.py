"""Diff command implementation for etdep.

Previews what moving a package from one version to another does: whether
the target supports the installed core, and how its direct dependencies
change.

Typical usage::

    $ etdep --catalog catalog.toml diff com.etendoerp financial.extensions 1.0.0 1.1.0
    $ etdep diff com.etendoerp financial.extensions 1.0.0 1.1.0 --show-unchanged
"""

from __future__ import annotations

import sys
from typing import Dict, List, Optional

import click

from etdep.commands import echo_json, format_option
from etdep.context import EtdepContext, pass_context
from etdep.exceptions import EtdepError
from etdep.models import CompatibilityResult, DiffEntry, PackageId
from etdep.utils import (
    colorize_update_type,
    get_logger,
    get_update_type,
    print_error,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.diff")


@click.command()
@click.argument("group")
@click.argument("artifact")
@click.argument("current")
@click.argument("target")
@click.option(
    "--show-unchanged/--hide-unchanged",
    default=None,
    help="List dependencies that do not change (default from config).",
)
@format_option
@pass_context
def diff(
    ctx: EtdepContext,
    group: str,
    artifact: str,
    current: str,
    target: str,
    show_unchanged: Optional[bool],
    output_format: str,
) -> None:
    """Compare CURRENT and TARGET of GROUP ARTIFACT and check TARGET against the core."""
    if show_unchanged is None:
        show_unchanged = ctx.config.show_unchanged
    logger.info("Diffing %s:%s %s -> %s", group, artifact, current, target)

    try:
        preview = ctx.get_manager().preview_version_change(
            PackageId(group, artifact),
            current,
            target,
            include_unchanged=show_unchanged,
        )
    except EtdepError as e:
        print_error(f"{e}")
        sys.exit(1)

    if output_format == "json":
        echo_json(preview.to_json())
        return

    _print_compatibility(target, preview.compatibility)

    entries = preview.dependencies
    if not entries:
        click.echo("No dependency changes")
        return

    print_table(
        _diff_rows(entries),
        headers=["Group", "Artifact", "Current", "Target", "Status", "Change"],
        title=f"{group}.{artifact}: {current} -> {target}",
    )


def _diff_rows(entries: List[DiffEntry]) -> List[Dict[str, str]]:
    rows: List[Dict[str, str]] = []
    for entry in entries:
        change = get_update_type(entry.version_current, entry.version_target)
        rows.append(
            {
                "Group": entry.group,
                "Artifact": entry.artifact,
                "Current": entry.version_current or "-",
                "Target": entry.version_target or "-",
                "Status": entry.status.display() if entry.status else "",
                "Change": colorize_update_type(change) if entry.has_changes else "",
            }
        )
    return rows


def _print_compatibility(target: str, result: CompatibilityResult) -> None:
    if result.failed:
        print_error(f"Cannot check {target} against the installed core: {result.error}")
    elif result.is_compatible:
        print_success(
            f"{target} supports core {result.current_core_version} "
            f"(required: {result.core_version_range})"
        )
    else:
        print_warning(
            f"{target} does not support core {result.current_core_version} "
            f"(required: {result.core_version_range})"
        )
