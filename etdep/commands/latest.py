"""Latest command implementation for etdep.

Previews moving tracked dependencies to their best versions. Each
dependency is given as ``GROUP:ARTIFACT@VERSION`` where ``VERSION`` is
the currently tracked one.
"""

from __future__ import annotations

import sys
from typing import Dict, Tuple

import click

from etdep.commands import echo_json, format_option
from etdep.context import EtdepContext, pass_context
from etdep.exceptions import EtdepError
from etdep.utils import get_logger, print_error, print_warning

logger = get_logger("commands.latest")


@click.command()
@click.argument("dependencies", nargs=-1, required=True)
@format_option
@pass_context
def latest(ctx: EtdepContext, dependencies: Tuple[str, ...], output_format: str) -> None:
    """Preview updating DEPENDENCIES (GROUP:ARTIFACT@VERSION) to their best versions."""
    records = [_parse_record(raw) for raw in dependencies]
    logger.info("Previewing best versions for %d dependencies", len(records))

    try:
        result = ctx.get_manager().select_latest_compatible_versions(records)
    except EtdepError as e:
        print_error(f"{e}")
        sys.exit(1)

    if output_format == "json":
        echo_json(result)
        return

    if not result:
        click.echo("All selected dependencies are already on their best version")
        return

    if result["warning"]:
        print_warning(result["message"])
    else:
        click.echo(result["message"])


def _parse_record(raw: str) -> Dict[str, str]:
    coordinates, sep, version = raw.rpartition("@")
    group, colon, artifact = coordinates.partition(":")
    if not sep or not colon or not group or not artifact or not version:
        raise click.BadParameter(
            f"expected GROUP:ARTIFACT@VERSION, got {raw!r}",
            param_hint="DEPENDENCIES",
        )
    return {"group": group, "artifact": artifact, "version": version}
