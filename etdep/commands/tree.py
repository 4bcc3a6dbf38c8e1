"""Tree command implementation for etdep.

Shows every direct and transitive dependency of a package version, with
the dependency that pulled each one in. Bundles are expanded inline and
the core pseudo-dependency is never listed.
"""

from __future__ import annotations

import sys
from typing import Dict, List

import click

from etdep.commands import echo_json, format_option
from etdep.context import EtdepContext, pass_context
from etdep.exceptions import EtdepError
from etdep.models import DependencyTree, PackageId
from etdep.utils import get_logger, print_error, print_table

logger = get_logger("commands.tree")


@click.command()
@click.argument("group")
@click.argument("artifact")
@click.argument("version")
@format_option
@pass_context
def tree(
    ctx: EtdepContext,
    group: str,
    artifact: str,
    version: str,
    output_format: str,
) -> None:
    """Show the dependency tree of VERSION of GROUP ARTIFACT."""
    logger.info("Building dependency tree of %s:%s@%s", group, artifact, version)
    try:
        result = ctx.get_manager().build_dependency_tree(PackageId(group, artifact), version)
    except EtdepError as e:
        print_error(f"{e}")
        sys.exit(1)

    if output_format == "json":
        echo_json(result.to_json())
        return

    if not result.dependencies:
        click.echo(f"{group}.{artifact}@{version} has no dependencies")
        return

    print_table(
        _tree_rows(result),
        headers=["Group", "Artifact", "Version", "Type", "Required by"],
        title=f"Dependencies of {group}.{artifact}@{version}",
    )


def _tree_rows(result: DependencyTree) -> List[Dict[str, str]]:
    rows: List[Dict[str, str]] = []
    for dep in result.dependencies:
        rows.append(
            {
                "Group": dep.group,
                "Artifact": dep.artifact,
                "Version": dep.version_constraint,
                "Type": "external" if dep.is_external else "internal",
                "Required by": result.get_parent(dep.key) or "-",
            }
        )
    return rows
