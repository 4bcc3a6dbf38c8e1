"""
CLI subcommands for etdep.

Each command lives in its own module and is registered on the group in
:mod:`etdep.cli`. Helpers shared by every command are defined here.
"""

from __future__ import annotations

import json
from typing import Any, Callable

import click

#: Output format option shared by all commands.
format_option: Callable[[Callable[..., Any]], Callable[..., Any]] = click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)


def echo_json(data: Any) -> None:
    """Write *data* to stdout as indented JSON."""
    click.echo(json.dumps(data, indent=2))
