"""
Executable module for etdep.

Running:
    python -m etdep

is equivalent to:
    etdep

This module simply forwards execution to the CLI entrypoint defined in
`etdep.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Report a CLI import failure with enough context to debug it."""
    sys.stderr.write("etdep CLI could not be loaded.\n")
    sys.stderr.write(f"Python version: {sys.version}\n")
    try:
        from etdep.__version__ import __version__

        sys.stderr.write(f"etdep version: {__version__}\n")
    except ImportError:
        sys.stderr.write("etdep version: <unknown>\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m etdep`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from etdep.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
