"""CLI application entry point and command routing for sharecell.

This module is the **sole error boundary** of the command-line tool.
It catches :class:`~sharecell.exceptions.SharecellError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, renders a short
message and returns a well-defined exit code.

Configuration
-------------
``--log-level`` defaults to ``$SHARECELL_LOG_LEVEL`` (else ``warning``);
``--json-logs`` defaults to on when ``$SHARECELL_LOG_JSON`` is truthy.
"""

from __future__ import annotations

import argparse
import os
import sys

from sharecell.cli import exit_codes
from sharecell.cli.console import console
from sharecell.exceptions import SharecellError
from sharecell.infra.logging import LOG_LEVELS, configure_logging
from sharecell.version import __version__

COMMANDS: tuple[str, ...] = ("demo", "doctor")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``sharecell demo``    — walk through a shared cell's lifecycle
    * ``sharecell doctor``  — environment diagnostics
    * ``sharecell --version``
    """
    parser = argparse.ArgumentParser(
        prog="sharecell",
        description="Reference-counted shared cells with weak observation.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("SHARECELL_LOG_LEVEL", "warning"),
        help=f"Log level ({', '.join(LOG_LEVELS)}). Default: warning.",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=_env_flag("SHARECELL_LOG_JSON"),
        help="Emit log lines as JSON.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=COMMANDS,
        help="Command to run.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_demo() -> int:
    """Dispatch the ``demo`` walkthrough command."""
    from sharecell.cli.demo import run_demo

    return run_demo()


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from sharecell.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the sharecell CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.log_level, json=args.json_logs)

    if args.command == "doctor":
        return _handle_doctor()
    return _handle_demo()


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except SharecellError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
