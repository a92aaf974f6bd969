"""``sharecell doctor`` — environment diagnostics command.

Collects the interpreter and dependency versions and renders a table
showing whether the runtime satisfies sharecell's requirements.
A failing Python or structlog check makes the command exit non-zero;
a missing Rich only downgrades the output to plain text.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from sharecell.cli import exit_codes
from sharecell.cli.console import console, rich_available
from sharecell.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    python_version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", python_version, status


def _structlog_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the structlog row."""
    try:
        import structlog  # noqa: F401
    except ImportError:
        return "structlog", "NOT INSTALLED", "[red]FAIL[/red]"
    try:
        return "structlog", version("structlog"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "structlog", "unknown", "[green]OK[/green]"


def _rich_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the rich row."""
    try:
        import rich  # noqa: F401
    except ImportError:
        return "rich", "not installed", "[yellow]WARN[/yellow]"
    try:
        return "rich", version("rich"), "[green]OK[/green]"
    except PackageNotFoundError:
        return "rich", "unknown", "[green]OK[/green]"


def _sharecell_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the sharecell version row."""
    return "sharecell", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nsharecell doctor", file=sys.stdout)
    print("=" * 56, file=sys.stdout)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stdout)
    print("-" * 56, file=sys.stdout)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stdout)
    print(file=sys.stdout)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = [
        _sharecell_version_check(),
        _python_version_check(),
        _structlog_version_check(),
        _rich_version_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    if rich_available():
        from rich.table import Table

        table = Table(
            title="sharecell doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print(table)
        if has_failure:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            console.print("[bold green]All checks passed.[/bold green]")
    else:
        _print_plain_doctor_table(checks)
        print(
            "Some checks failed." if has_failure else "All checks passed.",
            file=sys.stdout,
        )

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
