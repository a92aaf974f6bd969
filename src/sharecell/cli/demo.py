"""``sharecell demo`` — render the shared-cell walkthrough.

Runs :func:`~sharecell.core.walkthrough.run_walkthrough` and shows one
table row per step.  Without Rich the same rows are printed as plain
text.
"""

from __future__ import annotations

import sys

from sharecell.cli import exit_codes
from sharecell.cli.console import console, rich_available
from sharecell.core.models import WalkthroughStep
from sharecell.core.walkthrough import run_walkthrough


# ---------------------------------------------------------------------------
# Presentation helpers (pure)
# ---------------------------------------------------------------------------

def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def step_row(step: WalkthroughStep) -> tuple[str, str, str, str, str, str]:
    """Return the display cells for one walkthrough step."""
    snapshot = step.snapshot
    return (
        step.label,
        step.upgraded if step.upgraded is not None else "None",
        str(snapshot.strong_count),
        str(snapshot.weak_count),
        _yes_no(snapshot.value_alive),
        _yes_no(snapshot.released),
    )


_COLUMNS: tuple[str, ...] = ("Step", "Upgrade", "Strong", "Weak", "Alive", "Released")


# ---------------------------------------------------------------------------
# Renderers
# ---------------------------------------------------------------------------

def _print_rich_table(steps: list[WalkthroughStep]) -> None:
    from rich.table import Table

    table = Table(
        title="sharecell demo",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    for column in _COLUMNS:
        justify = "right" if column in ("Strong", "Weak") else "left"
        table.add_column(column, justify=justify, no_wrap=column in ("Step", "Upgrade"))

    for step in steps:
        table.add_row(*step_row(step))

    console.print(table)


def _print_plain_table(steps: list[WalkthroughStep]) -> None:
    widths = (20, 24, 6, 6, 6, 8)
    header = " ".join(f"{name:<{width}}" for name, width in zip(_COLUMNS, widths))
    print("\nsharecell demo", file=sys.stdout)
    print(header, file=sys.stdout)
    print("-" * len(header), file=sys.stdout)
    for step in steps:
        cells = step_row(step)
        print(
            " ".join(f"{cell:<{width}}" for cell, width in zip(cells, widths)),
            file=sys.stdout,
        )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_demo() -> int:
    """Run the walkthrough and render it; always returns SUCCESS."""
    steps = run_walkthrough()
    if rich_available():
        _print_rich_table(steps)
    else:
        _print_plain_table(steps)
    return exit_codes.SUCCESS
