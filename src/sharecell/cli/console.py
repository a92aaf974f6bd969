"""CLI console helpers with optional Rich support.

Rich is imported lazily so ``--help`` and ``--version`` keep working
when it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from sharecell.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed.",
            hint="Install with: pip install rich",
        ) from exc
    return Console


def rich_available() -> bool:
    """Return whether Rich can be imported."""
    try:
        _load_rich_console_class()
    except EnvironmentError:
        return False
    return True


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stdout."""
    console_class = _load_rich_console_class()
    return console_class()


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain-text fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stdout print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stdout)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()
