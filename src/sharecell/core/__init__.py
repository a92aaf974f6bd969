"""Core layer — the shared cell, its handles, and its domain models.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Events leave the core only through a :class:`CellProbe`.
"""

from sharecell.core.cell import SharedCell, StrongHandle, WeakHandle, new_shared
from sharecell.core.models import CellSnapshot, WalkthroughStep
from sharecell.core.observability import CellProbe, DefaultCellProbe
from sharecell.core.walkthrough import Point2D, run_walkthrough

__all__: list[str] = [
    "CellProbe",
    "CellSnapshot",
    "DefaultCellProbe",
    "Point2D",
    "SharedCell",
    "StrongHandle",
    "WalkthroughStep",
    "WeakHandle",
    "new_shared",
    "run_walkthrough",
]
