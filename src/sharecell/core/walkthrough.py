"""Scripted tour of a shared cell's lifecycle.

Shares a :class:`Point2D`, observes it through two weak handles, then
drops handles one by one and records what an ``upgrade`` sees and what
the counts are after every step.  The CLI ``demo`` command renders the
returned steps; nothing here prints.
"""

from __future__ import annotations

from dataclasses import dataclass

from sharecell.core.cell import WeakHandle, new_shared
from sharecell.core.models import WalkthroughStep
from sharecell.core.observability import CellProbe


@dataclass(frozen=True, slots=True)
class Point2D:
    """The value shared during the walkthrough."""

    x: int
    y: int


def _observe(label: str, weak: WeakHandle[Point2D]) -> WalkthroughStep:
    """Upgrade *weak* briefly and snapshot the cell."""
    upgraded: str | None = None
    strong = weak.upgrade()
    if strong is not None:
        with strong:
            upgraded = repr(strong.value)
    return WalkthroughStep(label=label, upgraded=upgraded, snapshot=weak.snapshot())


def run_walkthrough(probe: CellProbe | None = None) -> list[WalkthroughStep]:
    """Run the walkthrough and return one step per observation point.

    Steps
    -----
    1. ``upgrade weak_ref_1`` and ``upgrade weak_ref_2`` — after two
       downgrades, each weak handle reaches the value.
    2. ``drop weak_ref_1`` — value still reachable.
    3. ``drop strong_ref`` — value destroyed, upgrade yields ``None``.
    4. ``drop weak_ref_2`` — allocation released.
    """
    strong_ref = new_shared(Point2D(x=20, y=40), probe=probe)
    # The cell stays observable after the last handle is dropped.
    cell = strong_ref.cell
    weak_ref_1 = strong_ref.downgrade()
    weak_ref_2 = strong_ref.downgrade()

    steps: list[WalkthroughStep] = [
        _observe("upgrade weak_ref_1", weak_ref_1),
        _observe("upgrade weak_ref_2", weak_ref_2),
    ]

    weak_ref_1.drop()
    steps.append(_observe("drop weak_ref_1", weak_ref_2))

    strong_ref.drop()
    steps.append(_observe("drop strong_ref", weak_ref_2))

    weak_ref_2.drop()
    steps.append(
        WalkthroughStep(
            label="drop weak_ref_2",
            upgraded=None,
            snapshot=cell.snapshot(),
        )
    )
    return steps
