"""Domain models for sharecell.

All models are **frozen** dataclasses — immutable value objects taken
at one instant.  A snapshot never tracks later changes to its cell.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Cell observation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CellSnapshot:
    """Counts and lifecycle flags of one cell at the moment of the call."""

    strong_count: int
    """Number of live strong handles."""

    weak_count: int
    """Number of live weak handles."""

    value_alive: bool
    """``False`` once the value was destroyed or moved out."""

    released: bool
    """``True`` once both counts have reached zero."""


# ---------------------------------------------------------------------------
# Walkthrough
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class WalkthroughStep:
    """One observation point of the ``sharecell demo`` walkthrough."""

    label: str
    """What happened right before the observation."""

    upgraded: str | None
    """``repr`` of the value reached through ``upgrade``, or ``None``."""

    snapshot: CellSnapshot
