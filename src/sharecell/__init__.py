"""sharecell — reference-counted shared ownership with weak observation.

Values live in a :class:`~sharecell.core.cell.SharedCell` kept alive by
explicit strong handles and observed by explicit weak handles.
"""

from sharecell.core.cell import (
    SharedCell,
    StrongHandle,
    WeakHandle,
    clone_strong,
    clone_weak,
    downgrade,
    drop_strong,
    drop_weak,
    new_shared,
    ptr_eq,
    strong_count,
    try_unwrap,
    upgrade,
    weak_count,
)
from sharecell.core.models import CellSnapshot
from sharecell.version import __version__

__all__: list[str] = [
    "CellSnapshot",
    "SharedCell",
    "StrongHandle",
    "WeakHandle",
    "__version__",
    "clone_strong",
    "clone_weak",
    "downgrade",
    "drop_strong",
    "drop_weak",
    "new_shared",
    "ptr_eq",
    "strong_count",
    "try_unwrap",
    "upgrade",
    "weak_count",
]
