"""Reference-counted shared cell with strong and weak handles.

A :class:`SharedCell` owns one value and two counters.  Strong handles
keep the value alive; weak handles only observe it and must be
upgraded to reach it.  Handles are explicit ownership tokens: the
caller ends their lifetime with ``drop()`` or by using them as context
managers, and the cell reacts immediately:

* the last strong drop destroys the value (its ``on_destroy`` hook runs
  and the cell stops referencing it);
* the allocation counts as released once both counters are zero.

Strong handles must never form a cycle (a value holding a strong handle
to itself or to an owner), since none of the counts in the cycle would
ever reach zero.  Back-links belong in weak handles.

Not thread-safe: every handle of a cell must stay on one thread.

Usage::

    point = new_shared(Point2D(20, 40))
    observer = point.downgrade()
    with observer.upgrade() as again:
        print(again.value)
    point.drop()
    assert observer.upgrade() is None
    observer.drop()
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Any, Generic, TypeVar

from sharecell.core.models import CellSnapshot
from sharecell.core.observability import CellProbe, DefaultCellProbe
from sharecell.exceptions import (
    DestructorError,
    HandleReleasedError,
    SharedOwnershipError,
)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Backing allocation
# ---------------------------------------------------------------------------

class SharedCell(Generic[T]):
    """The allocation shared by every handle of one value.

    Not meant to be used directly: create cells with :func:`new_shared`
    and work through the handles.  Counts live here and nowhere else,
    so all handles observe the same numbers at any instant.
    """

    def __init__(
        self,
        value: T,
        *,
        on_destroy: Callable[[T], None] | None = None,
        probe: CellProbe | None = None,
    ) -> None:
        self._value: T | None = value
        self._on_destroy: Callable[[T], None] | None = on_destroy
        self._probe: CellProbe = probe if probe is not None else DefaultCellProbe()
        self._type_name: str = type(value).__qualname__
        self._strong: int = 1
        self._weak: int = 0
        self._value_alive: bool = True
        self._released: bool = False
        self._probe.cell_created(self._type_name)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    @property
    def strong_count(self) -> int:
        return self._strong

    @property
    def weak_count(self) -> int:
        return self._weak

    @property
    def released(self) -> bool:
        return self._released

    def snapshot(self) -> CellSnapshot:
        return CellSnapshot(
            strong_count=self._strong,
            weak_count=self._weak,
            value_alive=self._value_alive,
            released=self._released,
        )

    # ------------------------------------------------------------------
    # Count transitions (called by handles only)
    # ------------------------------------------------------------------

    def _acquire_strong(self) -> None:
        self._strong += 1

    def _try_acquire_strong(self) -> bool:
        """Increment the strong count unless it already reached zero."""
        if self._strong == 0:
            self._probe.upgrade_refused(self._type_name)
            return False
        self._strong += 1
        return True

    def _release_strong(self) -> None:
        self._strong -= 1
        if self._strong > 0:
            return

        # Release even if the hook raises something that is not an Exception.
        try:
            error = self._destroy_value()
        finally:
            self._release_if_unused()
        if error is not None:
            raise DestructorError(
                f"on_destroy hook for {self._type_name} failed: {error}",
                hint="The value is destroyed regardless; fix the hook.",
            ) from error

    def _acquire_weak(self) -> None:
        self._weak += 1

    def _release_weak(self) -> None:
        self._weak -= 1
        self._release_if_unused()

    def _take_value(self) -> T:
        """Move the value out of the cell without running its hook."""
        value: Any = self._value
        self._value = None
        self._on_destroy = None
        self._value_alive = False
        self._strong = 0
        self._probe.value_unwrapped(self._type_name)
        self._release_if_unused()
        return value

    # ------------------------------------------------------------------
    # Lifecycle internals
    # ------------------------------------------------------------------

    def _destroy_value(self) -> Exception | None:
        """Drop the value and run its hook; return the hook's error."""
        value: Any = self._value
        hook = self._on_destroy
        self._value = None
        self._on_destroy = None
        self._value_alive = False
        self._probe.value_destroyed(self._type_name)

        if hook is None:
            return None
        try:
            hook(value)
        except Exception as exc:
            self._probe.destructor_failed(self._type_name, exc)
            return exc
        return None

    def _release_if_unused(self) -> None:
        # The hook may drop weak handles itself, so guard re-entry.
        if self._strong == 0 and self._weak == 0 and not self._released:
            self._released = True
            self._probe.allocation_released(self._type_name)


# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------

class _Handle(Generic[T]):
    """Shared plumbing for both handle kinds: liveness and observers."""

    _kind: str = "handle"

    def __init__(self, cell: SharedCell[T]) -> None:
        self._cell: SharedCell[T] = cell
        self._live: bool = True

    def _checked(self, operation: str) -> SharedCell[T]:
        """Return the cell, or raise if this handle was already dropped."""
        if not self._live:
            self._cell._probe.handle_misused(self._cell._type_name, operation)
            raise HandleReleasedError(
                f"Cannot {operation}: this {self._kind} handle was already "
                "dropped.",
                hint="Clone the handle before dropping it if you still need it.",
            )
        return self._cell

    @property
    def is_live(self) -> bool:
        """``True`` until :meth:`drop` (or a consuming call) ends the handle."""
        return self._live

    @property
    def strong_count(self) -> int:
        return self._checked("read strong_count").strong_count

    @property
    def weak_count(self) -> int:
        return self._checked("read weak_count").weak_count

    @property
    def cell(self) -> SharedCell[T]:
        """The backing cell; it stays observable after every handle is gone."""
        return self._checked("read cell")

    def snapshot(self) -> CellSnapshot:
        return self._checked("snapshot").snapshot()


class StrongHandle(_Handle[T]):
    """Owning handle: the value stays alive while any of these is live.

    Obtained from :func:`new_shared`, :meth:`clone` or a successful
    :meth:`WeakHandle.upgrade`; never construct one directly.
    """

    _kind = "strong"

    @property
    def value(self) -> T:
        """The shared value."""
        cell = self._checked("read value")
        value: Any = cell._value
        return value

    def clone(self) -> StrongHandle[T]:
        """Return another strong handle to the same cell."""
        cell = self._checked("clone")
        cell._acquire_strong()
        return StrongHandle(cell)

    def downgrade(self) -> WeakHandle[T]:
        """Return a weak handle observing the same cell."""
        cell = self._checked("downgrade")
        cell._acquire_weak()
        return WeakHandle(cell)

    def drop(self) -> None:
        """End this handle; the last strong drop destroys the value.

        Raises
        ------
        HandleReleasedError
            If this handle was already dropped.
        DestructorError
            If the value's ``on_destroy`` hook raised.  The handle is
            dropped and the counts are updated even then.
        """
        cell = self._checked("drop")
        self._live = False
        cell._release_strong()

    def try_unwrap(self) -> T:
        """Consume the sole strong handle and return the value.

        The value is moved out, not destroyed: ``on_destroy`` does not
        run.  Weak handles see the value as gone afterwards.

        Raises
        ------
        SharedOwnershipError
            If other strong handles exist; this handle stays live.
        """
        cell = self._checked("unwrap")
        if cell.strong_count != 1:
            raise SharedOwnershipError(
                f"Cannot unwrap: {cell.strong_count} strong handles share "
                "this value.",
                hint="Drop the other strong handles first.",
            )
        self._live = False
        return cell._take_value()

    def __enter__(self) -> StrongHandle[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._live:
            self.drop()

    def __repr__(self) -> str:
        if not self._live:
            return "StrongHandle(<dropped>)"
        return f"StrongHandle({self._cell._value!r})"


class WeakHandle(_Handle[T]):
    """Non-owning handle: observes the cell without keeping the value.

    Weak handles may outlive the value; they keep only the counts
    around until the last one is dropped.
    """

    _kind = "weak"

    def clone(self) -> WeakHandle[T]:
        """Return another weak handle, even if the value is gone."""
        cell = self._checked("clone")
        cell._acquire_weak()
        return WeakHandle(cell)

    def upgrade(self) -> StrongHandle[T] | None:
        """Return a new strong handle, or ``None`` if the value is gone.

        ``None`` is an expected outcome, not an error; counts are left
        unchanged in that case.
        """
        cell = self._checked("upgrade")
        if not cell._try_acquire_strong():
            return None
        return StrongHandle(cell)

    def drop(self) -> None:
        """End this handle; may release the allocation.

        Raises
        ------
        HandleReleasedError
            If this handle was already dropped.
        """
        cell = self._checked("drop")
        self._live = False
        cell._release_weak()

    def __enter__(self) -> WeakHandle[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._live:
            self.drop()

    def __repr__(self) -> str:
        if not self._live:
            return "WeakHandle(<dropped>)"
        state = "alive" if self._cell._value_alive else "dead"
        return f"WeakHandle(<{state}>)"


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------

def new_shared(
    value: T,
    *,
    on_destroy: Callable[[T], None] | None = None,
    probe: CellProbe | None = None,
) -> StrongHandle[T]:
    """Allocate a cell around *value* and return its first strong handle.

    Parameters
    ----------
    value:
        The object to share.
    on_destroy:
        Called once with *value* when the last strong handle is dropped.
    probe:
        Receives lifecycle events; defaults to :class:`DefaultCellProbe`.
    """
    return StrongHandle(SharedCell(value, on_destroy=on_destroy, probe=probe))


def clone_strong(handle: StrongHandle[T]) -> StrongHandle[T]:
    return handle.clone()


def downgrade(handle: StrongHandle[T]) -> WeakHandle[T]:
    return handle.downgrade()


def clone_weak(handle: WeakHandle[T]) -> WeakHandle[T]:
    return handle.clone()


def upgrade(handle: WeakHandle[T]) -> StrongHandle[T] | None:
    return handle.upgrade()


def drop_strong(handle: StrongHandle[T]) -> None:
    handle.drop()


def drop_weak(handle: WeakHandle[T]) -> None:
    handle.drop()


def try_unwrap(handle: StrongHandle[T]) -> T:
    return handle.try_unwrap()


def strong_count(handle: StrongHandle[Any] | WeakHandle[Any]) -> int:
    return handle.strong_count


def weak_count(handle: StrongHandle[Any] | WeakHandle[Any]) -> int:
    return handle.weak_count


def ptr_eq(
    first: StrongHandle[Any] | WeakHandle[Any],
    second: StrongHandle[Any] | WeakHandle[Any],
) -> bool:
    """Return ``True`` when both handles refer to the same cell."""
    return first._cell is second._cell
