"""Custom exception hierarchy for sharecell.

Every error raised by the library or the CLI inherits from
:class:`SharecellError`, so callers can catch one base type and the CLI
error boundary can render a clean message with an optional hint.

An ``upgrade`` that finds the value already destroyed is **not** an
error: it returns ``None``.

Hierarchy
---------
SharecellError
├── HandleReleasedError
├── SharedOwnershipError
├── DestructorError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class SharecellError(Exception):
    """Base exception for all sharecell errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Handle discipline -----------------------------------------------------

class HandleReleasedError(SharecellError):
    """Raised when a handle is used after it was dropped or consumed.

    The rejected operation never changes the cell's counts.
    """


class SharedOwnershipError(SharecellError):
    """Raised when an operation needs sole ownership but others exist."""


# --- Value lifecycle -------------------------------------------------------

class DestructorError(SharecellError):
    """Raised when a value's ``on_destroy`` hook fails.

    The value is still considered destroyed and the counts stay
    consistent; the original exception is chained as ``__cause__``.
    """


# --- Configuration / environment -------------------------------------------

class ConfigurationError(SharecellError):
    """Raised for invalid runtime configuration (log level, flags)."""


class EnvironmentError(SharecellError):
    """Raised when an optional runtime dependency is not available."""
