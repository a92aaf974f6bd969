"""Exit-code constants used by the CLI layer."""

from __future__ import annotations

SUCCESS: int = 0
"""Command completed without error."""

GENERAL_ERROR: int = 1
"""A SharecellError was caught, or a doctor check failed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C (128 + SIGINT)."""
