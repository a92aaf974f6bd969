"""Shared pytest fixtures and configuration for the sharecell test suite.

Guidelines
----------
* Core tests inject a mock probe so lifecycle events can be asserted.
* Logging is configured once at ``warning`` so debug events stay quiet.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest

from sharecell.core.observability import DefaultCellProbe
from sharecell.infra.logging import configure_logging, reset_logging


@pytest.fixture(autouse=True)
def _quiet_logging() -> Iterator[None]:
    configure_logging("warning")
    yield
    reset_logging()


@pytest.fixture
def probe() -> MagicMock:
    """A probe double recording every lifecycle event."""
    return MagicMock(spec=DefaultCellProbe)
