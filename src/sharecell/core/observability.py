"""Domain probe for shared-cell lifecycle events.

The cell reports what happens to it (value destroyed, allocation
released, refused upgrades, handle misuse) through a probe instead of
calling a logger directly, so the core stays free of logging details
and tests can assert on events with a mock.
"""

from __future__ import annotations

import logging
from typing import Protocol

import structlog

LOGGER_NAME = "sharecell"

# Silent until the host application (or the CLI) configures logging.
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class CellProbe(Protocol):
    """Domain probe for shared-cell operations."""

    def cell_created(self, type_name: str) -> None:
        """Record that a new cell was allocated around a value."""
        ...

    def value_destroyed(self, type_name: str) -> None:
        """Record that the last strong handle went away."""
        ...

    def value_unwrapped(self, type_name: str) -> None:
        """Record that the value was moved out by its sole owner."""
        ...

    def allocation_released(self, type_name: str) -> None:
        """Record that both counts reached zero."""
        ...

    def upgrade_refused(self, type_name: str) -> None:
        """Record that a weak handle found the value already gone."""
        ...

    def handle_misused(self, type_name: str, operation: str) -> None:
        """Record an operation attempted on a dropped handle."""
        ...

    def destructor_failed(self, type_name: str, error: Exception) -> None:
        """Record that the value's ``on_destroy`` hook raised."""
        ...


class DefaultCellProbe:
    """Default implementation of CellProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
    ):
        self._logger = logger or structlog.wrap_logger(
            logging.getLogger(LOGGER_NAME),
            wrapper_class=structlog.stdlib.BoundLogger,
        )

    def cell_created(self, type_name: str) -> None:
        """Record that a new cell was allocated around a value."""
        self._logger.debug("shared_cell_created", type_name=type_name)

    def value_destroyed(self, type_name: str) -> None:
        """Record that the last strong handle went away."""
        self._logger.debug("shared_value_destroyed", type_name=type_name)

    def value_unwrapped(self, type_name: str) -> None:
        """Record that the value was moved out by its sole owner."""
        self._logger.debug("shared_value_unwrapped", type_name=type_name)

    def allocation_released(self, type_name: str) -> None:
        """Record that both counts reached zero."""
        self._logger.debug("shared_allocation_released", type_name=type_name)

    def upgrade_refused(self, type_name: str) -> None:
        """Record that a weak handle found the value already gone."""
        self._logger.debug("weak_upgrade_refused", type_name=type_name)

    def handle_misused(self, type_name: str, operation: str) -> None:
        """Record an operation attempted on a dropped handle."""
        self._logger.warning(
            "released_handle_used",
            type_name=type_name,
            operation=operation,
        )

    def destructor_failed(self, type_name: str, error: Exception) -> None:
        """Record that the value's ``on_destroy`` hook raised."""
        self._logger.error(
            "shared_value_destructor_failed",
            type_name=type_name,
            error=str(error),
        )
