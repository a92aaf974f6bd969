"""Tests for the cell probe (core/observability.py)."""

from __future__ import annotations

from unittest.mock import MagicMock

import structlog

from sharecell import new_shared
from sharecell.core.observability import DefaultCellProbe


class TestDefaultCellProbe:
    def test_creates_with_default_logger(self) -> None:
        probe = DefaultCellProbe()
        assert probe._logger is not None

    def test_accepts_custom_logger(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultCellProbe(logger=mock_logger)
        assert probe._logger is mock_logger

    def test_lifecycle_events_log_debug(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultCellProbe(logger=mock_logger)

        probe.value_destroyed("Point2D")
        probe.allocation_released("Point2D")

        assert [c.args[0] for c in mock_logger.debug.call_args_list] == [
            "shared_value_destroyed",
            "shared_allocation_released",
        ]

    def test_misuse_logs_warning(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultCellProbe(logger=mock_logger)

        probe.handle_misused("Point2D", "drop")

        mock_logger.warning.assert_called_once_with(
            "released_handle_used",
            type_name="Point2D",
            operation="drop",
        )

    def test_destructor_failure_logs_error(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultCellProbe(logger=mock_logger)

        probe.destructor_failed("Point2D", RuntimeError("hook broke"))

        mock_logger.error.assert_called_once_with(
            "shared_value_destructor_failed",
            type_name="Point2D",
            error="hook broke",
        )


class TestProbeWiring:
    def test_cell_events_reach_the_logger(self) -> None:
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultCellProbe(logger=mock_logger)

        strong = new_shared("v", probe=probe)
        weak = strong.downgrade()
        strong.drop()
        assert weak.upgrade() is None
        weak.drop()

        events = [c.args[0] for c in mock_logger.debug.call_args_list]
        assert events == [
            "shared_cell_created",
            "shared_value_destroyed",
            "weak_upgrade_refused",
            "shared_allocation_released",
        ]
