"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and routes commands.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

import sharecell
from sharecell import __version__
from sharecell.cli import exit_codes
from sharecell.cli.app import main
from sharecell.exceptions import (
    ConfigurationError,
    DestructorError,
    EnvironmentError,
    HandleReleasedError,
    SharecellError,
    SharedOwnershipError,
)


# ---------------------------------------------------------------------------
# Version / public API
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


class TestPublicApi:
    def test_all_names_resolve(self) -> None:
        for name in sharecell.__all__:
            assert hasattr(sharecell, name), name


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            HandleReleasedError,
            SharedOwnershipError,
            DestructorError,
            ConfigurationError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[SharecellError]
    ) -> None:
        assert issubclass(exc_class, SharecellError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(SharecellError, Exception)

    def test_hint_is_stored(self) -> None:
        err = SharecellError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert SharecellError("boom").hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self) -> None:
        assert main([]) == exit_codes.SUCCESS

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_unknown_command_is_rejected(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["frobnicate"])
        assert exc_info.value.code == 2

    @patch("sharecell.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_routes(self, mock_doc: object) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS

    @patch("sharecell.cli.demo.run_demo", return_value=exit_codes.SUCCESS)
    def test_demo_routes(self, mock_demo: object) -> None:
        assert main(["demo"]) == exit_codes.SUCCESS

    def test_bad_log_level_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown log level"):
            main(["--log-level", "loud", "demo"])

    @patch("sharecell.cli.app.configure_logging")
    @patch("sharecell.cli.demo.run_demo", return_value=exit_codes.SUCCESS)
    def test_log_flags_reach_configuration(
        self, _mock_demo: object, mock_configure: object,
    ) -> None:
        main(["--log-level", "debug", "--json-logs", "demo"])
        mock_configure.assert_called_once_with("debug", json=True)  # type: ignore[attr-defined]

    @patch("sharecell.cli.app.configure_logging")
    @patch("sharecell.cli.demo.run_demo", return_value=exit_codes.SUCCESS)
    def test_log_settings_fall_back_to_environment(
        self,
        _mock_demo: object,
        mock_configure: object,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("SHARECELL_LOG_LEVEL", "info")
        monkeypatch.setenv("SHARECELL_LOG_JSON", "yes")
        main(["demo"])
        mock_configure.assert_called_once_with("info", json=True)  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run_cli(self, monkeypatch: pytest.MonkeyPatch, error: BaseException) -> int:
        from sharecell.cli import app as app_module

        def _raise(argv: list[str] | None = None) -> int:
            raise error

        monkeypatch.setattr(app_module, "main", _raise)
        with pytest.raises(SystemExit) as exc_info:
            app_module.cli()
        return int(exc_info.value.code)

    def test_sharecell_error_exits_general(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run_cli(monkeypatch, ConfigurationError("bad", hint="fix it"))
        assert code == exit_codes.GENERAL_ERROR
        out = capsys.readouterr().out
        assert "bad" in out
        assert "fix it" in out

    def test_keyboard_interrupt_exits_130(self, monkeypatch: pytest.MonkeyPatch) -> None:
        code = self._run_cli(monkeypatch, KeyboardInterrupt())
        assert code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error_exits_two(self, monkeypatch: pytest.MonkeyPatch) -> None:
        code = self._run_cli(monkeypatch, RuntimeError("kaboom"))
        assert code == exit_codes.UNEXPECTED_ERROR
