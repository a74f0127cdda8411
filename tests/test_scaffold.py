"""Smoke tests: verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined and mapped per error kind.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from bee import __version__
from bee.cli import exit_codes
from bee.cli.app import cli, main
from bee.exceptions import (
    BeeError,
    CommandNotFoundError,
    EnvironmentError,
    HandlerFailureError,
    MalformedInvocationError,
    MissingArgumentError,
    RootRequiredError,
    RuntimeStateError,
    UnknownOptionError,
)
from bee.settings import Settings


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            MalformedInvocationError,
            CommandNotFoundError,
            UnknownOptionError,
            MissingArgumentError,
            RootRequiredError,
            HandlerFailureError,
            RuntimeStateError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(self, exc_class: type[BeeError]) -> None:
        assert issubclass(exc_class, BeeError)

    def test_root_required_is_a_missing_argument(self) -> None:
        err = RootRequiredError("themes")
        assert isinstance(err, MissingArgumentError)
        assert err.argument == "root"
        assert err.hint is not None

    def test_hint_is_stored(self) -> None:
        err = BeeError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert BeeError("boom").hint is None

    def test_unknown_option_names_the_option(self) -> None:
        err = UnknownOptionError("colour", "status")
        assert err.option == "colour"
        assert "'colour'" in str(err)

    def test_handler_failure_keeps_cause(self) -> None:
        cause = ValueError("bad value")
        err = HandlerFailureError("status", cause, "file.py:3")
        assert err.cause is cause
        assert str(err) == "bad value"
        assert err.origin == "file.py:3"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_error_codes_are_distinct_and_non_zero(self) -> None:
        codes = [
            exit_codes.GENERAL_ERROR,
            exit_codes.UNEXPECTED_ERROR,
            exit_codes.COMMAND_NOT_FOUND,
            exit_codes.UNKNOWN_OPTION,
            exit_codes.MISSING_ARGUMENT,
            exit_codes.HANDLER_FAILURE,
            exit_codes.MALFORMED_INVOCATION,
        ]
        assert 0 not in codes
        assert len(set(codes)) == len(codes)

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (MalformedInvocationError("x"), exit_codes.MALFORMED_INVOCATION),
            (CommandNotFoundError("x"), exit_codes.COMMAND_NOT_FOUND),
            (UnknownOptionError("o", "c"), exit_codes.UNKNOWN_OPTION),
            (MissingArgumentError("a", "c"), exit_codes.MISSING_ARGUMENT),
            (RootRequiredError("c"), exit_codes.MISSING_ARGUMENT),
            (HandlerFailureError("c", ValueError(), None), exit_codes.HANDLER_FAILURE),
            (RuntimeStateError("x"), exit_codes.GENERAL_ERROR),
        ],
    )
    def test_for_error(self, error: BeeError, code: int) -> None:
        assert exit_codes.for_error(error) == code


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_shows_help(
        self,
        tmp_path: Path,
        settings: Settings,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.chdir(tmp_path)
        code = main([], settings=settings)
        assert code == exit_codes.SUCCESS
        out = capsys.readouterr().out
        assert "Usage: bee" in out
        assert "theme-default" in out

    def test_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--version"]) == exit_codes.SUCCESS
        assert capsys.readouterr().out.strip() == f"bee {__version__}"

    def test_short_version_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["-V"]) == exit_codes.SUCCESS
        assert __version__ in capsys.readouterr().out

    def test_cli_exits_with_main_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from bee.cli import app as app_module

        monkeypatch.setattr(app_module, "main", lambda: exit_codes.COMMAND_NOT_FOUND)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.COMMAND_NOT_FOUND

    def test_cli_keyboard_interrupt(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        from bee.cli import app as app_module

        def _interrupt() -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr(app_module, "main", _interrupt)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT
        assert "Aborted by user." in capsys.readouterr().err

    def test_cli_unexpected_error_has_no_traceback(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        from bee.cli import app as app_module

        def _explode() -> int:
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app_module, "main", _explode)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "RuntimeError: kaboom" in err
        assert "Traceback" not in err
