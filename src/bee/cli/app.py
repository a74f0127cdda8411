"""CLI application entry point and run orchestration for bee.

This module is the **sole error boundary** for the entire application.
It catches :class:`~bee.exceptions.BeeError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Run order
---------
1. Parse the invocation (a malformed one is reported and ends the run).
2. Bootstrap the :class:`~bee.core.models.ExecutionContext`.
3. Select native or legacy mode, resolve and dispatch the command.
4. Flush the message buffer, then render the command's elements.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from rich.markup import escape

from bee.cli import exit_codes
from bee.cli.console import console, error_console, get_console
from bee.cli.prompt import confirm
from bee.cli.renderer import Renderer, flush_messages
from bee.commands import build_native_registry
from bee.core.dispatcher import Dispatcher
from bee.core.messages import MessageBuffer
from bee.core.mode import LegacyStrategy, NativeStrategy, execute, select_strategy
from bee.core.models import ExecutionContext, RenderElement
from bee.core.parser import global_options, parse_invocation
from bee.exceptions import BeeError, HandlerFailureError, MalformedInvocationError
from bee.infra.bootstrap import bootstrap
from bee.infra.legacy_loader import LegacyDispatcher, load_legacy_registry
from bee.infra.runtime import runtime_for
from bee.logging_config import configure_logging
from bee.settings import Settings, load_settings
from bee.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Strategy factories
# ---------------------------------------------------------------------------

def _native_strategy() -> NativeStrategy:
    return NativeStrategy(
        registry=build_native_registry(),
        dispatcher=Dispatcher(runtime_for, confirm),
    )


def _legacy_strategy(
    context: ExecutionContext,
    settings: Settings,
    messages: MessageBuffer,
) -> LegacyStrategy:
    return LegacyStrategy(
        loader=lambda: load_legacy_registry(context, settings, messages),
        dispatcher=LegacyDispatcher(runtime_for, confirm),
    )


# ---------------------------------------------------------------------------
# Error reporting
# ---------------------------------------------------------------------------

def _report(exc: BeeError, messages: MessageBuffer) -> None:
    """Turn *exc* into buffered messages."""
    text = str(exc)
    if isinstance(exc, HandlerFailureError):
        if exc.origin:
            text = f"{text}\n\t{exc.origin}"
        logger.debug("%r failed", exc.command, exc_info=exc.cause)
    messages.error(text)
    if exc.hint:
        messages.warning(exc.hint)


def _print_error(exc: BeeError) -> None:
    error_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", markup=True)
    if exc.hint:
        error_console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}", markup=True)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    """Run the bee CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.
    settings:
        Settings override; read from the environment when ``None``.

    Returns
    -------
    int
        OS process exit code.
    """
    tokens = list(sys.argv[1:] if argv is None else argv)
    try:
        parsed = parse_invocation(tokens)
    except MalformedInvocationError as exc:
        _print_error(exc)
        return exit_codes.MALFORMED_INVOCATION

    options = global_options(parsed)
    configure_logging(options.debug)
    if options.version:
        console.print(f"bee {__version__}")
        return exit_codes.SUCCESS

    settings = settings or load_settings()
    messages = MessageBuffer()
    elements: list[RenderElement] = []
    code = exit_codes.SUCCESS
    try:
        context = bootstrap(options, messages, marker_file=settings.marker_file)
        strategy = select_strategy(
            context,
            native=_native_strategy,
            legacy=lambda: _legacy_strategy(context, settings, messages),
        )
        elements = execute(strategy, parsed, context, messages)
    except BeeError as exc:
        _report(exc, messages)
        code = exit_codes.for_error(exc)
    finally:
        output = get_console()
        flush_messages(messages, output)
        Renderer(output).render(elements)
    return code


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except BeeError as exc:
        _print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        error_console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        error_console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
