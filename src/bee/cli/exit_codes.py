"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

from bee.exceptions import (
    BeeError,
    CommandNotFoundError,
    HandlerFailureError,
    MalformedInvocationError,
    MissingArgumentError,
    UnknownOptionError,
)

SUCCESS: int = 0
"""Clean exit: command dispatched and rendered without error."""

GENERAL_ERROR: int = 1
"""A known BeeError without a more specific code was caught."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

COMMAND_NOT_FOUND: int = 3
"""The requested command is not registered in the active mode."""

UNKNOWN_OPTION: int = 4
"""An option was not accepted by the resolved command."""

MISSING_ARGUMENT: int = 5
"""A required positional argument (or the installation root) was missing."""

HANDLER_FAILURE: int = 6
"""The command handler raised during execution."""

MALFORMED_INVOCATION: int = 64
"""The token sequence could not be parsed.  Matches ``EX_USAGE``."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""


_BY_ERROR: tuple[tuple[type[BeeError], int], ...] = (
    (MalformedInvocationError, MALFORMED_INVOCATION),
    (CommandNotFoundError, COMMAND_NOT_FOUND),
    (UnknownOptionError, UNKNOWN_OPTION),
    (MissingArgumentError, MISSING_ARGUMENT),
    (HandlerFailureError, HANDLER_FAILURE),
)


def for_error(exc: BeeError) -> int:
    """Return the exit code for *exc*, falling back to :data:`GENERAL_ERROR`."""
    for error_type, code in _BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return GENERAL_ERROR
