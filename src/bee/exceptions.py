"""Custom exception hierarchy for bee.

Every failure the engine reports to the user maps to a subclass of
:class:`BeeError`.  The CLI layer is the only place that turns these
into messages and exit codes; handler code may raise anything, the
dispatcher wraps it in :class:`HandlerFailureError`.

Hierarchy
---------
BeeError
├── MalformedInvocationError
├── CommandNotFoundError
├── UnknownOptionError
├── MissingArgumentError
│   └── RootRequiredError
├── HandlerFailureError
├── RuntimeStateError
└── EnvironmentError
"""

from __future__ import annotations


class BeeError(Exception):
    """Base exception for all bee errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Parsing ---------------------------------------------------------------

class MalformedInvocationError(BeeError):
    """Raised when the token sequence has the wrong shape.

    Examples: a flag given a non-boolean value, a value option without
    a value, or two aliases of one option carrying different values.
    """


# --- Resolution / validation -----------------------------------------------

class CommandNotFoundError(BeeError):
    """Raised when no command with the requested name is registered."""

    def __init__(self, name: str, *, hint: str | None = None) -> None:
        super().__init__(f"There is no {name!r} command.", hint=hint)
        self.name: str = name


class UnknownOptionError(BeeError):
    """Raised when an option is not accepted by the resolved command."""

    def __init__(self, option: str, command: str) -> None:
        super().__init__(
            f"Unknown option {option!r} for command {command!r}.",
            hint=f"Run 'bee help {command}' to list the accepted options.",
        )
        self.option: str = option
        self.command: str = command


class MissingArgumentError(BeeError):
    """Raised when a required positional argument was not supplied."""

    def __init__(
        self,
        argument: str,
        command: str,
        *,
        message: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Missing required argument {argument!r} for command {command!r}.",
            hint=hint,
        )
        self.argument: str = argument
        self.command: str = command


class RootRequiredError(MissingArgumentError):
    """Raised when a command needs a Backdrop installation and none was found."""

    def __init__(self, command: str) -> None:
        super().__init__(
            "root",
            command,
            message=f"The {command!r} command requires a Backdrop installation.",
            hint="Run bee from the Backdrop root folder or pass --root=<path>.",
        )


# --- Execution -------------------------------------------------------------

class HandlerFailureError(BeeError):
    """Raised when a command handler itself fails.

    Wraps the underlying exception; :attr:`origin` is the ``file:line``
    of the innermost frame that raised it.
    """

    def __init__(self, command: str, cause: BaseException, origin: str | None) -> None:
        super().__init__(str(cause) or type(cause).__name__)
        self.command: str = command
        self.cause: BaseException = cause
        self.origin: str | None = origin


class RuntimeStateError(BeeError):
    """Raised by the runtime adapter when installation state is unusable."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(BeeError):
    """Raised when a required runtime dependency is not available."""
