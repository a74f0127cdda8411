"""Validate a parsed invocation against a command and run its handler.

Guarantees
----------
* Validation always completes before the handler runs; the handler
  never observes an invalid :class:`~bee.core.models.ParsedCommand`.
* Whatever the handler raises escapes as
  :class:`~bee.exceptions.HandlerFailureError`, with the original
  exception as ``cause``.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable, Collection, Iterable

from bee.core.calls import CommandCall
from bee.core.messages import MessageBuffer
from bee.core.models import (
    CommandSpec,
    ConfirmationElement,
    ExecutionContext,
    KeyValueElement,
    ParsedCommand,
    RenderElement,
    TableElement,
    TextElement,
)
from bee.core.parser import GLOBAL_OPTION_NAMES, normalize_options
from bee.core.protocols import Prompter, Runtime
from bee.exceptions import (
    CommandNotFoundError,
    HandlerFailureError,
    MalformedInvocationError,
    MissingArgumentError,
    RootRequiredError,
    UnknownOptionError,
)

logger = logging.getLogger(__name__)

_ELEMENT_TYPES = (TextElement, TableElement, ConfirmationElement, KeyValueElement)


def exception_origin(exc: BaseException) -> str | None:
    """Return ``file:line`` of the innermost frame that raised *exc*."""
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return None
    last = frames[-1]
    return f"{last.filename}:{last.lineno}"


def collect_elements(result: object) -> list[RenderElement]:
    """Normalise a handler's return value into a list of elements.

    ``None`` means no output; a single element is accepted on its own.
    """
    if result is None:
        return []
    if isinstance(result, _ELEMENT_TYPES):
        return [result]
    if isinstance(result, Iterable) and not isinstance(result, (str, bytes)):
        elements = list(result)
        for element in elements:
            if not isinstance(element, _ELEMENT_TYPES):
                raise TypeError(f"Handler returned a non-element value: {element!r}")
        return elements
    raise TypeError(f"Handler returned a non-element value: {result!r}")


class Dispatcher:
    """Strict validator and runner for native commands.

    Parameters
    ----------
    runtime_factory:
        Builds the runtime adapter for a context with a resolved root.
        Handlers get it lazily through :attr:`CommandCall.runtime`.
    prompter:
        Interactive yes/no prompt used when yes mode is off.
    global_options:
        Option names every command implicitly accepts.
    """

    def __init__(
        self,
        runtime_factory: Callable[[ExecutionContext], Runtime] | None = None,
        prompter: Prompter | None = None,
        *,
        global_options: Collection[str] = GLOBAL_OPTION_NAMES,
    ) -> None:
        self._runtime_factory = runtime_factory
        self._prompter = prompter
        self._global_options = frozenset(global_options)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def normalize(self, parsed: ParsedCommand, spec: CommandSpec) -> ParsedCommand:
        """Resolve *spec*'s option aliases and arity on *parsed*."""
        return normalize_options(parsed, spec.options)

    def validate(self, parsed: ParsedCommand, spec: CommandSpec, context: ExecutionContext) -> None:
        """Raise the first validation failure for *parsed* against *spec*.

        Raises
        ------
        UnknownOptionError
            An option key is neither global nor accepted by *spec*.
        MissingArgumentError
            A required positional argument was not supplied.
        MalformedInvocationError
            More positional arguments than *spec* declares.
        RootRequiredError
            *spec* needs an installation and none was resolved.
        """
        for key in parsed.options:
            if key not in self._global_options and not spec.accepts(key):
                raise UnknownOptionError(key, spec.name)

        supplied = len(parsed.positional_args)
        for position, argument in enumerate(spec.arguments):
            if argument.required and position >= supplied:
                raise MissingArgumentError(
                    argument.name,
                    spec.name,
                    hint=f"Usage: {usage(spec)}",
                )

        if supplied > len(spec.arguments):
            raise MalformedInvocationError(
                f"Too many arguments for command {spec.name!r}.",
                hint=f"Usage: {usage(spec)}",
            )

        if spec.requires_root and context.root is None:
            raise RootRequiredError(spec.name)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(
        self,
        parsed: ParsedCommand,
        spec: CommandSpec,
        context: ExecutionContext,
        messages: MessageBuffer,
    ) -> list[RenderElement]:
        """Validate, then run the handler of *spec*.

        Raises
        ------
        MalformedInvocationError
            A command option is given with the wrong arity.
        HandlerFailureError
            When the handler raises.  Validation errors are raised as
            they are, before the handler is ever called.
        """
        parsed = self.normalize(parsed, spec)
        self.validate(parsed, spec, context)

        call = CommandCall(
            spec=spec,
            parsed=parsed,
            context=context,
            messages=messages,
            runtime_factory=self._runtime_factory,
            prompter=self._prompter,
        )
        logger.debug("dispatching %r with %r", spec.name, parsed)
        try:
            produced = collect_elements(spec.handler(call))
        except (CommandNotFoundError, RootRequiredError):
            raise
        except Exception as exc:
            raise HandlerFailureError(spec.name, exc, exception_origin(exc)) from exc
        return [*call.confirmations, *produced]


def usage(spec: CommandSpec) -> str:
    """Return a one-line usage string for *spec*."""
    parts = ["bee", spec.name]
    parts.extend(f"[--{option.name}]" for option in spec.options)
    for argument in spec.arguments:
        parts.append(f"<{argument.name}>" if argument.required else f"[<{argument.name}>]")
    return " ".join(parts)

