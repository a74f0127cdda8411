"""The handler-facing view of one validated dispatch."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from bee.core.messages import MessageBuffer
from bee.core.models import (
    CommandSpec,
    ConfirmationElement,
    ExecutionContext,
    ParsedCommand,
    RenderElement,
)
from bee.core.protocols import Prompter, Runtime
from bee.exceptions import RootRequiredError


@dataclass(slots=True)
class CommandCall:
    """Everything a native handler receives.

    ``arguments`` maps declared argument names to the supplied values;
    optional arguments that were not given are absent.
    """

    spec: CommandSpec
    parsed: ParsedCommand
    context: ExecutionContext
    messages: MessageBuffer
    runtime_factory: Callable[[ExecutionContext], Runtime] | None = None
    prompter: Prompter | None = None
    arguments: Mapping[str, str] = field(init=False)
    confirmations: list[RenderElement] = field(init=False, default_factory=list)
    _runtime: Runtime | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        bound = dict(zip((arg.name for arg in self.spec.arguments), self.parsed.positional_args))
        self.arguments = MappingProxyType(bound)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def argument(self, name: str, default: str | None = None) -> str | None:
        return self.arguments.get(name, default)

    def option(self, name: str, default: Any = None) -> Any:
        return self.parsed.options.get(name, default)

    @property
    def runtime(self) -> Runtime:
        """The runtime adapter, created on first use.

        Raises
        ------
        RootRequiredError
            When no installation root was resolved.
        """
        if self._runtime is None:
            if self.context.root is None or self.runtime_factory is None:
                raise RootRequiredError(self.spec.name)
            self._runtime = self.runtime_factory(self.context)
        return self._runtime

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    def confirm(self, question: str) -> bool:
        """Ask *question*; yes mode answers ``True`` without prompting.

        The outcome is queued as a :class:`ConfirmationElement` so it is
        rendered in order with the handler's own output.
        """
        if self.context.yes or self.prompter is None:
            answer = self.context.yes
        else:
            answer = bool(self.prompter(question))
        self.confirmations.append(ConfirmationElement(question=question, answer=answer))
        return answer
