"""Mode selection: native commands vs. the legacy command-file dialect.

The two dialects are separate command spaces.  Each is modelled as one
member of a tagged union so that its registry and its dispatcher never
mix with the other's:

* :class:`NativeStrategy`: the native registry and the strict dispatcher.
* :class:`LegacyStrategy`: a registry built on demand from legacy
  command files, and a dispatcher implementing that dialect's rules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal, Union

from bee.core.dispatcher import Dispatcher
from bee.core.messages import MessageBuffer
from bee.core.models import (
    ExecutionContext,
    ParsedCommand,
    RenderElement,
    TableElement,
)
from bee.core.registry import CommandRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NativeStrategy:
    registry: CommandRegistry
    dispatcher: Dispatcher
    default_command: str | None = "help"
    kind: Literal["native"] = "native"

    def load_registry(self) -> CommandRegistry:
        return self.registry


@dataclass(frozen=True)
class LegacyStrategy:
    loader: Callable[[], CommandRegistry]
    dispatcher: Dispatcher
    default_command: str | None = None
    kind: Literal["legacy"] = "legacy"

    def load_registry(self) -> CommandRegistry:
        return self.loader()


DispatchStrategy = Union[NativeStrategy, LegacyStrategy]


def select_strategy(
    context: ExecutionContext,
    *,
    native: Callable[[], NativeStrategy],
    legacy: Callable[[], LegacyStrategy],
) -> DispatchStrategy:
    """Return the strategy for *context*; only the chosen one is built."""
    strategy: DispatchStrategy = legacy() if context.drush else native()
    logger.debug("selected %s mode", strategy.kind)
    return strategy


def command_table(registry: CommandRegistry, *, title: str | None = None) -> TableElement:
    """Return a table of every command in *registry*, sorted by name."""
    return TableElement(
        headers=("Command", "Description"),
        rows=tuple((spec.name, spec.description) for spec in registry),
        title=title,
    )


def execute(
    strategy: DispatchStrategy,
    parsed: ParsedCommand,
    context: ExecutionContext,
    messages: MessageBuffer,
) -> list[RenderElement]:
    """Resolve *parsed* in *strategy*'s command space and dispatch it.

    Raises
    ------
    CommandNotFoundError
        When the command is not registered in this mode.
    """
    registry = strategy.load_registry()
    name = parsed.command_name or strategy.default_command
    if name is None:
        return [command_table(registry, title=f"Available {strategy.kind} commands")]
    spec = registry.lookup(name)
    return strategy.dispatcher.dispatch(parsed, spec, context, messages)
