"""Core layer: the command resolution and execution engine.

Rules
-----
* No terminal output and no filesystem access.
* No imports from ``cli``, ``infra`` or ``commands``.
* External systems are reached only through :mod:`bee.core.protocols`.
"""

from bee.core.dispatcher import Dispatcher
from bee.core.messages import MessageBuffer
from bee.core.mode import LegacyStrategy, NativeStrategy, execute, select_strategy
from bee.core.models import (
    ArgumentSpec,
    CommandSpec,
    ConfirmationElement,
    ExecutionContext,
    GlobalOptions,
    KeyValueElement,
    Message,
    Mode,
    OptionSpec,
    ParsedCommand,
    RenderElement,
    Severity,
    TableElement,
    TextElement,
)
from bee.core.parser import global_options, parse_invocation
from bee.core.registry import CommandRegistry

__all__: list[str] = [
    "ArgumentSpec",
    "CommandRegistry",
    "CommandSpec",
    "ConfirmationElement",
    "Dispatcher",
    "ExecutionContext",
    "GlobalOptions",
    "KeyValueElement",
    "LegacyStrategy",
    "Message",
    "MessageBuffer",
    "Mode",
    "NativeStrategy",
    "OptionSpec",
    "ParsedCommand",
    "RenderElement",
    "Severity",
    "TableElement",
    "TextElement",
    "execute",
    "global_options",
    "parse_invocation",
    "select_strategy",
]
