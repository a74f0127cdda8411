"""Domain models for bee.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  Mappings are exposed read-only so that a
value handed to a handler cannot be mutated behind the engine's back.
"""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from bee.core.calls import CommandCall


def _frozen_mapping(data: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Mode(enum.Enum):
    """Which command space a command belongs to."""

    NATIVE = "native"
    LEGACY = "legacy"


class Severity(enum.Enum):
    """Severity of a buffered user-facing message."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Parsed invocation
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """Result of tokenizing one invocation.

    Every key of :attr:`options` is a canonical long name; aliases were
    resolved by the parser.
    """

    command_name: str | None
    """First non-option token, or ``None`` when only options were given."""

    positional_args: tuple[str, ...] = ()
    """Remaining non-option tokens, in invocation order."""

    options: Mapping[str, str | bool] = field(default_factory=dict)
    """Option name → explicit value, or ``True`` for a bare flag."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "positional_args", tuple(self.positional_args))
        object.__setattr__(self, "options", _frozen_mapping(self.options))


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Typed view of the options every invocation understands."""

    root: Path | None = None
    drush: bool = False
    yes: bool = False
    debug: bool = False
    version: bool = False


# ---------------------------------------------------------------------------
# Command declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OptionSpec:
    """One option accepted by a command (or globally)."""

    name: str
    description: str = ""
    aliases: tuple[str, ...] = ()
    takes_value: bool = False


@dataclass(frozen=True, slots=True)
class ArgumentSpec:
    """One positional argument of a command."""

    name: str
    description: str = ""
    required: bool = True


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Declarative description of a registered command."""

    name: str
    description: str
    handler: Handler
    options: tuple[OptionSpec, ...] = ()
    arguments: tuple[ArgumentSpec, ...] = ()
    mode: Mode = Mode.NATIVE
    requires_root: bool = False

    def accepts(self, option: str) -> bool:
        """Return ``True`` if *option* is one of this command's options."""
        return any(spec.name == option for spec in self.options)

    @property
    def required_arguments(self) -> tuple[ArgumentSpec, ...]:
        return tuple(arg for arg in self.arguments if arg.required)


# ---------------------------------------------------------------------------
# Execution context
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """Per-run state established once by the bootstrapper."""

    debug: bool = False
    yes: bool = False
    drush: bool = False
    root: Path | None = None
    request: Mapping[str, str] = field(default_factory=dict)
    """Synthetic request variables built by the request shim."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "request", _frozen_mapping(self.request))

    @property
    def mode(self) -> Mode:
        return Mode.LEGACY if self.drush else Mode.NATIVE

    @property
    def has_root(self) -> bool:
        return self.root is not None


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Message:
    """A user-facing status line owned by the message buffer."""

    text: str
    severity: Severity
    sequence: int


# ---------------------------------------------------------------------------
# Render elements
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TextElement:
    """Plain text, printed verbatim."""

    text: str


@dataclass(frozen=True, slots=True)
class TableElement:
    """Rows printed as a table with aligned columns."""

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    title: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", tuple(self.headers))
        object.__setattr__(
            self, "rows", tuple(tuple(str(cell) for cell in row) for row in self.rows),
        )


@dataclass(frozen=True, slots=True)
class ConfirmationElement:
    """Outcome of a yes/no question asked during dispatch."""

    question: str
    answer: bool


@dataclass(frozen=True, slots=True)
class KeyValueElement:
    """Ordered ``key: value`` pairs."""

    pairs: tuple[tuple[str, str], ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "pairs", tuple((str(key), str(value)) for key, value in self.pairs),
        )


RenderElement = Union[TextElement, TableElement, ConfirmationElement, KeyValueElement]


if TYPE_CHECKING:
    Handler = Callable[[CommandCall], Sequence[RenderElement] | None]
