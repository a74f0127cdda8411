"""Infrastructure: loader and calling convention for drush-style command files.

Legacy mode (``--drush``) runs commands written for another tool's
command-file dialect.  That dialect has its own discovery, declaration
format and calling convention, so it is kept entirely inside this
module; the core only sees :class:`~bee.core.models.CommandSpec` entries
tagged :attr:`~bee.core.models.Mode.LEGACY`.

Dialect
-------
* A command file is named ``<prefix>.drush.py``.
* It defines ``<prefix>_drush_command()`` returning a dict of
  ``command-name -> definition``.  Recognised definition keys:
  ``description``, ``arguments``, ``options``, ``callback``,
  ``required-arguments``, ``strict-option-handling``, ``bootstrap``.
* The default callback is ``drush_<prefix>_<command>`` or
  ``drush_<command>`` (hyphens become underscores).
* Callbacks are called as ``callback(session, *args)``; a returned
  string, or iterable of strings, is rendered as text.
"""

from __future__ import annotations

import importlib.util
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Any

from bee.core.calls import CommandCall
from bee.core.dispatcher import Dispatcher, usage
from bee.core.messages import MessageBuffer
from bee.core.models import (
    ArgumentSpec,
    CommandSpec,
    ExecutionContext,
    Mode,
    OptionSpec,
    ParsedCommand,
    RenderElement,
    Severity,
    TextElement,
)
from bee.core.parser import normalize_options
from bee.core.registry import CommandRegistry
from bee.exceptions import (
    MissingArgumentError,
    RootRequiredError,
    UnknownOptionError,
)
from bee.settings import Settings

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".drush.py"
NO_ROOT_BOOTSTRAP: frozenset[str] = frozenset(
    {"none", "drush_bootstrap_none", "drush_bootstrap_drush"},
)

_LOG_SEVERITY: dict[str, Severity] = {
    "error": Severity.ERROR,
    "failed": Severity.ERROR,
    "warning": Severity.WARNING,
    "success": Severity.SUCCESS,
    "ok": Severity.SUCCESS,
    "completed": Severity.SUCCESS,
}


# ---------------------------------------------------------------------------
# Session handed to legacy callbacks
# ---------------------------------------------------------------------------

class DrushSession:
    """The object legacy callbacks receive as their first argument."""

    def __init__(self, call: CommandCall) -> None:
        self._call = call
        self.elements: list[RenderElement] = []

    @property
    def context(self) -> ExecutionContext:
        return self._call.context

    @property
    def command(self) -> str:
        return self._call.spec.name

    def get_option(self, name: str, default: Any = None) -> Any:
        return self._call.parsed.options.get(name, default)

    def print(self, text: object = "") -> None:
        self.elements.append(TextElement(str(text)))

    def log(self, text: str, type: str = "notice") -> None:  # noqa: A002
        self._call.messages.append(text, _LOG_SEVERITY.get(type.lower(), Severity.INFO))

    def confirm(self, question: str) -> bool:
        answer = self._call.confirm(question)
        # Keep the confirmation in line with the callback's own prints.
        self.elements.append(self._call.confirmations.pop())
        return answer


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LegacyCommand:
    """One command declared by a legacy command file.

    Instances are the handlers of the :class:`CommandSpec` entries
    produced by :meth:`to_spec`.
    """

    name: str
    callback: Callable[..., Any]
    source: Path
    description: str = ""
    arguments: tuple[tuple[str, str], ...] = ()
    options: tuple[tuple[str, str], ...] = ()
    required_arguments: int = 0
    strict_options: bool = False
    needs_root: bool = True

    def __call__(self, call: CommandCall) -> list[RenderElement]:
        session = DrushSession(call)
        result = self.callback(session, *call.parsed.positional_args)
        return [*session.elements, *_text_elements(result)]

    def to_spec(self) -> CommandSpec:
        required = self.required_arguments
        return CommandSpec(
            name=self.name,
            description=self.description,
            handler=self,
            options=tuple(OptionSpec(name, text) for name, text in self.options),
            arguments=tuple(
                ArgumentSpec(name, text, required=position < required)
                for position, (name, text) in enumerate(self.arguments)
            ),
            mode=Mode.LEGACY,
            requires_root=self.needs_root,
        )


def _text_elements(result: object) -> list[RenderElement]:
    if result is None or result is True or result is False:
        return []
    if isinstance(result, str):
        return [TextElement(result)]
    if isinstance(result, Iterable):
        return [TextElement(str(item)) for item in result]
    return [TextElement(str(result))]


def _pairs(raw: object) -> tuple[tuple[str, str], ...]:
    if isinstance(raw, Mapping):
        return tuple((str(key), str(value)) for key, value in raw.items())
    if isinstance(raw, Iterable) and not isinstance(raw, str):
        return tuple((str(key), "") for key in raw)
    return ()


def _required_count(raw: object, declared: int) -> int:
    if raw is True:
        return declared
    if isinstance(raw, int) and not isinstance(raw, bool):
        return max(raw, 0)
    return 0


def _callback_name(prefix: str, command: str) -> tuple[str, ...]:
    command_part = command.replace("-", "_")
    return (f"drush_{prefix}_{command_part}", f"drush_{command_part}")


def _build_commands(prefix: str, module: ModuleType, path: Path) -> list[LegacyCommand]:
    hook = getattr(module, f"{prefix}_drush_command", None)
    if not callable(hook):
        raise ImportError(f"{path.name} does not define {prefix}_drush_command().")

    declared = hook() or {}
    if not isinstance(declared, Mapping):
        raise ImportError(f"{prefix}_drush_command() must return a dict.")

    commands: list[LegacyCommand] = []
    for name, definition in declared.items():
        definition = definition or {}
        callback = definition.get("callback")
        if isinstance(callback, str):
            callback = getattr(module, callback, None)
        if callback is None:
            callback = next(
                (getattr(module, candidate) for candidate in _callback_name(prefix, name)
                 if callable(getattr(module, candidate, None))),
                None,
            )
        if not callable(callback):
            raise ImportError(f"No callback found for legacy command {name!r} in {path.name}.")

        arguments = _pairs(definition.get("arguments"))
        bootstrap = str(definition.get("bootstrap", "full")).lower()
        commands.append(
            LegacyCommand(
                name=str(name),
                callback=callback,
                source=path,
                description=str(definition.get("description", "")),
                arguments=arguments,
                options=_pairs(definition.get("options")),
                required_arguments=_required_count(
                    definition.get("required-arguments"), len(arguments),
                ),
                strict_options=bool(definition.get("strict-option-handling", False)),
                needs_root=bootstrap not in NO_ROOT_BOOTSTRAP,
            ),
        )
    return commands


# ---------------------------------------------------------------------------
# Discovery and loading
# ---------------------------------------------------------------------------

def search_paths(context: ExecutionContext, settings: Settings) -> list[Path]:
    """Return the directories scanned for legacy command files, in order."""
    paths: list[Path] = []
    if context.root is not None:
        paths.extend(
            (context.root / "drush", context.root / "sites" / "all" / "drush", context.root / "modules"),
        )
    paths.append(settings.user_drush_dir)
    paths.extend(settings.drush_paths)
    return paths


def discover_command_files(paths: Sequence[Path]) -> list[Path]:
    """Return every ``*.drush.py`` file below *paths*, without duplicates."""
    found: dict[Path, None] = {}
    for base in paths:
        if not base.is_dir():
            continue
        for candidate in sorted(base.rglob(f"*{FILE_SUFFIX}")):
            if candidate.is_file():
                found.setdefault(candidate.resolve(), None)
    return list(found)


def load_command_file(path: Path) -> list[LegacyCommand]:
    """Import one command file and return its declared commands.

    Raises
    ------
    ImportError
        When the file cannot be imported or declares nothing usable.
    """
    prefix = path.name[: -len(FILE_SUFFIX)].replace("-", "_").replace(".", "_")
    spec = importlib.util.spec_from_file_location(f"bee_drush_{prefix}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path}.")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise ImportError(f"{path.name}: {exc}") from exc
    return _build_commands(prefix, module, path)


def load_legacy_registry(
    context: ExecutionContext,
    settings: Settings,
    messages: MessageBuffer,
) -> CommandRegistry:
    """Build the legacy-mode registry from every discoverable command file.

    Broken files are reported as warnings and skipped; the first file to
    declare a command name wins.
    """
    registry = CommandRegistry(Mode.LEGACY)
    for path in discover_command_files(search_paths(context, settings)):
        try:
            commands = load_command_file(path)
        except ImportError as exc:
            messages.warning(f"Skipping legacy command file {path}: {exc}")
            logger.debug("legacy file %s failed to load", path, exc_info=True)
            continue
        for command in commands:
            if command.name in registry:
                logger.debug("legacy command %r from %s shadowed", command.name, path)
                continue
            registry.register(command.to_spec())
    logger.debug("loaded %d legacy commands", len(registry))
    return registry


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class LegacyDispatcher(Dispatcher):
    """Dispatcher applying the legacy dialect's validation rules.

    * Options are only checked when the command asks for strict handling.
    * Declared options carry no arity, so any value is passed through.
    * Extra positional arguments are passed through to the callback.
    """

    def normalize(self, parsed: ParsedCommand, spec: CommandSpec) -> ParsedCommand:
        return normalize_options(parsed, spec.options, check_arity=False)

    def validate(self, parsed: ParsedCommand, spec: CommandSpec, context: ExecutionContext) -> None:
        command = spec.handler
        strict = isinstance(command, LegacyCommand) and command.strict_options
        if strict:
            for key in parsed.options:
                if key not in self._global_options and not spec.accepts(key):
                    raise UnknownOptionError(key, spec.name)

        supplied = len(parsed.positional_args)
        for position, argument in enumerate(spec.arguments):
            if argument.required and position >= supplied:
                raise MissingArgumentError(argument.name, spec.name, hint=f"Usage: {usage(spec)}")

        if spec.requires_root and context.root is None:
            raise RootRequiredError(spec.name)
