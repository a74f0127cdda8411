"""Tokenizer for raw invocations.

Turns ``sys.argv[1:]`` into a :class:`~bee.core.models.ParsedCommand`.
Only the *shape* of tokens is checked here.  Whether an option is
accepted by a command is decided later by the dispatcher, because the
global option set and each command's option set are disjoint concerns.

Rules
-----
* ``--name``, ``--name=value``, ``-x`` and ``-x=value`` are options; a
  short option is a single letter, so ``-1`` is a positional argument.
* The first non-option token is the command name; every later
  non-option token is a positional argument, order preserved.
* ``--`` ends option scanning; a lone ``-`` is a positional argument.
* Aliases are replaced by their canonical long name.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from bee.core.models import GlobalOptions, OptionSpec, ParsedCommand
from bee.exceptions import MalformedInvocationError

GLOBAL_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec("root", "Backdrop root folder", takes_value=True),
    OptionSpec(
        "drush",
        "Use .drush.py command files instead. Drush command compatibility.",
    ),
    OptionSpec("yes", "Force Yes to all Yes/No questions", aliases=("y",)),
    OptionSpec("debug", "Debug mode", aliases=("d",)),
    OptionSpec("version", "Show the bee version and exit", aliases=("V",)),
)
"""Options understood by every invocation, whatever the command."""

GLOBAL_OPTION_NAMES: frozenset[str] = frozenset(spec.name for spec in GLOBAL_OPTIONS)

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})

_LONG = re.compile(r"^--(?P<name>[A-Za-z0-9][\w.-]*)(?:=(?P<value>.*))?$", re.DOTALL)
_SHORT = re.compile(r"^-(?P<name>[A-Za-z])(?:=(?P<value>.*))?$", re.DOTALL)


def _alias_table(specs: Iterable[OptionSpec]) -> dict[str, OptionSpec]:
    table: dict[str, OptionSpec] = {}
    for spec in specs:
        for key in (spec.name, *spec.aliases):
            if key in table and table[key] is not spec:
                raise ValueError(f"Option alias {key!r} is declared twice.")
            table[key] = spec
    return table


_GLOBAL_TABLE: dict[str, OptionSpec] = _alias_table(GLOBAL_OPTIONS)


def _match_option(token: str) -> tuple[str, str | None] | None:
    """Return ``(name, value)`` if *token* is option-shaped."""
    match = _LONG.match(token) or _SHORT.match(token)
    if match is None:
        return None
    return match.group("name"), match.group("value")


def _coerce_value(spec: OptionSpec | None, token: str, value: str | None) -> str | bool:
    if spec is None:
        # Unknown to the parser: keep whatever was given.
        return True if value is None else value
    if spec.takes_value:
        if not value:
            raise MalformedInvocationError(
                f"Option {token!r} requires a value.",
                hint=f"Use --{spec.name}=<value>.",
            )
        return value
    if value is None or value.strip().lower() in _TRUTHY:
        return True
    raise MalformedInvocationError(
        f"Option {token!r} is a flag and does not take a value.",
        hint=f"Use --{spec.name} on its own.",
    )


def parse_invocation(
    tokens: Sequence[str],
    *,
    extra_options: Iterable[OptionSpec] = (),
) -> ParsedCommand:
    """Tokenize *tokens* into a :class:`ParsedCommand`.

    Parameters
    ----------
    tokens:
        Raw argument vector, without the program name.
    extra_options:
        Additional option declarations whose aliases and arity should be
        honoured, on top of :data:`GLOBAL_OPTIONS`.

    Raises
    ------
    MalformedInvocationError
        When an option has the wrong arity, or when two spellings of one
        option carry different values.
    """
    table = dict(_GLOBAL_TABLE)
    table.update(_alias_table(extra_options))

    command_name: str | None = None
    positional: list[str] = []
    options: dict[str, str | bool] = {}
    seen_as: dict[str, str] = {}

    index = 0
    options_done = False
    while index < len(tokens):
        token = tokens[index]
        index += 1

        option = None if options_done else _match_option(token)
        if option is None:
            if token == "--" and not options_done:
                options_done = True
                continue
            if command_name is None:
                command_name = token
            else:
                positional.append(token)
            continue

        name, value = option
        spec = table.get(name)
        # Spaced form for value options: --root /path
        if spec is not None and spec.takes_value and value is None and index < len(tokens):
            if _match_option(tokens[index]) is None:
                value = tokens[index]
                index += 1

        canonical = spec.name if spec is not None else name
        coerced = _coerce_value(spec, token, value)

        if canonical in options and options[canonical] != coerced:
            raise MalformedInvocationError(
                f"Option {token!r} conflicts with {seen_as[canonical]!r}.",
                hint=f"Give --{canonical} only once.",
            )
        options[canonical] = coerced
        seen_as.setdefault(canonical, token)

    return ParsedCommand(
        command_name=command_name,
        positional_args=tuple(positional),
        options=options,
    )


def global_options(parsed: ParsedCommand) -> GlobalOptions:
    """Build the typed :class:`GlobalOptions` record for *parsed*."""
    root = parsed.options.get("root")
    return GlobalOptions(
        root=Path(root) if isinstance(root, str) else None,
        drush=parsed.options.get("drush") is True,
        yes=parsed.options.get("yes") is True,
        debug=parsed.options.get("debug") is True,
        version=parsed.options.get("version") is True,
    )


def _spelling(key: str) -> str:
    return f"-{key}" if len(key) == 1 else f"--{key}"


def normalize_options(
    parsed: ParsedCommand,
    specs: Iterable[OptionSpec],
    *,
    check_arity: bool = True,
) -> ParsedCommand:
    """Apply a command's own option declarations to *parsed*.

    Global options were resolved by :func:`parse_invocation`; this does
    the same for the options of the resolved command, once it is known.
    Aliases become canonical names and, with *check_arity*, flags and
    value options are held to their arity.  Undeclared keys are kept
    as they are.

    Raises
    ------
    MalformedInvocationError
        Wrong arity, or two spellings of one option with different
        values.
    """
    table = _alias_table(specs)
    options: dict[str, str | bool] = {}
    seen_as: dict[str, str] = {}
    for key, value in parsed.options.items():
        spec = None if key in GLOBAL_OPTION_NAMES else table.get(key)
        token = _spelling(key)
        canonical = key
        if spec is not None:
            canonical = spec.name
            if check_arity:
                value = _coerce_value(spec, token, None if value is True else value)
        if canonical in options and options[canonical] != value:
            raise MalformedInvocationError(
                f"Option {token!r} conflicts with {seen_as[canonical]!r}.",
                hint=f"Give --{canonical} only once.",
            )
        options[canonical] = value
        seen_as.setdefault(canonical, token)
    return ParsedCommand(
        command_name=parsed.command_name,
        positional_args=parsed.positional_args,
        options=options,
    )
