"""Declarative catalog of commands for one mode.

Lookups are exact and case-sensitive.  There is no fuzzy matching and
no aliasing at this layer; a miss raises
:class:`~bee.exceptions.CommandNotFoundError`.
"""

from __future__ import annotations

import difflib
from collections.abc import Iterable, Iterator

from bee.core.models import CommandSpec, Mode
from bee.exceptions import CommandNotFoundError


class CommandRegistry:
    """Registry of :class:`CommandSpec` entries sharing one :class:`Mode`.

    Parameters
    ----------
    mode:
        The command space this registry belongs to.  Specs declaring the
        other mode are refused so the two spaces never mix.
    specs:
        Optional initial entries, registered in order.
    """

    def __init__(self, mode: Mode, specs: Iterable[CommandSpec] = ()) -> None:
        self.mode: Mode = mode
        self._commands: dict[str, CommandSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: CommandSpec) -> None:
        """Add *spec*; duplicate names are a programming error."""
        if spec.mode is not self.mode:
            raise ValueError(
                f"Command {spec.name!r} is a {spec.mode.value} command; "
                f"this registry holds {self.mode.value} commands.",
            )
        if spec.name in self._commands:
            raise ValueError(f"Command {spec.name!r} is already registered.")
        self._commands[spec.name] = spec

    def lookup(self, name: str) -> CommandSpec:
        """Return the spec registered as *name*.

        Raises
        ------
        CommandNotFoundError
            When *name* is not registered.  Close names are offered as a
            hint only; they are never resolved automatically.
        """
        try:
            return self._commands[name]
        except KeyError:
            close = difflib.get_close_matches(name, self._commands, n=3)
            hint = f"Did you mean: {', '.join(close)}?" if close else None
            raise CommandNotFoundError(name, hint=hint) from None

    def names(self) -> list[str]:
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[CommandSpec]:
        return (self._commands[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._commands)
