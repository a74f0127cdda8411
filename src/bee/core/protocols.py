"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code and command handlers depend ONLY on these protocols, never
on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class ThemeInfo:
    """A theme discovered in the installation."""

    machine_name: str
    """Directory / ``.info`` file name (e.g. ``bartik``)."""

    name: str
    """Human-readable name from the ``.info`` file (e.g. ``Bartik``)."""

    path: Path
    """Directory holding the theme."""


class Runtime(Protocol):
    """Narrow view of the content-management runtime used by handlers.

    Implementations must map backend failures to
    :class:`~bee.exceptions.RuntimeStateError`.
    """

    def config_get(self, namespace: str, key: str, default: Any = None) -> Any:
        """Return one value of the *namespace* config object."""
        ...  # pragma: no cover

    def config_set(self, namespace: str, key: str, value: Any) -> None:
        """Store *value* under *key* in the *namespace* config object."""
        ...  # pragma: no cover

    def config_data(self, namespace: str) -> Mapping[str, Any]:
        """Return the whole *namespace* config object.

        Raises
        ------
        RuntimeStateError
            When no such config object exists.
        """
        ...  # pragma: no cover

    def theme_list(self) -> Sequence[ThemeInfo]:
        """Return every theme available in the installation."""
        ...  # pragma: no cover

    def theme_info(self, machine_name: str) -> ThemeInfo:
        """Return the theme called *machine_name*.

        Raises
        ------
        RuntimeStateError
            When the theme does not exist.
        """
        ...  # pragma: no cover

    def get_default_theme(self) -> str | None: ...  # pragma: no cover

    def set_default_theme(self, machine_name: str) -> None: ...  # pragma: no cover

    def get_admin_theme(self) -> str | None: ...  # pragma: no cover

    def set_admin_theme(self, machine_name: str) -> None: ...  # pragma: no cover

    def get_theme_debug(self) -> bool: ...  # pragma: no cover

    def set_theme_debug(self, enabled: bool) -> None: ...  # pragma: no cover


class Prompter(Protocol):
    """Asks the user a yes/no question."""

    def __call__(self, question: str) -> bool:
        ...  # pragma: no cover
