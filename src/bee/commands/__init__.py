"""Native command declarations.

Each module exposes ``COMMANDS``, a tuple of
:class:`~bee.core.models.CommandSpec`.  Commands that need to see the
registry itself (``help``) are built by the factories in ``FACTORIES``.
"""

from __future__ import annotations

from bee.commands import config, core, themes
from bee.core.models import Mode
from bee.core.registry import CommandRegistry

_MODULES = (core, config, themes)


def build_native_registry() -> CommandRegistry:
    """Return a registry holding every native command."""
    registry = CommandRegistry(Mode.NATIVE)
    for module in _MODULES:
        for spec in module.COMMANDS:
            registry.register(spec)
    for factory in core.FACTORIES:
        registry.register(factory(registry))
    return registry


__all__: list[str] = ["build_native_registry"]
