"""Core commands: ``help`` and ``status``."""

from __future__ import annotations

from collections.abc import Callable

from bee.core.calls import CommandCall
from bee.core.dispatcher import usage
from bee.core.mode import command_table
from bee.core.models import (
    ArgumentSpec,
    CommandSpec,
    KeyValueElement,
    RenderElement,
    TableElement,
    TextElement,
)
from bee.core.parser import GLOBAL_OPTIONS
from bee.core.registry import CommandRegistry
from bee.version import __version__


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def make_help(registry: CommandRegistry) -> CommandSpec:
    """Build the ``help`` command bound to *registry*."""

    def show_help(call: CommandCall) -> list[RenderElement]:
        name = call.argument("command")
        if name is None:
            global_rows = tuple(
                (", ".join(f"-{a}" if len(a) == 1 else f"--{a}" for a in (o.name, *o.aliases)),
                 o.description)
                for o in GLOBAL_OPTIONS
            )
            return [
                TextElement(f"bee {__version__}"),
                TextElement("Usage: bee [global-options] <command> [options] [arguments]"),
                TableElement(headers=("Global option", "Description"), rows=global_rows),
                command_table(registry),
            ]

        spec = registry.lookup(name)
        elements: list[RenderElement] = [
            KeyValueElement((("Command", spec.name), ("Description", spec.description),
                             ("Usage", usage(spec)))),
        ]
        if spec.arguments:
            elements.append(TableElement(
                headers=("Argument", "Description", "Required"),
                rows=tuple((a.name, a.description, "yes" if a.required else "no")
                           for a in spec.arguments),
            ))
        if spec.options:
            elements.append(TableElement(
                headers=("Option", "Description"),
                rows=tuple((f"--{o.name}", o.description) for o in spec.options),
            ))
        return elements

    return CommandSpec(
        name="help",
        description="List the available commands, or describe one.",
        handler=show_help,
        arguments=(ArgumentSpec("command", "Command to describe.", required=False),),
    )


def status(call: CommandCall) -> list[RenderElement]:
    context = call.context
    pairs: list[tuple[str, str]] = [
        ("bee version", __version__),
        ("Backdrop root", str(context.root) if context.root else "not found"),
        ("Drush mode", _on_off(context.drush)),
        ("Yes mode", _on_off(context.yes)),
        ("Debug mode", _on_off(context.debug)),
    ]
    if context.root is not None:
        runtime = call.runtime
        pairs.extend((
            ("Default theme", runtime.get_default_theme() or "none"),
            ("Admin theme", runtime.get_admin_theme() or "none"),
            ("Theme debug", _on_off(runtime.get_theme_debug())),
        ))
    return [KeyValueElement(tuple(pairs))]


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="status",
        description="Show the bee and Backdrop status for this run.",
        handler=status,
    ),
)

FACTORIES: tuple[Callable[[CommandRegistry], CommandSpec], ...] = (make_help,)
