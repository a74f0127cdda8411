"""Theme commands: list themes, set default/admin theme, toggle theme debug."""

from __future__ import annotations

from bee.core.calls import CommandCall
from bee.core.models import ArgumentSpec, CommandSpec, RenderElement, TableElement, TextElement


def themes_list(call: CommandCall) -> list[RenderElement]:
    runtime = call.runtime
    default = runtime.get_default_theme()
    admin = runtime.get_admin_theme()
    rows = []
    for theme in runtime.theme_list():
        roles = [role for role, name in (("default", default), ("admin", admin))
                 if name == theme.machine_name]
        rows.append((theme.machine_name, theme.name, ", ".join(roles)))
    if not rows:
        call.messages.warning("No themes were found.")
        return []
    return [TableElement(headers=("Theme", "Name", "Used as"), rows=tuple(rows))]


def theme_default(call: CommandCall) -> list[RenderElement]:
    runtime = call.runtime
    theme = runtime.theme_info(call.arguments["theme"])
    runtime.set_default_theme(theme.machine_name)
    return [TextElement(f"'{theme.name}' was set as the default theme.")]


def theme_admin(call: CommandCall) -> list[RenderElement]:
    runtime = call.runtime
    theme = runtime.theme_info(call.arguments["theme"])
    runtime.set_admin_theme(theme.machine_name)
    return [TextElement(f"'{theme.name}' was set as the admin theme.")]


def theme_enable_debug(call: CommandCall) -> None:
    call.runtime.set_theme_debug(True)
    call.messages.success("Theme debug mode was enabled.")


def theme_disable_debug(call: CommandCall) -> None:
    call.runtime.set_theme_debug(False)
    call.messages.success("Theme debug mode was disabled.")


_THEME = ArgumentSpec("theme", "Machine name of the theme, e.g. 'bartik'.")

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="themes",
        description="List the themes available in the installation.",
        handler=themes_list,
        requires_root=True,
    ),
    CommandSpec(
        name="theme-default",
        description="Set the default theme.",
        handler=theme_default,
        arguments=(_THEME,),
        requires_root=True,
    ),
    CommandSpec(
        name="theme-admin",
        description="Set the admin theme.",
        handler=theme_admin,
        arguments=(_THEME,),
        requires_root=True,
    ),
    CommandSpec(
        name="theme-enable-debug",
        description="Enable theme debug mode.",
        handler=theme_enable_debug,
        requires_root=True,
    ),
    CommandSpec(
        name="theme-disable-debug",
        description="Disable theme debug mode.",
        handler=theme_disable_debug,
        requires_root=True,
    ),
)
