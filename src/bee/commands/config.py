"""Configuration commands: read and write values of config objects."""

from __future__ import annotations

import json
from typing import Any

from bee.core.calls import CommandCall
from bee.core.models import (
    ArgumentSpec,
    CommandSpec,
    KeyValueElement,
    OptionSpec,
    RenderElement,
    TextElement,
)
from bee.exceptions import RuntimeStateError

_MISSING = object()


def format_value(value: Any) -> str:
    """Render a config value the way it is stored (JSON), strings bare."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def parse_value(raw: str) -> Any:
    """Interpret *raw* as a JSON literal when it is one, else as a string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def config_get(call: CommandCall) -> list[RenderElement]:
    namespace = call.arguments["config"]
    key = call.argument("key")
    data = call.runtime.config_data(namespace)
    if key is None:
        return [KeyValueElement(tuple((name, format_value(value)) for name, value in data.items()))]
    if key not in data:
        raise RuntimeStateError(f"'{namespace}' has no key '{key}'.")
    return [TextElement(format_value(data[key]))]


def config_set(call: CommandCall) -> list[RenderElement]:
    namespace = call.arguments["config"]
    key = call.arguments["key"]
    value = call.arguments["value"] if call.option("string") else parse_value(call.arguments["value"])

    runtime = call.runtime
    if runtime.config_get(namespace, key, _MISSING) is _MISSING:
        if not call.confirm(f"'{key}' does not exist in '{namespace}'. Create it?"):
            call.messages.warning("Cancelled.")
            return []
    runtime.config_set(namespace, key, value)
    call.messages.success(f"'{key}' was set to {format_value(value)!r} in '{namespace}'.")
    return []


_CONFIG = ArgumentSpec("config", "Name of the config object, e.g. 'system.core'.")

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="config-get",
        description="Show a config value, or every value of a config object.",
        handler=config_get,
        arguments=(_CONFIG, ArgumentSpec("key", "Key to show.", required=False)),
        requires_root=True,
    ),
    CommandSpec(
        name="config-set",
        description="Set a config value.",
        handler=config_set,
        arguments=(
            _CONFIG,
            ArgumentSpec("key", "Key to set."),
            ArgumentSpec("value", "New value; JSON literals are decoded."),
        ),
        options=(OptionSpec("string", "Store the value as a string, never decode it."),),
        requires_root=True,
    ),
)
