"""Infrastructure: Backdrop runtime adapter over installation files.

Implements the :class:`~bee.core.protocols.Runtime` protocol by reading
and writing the installation's active configuration directory (one JSON
file per config object) and by scanning theme ``.info`` files.

Rules
-----
* The active config directory comes from ``settings.php``
  (``$config_directories['active']``); the settings default is used
  when it is not declared.
* Every filesystem or decoding failure is re-raised as
  :class:`~bee.exceptions.RuntimeStateError`.
* No user-facing output.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from bee.core.models import ExecutionContext
from bee.core.protocols import ThemeInfo
from bee.exceptions import RuntimeStateError
from bee.settings import DEFAULT_CONFIG_DIR, MARKER_FILE

logger = logging.getLogger(__name__)

SYSTEM_CORE = "system.core"
THEME_DIRS: tuple[str, ...] = ("core/themes", "themes")

_ACTIVE_DIR = re.compile(
    r"""\$config_directories\s*\[\s*['"]active['"]\s*\]\s*=\s*['"](?P<path>[^'"]+)['"]""",
)
_INFO_LINE = re.compile(r"^\s*(?P<key>[\w.\[\]-]+)\s*=\s*(?P<value>.*?)\s*$")


def find_config_dir(root: Path, *, default: str = DEFAULT_CONFIG_DIR) -> Path:
    """Return the active config directory declared in ``settings.php``."""
    settings_file = root / MARKER_FILE
    try:
        text = settings_file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise RuntimeStateError(f"Cannot read {settings_file}: {exc}") from exc
    match = _ACTIVE_DIR.search(text)
    relative = match.group("path") if match else default
    path = Path(relative)
    return path if path.is_absolute() else root / path


def parse_info_file(path: Path) -> dict[str, str]:
    """Parse the flat ``key = value`` lines of a ``.info`` file."""
    data: dict[str, str] = {}
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        if not line.strip() or line.lstrip().startswith(";"):
            continue
        match = _INFO_LINE.match(line)
        if match is None:
            continue
        value = match.group("value").strip("\"'")
        data.setdefault(match.group("key"), value)
    return data


class BackdropRuntime:
    """File-backed view of one Backdrop installation.

    Parameters
    ----------
    root:
        The resolved installation root.
    config_dir:
        Override for the active config directory.
    """

    def __init__(self, root: Path, config_dir: Path | None = None) -> None:
        self.root: Path = root
        self.config_dir: Path = config_dir or find_config_dir(root)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def _config_file(self, namespace: str) -> Path:
        if not namespace or "/" in namespace or namespace.startswith("."):
            raise RuntimeStateError(f"Invalid config name {namespace!r}.")
        return self.config_dir / f"{namespace}.json"

    def _load(self, namespace: str) -> dict[str, Any] | None:
        path = self._config_file(namespace)
        if not path.is_file():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise RuntimeStateError(f"Cannot read config {namespace!r}: {exc}") from exc
        if not isinstance(data, dict):
            raise RuntimeStateError(f"Config {namespace!r} is not a JSON object.")
        return data

    def config_data(self, namespace: str) -> Mapping[str, Any]:
        data = self._load(namespace)
        if data is None:
            raise RuntimeStateError(
                f"Config {namespace!r} does not exist.",
                hint=f"Looked in {self.config_dir}.",
            )
        return data

    def config_get(self, namespace: str, key: str, default: Any = None) -> Any:
        data = self._load(namespace) or {}
        return data.get(key, default)

    def config_set(self, namespace: str, key: str, value: Any) -> None:
        data = self._load(namespace) or {"_config_name": namespace}
        data[key] = value
        path = self._config_file(namespace)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")
        except OSError as exc:
            raise RuntimeStateError(f"Cannot write config {namespace!r}: {exc}") from exc
        logger.debug("config %s:%s = %r", namespace, key, value)

    # ------------------------------------------------------------------
    # Themes
    # ------------------------------------------------------------------

    def theme_list(self) -> list[ThemeInfo]:
        themes: dict[str, ThemeInfo] = {}
        for relative in THEME_DIRS:
            base = self.root / relative
            if not base.is_dir():
                continue
            for info_file in sorted(base.glob("*/*.info")):
                machine_name = info_file.stem
                if info_file.parent.name != machine_name:
                    continue
                info = parse_info_file(info_file)
                # Contributed themes override core themes of the same name.
                themes[machine_name] = ThemeInfo(
                    machine_name=machine_name,
                    name=info.get("name", machine_name),
                    path=info_file.parent,
                )
        return [themes[name] for name in sorted(themes)]

    def theme_info(self, machine_name: str) -> ThemeInfo:
        for theme in self.theme_list():
            if theme.machine_name == machine_name:
                return theme
        raise RuntimeStateError(f"Theme {machine_name!r} could not be found.")

    def get_default_theme(self) -> str | None:
        return self.config_get(SYSTEM_CORE, "theme_default")

    def set_default_theme(self, machine_name: str) -> None:
        self.theme_info(machine_name)
        self.config_set(SYSTEM_CORE, "theme_default", machine_name)

    def get_admin_theme(self) -> str | None:
        return self.config_get(SYSTEM_CORE, "admin_theme")

    def set_admin_theme(self, machine_name: str) -> None:
        self.theme_info(machine_name)
        self.config_set(SYSTEM_CORE, "admin_theme", machine_name)

    def get_theme_debug(self) -> bool:
        return bool(self.config_get(SYSTEM_CORE, "theme_debug", 0))

    def set_theme_debug(self, enabled: bool) -> None:
        self.config_set(SYSTEM_CORE, "theme_debug", 1 if enabled else 0)


def runtime_for(context: ExecutionContext) -> BackdropRuntime:
    """Runtime factory used by the dispatcher: one adapter per context root."""
    if context.root is None:
        raise RuntimeStateError("No Backdrop installation was found.")
    return BackdropRuntime(context.root)
