"""Runtime settings for bee, read from the process environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from bee import __version__

MARKER_FILE = "settings.php"
DEFAULT_CONFIG_DIR = "files/config/active"


@dataclass(frozen=True)
class Settings:
    home_dir: Path
    marker_file: str = MARKER_FILE
    default_config_dir: str = DEFAULT_CONFIG_DIR
    drush_paths: tuple[Path, ...] = ()
    cli_version: str = __version__

    @property
    def user_drush_dir(self) -> Path:
        return self.home_dir / ".drush"


def _split_paths(raw: str | None) -> tuple[Path, ...]:
    if not raw:
        return ()
    return tuple(Path(part).expanduser() for part in raw.split(os.pathsep) if part.strip())


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if environ is None else environ
    home = env.get("BEE_HOME") or env.get("HOME")
    return Settings(
        home_dir=Path(home).expanduser() if home else Path.home(),
        drush_paths=_split_paths(env.get("BEE_DRUSH_PATH")),
    )
