"""Shared pytest fixtures and configuration for the bee test suite.

Guidelines
----------
* No test touches a real Backdrop installation; fake ones are built
  under ``tmp_path``.
* The working directory is restored after every test, because
  bootstrapping changes into the installation root.
* Legacy command discovery never looks at the real home directory.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from bee.settings import Settings

THEMES: dict[str, str] = {
    "bartik": "Bartik",
    "basis": "Basis",
    "seven": "Seven",
}


def _write_theme(base: Path, machine_name: str, name: str) -> Path:
    theme_dir = base / machine_name
    theme_dir.mkdir(parents=True, exist_ok=True)
    (theme_dir / f"{machine_name}.info").write_text(
        f"name = {name}\ndescription = The {name} theme.\ntype = theme\nbackdrop = 1.x\n",
        encoding="utf-8",
    )
    return theme_dir


@pytest.fixture(autouse=True)
def _restore_cwd(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(os.getcwd())


@pytest.fixture
def backdrop_root(tmp_path: Path) -> Path:
    """A minimal installation: marker file, three core themes, system.core."""
    root = tmp_path / "backdrop"
    root.mkdir()
    (root / "settings.php").write_text(
        "<?php\n$config_directories['active'] = 'files/config_abc/active';\n",
        encoding="utf-8",
    )
    for machine_name, name in THEMES.items():
        _write_theme(root / "core" / "themes", machine_name, name)

    config_dir = root / "files" / "config_abc" / "active"
    config_dir.mkdir(parents=True)
    (config_dir / "system.core.json").write_text(
        json.dumps(
            {
                "_config_name": "system.core",
                "theme_default": "basis",
                "admin_theme": "seven",
                "theme_debug": 0,
                "site_name": "My Backdrop Site",
            },
            indent=4,
        ),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def config_dir(backdrop_root: Path) -> Path:
    return backdrop_root / "files" / "config_abc" / "active"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    home = tmp_path / "home"
    home.mkdir()
    return Settings(home_dir=home)


def _read_config(config_dir: Path, namespace: str) -> dict[str, object]:
    return json.loads((config_dir / f"{namespace}.json").read_text(encoding="utf-8"))


@pytest.fixture(name="write_theme")
def write_theme_fixture() -> Callable[[Path, str, str], Path]:
    return _write_theme


@pytest.fixture(name="read_config")
def read_config_fixture() -> Callable[[Path, str], dict[str, object]]:
    return _read_config
