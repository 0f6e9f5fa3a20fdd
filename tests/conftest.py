"""Shared pytest fixtures and configuration for the tinct test suite.

Guidelines
----------
* No network access in any test.
* Filesystem work happens under ``tmp_path`` only.
* Core tests must be pure, with no side effects.
* Hook execution is faked at the :class:`HookRunner` boundary except in
  the subprocess runner's own tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from tinct.core.models import Directories
from tinct.core.theme import Theme, parse_theme

THEME_YAML = """\
special:
  background: '#222222'
  foreground: '#f7f1ff'
  cursor: '#f7f1ff'

normal:
  black: '#363537'
  blue: '#948ae3'
  cyan: '#5ad4e6'
  green: '#7bd88f'
  magenta: '#fd9353'
  red: '#fc618d'
  white: '#bab6c0'
  yellow: '#fce566'

bright:
  black: '#69676c'
  blue: '#948ae3'
  cyan: '#5ad4e6'
  green: '#7bd88f'
  magenta: '#fd9353'
  red: '#fc618d'
  white: '#f7f1ff'
  yellow: '#fce566'
"""


@pytest.fixture()
def theme_yaml() -> str:
    return THEME_YAML


@pytest.fixture()
def theme() -> Theme:
    return parse_theme("monokai", THEME_YAML)


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    """A config directory with the standard sub-directories and one theme."""
    root = tmp_path / "tinct"
    for sub in ("templates", "themes", "hooks"):
        (root / sub).mkdir(parents=True)
    (root / "themes" / "monokai.yaml").write_text(THEME_YAML, encoding="utf-8")
    return root


@pytest.fixture()
def directories(config_dir: Path) -> Directories:
    return Directories(config_dir)
