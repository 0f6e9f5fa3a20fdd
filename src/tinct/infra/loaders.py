"""Infrastructure: load ``config.yaml`` and theme files from disk.

Both loaders are run prerequisites: every failure is raised as a
fatal :class:`~tinct.exceptions.ConfigError`,
:class:`~tinct.exceptions.ThemeError` or
:class:`~tinct.exceptions.ListThemesError`.
"""

from __future__ import annotations

from typing import Any

from tinct.core.models import THEME_EXTENSION, AppConfig, Directories, TemplateSpec
from tinct.core.theme import Theme, parse_theme
from tinct.core.values import Value, load_yaml
from tinct.exceptions import (
    ConfigError,
    ListThemesError,
    ParseError,
    ReadError,
    ReadErrorKind,
    ThemeError,
)
from tinct.infra.filesystem import LocalFileStore, resolve_path

_CONFIG_KEYS = frozenset({"theme", "hooks", "variables", "templates"})
_TEMPLATE_KEYS = frozenset({"source", "target"})


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

def load_config(directories: Directories, store: LocalFileStore | None = None) -> AppConfig:
    """Read and validate ``<config_dir>/config.yaml``.

    Raises
    ------
    ConfigError
        When the file is missing or unreadable, not valid YAML, or has
        the wrong shape.
    """
    store = store or LocalFileStore()
    try:
        text = store.read_text(directories.config_file)
    except ReadError as exc:
        hint = None
        if exc.kind is ReadErrorKind.NOT_FOUND:
            hint = f"Create {directories.config_file} or pass --config-dir."
        raise ConfigError(f"could not read config ({exc})", hint=hint) from exc

    try:
        document = load_yaml(text)
    except ParseError as exc:
        raise ConfigError(f"could not parse config ({exc})") from exc

    return parse_config(document)


def parse_config(document: Value) -> AppConfig:
    """Validate a parsed config document and build an :class:`AppConfig`."""
    if document is None:
        return AppConfig()
    if not isinstance(document, dict):
        raise ConfigError("invalid config (expected a mapping at the top level)")

    unknown = sorted(set(document) - _CONFIG_KEYS)
    if unknown:
        raise ConfigError(
            f"invalid config (unknown key '{unknown[0]}')",
            hint=f"Supported keys: {', '.join(sorted(_CONFIG_KEYS))}",
        )

    theme = document.get("theme")
    if theme is not None and not isinstance(theme, str):
        raise ConfigError("invalid config ('theme' must be a string)")

    variables = document.get("variables") or {}
    if not isinstance(variables, dict):
        raise ConfigError("invalid config ('variables' must be a mapping)")

    return AppConfig(
        theme=theme,
        hooks=_string_list(document.get("hooks"), "hooks"),
        variables=dict(variables),
        templates=_template_specs(document.get("templates")),
    )


def _string_list(raw: Value, key: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ConfigError(f"invalid config ('{key}' must be a list of strings)")
    return tuple(raw)


def _template_specs(raw: Value) -> tuple[TemplateSpec, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ConfigError("invalid config ('templates' must be a list)")

    specs: list[TemplateSpec] = []
    for index, entry in enumerate(raw):
        where = f"templates[{index}]"
        if not isinstance(entry, dict):
            raise ConfigError(f"invalid config ('{where}' must be a mapping)")
        unknown = sorted(set(entry) - _TEMPLATE_KEYS)
        if unknown:
            raise ConfigError(f"invalid config (unknown key '{unknown[0]}' in '{where}')")
        source = _required_string(entry, "source", where)
        target = _required_string(entry, "target", where)
        specs.append(TemplateSpec(source=source, target=resolve_path(target)))
    return tuple(specs)


def _required_string(entry: dict[str, Any], key: str, where: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"invalid config ('{where}.{key}' must be a non-empty string)")
    return value


# ---------------------------------------------------------------------------
# Themes
# ---------------------------------------------------------------------------

def load_theme(name: str, directories: Directories, store: LocalFileStore | None = None) -> Theme:
    """Locate ``<theme_dir>/<name>.yaml`` and parse it.

    Raises
    ------
    ThemeError
        When the file cannot be read or is not a valid theme.
    """
    store = store or LocalFileStore()
    path = directories.theme_file(name)
    try:
        text = store.read_text(path)
    except ReadError as exc:
        hint = None
        if exc.kind is ReadErrorKind.NOT_FOUND:
            hint = "Run with --list-themes to see the available themes."
        raise ThemeError(f"could not read theme '{name}' ({exc})", hint=hint) from exc
    return parse_theme(name, text)


def list_themes(directories: Directories, store: LocalFileStore | None = None) -> list[str]:
    """Return the sorted base names of ``*.yaml`` files in the theme directory."""
    store = store or LocalFileStore()
    try:
        entries = store.list_dir(directories.theme_dir)
    except ReadError as exc:
        raise ListThemesError(f"could not list themes ({exc})") from exc
    return sorted(
        entry.stem
        for entry in entries
        if entry.suffix == THEME_EXTENSION and entry.is_file()
    )
