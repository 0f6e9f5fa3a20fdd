"""Theme model — special colors plus the normal and bright ANSI palettes.

A theme document must provide all nineteen colors as ``#RRGGBB``
strings; there are no defaults.  Colors are kept as their original
strings for rendering and validated through :class:`Color` on parse.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from tinct.core.color import Color
from tinct.core.values import Value, load_yaml
from tinct.exceptions import InvalidHexError, ParseError, ThemeError


@dataclass(frozen=True, slots=True)
class SpecialColors:
    background: str
    foreground: str
    cursor: str


@dataclass(frozen=True, slots=True)
class AnsiColors:
    black: str
    red: str
    green: str
    yellow: str
    blue: str
    magenta: str
    cyan: str
    white: str


@dataclass(frozen=True, slots=True)
class Theme:
    """A named palette loaded from ``<theme_dir>/<name>.yaml``."""

    name: str
    special: SpecialColors
    normal: AnsiColors
    bright: AnsiColors

    def to_context(self) -> dict[str, dict[str, str]]:
        """Return the ``colors`` region of the rendering context."""
        return {
            "special": asdict(self.special),
            "normal": asdict(self.normal),
            "bright": asdict(self.bright),
        }


def parse_theme(name: str, text: str) -> Theme:
    """Parse and validate a theme document.

    Raises
    ------
    ThemeError
        When the document is not valid YAML, a section or color is
        missing, or a color is not a valid hex string.
    """
    try:
        document = load_yaml(text)
    except ParseError as exc:
        raise ThemeError(f"could not parse theme '{name}' ({exc})") from exc

    if not isinstance(document, dict):
        raise ThemeError(f"invalid theme '{name}' (expected a mapping at the top level)")

    return Theme(
        name=name,
        special=_parse_section(name, document, "special", SpecialColors),
        normal=_parse_section(name, document, "normal", AnsiColors),
        bright=_parse_section(name, document, "bright", AnsiColors),
    )


def _parse_section(name: str, document: dict[str, Value], section: str, record: type[Any]) -> Any:
    raw = document.get(section)
    if raw is None:
        raise ThemeError(f"invalid theme '{name}' (missing section '{section}')")
    if not isinstance(raw, dict):
        raise ThemeError(f"invalid theme '{name}' (section '{section}' must be a mapping)")

    colors: dict[str, str] = {}
    for field in fields(record):
        key = f"{section}.{field.name}"
        value = raw.get(field.name)
        if value is None:
            raise ThemeError(f"invalid theme '{name}' (missing color '{key}')")
        if not isinstance(value, str):
            raise ThemeError(f"invalid theme '{name}' (color '{key}' must be a string)")
        try:
            Color.from_hex(value)
        except InvalidHexError as exc:
            raise ThemeError(f"invalid theme '{name}' ({exc} for '{key}')") from exc
        colors[field.name] = value
    return record(**colors)
