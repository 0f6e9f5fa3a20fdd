"""Variable merge layer — builds the read-only rendering context.

The context has exactly two top-level regions::

    {"colors": <theme palettes>, "variables": <config < command line>}

Keeping the theme under its own key means a user variable can never
collide with a color, whatever it is called.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from tinct.core.theme import Theme
from tinct.core.values import Value, parse_value
from tinct.exceptions import InvalidVariableError

PAIR_HINT = "variables should be specified as 'key=value' pairs"


def parse_variable(text: str) -> tuple[str, Value]:
    """Split ``key=value`` on the first ``=`` and parse the value.

    Raises
    ------
    InvalidVariableError
        If there is no ``=``, or the key or value is empty.
    """
    key, sep, raw = text.partition("=")
    key = key.strip()
    if not sep or not key or not raw.strip():
        raise InvalidVariableError(f"invalid variable '{text}': {PAIR_HINT}")
    return key, parse_value(raw)


def merge_variables(
    config_variables: Mapping[str, Value] | None = None,
    cli_variables: Iterable[tuple[str, Value]] | None = None,
) -> dict[str, Value]:
    """Merge variable sources, command line overriding config."""
    merged: dict[str, Value] = {}
    if config_variables:
        merged.update(config_variables)
    if cli_variables:
        merged.update(cli_variables)
    return merged


def freeze(value: Any) -> Any:
    """Return a deeply read-only view of a value tree."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(freeze(item) for item in value)
    return value


def build_context(theme: Theme, variables: Mapping[str, Value]) -> Mapping[str, Any]:
    """Compose the immutable context shared by every template of a run."""
    return freeze({"colors": theme.to_context(), "variables": dict(variables)})
