"""Structured value model and the YAML parser that produces it.

A :data:`Value` is the closed union used for everything parsed from
YAML (config files, themes) or from ``key=value`` command-line
variables::

    None | bool | int | float | str | list[Value] | dict[str, Value]

Anything else a YAML document can express (timestamps, binary blobs,
sets, non-string mapping keys) is rejected with a
:class:`~tinct.exceptions.ParseError` so that every consumer can
dispatch exhaustively over the cases above.

Decisions
---------
* Duplicate mapping keys are an error, reported at the duplicate key.
* An empty document parses to ``None``.
* Unquoted dates stay strings; implicit timestamp resolution is off.
"""

from __future__ import annotations

import math
from typing import Any, Union

import yaml
from yaml.constructor import ConstructorError

from tinct.exceptions import InvalidVariableError, ParseError

Value = Union[None, bool, int, float, str, list["Value"], dict[str, "Value"]]

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_NULL_SPELLINGS = frozenset({"~", "null", "Null", "NULL"})
_LINE_BREAKS = "\r\n\x85\u2028\u2029"


class _ValueLoader(yaml.SafeLoader):
    """Safe loader that rejects duplicate and non-string mapping keys."""

    def construct_mapping(self, node: yaml.Node, deep: bool = False) -> dict[Any, Any]:
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
        seen: set[str] = set()
        for key_node, _value_node in node.value:
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, str):
                raise ConstructorError(
                    None, None, "mapping keys must be strings", key_node.start_mark,
                )
            if key in seen:
                raise ConstructorError(
                    None, None, f"duplicate key '{key}'", key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


_ValueLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class _FlowDumper(yaml.SafeDumper):
    """Safe dumper that keeps multi-line strings on one line."""

    def represent_str(self, data: str) -> yaml.ScalarNode:
        if any(char in data for char in _LINE_BREAKS):
            return self.represent_scalar("tag:yaml.org,2002:str", data, style='"')
        return super().represent_str(data)


_FlowDumper.add_representer(str, _FlowDumper.represent_str)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def load_yaml(text: str) -> Value:
    """Parse a YAML document into a :data:`Value` tree.

    Raises
    ------
    ParseError
        With a 1-based line/column when PyYAML reports a position.
    """
    try:
        raw = yaml.load(text, Loader=_ValueLoader)  # noqa: S506 - SafeLoader subclass
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        reason = exc.problem or exc.context or "invalid YAML"
        if mark is None:
            raise ParseError(reason) from exc
        raise ParseError(reason, line=mark.line + 1, column=mark.column + 1) from exc
    except yaml.YAMLError as exc:
        raise ParseError(str(exc)) from exc
    return ensure_value(raw)


def ensure_value(raw: object, path: str = "") -> Value:
    """Validate that *raw* only contains :data:`Value` cases.

    Returns the same tree (lists and dicts rebuilt) or raises
    :class:`ParseError` naming the offending path.
    """
    if raw is None or isinstance(raw, (bool, int, float, str)):
        return raw
    if isinstance(raw, list):
        return [ensure_value(item, f"{path}[{index}]") for index, item in enumerate(raw)]
    if isinstance(raw, dict):
        result: dict[str, Value] = {}
        for key, item in raw.items():
            if not isinstance(key, str):
                raise ParseError(f"mapping keys must be strings at '{path or '.'}'")
            result[key] = ensure_value(item, f"{path}.{key}" if path else key)
        return result
    where = f" at '{path}'" if path else ""
    raise ParseError(f"unsupported value of type '{type(raw).__name__}'{where}")


def parse_value(text: str) -> Value:
    """Parse a single command-line value (``1.5``, ``true``, ``John`` …).

    A value YAML would read as a bare comment (``#ff0000``) is kept as
    the literal string.
    """
    try:
        value = load_yaml(text)
    except ParseError as exc:
        raise InvalidVariableError(f"could not parse value '{text}' ({exc})") from exc
    if value is None and text.strip() not in _NULL_SPELLINGS:
        return text
    return value


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def format_number(number: int | float) -> str:
    """Format a number, dropping the ``.0`` of integral floats."""
    if isinstance(number, float) and math.isfinite(number) and number.is_integer():
        return str(int(number))
    return repr(number) if isinstance(number, float) else str(number)


def to_env_string(value: Value) -> str:
    """Serialize *value* into a single-line environment-variable string.

    Scalars are written plainly; sequences and mappings use YAML flow
    style (``[1, 2]``, ``{a: 1}``).  Line breaks inside a container are
    escaped in a double-quoted scalar so the result is a single line.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, (list, dict)):
        dumped = yaml.dump(
            value,
            Dumper=_FlowDumper,
            default_flow_style=True,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
        return dumped.strip()
    raise TypeError(f"unsupported value of type '{type(value).__name__}'")
