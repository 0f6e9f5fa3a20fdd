"""Template renderer — Jinja2 in strict mode behind a stable error shape.

The renderer compiles and executes a template string against the
read-only context built by :mod:`tinct.core.context`, exposing the
helpers from :mod:`tinct.core.helpers`.

Guarantees
----------
* Strict mode is always on: referencing an undefined variable is a
  :class:`~tinct.exceptions.RenderError`, never an empty substitution.
* :meth:`Renderer._translate` is the single place that knows about
  Jinja2's exceptions; callers only ever see
  :class:`~tinct.exceptions.RenderError`.
* Dotted access on mappings reads keys, never methods, so
  ``variables.items`` is the variable called ``items``.
* Calling an undefined top-level name (``foo(1)``) is a missing helper;
  reading it (``foo``) is a missing variable.  The call site decides.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from types import TracebackType
from typing import Any

import jinja2
from jinja2.runtime import Context
from jinja2.utils import missing

from tinct.core.helpers import HELPERS, HelperArgumentError
from tinct.exceptions import RenderError, RenderErrorKind, TinctError

_TEMPLATE_FILENAME = "<template>"
_UNDEFINED_NAME = re.compile(r"^'(?P<name>[^']+)' is undefined$")
_UNDEFINED_ATTRIBUTE = re.compile(r"has no (?:attribute|element) '?(?P<name>[^']+?)'?$")


class _HelperNotFound(Exception):
    """An undefined top-level name was called like a helper."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


class _HelperContext(Context):
    """Context that tells calling an undefined name apart from reading it."""

    def call(self, obj: Any, /, *args: Any, **kwargs: Any) -> Any:
        if isinstance(obj, jinja2.Undefined) and obj._undefined_obj is missing:
            raise _HelperNotFound(str(obj._undefined_name))
        return super().call(obj, *args, **kwargs)


class _ContextEnvironment(jinja2.Environment):
    """Environment whose attribute lookups on mappings only read keys."""

    context_class = _HelperContext

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping):
            try:
                return obj[attribute]
            except KeyError:
                return self.undefined(obj=obj, name=attribute)
        return super().getattr(obj, attribute)


def _finalize(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _strict_helper(helper: Callable[..., Any]) -> Callable[..., Any]:
    """Make undefined arguments fail as missing variables, not type errors."""

    @functools.wraps(helper)
    def call(*args: Any) -> Any:
        for arg in args:
            if isinstance(arg, jinja2.Undefined):
                arg._fail_with_undefined_error()
        return helper(*args)

    return call


class Renderer:
    """Render templates against one shared, read-only context.

    Parameters
    ----------
    context:
        The mapping produced by :func:`tinct.core.context.build_context`.
    template_dir:
        Directory that ``{% include %}`` resolves partials from.  When
        ``None``, every include is reported as a missing partial.
    """

    def __init__(self, context: Mapping[str, Any], *, template_dir: Path | None = None) -> None:
        loader: jinja2.BaseLoader
        if template_dir is not None:
            loader = jinja2.FileSystemLoader(str(template_dir))
        else:
            loader = jinja2.DictLoader({})

        self._environment = _ContextEnvironment(
            loader=loader,
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            finalize=_finalize,
        )
        self._environment.globals.update(
            {name: _strict_helper(helper) for name, helper in HELPERS.items()}
        )
        self._context: Mapping[str, Any] = context

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, template: str) -> str:
        """Render *template* and return the resulting text.

        Raises
        ------
        RenderError
            For any compile or execution failure.
        """
        try:
            compiled = self._environment.from_string(template)
            return compiled.render(self._context)
        except Exception as exc:
            raise self._translate(exc) from exc

    # ------------------------------------------------------------------
    # Engine error → RenderError (single translation point)
    # ------------------------------------------------------------------

    def _translate(self, exc: Exception) -> RenderError:
        line = _template_line(exc.__traceback__)

        if isinstance(exc, jinja2.TemplateSyntaxError):
            return RenderError(
                RenderErrorKind.TEMPLATE_SYNTAX,
                exc.message or "invalid template syntax",
                line=exc.lineno if exc.name is None else line,
            )

        if isinstance(exc, jinja2.TemplateNotFound):
            return RenderError(
                RenderErrorKind.PARTIAL_NOT_FOUND,
                f"partial '{exc.name}' not found",
                line=line,
                name=str(exc.name),
            )

        if isinstance(exc, _HelperNotFound):
            return RenderError(
                RenderErrorKind.HELPER_NOT_FOUND,
                f"undefined helper '{exc.name}'",
                line=line,
                name=exc.name,
            )

        if isinstance(exc, jinja2.UndefinedError):
            return self._translate_undefined(exc, line)

        if isinstance(exc, HelperArgumentError):
            return RenderError(
                RenderErrorKind.PARAM_TYPE_MISMATCH,
                str(exc),
                line=line,
                name=exc.helper,
            )

        if isinstance(exc, TinctError):
            return RenderError(RenderErrorKind.OTHER, str(exc), line=line)

        return RenderError(RenderErrorKind.OTHER, str(exc) or type(exc).__name__, line=line)

    def _translate_undefined(self, exc: jinja2.UndefinedError, line: int | None) -> RenderError:
        message = exc.message or ""
        match = _UNDEFINED_NAME.match(message) or _UNDEFINED_ATTRIBUTE.search(message)
        if match is None:
            return RenderError(RenderErrorKind.MISSING_VARIABLE, "missing variable", line=line)
        name = match.group("name")
        return RenderError(
            RenderErrorKind.MISSING_VARIABLE,
            f"missing variable '{name}'",
            line=line,
            name=name,
        )


def _template_line(tb: TracebackType | None) -> int | None:
    """Line of the innermost frame that belongs to the rendered template.

    Jinja2 rewrites tracebacks so template code shows up as frames whose
    filename is the template's; for string templates that is
    ``<template>``.
    """
    line: int | None = None
    while tb is not None:
        if tb.tb_frame.f_code.co_filename == _TEMPLATE_FILENAME:
            line = tb.tb_lineno
        tb = tb.tb_next
    return line
