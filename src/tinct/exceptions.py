"""Custom exception hierarchy for tinct.

All exceptions that cross layer boundaries must inherit from
:class:`TinctError`.  Raw third-party exceptions (PyYAML, Jinja2,
``OSError`` from the filesystem or ``subprocess``) must NEVER propagate
beyond the module that talks to them; they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
TinctError
├── InvalidHexError
├── ParseError
├── InvalidVariableError
├── ConfigError
├── ThemeError
├── NoThemeSpecifiedError
├── ListThemesError
├── ReadError
├── WriteError
├── RenderError
├── TemplateError
├── HookError
└── MissingDependencyError
"""

from __future__ import annotations

import enum


class TinctError(Exception):
    """Base exception for all tinct errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


def _location_suffix(line: int | None, column: int | None) -> str:
    """Return ``" at line L[ column C]"`` or an empty string."""
    if line is None:
        return ""
    if column is None:
        return f" at line {line}"
    return f" at line {line} column {column}"


# --- Colors ------------------------------------------------------------------

class InvalidHexError(TinctError):
    """Raised when a color string is not of the form ``#RRGGBB``."""

    def __init__(self, value: str) -> None:
        super().__init__(f"invalid hex color '{value}': should be #RRGGBB")
        self.value: str = value


# --- Structured values -------------------------------------------------------

class ParseError(TinctError):
    """Raised when a YAML document cannot be turned into a value tree.

    ``line`` and ``column`` are 1-based and ``None`` when the parser did
    not report a position.
    """

    def __init__(
        self,
        reason: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(f"{reason}{_location_suffix(line, column)}")
        self.reason: str = reason
        self.line: int | None = line
        self.column: int | None = column


class InvalidVariableError(TinctError):
    """Raised when a command-line variable is not a ``key=value`` pair."""


# --- Run prerequisites (fatal) -----------------------------------------------

class ConfigError(TinctError):
    """Raised when ``config.yaml`` cannot be read, parsed or validated."""


class ThemeError(TinctError):
    """Raised when a theme cannot be located, parsed or validated."""


class NoThemeSpecifiedError(TinctError):
    """Raised when neither the command line nor the config names a theme."""


class ListThemesError(TinctError):
    """Raised when the theme directory cannot be listed."""


# --- Filesystem ----------------------------------------------------------------

class ReadErrorKind(enum.Enum):
    NOT_FOUND = "file not found"
    PERMISSION_DENIED = "permission denied"
    INVALID_ENCODING = "file contents are not valid utf-8"
    OTHER = "other"


class ReadError(TinctError):
    """Raised when a file cannot be read."""

    def __init__(self, kind: ReadErrorKind, detail: str | None = None) -> None:
        message = detail if kind is ReadErrorKind.OTHER and detail else kind.value
        super().__init__(message)
        self.kind: ReadErrorKind = kind


class WriteErrorKind(enum.Enum):
    DIRECTORY_MISSING = "directory does not exist"
    PERMISSION_DENIED = "permission denied"
    OTHER = "other"


class WriteError(TinctError):
    """Raised when a file cannot be written."""

    def __init__(self, kind: WriteErrorKind, detail: str | None = None) -> None:
        message = detail if kind is WriteErrorKind.OTHER and detail else kind.value
        super().__init__(message)
        self.kind: WriteErrorKind = kind


# --- Rendering -----------------------------------------------------------------

class RenderErrorKind(enum.Enum):
    TEMPLATE_SYNTAX = "template syntax error"
    MISSING_VARIABLE = "missing variable"
    PARAM_TYPE_MISMATCH = "helper parameter type mismatch"
    HELPER_NOT_FOUND = "helper not found"
    PARTIAL_NOT_FOUND = "partial not found"
    OTHER = "render failure"


class RenderError(TinctError):
    """Stable, engine-independent rendering failure.

    This is the only error shape the renderer lets escape; the engine's
    own exceptions are translated in :mod:`tinct.core.renderer`.
    """

    def __init__(
        self,
        kind: RenderErrorKind,
        reason: str,
        *,
        line: int | None = None,
        column: int | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(f"{reason}{_location_suffix(line, column)}")
        self.kind: RenderErrorKind = kind
        self.reason: str = reason
        self.line: int | None = line
        self.column: int | None = column
        self.name: str | None = name
        """Variable, helper or partial name involved, when known."""


# --- Per-item driver failures (reported, never fatal) --------------------------

class TemplateStage(enum.Enum):
    READ = "read"
    RENDER = "render"
    WRITE = "write"


class TemplateError(TinctError):
    """A single template failed at one stage of read → render → write."""

    def __init__(self, template: str, stage: TemplateStage, cause: TinctError) -> None:
        super().__init__(f"could not {stage.value} template '{template}' ({cause})")
        self.template: str = template
        self.stage: TemplateStage = stage
        self.cause: TinctError = cause


class HookErrorKind(enum.Enum):
    NOT_FOUND = "hook does not exist"
    PERMISSION_DENIED = "permission denied"
    NON_ZERO_STATUS = "exited with non-zero status"
    OTHER = "other"


class HookError(TinctError):
    """A single hook could not be executed or exited unsuccessfully."""

    def __init__(
        self,
        hook: str,
        kind: HookErrorKind,
        *,
        status: int | None = None,
        detail: str | None = None,
    ) -> None:
        if kind is HookErrorKind.NON_ZERO_STATUS:
            cause = f"exited with status {status}"
        elif kind is HookErrorKind.OTHER and detail:
            cause = detail
        else:
            cause = kind.value
        super().__init__(f"could not execute hook '{hook}' ({cause})")
        self.hook: str = hook
        self.kind: HookErrorKind = kind
        self.status: int | None = status


# --- Environment / tooling ---------------------------------------------------

class MissingDependencyError(TinctError):
    """Raised when an optional runtime dependency is not available."""
