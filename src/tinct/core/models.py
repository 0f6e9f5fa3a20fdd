"""Domain models for tinct.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and path composition.  They are built
once per run and threaded explicitly through the services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from tinct.core.values import Value
from tinct.exceptions import HookError, TemplateError

APP_NAME = "tinct"
CONFIG_FILE = "config.yaml"
THEME_EXTENSION = ".yaml"


# ---------------------------------------------------------------------------
# Directory layout
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Directories:
    """Resolved locations below the configuration directory."""

    config_dir: Path

    @classmethod
    def default_config_dir(cls) -> Path:
        return Path.home() / ".config" / APP_NAME

    @property
    def config_file(self) -> Path:
        return self.config_dir / CONFIG_FILE

    @property
    def template_dir(self) -> Path:
        return self.config_dir / "templates"

    @property
    def theme_dir(self) -> Path:
        return self.config_dir / "themes"

    @property
    def hook_dir(self) -> Path:
        return self.config_dir / "hooks"

    def theme_file(self, name: str) -> Path:
        return self.theme_dir / f"{name}{THEME_EXTENSION}"


# ---------------------------------------------------------------------------
# Configuration file
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TemplateSpec:
    """One ``templates`` entry of ``config.yaml``."""

    source: str
    """Template file name, relative to the template directory."""

    target: Path
    """Output path with ``~`` already expanded."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Parsed ``config.yaml``.  Every field is optional in the file."""

    theme: str | None = None
    hooks: tuple[str, ...] = ()
    variables: dict[str, Value] = field(default_factory=dict)
    templates: tuple[TemplateSpec, ...] = ()


# ---------------------------------------------------------------------------
# Jobs and reports
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TemplateJob:
    """A template ready to be read, rendered and written."""

    name: str
    source: Path
    target: Path

    @classmethod
    def from_spec(cls, spec: TemplateSpec, template_dir: Path) -> TemplateJob:
        return cls(name=spec.source, source=template_dir / spec.source, target=spec.target)


@dataclass(frozen=True, slots=True)
class HookJob:
    """A hook executable located in the hook directory."""

    name: str
    path: Path

    @classmethod
    def from_name(cls, name: str, hook_dir: Path) -> HookJob:
        return cls(name=name, path=hook_dir / name)


@dataclass(frozen=True, slots=True)
class TemplateReport:
    """Outcome of rendering every configured template."""

    written: tuple[str, ...]
    failures: tuple[TemplateError, ...]

    def __bool__(self) -> bool:
        return not self.failures


@dataclass(frozen=True, slots=True)
class HookOutput:
    name: str
    stdout: str


@dataclass(frozen=True, slots=True)
class HookReport:
    """Outcome of running every selected hook."""

    outputs: tuple[HookOutput, ...]
    failures: tuple[HookError, ...]

    def __bool__(self) -> bool:
        return not self.failures
