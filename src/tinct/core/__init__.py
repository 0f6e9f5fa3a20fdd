"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or process I/O except through the protocols in
  :mod:`tinct.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from tinct.core.color import Color
from tinct.core.context import build_context, merge_variables, parse_variable
from tinct.core.hook_service import HookService, build_hook_environment
from tinct.core.models import (
    AppConfig,
    Directories,
    HookJob,
    HookReport,
    TemplateJob,
    TemplateReport,
    TemplateSpec,
)
from tinct.core.protocols import FileStore, HookRunner
from tinct.core.renderer import Renderer
from tinct.core.template_service import TemplateService
from tinct.core.theme import AnsiColors, SpecialColors, Theme, parse_theme
from tinct.core.values import Value, load_yaml, parse_value, to_env_string

__all__: list[str] = [
    "AnsiColors",
    "AppConfig",
    "Color",
    "Directories",
    "FileStore",
    "HookJob",
    "HookReport",
    "HookRunner",
    "HookService",
    "Renderer",
    "SpecialColors",
    "TemplateJob",
    "TemplateReport",
    "TemplateService",
    "TemplateSpec",
    "Theme",
    "Value",
    "build_context",
    "build_hook_environment",
    "load_yaml",
    "merge_variables",
    "parse_theme",
    "parse_value",
    "parse_variable",
    "to_env_string",
]
