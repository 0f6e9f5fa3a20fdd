"""Infrastructure layer — external system integration.

This layer wraps all interaction with the filesystem and with hook
processes.  Every raw ``OSError`` must be caught here and re-raised as
a :class:`~tinct.exceptions.TinctError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from tinct.infra.filesystem import LocalFileStore, resolve_path
from tinct.infra.hook_runner import SubprocessHookRunner
from tinct.infra.loaders import list_themes, load_config, load_theme

__all__: list[str] = [
    "LocalFileStore",
    "SubprocessHookRunner",
    "list_themes",
    "load_config",
    "load_theme",
    "resolve_path",
]
