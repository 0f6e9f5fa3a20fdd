"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol


class FileStore(Protocol):
    """Contract for reading and writing whole text files."""

    def read_text(self, path: Path) -> str:
        """Return the UTF-8 contents of *path*.

        Raises
        ------
        ReadError
            Tagged with the reason (not found, permission, encoding, other).
        """
        ...  # pragma: no cover

    def write_text(self, path: Path, contents: str) -> None:
        """Replace the contents of *path* with *contents*.

        Raises
        ------
        WriteError
            Tagged with the reason (missing directory, permission, other).
        """
        ...  # pragma: no cover


class HookRunner(Protocol):
    """Contract for executing hook programs."""

    def run(self, name: str, path: Path, environment: Mapping[str, str]) -> str:
        """Run *path* with *environment* added and return its stdout.

        Implementations must map all process-level failures to
        :class:`~tinct.exceptions.HookError`, including a non-zero exit
        status.
        """
        ...  # pragma: no cover
