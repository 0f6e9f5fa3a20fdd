"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so
bootstrap paths (``--help``, ``--version``, ``--list-themes``) remain
functional even when Rich is not installed.  Everything here writes to
stderr; rendered hook output and theme listings go to stdout through
plain ``print`` in :mod:`tinct.cli.app`.
"""

from __future__ import annotations

import sys
from typing import Any

from tinct.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise MissingDependencyError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


def _escape(text: str) -> str:
	"""Escape user-provided text so Rich does not read it as markup."""
	from rich.markup import escape

	return escape(text)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stderr print."""
		try:
			rich_console = get_rich_console()
		except MissingDependencyError:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def _labelled(self, label: str, style: str, message: str) -> None:
		try:
			rich_console = get_rich_console()
		except MissingDependencyError:
			print(f"{label} {message}", file=sys.stderr)
			return
		rich_console.print(f"[{style}]{label}[/{style}] {_escape(message)}")

	def error(self, message: str, *, hint: str | None = None) -> None:
		self._labelled("Error:", "bold red", message)
		if hint:
			self._labelled("Hint:", "yellow", hint)

	def warning(self, message: str) -> None:
		self._labelled("Warning:", "yellow", message)


console = _ConsoleProxy()
