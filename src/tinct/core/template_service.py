"""Core template service — read, render and write every configured template.

Each template is an independent artifact: a failure at any stage is
recorded as a :class:`~tinct.exceptions.TemplateError` tagged with the
template's name and the stage, and the remaining templates still run.

Guarantees
----------
* No ``print()``; the CLI layer reports the returned failures.
* Filesystem access only through the injected
  :class:`~tinct.core.protocols.FileStore`.
* The renderer's context is shared and never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable

from tinct.core.models import TemplateJob, TemplateReport
from tinct.core.protocols import FileStore
from tinct.core.renderer import Renderer
from tinct.exceptions import (
    ReadError,
    RenderError,
    TemplateError,
    TemplateStage,
    WriteError,
)


class TemplateService:
    """Drives the read → render → write pipeline for a run.

    Parameters
    ----------
    store:
        Any object satisfying the :class:`FileStore` protocol.
    renderer:
        Renderer bound to the run's merged context.
    """

    def __init__(self, store: FileStore, renderer: Renderer) -> None:
        self._store: FileStore = store
        self._renderer: Renderer = renderer

    def render(self, job: TemplateJob) -> None:
        """Render a single template.

        Raises
        ------
        TemplateError
            Tagged with the stage that failed.
        """
        try:
            contents = self._store.read_text(job.source)
        except ReadError as exc:
            raise TemplateError(job.name, TemplateStage.READ, exc) from exc

        try:
            rendered = self._renderer.render(contents)
        except RenderError as exc:
            raise TemplateError(job.name, TemplateStage.RENDER, exc) from exc

        try:
            self._store.write_text(job.target, rendered)
        except WriteError as exc:
            raise TemplateError(job.name, TemplateStage.WRITE, exc) from exc

    def render_all(self, jobs: Iterable[TemplateJob]) -> TemplateReport:
        """Render every job in order, collecting failures instead of stopping."""
        written: list[str] = []
        failures: list[TemplateError] = []
        for job in jobs:
            try:
                self.render(job)
            except TemplateError as exc:
                failures.append(exc)
            else:
                written.append(job.name)
        return TemplateReport(written=tuple(written), failures=tuple(failures))
