"""Core hook service — run hooks with the merged variables as environment.

Variable names are exported in ``UPPER_SNAKE_CASE`` (``-`` becomes
``_``) and values are serialized with
:func:`~tinct.core.values.to_env_string`.  A failing hook is recorded
and the remaining hooks still run.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from tinct.core.models import HookJob, HookOutput, HookReport
from tinct.core.protocols import HookRunner
from tinct.core.values import Value, to_env_string
from tinct.exceptions import HookError, HookErrorKind, TinctError


def env_name(variable: str) -> str:
    return variable.upper().replace("-", "_")


def build_hook_environment(variables: Mapping[str, Value]) -> dict[str, str]:
    """Map variables to environment entries for hook processes."""
    return {env_name(name): to_env_string(value) for name, value in variables.items()}


class HookService:
    """Runs hooks sequentially through an injected :class:`HookRunner`."""

    def __init__(self, runner: HookRunner) -> None:
        self._runner: HookRunner = runner

    def run_all(self, hooks: Iterable[HookJob], variables: Mapping[str, Value]) -> HookReport:
        environment = build_hook_environment(variables)
        outputs: list[HookOutput] = []
        failures: list[HookError] = []

        for hook in hooks:
            try:
                stdout = self._runner.run(hook.name, hook.path, environment)
            except HookError as exc:
                failures.append(exc)
            except TinctError as exc:
                failures.append(HookError(hook.name, HookErrorKind.OTHER, detail=str(exc)))
            else:
                outputs.append(HookOutput(name=hook.name, stdout=stdout))

        return HookReport(outputs=tuple(outputs), failures=tuple(failures))
