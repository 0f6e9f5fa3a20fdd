"""``subprocess`` backed implementation of :class:`~tinct.core.protocols.HookRunner`.

This module is the **only** place in the codebase that spawns
processes.  Every ``OSError``, every environment ``subprocess`` rejects
and every unsuccessful exit status is turned into a
:class:`~tinct.exceptions.HookError` here.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from pathlib import Path

from tinct.exceptions import HookError, HookErrorKind


class SubprocessHookRunner:
    """Runs a hook to completion and captures its stdout.

    The hook inherits the current process environment with the exported
    variables layered on top.  stderr is not captured, so hook
    diagnostics reach the terminal directly.
    """

    def run(self, name: str, path: Path, environment: Mapping[str, str]) -> str:
        env = {**os.environ, **environment}
        try:
            completed = subprocess.run(  # noqa: S603 - hooks are user-configured executables
                [str(path)],
                env=env,
                stdout=subprocess.PIPE,
                check=False,
            )
        except FileNotFoundError as exc:
            raise HookError(name, HookErrorKind.NOT_FOUND) from exc
        except PermissionError as exc:
            raise HookError(name, HookErrorKind.PERMISSION_DENIED) from exc
        except OSError as exc:
            raise HookError(name, HookErrorKind.OTHER, detail=exc.strerror or str(exc)) from exc
        except ValueError as exc:
            # '=' in a variable name or a NUL byte in a name or value
            raise HookError(name, HookErrorKind.OTHER, detail=str(exc)) from exc

        if completed.returncode != 0:
            raise HookError(name, HookErrorKind.NON_ZERO_STATUS, status=completed.returncode)

        return completed.stdout.decode("utf-8", errors="replace")
