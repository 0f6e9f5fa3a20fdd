"""Allow ``python -m tinct`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m tinct`` behaves identically to the ``tinct`` console
script.
"""

from __future__ import annotations

from tinct.cli.app import cli

if __name__ == "__main__":
    cli()
