"""CLI application entry point and run orchestration for tinct.

This module is the **sole error boundary** for the entire application.
It catches :class:`~tinct.exceptions.TinctError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Run stages
----------
``load config → load theme → merge variables → render templates → run hooks``

Config and theme failures are fatal and stop the run before any
template is touched.  Template and hook failures are printed as
warnings and the run carries on.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from tinct.cli import exit_codes
from tinct.cli.console import console
from tinct.core.context import build_context, merge_variables, parse_variable
from tinct.core.hook_service import HookService
from tinct.core.models import Directories, HookJob, HookReport, TemplateJob, TemplateReport
from tinct.core.renderer import Renderer
from tinct.core.template_service import TemplateService
from tinct.core.values import Value
from tinct.exceptions import InvalidVariableError, NoThemeSpecifiedError, TinctError
from tinct.infra.filesystem import LocalFileStore, resolve_path
from tinct.infra.hook_runner import SubprocessHookRunner
from tinct.infra.loaders import list_themes, load_config, load_theme
from tinct.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _variable_arg(text: str) -> tuple[str, Value]:
    """``argparse`` type adapter for ``-v key=value``."""
    try:
        return parse_variable(text)
    except InvalidVariableError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinct",
        description="Render dotfile templates from a color theme and variables.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-t",
        "--theme",
        default=None,
        help="Theme to apply (overrides 'theme' in config.yaml).",
    )
    parser.add_argument(
        "-l",
        "--list-themes",
        action="store_true",
        help="List available themes and exit.",
    )
    parser.add_argument(
        "-c",
        "--config-dir",
        type=resolve_path,
        default=Directories.default_config_dir(),
        help="Configuration directory (default: %(default)s).",
    )
    parser.add_argument(
        "--hooks",
        nargs="*",
        default=None,
        metavar="NAME",
        help="Hooks to run instead of the ones listed in config.yaml.",
    )
    parser.add_argument(
        "-v",
        "--variable",
        dest="variables",
        type=_variable_arg,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Set a template variable; may be repeated.",
    )
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _handle_list_themes(directories: Directories) -> int:
    for name in list_themes(directories):
        print(name)
    return exit_codes.SUCCESS


def _handle_run(args: argparse.Namespace, directories: Directories) -> int:
    config = load_config(directories)

    theme_name = args.theme or config.theme
    if not theme_name:
        raise NoThemeSpecifiedError(
            "no theme specified",
            hint="Pass --theme NAME or set 'theme' in config.yaml.",
        )
    theme = load_theme(theme_name, directories)

    variables = merge_variables(config.variables, args.variables)
    context = build_context(theme, variables)

    renderer = Renderer(context, template_dir=directories.template_dir)
    templates = TemplateService(LocalFileStore(), renderer)
    jobs = [TemplateJob.from_spec(spec, directories.template_dir) for spec in config.templates]
    _report_templates(templates.render_all(jobs))

    hook_names = args.hooks if args.hooks is not None else config.hooks
    hooks = [HookJob.from_name(name, directories.hook_dir) for name in hook_names]
    _report_hooks(HookService(SubprocessHookRunner()).run_all(hooks, variables))

    return exit_codes.SUCCESS


def _report_templates(report: TemplateReport) -> None:
    for failure in report.failures:
        console.warning(str(failure))


def _report_hooks(report: HookReport) -> None:
    for output in report.outputs:
        if output.stdout:
            print(output.stdout.rstrip("\n"))
    for failure in report.failures:
        console.warning(str(failure))


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the tinct CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    directories = Directories(Path(args.config_dir))

    if args.list_themes:
        return _handle_list_themes(directories)

    return _handle_run(args, directories)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TinctError as exc:
        console.error(str(exc), hint=exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
