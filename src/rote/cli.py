# cli.py
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

import click

from . import __version__, log
from .config import Settings
from .errors import RoteError, RotefileError
from .loader import find_rotefile, load_rotefile
from .scheduler import Scheduler
from .shell import ShellExecutor, set_executor
from .ui.console import Console, get_console, set_console


def parse_vars(pairs: Tuple[str, ...]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {pair!r}", param_hint="--var")
        out[name] = value
    return out


def change_directory(directory: str | Path) -> None:
    console = get_console()
    try:
        os.chdir(directory)
    except OSError:
        console.print_error(
            "Cannot change directory",
            f"failed to change directory to '{directory}'",
        )
        sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("task", required=False)
@click.option("-C", "--directory", default=None, metavar="DIRECTORY", help="Change to DIRECTORY before running tasks.")
@click.option("-f", "--file", "rotefile", default=None, metavar="FILE", help="Read FILE as the Rotefile.")
@click.option("-n", "--dry-run", is_flag=True, default=False, help="Don't actually perform any action.")
@click.option("-l", "--list", "list_tasks", is_flag=True, default=False, help="List available tasks.")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress all non-task output.")
@click.option("-v", "--verbose", count=True, help="Enable verbose logging (repeat for more).")
@click.option("--var", "variables", multiple=True, metavar="NAME=VALUE", help="Set a Rotefile variable.")
@click.option("--timeout", type=float, default=None, help="Timeout in seconds for each shell command (default: wait forever).")
@click.option("--debug", is_flag=True, default=False, help="Show stack traces on failure.")
@click.version_option(__version__, "-V", "--version", prog_name="rote", message="Rote version %(version)s")
def cli(
    task: Optional[str],
    directory: Optional[str],
    rotefile: Optional[str],
    dry_run: bool,
    list_tasks: bool,
    quiet: bool,
    verbose: int,
    variables: Tuple[str, ...],
    timeout: Optional[float],
    debug: bool,
):
    """Run tasks declared in a Rotefile.

    TASK defaults to the Rotefile's default task.
    """
    settings = Settings.from_env()
    settings.directory = directory
    settings.rotefile = rotefile or settings.rotefile
    settings.dry_run = dry_run
    settings.quiet = quiet
    settings.verbosity = verbose
    settings.debug = debug
    if timeout is not None:
        settings.timeout = timeout if timeout > 0 else None

    log.configure(verbosity=settings.verbosity, quiet=settings.quiet)
    console = Console(debug=settings.debug, quiet=settings.quiet)
    set_console(console)
    set_executor(ShellExecutor(dry_run=settings.dry_run, timeout=settings.timeout))

    var_map = parse_vars(variables)

    if settings.directory:
        change_directory(settings.directory)

    try:
        path = find_rotefile(settings.rotefile)
        console.print_debug(f"using Rotefile {path}")
        # tasks run relative to the Rotefile's own directory
        change_directory(path.parent)

        registry = load_rotefile(path, variables=var_map)

        if list_tasks:
            console.print_task_list(registry.sorted_tasks(), default=registry.default_task_name)
            return

        scheduler = Scheduler(registry, dry_run=settings.dry_run, console=console)
        if task:
            scheduler.run(task)
        else:
            scheduler.run_default()

    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except RotefileError as e:
        console.print_error("Failed to load Rotefile", str(e))
        if settings.debug:
            console.print_exception(e)
        sys.exit(1)
    except RoteError as e:
        console.print_error(type(e).__name__, str(e))
        if settings.debug:
            console.print_exception(e)
        sys.exit(1)
    except Exception as e:
        # a Python action in the Rotefile raised something of its own
        console.print_error("Task failed", f"{type(e).__name__}: {e}")
        if settings.debug:
            console.print_exception(e)
        sys.exit(1)


def main() -> None:  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
