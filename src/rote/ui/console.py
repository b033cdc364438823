"""Console output formatting utilities for rote."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

import click


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, quiet: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show stack traces on errors
            quiet: If True, suppress everything that is not task output or an error
        """
        self.debug = debug
        self.quiet = quiet

    def print_task_start(self, index: int, total: int, name: str) -> None:
        """Print the progress line emitted before each task runs."""
        if not self.quiet:
            print(f"[{index}/{total}] {name}", flush=True)

    def print_task_list(
        self,
        tasks: Iterable,
        default: Optional[str] = None,
    ) -> None:
        """Print the available tasks with their descriptions."""
        print("Available tasks:")
        for task in tasks:
            name = click.style(f"  {task.name:16}", fg="bright_green")
            click.echo(f"{name}{task.description or ''}".rstrip())
        if default:
            print()
            print(f"Default task: {default}")

    # -----------------------------------------------------------------
    # Test harness markers
    # -----------------------------------------------------------------

    def print_unit_start(self, unit: str) -> None:
        """Open a unit line; PASS / FAIL completes it."""
        sys.stdout.write(f"[{unit}] ")
        sys.stdout.flush()

    def print_unit_pass(self, unit: str) -> None:
        print("PASS", flush=True)

    def print_unit_fail(self, unit: str, reason: str) -> None:
        print(f"FAIL! Reason: {reason}", flush=True)

    def print_test_summary(self, passed: int, failed: int) -> None:
        if self.quiet:
            return
        total = passed + failed
        print(f"\n{total} test(s): {passed} passed, {failed} failed")

    # -----------------------------------------------------------------
    # Generic messages
    # -----------------------------------------------------------------

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        if not self.quiet:
            print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
