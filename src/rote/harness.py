# harness.py
from __future__ import annotations

import os
import runpy
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from . import fs, shell
from .errors import TestsFailed
from .log import get_logger
from .ui.console import Console, get_console

log = get_logger("harness")


# ----------------------------------------------------------------------
# Results
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class TestResult:
    unit: str
    passed: bool
    message: Optional[str] = None

    __test__ = False


@dataclass
class TestReport:
    results: List[TestResult] = field(default_factory=list)

    __test__ = False

    @property
    def failed(self) -> List[TestResult]:
        return [r for r in self.results if not r.passed]

    @property
    def passed(self) -> List[TestResult]:
        return [r for r in self.results if r.passed]

    @property
    def ok(self) -> bool:
        return not self.failed


# ----------------------------------------------------------------------
# Units
# ----------------------------------------------------------------------

def discover(pattern: str) -> List[str]:
    """Test units matching `pattern`, sorted so runs are repeatable."""
    return sorted(str(p) for p in fs.glob(pattern) if p.is_file())


def run_unit_file(unit: str) -> None:
    runpy.run_path(unit, run_name="__main__")


def _failure_message(exc: BaseException) -> str:
    text = str(exc)
    return text if text else type(exc).__name__


def protected_call(unit: str, runner: Callable[[str], None]) -> TestResult:
    """Run one unit and turn whatever it raises into a failed TestResult."""
    try:
        runner(unit)
    except SystemExit as e:
        if e.code in (None, 0):
            return TestResult(unit=unit, passed=True)
        return TestResult(unit=unit, passed=False, message=f"exit status {e.code}")
    except Exception as e:  # noqa: BLE001
        log.debug("unit %s raised", unit, exc_info=True)
        return TestResult(unit=unit, passed=False, message=_failure_message(e))
    return TestResult(unit=unit, passed=True)


class TestHarness:
    """
    Collect-all runner over test units.

    Each unit runs inside protected_call(); a failing unit is reported and the
    next one still runs. Only after the last unit does a nonzero failure count
    become a TestsFailed error.
    """

    __test__ = False

    def __init__(
        self,
        runner: Callable[[str], None] = run_unit_file,
        *,
        console: Optional[Console] = None,
    ):
        self.runner = runner
        self.console = console or get_console()

    def run_units(self, units: Sequence[str]) -> TestReport:
        report = TestReport()
        for unit in units:
            self.console.print_unit_start(unit)
            result = protected_call(unit, self.runner)
            if result.passed:
                self.console.print_unit_pass(unit)
            else:
                self.console.print_unit_fail(unit, result.message or "")
            report.results.append(result)
        return report

    def run(self, pattern: str) -> TestReport:
        units = discover(pattern)
        log.info("discovered %d unit(s) for %s", len(units), pattern)

        report = self.run_units(units)
        self.console.print_test_summary(len(report.passed), len(report.failed))

        if report.failed:
            raise TestsFailed(count=len(report.failed), total=len(report.results))
        return report


# ----------------------------------------------------------------------
# Self-hosting
# ----------------------------------------------------------------------

def current_executable() -> str:
    return os.path.realpath(sys.argv[0]) if sys.argv and sys.argv[0] else sys.executable


def current_working_directory() -> str:
    return os.getcwd()


class SelfHostGuard:
    """
    Make sure tests run inside a freshly built binary.

    If the running program is not `binary`, delegate() re-invokes
    `binary <task_name>` as a subprocess and the caller should stop there.
    """

    def __init__(
        self,
        binary: str,
        task_name: str = "test",
        *,
        executable: Callable[[], str] = current_executable,
    ):
        self.binary = binary
        self.task_name = task_name
        self._executable = executable

    def target(self) -> str:
        return os.path.realpath(os.path.join(current_working_directory(), self.binary))

    def should_delegate(self) -> bool:
        return os.path.realpath(self._executable()) != self.target()

    def delegate(self) -> None:
        log.info("delegating '%s' to %s", self.task_name, self.binary)
        shell.get_executor().run(self.target(), self.task_name, cwd=current_working_directory())


def run_tests(
    pattern: str,
    *,
    guard: Optional[SelfHostGuard] = None,
    harness: Optional[TestHarness] = None,
) -> Optional[TestReport]:
    """
    Test task body. Returns None when the run was delegated to the built
    binary, otherwise the local report.
    """
    if guard is not None and guard.should_delegate():
        guard.delegate()
        return None
    return (harness or TestHarness()).run(pattern)

