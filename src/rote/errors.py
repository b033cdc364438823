# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


class RoteError(Exception):
    """Base class for every failure that ends a rote invocation."""


@dataclass(eq=False)
class UnknownTask(RoteError):
    name: str
    known: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        msg = f"no matching task for '{self.name}'"
        if self.known:
            msg += f" (known tasks: {', '.join(self.known)})"
        return msg


@dataclass(eq=False)
class DuplicateTask(RoteError):
    name: str

    def __str__(self) -> str:
        return f"task '{self.name}' is already defined"


@dataclass(eq=False)
class NoDefaultTask(RoteError):
    def __str__(self) -> str:
        return "no default task defined"


@dataclass(eq=False)
class CyclicDependency(RoteError):
    """Raised when the walk meets a task that is still in progress."""
    cycle: List[str]

    def __str__(self) -> str:
        return f"cyclic dependency: {' -> '.join(self.cycle)}"


@dataclass(eq=False)
class CommandNotFound(RoteError):
    command: str
    reason: Optional[str] = None

    def __str__(self) -> str:
        msg = f"command not found: {self.command}"
        if self.reason:
            msg += f" ({self.reason})"
        return msg


@dataclass(eq=False)
class CommandFailed(RoteError):
    command: str
    exit_code: int

    def __str__(self) -> str:
        return f"command failed (exit={self.exit_code}): {self.command}"


@dataclass(eq=False)
class CommandTimedOut(RoteError):
    command: str
    timeout: float

    def __str__(self) -> str:
        return f"command timed out after {self.timeout:g}s: {self.command}"


@dataclass(eq=False)
class FileSystemError(RoteError):
    operation: str
    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.operation} failed for \"{self.path}\": {self.reason}"


@dataclass(eq=False)
class TestsFailed(RoteError):
    count: int
    total: int = 0

    # keep pytest from collecting this as a test class
    __test__ = False

    def __str__(self) -> str:
        if self.total:
            return f"{self.count} of {self.total} test(s) failed"
        return f"{self.count} test(s) failed"


@dataclass(eq=False)
class RotefileError(RoteError):
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
