__version__ = "0.3.0"

from .dsl import Declarations, sh, shell_line, seq
from .errors import (
    CommandFailed,
    CommandNotFound,
    CommandTimedOut,
    CyclicDependency,
    DuplicateTask,
    FileSystemError,
    NoDefaultTask,
    RoteError,
    RotefileError,
    TestsFailed,
    UnknownTask,
)
from .harness import SelfHostGuard, TestHarness, TestReport, TestResult, run_tests
from .loader import load_rotefile
from .model import Action, CompositeAction, CustomAction, ShellCommandAction, Task
from .registry import Registry
from .scheduler import Scheduler

__all__ = [
    "__version__",
    "Declarations", "sh", "shell_line", "seq",
    "RoteError", "UnknownTask", "DuplicateTask", "NoDefaultTask", "CyclicDependency",
    "CommandNotFound", "CommandFailed", "CommandTimedOut", "FileSystemError",
    "TestsFailed", "RotefileError",
    "TestHarness", "TestReport", "TestResult", "SelfHostGuard", "run_tests",
    "load_rotefile",
    "Action", "CompositeAction", "CustomAction", "ShellCommandAction", "Task",
    "Registry", "Scheduler",
]
