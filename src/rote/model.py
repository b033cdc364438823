# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple

from . import shell


class Action:
    """Executable body of a task. Subclasses implement run()."""

    def run(self) -> None:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class ShellCommandAction(Action):
    """Run a single external command through the shell executor."""
    command: str
    args: Tuple[str, ...] = ()
    cwd: Optional[str] = None
    env: Optional[Dict[str, str]] = None
    timeout: Optional[float] = None
    # command is a full line for the system shell; args must be empty
    use_shell: bool = False

    def run(self) -> None:
        executor = shell.get_executor()
        if self.use_shell:
            executor.shell(self.command, cwd=self.cwd, env=self.env, timeout=self.timeout)
        else:
            executor.run(self.command, *self.args, cwd=self.cwd, env=self.env, timeout=self.timeout)

    def describe(self) -> str:
        return " ".join([self.command, *self.args])


@dataclass(frozen=True)
class CompositeAction(Action):
    """Run child actions in order; the first failure stops the rest."""
    actions: Tuple[Action, ...] = ()

    def run(self) -> None:
        for action in self.actions:
            action.run()

    def describe(self) -> str:
        return "; ".join(a.describe() for a in self.actions)


@dataclass(frozen=True)
class CustomAction(Action):
    fn: Callable[[], object]

    def run(self) -> None:
        self.fn()

    def describe(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


def as_action(value: object) -> Optional[Action]:
    """
    Normalise whatever a Rotefile passed as an action:
      - None            -> None (aggregate task, prerequisites only)
      - Action          -> itself
      - list/tuple      -> CompositeAction of each element
      - callable        -> CustomAction
    """
    if value is None:
        return None
    if isinstance(value, Action):
        return value
    if isinstance(value, (list, tuple)):
        children = tuple(a for a in (as_action(v) for v in value) if a is not None)
        return CompositeAction(children)
    if callable(value):
        return CustomAction(value)
    raise TypeError(f"not an action: {value!r}")


@dataclass(frozen=True)
class Task:
    """A named unit of work: description + prerequisites + action."""
    name: str
    description: Optional[str] = None
    prerequisites: Tuple[str, ...] = field(default_factory=tuple)
    action: Optional[Action] = None

    def run(self) -> None:
        if self.action is not None:
            self.action.run()


class TaskState(Enum):
    UNVISITED = "unvisited"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


def normalise_prerequisites(prerequisites: Optional[Sequence[str] | str]) -> Tuple[str, ...]:
    if prerequisites is None:
        return ()
    if isinstance(prerequisites, str):
        return (prerequisites,)
    return tuple(prerequisites)
