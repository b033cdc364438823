# dsl.py
from __future__ import annotations

import os
from typing import Any, Callable, Dict, Optional, Sequence

from . import fs, harness, shell
from .model import Action, CompositeAction, ShellCommandAction, Task, as_action
from .registry import Registry


# ---------------------------------------------------------------------
# Action helpers
# ---------------------------------------------------------------------

def sh(
    command: str,
    *args: str,
    cwd: str | None = None,
    env: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> ShellCommandAction:
    """Action running `command args...` (no shell parsing)."""
    return ShellCommandAction(
        command=command,
        args=tuple(str(a) for a in args),
        cwd=cwd,
        env=env,
        timeout=timeout,
    )


def shell_line(
    line: str,
    *,
    cwd: str | None = None,
    env: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> ShellCommandAction:
    """Action running a full command line through the system shell."""
    return ShellCommandAction(command=line, cwd=cwd, env=env, timeout=timeout, use_shell=True)


def seq(*actions: Any) -> CompositeAction:
    """Composite action: run each in order, stop at the first failure."""
    return CompositeAction(tuple(a for a in map(as_action, actions) if a is not None))


# ---------------------------------------------------------------------
# Declarations bound to one Registry
# ---------------------------------------------------------------------

class Declarations:
    """
    The describe / task / default interface of a Rotefile.

    Each instance writes into the Registry it was created with; there is no
    process-wide task list.

        describe("Build a release binary")
        task("release", [], sh("cargo", "build", "--release"))
        task("install", ["release"], lambda: fs.copy("target/release/rote", "/usr/local/bin/rote"))
        default("debug")
    """

    def __init__(self, registry: Registry, *, variables: Optional[Dict[str, str]] = None):
        self.registry = registry
        self.variables: Dict[str, str] = dict(variables or {})
        self._description: Optional[str] = None

    def describe(self, text: str) -> None:
        """Description for the next declared task."""
        self._description = text

    def task(
        self,
        name: str,
        prerequisites: Optional[Sequence[str]] = None,
        action: Any = None,
        *,
        description: Optional[str] = None,
    ) -> Task:
        if description is None:
            description = self._description
        self._description = None
        return self.registry.register(
            name,
            description=description,
            prerequisites=prerequisites,
            action=as_action(action),
        )

    def define(
        self,
        name: Optional[str] = None,
        prerequisites: Optional[Sequence[str]] = None,
        *,
        description: Optional[str] = None,
    ) -> Callable[[Callable[[], Any]], Callable[[], Any]]:
        """
        Decorator form of task(): the function becomes the action, its name
        the task name and its docstring the description unless given.

            @define(prerequisites=["release"])
            def install():
                "Install the release binary"
                fs.copy(...)
        """

        def deco(fn: Callable[[], Any]) -> Callable[[], Any]:
            desc = description
            if desc is None and self._description is None and fn.__doc__:
                desc = fn.__doc__.strip().splitlines()[0]
            self.task(name or fn.__name__, prerequisites, fn, description=desc)
            return fn

        return deco

    def default(self, name: str) -> None:
        self.registry.set_default(name)

    def namespace(self) -> Dict[str, Any]:
        """Globals injected into a Rotefile before it runs."""
        return {
            "describe": self.describe,
            "task": self.task,
            "define": self.define,
            "default": self.default,
            "sh": sh,
            "shell": shell_line,
            "seq": seq,
            "exec": shell.run,
            "fs": fs,
            "glob": fs.glob,
            "remove": fs.remove,
            "run_tests": harness.run_tests,
            "TestHarness": harness.TestHarness,
            "SelfHostGuard": harness.SelfHostGuard,
            "Action": Action,
            "env": dict(self.variables),
            "OS": "windows" if os.name == "nt" else "unix",
        }
