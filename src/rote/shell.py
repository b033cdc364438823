# shell.py
from __future__ import annotations

import os
import shlex
import subprocess
from typing import Dict, List, Optional

from .errors import CommandFailed, CommandNotFound, CommandTimedOut, FileSystemError
from .log import get_logger

log = get_logger("shell")


def _merged_env(env: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    if not env:
        return None
    merged = os.environ.copy()
    merged.update({k: str(v) for k, v in env.items()})
    return merged


class ShellExecutor:
    """
    Thin synchronous wrapper around subprocess.

    Child stdout/stderr are inherited, never captured. A nonzero exit raises
    CommandFailed; a program that cannot be started raises CommandNotFound.
    `timeout=None` waits forever.
    """

    def __init__(self, *, dry_run: bool = False, timeout: Optional[float] = None):
        self.dry_run = dry_run
        self.timeout = timeout

    def run(
        self,
        command: str,
        *args: str,
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        argv: List[str] = [str(command), *(str(a) for a in args)]
        self._call(argv, shlex.join(argv), shell=False, cwd=cwd, env=env, timeout=timeout)

    def shell(
        self,
        line: str,
        *,
        cwd: Optional[str] = None,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Run a command line through the system shell (pipes, globs, &&)."""
        self._call(line, line, shell=True, cwd=cwd, env=env, timeout=timeout)

    def _call(self, cmd, display: str, *, shell: bool, cwd, env, timeout) -> None:
        if timeout is None:
            timeout = self.timeout

        if self.dry_run:
            log.info("would run: %s", display)
            return

        if cwd is not None and not os.path.isdir(cwd):
            raise FileSystemError(operation="chdir", path=str(cwd), reason="no such directory")

        log.debug("exec: %s (cwd=%s)", display, cwd or ".")
        try:
            proc = subprocess.run(
                cmd,
                shell=shell,
                cwd=cwd,
                env=_merged_env(env),
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            raise CommandTimedOut(command=display, timeout=timeout)
        except OSError as e:
            raise CommandNotFound(command=display, reason=e.strerror or str(e)) from e

        if proc.returncode != 0:
            raise CommandFailed(command=display, exit_code=proc.returncode)


# Executor used by ShellCommandAction and Rotefile helpers (set by the CLI)
_executor: Optional[ShellExecutor] = None


def get_executor() -> ShellExecutor:
    global _executor
    if _executor is None:
        _executor = ShellExecutor()
    return _executor


def set_executor(executor: ShellExecutor) -> None:
    global _executor
    _executor = executor


def run(command: str, *args: str, **kwargs) -> None:
    """exec(path, args...) for Rotefiles."""
    get_executor().run(command, *args, **kwargs)
