# scheduler.py
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import CyclicDependency
from .log import get_logger
from .model import Task, TaskState
from .registry import Registry
from .ui.console import Console, get_console

log = get_logger("scheduler")


class ExecutionState:
    """Per-run visit state of every task name. Never shared between runs."""

    def __init__(self) -> None:
        self._states: Dict[str, TaskState] = {}

    def get(self, name: str) -> TaskState:
        return self._states.get(name, TaskState.UNVISITED)

    def mark(self, name: str, state: TaskState) -> None:
        self._states[name] = state


class Scheduler:
    """
    Resolve and run tasks from a Registry.

    - plan(): depth-first walk of prerequisites in declared order, each task
      once; UnknownTask / CyclicDependency surface here, before any action.
    - run(): execute the plan, fail-fast on the first raising action.
    """

    def __init__(
        self,
        registry: Registry,
        *,
        dry_run: bool = False,
        console: Optional[Console] = None,
    ):
        self.registry = registry
        self.dry_run = dry_run
        self.console = console or get_console()

    def plan(self, names: Iterable[str]) -> List[Task]:
        state = ExecutionState()
        order: List[Task] = []
        path: List[str] = []

        def enter(name: str) -> Tuple[Task, Iterator[str]]:
            task = self.registry.get(name)
            state.mark(name, TaskState.IN_PROGRESS)
            path.append(name)
            return task, iter(task.prerequisites)

        def visit(name: str) -> None:
            # frames of (task, remaining prerequisites); path mirrors the stack
            stack = [enter(name)]
            while stack:
                task, deps = stack[-1]
                for dep in deps:
                    dep_state = state.get(dep)
                    if dep_state is TaskState.COMPLETED:
                        continue
                    if dep_state is TaskState.IN_PROGRESS:
                        start = path.index(dep)
                        raise CyclicDependency(cycle=path[start:] + [dep])
                    stack.append(enter(dep))
                    break
                else:
                    stack.pop()
                    path.pop()
                    state.mark(task.name, TaskState.COMPLETED)
                    order.append(task)

        for name in names:
            if state.get(name) is TaskState.UNVISITED:
                visit(name)

        log.debug("plan: %s", " -> ".join(t.name for t in order))
        return order

    def run(self, *names: str) -> List[str]:
        """Run the named tasks (or the default task). Returns names run, in order."""
        if not names:
            names = (self.registry.default_task().name,)

        schedule = self.plan(names)
        total = len(schedule)
        done: List[str] = []

        for index, task in enumerate(schedule, start=1):
            self.console.print_task_start(index, total, task.name)
            if self.dry_run:
                log.info("would run task '%s'", task.name)
            else:
                task.run()
            done.append(task.name)

        return done

    def run_default(self) -> List[str]:
        return self.run()
