# registry.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .errors import DuplicateTask, NoDefaultTask, UnknownTask
from .model import Action, Task, normalise_prerequisites


class Registry:
    """
    Task definitions for one invocation, keyed by name.

    Insertion order is kept for listings only; it never influences the order
    in which tasks execute. Registering a name twice raises DuplicateTask.
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}
        self.default_task_name: Optional[str] = None

    def register(
        self,
        name: str,
        description: Optional[str] = None,
        prerequisites: Optional[Sequence[str]] = None,
        action: Optional[Action] = None,
    ) -> Task:
        if not name:
            raise ValueError("task name must be a non-empty string")
        if name in self._tasks:
            raise DuplicateTask(name=name)
        t = Task(
            name=name,
            description=description,
            prerequisites=normalise_prerequisites(prerequisites),
            action=action,
        )
        self._tasks[name] = t
        return t

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise UnknownTask(name=name, known=self.names()) from None

    def set_default(self, name: str) -> None:
        # may point at a task declared further down the Rotefile
        self.default_task_name = name

    def default_task(self) -> Task:
        if self.default_task_name is None:
            raise NoDefaultTask()
        return self.get(self.default_task_name)

    def names(self) -> List[str]:
        return list(self._tasks)

    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def sorted_tasks(self) -> List[Task]:
        return sorted(self._tasks.values(), key=lambda t: t.name)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __len__(self) -> int:
        return len(self._tasks)
