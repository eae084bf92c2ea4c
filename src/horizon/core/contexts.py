"""Contexts and the context manager - pure logic, no I/O.

A ContextManager always holds at least one context, and its active context
name always refers to one of them. Every mutating method checks its
preconditions first and raises before changing anything.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from horizon.core.tasks import Task, TimeHorizon, filter_by_horizon, sort_tasks
from horizon.errors import (
    AmbiguousTaskId,
    CannotDeleteLastContext,
    ContextAlreadyExists,
    ContextInUse,
    ContextNotFound,
    InvalidDataFormat,
    InvariantViolation,
    TaskNotFound,
)

DEFAULT_CONTEXT = "default"
IMPORT_SUFFIX = "-imported"


@dataclass
class Context:
    """A named list of tasks. Insertion order is the canonical order."""

    name: str
    tasks: list[Task] = field(default_factory=list)

    def add_task(self, task: Task) -> None:
        """Append a task. Duplicate ids are not checked."""
        self.tasks.append(task)

    def find_task(self, task_id: str) -> Task | None:
        """First task with exactly this id, or None."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def remove_task(self, task_id: str) -> Task:
        for index, task in enumerate(self.tasks):
            if task.id == task_id:
                return self.tasks.pop(index)
        raise TaskNotFound(task_id)

    def tasks_by_horizon(self, horizon: TimeHorizon) -> list[Task]:
        return filter_by_horizon(self.tasks, horizon)

    def sorted_tasks(self) -> list[Task]:
        """Tasks grouped ShortTerm -> LongTerm, High -> Low within a group."""
        return sort_tasks(self.tasks)

    def to_dict(self) -> dict:
        return {"name": self.name, "tasks": [t.to_dict() for t in self.tasks]}

    @classmethod
    def from_dict(cls, data: dict) -> "Context":
        if not isinstance(data, dict):
            raise InvalidDataFormat(f"context entry must be an object, got {type(data).__name__}")
        name = data.get("name")
        if not isinstance(name, str):
            raise InvalidDataFormat("context field 'name' missing or not a string")
        tasks = data.get("tasks", [])
        if not isinstance(tasks, list):
            raise InvalidDataFormat(f"context '{name}': 'tasks' must be a list")
        return cls(name=name, tasks=[Task.from_dict(t) for t in tasks])


def resolve_task(context: Context, prefix: str) -> Task:
    """
    Resolve a (possibly partial) task id to exactly one task.

    Matching is a case-sensitive prefix match; a full id is the degenerate
    case. Raises TaskNotFound for no match and AmbiguousTaskId (listing every
    matching id) for more than one.
    """
    matches = [t for t in context.tasks if t.id.startswith(prefix)]
    if not matches:
        raise TaskNotFound(prefix)
    if len(matches) > 1:
        raise AmbiguousTaskId(prefix, [t.id for t in matches])
    return matches[0]


def unique_import_name(name: str, taken) -> str:
    """
    Pick a free name for an imported context whose name collides.

    Tries `<name>-imported`, then `<name>-imported-2`, `-3`, ...
    """
    candidate = f"{name}{IMPORT_SUFFIX}"
    counter = 1
    while candidate in taken:
        counter += 1
        candidate = f"{name}{IMPORT_SUFFIX}-{counter}"
    return candidate


class ContextManager:
    """Owns all contexts and the active-context pointer."""

    def __init__(self):
        self._contexts: dict[str, Context] = {DEFAULT_CONTEXT: Context(DEFAULT_CONTEXT)}
        self._active = DEFAULT_CONTEXT

    @classmethod
    def restore(cls, contexts: dict[str, Context], active_context: str) -> "ContextManager":
        """Build a manager from persisted state, validating the invariants."""
        if active_context not in contexts:
            raise InvalidDataFormat(
                f"Active context '{active_context}' does not exist in contexts"
            )
        manager = cls()
        manager._contexts = dict(contexts)
        manager._active = active_context
        return manager

    @property
    def contexts(self) -> Mapping[str, Context]:
        """Name -> Context. Mutate through the methods below."""
        return MappingProxyType(self._contexts)

    @property
    def active_context(self) -> str:
        return self._active

    @property
    def active(self) -> Context:
        """The active Context. Always present unless internal state is corrupt."""
        try:
            return self._contexts[self._active]
        except KeyError:
            raise InvariantViolation(
                f"active context '{self._active}' missing from contexts"
            ) from None

    def get(self, name: str) -> Context:
        try:
            return self._contexts[name]
        except KeyError:
            raise ContextNotFound(name) from None

    def create_context(self, name: str) -> Context:
        if name in self._contexts:
            raise ContextAlreadyExists(name)
        context = Context(name)
        self._contexts[name] = context
        return context

    def adopt_context(self, context: Context) -> None:
        """Insert an existing context, tasks included, under its own name."""
        if context.name in self._contexts:
            raise ContextAlreadyExists(context.name)
        self._contexts[context.name] = context

    def switch_context(self, name: str) -> None:
        if name not in self._contexts:
            raise ContextNotFound(name)
        self._active = name

    def delete_context(self, name: str) -> Context:
        if name not in self._contexts:
            raise ContextNotFound(name)
        if len(self._contexts) <= 1:
            raise CannotDeleteLastContext()
        if name == self._active:
            raise ContextInUse(name)
        return self._contexts.pop(name)

    def list_contexts(self) -> list[str]:
        return list(self._contexts)

    def task_count(self) -> int:
        return sum(len(c.tasks) for c in self._contexts.values())
