"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TimeHorizon, Priority, sort_tasks, filter_by_horizon, filter_incomplete
from .contexts import Context, ContextManager, resolve_task, unique_import_name

__all__ = [
    # Tasks
    "Task",
    "TimeHorizon",
    "Priority",
    "sort_tasks",
    "filter_by_horizon",
    "filter_incomplete",
    # Contexts
    "Context",
    "ContextManager",
    "resolve_task",
    "unique_import_name",
]
