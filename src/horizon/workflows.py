"""Shared workflow layer between the CLI and the core.

Each function performs one command against a loaded ContextManager and
returns plain values for the caller to render. All parsing and validation
happens before anything is mutated.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import Config
from .core.contexts import Context, ContextManager, resolve_task, unique_import_name
from .core.tasks import Priority, Task, TimeHorizon, filter_incomplete, sort_tasks
from .ports.store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class ImportSummary:
    """What an import did, for reporting."""

    contexts: int = 0
    tasks: int = 0
    renamed: list[tuple[str, str]] = field(default_factory=list)
    replaced: bool = False


# ============== Tasks ==============


def add_task(
    manager: ContextManager,
    description: str,
    horizon: str | None = None,
    priority: str | None = None,
    config: Config | None = None,
) -> Task:
    """Parse horizon/priority (falling back to config defaults) and add a task."""
    config = config or Config()
    time_horizon = TimeHorizon.parse(horizon if horizon is not None else config.default_horizon)
    priority_level = Priority.parse(priority if priority is not None else config.default_priority)
    task = Task.new(description, time_horizon, priority_level)
    manager.active.add_task(task)
    logger.debug("Added task %s to %s", task.id, manager.active_context)
    return task


def list_tasks(
    manager: ContextManager,
    show_all: bool = False,
    horizon: str | None = None,
) -> list[Task]:
    """Active context tasks in display order, optionally one horizon only."""
    context = manager.active
    if horizon is not None:
        tasks = context.tasks_by_horizon(TimeHorizon.parse(horizon))
    else:
        tasks = context.tasks
    if not show_all:
        tasks = filter_incomplete(tasks)
    return sort_tasks(tasks)


def show_task(manager: ContextManager, task_id: str) -> Task:
    return resolve_task(manager.active, task_id)


def complete_task(manager: ContextManager, task_id: str) -> Task:
    task = resolve_task(manager.active, task_id)
    task.mark_complete()
    return task


def edit_task(
    manager: ContextManager,
    task_id: str,
    description: str | None = None,
    horizon: str | None = None,
    priority: str | None = None,
) -> Task:
    """Update the given fields of a task found by (partial) id."""
    time_horizon = TimeHorizon.parse(horizon) if horizon is not None else None
    priority_level = Priority.parse(priority) if priority is not None else None
    task = resolve_task(manager.active, task_id)
    task.update(description, time_horizon, priority_level)
    return task


def delete_task(manager: ContextManager, task_id: str) -> Task:
    context = manager.active
    task = resolve_task(context, task_id)
    return context.remove_task(task.id)


# ============== Contexts ==============


def create_context(manager: ContextManager, name: str) -> Context:
    return manager.create_context(name)


def switch_context(manager: ContextManager, name: str) -> Context:
    manager.switch_context(name)
    return manager.active


def delete_context(manager: ContextManager, name: str) -> Context:
    return manager.delete_context(name)


# ============== Import / Export ==============


def export_data(store: TaskStore, manager: ContextManager, path: Path | str) -> Path:
    store.export(manager, path)
    return Path(path)


def merge_import(manager: ContextManager, imported: ContextManager) -> ImportSummary:
    """
    Merge imported contexts into the live manager.

    Free names are adopted as-is. Colliding names get a `-imported` suffix
    (plus a counter if needed) and receive all the imported tasks. The
    imported manager's active context is ignored.
    """
    summary = ImportSummary()

    # Resolve every target name before touching the live manager.
    taken = set(manager.list_contexts())
    plan: list[tuple[Context, str | None]] = []
    for name in sorted(imported.list_contexts()):
        context = imported.get(name)
        if name in taken:
            new_name = unique_import_name(name, taken)
            taken.add(new_name)
            plan.append((context, new_name))
        else:
            taken.add(name)
            plan.append((context, None))

    for context, new_name in plan:
        if new_name is None:
            manager.adopt_context(context)
        else:
            target = manager.create_context(new_name)
            for task in context.tasks:
                target.add_task(task)
            summary.renamed.append((context.name, new_name))
            logger.info("Imported context '%s' renamed to '%s'", context.name, new_name)
        summary.contexts += 1
        summary.tasks += len(context.tasks)

    return summary


def import_data(
    store: TaskStore,
    manager: ContextManager,
    path: Path | str,
    merge: bool = False,
) -> tuple[ContextManager, ImportSummary]:
    """
    Import a data file, merging into or replacing the live manager.

    Returns the manager to save from now on (the live one when merging, the
    imported one when replacing) and a summary.
    """
    imported = store.import_from(path)

    if merge:
        return manager, merge_import(manager, imported)

    summary = ImportSummary(
        contexts=len(imported.contexts),
        tasks=imported.task_count(),
        replaced=True,
    )
    return imported, summary
