"""Text rendering for tasks and contexts.

Functions return strings (with click.style colors) rather than printing, so
the CLI decides where output goes.
"""

import click

from horizon.core.tasks import Priority, Task, TimeHorizon

HORIZON_HEADERS = [
    (TimeHorizon.SHORT_TERM, "SHORT-TERM TASKS"),
    (TimeHorizon.MID_TERM, "MID-TERM TASKS"),
    (TimeHorizon.LONG_TERM, "LONG-TERM TASKS"),
]

HORIZON_LABELS = {
    TimeHorizon.SHORT_TERM: "Short-term (day-to-day)",
    TimeHorizon.MID_TERM: "Mid-term (within a month)",
    TimeHorizon.LONG_TERM: "Long-term (within a year)",
}


def _priority_tag(priority: Priority) -> str:
    match priority:
        case Priority.HIGH:
            return click.style("HIGH", fg="red", bold=True)
        case Priority.MEDIUM:
            return click.style("MED ", fg="yellow")
        case _:
            return click.style("LOW ", dim=True)


def short_id(task: Task, length: int = 6) -> str:
    return task.id[:length]


def format_task_line(task: Task, id_length: int = 6) -> str:
    """
    One task as `[ ] abc123 [HIGH] description`.

    Pure function - no I/O.
    """
    checkbox = click.style("[✓]", fg="green") if task.completed else "[ ]"
    tid = click.style(short_id(task, id_length), dim=True)
    return f"{checkbox} {tid} [{_priority_tag(task.priority)}] {task.description}"


def render_tasks(tasks: list[Task], id_length: int = 6) -> str:
    """Group an ordered task sequence under horizon headers."""
    sections = []
    for horizon, header in HORIZON_HEADERS:
        group = [t for t in tasks if t.time_horizon == horizon]
        if not group:
            continue
        lines = [click.style(header, fg="cyan", bold=True)]
        lines.extend(f"  {format_task_line(t, id_length)}" for t in group)
        sections.append("\n".join(lines))

    if not sections:
        return click.style("No tasks to display.", dim=True)
    return "\n\n".join(sections)


def render_task_detail(task: Task) -> str:
    status = click.style("Completed ✓", fg="green", bold=True) if task.completed else "Incomplete"
    rows = [
        ("ID", task.id),
        ("Description", task.description),
        ("Time Horizon", HORIZON_LABELS[task.time_horizon]),
        ("Priority", task.priority.value),
        ("Status", status),
        ("Created", task.created_at),
    ]
    lines = [click.style("Task Details:", bold=True, underline=True), ""]
    lines.extend(f"  {click.style(label, bold=True)}: {value}" for label, value in rows)
    return "\n".join(lines)


def render_contexts(names: list[str], active: str) -> str:
    """Sorted context names, the active one marked with a filled dot."""
    lines = [click.style("Available Contexts:", bold=True, underline=True), ""]
    if not names:
        lines.append(click.style("  No contexts available.", dim=True))
        return "\n".join(lines)

    for name in sorted(names):
        if name == active:
            lines.append(f"  {click.style('●', fg='green', bold=True)} {click.style(name, fg='green', bold=True)}")
        else:
            lines.append(f"  {click.style('○', dim=True)} {name}")
    lines.append("")
    lines.append(click.style("  ● = active context", dim=True))
    return "\n".join(lines)


def task_to_json_view(task: Task) -> dict:
    """Plain dict for `list --json` output."""
    return task.to_dict()
