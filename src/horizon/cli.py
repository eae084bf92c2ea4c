"""Horizon CLI - contexts and time horizons for your to-do list."""

import json
import logging
import sys
from pathlib import Path

import click

from . import workflows
from .adapters.json_store import JsonStore
from .config import Config, load_config
from .display import (
    format_task_line,
    render_contexts,
    render_task_detail,
    render_tasks,
    short_id,
    task_to_json_view,
)
from .errors import HorizonError

OK = click.style("✓", fg="green", bold=True)
INFO = click.style("ℹ", fg="cyan")


def _fail(error: HorizonError) -> None:
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="horizon")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--data-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use this data file instead of the configured one",
)
@click.pass_context
def main(ctx, debug: bool, data_file: Path | None):
    """Horizon - a to-do list with contexts and time horizons."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )

    config = load_config()
    if data_file is not None:
        config.data_file = data_file
    ctx.obj = config


@main.command()
@click.argument("description")
@click.option("--horizon", "-t", default=None, help="Time horizon: short, mid or long")
@click.option("--priority", "-p", default=None, help="Priority: low, medium or high")
@click.pass_obj
def add(config: Config, description: str, horizon: str | None, priority: str | None):
    """Add a task to the active context."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        task = workflows.add_task(manager, description, horizon, priority, config)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Task added with ID: {click.style(short_id(task, config.short_id_length), fg='cyan')}")
    click.echo(f"  {click.style(task.description, dim=True)}")


@main.command("list")
@click.option("--all", "-a", "show_all", is_flag=True, help="Include completed tasks")
@click.option("--horizon", "-t", default=None, help="Only show one time horizon")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_cmd(config: Config, show_all: bool, horizon: str | None, as_json: bool):
    """List tasks in the active context."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        tasks = workflows.list_tasks(manager, show_all=show_all, horizon=horizon)
    except HorizonError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps([task_to_json_view(t) for t in tasks], indent=2))
        return

    click.echo(render_tasks(tasks, config.short_id_length))
    click.echo()
    click.echo(f"{INFO} Context: {click.style(manager.active_context, fg='cyan', bold=True)}")


@main.command()
@click.argument("task_id")
@click.pass_obj
def show(config: Config, task_id: str):
    """Show every field of one task."""
    store = JsonStore(config.data_file)
    try:
        task = workflows.show_task(store.load(), task_id)
    except HorizonError as e:
        _fail(e)

    click.echo(render_task_detail(task))


@main.command()
@click.argument("task_id")
@click.pass_obj
def complete(config: Config, task_id: str):
    """Mark a task as complete (ID may be a prefix)."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        task = workflows.complete_task(manager, task_id)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Task completed: {click.style(task.description, dim=True)}")


@main.command()
@click.argument("task_id")
@click.option("--description", "-d", default=None, help="New description")
@click.option("--horizon", "-t", default=None, help="New time horizon")
@click.option("--priority", "-p", default=None, help="New priority")
@click.pass_obj
def edit(
    config: Config,
    task_id: str,
    description: str | None,
    horizon: str | None,
    priority: str | None,
):
    """Change a task's description, horizon or priority."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        task = workflows.edit_task(manager, task_id, description, horizon, priority)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Task updated: {format_task_line(task, config.short_id_length)}")


@main.command()
@click.argument("task_id")
@click.pass_obj
def delete(config: Config, task_id: str):
    """Delete a task from the active context."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        task = workflows.delete_task(manager, task_id)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Task deleted: {click.style(task.description, dim=True)}")


@main.group()
def context():
    """Manage contexts."""
    pass


@context.command("new")
@click.argument("name")
@click.pass_obj
def context_new(config: Config, name: str):
    """Create an empty context."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        workflows.create_context(manager, name)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Context created: {click.style(name, fg='cyan', bold=True)}")


@context.command("switch")
@click.argument("name")
@click.pass_obj
def context_switch(config: Config, name: str):
    """Make another context active."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        active = workflows.switch_context(manager, name)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(
        f"{OK} Switched to context: {click.style(name, fg='cyan', bold=True)} "
        f"({len(active.tasks)} tasks)"
    )


@context.command("list")
@click.pass_obj
def context_list(config: Config):
    """List all contexts."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
    except HorizonError as e:
        _fail(e)

    click.echo(render_contexts(manager.list_contexts(), manager.active_context))


@context.command("delete")
@click.argument("name")
@click.pass_obj
def context_delete(config: Config, name: str):
    """Delete a context and all its tasks."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        workflows.delete_context(manager, name)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Context deleted: {click.style(name, dim=True)}")


@main.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_obj
def export_cmd(config: Config, path: Path):
    """Export all contexts and tasks to a JSON file."""
    store = JsonStore(config.data_file)
    try:
        written = workflows.export_data(store, store.load(), path)
    except HorizonError as e:
        _fail(e)

    click.echo(f"{OK} Data exported to: {click.style(str(written), fg='cyan')}")


@main.command("import")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--merge", "-m", is_flag=True, help="Merge with existing data instead of replacing it")
@click.pass_obj
def import_cmd(config: Config, path: Path, merge: bool):
    """Import contexts and tasks from a JSON file."""
    store = JsonStore(config.data_file)
    try:
        manager = store.load()
        manager, summary = workflows.import_data(store, manager, path, merge=merge)
        store.save(manager)
    except HorizonError as e:
        _fail(e)

    for old, new in summary.renamed:
        click.echo(
            f"{click.style('ℹ', fg='yellow')} Context '{click.style(old, dim=True)}' "
            f"renamed to '{click.style(new, fg='cyan')}' (name conflict)"
        )
    suffix = " (replaced existing data)" if summary.replaced else ""
    click.echo(f"{OK} Imported {summary.contexts} contexts and {summary.tasks} tasks{suffix}")


if __name__ == "__main__":
    main()
