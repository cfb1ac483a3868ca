"""taskpad CLI entry point."""

from __future__ import annotations

import click

from . import __version__
from .bootstrap import open_store
from .state.tasks import TaskError, TaskStore


def _format_task(task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] {task.id}  {task.text}"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context) -> None:
    """taskpad - a small to-do list editor."""
    if ctx.invoked_subcommand is None:
        _start_tui()


def _start_tui() -> None:
    """Helper to launch the Textual TUI."""
    from .interactive import TaskpadApp

    app = TaskpadApp()
    app.run()


def _store() -> TaskStore:
    return open_store()


@main.command()
def tui() -> None:
    """Start Textual TUI."""
    _start_tui()


@main.command()
@click.argument("text", nargs=-1, required=True)
@click.pass_context
def add(ctx: click.Context, text: tuple[str, ...]) -> None:
    """Add a pending task."""
    task = _store().add(" ".join(text))
    if task is None:
        click.echo("Task text cannot be empty", err=True)
        ctx.exit(1)
    click.echo(_format_task(task))


@main.command(name="list")
@click.option("--finished", is_flag=True, help="Show finished tasks instead of pending ones.")
@click.option("--all", "show_all", is_flag=True, help="Show every task.")
def list_tasks(finished: bool, show_all: bool) -> None:
    """List pending (or finished) tasks."""
    store = _store()
    if show_all:
        tasks = store.list_all()
    else:
        store.set_show_completed(finished)
        tasks = store.list_visible()
    if not tasks:
        click.echo("No finished tasks" if finished and not show_all else "No tasks")
        return
    for task in tasks:
        click.echo(_format_task(task))


@main.command()
@click.argument("task_id")
@click.argument("text", nargs=-1, required=True)
@click.pass_context
def edit(ctx: click.Context, task_id: str, text: tuple[str, ...]) -> None:
    """Replace a task's text."""
    store = _store()
    try:
        store.begin_edit(store.resolve_id(task_id))
        store.set_draft(" ".join(text))
        task = store.save_edit()
    except TaskError as exc:
        click.echo(str(exc), err=True)
        ctx.exit(1)
    click.echo(_format_task(task))


@main.command()
@click.argument("task_id")
@click.pass_context
def toggle(ctx: click.Context, task_id: str) -> None:
    """Mark a task finished, or pending again."""
    store = _store()
    try:
        task = store.toggle_completed(store.resolve_id(task_id))
    except TaskError as exc:
        click.echo(str(exc), err=True)
        ctx.exit(1)
    click.echo(_format_task(task))


@main.command()
@click.argument("task_id")
def delete(task_id: str) -> None:
    """Delete a task."""
    store = _store()
    if store.remove(store.resolve_id(task_id)):
        click.echo(f"Task {task_id} deleted")
    else:
        click.echo(f"Task {task_id} not found")


if __name__ == "__main__":
    main()
