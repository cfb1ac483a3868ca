"""Command handlers for interactive mode."""

from __future__ import annotations

from typing import Callable, Dict

from rich.markup import escape

from ..state.tasks import TaskError, TaskStore


class CommandHandler:
    """Handles slash commands typed into the entry bar."""

    def __init__(self, store: TaskStore, app):
        self.store = store
        self.app = app

        self.commands: Dict[str, Callable] = {
            "/help": self.cmd_help,
            "/add": self.cmd_add,
            "/edit": self.cmd_edit,
            "/done": self.cmd_done,
            "/delete": self.cmd_delete,
            "/show": self.cmd_show,
            "/tasks": self.cmd_tasks,
            "/exit": self.cmd_exit,
        }

    async def handle(self, command: str) -> None:
        parts = command.strip().split(maxsplit=1)
        cmd = parts[0] if parts else ""
        args = parts[1] if len(parts) > 1 else ""

        handler = self.commands.get(cmd)
        if not handler:
            self.app.output_panel.write_error(f"Unknown command: {cmd}")
            self.app.output_panel.write_line("Type /help for available commands")
            return
        try:
            await handler(args)
        except TaskError as exc:
            self.app.output_panel.write_error(str(exc))

    async def cmd_help(self, args: str) -> None:
        help_text = """
Type a task and press Enter (or Save) to add it.
While editing, Enter updates the task instead.

Task list keys:
  space           Mark done / not done
  e / Enter       Edit task
  d               Delete task
  ctrl+t          Toggle "Show finished"

Commands:
  /add <text>     Add a task
  /edit <id>      Edit a task
  /done <id>      Toggle a task's completion
  /delete <id>    Delete a task
  /show pending   Show pending tasks
  /show finished  Show finished tasks
  /tasks          Count tasks
  /help           Show this help
  /exit           Quit
"""
        self.app.output_panel.write_section("Help", help_text)

    async def cmd_add(self, args: str) -> None:
        task = self.store.add(args)
        if task is None:
            self.app.output_panel.write_error("Usage: /add <text>")
            return
        self.app.output_panel.write_task_event("add", task)

    async def cmd_edit(self, args: str) -> None:
        if not args:
            self.app.output_panel.write_error("Usage: /edit <task_id>")
            return
        task = self.store.begin_edit(self.store.resolve_id(args))
        self.app.output_panel.write_task_event("edit", task)

    async def cmd_done(self, args: str) -> None:
        if not args:
            self.app.output_panel.write_error("Usage: /done <task_id>")
            return
        task = self.store.toggle_completed(self.store.resolve_id(args))
        self.app.output_panel.write_task_event("toggle", task)

    async def cmd_delete(self, args: str) -> None:
        if not args:
            self.app.output_panel.write_error("Usage: /delete <task_id>")
            return
        task_id = self.store.resolve_id(args)
        task = next((t for t in self.store.list_all() if t.id == task_id), None)
        if task is not None and self.store.remove(task_id):
            self.app.output_panel.write_task_event("delete", task)
        else:
            self.app.output_panel.write_warning(f"Task {escape(args)} not found")

    async def cmd_show(self, args: str) -> None:
        choice = args.strip().lower()
        if choice in ("finished", "done", "completed"):
            self.store.set_show_completed(True)
        elif choice in ("pending", "open", ""):
            self.store.set_show_completed(False)
        else:
            self.app.output_panel.write_error("Usage: /show pending|finished")
            return
        visible = self.store.list_visible()
        label = "finished" if self.store.show_completed else "pending"
        self.app.output_panel.write_line(f"Showing {len(visible)} {label} task(s)")

    async def cmd_tasks(self, args: str) -> None:
        tasks = self.store.list_all()
        finished = sum(1 for task in tasks if task.completed)
        self.app.output_panel.write_line(
            f"Total tasks: {len(tasks)} ({len(tasks) - finished} pending, {finished} finished)"
        )

    async def cmd_exit(self, args: str) -> None:
        self.app.exit()
