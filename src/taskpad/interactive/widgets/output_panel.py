"""Message log under the task list."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import RichLog

from ...state.tasks import Task


def describe_task_event(event: str, task: Task) -> str:
    """One-line, markup-safe summary of what happened to a task."""
    text = escape(task.text)
    if event == "add":
        return f"Added: {text}"
    if event == "update":
        return f"Updated: {text}"
    if event == "toggle":
        return f"{text} is {'finished' if task.completed else 'pending'}"
    if event == "delete":
        return f"Deleted: {text}"
    if event == "edit":
        return f"Editing: {text} (Enter saves)"
    return f"{event}: {text}"


class OutputPanel(Widget):
    """Scrolling log of task events and command output."""

    DEFAULT_CSS = """
    OutputPanel {
        height: 10;
    }
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Messages"

    def compose(self) -> ComposeResult:
        yield RichLog(id="output-log", markup=True, auto_scroll=True)

    @property
    def log_widget(self) -> RichLog:
        return self.query_one("#output-log", RichLog)

    def write_line(self, text: str, style: str | None = None) -> None:
        self.log_widget.write(f"[{style}]{text}[/{style}]" if style else text)

    def write_section(self, title: str, content: str) -> None:
        self.log_widget.write(Panel(content, title=title, border_style="blue"))

    def write_task_event(self, event: str, task: Task) -> None:
        style = "dim" if event == "edit" else "bold green"
        self.write_line(describe_task_event(event, task), style=style)

    def write_error(self, error: str) -> None:
        self.write_line(f"ERROR: {escape(error)}", style="bold red")

    def write_success(self, message: str) -> None:
        self.write_line(f"✓ {message}", style="bold green")

    def write_warning(self, message: str) -> None:
        self.write_line(f"⚠ {message}", style="bold yellow")
