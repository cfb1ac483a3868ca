"""Task list widget for interactive mode."""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Label, ListItem, ListView

from ...state.tasks import Task


class TaskListWidget(Widget):
    """Widget displaying the visible tasks."""

    DEFAULT_CSS = """
    TaskListWidget {
        height: 1fr;
    }

    TaskListWidget ListView {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("space", "toggle_task", "Done/Undo"),
        Binding("e", "edit_task", "Edit"),
        Binding("d", "delete_task", "Delete"),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Tasks"
        self.tasks: List[Task] = []
        self.editing_id: Optional[str] = None
        self._rendered: Optional[list] = None

    def compose(self) -> ComposeResult:
        yield ListView(id="task-list-view")

    def update_tasks(self, tasks: List[Task], editing_id: Optional[str] = None, show_completed: bool = False) -> None:
        self.tasks = list(tasks)
        self.editing_id = editing_id
        self.border_title = "Finished tasks" if show_completed else "Pending tasks"

        self.call_later(self._rebuild)

    def _snapshot(self) -> list:
        return [(t.id, t.text, t.completed, t.id == self.editing_id) for t in self.tasks]

    async def _rebuild(self) -> None:
        """Refill the ListView, keeping the highlighted row where it was."""
        snapshot = self._snapshot()
        if snapshot == self._rendered:
            return
        list_view = self.query_one("#task-list-view", ListView)
        previous = list_view.index
        await list_view.clear()
        await list_view.extend(ListItem(Label(self._render_task(task))) for task in self.tasks)
        self._rendered = snapshot
        if self.tasks:
            list_view.index = min(previous or 0, len(self.tasks) - 1)

    def _render_task(self, task: Task) -> Text:
        text = Text()
        if task.completed:
            text.append("☑ ", style="green")
            text.append(task.text, style="strike dim")
        else:
            text.append("☐ ", style="#888888")
            text.append(task.text)
        text.append(f"  {task.id[:8]}", style="dim")
        if task.id == self.editing_id:
            text.stylize("bold underline")
        return text

    def highlighted_task(self) -> Optional[Task]:
        index = self.query_one("#task-list-view", ListView).index
        if index is None or not 0 <= index < len(self.tasks):
            return None
        return self.tasks[index]

    def action_toggle_task(self) -> None:
        task = self.highlighted_task()
        if task:
            self.post_message(self.ToggleRequested(task.id))

    def action_edit_task(self) -> None:
        task = self.highlighted_task()
        if task:
            self.post_message(self.EditRequested(task.id))

    def action_delete_task(self) -> None:
        task = self.highlighted_task()
        if task:
            self.post_message(self.DeleteRequested(task.id))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Enter on a task starts editing it."""
        event.stop()
        self.action_edit_task()

    class ToggleRequested(Message):
        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id

    class EditRequested(Message):
        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id

    class DeleteRequested(Message):
        def __init__(self, task_id: str) -> None:
            super().__init__()
            self.task_id = task_id
