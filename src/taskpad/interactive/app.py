"""Textual application for interactive mode."""

from __future__ import annotations

from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer

from .commands import CommandHandler
from .widgets import EntryBar, OutputPanel, TaskListWidget
from ..bootstrap import open_store
from ..config import Config
from ..state.tasks import TaskError, TaskStore


class TaskpadApp(App):
    """To-do list TUI.

    The store is the single source of truth: every handler calls into it and
    the view is redrawn from the store whenever it reports a change.
    """

    TITLE = "taskpad"

    CSS = """
    Screen {
        layout: vertical;
    }

    #task-list-widget {
        border: tall $primary;
        padding: 0;
    }

    #output-panel {
        border: tall $primary;
        padding: 0;
    }
    """

    BINDINGS = [
        Binding("ctrl+t", "toggle_finished", "Show finished", priority=True),
        Binding("escape", "focus_input", "Input"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        store: Optional[TaskStore] = None,
        config: Optional[Config] = None,
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.store = store if store is not None else open_store(config, console_logging=False)
        self.command_handler = CommandHandler(self.store, self)

    def compose(self) -> ComposeResult:
        self.entry_bar = EntryBar(id="entry-bar")
        self.task_list = TaskListWidget(id="task-list-widget")
        self.output_panel = OutputPanel(id="output-panel")

        yield self.entry_bar
        yield self.task_list
        yield self.output_panel
        yield Footer()

    def on_mount(self) -> None:
        self.store.subscribe(self.refresh_view)
        self.refresh_view()
        self.output_panel.write_line("Type a task and press Enter. /help lists commands.")

    def refresh_view(self) -> None:
        """Redraw entry bar and list from the store."""
        store = self.store
        self.entry_bar.sync(
            draft=store.draft,
            editing=store.is_editing,
            can_save=store.can_save,
            show_completed=store.show_completed,
        )
        self.task_list.update_tasks(
            store.list_visible(),
            editing_id=store.editing_id,
            show_completed=store.show_completed,
        )

    # ------------------------------------------------------------------ #
    # Entry bar
    # ------------------------------------------------------------------ #
    def on_entry_bar_draft_changed(self, event: EntryBar.DraftChanged) -> None:
        if event.text != self.store.draft:
            self.store.set_draft(event.text)

    async def on_entry_bar_submitted(self, event: EntryBar.Submitted) -> None:
        await self.submit(event.text)

    async def submit(self, text: str) -> None:
        """Run a slash command or save the draft as a new or edited task."""
        if text.strip().startswith("/"):
            editing_id = self.store.editing_id
            self.store.set_draft("")
            await self.command_handler.handle(text)
            if editing_id is not None and self.store.editing_id == editing_id:
                try:
                    self.store.begin_edit(editing_id)
                except TaskError as exc:
                    self.output_panel.write_warning(f"Edited task is gone: {exc}")
                    return
                self.output_panel.write_warning("Still editing; Enter updates the task")
            return

        self.store.draft = text
        was_editing = self.store.is_editing
        try:
            task = self.store.save_edit()
        except TaskError as exc:
            self.output_panel.write_error(str(exc))
            return
        if task is not None:
            self.output_panel.write_task_event("update" if was_editing else "add", task)

    def on_entry_bar_filter_toggled(self, event: EntryBar.FilterToggled) -> None:
        if event.show_completed != self.store.show_completed:
            self.store.set_show_completed(event.show_completed)

    # ------------------------------------------------------------------ #
    # Task list
    # ------------------------------------------------------------------ #
    def on_task_list_widget_toggle_requested(self, event: TaskListWidget.ToggleRequested) -> None:
        try:
            task = self.store.toggle_completed(event.task_id)
        except TaskError as exc:
            self.output_panel.write_error(str(exc))
            return
        self.output_panel.write_task_event("toggle", task)

    def on_task_list_widget_edit_requested(self, event: TaskListWidget.EditRequested) -> None:
        try:
            self.store.begin_edit(event.task_id)
        except TaskError as exc:
            self.output_panel.write_error(str(exc))
            return
        self.entry_bar.focus_input()

    def on_task_list_widget_delete_requested(self, event: TaskListWidget.DeleteRequested) -> None:
        task = next((t for t in self.store.list_all() if t.id == event.task_id), None)
        if self.store.remove(event.task_id) and task is not None:
            self.output_panel.write_task_event("delete", task)

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #
    def action_toggle_finished(self) -> None:
        self.store.set_show_completed(not self.store.show_completed)

    def action_focus_input(self) -> None:
        self.entry_bar.focus_input()
