"""Entry bar: task input, Save/Update button and the finished-tasks filter."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Checkbox, Input


class EntryBar(Widget):
    """Text input with a save button and a "Show finished" checkbox."""

    DEFAULT_CSS = """
    EntryBar {
        height: auto;
        dock: top;
        background: $panel;
    }

    EntryBar Horizontal {
        height: auto;
        padding: 0 1;
    }

    EntryBar #task-input {
        width: 1fr;
    }

    EntryBar #save-button {
        width: 12;
        margin: 0 1;
    }

    EntryBar #show-finished {
        width: auto;
    }
    """

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Input(placeholder="Enter your task (or /help)", id="task-input")
            yield Button("Save", variant="primary", id="save-button", disabled=True)
            yield Checkbox("Show finished", id="show-finished")

    def on_mount(self) -> None:
        self.focus_input()

    def focus_input(self) -> None:
        self.query_one("#task-input", Input).focus()

    def sync(self, draft: str, editing: bool, can_save: bool, show_completed: bool) -> None:
        """Bring the controls in line with the store state."""
        input_widget = self.query_one("#task-input", Input)
        if input_widget.value != draft:
            input_widget.value = draft
            input_widget.cursor_position = len(draft)

        button = self.query_one("#save-button", Button)
        button.label = "Update" if editing else "Save"
        button.disabled = not can_save

        checkbox = self.query_one("#show-finished", Checkbox)
        if checkbox.value != show_completed:
            checkbox.value = show_completed

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self.post_message(self.DraftChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.post_message(self.Submitted(event.value))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-button":
            event.stop()
            value = self.query_one("#task-input", Input).value
            self.post_message(self.Submitted(value))

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.post_message(self.FilterToggled(event.value))

    class DraftChanged(Message):
        """Message sent when the input text changes."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class Submitted(Message):
        """Message sent on Enter or when the save button is pressed."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text

    class FilterToggled(Message):
        """Message sent when "Show finished" is checked or cleared."""

        def __init__(self, show_completed: bool) -> None:
            super().__init__()
            self.show_completed = show_completed
