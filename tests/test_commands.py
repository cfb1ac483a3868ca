import asyncio
from types import SimpleNamespace

from taskpad.interactive.commands import CommandHandler
from taskpad.interactive.widgets.output_panel import describe_task_event
from taskpad.state.tasks import Task, TaskStore


class RecordingPanel:
    """Minimal OutputPanel stand-in that keeps every message."""

    def __init__(self) -> None:
        self.lines = []

    def write_line(self, text, style=None):
        self.lines.append(("line", text))

    def write_section(self, title, content):
        self.lines.append(("section", title))

    def write_task_event(self, event, task):
        self.lines.append(("event", describe_task_event(event, task)))

    def write_error(self, error):
        self.lines.append(("error", error))

    def write_success(self, message):
        self.lines.append(("success", message))

    def write_warning(self, message):
        self.lines.append(("warning", message))


def _handler():
    store = TaskStore()
    exited = []
    app = SimpleNamespace(output_panel=RecordingPanel(), exit=lambda: exited.append(True))
    return CommandHandler(store, app), store, app, exited


def _run(handler, command):
    asyncio.run(handler.handle(command))


def test_add_and_done_commands():
    handler, store, app, _ = _handler()

    _run(handler, "/add Buy milk")
    task = store.tasks[0]
    assert task.text == "Buy milk"

    _run(handler, f"/done {task.id[:6]}")
    assert store.get(task.id).completed
    assert app.output_panel.lines[-1] == ("event", "Buy milk is finished")


def test_add_without_text_reports_usage():
    handler, store, app, _ = _handler()
    _run(handler, "/add")

    assert store.tasks == []
    assert app.output_panel.lines[-1] == ("error", "Usage: /add <text>")


def test_edit_command_starts_session():
    handler, store, app, _ = _handler()
    task = store.add("draft me")

    _run(handler, f"/edit {task.id}")
    assert store.editing_id == task.id
    assert store.draft == "draft me"


def test_unknown_task_id_is_reported():
    handler, store, app, _ = _handler()

    _run(handler, "/done nope")
    kind, message = app.output_panel.lines[-1]
    assert kind == "error"
    assert "nope" in message


def test_delete_command():
    handler, store, app, _ = _handler()
    task = store.add("remove me")

    _run(handler, f"/delete {task.id}")
    assert store.tasks == []
    assert app.output_panel.lines[-1] == ("event", "Deleted: remove me")
    _run(handler, f"/delete {task.id}")
    assert app.output_panel.lines[-1][0] == "warning"


def test_show_command_switches_filter():
    handler, store, app, _ = _handler()
    task = store.add("finished one")
    store.toggle_completed(task.id)

    _run(handler, "/show finished")
    assert store.show_completed is True
    assert app.output_panel.lines[-1] == ("line", "Showing 1 finished task(s)")

    _run(handler, "/show pending")
    assert store.show_completed is False

    _run(handler, "/show sideways")
    assert app.output_panel.lines[-1][0] == "error"


def test_unknown_command_and_exit():
    handler, store, app, exited = _handler()

    _run(handler, "/bogus")
    assert app.output_panel.lines[-2] == ("error", "Unknown command: /bogus")

    _run(handler, "/exit")
    assert exited == [True]


def test_task_event_wording_escapes_markup():
    task = Task("a", "fix [bold]tags[/bold]")
    assert describe_task_event("add", task) == "Added: fix \\[bold]tags\\[/bold]"

    assert describe_task_event("toggle", Task("b", "walk", completed=True)) == "walk is finished"
    assert describe_task_event("toggle", Task("b", "walk")) == "walk is pending"
    assert describe_task_event("edit", Task("b", "walk")) == "Editing: walk (Enter saves)"
