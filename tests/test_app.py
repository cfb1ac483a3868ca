import asyncio

from textual.widgets import Button, Checkbox, ListView

from taskpad.interactive.app import TaskpadApp
from taskpad.state.tasks import TaskStore


def test_typing_and_enter_adds_task() -> None:
    store = TaskStore()
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("m", "i", "l", "k")
            await pilot.pause()
            assert app.query_one("#save-button", Button).disabled is False
            await pilot.press("enter")
            await pilot.pause()
            assert app.query_one("#save-button", Button).disabled is True

    asyncio.run(scenario())

    assert [task.text for task in store.tasks] == ["milk"]
    assert store.draft == ""


def test_filter_binding_updates_checkbox() -> None:
    store = TaskStore()
    task = store.add("done already")
    store.toggle_completed(task.id)
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            assert app.task_list.tasks == []
            await pilot.press("ctrl+t")
            await pilot.pause()
            assert app.query_one("#show-finished", Checkbox).value is True
            assert [t.text for t in app.task_list.tasks] == ["done already"]

    asyncio.run(scenario())

    assert store.show_completed is True


def test_edit_request_loads_draft() -> None:
    store = TaskStore()
    task = store.add("change me")
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            app.task_list.post_message(app.task_list.EditRequested(task.id))
            await pilot.pause()
            assert store.editing_id == task.id
            assert str(app.query_one("#save-button", Button).label) == "Update"

    asyncio.run(scenario())


def test_list_keys_act_on_highlighted_task() -> None:
    store = TaskStore()
    store.add("one")
    store.add("two")
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            list_view = app.query_one("#task-list-view", ListView)
            list_view.focus()
            await pilot.pause()
            assert list_view.index == 0

            await pilot.press("space")
            await pilot.pause()
            assert [t.text for t in app.task_list.tasks] == ["two"]
            assert list_view.index == 0

            await pilot.press("space")
            await pilot.pause()
            await pilot.press("ctrl+t")
            await pilot.pause()
            await pilot.press("d")
            await pilot.pause()

    asyncio.run(scenario())

    assert [(t.text, t.completed) for t in store.tasks] == [("two", True)]


def test_edit_key_on_list_starts_editing() -> None:
    store = TaskStore()
    task = store.add("rename me")
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#task-list-view", ListView).focus()
            await pilot.pause()
            await pilot.press("e")
            await pilot.pause()

    asyncio.run(scenario())

    assert store.editing_id == task.id
    assert store.draft == "rename me"


def test_save_button_adds_task() -> None:
    store = TaskStore()
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            await pilot.press("t", "e", "a")
            await pilot.pause()
            await pilot.click("#save-button")
            await pilot.pause()

    asyncio.run(scenario())

    assert [task.text for task in store.tasks] == ["tea"]
    assert store.draft == ""


def test_command_while_editing_keeps_edit_mode() -> None:
    store = TaskStore()
    task = store.add("keep me")
    app = TaskpadApp(store=store)

    async def scenario() -> None:
        async with app.run_test() as pilot:
            store.begin_edit(task.id)
            await app.submit("/tasks")
            await pilot.pause()
            assert store.editing_id == task.id
            assert store.draft == "keep me"
            assert str(app.query_one("#save-button", Button).label) == "Update"

            await app.submit("kept and changed")
            await pilot.pause()

    asyncio.run(scenario())

    assert [t.text for t in store.tasks] == ["kept and changed"]
    assert not store.is_editing
