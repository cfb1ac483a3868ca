"""Task collection, filter and edit-session state."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

if TYPE_CHECKING:
    from ..utils.logger import ActivityLogger
    from .persistence import TaskPersistence

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """Base exception for task store errors."""


class ValidationError(TaskError):
    """Raised when task text is empty or whitespace-only."""


class TaskNotFound(TaskError):
    """Raised when an operation references an unknown task id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


ID_ATTEMPTS = 5


def new_task_id() -> str:
    return str(uuid.uuid4())


class Task:
    """Represents a single to-do item."""

    def __init__(self, id: str, text: str, completed: bool = False) -> None:
        self.id = id
        self.text = text
        self.completed = completed

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id!r}, text={self.text!r}, completed={self.completed})"

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @staticmethod
    def from_dict(data: Dict) -> Optional["Task"]:
        """Create from dictionary, or None if the record is unusable.

        Older records use "task" and "isCompleted" instead of "text" and
        "completed"; both shapes are accepted.
        """
        task_id = data.get("id")
        if not isinstance(task_id, str) or not task_id:
            return None
        text = data.get("text", data.get("task"))
        if not isinstance(text, str) or not text.strip():
            return None
        completed = data.get("completed", data.get("isCompleted", False))
        if not isinstance(completed, bool):
            return None
        return Task(id=task_id, text=text.strip(), completed=completed)


class TaskStore:
    """
    Owns the ordered task list plus the UI-facing state around it.

    Besides the tasks themselves the store tracks the draft text (what the
    input box holds), the id of the task being edited, and whether the
    finished or the pending tasks are shown. Listeners registered with
    subscribe() are called after every change so a view can redraw.
    """

    def __init__(
        self,
        persistence: Optional["TaskPersistence"] = None,
        *,
        id_factory: Callable[[], str] = new_task_id,
        persist_empty: bool = False,
        activity: Optional["ActivityLogger"] = None,
        show_completed: bool = False,
    ) -> None:
        self.persistence = persistence
        self.id_factory = id_factory
        # An empty collection is not written unless asked for, so a cleared
        # list leaves the previous snapshot in storage.
        self.persist_empty = persist_empty
        self.activity = activity
        self.show_completed = show_completed
        self.editing_id: Optional[str] = None
        self.draft = ""
        self._tasks: List[Task] = []
        self._listeners: List[Callable[[], None]] = []
        self.load()

    # ------------------------------------------------------------------ #
    # Loading / persistence
    # ------------------------------------------------------------------ #
    def load(self) -> None:
        """Replace the in-memory collection with the stored snapshot."""
        self._tasks = self.persistence.load() if self.persistence else []
        logger.debug("Loaded %d task(s)", len(self._tasks))

    def save(self) -> None:
        if self.persistence is None:
            return
        if not self._tasks and not self.persist_empty:
            logger.debug("Collection is empty; keeping previous snapshot")
            return
        self.persistence.save(self._tasks)

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _record(self, event: str, task: Task) -> None:
        if self.activity is not None:
            self.activity.log_event(event, task)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def list_all(self) -> List[Task]:
        """List all tasks in insertion order."""
        return list(self._tasks)

    def list_visible(self) -> List[Task]:
        """Tasks matching the current filter: finished ones when show_completed is set, pending otherwise."""
        return [task for task in self._tasks if task.completed == self.show_completed]

    def get(self, task_id: str) -> Task:
        """Get task by ID."""
        task = next((task for task in self._tasks if task.id == task_id), None)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def resolve_id(self, token: str) -> str:
        """Expand a unique id prefix to the full id; anything else is returned as given."""
        token = token.strip()
        if any(task.id == token for task in self._tasks):
            return token
        matches = [task.id for task in self._tasks if token and task.id.startswith(token)]
        return matches[0] if len(matches) == 1 else token

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def can_save(self) -> bool:
        return bool(self.draft.strip())

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def set_draft(self, text: str) -> None:
        self.draft = text
        self._notify()

    def set_show_completed(self, flag: bool) -> None:
        self.show_completed = bool(flag)
        self._notify()

    def add(self, text: str) -> Optional[Task]:
        """Append a new pending task; blank text is ignored and returns None."""
        text = text.strip()
        if not text:
            return None
        task = Task(id=self._fresh_id(), text=text)
        self._tasks.append(task)
        self.editing_id = None
        self.draft = ""
        self.save()
        self._record("add", task)
        self._notify()
        return task

    def _fresh_id(self) -> str:
        existing = {task.id for task in self._tasks}
        for _ in range(ID_ATTEMPTS):
            task_id = self.id_factory()
            if task_id not in existing:
                return task_id
        raise TaskError(f"id_factory kept returning existing ids (last: {task_id})")

    def begin_edit(self, task_id: str) -> Task:
        """Start editing a task, loading its text into the draft."""
        task = self.get(task_id)
        self.editing_id = task.id
        self.draft = task.text
        self._notify()
        return task

    def save_edit(self) -> Optional[Task]:
        """
        Commit the draft.

        While editing this rewrites the edited task's text in place; otherwise
        it adds the draft as a new task, like the single Save/Update button of
        the editor.
        """
        if self.editing_id is None:
            return self.add(self.draft)

        text = self.draft.strip()
        if not text:
            raise ValidationError("Task text cannot be empty")

        task_id = self.editing_id
        task = next((t for t in self._tasks if t.id == task_id), None)
        self.editing_id = None
        self.draft = ""
        if task is None:
            self._notify()
            raise TaskNotFound(task_id)

        task.text = text
        self.save()
        self._record("update", task)
        self._notify()
        return task

    def toggle_completed(self, task_id: str) -> Task:
        """Flip a task between pending and finished."""
        task = self.get(task_id)
        task.completed = not task.completed
        self.save()
        self._record("toggle", task)
        self._notify()
        return task

    def remove(self, task_id: str) -> bool:
        """Delete a task. Unknown ids are ignored."""
        task = next((t for t in self._tasks if t.id == task_id), None)
        if task is None:
            return False
        self._tasks = [t for t in self._tasks if t.id != task_id]
        self.save()
        self._record("delete", task)
        self._notify()
        return True
