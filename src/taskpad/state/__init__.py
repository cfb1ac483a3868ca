"""State management modules."""

from .persistence import KeyValueStore, Persistence, TaskPersistence
from .tasks import Task, TaskError, TaskNotFound, TaskStore, ValidationError

__all__ = [
    "KeyValueStore",
    "Persistence",
    "TaskPersistence",
    "Task",
    "TaskError",
    "TaskNotFound",
    "TaskStore",
    "ValidationError",
]
