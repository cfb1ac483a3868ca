"""taskpad - a small to-do list editor for the terminal."""

__version__ = "0.1.0"
__author__ = "taskpad Contributors"

from .config import Config
from .state.tasks import Task, TaskError, TaskNotFound, TaskStore, ValidationError

__all__ = ["Config", "Task", "TaskError", "TaskNotFound", "TaskStore", "ValidationError"]
