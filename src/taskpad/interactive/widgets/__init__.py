"""Interactive mode widgets."""

from .entry_bar import EntryBar
from .output_panel import OutputPanel
from .task_list import TaskListWidget

__all__ = [
    "EntryBar",
    "OutputPanel",
    "TaskListWidget",
]
