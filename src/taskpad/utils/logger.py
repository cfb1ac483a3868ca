"""Logging setup and the task activity log."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..state.tasks import Task

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def setup_logging(level: str = "info", log_file: Optional[Path] = None, console: bool = True) -> None:
    """
    Configure the "taskpad" logger.

    The console handler only shows warnings and is left out entirely while
    the TUI owns the terminal; the optional file handler records everything
    at the configured level.
    """
    root = logging.getLogger("taskpad")
    root.setLevel(LOG_LEVELS.get(str(level).lower(), logging.INFO))

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(fmt)
        root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)


class ActivityLogger:
    """Appends task events to a JSON-lines log."""

    def __init__(self, logs_dir: Path) -> None:
        self.logs_dir = logs_dir
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.logs_dir / "tasks.log"

    def _write(self, payload: dict) -> None:
        entry = {"timestamp": datetime.now(timezone.utc).isoformat(), **payload}
        with self.path.open("a", encoding="utf-8") as fp:
            fp.write(json.dumps(entry) + "\n")

    def log_event(self, event: str, task: Task) -> None:
        try:
            self._write({"event": event, "task_id": task.id, "text": task.text, "completed": task.completed})
        except OSError as exc:
            logging.getLogger(__name__).warning("Could not write activity log: %s", exc)

    def read_events(self) -> list[dict]:
        """Return logged events, oldest first."""
        if not self.path.exists():
            return []
        events = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                events.append(json.loads(line))
        return events
