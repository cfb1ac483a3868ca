"""Durable key-value slot and the task snapshot adapter built on it."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List

from .tasks import Task

logger = logging.getLogger(__name__)


class Persistence:
    """Handles atomic JSON file operations."""

    @staticmethod
    def load_json(file_path: Path) -> Dict[str, Any]:
        """Load a JSON object from file, return {} if not found or invalid."""
        if not file_path.exists():
            return {}

        try:
            with file_path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable storage file %s: %s", file_path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: top level is not an object", file_path)
            return {}
        return data

    @staticmethod
    def save_json(file_path: Path, data: Dict[str, Any]) -> None:
        """Atomically save JSON to file."""
        Persistence.ensure_dir(file_path.parent)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2)
                fp.flush()
                os.fsync(fp.fileno())
            shutil.move(tmp_path, file_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def ensure_dir(dir_path: Path) -> None:
        """Create directory if it doesn't exist."""
        dir_path.mkdir(parents=True, exist_ok=True)


class KeyValueStore:
    """Named slots stored together in one JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, key: str, default: Any = None) -> Any:
        return Persistence.load_json(self.path).get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = Persistence.load_json(self.path)
        data[key] = value
        Persistence.save_json(self.path, data)

    def remove(self, key: str) -> None:
        data = Persistence.load_json(self.path)
        if key in data:
            del data[key]
            Persistence.save_json(self.path, data)


class TaskPersistence:
    """
    Loads and saves the task collection in a single storage slot.

    Both directions fail open: a missing or malformed slot loads as an empty
    list, and a failed write is logged and otherwise ignored.
    """

    def __init__(self, store: KeyValueStore, key: str = "tasks") -> None:
        self.store = store
        self.key = key

    def load(self) -> List[Task]:
        """Return the saved tasks, or [] when nothing usable is stored."""
        raw = self.store.get(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("Slot %r holds %s, expected a list; starting empty", self.key, type(raw).__name__)
            return []

        tasks: List[Task] = []
        seen: set[str] = set()
        for entry in raw:
            if not isinstance(entry, dict):
                logger.warning("Skipping non-object task record: %r", entry)
                continue
            task = Task.from_dict(entry)
            if task is None:
                logger.warning("Skipping invalid task record: %r", entry)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id %s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Replace the slot with the given tasks."""
        payload = [task.to_dict() for task in tasks]
        try:
            self.store.set(self.key, payload)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Could not persist %d task(s) to %s: %s", len(payload), self.store.path, exc)
