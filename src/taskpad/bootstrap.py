"""Wires configuration, logging and storage into a ready TaskStore."""

from __future__ import annotations

import logging
from typing import Optional

from .config import Config
from .state.persistence import KeyValueStore, TaskPersistence
from .state.tasks import TaskStore
from .utils.logger import ActivityLogger, setup_logging

logger = logging.getLogger(__name__)


def open_store(
    config: Optional[Config] = None,
    *,
    configure_logging: bool = True,
    console_logging: bool = True,
) -> TaskStore:
    """
    Build a TaskStore from configuration.

    If config is None a fresh Config() is loaded. Logging is configured here
    unless the caller has already done so; console_logging=False keeps log
    output off the terminal.
    """
    if config is None:
        config = Config()

    if configure_logging:
        setup_logging(
            config.get("general.log_level", "info"),
            config.log_file,
            console=console_logging,
        )

    persistence = TaskPersistence(
        KeyValueStore(config.storage_path),
        key=config.get("storage.key", "tasks"),
    )
    activity = ActivityLogger(config.activity_dir) if config.get_bool("activity.enabled", True) else None

    store = TaskStore(
        persistence,
        persist_empty=config.get_bool("storage.persist_empty", False),
        activity=activity,
        show_completed=config.get_bool("interface.show_completed", False),
    )
    logger.info("Opened %d task(s) from %s", len(store.tasks), config.storage_path)
    return store
