"""Configuration loader for taskpad (global + project with TOML-based defaults)."""

from __future__ import annotations

import copy
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Python <3.11
    import tomli as tomllib  # type: ignore

logger = logging.getLogger(__name__)

ENV_PREFIX = "TASKPAD_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "general": {
        "log_level": "info",
    },
    "storage": {
        "key": "tasks",
        "persist_empty": False,
    },
    "activity": {
        "enabled": True,
    },
    "interface": {
        "show_completed": False,
    },
}


class ConfigLoader:
    """
    Handles configuration loading from multiple sources with priority resolution.

    Priority (highest → lowest):
    1. Command-line arguments (not handled here)
    2. Environment variables (TASKPAD_<SECTION>_<KEY>)
    3. Project config (.taskpad/config.toml)
    4. Global config (~/.config/taskpad/config.toml)
    5. Built-in defaults
    """

    def __init__(self) -> None:
        self.global_dir = self.get_global_config_dir()
        self.project_dir = self.get_project_config_dir()

        self.config: Dict[str, Any] = {}

        self._load_all()

    # ------------------------------------------------------------------ #
    # Public getters
    # ------------------------------------------------------------------ #
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value: Any = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean, accepting the string forms environment overrides produce."""
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() not in {"0", "false", "no", "off", ""}
        return bool(value)

    def get_path(self, key: str, default: Optional[str] = None) -> Optional[Path]:
        """Get a filesystem path with ~ expanded."""
        value = self.get(key, default)
        if value is None:
            return None
        return Path(str(value)).expanduser()

    @property
    def storage_path(self) -> Path:
        """JSON file holding the storage slots."""
        return self.get_path("storage.path") or self.global_dir / "storage.json"

    @property
    def log_file(self) -> Path:
        return self.get_path("general.log_file") or self.global_dir / "taskpad.log"

    @property
    def activity_dir(self) -> Path:
        return self.get_path("activity.log_dir") or self.global_dir / "logs"

    # ------------------------------------------------------------------ #
    # Load/merge helpers
    # ------------------------------------------------------------------ #
    def _load_all(self) -> None:
        """Load all configuration files with proper priority."""
        self._load_global_config()

        if self.project_dir:
            self._load_project_config()

        self._apply_env_overrides()

    def _load_global_config(self) -> None:
        """Load global configuration on top of the defaults."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        config_file = self.global_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                self._deep_merge(self.config, tomllib.load(f))
        else:
            self._create_default_config()

    def _load_project_config(self) -> None:
        """Load project-specific config and merge with global."""
        config_file = self.project_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                project_config = tomllib.load(f)
                self._deep_merge(self.config, project_config)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides (TASKPAD_SECTION_KEY)."""
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            section, _, name = key[len(ENV_PREFIX) :].lower().partition("_")
            if not section or not name:
                continue
            self._set_nested(self.config, f"{section}.{name}", value)

    # ------------------------------------------------------------------ #
    # Static paths/helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def get_global_config_dir() -> Path:
        """Get platform-specific global config directory following XDG spec."""
        system = platform.system()
        if system == "Windows":
            base = Path(os.environ.get("APPDATA", "~\\AppData\\Roaming")).expanduser()
        elif system == "Darwin":
            xdg = os.environ.get("XDG_CONFIG_HOME")
            base = Path(xdg) if xdg else Path.home() / ".config"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
        return base / "taskpad"

    @staticmethod
    def get_project_config_dir() -> Path | None:
        """Find .taskpad directory in current or parent directories."""
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_dir = parent / ".taskpad"
            if config_dir.is_dir():
                return config_dir
        return None

    # ------------------------------------------------------------------ #
    # Persistence helpers
    # ------------------------------------------------------------------ #
    def _create_default_config(self) -> None:
        try:
            self.global_dir.mkdir(parents=True, exist_ok=True)
            config_file = self.global_dir / "config.toml"
            with open(config_file, "w", encoding="utf-8") as f:
                f.write(self._get_default_config_toml())
        except OSError as exc:
            logger.debug("Could not write default config to %s: %s", self.global_dir, exc)

    @staticmethod
    def _get_default_config_toml() -> str:
        """Default config TOML text for first-run creation."""
        default = DEFAULT_CONFIG
        return "\n".join(
            [
                "[general]",
                f'log_level = "{default["general"]["log_level"]}"',
                "# log_file = \"~/.config/taskpad/taskpad.log\"",
                "",
                "[storage]",
                "# path = \"~/.config/taskpad/storage.json\"",
                f'key = "{default["storage"]["key"]}"',
                "# Write the list even when it becomes empty",
                "persist_empty = false",
                "",
                "[activity]",
                "enabled = true",
                "# log_dir = \"~/.config/taskpad/logs\"",
                "",
                "[interface]",
                "show_completed = false",
                "",
            ]
        )

    # ------------------------------------------------------------------ #
    # Utility helpers
    # ------------------------------------------------------------------ #
    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, d: dict, path: str, value: Any) -> None:
        keys = path.split(".")
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value


# Short alias used by the app and CLI
Config = ConfigLoader

__all__ = ["ConfigLoader", "Config", "DEFAULT_CONFIG"]
