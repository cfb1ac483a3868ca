from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Point global config at a per-test directory and run from a clean cwd.

    Any TASKPAD_* variables from the developer's shell are removed so they
    cannot leak into configuration tests.
    """
    for key in list(os.environ):
        if key.startswith("TASKPAD_"):
            monkeypatch.delenv(key)
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return config_home
