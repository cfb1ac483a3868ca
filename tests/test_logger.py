import logging
from pathlib import Path

from taskpad.utils.logger import setup_logging


def _handler_types():
    return [type(handler) for handler in logging.getLogger("taskpad").handlers]


def test_setup_logging_without_console_writes_only_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "taskpad.log"
    try:
        setup_logging("debug", log_file, console=False)
        assert _handler_types() == [logging.FileHandler]

        logging.getLogger("taskpad.test").warning("kept off the terminal")
        for handler in logging.getLogger("taskpad").handlers:
            handler.flush()
        assert "kept off the terminal" in log_file.read_text(encoding="utf-8")
    finally:
        setup_logging("info", None, console=False)


def test_setup_logging_console_handler_replaces_previous_ones() -> None:
    setup_logging("info", None)
    setup_logging("info", None)
    assert _handler_types() == [logging.StreamHandler]

    setup_logging("info", None, console=False)
    assert _handler_types() == []


def test_tui_keeps_log_output_off_the_terminal() -> None:
    from taskpad.interactive.app import TaskpadApp

    setup_logging("info", None)
    try:
        TaskpadApp()
        assert logging.StreamHandler not in _handler_types()
    finally:
        setup_logging("info", None, console=False)
