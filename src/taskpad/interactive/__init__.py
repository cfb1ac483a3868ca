"""Interactive (Textual) mode."""

from .app import TaskpadApp

__all__ = ["TaskpadApp"]
