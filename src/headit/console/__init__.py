"""Interactive console for headit."""

from .app import ConsoleApp

__all__ = ["ConsoleApp"]
