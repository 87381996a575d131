"""Edit events raised by a front end, and a minimal emitter for them."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


@dataclass
class EditEvent:
    """Base class for edits.  Structural edits skip the debounce."""

    structural: ClassVar[bool] = True


@dataclass
class FieldEdited(EditEvent):
    """Typing in the key or value cell of a table row."""

    structural: ClassVar[bool] = False

    index: int
    field: str
    value: str


@dataclass
class TextEdited(EditEvent):
    """Typing in the free-text editor; carries the whole text."""

    structural: ClassVar[bool] = False

    text: str


@dataclass
class RuleToggled(EditEvent):
    """Checkbox of a row; ``enabled=None`` flips the current state."""

    index: int
    enabled: bool | None = None


@dataclass
class RuleAdded(EditEvent):
    """New row; ``enabled=None`` uses the default-enabled setting."""

    key: str = ""
    value: str = ""
    enabled: bool | None = None


@dataclass
class RuleRemoved(EditEvent):
    index: int


@dataclass
class AllToggled(EditEvent):
    """Enable or disable every rule."""

    enabled: bool


Handler = Callable[[Any], Any]


class EventEmitter:
    """Calls registered handlers in registration order."""

    def __init__(self) -> None:
        self._handlers: list[Handler] = []

    def on(self, handler: Handler) -> Handler:
        """Register ``handler``; returns it so this works as a decorator."""
        self._handlers.append(handler)
        return handler

    def emit(self, event: Any) -> None:
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %r", handler, event)

    def __len__(self) -> int:
        return len(self._handlers)
