"""Session module -- edit events, UI modes and the SyncSession tying them together."""

from .events import (
    AllToggled,
    EditEvent,
    EventEmitter,
    FieldEdited,
    RuleAdded,
    RuleRemoved,
    RuleToggled,
    TextEdited,
)
from .manager import SyncSession
from .modes import Editor, Scope, UIMode

__all__ = [
    "AllToggled",
    "EditEvent",
    "Editor",
    "EventEmitter",
    "FieldEdited",
    "RuleAdded",
    "RuleRemoved",
    "RuleToggled",
    "Scope",
    "SyncSession",
    "TextEdited",
    "UIMode",
]
