"""Front-end modes: which host the editor works on and how rules are edited."""

from dataclasses import dataclass
from enum import Enum


class Scope(Enum):
    """Per-host rules or rules that apply everywhere."""

    SCOPED = "scoped"
    GLOBAL = "global"


class Editor(Enum):
    """Row-by-row table or one free-text block."""

    TABLE = "table"
    FREE_TEXT = "text"


@dataclass(frozen=True)
class UIMode:
    scope: Scope = Scope.SCOPED
    editor: Editor = Editor.TABLE

    def host_for(self, current_host: str) -> str:
        """Host new and edited rules belong to; global rules use the empty host."""
        if self.scope is Scope.GLOBAL:
            return ""
        return current_host

    @classmethod
    def parse(cls, scope: str = "scoped", editor: str = "table") -> "UIMode":
        """Build a mode from CLI/console words, raising ValueError on unknown ones."""
        return cls(scope=Scope(scope.lower()), editor=Editor(editor.lower()))
