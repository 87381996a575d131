"""Input routing for the console: edit events vs. console actions."""

import shlex
from dataclasses import dataclass, field

from headit.modules.rules import parse_line
from headit.modules.session import (
    AllToggled,
    EditEvent,
    FieldEdited,
    RuleAdded,
    RuleRemoved,
    RuleToggled,
)

ON_WORDS = {"on", "true", "yes", "1", "enable", "enabled"}
OFF_WORDS = {"off", "false", "no", "0", "disable", "disabled"}


@dataclass
class RoutedInput:
    """Either an edit event for the session or a console action with arguments."""

    event: EditEvent | None = None
    action: str = ""
    args: list[str] = field(default_factory=list)


def parse_switch(word: str) -> bool:
    lowered = word.lower()
    if lowered in ON_WORDS:
        return True
    if lowered in OFF_WORDS:
        return False
    raise ValueError(f"Expected on or off, got {word!r}")


def _parse_index(word: str) -> int:
    try:
        return int(word.lstrip("#"))
    except ValueError:
        raise ValueError(f"Expected a rule number, got {word!r}") from None


class InputRouter:
    """Turns a console line into an edit event or a console action."""

    ACTIONS = {
        "list",
        "text",
        "show",
        "host",
        "mode",
        "scope",
        "sync",
        "help",
        "exit",
        "clear",
        "history",
        "config",
    }
    ALIASES = {
        "ls": "list",
        "rm": "remove",
        "del": "remove",
        "delete": "remove",
        "quit": "exit",
        "q": "exit",
        "cls": "clear",
        "?": "help",
    }

    def route(self, line: str) -> RoutedInput:
        """
        Route a line.

        Returns:
            RoutedInput(event=RuleAdded(...)) for edits, or
            RoutedInput(action="host", args=["example.com"]) for console actions

        Raises:
            ValueError: unknown command or bad arguments
        """
        line = line.strip()
        if not line:
            return RoutedInput()

        try:
            parts = shlex.split(line)
        except ValueError:
            parts = line.split()

        command = parts[0].lower()
        command = self.ALIASES.get(command, command)
        args = parts[1:]

        if command in self.ACTIONS:
            return RoutedInput(action=command, args=args)
        if command == "add":
            return RoutedInput(event=self._route_add(line, args))
        if command == "remove":
            if len(args) != 1:
                raise ValueError("Usage: remove N")
            return RoutedInput(event=RuleRemoved(_parse_index(args[0])))
        if command == "toggle":
            if len(args) not in (1, 2):
                raise ValueError("Usage: toggle N [on|off]")
            enabled = parse_switch(args[1]) if len(args) == 2 else None
            return RoutedInput(event=RuleToggled(_parse_index(args[0]), enabled))
        if command == "set":
            if len(args) < 2 or args[1].lower() not in ("key", "value"):
                raise ValueError("Usage: set N key|value TEXT")
            return RoutedInput(
                event=FieldEdited(_parse_index(args[0]), args[1].lower(), " ".join(args[2:]))
            )
        if command == "all":
            if len(args) != 1:
                raise ValueError("Usage: all on|off")
            return RoutedInput(event=AllToggled(parse_switch(args[0])))

        raise ValueError(f"Unknown command: {parts[0]} (type 'help')")

    @staticmethod
    def _route_add(line: str, args: list[str]) -> RuleAdded:
        if not args:
            return RuleAdded()
        # "add X-Debug: 1" uses the text-line syntax, "#" included.
        rest = line.split(None, 1)[1]
        if ":" in rest:
            rule = parse_line(rest)
            if rule is not None:
                return RuleAdded(rule.key, rule.value, None if rule.enabled else False)
        return RuleAdded(args[0], " ".join(args[1:]))
