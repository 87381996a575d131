"""Tab completion for headit console commands."""

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document


class CommandCompleter(Completer):
    """Tab completion for console commands and their keyword arguments."""

    COMMANDS: dict[str, list[str]] = {
        "list": [],
        "add": [],
        "remove": [],
        "toggle": ["on", "off"],
        "set": ["key", "value"],
        "all": ["on", "off"],
        "text": [],
        "show": [],
        "host": [],
        "mode": ["table", "text"],
        "scope": ["scoped", "global"],
        "sync": ["force"],
        "config": [],
        "history": [],
        "clear": [],
        "help": [],
        "exit": [],
    }

    # Position of the keyword argument (after "set N") for commands that have one.
    KEYWORD_POSITION: dict[str, int] = {"toggle": 2, "set": 2}

    def get_completions(self, document: Document, complete_event):
        text = document.text_before_cursor
        words = text.split()
        if not words or (len(words) == 1 and not text.endswith(" ")):
            prefix = words[0] if words else ""
            for command in sorted(self.COMMANDS):
                if command.startswith(prefix.lower()):
                    yield Completion(command, start_position=-len(prefix))
            return

        command = words[0].lower()
        options = self.COMMANDS.get(command, [])
        if not options:
            return

        current = "" if text.endswith(" ") else words[-1]
        position = len(words) if text.endswith(" ") else len(words) - 1
        if position != self.KEYWORD_POSITION.get(command, 1):
            return
        for option in options:
            if option.startswith(current.lower()):
                yield Completion(option, start_position=-len(current))
