"""Persistent command history for the headit console."""

from pathlib import Path

from prompt_toolkit.history import FileHistory

from headit.config import get_data_dir


class HistoryManager:
    """Manages persistent command history for the console."""

    def __init__(self, history_dir: Path | None = None) -> None:
        self.history_dir = history_dir or get_data_dir()
        self.history_file = self.history_dir / "console_history"
        self.history_dir.mkdir(parents=True, exist_ok=True)
        self._file_history = FileHistory(str(self.history_file))

    def get_history(self) -> FileHistory:
        """Return the FileHistory instance for use with PromptSession."""
        return self._file_history

    def get_recent(self, n: int = 20) -> list[str]:
        """Get the last n commands from history for display.

        FileHistory stores entries prefixed with '+ ' and separated by
        timestamp comment lines.
        """
        lines: list[str] = []
        try:
            if not self.history_file.exists():
                return []
            for line in self.history_file.read_text().splitlines():
                line = line.strip()
                if line.startswith("+ "):
                    lines.append(line[2:].strip())
            return lines[-n:]
        except OSError:
            return []
