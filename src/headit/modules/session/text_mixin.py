"""Free-text edits of the current scope host's rules."""

import logging

from headit.modules.rules import Rule, from_text, to_text

logger = logging.getLogger(__name__)


class TextEditMixin:
    """Whole-text editing; parsing happens when the debounce fires."""

    def render_text(self) -> str:
        """Text form of the current scope host's rules."""
        return to_text(self.rules, self.scope_host)

    def edit_text(self, text: str) -> None:
        """Record the latest text and restart the quiet-period timer."""
        self._pending_text = text
        self._dirty_hosts.add(self.scope_host)
        self.debounce.trigger(text)

    def replace_text(self, text: str) -> list[Rule]:
        """Apply a text block immediately (imports, console multi-line edits)."""
        rules = self._apply_text(text)
        self.persist()
        self.schedule_sync(force=True, force_hosts={self.scope_host})
        return rules

    def _apply_text(self, text: str) -> list[Rule]:
        host = self.scope_host
        parsed = from_text(text, host)
        self.rules = [rule for rule in self.rules if rule.host != host] + parsed
        self._pending_text = None
        logger.debug("Applied text for host %r: %d rules", host, len(parsed))
        return parsed

    def _settle_pending_text(self) -> None:
        """Apply text still waiting for the debounce before a structural edit."""
        if self._pending_text is not None:
            self._apply_text(self._pending_text)
            self.persist()
