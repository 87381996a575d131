"""Table-style edits: rows added, removed, toggled or typed into."""

import logging

from headit.modules.rules import Rule, hosts_of

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("key", "value")


class EditingMixin:
    """Row operations.  Indexes always refer to the full rule list."""

    def visible_rules(self) -> list[tuple[int, Rule]]:
        """Rules of the current scope host with their indexes in the full list."""
        host = self.scope_host
        return [(idx, rule) for idx, rule in enumerate(self.rules) if rule.host == host]

    def add_rule(self, key: str = "", value: str = "", enabled: bool | None = None) -> int:
        """Append a rule for the current scope host and sync right away."""
        self._settle_pending_text()
        if enabled is None:
            enabled = self.settings.default_enabled
        rule = Rule(host=self.scope_host, key=key.strip(), value=value.strip(), enabled=enabled)
        self.rules.append(rule)
        logger.debug("Added rule %d: %r", len(self.rules) - 1, rule)
        self.persist()
        self.schedule_sync(force=False)
        return len(self.rules) - 1

    def remove_rule(self, index: int) -> Rule:
        """Delete a rule and push a forced sync so the service drops its header."""
        self._settle_pending_text()
        rule = self.rules.pop(self._check_index(index))
        logger.debug("Removed rule %d: %r", index, rule)
        self.persist()
        self.schedule_sync(force=True, force_hosts={rule.host})
        return rule

    def toggle_rule(self, index: int, enabled: bool | None = None) -> Rule:
        """Set (or flip) a rule's enabled flag and sync right away."""
        self._settle_pending_text()
        rule = self.rules[self._check_index(index)]
        rule.enabled = (not rule.enabled) if enabled is None else enabled
        logger.debug("Toggled rule %d: enabled=%s", index, rule.enabled)
        self.persist()
        self.schedule_sync(force=True, force_hosts={rule.host})
        return rule

    def set_all(self, enabled: bool) -> None:
        """Enable or disable every rule; also becomes the default for new rules."""
        self._settle_pending_text()
        for rule in self.rules:
            rule.enabled = enabled
        self.settings.default_enabled = enabled
        logger.debug("Set all %d rules enabled=%s", len(self.rules), enabled)
        self.persist()
        self.schedule_sync(force=True, force_hosts=hosts_of(self.rules))

    def edit_field(self, index: int, field: str, value: str) -> Rule:
        """Change a rule's key or value; the sync waits for typing to stop."""
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field must be one of {', '.join(EDITABLE_FIELDS)}, got {field!r}")
        self._settle_pending_text()
        rule = self.rules[self._check_index(index)]
        setattr(rule, field, value.strip())
        self.persist()
        self._dirty_hosts.add(rule.host)
        self.debounce.trigger(None)
        return rule

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self.rules):
            raise IndexError(f"No rule at index {index}")
        return index
