"""Durable rule storage."""

import json
import logging

from headit.db.kv_store import KeyValueStore
from headit.modules.rules.models import Rule

logger = logging.getLogger(__name__)

RULES_KEY = "rules"


class RuleStore:
    """Loads and saves the full rule list under a single storage key."""

    def __init__(self, storage: KeyValueStore, key: str = RULES_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> list[Rule]:
        """Return the persisted rules, or an empty list when absent or malformed."""
        raw = self.storage.get(self.key)
        if raw is None or raw == "":
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON array, got {type(data).__name__}")
            return [Rule.from_dict(item) for item in data]
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError subclass.
            logger.warning("Ignoring malformed stored rules: %s", exc)
            return []

    def save(self, rules: list[Rule]) -> None:
        """Persist the full rule list, replacing whatever was stored before."""
        payload = json.dumps([rule.to_dict() for rule in rules])
        self.storage.set(self.key, payload)
        logger.debug("Saved %d rules", len(rules))
