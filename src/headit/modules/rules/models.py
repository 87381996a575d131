"""Header rule data model."""

from dataclasses import dataclass
from typing import Any


@dataclass
class Rule:
    """Single header-override directive.

    An empty ``host`` means the rule applies everywhere (global mode).  A rule
    with an empty ``key`` is kept while it is being edited but never projected.
    """

    host: str = ""
    key: str = ""
    value: str = ""
    enabled: bool = False

    @property
    def is_inert(self) -> bool:
        """True when the rule cannot contribute a header."""
        return self.key == ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the persisted ``{host, key, value, enabled}`` shape."""
        return {
            "host": self.host,
            "key": self.key,
            "value": self.value,
            "enabled": self.enabled,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Rule":
        """Build a rule from its persisted shape.

        ``host`` may be missing (global-mode data).  Anything that is not a
        mapping raises ValueError.
        """
        if not isinstance(data, dict):
            raise ValueError(f"rule must be an object, got {type(data).__name__}")
        enabled = data.get("enabled", False)
        if isinstance(enabled, str):
            enabled = enabled.strip().lower() == "true"
        return cls(
            host=_as_text(data.get("host")),
            key=_as_text(data.get("key")),
            value=_as_text(data.get("value")),
            enabled=bool(enabled),
        )


RuleSet = list[Rule]


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)
