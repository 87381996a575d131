"""Conversion between rule lists and their plain-text form.

One rule per line, ``key: value``.  A leading ``#`` marks a disabled rule::

    X-Debug: 1
    #Authorization: Bearer abc
"""

import logging

from headit.modules.rules.models import Rule

logger = logging.getLogger(__name__)

DISABLED_PREFIX = "#"


def format_rule(rule: Rule) -> str:
    """Render one rule as a text line."""
    prefix = "" if rule.enabled else DISABLED_PREFIX
    return f"{prefix}{rule.key}: {rule.value}"


def to_text(rules: list[Rule], host_filter: str | None = None) -> str:
    """Render the rules of ``host_filter`` (or all rules when None) as text."""
    lines = []
    for rule in rules:
        if host_filter is not None and rule.host != host_filter:
            continue
        if rule.is_inert:
            continue
        lines.append(format_rule(rule))
    return "\n".join(lines)


def parse_line(line: str, host: str = "") -> Rule | None:
    """Parse a single text line; blank lines and lines without ``:`` give None."""
    text = line.strip()
    if not text:
        return None

    key, sep, value = text.partition(":")
    if not sep:
        logger.debug("Dropping rule line without ':' %r", line)
        return None

    enabled = True
    if key.startswith(DISABLED_PREFIX):
        enabled = False
        key = key[len(DISABLED_PREFIX) :]

    return Rule(host=host, key=key.strip(), value=value.strip(), enabled=enabled)


def from_text(text: str, host: str = "") -> list[Rule]:
    """Parse free text into rules, all scoped to ``host``."""
    rules = []
    for line in text.splitlines():
        rule = parse_line(line, host)
        if rule is not None:
            rules.append(rule)
    return rules
