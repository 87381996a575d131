"""Rules module -- rule model, durable storage, text form and projection."""

from .models import Rule, RuleSet
from .parser import format_rule, from_text, parse_line, to_text
from .projector import Projection, hosts_of, project
from .store import RULES_KEY, RuleStore

__all__ = [
    "Projection",
    "RULES_KEY",
    "Rule",
    "RuleSet",
    "RuleStore",
    "format_rule",
    "from_text",
    "hosts_of",
    "parse_line",
    "project",
    "to_text",
]
