"""Sync module -- debounced delivery of rules to the injection service."""

from .client import RULES_PATH, SyncClient, SyncResult, build_payload
from .debounce import DEFAULT_INTERVAL, DebounceController, DebounceState

__all__ = [
    "DEFAULT_INTERVAL",
    "DebounceController",
    "DebounceState",
    "RULES_PATH",
    "SyncClient",
    "SyncResult",
    "build_payload",
]
