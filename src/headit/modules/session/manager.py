"""Main SyncSession class."""

import logging
from collections.abc import Callable
from typing import Any

from headit.db.kv_store import KeyValueStore
from headit.modules.rules import Rule, RuleStore
from headit.modules.settings import Settings
from headit.modules.sync import DEFAULT_INTERVAL, DebounceController, SyncClient, SyncResult

from .editing_mixin import EditingMixin
from .events import (
    AllToggled,
    EditEvent,
    EventEmitter,
    FieldEdited,
    RuleAdded,
    RuleRemoved,
    RuleToggled,
    TextEdited,
)
from .modes import UIMode
from .sync_mixin import SyncMixin
from .text_mixin import TextEditMixin

logger = logging.getLogger(__name__)


class SyncSession(EditingMixin, TextEditMixin, SyncMixin):
    """
    One editing session over the stored rules.

    Constructed on activation, torn down on deactivation.  Holds the rule list,
    the settings, the pending debounce handle and the HTTP client.  All methods
    run on a single asyncio loop.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        host: str = "",
        mode: UIMode | None = None,
        client: SyncClient | None = None,
        debounce_interval: float = DEFAULT_INTERVAL,
        endpoint_override: str | None = None,
    ):
        self.storage = storage
        self.store = RuleStore(storage)
        self.settings = Settings(storage, endpoint_override=endpoint_override)
        self.host = host
        self.mode = mode or UIMode()
        self.client = client if client is not None else SyncClient()
        self.debounce = DebounceController(self._on_quiet, interval=debounce_interval)
        self.edits = EventEmitter()
        self.sync_events = EventEmitter()
        self.rules: list[Rule] = []
        self.last_result: SyncResult | None = None
        self.active = False
        self._pending_text: str | None = None
        self._dirty_hosts: set[str] = set()
        self._sync_tasks = set()

    @property
    def scope_host(self) -> str:
        return self.mode.host_for(self.host)

    async def activate(self, sync: bool = True) -> SyncResult | None:
        """Load rules from storage and, with ``sync``, push them without forcing."""
        self.rules = self.store.load()
        self.active = True
        logger.info(
            "Session active: %d rules, host=%r, mode=%s/%s",
            len(self.rules),
            self.host,
            self.mode.scope.value,
            self.mode.editor.value,
        )
        if not sync:
            return None
        return await self.sync_now(force=False)

    async def deactivate(self) -> None:
        """Flush the pending debounce, wait for in-flight sends, close the client."""
        await self.debounce.flush()
        await self.wait_for_sync()
        await self.client.aclose()
        self.active = False
        logger.info("Session closed")

    async def __aenter__(self):
        await self.activate()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.deactivate()

    def on_edit(self, handler: Callable[[EditEvent], Any]) -> Callable[[EditEvent], Any]:
        """Register an observer called after each applied edit event."""
        return self.edits.on(handler)

    def on_sync(self, handler: Callable[[SyncResult], Any]) -> Callable[[SyncResult], Any]:
        """Register an observer called with every sync result."""
        return self.sync_events.on(handler)

    def emit(self, event: EditEvent) -> None:
        """Apply an edit event from a front end, then notify observers."""
        if isinstance(event, FieldEdited):
            self.edit_field(event.index, event.field, event.value)
        elif isinstance(event, TextEdited):
            self.edit_text(event.text)
        elif isinstance(event, RuleToggled):
            self.toggle_rule(event.index, event.enabled)
        elif isinstance(event, RuleAdded):
            self.add_rule(event.key, event.value, event.enabled)
        elif isinstance(event, RuleRemoved):
            self.remove_rule(event.index)
        elif isinstance(event, AllToggled):
            self.set_all(event.enabled)
        else:
            raise TypeError(f"Unsupported edit event: {event!r}")
        self.edits.emit(event)
