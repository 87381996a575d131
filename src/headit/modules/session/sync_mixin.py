"""Sync pipeline shared by every edit path."""

import asyncio
from collections.abc import Iterable

from headit.modules.rules import project
from headit.modules.rules.projector import Projection
from headit.modules.sync import SyncResult
from headit.utils.debug import debug_print, debug_sync_result


class SyncMixin:
    """Project the rule set and push it, now or after the quiet period."""

    def persist(self) -> None:
        """Write the current rules to storage."""
        self.store.save(self.rules)

    async def sync_now(self, force: bool = False, force_hosts: Iterable[str] = ()) -> SyncResult:
        """Project and send the current rules, waiting for the response."""
        projection = project(self.rules, force_hosts=force_hosts)
        return await self._send(projection, force)

    def schedule_sync(
        self, force: bool = False, force_hosts: Iterable[str] = ()
    ) -> asyncio.Task:
        """Snapshot the projection now and send it in the background."""
        projection = project(self.rules, force_hosts=force_hosts)
        task = asyncio.get_running_loop().create_task(self._send(projection, force))
        self._sync_tasks.add(task)
        task.add_done_callback(self._sync_tasks.discard)
        return task

    async def wait_for_sync(self) -> None:
        """Wait for every background and debounced send still in flight."""
        await self.debounce.wait()
        if self._sync_tasks:
            await asyncio.gather(*list(self._sync_tasks), return_exceptions=True)

    def _on_quiet(self, text: str | None):
        """Debounce callback: settle pending edits, persist, and return the send."""
        if text is not None and self._pending_text is not None:
            self._apply_text(text)
        hosts = self._drain_dirty_hosts()
        self.persist()
        projection = project(self.rules, force_hosts=hosts)
        return self._send(projection, False)

    def _drain_dirty_hosts(self) -> set[str]:
        hosts, self._dirty_hosts = self._dirty_hosts, set()
        return hosts

    async def _send(self, projection: Projection, force: bool) -> SyncResult:
        if projection or force:
            debug_print(
                "sync",
                f"POST {self.client.rules_url(self.settings.base_url)}",
                Force=force,
                Hosts=projection or None,
            )
        result = await self.client.sync(projection, self.settings.base_url, force=force)
        if not result.skipped:
            debug_sync_result(result.status_code, result.response_time, result.error)
        self.last_result = result
        self.sync_events.emit(result)
        return result
