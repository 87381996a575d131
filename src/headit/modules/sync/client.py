"""HTTP client that pushes the projected rules to the header-injection service."""

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from headit.modules.rules.projector import Projection
from headit.modules.settings import DEFAULT_ENDPOINT, normalize_endpoint

logger = logging.getLogger(__name__)

RULES_PATH = "/rules"


@dataclass
class SyncResult:
    """Outcome of one sync attempt."""

    skipped: bool = False
    ok: bool = False
    status_code: int = 0
    hosts: int = 0
    body: str = ""
    error: str = ""
    response_time: float = 0.0


def build_payload(projection: Projection) -> list[dict[str, Any]]:
    """Turn a projection into the ordered ``[{host, add_headers}]`` request body."""
    return [{"host": host, "add_headers": dict(headers)} for host, headers in projection.items()]


class SyncClient:
    """Async client for the injection service's ``POST /rules`` endpoint.

    Failures are logged and reported through SyncResult; they never raise.
    Each call sends the whole current state, so the next successful call
    repairs whatever an earlier failed one missed.
    """

    def __init__(self, endpoint: str = DEFAULT_ENDPOINT, timeout: float = 5.0):
        self.endpoint = endpoint
        self.timeout = timeout
        self.client: httpx.AsyncClient | None = None
        self._owns_client = False

    async def __aenter__(self):
        self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def open(self) -> None:
        """Create the underlying httpx client if there is none yet."""
        if self.client is None:
            self.client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True

    async def aclose(self) -> None:
        if self.client is not None and self._owns_client:
            await self.client.aclose()
        self.client = None
        self._owns_client = False

    def rules_url(self, endpoint: str | None = None) -> str:
        return normalize_endpoint(endpoint or self.endpoint) + RULES_PATH

    async def sync(
        self,
        projection: Projection,
        endpoint: str | None = None,
        force: bool = False,
    ) -> SyncResult:
        """
        POST the projection to the service.

        Args:
            projection: host -> header map to send
            endpoint: Base URL or port; defaults to the client's endpoint
            force: Send even when the projection is empty (clears the service)

        Returns:
            SyncResult; ``skipped`` when nothing was sent
        """
        payload = build_payload(projection)
        if not payload and not force:
            logger.debug("Nothing to sync, skipping request")
            return SyncResult(skipped=True)

        url = self.rules_url(endpoint)
        logger.debug("Sending %d host rules to %s", len(payload), url)

        self.open()
        start = time.monotonic()
        try:
            response = await self.client.post(url, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Sync to %s failed: %s", url, exc)
            return SyncResult(hosts=len(payload), error=str(exc) or type(exc).__name__)
        elapsed = round(time.monotonic() - start, 4)

        result = SyncResult(
            ok=response.is_success,
            status_code=response.status_code,
            hosts=len(payload),
            body=response.text,
            response_time=elapsed,
        )
        if response.is_success:
            logger.debug("Sync response %d: %s", response.status_code, response.text)
        else:
            result.error = f"HTTP {response.status_code}"
            logger.warning(
                "Sync to %s returned %d: %s", url, response.status_code, response.text[:200]
            )
        return result
