"""Persisted user settings: injection service endpoint and new-rule default."""

import logging
import re
from typing import Any
from urllib.parse import urlparse

import httpx

from headit.db.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9096
DEFAULT_ENDPOINT = f"http://localhost:{DEFAULT_PORT}"

ENDPOINT_KEY = "apiBaseURL"
LEGACY_PORT_KEY = "port"
DEFAULT_CHECKED_KEY = "defaultChecked"

DEFAULTS: dict[str, Any] = {
    "endpoint": DEFAULT_ENDPOINT,
    "default_enabled": False,
}

_HOST_PORT_RE = re.compile(r"^[A-Za-z0-9.\-]+(:\d{1,5})?(/.*)?$")


def normalize_endpoint(value: str | None) -> str:
    """
    Turn a stored endpoint into a base URL without trailing slash.

    Accepts a bare port (``9096``), ``host:port`` or a full URL.  Anything empty
    or unusable falls back to DEFAULT_ENDPOINT.
    """
    text = (value or "").strip()
    if not text:
        return DEFAULT_ENDPOINT

    if text.isdigit():
        port = int(text)
        if 0 < port < 65536:
            return f"http://localhost:{port}"
        logger.warning("Endpoint port %s out of range, using %s", text, DEFAULT_ENDPOINT)
        return DEFAULT_ENDPOINT

    if "://" not in text:
        if not _HOST_PORT_RE.match(text):
            logger.warning("Unusable endpoint %r, using %s", text, DEFAULT_ENDPOINT)
            return DEFAULT_ENDPOINT
        text = f"http://{text}"

    parsed = urlparse(text)
    try:
        parsed.port
    except ValueError:
        logger.warning("Unusable endpoint %r, using %s", text, DEFAULT_ENDPOINT)
        return DEFAULT_ENDPOINT
    if parsed.scheme not in ("http", "https") or not parsed.hostname:
        logger.warning("Unusable endpoint %r, using %s", text, DEFAULT_ENDPOINT)
        return DEFAULT_ENDPOINT
    # httpx is stricter than urlparse (IDNA hosts, control characters).
    try:
        httpx.URL(text)
    except httpx.InvalidURL as exc:
        logger.warning("Unusable endpoint %r (%s), using %s", text, exc, DEFAULT_ENDPOINT)
        return DEFAULT_ENDPOINT
    return text.rstrip("/")


def _parse_bool(raw: str) -> bool | None:
    text = raw.strip().lower()
    if text in ("true", "1", "yes", "on"):
        return True
    if text in ("false", "0", "no", "off", ""):
        return False
    return None


class Settings:
    """Small key/value settings backed by the same storage as the rules.

    Every ``set`` is written through immediately; nothing here is debounced.
    """

    def __init__(self, storage: KeyValueStore, endpoint_override: str | None = None):
        self.storage = storage
        self.endpoint_override = endpoint_override

    def get(self, name: str) -> Any:
        """Return the stored value of ``name`` or its documented default."""
        if name == "endpoint":
            return self._get_endpoint()
        if name == "default_enabled":
            return self._get_default_enabled()
        raise KeyError(f"Unknown setting: {name}")

    def set(self, name: str, value: Any) -> None:
        """Persist ``value`` for ``name`` right away."""
        if name == "endpoint":
            self.storage.set(ENDPOINT_KEY, str(value).strip())
            logger.info("Endpoint set to %s", value)
            return
        if name == "default_enabled":
            if isinstance(value, str):
                parsed = _parse_bool(value)
                if parsed is None:
                    raise ValueError(f"Not a boolean: {value!r}")
                value = parsed
            self.storage.set(DEFAULT_CHECKED_KEY, "true" if value else "false")
            logger.info("New rules enabled by default: %s", bool(value))
            return
        raise KeyError(f"Unknown setting: {name}")

    @property
    def endpoint(self) -> str:
        return self.get("endpoint")

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self.set("endpoint", value)

    @property
    def default_enabled(self) -> bool:
        return self.get("default_enabled")

    @default_enabled.setter
    def default_enabled(self, value: bool) -> None:
        self.set("default_enabled", value)

    @property
    def base_url(self) -> str:
        """Normalized endpoint, env override first."""
        if self.endpoint_override:
            return normalize_endpoint(self.endpoint_override)
        return normalize_endpoint(self.endpoint)

    def as_dict(self) -> dict[str, Any]:
        return {name: self.get(name) for name in DEFAULTS}

    def _get_endpoint(self) -> str:
        raw = self.storage.get(ENDPOINT_KEY)
        if raw is None or not raw.strip():
            raw = self.storage.get(LEGACY_PORT_KEY)
        if raw is None or not raw.strip():
            return DEFAULTS["endpoint"]
        return raw.strip()

    def _get_default_enabled(self) -> bool:
        raw = self.storage.get(DEFAULT_CHECKED_KEY)
        if raw is None:
            return DEFAULTS["default_enabled"]
        parsed = _parse_bool(raw)
        if parsed is None:
            logger.warning("Ignoring malformed %s value %r", DEFAULT_CHECKED_KEY, raw)
            return DEFAULTS["default_enabled"]
        return parsed
