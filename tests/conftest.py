"""Test configuration and fixtures for headit."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from headit.db.kv_store import MemoryStore, SQLiteStore
from headit.modules.rules import Rule
from headit.modules.session import SyncSession, UIMode
from headit.modules.sync import SyncClient

ENDPOINT = "http://localhost:9096"
RULES_URL = f"{ENDPOINT}/rules"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_home(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> Path:
    """Point ~ and the data directory at a temp dir and clear HEADIT_* variables."""
    monkeypatch.setattr(Path, "home", lambda: temp_dir)
    for key in (
        "HEADIT_DATA_DIR",
        "HEADIT_ENDPOINT",
        "HEADIT_DEBOUNCE_MS",
        "HEADIT_SYNC_TIMEOUT",
        "HEADIT_LOG_FILE",
        "HEADIT_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)
    return temp_dir


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-memory key/value store."""
    return MemoryStore()


@pytest.fixture
def sqlite_store(temp_dir: Path) -> Generator[SQLiteStore, None, None]:
    """SQLite-backed store in a temp directory."""
    store = SQLiteStore(temp_dir / "data" / "headit.db")
    yield store
    store.close()


@pytest.fixture
def sample_rules() -> list[Rule]:
    """Rules across two hosts, one disabled."""
    return [
        Rule(host="example.com", key="X-Test", value="1", enabled=True),
        Rule(host="example.com", key="X-Off", value="no", enabled=False),
        Rule(host="other.com", key="Authorization", value="Bearer abc", enabled=True),
    ]


@pytest.fixture
def make_session(memory_store: MemoryStore):
    """Factory for sessions over the shared in-memory store with a short debounce."""

    def _make(host: str = "example.com", mode: UIMode | None = None, interval: float = 0.05):
        return SyncSession(
            memory_store,
            host=host,
            mode=mode,
            client=SyncClient(endpoint=ENDPOINT),
            debounce_interval=interval,
        )

    return _make
