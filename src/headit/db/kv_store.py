"""Local key/value storage backing rules and settings.

Values are plain strings, the same way browser local storage keeps them;
callers encode structured values (the rule list) as JSON themselves.
"""

from pathlib import Path
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from headit.db.init import init_db
from headit.db.models import StorageItem


class KeyValueStore(Protocol):
    """Synchronous get/set storage contract."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> bool: ...

    def keys(self) -> list[str]: ...


class SQLiteStore:
    """Durable key/value store kept in a SQLite database."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.engine = init_db(db_path)
        session_factory = sessionmaker(bind=self.engine)
        self.session = session_factory()

    def get(self, key: str) -> str | None:
        item = self.session.get(StorageItem, key)
        return item.value if item is not None else None

    def set(self, key: str, value: str) -> None:
        item = self.session.get(StorageItem, key)
        if item is None:
            self.session.add(StorageItem(key=key, value=value))
        else:
            item.value = value
        self._commit()

    def delete(self, key: str) -> bool:
        item = self.session.get(StorageItem, key)
        if item is None:
            return False
        self.session.delete(item)
        self._commit()
        return True

    def keys(self) -> list[str]:
        return [row.key for row in self.session.query(StorageItem).order_by(StorageItem.key)]

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def close(self) -> None:
        """Release the session and dispose of the engine."""
        self.session.close()
        self.engine.dispose()


class MemoryStore:
    """In-memory store with the same contract, for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._items)

    def close(self) -> None:
        pass
