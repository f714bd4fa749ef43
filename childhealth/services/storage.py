"""Key-value storage for the persisted usage log.

Supports an in-memory map, the local filesystem and an embedded SQLite
database. The eligibility engine only sees the ``KeyValueStore`` interface.
"""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError

from childhealth.core.config import settings
from childhealth.db.session import create_db_engine, create_session_factory
from childhealth.models.key_value import KeyValueRecord

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class StorageError(Exception):
    """Base exception for storage errors."""

    pass


class KeyValueStore(ABC):
    """Abstract base class for key-value backends."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Read the value stored under a key.

        Args:
            key: Record key

        Returns:
            Stored string, or None if the key has never been set

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or overwrite the value stored under a key.

        Args:
            key: Record key
            value: String to store

        Raises:
            StorageError: If the backend cannot be written
        """
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Nothing survives a restart."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore(KeyValueStore):
    """Local filesystem store, one file per key."""

    def __init__(self, base_path: str | Path = "./storage") -> None:
        self.base_path = Path(base_path)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self.base_path / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Read a key's file, or None if it does not exist."""
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write a key's file, replacing it atomically."""
        path = self._path_for(key)
        tmp_path = path.parent / f"{path.name}.tmp"
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e


class SqlKeyValueStore(KeyValueStore):
    """Embedded database store using the ``key_value_records`` table."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._session_factory = create_session_factory(engine)

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                return session.scalar(
                    select(KeyValueRecord.value).where(KeyValueRecord.key == key)
                )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read key {key!r}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as session:
                record = session.get(KeyValueRecord, key)
                if record is None:
                    session.add(KeyValueRecord(key=key, value=value))
                else:
                    record.value = value
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write key {key!r}: {e}") from e


def get_key_value_store() -> KeyValueStore:
    """Get the configured key-value backend.

    Returns FileKeyValueStore by default, SqlKeyValueStore for the
    "sqlite" backend and InMemoryKeyValueStore for "memory".
    """
    backend = settings.usage_log_backend

    if backend == "sqlite":
        return SqlKeyValueStore(create_db_engine(settings.database_url))
    if backend == "memory":
        logger.warning("Usage log is in memory; card cooldowns reset on restart")
        return InMemoryKeyValueStore()
    return FileKeyValueStore(base_path=settings.storage_path)
