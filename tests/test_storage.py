"""Tests for key-value storage backends."""

from pathlib import Path

import pytest
from sqlalchemy import Engine

from childhealth.db.base import Base
from childhealth.db.session import create_db_engine
from childhealth.services import storage
from childhealth.services.storage import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    SqlKeyValueStore,
    StorageError,
    get_key_value_store,
)


class TestInMemoryStore:
    """Tests for InMemoryKeyValueStore."""

    def test_missing_key(self, memory_store: InMemoryKeyValueStore) -> None:
        """Test that an unset key reads as None."""
        assert memory_store.get("absent") is None

    def test_set_and_overwrite(self, memory_store: InMemoryKeyValueStore) -> None:
        """Test that set replaces the previous value."""
        memory_store.set("k", "one")
        memory_store.set("k", "two")
        assert memory_store.get("k") == "two"

    def test_initial_values_copied(self) -> None:
        """Test that the initial mapping is not shared."""
        initial = {"k": "v"}
        store = InMemoryKeyValueStore(initial)
        store.set("k", "changed")
        assert initial["k"] == "v"


class TestFileStore:
    """Tests for FileKeyValueStore."""

    def test_missing_key(self, file_store: FileKeyValueStore) -> None:
        """Test that a missing file reads as None."""
        assert file_store.get("used_accounts_log") is None

    def test_set_creates_directory(self, file_store: FileKeyValueStore) -> None:
        """Test that the base directory is created on first write."""
        file_store.set("used_accounts_log", "{}")

        assert (file_store.base_path / "used_accounts_log.json").read_text() == "{}"
        assert file_store.get("used_accounts_log") == "{}"

    def test_no_temp_file_left_behind(self, file_store: FileKeyValueStore) -> None:
        """Test that the atomic write cleans up after itself."""
        file_store.set("k", "value")
        assert sorted(p.name for p in file_store.base_path.iterdir()) == ["k.json"]

    def test_survives_new_instance(self, tmp_path: Path) -> None:
        """Test that values persist across store instances."""
        FileKeyValueStore(tmp_path).set("k", "persisted")
        assert FileKeyValueStore(tmp_path).get("k") == "persisted"

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", "with space"])
    def test_unsafe_key_rejected(self, file_store: FileKeyValueStore, key: str) -> None:
        """Test that keys cannot leave the base directory."""
        with pytest.raises(StorageError):
            file_store.set(key, "x")

    def test_unwritable_path(self, tmp_path: Path) -> None:
        """Test that an OS error becomes StorageError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = FileKeyValueStore(blocker / "nested")

        with pytest.raises(StorageError):
            store.set("k", "v")

    def test_undecodable_file(self, tmp_path: Path) -> None:
        """Test that non-UTF-8 contents become StorageError."""
        (tmp_path / "k.json").write_bytes(b"\xff\xfe{garbage")

        with pytest.raises(StorageError):
            FileKeyValueStore(tmp_path).get("k")


class TestSqlStore:
    """Tests for SqlKeyValueStore."""

    def test_missing_key(self, sqlite_engine: Engine) -> None:
        """Test that an absent row reads as None."""
        assert SqlKeyValueStore(sqlite_engine).get("absent") is None

    def test_insert_then_update(self, sqlite_engine: Engine) -> None:
        """Test that set inserts a row and then updates it."""
        store = SqlKeyValueStore(sqlite_engine)
        store.set("used_accounts_log", '{"GT0001": 1}')
        store.set("used_accounts_log", '{"GT0001": 2}')

        assert store.get("used_accounts_log") == '{"GT0001": 2}'

    def test_create_db_engine_creates_schema(self, tmp_path: Path) -> None:
        """Test that a file database is created with its table."""
        engine = create_db_engine(f"sqlite:///{tmp_path / 'nested' / 'test.db'}")
        try:
            store = SqlKeyValueStore(engine)
            store.set("k", "v")
            assert SqlKeyValueStore(engine).get("k") == "v"
            assert (tmp_path / "nested" / "test.db").exists()
        finally:
            engine.dispose()

    def test_database_error_becomes_storage_error(self, sqlite_engine: Engine) -> None:
        """Test that SQLAlchemy errors are wrapped."""
        Base.metadata.drop_all(sqlite_engine)
        with pytest.raises(StorageError):
            SqlKeyValueStore(sqlite_engine).get("k")
        Base.metadata.create_all(sqlite_engine)


class TestBackendSelection:
    """Tests for get_key_value_store."""

    def test_file_backend(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test the default file backend honours storage_path."""
        monkeypatch.setattr(storage.settings, "usage_log_backend", "file")
        monkeypatch.setattr(storage.settings, "storage_path", str(tmp_path))

        store = get_key_value_store()
        assert isinstance(store, FileKeyValueStore)
        assert store.base_path == tmp_path

    def test_memory_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the in-memory backend."""
        monkeypatch.setattr(storage.settings, "usage_log_backend", "memory")
        assert isinstance(get_key_value_store(), InMemoryKeyValueStore)

    def test_sqlite_backend(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test the embedded database backend."""
        monkeypatch.setattr(storage.settings, "usage_log_backend", "sqlite")
        monkeypatch.setattr(storage.settings, "database_url", f"sqlite:///{tmp_path / 'log.db'}")

        store = get_key_value_store()
        assert isinstance(store, SqlKeyValueStore)
        store.set("k", "v")
        assert store.get("k") == "v"
        store.engine.dispose()
