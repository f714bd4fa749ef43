"""Pytest configuration and fixtures."""

from collections.abc import Generator

import pytest
from sqlalchemy import Engine, StaticPool, create_engine

from childhealth.db.base import Base
from childhealth.models.key_value import KeyValueRecord  # noqa: F401
from childhealth.services.auth import EligibilityService
from childhealth.services.storage import (
    FileKeyValueStore,
    InMemoryKeyValueStore,
    KeyValueStore,
    StorageError,
)
from childhealth.services.usage_log import UsageLog
from childhealth.utils.time import MS_PER_HOUR

# 2024-03-01T08:00:00Z
START_MS = 1_709_280_000_000

COOLDOWN_MS = 24 * MS_PER_HOUR


class FakeClock:
    """Manually advanced epoch millisecond clock."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class BrokenStore(KeyValueStore):
    """Store whose every operation fails."""

    def get(self, key: str) -> str | None:
        raise StorageError("disk unavailable")

    def set(self, key: str, value: str) -> None:
        raise StorageError("disk unavailable")


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at START_MS."""
    return FakeClock()


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def file_store(tmp_path) -> FileKeyValueStore:
    """File store rooted in a not-yet-created temp directory."""
    return FileKeyValueStore(tmp_path / "storage")


@pytest.fixture
def sqlite_engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with the schema created."""
    engine = create_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def usage_log(memory_store: InMemoryKeyValueStore) -> UsageLog:
    """Usage log over the in-memory store."""
    return UsageLog(memory_store)


@pytest.fixture
def eligibility(usage_log: UsageLog, clock: FakeClock) -> EligibilityService:
    """Eligibility service with a fixed clock and a 24 hour cooldown."""
    return EligibilityService(usage_log, clock=clock, cooldown_ms=COOLDOWN_MS)


@pytest.fixture
def broken_store() -> BrokenStore:
    """Store that fails every read and write."""
    return BrokenStore()
