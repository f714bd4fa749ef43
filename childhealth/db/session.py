"""Database engine and session factory for the embedded usage-log store."""

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from childhealth.core.config import settings
from childhealth.db.base import Base
from childhealth.models.key_value import KeyValueRecord  # noqa: F401  (registers table)


def create_db_engine(database_url: str | None = None) -> Engine:
    """Create an engine and make sure the schema exists.

    Args:
        database_url: SQLAlchemy URL (defaults to settings.database_url)

    Returns:
        Engine bound to the database
    """
    url = database_url or settings.database_url

    # SQLite will not create missing parent directories on its own
    if url.startswith("sqlite:///") and ":memory:" not in url:
        Path(url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=False)
    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory bound to an engine."""
    return sessionmaker(engine, expire_on_commit=False, autoflush=False)
