"""Key-value record model backing the embedded store."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from childhealth.db.base import Base, TimestampMixin


class KeyValueRecord(Base, TimestampMixin):
    """A single string value stored under a well-known key."""

    __tablename__ = "key_value_records"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<KeyValueRecord {self.key} ({len(self.value)} chars)>"
