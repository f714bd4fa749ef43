"""Persisted log of when each card was last consumed.

The whole log lives under one key as a JSON object mapping account id to a
Unix epoch millisecond timestamp. Entries are only ever created or
overwritten; expiry is decided by the reader.
"""

import json
import logging
import threading

from childhealth.services.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

USAGE_LOG_KEY = "used_accounts_log"


class UsageLog:
    """Read and update card usage timestamps.

    Store failures never propagate: an unreadable or corrupt log reads as
    empty, and a failed write is logged and dropped.
    """

    def __init__(self, store: KeyValueStore, key: str = USAGE_LOG_KEY) -> None:
        self.store = store
        self.key = key
        self._lock = threading.Lock()

    def load(self) -> dict[str, int]:
        """Return the full log, or an empty dict if it cannot be read."""
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            logger.error(f"Error reading usage log: {e}")
            return {}

        if not raw:
            return {}

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Usage log is not valid JSON, treating as empty: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Usage log has unexpected type {type(data).__name__}, treating as empty")
            return {}

        entries = {}
        for account_id, timestamp in data.items():
            if isinstance(timestamp, (int, float)) and not isinstance(timestamp, bool):
                entries[str(account_id)] = int(timestamp)
            else:
                logger.warning(f"Ignoring malformed usage entry for {account_id}: {timestamp!r}")
        return entries

    def last_used(self, account_id: str) -> int | None:
        """Epoch milliseconds of the account's last consumption, if any."""
        return self.load().get(account_id)

    def record(self, account_id: str, timestamp_ms: int) -> bool:
        """Set the account's last-used time, keeping every other entry.

        Returns:
            True if the log was written, False if the store rejected it
        """
        with self._lock:
            entries = self.load()
            entries[account_id] = timestamp_ms
            try:
                self.store.set(self.key, json.dumps(entries, sort_keys=True))
            except StorageError as e:
                logger.error(f"Error saving usage log for {account_id}: {e}")
                return False
        return True
