import threading
from datetime import datetime

from apps.verification.stores.base import CodeKey
from apps.verification.stores.base import CodeRecord
from apps.verification.stores.base import CodeStore


class InMemoryCodeStore(CodeStore):
    """Process-local store guarded by a single lock."""

    def __init__(self):
        self._records: dict[CodeKey, CodeRecord] = {}
        self._lock = threading.Lock()

    def get(self, key: CodeKey) -> CodeRecord | None:
        with self._lock:
            return self._records.get(key)

    def compare_and_swap(self, key: CodeKey, expected_version: int | None, record: CodeRecord) -> bool:
        with self._lock:
            current = self._records.get(key)
            current_version = current.version if current else None
            if current_version != expected_version:
                return False
            self._records[key] = record
            return True

    def purge(self, now: datetime) -> int:
        with self._lock:
            expired = [key for key, record in self._records.items() if record.is_expired(now)]
            for key in expired:
                del self._records[key]
            return len(expired)

    def __len__(self):
        return len(self._records)
