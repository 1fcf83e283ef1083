"""
In-memory TTL cache for public provider searches.
Per process; expired entries are dropped on read and swept on every set,
and the whole cache is cleared on provider writes.
"""

import json
import threading
import time
from typing import Any, Callable, Hashable, Optional


class TTLCache:
    def __init__(self, ttl_secs: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_secs = ttl_secs
        self.clock = clock
        self._data: dict[Hashable, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        now = self.clock()
        with self._lock:
            item = self._data.get(key)
            if not item:
                return None
            expires_at, value = item
            if expires_at <= now:
                self._data.pop(key, None)
                return None
            return value

    def set(self, key: Hashable, value: Any) -> None:
        if self.ttl_secs <= 0:
            return
        now = self.clock()
        with self._lock:
            for stale in [k for k, (expires_at, _) in self._data.items() if expires_at <= now]:
                del self._data[stale]
            self._data[key] = (now + float(self.ttl_secs), value)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    @staticmethod
    def make_key(**parts: Any) -> str:
        return json.dumps(parts, sort_keys=True, default=str)
