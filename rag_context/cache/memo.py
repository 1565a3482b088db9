from __future__ import annotations

import threading
import time
from typing import Any, Dict, Tuple


class MemoCache:
    """In-process cache with a per-entry TTL."""

    def __init__(self) -> None:
        self._store: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def _live(self, key: str) -> Tuple[float, Any] | None:
        item = self._store.get(key)
        if not item:
            return None
        expires, _value = item
        if time.time() >= expires:
            self._store.pop(key, None)
            return None
        return item

    def has(self, key: str) -> bool:
        with self._lock:
            return self._live(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            item = self._live(key)
        return default if item is None else item[1]

    def put(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        with self._lock:
            self._store[key] = (time.time() + ttl, value)
