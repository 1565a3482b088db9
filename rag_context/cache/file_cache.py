from __future__ import annotations

import hashlib
import json
import os
import time
from pathlib import Path
from typing import Any


class FileCache:
    """A tiny TTL-based file cache storing JSON serialisable values."""

    def __init__(self, root: Path | str | None = None):
        root = root or os.getenv("RAG_CONTEXT_CACHE_DIR", ".rag_context/cache")
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        h = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.root / f"{h}.json"

    def _read(self, key: str) -> dict | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            path.unlink(missing_ok=True)
            return None
        if time.time() >= float(payload.get("expires", 0)):
            path.unlink(missing_ok=True)
            return None
        return payload

    def has(self, key: str) -> bool:
        return self._read(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        payload = self._read(key)
        return default if payload is None else payload.get("value")

    def put(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            return
        payload = {"key": key, "expires": time.time() + ttl, "value": value}
        self._path(key).write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
