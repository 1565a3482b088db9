from __future__ import annotations

from typing import Any, Mapping, Protocol

from rag_context.config.loader import config_get

from .file_cache import FileCache
from .memo import MemoCache


class CacheStore(Protocol):
    def has(self, key: str) -> bool: ...

    def get(self, key: str, default: Any = None) -> Any: ...

    def put(self, key: str, value: Any, ttl: int) -> None: ...


def make_cache(config: Mapping[str, Any]) -> CacheStore:
    """Return the cache store selected by ``rag.cache.store``."""
    store = str(config_get(config, "rag.cache.store", "memory")).lower()
    if store == "file":
        return FileCache(config_get(config, "rag.cache.path"))
    if store == "memory":
        return MemoCache()
    raise ValueError(f"unknown cache store: {store}")


__all__ = ["CacheStore", "FileCache", "MemoCache", "make_cache"]
