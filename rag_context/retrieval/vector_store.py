"""Search backends that feed candidate documents into context assembly."""

from __future__ import annotations

import abc
import json
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from rag_context.config.loader import config_get
from rag_context.errors import DriverError
from rag_context.registry import ServiceRegistry
from rag_context.utils.logging import logger

Hit = Dict[str, Any]


class VectorStore(abc.ABC):
    name: str = "base"

    @abc.abstractmethod
    def search(self, query: str, limit: int = 3) -> List[Hit]:
        """Return up to ``limit`` hits, most relevant first.

        Each hit is a mapping with optional ``id``, ``content``, ``score`` and
        ``metadata`` keys.
        """


class NullVectorStore(VectorStore):
    name = "null"

    def search(self, query: str, limit: int = 3) -> List[Hit]:
        return []


class InMemoryVectorStore(VectorStore):
    """Predictable store for local development and tests.

    There is no vector similarity here: documents keep their seeded score and
    get a flat +0.5 boost when the lower-cased query is a substring of their
    content.
    """

    name = "memory"

    def __init__(self, seed: Optional[Iterable[Mapping[str, Any]]] = None):
        self.index: Dict[str, Hit] = {}
        for item in seed or []:
            doc_id = item.get("id") or str(uuid.uuid4())
            self.index[str(doc_id)] = {
                "id": str(doc_id),
                "content": item.get("content") or "",
                "metadata": dict(item.get("metadata") or {}),
                "score": item.get("score", 1.0),
            }

    def store(self, doc_id: str, content: str, metadata: Optional[Mapping[str, Any]] = None) -> None:
        metadata = dict(metadata or {})
        self.index[doc_id] = {
            "id": doc_id,
            "content": content,
            "metadata": metadata,
            "score": metadata.get("score", 1.0),
        }

    def delete(self, doc_id: str) -> None:
        self.index.pop(doc_id, None)

    def search(self, query: str, limit: int = 3) -> List[Hit]:
        q = query.strip().lower()
        items: List[Hit] = []
        for item in self.index.values():
            score = item.get("score") or 0.0
            if q and q in item["content"].lower():
                score += 0.5
            items.append(
                {
                    "id": item["id"],
                    "content": item["content"],
                    "metadata": dict(item["metadata"]),
                    "score": score,
                }
            )
        items.sort(key=lambda h: h["score"], reverse=True)
        return items[: max(0, limit)]

    def __len__(self) -> int:
        return len(self.index)


def load_seed(path: str | Path) -> List[Hit]:
    """Read seed documents from a JSONL file, one object per line."""
    out: List[Hit] = []
    with open(path, "r", encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, 1):
            line = line.strip()
            if not line:
                continue
            try:
                out.append(json.loads(line))
            except ValueError as exc:
                raise DriverError(f"invalid seed line {lineno} in {path}: {exc}") from exc
    return out


def resolve_vector_store(config: Mapping[str, Any], registry: Optional[ServiceRegistry] = None) -> VectorStore:
    """Build the search backend named by ``rag.driver``.

    ``null`` and a disabled RAG section yield :class:`NullVectorStore`,
    ``memory`` an :class:`InMemoryVectorStore`; any other name must be bound
    in ``registry``.
    """

    enabled = bool(config_get(config, "rag.enabled", True))
    driver = str(config_get(config, "rag.driver", "null"))
    if not enabled or driver == "null":
        return NullVectorStore()
    if driver == "memory":
        seed = list(config_get(config, "rag.drivers.memory.seed", []) or [])
        seed_path = config_get(config, "rag.drivers.memory.seed_path")
        if seed_path:
            seed.extend(load_seed(seed_path))
        logger.info("vector_store driver=memory docs=%d", len(seed))
        return InMemoryVectorStore(seed)
    if registry is None or not registry.bound(driver):
        raise DriverError(f"unknown search driver: {driver}")
    try:
        store = registry.make(driver)
    except Exception as exc:
        raise DriverError(f"could not build search driver {driver}: {exc}") from exc
    if not callable(getattr(store, "search", None)):
        raise DriverError(f"search driver {driver} has no search() method")
    logger.info("vector_store driver=%s", driver)
    return store


__all__ = [
    "VectorStore",
    "NullVectorStore",
    "InMemoryVectorStore",
    "load_seed",
    "resolve_vector_store",
]
