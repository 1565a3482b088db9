"""Build the encoded context payload for a query."""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any, Dict, List, Mapping, Optional

from rag_context.cache import CacheStore, make_cache
from rag_context.encoding import Encoder
from rag_context.errors import DriverError, run_side_effect
from rag_context.registry import ServiceRegistry
from rag_context.retrieval.vector_store import VectorStore, resolve_vector_store
from rag_context.telemetry import Metrics
from rag_context.utils.logging import logger

from .context_config import ContextConfig
from .filters import matches_all, parse_filters
from .selector import DocumentSelector
from .summarizer import Summarizer
from .types import Candidate, Document

CACHE_PREFIX = "rag_context:rag:"
METRIC_TYPE = "rag_search"


def _cell_value(cell: Any) -> str:
    try:
        return repr(cell.cell_contents)
    except ValueError:
        return "<empty>"


def _callable_fingerprint(fn: Any) -> str:
    """Identify a callable by its code, defaults and closure values.

    Callables without ``__code__`` are keyed by identity, valid for one process.
    """
    name = f"{getattr(fn, '__module__', '')}.{getattr(fn, '__qualname__', type(fn).__qualname__)}"
    code = getattr(fn, "__code__", None)
    if code is None:
        return f"<callable {name} id={id(fn):x}>"
    closure = [_cell_value(c) for c in getattr(fn, "__closure__", None) or ()]
    extra = repr((code.co_consts, code.co_names, getattr(fn, "__defaults__", None), closure))
    digest = hashlib.md5(code.co_code + extra.encode("utf-8")).hexdigest()
    return f"<callable {name} {digest}>"


def _stable(value: Any) -> Any:
    if callable(value):
        return _callable_fingerprint(value)
    return repr(value)


def cache_key(query: str, metadata: Mapping[str, Any], config: ContextConfig) -> str:
    raw = json.dumps(
        [
            query,
            metadata,
            config.limit,
            config.search_limit,
            config.max_tokens,
            config.min_score,
            config.metadata_filters,
        ],
        sort_keys=True,
        default=_stable,
    )
    return CACHE_PREFIX + hashlib.md5(raw.encode("utf-8")).hexdigest()


class ContextAssembler:
    """Fetch, filter, select and encode supporting documents for ``query``.

    ``config`` is the full configuration mapping; the ``rag.context`` section is
    re-read on every call. The search backend is resolved once here.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        *,
        registry: Optional[ServiceRegistry] = None,
        encoder: Optional[Encoder] = None,
        selector: Optional[DocumentSelector] = None,
        vector_store: Optional[VectorStore] = None,
        cache: Optional[CacheStore] = None,
        metrics: Optional[Metrics] = None,
    ) -> None:
        self.config = config
        self.registry = registry or ServiceRegistry()
        self.encoder = encoder or Encoder(config)
        self.selector = selector or DocumentSelector(
            Summarizer(self.registry), token_estimator=self.encoder.estimated_tokens
        )
        self.vector_store = vector_store if vector_store is not None else resolve_vector_store(config, self.registry)
        self.cache = cache if cache is not None else make_cache(config)
        self.metrics = metrics

    def build_context(self, query: str, metadata: Optional[Mapping[str, Any]] = None) -> str:
        metadata = dict(metadata or {})
        config = ContextConfig.from_config(self.config)
        key = cache_key(query, metadata, config)

        if config.cache_ttl > 0:
            cached = self._cached(key)
            if cached is not None:
                self._record({"query": query, "cache_hit": True})
                return cached

        start = time.perf_counter()
        candidates = self.filter_candidates(self.fetch_candidates(query, config.search_limit), config)
        query_tokens = self.encoder.estimated_tokens(query)
        selected, total_tokens = self.selector.select(candidates, config, query_tokens)

        encoded = self.encoder.encode(self.build_payload(metadata, query, selected))
        latency_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "rag_context query_tokens=%d candidates=%d selected=%d total_tokens=%d latency_ms=%.1f",
            query_tokens,
            len(candidates),
            len(selected),
            total_tokens,
            latency_ms,
        )
        self._record(
            {
                "query": query,
                "document_count": len(selected),
                "total_tokens": total_tokens,
                "query_tokens": query_tokens,
                "latency_ms": latency_ms,
                "cache_hit": False,
            }
        )

        if config.cache_ttl > 0:
            run_side_effect("cache_put", lambda: self.cache.put(key, encoded, config.cache_ttl))
        return encoded

    def fetch_candidates(self, query: str, search_limit: int) -> List[Candidate]:
        try:
            hits = self.vector_store.search(query, search_limit)
            return [h if isinstance(h, Candidate) else Candidate.model_validate(dict(h)) for h in hits or []]
        except DriverError:
            raise
        except Exception as exc:
            raise DriverError(f"search failed: {exc}") from exc

    def filter_candidates(self, candidates: List[Candidate], config: ContextConfig) -> List[Candidate]:
        kept = [c for c in candidates if c.content != "" and c.score >= config.min_score]
        if config.metadata_filters:
            specs = parse_filters(config.metadata_filters)
            kept = [c for c in kept if matches_all(c.metadata, specs)]
        return sorted(kept, key=lambda c: c.score, reverse=True)

    def build_payload(self, metadata: Mapping[str, Any], query: str, selected: List[Document]) -> Dict[str, Any]:
        return {
            **metadata,
            "query": query,
            "documents": [d.as_dict() for d in selected],
        }

    def _cached(self, key: str) -> Optional[str]:
        def read() -> Optional[str]:
            if not self.cache.has(key):
                return None
            value = self.cache.get(key)
            return None if value is None else str(value)

        result = run_side_effect("cache_get", read)
        return result.value if result.ok else None

    def _record(self, payload: Dict[str, Any]) -> None:
        if self.metrics is None:
            return
        run_side_effect("metrics_record", lambda: self.metrics.record({"type": METRIC_TYPE, **payload}))


__all__ = ["ContextAssembler", "cache_key"]
