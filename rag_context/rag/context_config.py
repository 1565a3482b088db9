from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from rag_context.config.loader import config_get

PREFIX = "rag.context"


@dataclass(frozen=True)
class ContextConfig:
    """Tunable parameters for one ``build_context`` call."""

    limit: int = 3
    search_limit: int = 10
    max_tokens: int = 512
    min_score: float = 0.0
    max_snippet: int = 200
    cache_ttl: int = 0
    summarize: bool = False
    summarizer: Any = None
    metadata_filters: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "ContextConfig":
        def get(key: str, default: Any) -> Any:
            return config_get(config, f"{PREFIX}.{key}", default)

        return cls(
            limit=int(get("limit", 3)),
            search_limit=int(get("search_limit", 10)),
            max_tokens=int(get("max_tokens", 512)),
            min_score=float(get("min_score", 0.0)),
            max_snippet=int(get("max_snippet_length", 200)),
            cache_ttl=int(get("cache_ttl", 0)),
            summarize=_as_bool(get("summarize", False)),
            summarizer=get("summarizer_service", None),
            metadata_filters=dict(get("metadata_filters", {}) or {}),
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


__all__ = ["ContextConfig"]
