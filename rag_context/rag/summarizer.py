"""Pluggable text reduction used when a document does not fit the budget."""

from __future__ import annotations

from typing import Any, Optional

from rag_context.errors import SummarizationError
from rag_context.registry import ServiceRegistry
from rag_context.utils.logging import logger

from .types import CapabilitySummarizer, InvocableSummarizer, NamedSummarizer, summarizer_ref


class Summarizer:
    """Resolve a summarizer reference and call it, falling back to the input text."""

    def __init__(self, registry: Optional[ServiceRegistry] = None):
        self.registry = registry or ServiceRegistry()

    def summarize(self, ref: Any, content: str, target_tokens: int) -> str:
        try:
            return self._summarize(summarizer_ref(ref), content, target_tokens)
        except Exception as exc:
            logger.debug("summarizer_fallback target_tokens=%s err=%s", target_tokens, exc)
            return content

    def _summarize(self, ref: Any, content: str, target_tokens: int) -> str:
        if ref is None:
            return content
        if isinstance(ref, NamedSummarizer):
            if not self.registry.bound(ref.name):
                logger.debug("summarizer_unbound name=%s", ref.name)
                return content
            ref = summarizer_ref(self.registry.make(ref.name))
            if isinstance(ref, NamedSummarizer):
                # a name resolving to another name is not followed
                return content
        if ref is None:
            return content
        try:
            if isinstance(ref, InvocableSummarizer):
                result = ref.fn(content, target_tokens)
            elif isinstance(ref, CapabilitySummarizer) and callable(getattr(ref.obj, "summarize", None)):
                result = ref.obj.summarize(content, target_tokens)
            else:
                return content
        except Exception as exc:
            raise SummarizationError(str(exc)) from exc
        return "" if result is None else str(result)


__all__ = ["Summarizer"]
