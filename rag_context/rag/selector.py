"""Greedy, order-preserving document selection under a token budget."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Mapping, Optional, Union

from rag_context.utils.logging import logger

from .budget import TokenBudget, estimate_tokens
from .context_config import ContextConfig
from .summarizer import Summarizer
from .types import Candidate, Document, SelectionResult

# Returned by ``_fit`` when the whole pass should end.
_EXHAUSTED = object()


class DocumentSelector:
    """Pick documents in order until the limit or the token budget runs out.

    A document that does not fit is summarized (when enabled) or truncated to
    the remaining budget. Documents that still do not fit are skipped; the
    pass only ends early once the budget is fully spent.
    """

    def __init__(
        self,
        summarizer: Optional[Summarizer] = None,
        token_estimator: Optional[Callable[[str], int]] = None,
    ):
        self.summarizer = summarizer or Summarizer()
        self.token_estimator = token_estimator or estimate_tokens

    def select(
        self,
        documents: Iterable[Union[Candidate, Mapping[str, Any]]],
        config: ContextConfig,
        initial_tokens: int = 0,
    ) -> SelectionResult:
        budget = TokenBudget(config.max_tokens, initial_tokens)
        selected: List[Document] = []
        skipped = 0

        for raw in documents:
            doc = raw if isinstance(raw, Candidate) else Candidate.model_validate(raw)
            if doc.content == "":
                continue
            if len(selected) >= config.limit or budget.remaining() <= 0:
                break

            content = self._fit(doc.content, budget, config)
            if content is _EXHAUSTED:
                break
            if content is None:
                skipped += 1
                continue

            snippet = content[: config.max_snippet]
            tokens = self.token_estimator(snippet)
            if not budget.can_fit(tokens):
                skipped += 1
                continue

            selected.append(
                Document(
                    id=doc.id,
                    content=snippet,
                    score=doc.score,
                    metadata=doc.metadata,
                    tokens=tokens,
                )
            )
            budget.consume(tokens)

        logger.debug(
            "rag_select selected=%d skipped=%d tokens=%d max_tokens=%d",
            len(selected),
            skipped,
            budget.used,
            config.max_tokens,
        )
        return SelectionResult(selected, budget.used)

    def _fit(self, content: str, budget: TokenBudget, config: ContextConfig) -> Any:
        if budget.can_fit(self.token_estimator(content)):
            return content
        reduced = self._reduce(content, budget, config)
        if reduced is None:
            return _EXHAUSTED if budget.remaining() <= 0 else None
        return reduced

    def _reduce(self, content: str, budget: TokenBudget, config: ContextConfig) -> Optional[str]:
        remaining = budget.remaining()
        if remaining <= 0:
            return None
        if config.summarize:
            summary = self.summarizer.summarize(config.summarizer, content, remaining)
            if summary and self.token_estimator(summary) <= remaining:
                return summary
        max_chars = budget.max_chars_for_remaining()
        if max_chars <= 0:
            return None
        truncated = content[:max_chars]
        if self.token_estimator(truncated) <= remaining:
            return truncated
        return None


__all__ = ["DocumentSelector"]
