from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from rag_context.utils.logging import logger


class RagContextError(Exception):
    """Base class for errors raised by rag-context."""


class DriverError(RagContextError):
    """The search backend could not be resolved or the search call failed."""


class EncodingError(RagContextError):
    """The context payload could not be serialised or decoded."""


class SummarizationError(RagContextError):
    """A summarizer raised or returned something unusable."""


class SideChannelError(RagContextError):
    """A cache or metrics call failed."""


@dataclass(frozen=True)
class SideEffectResult:
    name: str
    ok: bool
    value: Any = None
    error: SideChannelError | None = None


def run_side_effect(name: str, fn: Callable[[], Any]) -> SideEffectResult:
    """Run ``fn`` and capture any failure instead of raising it.

    Failures are logged as warnings and wrapped in :class:`SideChannelError`.
    """

    try:
        return SideEffectResult(name=name, ok=True, value=fn())
    except Exception as exc:
        err = SideChannelError(f"{name} failed: {exc}")
        err.__cause__ = exc
        logger.warning("side_effect_failed name=%s err=%s", name, exc)
        return SideEffectResult(name=name, ok=False, error=err)


__all__ = [
    "RagContextError",
    "DriverError",
    "EncodingError",
    "SummarizationError",
    "SideChannelError",
    "SideEffectResult",
    "run_side_effect",
]
