"""Lightweight data models for context assembly."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Candidate(BaseModel):
    """A search hit normalised for selection.

    Backends may omit any field; ``id`` falls back to a fresh uuid.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    content: str = ""
    score: float = 0.0
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _id_str(cls, v: Any) -> str:
        if v is None or v == "":
            return str(uuid.uuid4())
        return str(v)

    @field_validator("content", mode="before")
    @classmethod
    def _content_str(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("score", mode="before")
    @classmethod
    def _score_default(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("metadata", mode="before")
    @classmethod
    def _metadata_default(cls, v: Any) -> Any:
        return {} if v is None else v


@dataclass(frozen=True)
class Document:
    id: str
    content: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)
    tokens: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "content": self.content,
            "score": self.score,
            "metadata": dict(self.metadata),
            "tokens": self.tokens,
        }


class SelectionResult(NamedTuple):
    documents: List[Document]
    total_tokens: int


# Summarizer references -------------------------------------------------------


@dataclass(frozen=True)
class NamedSummarizer:
    """A summarizer looked up by name in the service registry."""

    name: str


@dataclass(frozen=True)
class InvocableSummarizer:
    fn: Callable[[str, int], Any]


@dataclass(frozen=True)
class CapabilitySummarizer:
    """An object exposing ``summarize(content, target_tokens)``."""

    obj: Any


SummarizerRef = Optional[Union[NamedSummarizer, InvocableSummarizer, CapabilitySummarizer]]


def summarizer_ref(value: Any) -> SummarizerRef:
    """Convert a raw configuration value into a :data:`SummarizerRef`."""
    if value is None or isinstance(value, (NamedSummarizer, InvocableSummarizer, CapabilitySummarizer)):
        return value
    if isinstance(value, str):
        return NamedSummarizer(value)
    if callable(value):
        return InvocableSummarizer(value)
    return CapabilitySummarizer(value)


__all__ = [
    "Candidate",
    "Document",
    "SelectionResult",
    "NamedSummarizer",
    "InvocableSummarizer",
    "CapabilitySummarizer",
    "SummarizerRef",
    "summarizer_ref",
]
