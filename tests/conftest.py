import pytest

from rag_context.rag.context_config import ContextConfig


class TableEstimator:
    """Token estimator backed by a fixed table, recording every lookup."""

    def __init__(self, table):
        self.table = dict(table)
        self.calls = []

    def __call__(self, text):
        self.calls.append(text)
        return self.table[text]


@pytest.fixture
def make_config():
    def _make(**overrides):
        base = dict(
            limit=100,
            search_limit=10,
            max_tokens=50,
            min_score=0.5,
            max_snippet=100,
            cache_ttl=60,
            summarize=False,
            summarizer=None,
            metadata_filters={},
        )
        base.update(overrides)
        return ContextConfig(**base)

    return _make


@pytest.fixture
def estimator():
    return TableEstimator


@pytest.fixture
def rag_cfg():
    return {
        "rag": {
            "enabled": True,
            "driver": "null",
            "context": {
                "limit": 3,
                "search_limit": 10,
                "max_tokens": 512,
                "min_score": 0.0,
                "max_snippet_length": 200,
                "cache_ttl": 0,
                "summarize": False,
                "summarizer_service": None,
                "metadata_filters": {},
            },
        },
        "metrics": {"enabled": True, "driver": "null"},
    }
