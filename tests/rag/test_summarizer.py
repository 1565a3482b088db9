from rag_context.rag.summarizer import Summarizer
from rag_context.rag.types import CapabilitySummarizer, NamedSummarizer, summarizer_ref
from rag_context.registry import ServiceRegistry


class ObjectSummarizer:
    def summarize(self, content, tokens):
        return f"summary:{tokens}"


def test_none_returns_content():
    assert Summarizer().summarize(None, "Test content", 100) == "Test content"


def test_named_service_resolved_from_registry():
    registry = ServiceRegistry()
    registry.bind("summarizer.service", ObjectSummarizer)
    out = Summarizer(registry).summarize("summarizer.service", "Original content", 50)
    assert out == "summary:50"


def test_unbound_name_returns_content():
    assert Summarizer(ServiceRegistry()).summarize("missing", "keep me", 5) == "keep me"


def test_callable():
    out = Summarizer().summarize(lambda c, t: "Callable result", "Content", 30)
    assert out == "Callable result"


def test_object_with_summarize_method():
    assert Summarizer().summarize(ObjectSummarizer(), "Object content", 20) == "summary:20"


def test_failure_falls_back_to_content():
    def boom(content, tokens):
        raise RuntimeError("service down")

    assert Summarizer().summarize(boom, "Fallback content", 10) == "Fallback content"


def test_registry_failure_falls_back_to_content():
    registry = ServiceRegistry()

    def factory():
        raise RuntimeError("cannot build")

    registry.bind("broken", factory)
    assert Summarizer(registry).summarize("broken", "original", 10) == "original"


def test_unusable_object_returns_content():
    assert Summarizer().summarize(object(), "plain", 10) == "plain"


def test_non_string_result_is_stringified():
    assert Summarizer().summarize(lambda c, t: 42, "x", 1) == "42"


def test_summarizer_ref_tags():
    assert summarizer_ref(None) is None
    assert summarizer_ref("name") == NamedSummarizer("name")
    obj = ObjectSummarizer()
    assert summarizer_ref(obj) == CapabilitySummarizer(obj)
    fn = lambda c, t: c  # noqa: E731
    assert summarizer_ref(fn).fn is fn
