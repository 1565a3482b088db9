import pytest

from rag_context.errors import SideChannelError, run_side_effect
from rag_context.registry import ServiceRegistry


def test_bind_make_and_singletons():
    registry = ServiceRegistry()
    registry.bind("fresh", object)
    registry.bind("shared", object, singleton=True)
    assert registry.bound("fresh")
    assert registry.make("fresh") is not registry.make("fresh")
    assert registry.make("shared") is registry.make("shared")


def test_instance_and_unbind():
    registry = ServiceRegistry()
    obj = object()
    registry.instance("x", obj)
    assert registry.make("x") is obj
    registry.unbind("x")
    assert not registry.bound("x")
    with pytest.raises(KeyError):
        registry.make("x")


def test_run_side_effect_captures_errors():
    ok = run_side_effect("fine", lambda: 3)
    assert ok.ok and ok.value == 3

    def boom():
        raise OSError("disk full")

    failed = run_side_effect("write", boom)
    assert not failed.ok
    assert isinstance(failed.error, SideChannelError)
    assert isinstance(failed.error.__cause__, OSError)
