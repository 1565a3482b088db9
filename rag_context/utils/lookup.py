from __future__ import annotations

"""Dotted-path helpers for nested configuration and metadata mappings."""

from collections.abc import Mapping
from typing import Any

_MISSING = object()


def _walk(data: Any, key: str) -> Any:
    if isinstance(data, Mapping) and key in data:
        return data[key]
    node = data
    for part in key.split("."):
        if isinstance(node, Mapping) and part in node:
            node = node[part]
        elif isinstance(node, (list, tuple)) and part.isdigit() and int(part) < len(node):
            node = node[int(part)]
        else:
            return _MISSING
    return node


def dotted_get(data: Any, key: str, default: Any = None) -> Any:
    """Return ``data[key]`` or the value at the dotted path ``key``.

    An exact key wins over the dotted walk, so ``{"a.b": 1}`` resolves
    ``"a.b"`` to ``1`` even when ``"a"`` is also present.
    """

    value = _walk(data, key)
    return default if value is _MISSING else value


def dotted_has(data: Any, key: str) -> bool:
    return _walk(data, key) is not _MISSING


__all__ = ["dotted_get", "dotted_has"]
