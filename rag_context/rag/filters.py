"""Metadata admission filters.

Raw filter values from configuration are parsed into explicit specs:

* ``None``              -> :class:`Exists`
* a callable            -> :class:`Predicate`, called as ``fn(value, metadata)``
* ``"/pattern/"``       -> :class:`Regex`, searched against ``str(value)``
* anything else         -> :class:`Equals`, loose equality

Keys may be dotted paths into nested metadata.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Union

from rag_context.utils.lookup import dotted_get, dotted_has


@dataclass(frozen=True)
class Exists:
    key: str

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return dotted_has(metadata, self.key)


@dataclass(frozen=True)
class Predicate:
    key: str
    fn: Callable[[Any, Mapping[str, Any]], Any]

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return bool(self.fn(dotted_get(metadata, self.key), metadata))


@dataclass(frozen=True)
class Regex:
    key: str
    pattern: str

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        value = dotted_get(metadata, self.key)
        if value is None:
            return False
        return re.search(self.pattern, str(value)) is not None


@dataclass(frozen=True)
class Equals:
    key: str
    value: Any

    def matches(self, metadata: Mapping[str, Any]) -> bool:
        return loose_equals(dotted_get(metadata, self.key), self.value)


FilterSpec = Union[Exists, Predicate, Regex, Equals]
_SPEC_TYPES = (Exists, Predicate, Regex, Equals)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def loose_equals(actual: Any, expected: Any) -> bool:
    """``==`` that also treats ``1`` and ``"1"`` (or ``"1.0"``) as equal."""
    if actual == expected:
        return True
    if _is_number(actual) and isinstance(expected, str):
        actual, expected = expected, actual
    if isinstance(actual, str) and _is_number(expected):
        try:
            return float(actual.strip()) == float(expected)
        except ValueError:
            return False
    return False


def parse_filter(key: str, expected: Any) -> FilterSpec:
    if isinstance(expected, _SPEC_TYPES):
        return expected
    if expected is None:
        return Exists(key)
    if callable(expected):
        return Predicate(key, expected)
    if isinstance(expected, str) and len(expected) >= 2 and expected.startswith("/") and expected.endswith("/"):
        return Regex(key, expected[1:-1])
    return Equals(key, expected)


def parse_filters(filters: Mapping[str, Any]) -> List[FilterSpec]:
    return [parse_filter(key, expected) for key, expected in (filters or {}).items()]


def matches_all(metadata: Mapping[str, Any], specs: Iterable[FilterSpec]) -> bool:
    return all(spec.matches(metadata or {}) for spec in specs)


__all__ = [
    "Exists",
    "Predicate",
    "Regex",
    "Equals",
    "FilterSpec",
    "loose_equals",
    "parse_filter",
    "parse_filters",
    "matches_all",
]
