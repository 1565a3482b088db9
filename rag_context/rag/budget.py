"""Token budget accounting."""

from __future__ import annotations

import math

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> int:
    """Approximate token count: one token per four bytes of UTF-8."""
    if not text:
        return 0
    return math.ceil(len(text.encode("utf-8")) / CHARS_PER_TOKEN)


class TokenBudget:
    """Track tokens consumed against a fixed allowance.

    ``consume`` does not check the allowance; callers ask ``can_fit`` first.
    """

    def __init__(self, max_tokens: int, initial_used: int = 0):
        self.max_tokens = max(0, int(max_tokens))
        self._used = max(0, int(initial_used))

    @property
    def used(self) -> int:
        return self._used

    def remaining(self) -> int:
        return max(0, self.max_tokens - self._used)

    def can_fit(self, tokens: int) -> bool:
        return self._used + tokens <= self.max_tokens

    def consume(self, tokens: int) -> None:
        self._used += max(0, tokens)

    def max_chars_for_remaining(self) -> int:
        return self.remaining() * CHARS_PER_TOKEN

    def __repr__(self) -> str:
        return f"TokenBudget(max_tokens={self.max_tokens}, used={self._used})"


__all__ = ["TokenBudget", "estimate_tokens", "CHARS_PER_TOKEN"]
