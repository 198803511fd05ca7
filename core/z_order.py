"""Monotonic z-index allocation."""

from __future__ import annotations


class ZOrderCounter:
    """Hands out strictly increasing z-index values.

    Values are never reused; closing windows does not rewind the counter.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    @property
    def peek(self) -> int:
        return self._next

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value
