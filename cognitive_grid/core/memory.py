"""
core/memory.py

Remembering everything is not a feature of minds.

A short, fading list of places recently stood on. Old places fall
off the end. Standing still does not crowd out the past.

Inspired by:
- Working memory span limits
- Inhibition of return in visual search
- Ring buffers
"""

from __future__ import annotations
from collections import deque
from typing import Deque, Iterator

from .position import Position


class SpatialMemory:
    """
    A bounded recency set of visited positions.

    When full, the oldest entry is evicted first.
    A capacity of 0 disables memory entirely.
    """

    def __init__(self, capacity: int = 0):
        if capacity < 0:
            raise ValueError(f"Memory capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._entries: Deque[Position] = deque()

    def record(self, pos: Position) -> None:
        """Remember a position. Repeats of the latest entry are ignored."""
        if self._capacity == 0:
            return
        if self._entries and self._entries[-1] == pos:
            return
        if len(self._entries) >= self._capacity:
            self._entries.popleft()
        self._entries.append(pos)

    def contains(self, pos: Position) -> bool:
        return pos in self._entries

    def is_empty(self) -> bool:
        return not self._entries

    def clear(self) -> None:
        self._entries.clear()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __contains__(self, pos: object) -> bool:
        return pos in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Position]:
        """Oldest to newest."""
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"SpatialMemory({len(self._entries)}/{self._capacity})"
