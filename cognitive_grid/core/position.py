"""
core/position.py

A cell on the grid. Nothing more.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Position:
    """Integer grid coordinates. Copied freely, compared by value."""
    x: int
    y: int

    def neighbors(self) -> Tuple[Position, Position, Position, Position]:
        """
        The four orthogonal neighbors, in fixed order:
        left, right, up, down.

        Some may lie outside the grid; callers filter with is_walkable.
        """
        return (
            Position(self.x - 1, self.y),
            Position(self.x + 1, self.y),
            Position(self.x, self.y - 1),
            Position(self.x, self.y + 1),
        )

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"({self.x}, {self.y})"


def manhattan(a: Position, b: Position) -> int:
    """|dx| + |dy|. Admissible for 4-connected unit-cost movement."""
    return abs(a.x - b.x) + abs(a.y - b.y)
