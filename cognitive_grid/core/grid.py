"""
core/grid.py

The world is a board of cells. Some you may stand on, some you may not.
One of them is where you want to be.

The grid answers questions; it never acts. After construction the
walkability matrix is frozen, so any number of agents can share it
without stepping on each other.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple
import numpy as np

from .position import Position
from .rng import resolve

START = Position(0, 0)


class Grid:
    """
    A width x height board with a single goal cell.

    The walkability matrix is indexed [y, x], True meaning walkable.
    The goal cell is always walkable.
    """

    def __init__(
        self,
        width: int,
        height: int,
        goal: Optional[Position] = None,
        walkable: Optional[np.ndarray] = None,
    ):
        self.width = width
        self.height = height
        self.goal = goal if goal is not None else Position(width - 1, height - 1)

        if walkable is None:
            tiles = np.ones((height, width), dtype=bool)
        else:
            tiles = np.array(walkable, dtype=bool, copy=True)
            if tiles.shape != (height, width):
                raise ValueError(
                    f"Walkability matrix shape {tiles.shape} does not match "
                    f"grid ({height}, {width})"
                )

        if self.in_bounds(self.goal.x, self.goal.y):
            tiles[self.goal.y, self.goal.x] = True

        tiles.setflags(write=False)
        self._tiles = tiles

    # ==================== Construction ====================

    @classmethod
    def with_obstacles(
        cls,
        width: int,
        height: int,
        goal: Optional[Position],
        obstacles: Iterable[Tuple[int, int]],
    ) -> Grid:
        """
        Grid with an explicit list of blocked (x, y) cells.

        Out-of-bounds entries and the goal cell are ignored.
        """
        goal = goal if goal is not None else Position(width - 1, height - 1)
        tiles = np.ones((height, width), dtype=bool)
        for x, y in obstacles:
            if 0 <= x < width and 0 <= y < height and (x, y) != (goal.x, goal.y):
                tiles[y, x] = False
        return cls(width, height, goal, tiles)

    @classmethod
    def scatter_obstacles(
        cls,
        width: int,
        height: int,
        goal: Optional[Position] = None,
        density: float = 0.0,
        rng: Optional[np.random.Generator] = None,
    ) -> Grid:
        """
        Grid with randomly scattered obstacles.

        Every cell except the start (0, 0) and the goal is blocked
        independently with probability `density`.
        """
        if not 0.0 <= density < 1.0:
            raise ValueError(f"Obstacle density must be in [0, 1), got {density}")

        goal = goal if goal is not None else Position(width - 1, height - 1)
        rng = resolve(rng)

        # One Bernoulli trial per cell, row-major
        tiles = rng.random((height, width)) >= density
        if 0 <= START.x < width and 0 <= START.y < height:
            tiles[START.y, START.x] = True
        return cls(width, height, goal, tiles)

    # ==================== Queries ====================

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        """False for out-of-bounds or blocked cells, True otherwise."""
        if not self.in_bounds(x, y):
            return False
        return bool(self._tiles[y, x])

    def walkable_neighbors(self, pos: Position) -> List[Position]:
        """Walkable orthogonal neighbors in left, right, up, down order."""
        return [n for n in pos.neighbors() if self.is_walkable(n.x, n.y)]

    def random_walkable_neighbor(
        self,
        x: int,
        y: int,
        rng: Optional[np.random.Generator] = None,
    ) -> Optional[Position]:
        """A uniformly chosen walkable neighbor, or None if boxed in."""
        candidates = self.walkable_neighbors(Position(x, y))
        if not candidates:
            return None
        rng = resolve(rng)
        return candidates[int(rng.integers(len(candidates)))]

    def walkable_count(self) -> int:
        return int(self._tiles.sum())

    @property
    def tiles(self) -> np.ndarray:
        """Read-only view of the walkability matrix."""
        return self._tiles

    def __repr__(self) -> str:
        blocked = self.width * self.height - self.walkable_count()
        return (
            f"Grid({self.width}x{self.height}, "
            f"goal={self.goal}, "
            f"blocked={blocked})"
        )
