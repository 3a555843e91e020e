"""
Core components of the cognitive grid.

- position: Integer grid coordinates
- grid: The environment oracle
- memory: Bounded recency memory of visited cells
- rng: The shared random source
"""

from .position import Position, manhattan
from .grid import Grid
from .memory import SpatialMemory

__all__ = ["Position", "manhattan", "Grid", "SpatialMemory"]
