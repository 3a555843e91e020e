"""
algorithms/astar.py

Thinking has a price. Pay it, or settle.

A* over 4-connected cells with unit step cost and the Manhattan
heuristic. Given a budget of node expansions, the search stops when the
budget is spent and returns the path to the most promising cell it has
seen: progress, not perfection.

Inspired by:
- Hart, Nilsson & Raphael (1968)
- Simon's bounded rationality
- Anytime search
"""

from __future__ import annotations
from enum import Enum
import heapq
import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple

from cognitive_grid.core.position import Position, manhattan

if TYPE_CHECKING:
    from cognitive_grid.core.grid import Grid

logger = logging.getLogger(__name__)


class PlanStatus(Enum):
    """The three outcomes a caller must tell apart."""
    COMPLETE = "complete"        # Path ends at the goal
    PARTIAL = "partial"          # Budget ran out; path ends short of the goal
    UNREACHABLE = "unreachable"  # No path (or start/goal blocked)


def find_path(
    start: Position,
    goal: Position,
    grid: Grid,
    max_expansions: Optional[int] = None,
) -> Optional[List[Position]]:
    """
    Plan a path from `start` to `goal`, both endpoints included.

    Returns None when start or goal is not walkable, or when the open
    set empties without reaching the goal.

    With `max_expansions`, the search stops once that many nodes have
    been closed and returns the path to the closed node nearest the
    goal by heuristic (ties: first found). Such a path is non-empty
    and does not end at the goal.
    """
    if max_expansions is not None and max_expansions < 1:
        raise ValueError(f"max_expansions must be >= 1, got {max_expansions}")

    if not grid.is_walkable(start.x, start.y) or not grid.is_walkable(goal.x, goal.y):
        logger.debug(f"A*: start {start} or goal {goal} not walkable")
        return None

    # Heap entries: (f, h, insertion order, position)
    # Lower f first, then lower h, then earlier insertion.
    start_h = manhattan(start, goal)
    open_set: List[Tuple[int, int, int, Position]] = [(start_h, start_h, 0, start)]
    counter = 1

    came_from: Dict[Position, Position] = {}
    g_score: Dict[Position, int] = {start: 0}
    closed: Set[Position] = set()

    # Best (closest-to-goal) closed node, for partial paths
    best_pos = start
    best_h = start_h

    expansions = 0

    while open_set:
        _, _, _, current = heapq.heappop(open_set)

        if current == goal:
            path = reconstruct_path(came_from, current)
            logger.debug(
                f"A*: planned {start} -> {goal}, length {len(path)}, "
                f"{expansions} expansions"
            )
            return path

        if current in closed:
            continue
        closed.add(current)
        expansions += 1

        h = manhattan(current, goal)
        if h < best_h:
            best_h = h
            best_pos = current

        # Bounded rationality: the budget is checked only after closing
        if max_expansions is not None and expansions >= max_expansions:
            path = reconstruct_path(came_from, best_pos)
            logger.debug(
                f"A*: budget of {max_expansions} spent, partial path to "
                f"{best_pos} (h={best_h}), length {len(path)}"
            )
            return path

        tentative_g = g_score[current] + 1

        for neighbor in current.neighbors():
            if not grid.is_walkable(neighbor.x, neighbor.y):
                continue
            if neighbor in closed:
                continue

            if tentative_g < g_score.get(neighbor, float("inf")):
                g_score[neighbor] = tentative_g
                came_from[neighbor] = current
                neighbor_h = manhattan(neighbor, goal)
                heapq.heappush(
                    open_set,
                    (tentative_g + neighbor_h, neighbor_h, counter, neighbor)
                )
                counter += 1

    logger.debug(f"A*: no path from {start} to {goal}")
    return None


def reconstruct_path(
    came_from: Dict[Position, Position],
    end: Position,
) -> List[Position]:
    """Follow predecessors back from `end`, then reverse."""
    path = [end]
    current = end
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def classify_path(path: Optional[List[Position]], goal: Position) -> PlanStatus:
    """Name the outcome of a find_path call."""
    if path is None:
        return PlanStatus.UNREACHABLE
    if path and path[-1] == goal:
        return PlanStatus.COMPLETE
    return PlanStatus.PARTIAL
