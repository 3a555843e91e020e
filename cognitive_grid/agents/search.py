"""
agents/search.py

Think, then walk. Think again when the plan runs out.

The search agent plans with A* under an optional expansion budget and
walks its plan one cell per tick. A budgeted plan may stop short of the
goal; the agent walks it anyway and plans again from where it ends up.
If the goal is provably unreachable, the agent gives up for good.
"""

from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING, List, Optional
import numpy as np

from cognitive_grid.algorithms.astar import find_path
from cognitive_grid.core.position import Position
from .base import CognitionConfig, CognitiveAgent, TickOutcome

if TYPE_CHECKING:
    from cognitive_grid.core.grid import Grid

logger = logging.getLogger(__name__)


class SearchAgent(CognitiveAgent):
    """
    Bounded-rationality A* agent.

    Stuck is terminal: once the planner reports no path, the agent
    never plans or moves again, even if the grid changes.

    A budget of one expansion closes only the start cell, so every plan
    is `[start]`. Such an agent re-plans in place on every tick and
    never moves, yet it is not stuck: only an unreachable goal makes
    it give up.
    """

    def __init__(
        self,
        start: Position,
        config: Optional[CognitionConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        super().__init__(start, config, rng)
        self.max_expansions = self.config.max_expansions
        self.path: List[Position] = []
        self.path_index = 0
        self.stuck = False
        self.plans_made = 0

    def update(self, grid: Grid) -> TickOutcome:
        if self.stuck or self.pos == grid.goal:
            return self._finish(TickOutcome())

        self._housekeeping()

        noisy = self._noise_step(grid)
        if noisy is not None:
            logger.debug(f"A* agent: noise! {self.pos} -> {noisy}, dropping plan")
            self.pos = noisy
            self._drop_plan()
            return self._finish(TickOutcome(moved=True, noise_triggered=True))

        if not self.path or self.path_index + 1 >= len(self.path):
            if not self._plan(grid):
                return self._finish(TickOutcome())

        if self.path_index + 1 < len(self.path):
            self.path_index += 1
            self.pos = self.path[self.path_index]
            logger.debug(f"A* agent: moving to {self.pos}")
            return self._finish(TickOutcome(moved=True))

        # A budgeted plan that never left the start cell (always so at budget 1)
        return self._finish(TickOutcome())

    def _plan(self, grid: Grid) -> bool:
        path = find_path(self.pos, grid.goal, grid, self.max_expansions)
        self.plans_made += 1

        if path is None:
            logger.info(f"A* agent: no path from {self.pos} to {grid.goal}, giving up")
            self.stuck = True
            self._drop_plan()
            return False

        self.path = path
        self.path_index = 0
        return True

    def _drop_plan(self) -> None:
        self.path = []
        self.path_index = 0

    # ==================== Capabilities ====================

    def name(self) -> str:
        return "AStar"

    def is_stuck(self) -> bool:
        return self.stuck

    def debug_state(self) -> str:
        if self.stuck:
            return "Stuck"
        return f"Path len: {len(self.path)}"

    def planning_radius(self) -> Optional[float]:
        """
        Radius of the Manhattan diamond that `max_expansions` cells
        would fill (a diamond of radius r holds about 2r^2 cells).
        """
        if self.max_expansions is None:
            return None
        return math.sqrt(self.max_expansions / 2)
