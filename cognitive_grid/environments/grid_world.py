"""
environments/grid_world.py

One board, one goal, any number of minds.

Agents share the grid but never block each other: each tick every
agent lives once, in the order it was added, and none of them sees
where the others stand.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from cognitive_grid.agents.base import Agent, TickOutcome
from cognitive_grid.core.grid import Grid
from cognitive_grid.core.position import Position

logger = logging.getLogger(__name__)


class GridWorld:
    """
    Tick driver for one or many agents on a shared, read-only grid.

    Features:
    - Fixed update order (insertion order)
    - Step counter
    - Goal / stuck queries
    - ASCII rendering
    """

    def __init__(self, grid: Grid, agents: Optional[Sequence[Agent]] = None):
        self.grid = grid
        self.agents: List[Agent] = list(agents or [])
        self.step_count = 0

    def add_agent(self, agent: Agent) -> Agent:
        self.agents.append(agent)
        return agent

    # ==================== Stepping ====================

    def step(self) -> List[TickOutcome]:
        """Advance every agent by exactly one tick."""
        outcomes = [agent.update(self.grid) for agent in self.agents]
        self.step_count += 1
        return outcomes

    def is_finished(self) -> bool:
        """True once every agent is at the goal or stuck."""
        return all(
            agent.position() == self.grid.goal or agent.is_stuck()
            for agent in self.agents
        )

    def run(self, max_steps: int) -> int:
        """
        Step until every agent is done (at goal or stuck) or the budget
        runs out. Returns the number of steps taken in this call.
        """
        taken = 0
        while taken < max_steps and not self.is_finished():
            self.step()
            taken += 1
        logger.debug(
            f"GridWorld: ran {taken} steps, {self.done_count()}/"
            f"{len(self.agents)} at goal"
        )
        return taken

    # ==================== Queries ====================

    def agent_at_goal(self, index: int = 0) -> bool:
        if not 0 <= index < len(self.agents):
            return False
        return self.agents[index].position() == self.grid.goal

    def done_count(self) -> int:
        return sum(1 for a in self.agents if a.position() == self.grid.goal)

    def any_at_goal(self) -> bool:
        return self.done_count() > 0

    def all_at_goal(self) -> bool:
        return self.done_count() == len(self.agents)

    def is_agent_stuck(self, index: int = 0) -> bool:
        if not 0 <= index < len(self.agents):
            return False
        return self.agents[index].is_stuck()

    # ==================== Observation ====================

    def render(self) -> str:
        """
        ASCII snapshot: A agent, G goal, # blocked, . free.
        """
        occupied = {a.position() for a in self.agents}
        lines = [f"Step {self.step_count}"]
        for y in range(self.grid.height):
            row = []
            for x in range(self.grid.width):
                pos = Position(x, y)
                if pos in occupied:
                    row.append("A")
                elif pos == self.grid.goal:
                    row.append("G")
                elif self.grid.is_walkable(x, y):
                    row.append(".")
                else:
                    row.append("#")
            lines.append(" ".join(row))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"GridWorld(agents={len(self.agents)}, "
            f"step={self.step_count}, "
            f"at_goal={self.done_count()})"
        )
