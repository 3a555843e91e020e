"""
agents/behavior_tree.py

A plan is a tree of small questions and small deeds.

Sequence: do all of these, stop at the first that fails.
Selector: try these in turn, stop at the first that works.
Condition: ask. Action: act.

The tree is fixed at construction and walked top-down once per tick.
Leaves are plain callables that receive the agent and the grid.

Inspired by:
- Behavior trees in game AI (Halo 2, Unreal)
- Subsumption architecture
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING, Callable, List, Optional, Union
import numpy as np

from cognitive_grid.core.position import Position, manhattan
from .base import Agent, TickOutcome, clamp_energy

if TYPE_CHECKING:
    from cognitive_grid.core.grid import Grid

logger = logging.getLogger(__name__)

HUNGER_THRESHOLD = 50
EAT_GAIN = 20
MOVE_COST = 1
WANDER_ATTEMPTS = 8


class Status(Enum):
    SUCCESS = "Success"
    FAILURE = "Failure"
    RUNNING = "Running"


Predicate = Callable[["BehaviorTreeAgent", "Grid"], bool]
Mutator = Callable[["BehaviorTreeAgent", "Grid"], Status]


@dataclass
class Sequence:
    """Fails (or keeps running) on the first child that does; else succeeds."""
    children: List[Node] = field(default_factory=list)
    name: str = "Sequence"

    def tick(self, agent: BehaviorTreeAgent, grid: Grid) -> Status:
        for child in self.children:
            status = child.tick(agent, grid)
            if status != Status.SUCCESS:
                return status
        return Status.SUCCESS


@dataclass
class Selector:
    """Succeeds (or keeps running) on the first child that does; else fails."""
    children: List[Node] = field(default_factory=list)
    name: str = "Selector"

    def tick(self, agent: BehaviorTreeAgent, grid: Grid) -> Status:
        for child in self.children:
            status = child.tick(agent, grid)
            if status != Status.FAILURE:
                return status
        return Status.FAILURE


@dataclass
class Condition:
    predicate: Predicate
    name: str = "Condition"

    def tick(self, agent: BehaviorTreeAgent, grid: Grid) -> Status:
        return Status.SUCCESS if self.predicate(agent, grid) else Status.FAILURE


@dataclass
class Action:
    mutator: Mutator
    name: str = "Action"

    def tick(self, agent: BehaviorTreeAgent, grid: Grid) -> Status:
        status = self.mutator(agent, grid)
        logger.debug(f"BT: {self.name} -> {status.value}")
        return status


Node = Union[Sequence, Selector, Condition, Action]


def tick(node: Node, agent: BehaviorTreeAgent, grid: Grid) -> Status:
    """Evaluate a tree once, top-down."""
    return node.tick(agent, grid)


# ==================== Default Tree Leaves ====================

def is_hungry(agent: BehaviorTreeAgent, grid: Grid) -> bool:
    return agent.energy_level < HUNGER_THRESHOLD


def move_toward_goal(agent: BehaviorTreeAgent, grid: Grid) -> Status:
    """
    Greedy step toward the goal; eat when already there.

    Only strictly improving neighbors count. Among them the one with the
    smallest distance wins, first found on ties.
    """
    if agent.pos == grid.goal:
        before = agent.energy_level
        agent.energy_level = clamp_energy(agent.energy_level + EAT_GAIN)
        logger.debug(f"BT: at goal, recovering energy {before} -> {agent.energy_level}")
        return Status.SUCCESS

    current_h = manhattan(agent.pos, grid.goal)
    best: Optional[Position] = None
    best_h = current_h

    for candidate in agent.pos.neighbors():
        if not grid.is_walkable(candidate.x, candidate.y):
            continue
        h = manhattan(candidate, grid.goal)
        if h < best_h:
            best = candidate
            best_h = h

    if best is None:
        return Status.FAILURE

    agent.pos = best
    agent.energy_level = clamp_energy(agent.energy_level - MOVE_COST)
    return Status.SUCCESS


def wander(agent: BehaviorTreeAgent, grid: Grid) -> Status:
    """Up to WANDER_ATTEMPTS random directions; take the first that is open."""
    for _ in range(WANDER_ATTEMPTS):
        direction = int(agent.rng.integers(4))
        candidate = agent.pos.neighbors()[direction]
        if grid.is_walkable(candidate.x, candidate.y):
            agent.pos = candidate
            agent.energy_level = clamp_energy(agent.energy_level - MOVE_COST)
            return Status.SUCCESS
    return Status.FAILURE


def default_tree() -> Node:
    """Selector[ Sequence[IsHungry, MoveTowardGoal], Wander ]"""
    return Selector(
        [
            Sequence(
                [
                    Condition(is_hungry, name="IsHungry"),
                    Action(move_toward_goal, name="MoveTowardGoal"),
                ],
                name="SeekFood",
            ),
            Action(wander, name="Wander"),
        ],
        name="Root",
    )


class BehaviorTreeAgent(Agent):
    """
    Agent driven by a fixed behavior tree.

    There is no terminal state: reaching the goal is observable only
    by comparing position with the goal.
    """

    def __init__(
        self,
        start: Position,
        tree: Optional[Node] = None,
        rng: Optional[np.random.Generator] = None,
        energy: int = 100,
    ):
        super().__init__(start, rng)
        self.root = tree if tree is not None else default_tree()
        self.energy_level = clamp_energy(energy)
        self.last_status: Optional[Status] = None

    def update(self, grid: Grid) -> TickOutcome:
        before = self.pos
        self.last_status = tick(self.root, self, grid)
        logger.debug(
            f"BT tick -> {self.last_status.value} | pos={self.pos} | "
            f"energy={self.energy_level}"
        )
        return self._finish(TickOutcome(moved=self.pos != before))

    def name(self) -> str:
        return "BehaviorTree"

    def energy(self) -> Optional[int]:
        return self.energy_level

    def debug_state(self) -> str:
        if self.last_status is None:
            return "Idle"
        return self.last_status.value
