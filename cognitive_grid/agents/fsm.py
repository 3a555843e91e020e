"""
agents/fsm.py

Explore until tired. Rest until whole. Stop when home.

A three-state controller whose only deliberation is its state. Movement
is random, nudged toward unvisited cells when memory allows, and now
and then hijacked by noise.

Inspired by:
- Foraging/resting cycles in animals
- Classic game AI state machines
"""

from __future__ import annotations
from enum import Enum
import logging
from typing import TYPE_CHECKING, Optional
import numpy as np

from cognitive_grid.core.position import Position
from .base import CognitionConfig, CognitiveAgent, TickOutcome, clamp_energy

if TYPE_CHECKING:
    from cognitive_grid.core.grid import Grid

logger = logging.getLogger(__name__)

LOW_ENERGY = 10
REST_GAIN = 10
MOVE_COST = 1


class FSMState(Enum):
    EXPLORING = "Exploring"
    RESTING = "Resting"
    FOUND_GOAL = "FoundGoal"


class Action(Enum):
    MOVE_RANDOMLY = "MoveRandomly"
    REST = "Rest"
    NONE = "None"


class FSMAgent(CognitiveAgent):
    """
    Finite-state controller agent.

    States: Exploring (start), Resting, FoundGoal (terminal).
    Energy starts full and lives in [0, 100].
    """

    def __init__(
        self,
        start: Position,
        config: Optional[CognitionConfig] = None,
        rng: Optional[np.random.Generator] = None,
        energy: int = 100,
    ):
        super().__init__(start, config, rng)
        self.state = FSMState.EXPLORING
        self._energy = clamp_energy(energy)

    # ==================== Decision ====================

    def decide_next_action(self, grid: Grid) -> Action:
        """Pure function of state, energy and goal-reached."""
        if self.state == FSMState.FOUND_GOAL or self.pos == grid.goal:
            return Action.NONE

        if self.state == FSMState.EXPLORING:
            if self._energy < LOW_ENERGY:
                return Action.REST
            return Action.MOVE_RANDOMLY

        # While resting we don't move; the transition back to Exploring
        # happens at the start of a tick once energy is full.
        return Action.REST

    # ==================== Core Loop ====================

    def update(self, grid: Grid) -> TickOutcome:
        self._housekeeping()

        if self.pos == grid.goal and self.state != FSMState.FOUND_GOAL:
            self.state = FSMState.FOUND_GOAL
            logger.info(f"FSM: reached goal at {self.pos} -> FoundGoal")
            return self._finish(TickOutcome())

        self._transition()

        action = self.decide_next_action(grid)
        if action == Action.NONE:
            return self._finish(TickOutcome())

        # Noise overrides whatever was chosen
        noisy = self._noise_step(grid)
        if noisy is not None:
            logger.debug(f"FSM: noise! {self.pos} -> {noisy}")
            self.pos = noisy
            self._energy = clamp_energy(self._energy - MOVE_COST)
            return self._finish(TickOutcome(moved=True, noise_triggered=True))

        if action == Action.MOVE_RANDOMLY:
            moved = self._move_randomly(grid)
            return self._finish(TickOutcome(moved=moved))

        self._rest()
        return self._finish(TickOutcome())

    def _transition(self) -> None:
        if self.state == FSMState.EXPLORING and self._energy < LOW_ENERGY:
            self.state = FSMState.RESTING
            logger.info(f"FSM: energy low ({self._energy}), Exploring -> Resting")
        elif self.state == FSMState.RESTING and self._energy >= 100:
            self.state = FSMState.EXPLORING
            logger.info(f"FSM: energy full ({self._energy}), Resting -> Exploring")

    # ==================== Actions ====================

    def _move_randomly(self, grid: Grid) -> bool:
        """
        Step to a random walkable neighbor, preferring ones not in memory.

        When every neighbor is remembered, all of them are candidates.
        """
        candidates = grid.walkable_neighbors(self.pos)
        if not candidates:
            return False

        novel = [c for c in candidates if not self.memory.contains(c)]
        pool = novel if novel else candidates

        target = pool[int(self.rng.integers(len(pool)))]
        self.pos = target
        self._energy = clamp_energy(self._energy - MOVE_COST)
        logger.debug(f"FSM: exploring -> {target}, energy={self._energy}")
        return True

    def _rest(self) -> None:
        before = self._energy
        self._energy = clamp_energy(self._energy + REST_GAIN)
        logger.debug(f"FSM: resting at {self.pos}, energy {before} -> {self._energy}")

    # ==================== Capabilities ====================

    def name(self) -> str:
        return "FSM"

    def energy(self) -> Optional[int]:
        return self._energy

    def debug_state(self) -> str:
        return f"{self.state.value} (energy {self._energy})"
