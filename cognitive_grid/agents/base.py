"""
agents/base.py

What every agent offers the outside world, and nothing more.

Renderers, demo loops and experiment harnesses may look, but they may
not touch. The only way to change an agent is to let it live one tick.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional
import numpy as np

from cognitive_grid.core.memory import SpatialMemory
from cognitive_grid.core.position import Position
from cognitive_grid.core.rng import resolve

if TYPE_CHECKING:
    from cognitive_grid.core.grid import Grid

MAX_ENERGY = 100


def clamp_energy(value: int) -> int:
    return max(0, min(MAX_ENERGY, value))


@dataclass(frozen=True)
class TickOutcome:
    """What happened to an agent during one tick."""
    moved: bool = False
    noise_triggered: bool = False


IDLE = TickOutcome()


@dataclass
class CognitionConfig:
    """
    The limits of a mind.
    Set at birth, honored throughout life.
    """
    noise: float = 0.0                        # Base chance of a random step
    exploration_rate: float = 1.0             # Scales noise, in (0, 1]
    decay_rate: float = 1.0                   # Per-tick shrink of exploration_rate
    memory_capacity: int = 0                  # Cells remembered (0 = none)
    max_expansions: Optional[int] = None      # Planning budget (search agent only)

    def __post_init__(self):
        if not 0.0 <= self.noise <= 1.0:
            raise ValueError(f"noise must be in [0, 1], got {self.noise}")
        if not 0.0 < self.exploration_rate <= 1.0:
            raise ValueError(
                f"exploration_rate must be in (0, 1], got {self.exploration_rate}"
            )
        if not 0.0 < self.decay_rate <= 1.0:
            raise ValueError(f"decay_rate must be in (0, 1], got {self.decay_rate}")
        if self.memory_capacity < 0:
            raise ValueError(
                f"memory_capacity must be >= 0, got {self.memory_capacity}"
            )
        if self.max_expansions is not None and self.max_expansions < 1:
            raise ValueError(
                f"max_expansions must be >= 1, got {self.max_expansions}"
            )


class Agent(ABC):
    """
    Uniform capability interface over all agent strategies.

    Defaults cover the optional parts of the contract; concrete agents
    override what they actually track.
    """

    def __init__(
        self,
        start: Position,
        rng: Optional[np.random.Generator] = None,
    ):
        self.pos = start
        self._rng = rng
        self._last_outcome = IDLE

    @abstractmethod
    def update(self, grid: Grid) -> TickOutcome:
        """Advance exactly one tick."""

    @abstractmethod
    def name(self) -> str:
        """Short human-readable label for the strategy."""

    def position(self) -> Position:
        return self.pos

    def is_stuck(self) -> bool:
        return False

    def energy(self) -> Optional[int]:
        return None

    def debug_state(self) -> str:
        return ""

    def did_noise_trigger(self) -> bool:
        """Whether the most recent tick was overridden by noise."""
        return self._last_outcome.noise_triggered

    def planning_radius(self) -> Optional[float]:
        return None

    @property
    def rng(self) -> np.random.Generator:
        return resolve(self._rng)

    def _finish(self, outcome: TickOutcome) -> TickOutcome:
        self._last_outcome = outcome
        return outcome

    def __repr__(self) -> str:
        return f"{type(self).__name__}(pos={self.pos}, state={self.debug_state()!r})"


class CognitiveAgent(Agent):
    """
    An agent with a bounded, noisy, forgetful mind.

    Shared by the search and FSM strategies:
    - Spatial memory of recently visited cells
    - A noise probability that can hijack a tick with a random step
    - An exploration rate that decays multiplicatively every tick
    """

    def __init__(
        self,
        start: Position,
        config: Optional[CognitionConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        super().__init__(start, rng)
        self.config = config or CognitionConfig()
        self.noise = self.config.noise
        self.exploration_rate = self.config.exploration_rate
        self.decay_rate = self.config.decay_rate
        self.memory = SpatialMemory(self.config.memory_capacity)

    def _housekeeping(self) -> None:
        """Remember where we stand; let curiosity fade a little."""
        self.memory.record(self.pos)
        self.exploration_rate *= self.decay_rate

    def _noise_step(self, grid: Grid) -> Optional[Position]:
        """
        Roll for noise. If it fires and a walkable neighbor exists,
        return that neighbor; otherwise None.
        """
        if self.rng.random() >= self.noise * self.exploration_rate:
            return None
        return grid.random_walkable_neighbor(self.pos.x, self.pos.y, rng=self.rng)
