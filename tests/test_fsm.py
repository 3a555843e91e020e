"""
Tests for agents/fsm.py

Explore until tired. Rest until whole. Stop when home.
"""

import numpy as np
import pytest

from cognitive_grid.agents.base import CognitionConfig
from cognitive_grid.agents.fsm import Action, FSMAgent, FSMState
from cognitive_grid.core.grid import Grid
from cognitive_grid.core.position import Position


@pytest.fixture
def open_grid():
    return Grid(5, 5, Position(4, 4))


@pytest.fixture
def rng():
    return np.random.default_rng(42)


class TestDecision:
    """Tests for decide_next_action."""

    def test_initial_state(self):
        agent = FSMAgent(Position(0, 0))
        assert agent.state == FSMState.EXPLORING
        assert agent.energy() == 100
        assert agent.name() == "FSM"

    def test_exploring_with_energy_moves(self, open_grid):
        agent = FSMAgent(Position(0, 0))
        assert agent.decide_next_action(open_grid) == Action.MOVE_RANDOMLY

    def test_exploring_tired_rests(self, open_grid):
        agent = FSMAgent(Position(0, 0), energy=9)
        assert agent.decide_next_action(open_grid) == Action.REST

    def test_resting_rests(self, open_grid):
        agent = FSMAgent(Position(0, 0))
        agent.state = FSMState.RESTING
        assert agent.decide_next_action(open_grid) == Action.REST

    def test_found_goal_does_nothing(self, open_grid):
        agent = FSMAgent(Position(1, 1))
        agent.state = FSMState.FOUND_GOAL
        assert agent.decide_next_action(open_grid) == Action.NONE

    def test_at_goal_does_nothing(self, open_grid):
        agent = FSMAgent(Position(4, 4))
        assert agent.decide_next_action(open_grid) == Action.NONE


class TestTransitions:
    """Tests for state transitions during update."""

    def test_low_energy_switches_to_resting(self, open_grid, rng):
        agent = FSMAgent(Position(0, 0), rng=rng, energy=5)
        outcome = agent.update(open_grid)
        assert agent.state == FSMState.RESTING
        assert agent.energy() == 15
        assert not outcome.moved
        assert agent.position() == Position(0, 0)

    def test_full_energy_switches_to_exploring(self, open_grid, rng):
        agent = FSMAgent(Position(0, 0), rng=rng, energy=100)
        agent.state = FSMState.RESTING
        outcome = agent.update(open_grid)
        assert agent.state == FSMState.EXPLORING
        assert outcome.moved
        assert agent.energy() == 99

    def test_rest_cycle(self, open_grid, rng):
        """Resting at 95 tops up to 100, then the next tick explores."""
        agent = FSMAgent(Position(0, 0), rng=rng, energy=95)
        agent.state = FSMState.RESTING
        agent.update(open_grid)
        assert agent.state == FSMState.RESTING
        assert agent.energy() == 100
        agent.update(open_grid)
        assert agent.state == FSMState.EXPLORING

    def test_reaching_goal_is_terminal(self, open_grid, rng):
        agent = FSMAgent(Position(4, 4), rng=rng, energy=3)
        agent.update(open_grid)
        assert agent.state == FSMState.FOUND_GOAL
        for _ in range(20):
            outcome = agent.update(open_grid)
            assert agent.state == FSMState.FOUND_GOAL
            assert agent.position() == Position(4, 4)
            assert not outcome.moved
        assert agent.energy() == 3

    def test_found_goal_ignores_noise(self, open_grid, rng):
        config = CognitionConfig(noise=1.0)
        agent = FSMAgent(Position(4, 4), config, rng=rng)
        for _ in range(10):
            agent.update(open_grid)
        assert agent.position() == Position(4, 4)
        assert not agent.did_noise_trigger()

    def test_eventually_finds_goal(self, open_grid, rng):
        agent = FSMAgent(Position(0, 0), rng=rng)
        for _ in range(20000):
            agent.update(open_grid)
            if agent.state == FSMState.FOUND_GOAL:
                break
        assert agent.state == FSMState.FOUND_GOAL
        assert agent.position() == open_grid.goal


class TestMovement:
    """Tests for random exploration, memory and noise."""

    def test_moves_to_neighbor(self, open_grid, rng):
        agent = FSMAgent(Position(2, 2), rng=rng)
        agent.update(open_grid)
        assert agent.position() in Position(2, 2).neighbors()

    def test_prefers_unvisited(self, rng):
        grid = Grid(3, 1, Position(2, 0))
        agent = FSMAgent(Position(1, 0), CognitionConfig(memory_capacity=4), rng=rng)
        agent.memory.record(Position(0, 0))
        agent.update(grid)
        assert agent.position() == Position(2, 0)

    def test_falls_back_when_all_visited(self, rng):
        grid = Grid(3, 3, Position(2, 2))
        agent = FSMAgent(Position(1, 0), CognitionConfig(memory_capacity=8), rng=rng)
        for cell in (Position(0, 0), Position(2, 0), Position(1, 1)):
            agent.memory.record(cell)
        outcome = agent.update(grid)
        assert outcome.moved
        assert agent.position() in {Position(0, 0), Position(2, 0), Position(1, 1)}

    def test_boxed_in_does_not_move_or_pay(self, rng):
        grid = Grid.with_obstacles(3, 1, Position(2, 0), [(1, 0)])
        agent = FSMAgent(Position(0, 0), rng=rng)
        outcome = agent.update(grid)
        assert not outcome.moved
        assert agent.position() == Position(0, 0)
        assert agent.energy() == 100

    def test_noise_overrides_action(self, open_grid, rng):
        config = CognitionConfig(noise=1.0)
        agent = FSMAgent(Position(2, 2), config, rng=rng, energy=5)
        outcome = agent.update(open_grid)
        # Would have rested; noise moved it instead
        assert outcome.noise_triggered
        assert agent.did_noise_trigger()
        assert agent.position() in Position(2, 2).neighbors()
        assert agent.energy() == 4

    def test_no_noise_when_zero(self, open_grid, rng):
        agent = FSMAgent(Position(2, 2), rng=rng)
        for _ in range(50):
            assert not agent.update(open_grid).noise_triggered

    def test_decayed_exploration_silences_noise(self, open_grid, rng):
        config = CognitionConfig(noise=1.0, decay_rate=1e-9)
        agent = FSMAgent(Position(2, 2), config, rng=rng)
        # Exploration rate collapses during the first tick's housekeeping
        agent.update(open_grid)
        assert not agent.did_noise_trigger()

    def test_exploration_decays(self, open_grid, rng):
        config = CognitionConfig(exploration_rate=1.0, decay_rate=0.5)
        agent = FSMAgent(Position(0, 0), config, rng=rng)
        for _ in range(3):
            agent.update(open_grid)
        assert agent.exploration_rate == pytest.approx(0.125)

    def test_energy_stays_in_range(self, rng):
        grid = Grid(20, 20, Position(19, 19))
        agent = FSMAgent(Position(0, 0), CognitionConfig(noise=0.3), rng=rng)
        for _ in range(500):
            agent.update(grid)
            assert 0 <= agent.energy() <= 100
            pos = agent.position()
            assert grid.is_walkable(pos.x, pos.y)

    def test_memory_records_positions(self, open_grid, rng):
        agent = FSMAgent(Position(0, 0), CognitionConfig(memory_capacity=3), rng=rng)
        for _ in range(10):
            agent.update(open_grid)
        assert 0 < len(agent.memory) <= 3


class TestCognitionConfig:
    """Limits that make no sense are refused at birth."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"noise": -0.1},
            {"noise": 1.5},
            {"exploration_rate": 0.0},
            {"exploration_rate": 1.2},
            {"decay_rate": 0.0},
            {"decay_rate": -0.5},
            {"decay_rate": 1.5},
            {"memory_capacity": -1},
            {"max_expansions": 0},
        ],
    )
    def test_out_of_range_rejected(self, kwargs):
        with pytest.raises(ValueError):
            CognitionConfig(**kwargs)

    def test_boundaries_accepted(self):
        config = CognitionConfig(
            noise=1.0, exploration_rate=1.0, decay_rate=1.0,
            memory_capacity=0, max_expansions=1,
        )
        assert config.max_expansions == 1
