"""
cognitive_grid/experiments/runner.py

Batch experiment runner.

For each configuration:
1. Scatter obstacles on a fresh grid (start top-left, goal bottom-right)
2. Drop one agent at the start
3. Tick until it reaches the goal, gets stuck, or the budget runs out
4. Record one EpisodeLog

The runner only calls update() and the read accessors; it never
reaches into an agent.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

import numpy as np
import yaml

from cognitive_grid.agents.base import Agent, CognitionConfig
from cognitive_grid.agents.behavior_tree import BehaviorTreeAgent
from cognitive_grid.agents.fsm import FSMAgent
from cognitive_grid.agents.search import SearchAgent
from cognitive_grid.core.grid import START, Grid
from cognitive_grid.core.position import Position

from .metrics import EpisodeLog, summarize, write_episode_logs_csv

logger = logging.getLogger(__name__)


class AgentType(Enum):
    FSM = "fsm"
    ASTAR = "astar"
    BEHAVIOR_TREE = "behavior_tree"

    @classmethod
    def parse(cls, value: str | AgentType) -> AgentType:
        if isinstance(value, cls):
            return value
        key = str(value).lower().replace("-", "_")
        for member in cls:
            if member.value == key:
                return member
        raise ValueError(f"Unknown agent type: {value}")


def make_agent(
    agent_type: AgentType,
    start: Position = START,
    cognition: CognitionConfig | None = None,
    rng: np.random.Generator | None = None,
) -> Agent:
    """Build a fresh agent of the requested kind."""
    if agent_type == AgentType.FSM:
        return FSMAgent(start, cognition, rng=rng)
    if agent_type == AgentType.ASTAR:
        return SearchAgent(start, cognition, rng=rng)
    if agent_type == AgentType.BEHAVIOR_TREE:
        return BehaviorTreeAgent(start, rng=rng)
    raise ValueError(f"Unknown agent type: {agent_type}")


@dataclass
class ExperimentConfig:
    """Configuration for a batch of episodes."""
    name: str = "default"
    episodes: int = 100
    grid_width: int = 10
    grid_height: int = 5
    obstacle_density: float = 0.0      # Chance a non-start/non-goal cell is blocked
    agent_type: AgentType = AgentType.ASTAR
    max_steps: int = 500               # Budget before an episode counts as failed

    # Agent cognition
    cognition: CognitionConfig = field(default_factory=CognitionConfig)

    # Random seed (None = fresh entropy)
    seed: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExperimentConfig:
        data = dict(data)
        cognition_data = data.pop("cognition", {}) or {}
        _reject_unknown_keys(cls, data, "experiment")
        _reject_unknown_keys(CognitionConfig, cognition_data, "cognition")
        cognition = CognitionConfig(**cognition_data)
        if "agent_type" in data:
            data["agent_type"] = AgentType.parse(data["agent_type"])
        return cls(cognition=cognition, **data)


def _reject_unknown_keys(config_cls: type, data: dict[str, Any], label: str) -> None:
    unknown = sorted(set(data) - {f.name for f in fields(config_cls)})
    if unknown:
        raise ValueError(f"Unknown {label} config keys: {', '.join(unknown)}")


def load_experiment_configs(path: str | Path) -> list[ExperimentConfig]:
    """
    Load a sweep from YAML.

    The file holds either a single mapping or a list of mappings under
    `experiments`. Keys under `defaults` apply to every entry.
    """
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if "experiments" not in raw:
        return [ExperimentConfig.from_dict(raw)]

    defaults = raw.get("defaults", {}) or {}
    configs = []
    for entry in raw["experiments"]:
        merged = {**defaults, **entry}
        merged["cognition"] = {
            **(defaults.get("cognition") or {}),
            **(entry.get("cognition") or {}),
        }
        configs.append(ExperimentConfig.from_dict(merged))
    return configs


def make_grid(config: ExperimentConfig, rng: np.random.Generator) -> Grid:
    goal = Position(config.grid_width - 1, config.grid_height - 1)
    return Grid.scatter_obstacles(
        config.grid_width,
        config.grid_height,
        goal,
        density=config.obstacle_density,
        rng=rng,
    )


def run_single_episode(
    config: ExperimentConfig,
    episode_idx: int,
    rng: np.random.Generator | None = None,
) -> EpisodeLog:
    rng = rng if rng is not None else np.random.default_rng()
    grid = make_grid(config, rng)
    agent = make_agent(config.agent_type, START, config.cognition, rng=rng)

    steps = 0
    success = False
    while steps < config.max_steps:
        if agent.position() == grid.goal:
            success = True
            break
        if agent.is_stuck():
            break
        agent.update(grid)
        steps += 1
    else:
        success = agent.position() == grid.goal

    return EpisodeLog(
        episode=episode_idx,
        agent_type=agent.name(),
        steps=steps,
        success=success,
        energy_remaining=agent.energy() or 0,
        stuck=agent.is_stuck(),
    )


def run_batch(config: ExperimentConfig) -> list[EpisodeLog]:
    """Run every episode of a configuration and collect the logs."""
    rng = np.random.default_rng(config.seed)
    logs = [run_single_episode(config, i, rng) for i in range(config.episodes)]

    stats = summarize(logs)
    logger.info(
        f"[{config.name}] {config.agent_type.value}: "
        f"{stats['episodes']} episodes, "
        f"success={stats['success_rate']:.2%}, "
        f"mean_steps={stats['mean_steps']:.1f}"
    )
    return logs


def run_batch_and_save(
    config: ExperimentConfig,
    out_dir: str | Path = "experiments/data",
) -> Path:
    """
    Run a batch and save it to `<out_dir>/<timestamp>_<name>_results.csv`.

    Returns the path of the written file.
    """
    logs = run_batch(config)
    filename = f"{int(time.time())}_{config.name}_results.csv"
    path = write_episode_logs_csv(Path(out_dir) / filename, logs)
    logger.info(f"Saved {len(logs)} episodes to {path}")
    return path
