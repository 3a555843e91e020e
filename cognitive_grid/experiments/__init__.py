"""
cognitive_grid/experiments/

Batch experiments over agent strategies and cognitive limits.

The harness is a consumer of the core: it builds grids, drops agents
on them, ticks them and writes down what happened.
"""

from .metrics import EpisodeLog, summarize, write_episode_logs_csv
from .runner import (
    AgentType,
    ExperimentConfig,
    load_experiment_configs,
    make_agent,
    run_batch,
    run_batch_and_save,
    run_single_episode,
)

__all__ = [
    "EpisodeLog",
    "summarize",
    "write_episode_logs_csv",
    "AgentType",
    "ExperimentConfig",
    "load_experiment_configs",
    "make_agent",
    "run_batch",
    "run_batch_and_save",
    "run_single_episode",
]
