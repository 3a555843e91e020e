"""
cognitive_grid/experiments/metrics.py

Episode records and their persistence.

One row per episode: how long it took, whether it worked, and what
was left in the tank.
"""

from __future__ import annotations

import csv
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import numpy as np


@dataclass
class EpisodeLog:
    """Summary of a single episode."""
    episode: int
    agent_type: str
    steps: int
    success: bool
    energy_remaining: int  # 0 for agents without energy
    stuck: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize(logs: list[EpisodeLog]) -> dict[str, Any]:
    """Aggregate statistics over a batch of episodes."""
    if not logs:
        return {
            "episodes": 0,
            "success_rate": 0.0,
            "stuck_rate": 0.0,
            "mean_steps": 0.0,
            "mean_steps_success": None,
            "mean_energy": 0.0,
        }

    steps = np.array([log.steps for log in logs], dtype=np.float64)
    success = np.array([log.success for log in logs], dtype=bool)
    stuck = np.array([log.stuck for log in logs], dtype=bool)
    energy = np.array([log.energy_remaining for log in logs], dtype=np.float64)

    return {
        "episodes": len(logs),
        "success_rate": float(success.mean()),
        "stuck_rate": float(stuck.mean()),
        "mean_steps": float(steps.mean()),
        "mean_steps_success": float(steps[success].mean()) if success.any() else None,
        "mean_energy": float(energy.mean()),
    }


def write_episode_logs_csv(path: str | Path, logs: list[EpisodeLog]) -> Path:
    """Create or overwrite a CSV file with one row per episode."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=[fld.name for fld in fields(EpisodeLog)])
        writer.writeheader()
        for log in logs:
            writer.writerow(log.to_dict())

    return path
