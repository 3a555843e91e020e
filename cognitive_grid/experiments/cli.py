"""
cognitive_grid/experiments/cli.py

Run: python -m cognitive_grid.experiments.cli --agent fsm --episodes 50

Compare bounded minds on scattered grids and write one CSV per
configuration.
"""

from __future__ import annotations

import argparse
import logging

from cognitive_grid.agents.base import CognitionConfig

from .metrics import summarize
from .runner import (
    AgentType,
    ExperimentConfig,
    load_experiment_configs,
    run_batch,
    run_batch_and_save,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cognitive Grid experiments")
    parser.add_argument("--config", default=None, help="YAML sweep file")
    parser.add_argument(
        "--agent",
        default="astar",
        choices=[t.value for t in AgentType],
        help="Agent strategy",
    )
    parser.add_argument("--episodes", type=int, default=100)
    parser.add_argument("--width", type=int, default=10)
    parser.add_argument("--height", type=int, default=5)
    parser.add_argument("--density", type=float, default=0.0, help="Obstacle density")
    parser.add_argument("--max-steps", type=int, default=500)
    parser.add_argument("--seed", type=int, default=None)

    # Cognition
    parser.add_argument("--noise", type=float, default=0.0)
    parser.add_argument("--exploration-rate", type=float, default=1.0)
    parser.add_argument("--decay-rate", type=float, default=1.0)
    parser.add_argument("--memory", type=int, default=0, help="Memory capacity")
    parser.add_argument("--max-expansions", type=int, default=None)

    parser.add_argument("--out-dir", default="experiments/data")
    parser.add_argument("--no-save", action="store_true", help="Skip writing CSV")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def config_from_args(args: argparse.Namespace) -> ExperimentConfig:
    return ExperimentConfig(
        name=args.agent,
        episodes=args.episodes,
        grid_width=args.width,
        grid_height=args.height,
        obstacle_density=args.density,
        agent_type=AgentType.parse(args.agent),
        max_steps=args.max_steps,
        seed=args.seed,
        cognition=CognitionConfig(
            noise=args.noise,
            exploration_rate=args.exploration_rate,
            decay_rate=args.decay_rate,
            memory_capacity=args.memory,
            max_expansions=args.max_expansions,
        ),
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.config:
        configs = load_experiment_configs(args.config)
    else:
        configs = [config_from_args(args)]

    for config in configs:
        if args.no_save:
            stats = summarize(run_batch(config))
            print(f"{config.name}: {stats}")
        else:
            path = run_batch_and_save(config, args.out_dir)
            print(f"{config.name}: results written to {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
