from __future__ import annotations

import argparse
import csv
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World
from ..sim.types.metrics import TickMetrics

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "neighbor_checks",
    "neighbor_links",
    "avoidance_pairs",
    "retargeted",
    "commanded",
    "moving",
    "avg_speed",
    "tick_ms",
]


def _format_row(metrics: TickMetrics, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.population,
        metrics.neighbor_checks,
        metrics.neighbor_links,
        metrics.avoidance_pairs,
        metrics.retargeted,
        int(metrics.commanded),
        metrics.moving,
        f"{metrics.average_speed:.4f}",
        f"{tick_ms:.3f}",
    ]


def run_headless(
    steps: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    config: Optional[SimulationConfig] = None,
    population: Optional[int] = None,
    target: Optional[Sequence[float]] = None,
    final_state_path: Optional[Path] = None,
) -> World:
    config = config if config is not None else SimulationConfig()
    overrides = {}
    if seed is not None:
        overrides["seed"] = seed
    if population is not None:
        overrides["population"] = population
    if overrides:
        config = replace(config, **overrides)
    world = World(config)
    if target is not None:
        world.set_target(float(target[0]), float(target[1]))

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    try:
        for tick in range(steps):
            metrics = world.step(tick)
            if writer:
                tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    logger.info("Ran %d ticks with %d agents (seed=%d)", steps, len(world.agents), config.seed)

    if final_state_path:
        snapshot = world.snapshot(steps)
        Path(final_state_path).write_text(json.dumps({"tick": snapshot.tick, "agents": snapshot.agents}, indent=2))
    return world


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Headless flock simulation")
    parser.add_argument("--steps", type=int, default=600)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--population", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation settings")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument(
        "--final-state",
        type=Path,
        default=None,
        help="Optional JSON file to write agent positions after the last tick.",
    )
    parser.add_argument(
        "--target",
        type=float,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Send every agent to this point before the first tick.",
    )
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = SimulationConfig.from_yaml(args.config) if args.config else None
    run_headless(
        args.steps,
        args.seed,
        args.log,
        deterministic_log=args.deterministic_log,
        config=config,
        population=args.population,
        target=args.target,
        final_state_path=args.final_state,
    )


if __name__ == "__main__":
    main()
