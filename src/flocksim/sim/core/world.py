from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Dict, List, Optional

from pygame.math import Vector2

from .agent import Agent
from .config import SimulationConfig, validate_config
from .rng import DeterministicRng
from .store import AgentStore
from ..systems import flocking, metrics as metrics_system, motion, neighbors, seek, targets
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata

logger = logging.getLogger(__name__)


class World:
    def __init__(self, config: SimulationConfig, rng: Optional[DeterministicRng] = None, spawn: bool = True):
        validate_config(config)
        self._config = config
        self._rng = rng if rng is not None else DeterministicRng(config.seed)
        self._store = AgentStore()
        self._deltas: Dict[int, Vector2] = {}
        self._pending_target: Vector2 | None = None
        self._metrics: TickMetrics | None = None
        self._spawn = spawn
        self._bootstrap_population()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def store(self) -> AgentStore:
        return self._store

    @property
    def agents(self) -> List[Agent]:
        return self._store.agents

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    @property
    def pending_target(self) -> Vector2 | None:
        return self._pending_target

    def reset(self) -> None:
        self._store.clear()
        self._deltas.clear()
        self._pending_target = None
        self._metrics = None
        self._rng.reset()
        self._bootstrap_population()

    def set_target(self, x: float, y: float) -> None:
        """Queue a command-driven retarget; applied to every agent at the start of the next tick."""
        self._pending_target = Vector2(x, y)
        logger.debug("Queued target command at (%.2f, %.2f)", x, y)

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        config = self._config
        agents = self._store.agents

        commanded = self._pending_target is not None
        if commanded:
            targets.command_target(agents, self._pending_target)
            self._pending_target = None
            retargeted = len(agents)
        else:
            retargeted = targets.retarget_arrived(
                agents, config.arrival_radius, config.retarget_range, self._rng
            )

        neighbor_checks = neighbors.find_neighbors(agents, config.perception_radius)

        # Every steering contribution reads start-of-tick state and lands in the
        # delta buffer; velocities change only at the commit below.
        deltas = self._deltas
        deltas.clear()
        for agent in agents:
            deltas[agent.id] = flocking.alignment(agent.neighbors) + flocking.cohesion(
                agent.position, agent.neighbors
            )
        avoidance_pairs = flocking.accumulate_avoidance(
            agents,
            config.perception_radius,
            config.avoidance_strength,
            self._rng,
            deltas,
            symmetric=config.symmetric_avoidance,
        )
        seek.seek_steering(self._store.seeking(), config.seek_strength, deltas)

        for agent in agents:
            agent.velocity += deltas[agent.id]

        moving = motion.integrate(agents, config)

        elapsed_ms = (perf_counter() - start) * 1000.0
        metrics = metrics_system.create_metrics(
            tick,
            agents,
            neighbor_checks,
            avoidance_pairs,
            retargeted,
            commanded,
            moving,
            elapsed_ms,
        )
        self._metrics = metrics
        return metrics

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics
        if metrics is None:
            metrics = metrics_system.create_metrics(tick, self.agents, 0, 0, 0, False, 0, 0.0)
        metadata = SnapshotMetadata(
            population=len(self._store),
            perception_radius=self._config.perception_radius,
            arrival_radius=self._config.arrival_radius,
            move_speed=self._config.move_speed,
            sim_dt=self._config.time_step,
            tick_rate=0.0 if self._config.time_step <= 0 else 1.0 / self._config.time_step,
            seed=self._config.seed,
            config_version=self._config.config_version,
        )
        return Snapshot(
            tick=tick,
            metrics=metrics,
            agents=[self._agent_snapshot(agent) for agent in self.agents],
            metadata=metadata,
        )

    def _bootstrap_population(self) -> None:
        if not self._spawn:
            return
        self._store.spawn(self._rng, self._config)
        logger.info("Spawned %d agents (seed=%d)", len(self._store), self._config.seed)

    @staticmethod
    def _agent_snapshot(agent: Agent) -> Dict[str, Any]:
        target = agent.target
        return {
            "id": agent.id,
            "x": agent.position.x,
            "y": agent.position.y,
            "vx": agent.velocity.x,
            "vy": agent.velocity.y,
            "heading": agent.heading,
            "target_x": None if target is None else target.x,
            "target_y": None if target is None else target.y,
            "moving": agent.moving,
        }
