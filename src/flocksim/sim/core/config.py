from __future__ import annotations

import math
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .errors import ConfigError


@dataclass
class SimulationConfig:
    population: int = 6
    perception_radius: float = 300.0
    arrival_radius: float = 25.0
    spawn_range: float = 500.0
    retarget_range: float = 300.0
    move_speed: float = 2.0
    damping_threshold: float = 0.1
    damping_factor: float = 0.1
    avoidance_strength: float = 25.0
    seek_strength: float = 25.0
    # Pairs are visited once; by default only the first agent of a pair is pushed.
    symmetric_avoidance: bool = False
    time_step: float = 1.0 / 60.0
    seed: int = 42
    config_version: str = "v1"

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


def load_config(raw: dict) -> SimulationConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a mapping of config values, got {type(raw).__name__}")
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
    kinds = {f.name: f.type for f in fields(SimulationConfig)}
    values = {name: _coerce(name, kinds[name], value) for name, value in raw.items()}
    config = SimulationConfig(**values)
    validate_config(config)
    return config


def _coerce(name: str, kind: str, value: object) -> object:
    # Annotations are strings under postponed evaluation.
    if kind == "bool":
        if not isinstance(value, bool):
            raise ConfigError(f"{name} must be true or false, got {value!r}")
        return value
    if kind == "str":
        return str(value)
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ConfigError(f"{name} must be finite, got {value!r}")
    if kind == "int":
        if not number.is_integer():
            raise ConfigError(f"{name} must be a whole number, got {value!r}")
        return int(number)
    return number


def validate_config(config: SimulationConfig) -> None:
    for f in fields(SimulationConfig):
        value = getattr(config, f.name)
        allowed = {"int": (int,), "float": (int, float)}.get(f.type)
        if allowed is not None and (isinstance(value, bool) or not isinstance(value, allowed)):
            expected = "an integer" if f.type == "int" else "a number"
            raise ConfigError(f"{f.name} must be {expected}, got {value!r}")
    if config.population < 0:
        raise ConfigError(f"population must be >= 0, got {config.population}")
    for name in ("perception_radius", "arrival_radius", "move_speed", "time_step"):
        value = getattr(config, name)
        if value <= 0.0:
            raise ConfigError(f"{name} must be > 0, got {value}")
    for name in ("spawn_range", "retarget_range", "damping_threshold", "avoidance_strength", "seek_strength"):
        value = getattr(config, name)
        if value < 0.0:
            raise ConfigError(f"{name} must be >= 0, got {value}")
    if not 0.0 < config.damping_factor <= 1.0:
        raise ConfigError(f"damping_factor must be in (0, 1], got {config.damping_factor}")
