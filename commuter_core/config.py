"""
Configuration objects for the commuter graph visualizer.

Exposes the tunable constants of topology generation, packet animation and
interaction so demos can be restyled without editing core logic. Values can be
loaded from YAML files (see ``scripts/*.yaml``).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from .enums import ArrivalPolicy


@dataclass
class SimulationConfig:
    """
    Configuration for topology generation, simulation and interaction.

    Defaults give the stock 5-7-7-4 network and packet timing.
    """

    # Topology shape
    layer_sizes: Tuple[int, ...] = (5, 7, 7, 4)
    margin: float = 50.0

    # NN (structured) layout
    nn_radius: float = 8.0
    nn_connect_probability: float = 0.8

    # GNN (organic) layout; noise values are full spans as a fraction of the
    # surface dimension, centred on zero
    gnn_x_noise: float = 0.25
    gnn_y_noise: float = 0.8
    gnn_radius_min: float = 6.0
    gnn_radius_max: float = 12.0
    gnn_local_radius: float = 150.0
    gnn_local_probability: float = 0.6
    gnn_shortcut_probability: float = 0.08

    # Packet animation (progress per tick)
    speed_min: float = 0.01
    speed_max: float = 0.03

    # Activation dynamics
    decay: float = 0.96
    arrival_policy: ArrivalPolicy = ArrivalPolicy.ADDITIVE
    arrival_increment: float = 0.3
    activity_threshold: float = 0.1

    # Interaction
    pick_slack: float = 10.0
    log_capacity: int = 8

    # Frame loop
    frame_interval_ms: int = 16

    # Optional RNG seed; None draws fresh randomness on every run
    seed: Optional[int] = None

    # Extra values carried for UI shells (colours, titles); not validated
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def layer_count(self) -> int:
        return len(self.layer_sizes)

    @property
    def node_count(self) -> int:
        return sum(self.layer_sizes)

    def validate(self) -> "SimulationConfig":
        """
        Check value ranges and return self.

        Raises:
            ValueError: If any value is outside its valid range
        """
        problems = []
        if not self.layer_sizes or any(int(n) <= 0 for n in self.layer_sizes):
            problems.append("layer_sizes must be a non-empty sequence of positive integers")
        for name in (
            "nn_connect_probability",
            "gnn_local_probability",
            "gnn_shortcut_probability",
            "arrival_increment",
            "activity_threshold",
        ):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                problems.append(f"{name}={value} is outside [0, 1]")
        if not (0.0 < self.decay < 1.0):
            problems.append(f"decay={self.decay} must be in (0, 1)")
        if self.speed_min <= 0.0 or self.speed_max < self.speed_min:
            problems.append(
                f"speed band [{self.speed_min}, {self.speed_max}] must be positive and ordered"
            )
        if self.gnn_radius_min <= 0.0 or self.gnn_radius_max < self.gnn_radius_min:
            problems.append(
                f"GNN radius band [{self.gnn_radius_min}, {self.gnn_radius_max}] must be positive and ordered"
            )
        if self.nn_radius <= 0.0:
            problems.append("nn_radius must be positive")
        if self.margin < 0.0 or self.pick_slack < 0.0:
            problems.append("margin and pick_slack must be non-negative")
        if self.log_capacity < 1:
            problems.append("log_capacity must be at least 1")
        if self.frame_interval_ms < 1:
            problems.append("frame_interval_ms must be at least 1")
        if problems:
            raise ValueError("Invalid simulation config: " + "; ".join(problems))
        return self


def config_from_dict(data: Dict[str, Any], base: SimulationConfig | None = None) -> SimulationConfig:
    """
    Build a `SimulationConfig` from a plain dictionary (e.g. parsed YAML).

    Keys not present keep the value from ``base`` (or the defaults).

    Raises:
        ValueError: On unknown keys or invalid values
    """
    base = base or SimulationConfig()
    known = {f.name for f in fields(SimulationConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")

    overrides: Dict[str, Any] = dict(data)
    if "layer_sizes" in overrides:
        overrides["layer_sizes"] = tuple(int(n) for n in overrides["layer_sizes"] or ())
    if "arrival_policy" in overrides and not isinstance(overrides["arrival_policy"], ArrivalPolicy):
        name = str(overrides["arrival_policy"]).upper()
        try:
            overrides["arrival_policy"] = ArrivalPolicy[name]
        except KeyError:
            raise ValueError(f"Unknown arrival_policy: {overrides['arrival_policy']!r}") from None
    return replace(base, **overrides).validate()


def load_config_yaml(yaml_text: str) -> SimulationConfig:
    """Load a config from YAML text."""
    data = yaml.safe_load(yaml_text) or {}
    if not isinstance(data, dict):
        raise ValueError("Config YAML must be a mapping")
    return config_from_dict(data)


def load_config(path: str) -> SimulationConfig:
    """Load a config from a YAML file path."""
    with open(path, "r", encoding="utf-8") as f:
        txt = f.read()
    return load_config_yaml(txt)
