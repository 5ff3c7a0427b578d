"""
Metrics utilities for the commuter simulation.

The Simulation records the following statistics in `simulation.stats`:
- runs: number of run() calls that spawned a batch
- packets_spawned: total packets created
- packets_arrived: total packets that reached their target
- packets_dropped: packets discarded because their target disappeared or by reset()
- arrivals_by_node: per-node arrival counts
- first_arrival_tick: tick of the first arrival at each node
"""

from __future__ import annotations

import math
from typing import Dict, Optional


def ticks_to_arrival(speed: float) -> int:
    """Number of ticks a packet with ``speed`` needs to reach progress >= 1."""
    if speed <= 0:
        raise ValueError("speed must be positive")
    return math.ceil(1.0 / speed)


def packets_in_flight(simulation) -> int:
    return len(simulation.packets)


def total_arrivals(simulation) -> int:
    return int(simulation.stats.get("packets_arrived", 0))


def arrivals_by_node(simulation) -> Dict[int, int]:
    """Return per-node arrival counts as a dict of node_id -> count."""
    counts = simulation.stats.get("arrivals_by_node", {})
    return {int(k): int(v) for k, v in counts.items()}


def first_arrival_tick(simulation, node_id: int) -> Optional[int]:
    """Return the tick when a packet first reached the node, or None."""
    return simulation.stats.get("first_arrival_tick", {}).get(node_id)


def active_node_count(simulation) -> int:
    """Nodes whose activation is above the idle threshold."""
    return sum(1 for n in simulation.topology.nodes.values() if simulation.is_active(n))


def completion_ratio(simulation) -> float:
    """Fraction of spawned, not dropped packets that have arrived (1.0 when there are none)."""
    live = simulation.stats.get("packets_spawned", 0) - simulation.stats.get("packets_dropped", 0)
    if live <= 0:
        return 1.0
    return simulation.stats.get("packets_arrived", 0) / live
