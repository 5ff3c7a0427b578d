"""
Simulation state for the commuter visualizer.

The `Simulation` owns the current topology, the set of in-flight packets and
the running flag, and advances everything by one tick per frame:

1. Packet motion: every packet advances by its speed and is interpolated from
   its frozen start point towards the live position of its target node
2. Arrival: packets reaching progress >= 1 are removed and raise the target
   node's activation (policy configurable via `SimulationConfig`)
3. Decay: every node's activation is multiplied by the decay factor

Running state machine: Idle --run()--> Running --reset()--> Idle. Running does
not fall back to Idle when the last packet arrives; only reset() (or loading a
new topology) stops it.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, List, Tuple

from .config import SimulationConfig
from .enums import ArrivalPolicy
from .geometry import lerp_point
from .graph import Node, Packet, Topology

logger = logging.getLogger(__name__)


def _empty_stats() -> Dict[str, Any]:
    return {
        "runs": 0,
        "packets_spawned": 0,
        "packets_arrived": 0,
        "packets_dropped": 0,
        "arrivals_by_node": {},  # node_id -> count
        "first_arrival_tick": {},  # node_id -> tick of first arrival
    }


class Simulation:
    """
    Per-frame packet and activation simulation over one topology.

    Attributes:
        topology: The current nodes and edges
        packets: Packets currently travelling
        running: True between run() and reset()
        t: Ticks advanced since the topology was loaded
        last_arrivals: Positions where packets arrived during the last tick
        stats: Counters for reporting
    """

    def __init__(
        self,
        topology: Topology | None = None,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.topology = topology if topology is not None else Topology()
        self.packets: List[Packet] = []
        self.running = False
        self.t = 0
        self.last_arrivals: List[Tuple[float, float]] = []
        self.stats = _empty_stats()
        for n in self.topology.nodes.values():
            n.activation = 0.0

    # ----- helpers -----
    @property
    def nodes(self) -> Dict[int, Node]:
        return self.topology.nodes

    def is_active(self, node: Node) -> bool:
        """Activation above the idle threshold; decay never reaches exactly zero."""
        return node.activation > self.config.activity_threshold

    # ----- commands -----
    def load(self, topology: Topology) -> None:
        """
        Replace the topology wholesale.

        In-flight packets and activation levels are meaningless for new node
        identities, so they are discarded and the simulation returns to idle.
        """
        self.topology = topology
        self.packets = []
        self.last_arrivals = []
        self.running = False
        self.t = 0
        self.stats = _empty_stats()
        for n in topology.nodes.values():
            n.activation = 0.0
        logger.debug("Loaded topology with %d nodes, %d edges", len(topology.nodes), len(topology.edges))

    def run(self) -> None:
        """
        Spawn one packet per edge, starting at the source node's current position.

        No-op while already running.
        """
        if self.running:
            return
        self.running = True
        self.stats["runs"] += 1

        spawned = 0
        for edge in self.topology.edges:
            source = self.topology.node(edge.src)
            target = self.topology.node(edge.dst)
            if source is None or target is None:
                continue
            self.packets.append(
                Packet(
                    start_x=source.x,
                    start_y=source.y,
                    source_id=source.id,
                    target_id=target.id,
                    speed=self.rng.uniform(self.config.speed_min, self.config.speed_max),
                )
            )
            spawned += 1
        self.stats["packets_spawned"] += spawned
        logger.debug("Spawned %d packets", spawned)

    def reset(self) -> None:
        """Stop running, discard every packet and zero every activation."""
        self.running = False
        # In-flight packets discarded by reset count as dropped
        self.stats["packets_dropped"] += len(self.packets)
        self.packets = []
        self.last_arrivals = []
        for n in self.topology.nodes.values():
            n.activation = 0.0

    def spawn_packet(self, source_id: int, target_id: int, speed: float) -> Packet | None:
        """
        Spawn a single packet with a fixed speed.

        Used by tooling and tests; does not change the running flag.

        Returns:
            The new packet, or None if either endpoint is missing
        """
        source = self.topology.node(source_id)
        if source is None or self.topology.node(target_id) is None:
            return None
        packet = Packet(source.x, source.y, source_id, target_id, float(speed))
        self.packets.append(packet)
        self.stats["packets_spawned"] += 1
        return packet

    # ----- per-tick update -----
    def advance(self) -> None:
        """
        Advance the simulation by one tick. Only effectful while running.
        """
        if not self.running:
            return

        self.last_arrivals = []
        remaining: List[Packet] = []
        for p in self.packets:
            target = self.topology.node(p.target_id)
            if target is None:
                self.stats["packets_dropped"] += 1
                continue

            p.ticks += 1
            # Recomputed from the tick count so arrival lands on exactly ceil(1 / speed) ticks
            p.progress = p.ticks * p.speed
            p.x, p.y = lerp_point((p.start_x, p.start_y), target, min(p.progress, 1.0))

            if p.progress >= 1.0:
                self._arrive(target)
                self.last_arrivals.append((p.x, p.y))
            else:
                remaining.append(p)
        self.packets = remaining

        decay = self.config.decay
        for n in self.topology.nodes.values():
            if n.activation > 0.0:
                n.activation *= decay

        self.t += 1

    def _arrive(self, node: Node) -> None:
        if self.config.arrival_policy == ArrivalPolicy.SATURATE:
            node.activation = 1.0
        else:
            node.activation = min(node.activation + self.config.arrival_increment, 1.0)

        self.stats["packets_arrived"] += 1
        arrivals = self.stats["arrivals_by_node"]
        arrivals[node.id] = arrivals.get(node.id, 0) + 1
        self.stats["first_arrival_tick"].setdefault(node.id, self.t + 1)

    def step(self, n: int = 1) -> Dict[str, Any]:
        """
        Advance ``n`` ticks and return a snapshot.
        """
        for _ in range(n):
            self.advance()
        return self.snapshot()

    def snapshot(self) -> Dict[str, Any]:
        """
        Plain-data view of the current state, used for JSON output and UI shells.
        """
        return {
            "t": self.t,
            "running": self.running,
            "mode": self.topology.mode.name,
            "nodes": {
                n.id: {
                    "x": n.x,
                    "y": n.y,
                    "layer": n.layer,
                    "radius": n.radius,
                    "activation": n.activation,
                    "active": self.is_active(n),
                }
                for n in self.topology.iter_nodes()
            },
            "edges": [(e.src, e.dst) for e in self.topology.edges],
            "packets": [
                {
                    "source": p.source_id,
                    "target": p.target_id,
                    "progress": p.progress,
                    "x": p.x,
                    "y": p.y,
                }
                for p in self.packets
            ],
            "stats": self.stats,
        }
