"""
Topology generator for the commuter visualizer.

Builds a layered node set and a forward-only edge set for one of the two
layout modes:

- NN: nodes on a regular grid (one column per layer), each adjacent-layer pair
  connected with a fixed high probability
- GNN: nodes jittered around their layer column and scattered vertically, with
  proximity edges towards later layers plus sparse long-range shortcuts

The layer structure is fixed by the config; positions and connectivity are
drawn from the supplied random generator on every call.
"""

from __future__ import annotations

import logging
import random
from typing import List

from .config import SimulationConfig
from .enums import LayoutMode
from .geometry import clamp, distance
from .graph import Edge, Node, Topology

logger = logging.getLogger(__name__)


class TopologyGenerator:
    """
    Procedural generator of layered topologies.

    Args:
        config: Generation constants (layer sizes, probabilities, noise)
        rng: Random source; a fresh unseeded generator (or one seeded from
            ``config.seed``) is used when omitted
    """

    def __init__(self, config: SimulationConfig | None = None, rng: random.Random | None = None):
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)

    def generate(self, width: float, height: float, mode: LayoutMode) -> Topology:
        """
        Generate nodes and edges for a surface of ``width`` x ``height`` pixels.

        Always terminates after one pass over all ordered node pairs. A result
        with zero edges is valid.

        Returns:
            Topology: freshly generated nodes and edges
        """
        topo = Topology(width, height, mode)
        for n in self._place_nodes(float(width), float(height), mode):
            topo.add_node(n)

        nodes = topo.iter_nodes()
        for source in nodes:
            for target in nodes:
                if self._should_connect(source, target, mode):
                    topo.add_edge(Edge(source.id, target.id, weight=self.rng.random()))

        logger.debug(
            "Generated %s topology %sx%s: %d nodes, %d edges",
            mode.name, width, height, len(topo.nodes), len(topo.edges),
        )
        return topo

    def _place_nodes(self, width: float, height: float, mode: LayoutMode) -> List[Node]:
        cfg = self.config
        layers = cfg.layer_count
        x_step = width / (layers + 1)
        nodes: List[Node] = []
        next_id = 0

        for layer_idx, count in enumerate(cfg.layer_sizes):
            for i in range(count):
                if mode == LayoutMode.NN:
                    y_step = height / (count + 1)
                    x = x_step * (layer_idx + 1)
                    y = y_step * (i + 1)
                    radius = cfg.nn_radius
                else:
                    x_noise = (self.rng.random() - 0.5) * (width * cfg.gnn_x_noise)
                    y_noise = (self.rng.random() - 0.5) * (height * cfg.gnn_y_noise)
                    x = x_step * (layer_idx + 1) + x_noise
                    y = height / 2 + y_noise
                    # Keep the inset margin; on tiny surfaces the margin collapses to the centre
                    x = clamp(x, min(cfg.margin, width / 2), max(width - cfg.margin, width / 2))
                    y = clamp(y, min(cfg.margin, height / 2), max(height - cfg.margin, height / 2))
                    radius = self.rng.uniform(cfg.gnn_radius_min, cfg.gnn_radius_max)

                nodes.append(
                    Node(
                        id=next_id,
                        x=x,
                        y=y,
                        layer=layer_idx,
                        radius=radius,
                        activation=0.0,
                        val=round(self.rng.random(), 2),
                    )
                )
                next_id += 1
        return nodes

    def _should_connect(self, source: Node, target: Node, mode: LayoutMode) -> bool:
        cfg = self.config
        if mode == LayoutMode.NN:
            # Strictly feed-forward between adjacent layers
            return target.layer == source.layer + 1 and self.rng.random() < cfg.nn_connect_probability

        if target.layer <= source.layer:
            return False
        connect = False
        if distance(source, target) < cfg.gnn_local_radius and self.rng.random() < cfg.gnn_local_probability:
            connect = True
        # Long-range shortcut, drawn independently of distance
        if self.rng.random() < cfg.gnn_shortcut_probability:
            connect = True
        return connect


def generate_topology(
    width: float,
    height: float,
    mode: LayoutMode = LayoutMode.GNN,
    config: SimulationConfig | None = None,
    rng: random.Random | None = None,
) -> Topology:
    """Convenience wrapper around `TopologyGenerator.generate`."""
    return TopologyGenerator(config, rng).generate(width, height, mode)
