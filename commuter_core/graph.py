"""
Graph data structures for the commuter visualizer.

This module defines the entities the engine animates:
- Node: A positioned, layered vertex carrying a decaying activation level
- Edge: A directed source -> target connection referencing nodes by id
- Packet: A transient "commuter" travelling along one edge
- Topology: Container for nodes and edges with an id index and utility methods
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import networkx as nx

from .enums import LayoutMode


@dataclass
class Node:
    """
    A vertex of the visualized network.

    Position is mutable (the simulation owns it, except while the interaction
    controller drags the node). Layer and radius never change after creation.

    Attributes:
        id: Stable integer identifier, unique within a topology
        x: Horizontal position in surface pixels
        y: Vertical position in surface pixels (grows downwards)
        layer: Left-to-right generation layer index
        radius: Display radius in pixels
        activation: Recent-arrival level in [0, 1], decays every tick
        val: Cosmetic value shown by the inspector
    """

    id: int
    """Stable identifier, assigned in generation order."""

    x: float
    """Horizontal position in pixels."""

    y: float
    """Vertical position in pixels."""

    layer: int
    """Layer index assigned at creation."""

    radius: float = 8.0
    """Display radius in pixels."""

    activation: float = 0.0
    """Activation level (0.0-1.0) driving highlight intensity."""

    val: float = 0.0
    """Cosmetic display value (two decimals)."""


@dataclass
class Edge:
    """
    A directed connection between two nodes.

    Edges hold node ids, not node objects, so regenerating the node set
    invalidates every edge; both are always regenerated together.

    Attributes:
        src: Source node id
        dst: Target node id
        weight: Cosmetic weight, unused by the simulation
    """

    src: int
    """Source node id."""

    dst: int
    """Target node id."""

    weight: float = 1.0
    """Cosmetic weight."""


@dataclass
class Packet:
    """
    A unit of signal travelling along one edge.

    The start point is captured by value when the packet is spawned; the end
    point is the target node's live position, looked up every tick.

    Attributes:
        start_x: Source x at spawn time
        start_y: Source y at spawn time
        source_id: Id of the node the packet left from
        target_id: Id of the node the packet travels to
        speed: Progress increment per tick
        ticks: Number of ticks advanced so far
        progress: Fraction of the edge travelled (``ticks * speed``)
        x: Last interpolated x position
        y: Last interpolated y position
    """

    start_x: float
    start_y: float
    source_id: int
    target_id: int
    speed: float
    ticks: int = 0
    progress: float = 0.0
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if self.ticks == 0:
            self.x = self.start_x
            self.y = self.start_y


class Topology:
    """
    Container for the nodes and edges of one generated graph.

    Nodes are indexed by id for O(1) lookup; edges are kept in generation order
    together with outgoing/incoming adjacency maps.

    Attributes:
        width: Surface width the topology was generated for
        height: Surface height the topology was generated for
        mode: Layout mode used for generation
        nodes: Dictionary mapping node ids to Node objects
        edges: List of edges in generation order
        out_edges: Dictionary mapping node ids to lists of outgoing edges
        in_edges: Dictionary mapping node ids to lists of incoming edges
    """

    def __init__(self, width: float = 0.0, height: float = 0.0, mode: LayoutMode = LayoutMode.GNN):
        self.width = float(width)
        self.height = float(height)
        self.mode = mode
        self.nodes: Dict[int, Node] = {}
        self.edges: List[Edge] = []
        self.out_edges: Dict[int, List[Edge]] = {}
        self.in_edges: Dict[int, List[Edge]] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def add_node(self, n: Node) -> None:
        """Add a node and initialize its adjacency lists."""
        self.nodes[n.id] = n
        self.out_edges.setdefault(n.id, [])
        self.in_edges.setdefault(n.id, [])

    def add_edge(self, e: Edge) -> None:
        """
        Add a directed edge between existing nodes.

        Raises:
            ValueError: If either endpoint is not in the topology
        """
        if e.src not in self.nodes or e.dst not in self.nodes:
            raise ValueError(f"Edge {e.src}->{e.dst} references a missing node")
        self.edges.append(e)
        self.out_edges[e.src].append(e)
        self.in_edges[e.dst].append(e)

    def node(self, node_id: int) -> Optional[Node]:
        """Return the node with ``node_id`` or None when it does not exist."""
        return self.nodes.get(node_id)

    def iter_nodes(self) -> List[Node]:
        """Nodes in id order."""
        return [self.nodes[nid] for nid in sorted(self.nodes)]

    def neighbors(self, node_id: int, direction: str = "out") -> List[Edge]:
        """
        Get all edges connected to a node in the specified direction.

        Args:
            node_id: Node id to get neighbors for
            direction: 'out' for outgoing edges, 'in' for incoming edges
        """
        return (self.out_edges if direction == "out" else self.in_edges).get(node_id, [])

    def layer_members(self, layer: int) -> List[int]:
        return [n.id for n in self.iter_nodes() if n.layer == layer]

    # ----- validation -----
    def validate_forward_edges(self) -> List[str]:
        """
        Check that every edge goes from a lower to a strictly higher layer.

        Returns:
            List of human readable issues (empty when the graph is a forward DAG)
        """
        issues = []
        for e in self.edges:
            src = self.nodes.get(e.src)
            dst = self.nodes.get(e.dst)
            if src is None or dst is None:
                issues.append(f"Edge {e.src}->{e.dst} references a missing node")
                continue
            if dst.layer <= src.layer:
                issues.append(
                    f"Edge {e.src}->{e.dst} goes from layer {src.layer} to layer {dst.layer}"
                )
        return issues

    def validate_graph_integrity(self) -> Dict[str, List[str]]:
        """
        Structural checks used by the CLI and tests.

        Checks for dangling or backward edges, duplicate ordered pairs,
        self-loops and activation values outside [0, 1].

        Returns:
            Dictionary of validation issues by category (empty categories removed)
        """
        issues: Dict[str, List[str]] = {
            "edge_direction": self.validate_forward_edges(),
            "duplicate_edges": [],
            "self_loops": [],
            "activation_bounds": [],
        }

        seen = set()
        for e in self.edges:
            key = (e.src, e.dst)
            if key in seen:
                issues["duplicate_edges"].append(f"Duplicate edge {e.src}->{e.dst}")
            seen.add(key)
            if e.src == e.dst:
                issues["self_loops"].append(f"Self-loop on node {e.src}")

        for n in self.nodes.values():
            if not (0.0 <= n.activation <= 1.0):
                issues["activation_bounds"].append(
                    f"Node {n.id} activation {n.activation} is outside [0, 1]"
                )

        return {k: v for k, v in issues.items() if v}

    def get_graph_statistics(self) -> Dict[str, Any]:
        """Summary counts for reporting."""
        layers: Dict[int, int] = {}
        for n in self.nodes.values():
            layers[n.layer] = layers.get(n.layer, 0) + 1

        span_counts: Dict[int, int] = {}
        for e in self.edges:
            src = self.nodes.get(e.src)
            dst = self.nodes.get(e.dst)
            if src is None or dst is None:
                continue
            span = dst.layer - src.layer
            span_counts[span] = span_counts.get(span, 0) + 1

        isolated = [nid for nid in self.nodes if not self.neighbors(nid, "out") and not self.neighbors(nid, "in")]
        n_nodes = len(self.nodes)
        return {
            "mode": self.mode.name,
            "width": self.width,
            "height": self.height,
            "nodes": n_nodes,
            "edges": len(self.edges),
            "nodes_per_layer": [layers[k] for k in sorted(layers)],
            "edges_by_layer_span": {str(k): v for k, v in sorted(span_counts.items())},
            "isolated_nodes": isolated,
            "density": (len(self.edges) / (n_nodes * (n_nodes - 1))) if n_nodes > 1 else 0.0,
        }

    # ----- export -----
    def to_networkx(self) -> "nx.DiGraph":
        """
        Convert the topology to a NetworkX DiGraph for export/analysis.

        Returns:
            NetworkX DiGraph with node and edge attributes
        """
        G = nx.DiGraph()
        for n in self.iter_nodes():
            G.add_node(
                n.id,
                x=n.x,
                y=n.y,
                layer=n.layer,
                radius=n.radius,
                activation=n.activation,
            )
        for e in self.edges:
            G.add_edge(e.src, e.dst, weight=e.weight)
        return G

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self.to_networkx())

    def export_graphml(self, filepath: str) -> None:
        """
        Export the topology to GraphML format.

        Args:
            filepath: Path where to save the GraphML file
        """
        nx.write_graphml(self.to_networkx(), filepath)
