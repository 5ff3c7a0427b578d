"""
Lightweight frame-building utilities decoupled from matplotlib to enable testing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from commuter_core.enums import LayoutMode, NodeStyle
from commuter_core.simulation import Simulation

from .palette import DEFAULT_PALETTE, Palette, fill_for_style, glow_alpha, glow_radius, node_style

PACKET_RADIUS = 3.0
FLASH_RADIUS = 8.0


@dataclass
class NodeDisc:
    id: int
    x: float
    y: float
    radius: float
    fill: str
    style: NodeStyle
    glow_radius: float
    glow_alpha: float


@dataclass
class Frame:
    """Everything the renderer needs for one frame, in draw order."""

    width: float
    height: float
    background: str
    edge_segments: np.ndarray
    edge_width: float
    packet_positions: np.ndarray
    flash_positions: np.ndarray
    nodes: List[NodeDisc] = field(default_factory=list)


def _points(values) -> np.ndarray:
    if not values:
        return np.zeros((0, 2), dtype=float)
    return np.asarray(values, dtype=float).reshape(-1, 2)


def build_frame(
    sim: Simulation,
    selected_id: Optional[int] = None,
    palette: Palette = DEFAULT_PALETTE,
) -> Frame:
    """Convert the simulation state into drawing primitives.

    Edges whose endpoints are missing are skipped. Nodes come out in id order
    so the renderer can stack them deterministically.
    """
    topo = sim.topology

    segments = []
    for e in topo.edges:
        s = topo.node(e.src)
        t = topo.node(e.dst)
        if s is None or t is None:
            continue
        segments.append(((s.x, s.y), (t.x, t.y)))
    edge_segments = np.asarray(segments, dtype=float) if segments else np.zeros((0, 2, 2), dtype=float)

    packets = [(p.x, p.y) for p in sim.packets if topo.node(p.target_id) is not None]

    threshold = sim.config.activity_threshold
    nodes = []
    for n in topo.iter_nodes():
        style = node_style(n, selected_id, threshold)
        nodes.append(
            NodeDisc(
                id=n.id,
                x=n.x,
                y=n.y,
                radius=n.radius,
                fill=fill_for_style(style, palette),
                style=style,
                glow_radius=glow_radius(n),
                glow_alpha=glow_alpha(n),
            )
        )

    return Frame(
        width=topo.width,
        height=topo.height,
        background=palette.background,
        # thinner edges for the dense feed-forward layout
        edge_width=0.5 if topo.mode == LayoutMode.NN else 1.0,
        edge_segments=edge_segments,
        packet_positions=_points(packets),
        flash_positions=_points(list(sim.last_arrivals)),
        nodes=nodes,
    )
