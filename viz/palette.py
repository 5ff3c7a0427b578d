"""
Colours and styling rules for the commuter canvas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from commuter_core.enums import NodeStyle
from commuter_core.graph import Node


@dataclass(frozen=True)
class Palette:
    background: str = "#0f1115"
    node: str = "#333333"
    node_active: str = "#ffffff"
    edge: str = "#ffffff"
    edge_alpha: float = 0.05
    commuter: str = "#00ff9d"
    accent: str = "#0ea5e9"
    outline: str = "#ffffff"
    outline_alpha: float = 0.15
    text: str = "#e5e5e5"


DEFAULT_PALETTE = Palette()

# Glow extent in pixels at full activation
GLOW_EXTENT = 15.0


def node_style(node: Node, selected_id: Optional[int], threshold: float = 0.1) -> NodeStyle:
    """Pick the display style of a node: selection wins over activity."""
    if selected_id is not None and node.id == selected_id:
        return NodeStyle.SELECTED
    if node.activation > threshold:
        return NodeStyle.ACTIVE
    return NodeStyle.IDLE


def fill_for_style(style: NodeStyle, palette: Palette = DEFAULT_PALETTE) -> str:
    if style == NodeStyle.SELECTED:
        return palette.accent
    if style == NodeStyle.ACTIVE:
        return palette.node_active
    return palette.node


def glow_radius(node: Node) -> float:
    """Halo radius grows linearly with activation."""
    return node.radius + max(0.0, min(1.0, node.activation)) * GLOW_EXTENT


def glow_alpha(node: Node, max_alpha: float = 0.35) -> float:
    return max(0.0, min(1.0, node.activation)) * max_alpha
