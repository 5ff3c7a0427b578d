"""
Core enumerations for the commuter graph visualizer.

This module defines the layout policies used by the topology generator, the
display styles a node can be drawn with, and the policies for raising a node's
activation when a packet arrives.
"""

from enum import Enum, auto


class LayoutMode(Enum):
    """
    Topology generation policies.

    - NN: Structured grid, strictly adjacent-layer feed-forward edges
    - GNN: Organic placement, proximity edges plus sparse long-range shortcuts
    """

    NN = auto()
    """Structured / grid layout (standard feed-forward network)."""

    GNN = auto()
    """Organic / proximity-based layout (graph topology)."""

    def toggled(self) -> "LayoutMode":
        """Return the other layout mode."""
        return LayoutMode.GNN if self is LayoutMode.NN else LayoutMode.NN

    @property
    def description(self) -> str:
        """Human readable name used in log lines."""
        return "Feed-Forward Network" if self is LayoutMode.NN else "Graph Topology"


class NodeStyle(Enum):
    """
    Display styles for nodes.

    The renderer picks exactly one style per node and frame:
    - SELECTED: The node currently selected by the user (accent colour)
    - ACTIVE: Activation above the idle threshold (bright)
    - IDLE: Activation at or below the idle threshold (dim)
    """

    SELECTED = auto()
    ACTIVE = auto()
    IDLE = auto()


class ArrivalPolicy(Enum):
    """
    How a node's activation is raised when a packet reaches it.
    """

    ADDITIVE = auto()
    """Add a fixed increment, clamped to 1.0."""

    SATURATE = auto()
    """Hard-set activation to 1.0."""
