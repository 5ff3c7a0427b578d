"""
Commuter Core Package.

This package contains the UI-independent engine of the commuter graph
visualizer:

- Core data structures (Node, Edge, Packet, Topology)
- Procedural topology generation for the NN and GNN layouts (TopologyGenerator)
- Per-frame packet animation and activation decay (Simulation)
- Pointer/selection handling and commands (InteractionController)
- The owning handle used by UI shells (Visualizer, FrameLoop)

Nothing here computes real neural-network math; packets and activation are a
visual metaphor for message passing.
"""

__version__ = "0.1.0"

from .enums import LayoutMode, NodeStyle, ArrivalPolicy
from .config import SimulationConfig, config_from_dict, load_config, load_config_yaml
from .graph import Node, Edge, Packet, Topology
from .topology import TopologyGenerator, generate_topology
from .simulation import Simulation
from .events import EventLog
from .controller import InteractionController
from .lifecycle import FrameLoop, Visualizer
