"""
Interaction controller for the commuter visualizer.

Translates pointer input and UI commands into mutations of the simulation:
- Pointer down selects and grabs the node under the pointer
- Pointer move drags the grabbed node (position is written directly)
- Pointer up / leave releases the grab; the selection persists
- Layout toggle flips the layout mode and regenerates the whole topology
- Run / reset forward to the simulation and emit log lines

All calls are synchronous and applied before the next tick reads the state.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .enums import LayoutMode
from .events import EventLog
from .geometry import distance
from .graph import Node
from .simulation import Simulation
from .topology import TopologyGenerator

logger = logging.getLogger(__name__)


class InteractionController:
    """
    Pointer, selection and command handling.

    Attributes:
        simulation: The simulation whose state is mutated
        generator: Generator used for regeneration on toggle/resize
        log: Event log receiving user-facing messages
        mode: Current layout mode
        selected_id: Id of the selected node, if any
        drag_id: Id of the node held by the pointer, if any
    """

    def __init__(
        self,
        simulation: Simulation,
        generator: TopologyGenerator,
        log: EventLog,
        mode: LayoutMode = LayoutMode.GNN,
    ):
        self.simulation = simulation
        self.generator = generator
        self.log = log
        self.mode = mode
        self.selected_id: Optional[int] = None
        self.drag_id: Optional[int] = None

    @property
    def pick_slack(self) -> float:
        return self.simulation.config.pick_slack

    @property
    def selected_node(self) -> Optional[Node]:
        if self.selected_id is None:
            return None
        return self.simulation.topology.node(self.selected_id)

    # ----- pointer input -----
    def hit_test(self, x: float, y: float) -> Optional[Node]:
        """Return the first node (in id order) within radius + slack of the point."""
        for node in self.simulation.topology.iter_nodes():
            if distance(node, (x, y)) < node.radius + self.pick_slack:
                return node
        return None

    def pointer_down(self, x: float, y: float) -> Optional[int]:
        """
        Select and grab the node under the pointer.

        Returns:
            The selected node id, or None if nothing was hit
        """
        node = self.hit_test(x, y)
        if node is None:
            return None
        self.drag_id = node.id
        self.selected_id = node.id
        self.log.push(f"> Node {node.id} selected.")
        return node.id

    def select(self, node_id: Optional[int]) -> Optional[int]:
        """Select a node by id without grabbing it (for shells without pointer input)."""
        if node_id is None or self.simulation.topology.node(node_id) is None:
            self.selected_id = None
            return None
        if node_id != self.selected_id:
            self.selected_id = node_id
            self.log.push(f"> Node {node_id} selected.")
        return node_id

    def pointer_move(self, x: float, y: float) -> None:
        if self.drag_id is None:
            return
        node = self.simulation.topology.node(self.drag_id)
        if node is None:
            self.drag_id = None
            return
        node.x = float(x)
        node.y = float(y)

    def pointer_up(self) -> None:
        self.drag_id = None

    def pointer_leave(self) -> None:
        self.pointer_up()

    # ----- commands -----
    def regenerate(self, width: float, height: float) -> None:
        """
        Generate a fresh topology for the current mode and load it.

        Selection and drag refer to node identities of the old topology and
        are cleared.
        """
        self.simulation.load(self.generator.generate(width, height, self.mode))
        self.selected_id = None
        self.drag_id = None

    def toggle_layout(self) -> None:
        """Switch between NN and GNN layouts and regenerate at the current size."""
        self.mode = self.mode.toggled()
        topo = self.simulation.topology
        if topo.width > 0 and topo.height > 0:
            self.regenerate(topo.width, topo.height)
        self.log.push(f"> Switched to {self.mode.name} Mode")

    def run(self) -> None:
        if self.simulation.running:
            return
        self.log.push("> Executing Message Passing...")
        self.simulation.run()

    def reset(self) -> None:
        # Selection survives reset
        self.simulation.reset()
        self.drag_id = None
        self.log.replace("> Kernel history cleared.", "> System ready.")

    # ----- inspector -----
    def inspector(self) -> Optional[Dict[str, Any]]:
        """
        Readout for the selected node.

        Returns:
            dict with keys id, layer, val, activation, status ("HIGH"/"IDLE"),
            or None when nothing is selected
        """
        node = self.selected_node
        if node is None:
            return None
        return {
            "id": node.id,
            "layer": node.layer,
            "val": f"{node.val:.2f}",
            "activation": node.activation,
            "status": "HIGH" if self.simulation.is_active(node) else "IDLE",
        }
