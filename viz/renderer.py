"""
Matplotlib renderer for commuter frames.

The axes use canvas-style pixel coordinates: origin at the top left, y growing
downwards, one data unit per surface pixel. Draw order is fixed: edges, then
packets (with arrival flashes), then nodes, so activation glow is never hidden.
"""

from __future__ import annotations

from typing import List, Optional

from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection, PatchCollection
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.patches import Circle

from commuter_core.simulation import Simulation

from .palette import DEFAULT_PALETTE, Palette
from .utils import FLASH_RADIUS, PACKET_RADIUS, Frame, build_frame

Z_EDGES = 1.0
Z_PACKETS = 2.0
Z_NODES = 3.0


class Renderer:
    """Paints `Frame` objects onto one matplotlib Axes."""

    def __init__(self, ax: Axes, palette: Palette = DEFAULT_PALETTE):
        self.ax = ax
        self.palette = palette
        self._artists: List = []
        self._configure_axes()

    def _configure_axes(self) -> None:
        ax = self.ax
        ax.set_xticks([])
        ax.set_yticks([])
        for spine in ax.spines.values():
            spine.set_visible(False)
        ax.set_aspect("equal", adjustable="box")

    def clear(self) -> None:
        for artist in self._artists:
            artist.remove()
        self._artists = []

    def draw(self, frame: Frame) -> List:
        """Replace the previous frame's artists with ``frame``.

        Returns:
            The artists added for this frame
        """
        self.clear()
        ax = self.ax
        pal = self.palette

        ax.set_facecolor(frame.background)
        ax.figure.set_facecolor(frame.background)
        ax.set_xlim(0, max(frame.width, 1.0))
        ax.set_ylim(max(frame.height, 1.0), 0)

        # Edges
        edges = LineCollection(
            list(frame.edge_segments),
            colors=[to_rgba(pal.edge, pal.edge_alpha)],
            linewidths=frame.edge_width,
            zorder=Z_EDGES,
        )
        self._add(edges)

        # Packets: soft halo under a solid core
        if len(frame.packet_positions):
            halo = PatchCollection(
                [Circle((x, y), PACKET_RADIUS * 2.2) for x, y in frame.packet_positions],
                facecolors=[to_rgba(pal.commuter, 0.25)],
                edgecolors="none",
                zorder=Z_PACKETS,
            )
            core = PatchCollection(
                [Circle((x, y), PACKET_RADIUS) for x, y in frame.packet_positions],
                facecolors=[to_rgba(pal.commuter, 1.0)],
                edgecolors="none",
                zorder=Z_PACKETS + 0.1,
            )
            self._add(halo)
            self._add(core)

        if len(frame.flash_positions):
            flashes = PatchCollection(
                [Circle((x, y), FLASH_RADIUS) for x, y in frame.flash_positions],
                facecolors="none",
                edgecolors=[to_rgba(pal.commuter, 1.0)],
                linewidths=1.0,
                zorder=Z_PACKETS + 0.2,
            )
            self._add(flashes)

        # Nodes: glow proportional to activation, then the disc with a faint outline
        glowing = [n for n in frame.nodes if n.glow_alpha > 0.0]
        if glowing:
            glow = PatchCollection(
                [Circle((n.x, n.y), n.glow_radius) for n in glowing],
                facecolors=[to_rgba(pal.accent, n.glow_alpha) for n in glowing],
                edgecolors="none",
                zorder=Z_NODES,
            )
            self._add(glow)
        if frame.nodes:
            discs = PatchCollection(
                [Circle((n.x, n.y), n.radius) for n in frame.nodes],
                facecolors=[to_rgba(n.fill) for n in frame.nodes],
                edgecolors=[to_rgba(pal.outline, pal.outline_alpha)],
                linewidths=1.0,
                zorder=Z_NODES + 0.1,
            )
            self._add(discs)

        return list(self._artists)

    def draw_simulation(self, sim: Simulation, selected_id: Optional[int] = None) -> List:
        return self.draw(build_frame(sim, selected_id, self.palette))

    def _add(self, collection) -> None:
        self.ax.add_collection(collection)
        self._artists.append(collection)


def render_png(sim: Simulation, path: str, selected_id: Optional[int] = None, dpi: int = 100) -> None:
    """Render the current state to a PNG file without a GUI backend."""
    width = max(sim.topology.width, 1.0)
    height = max(sim.topology.height, 1.0)
    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0, 0, 1, 1])
    Renderer(ax).draw_simulation(sim, selected_id)
    fig.savefig(path, dpi=dpi, facecolor=fig.get_facecolor())
