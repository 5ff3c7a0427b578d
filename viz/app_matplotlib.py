"""
Interactive matplotlib window for the commuter visualizer.

Direct-event shell: mouse press/motion/release events drive node selection
and dragging, widget buttons issue the toggle/run/reset commands, figure
resize events regenerate the topology, and a canvas timer drives the frame
loop until the window is closed.

Run with ``python -m viz.app_matplotlib [--mode NN] [--config scripts/default.yaml]``.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import matplotlib.pyplot as plt
from matplotlib.widgets import Button

from commuter_core.config import SimulationConfig, load_config
from commuter_core.enums import LayoutMode
from commuter_core.lifecycle import FrameLoop, Visualizer

from .palette import DEFAULT_PALETTE
from .renderer import Renderer

logger = logging.getLogger(__name__)

BUTTON_STYLE = dict(color="#1f2430", hovercolor="#2f3646")


class MatplotlibShell:
    """Hosts a `Visualizer` inside a matplotlib figure."""

    def __init__(self, visualizer: Visualizer, figsize=(10.0, 6.0)):
        self.vis = visualizer
        pal = DEFAULT_PALETTE
        self.fig = plt.figure(figsize=figsize, facecolor=pal.background)
        self.ax = self.fig.add_axes([0.0, 0.0, 1.0, 1.0])
        self.renderer = Renderer(self.ax, pal)

        self.inspector_text = self.fig.text(
            0.015, 0.975, "", va="top", ha="left", family="monospace", fontsize=8, color=pal.text,
            bbox=dict(boxstyle="round,pad=0.5", fc="#000000", ec="#444444", alpha=0.6),
        )
        self.inspector_text.set_visible(False)
        self.log_text = self.fig.text(
            0.985, 0.02, "", va="bottom", ha="right", family="monospace", fontsize=7, color=pal.text, alpha=0.7,
        )

        self.buttons: List[Button] = []
        self.btn_layout = self._add_button([0.89, 0.90, 0.095, 0.06], self._layout_label(), self._on_toggle)
        self.btn_run = self._add_button([0.89, 0.83, 0.095, 0.06], "Run", self._on_run)
        self.btn_reset = self._add_button([0.89, 0.76, 0.095, 0.06], "Reset", self._on_reset)

        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("button_release_event", self.on_release),
            canvas.mpl_connect("axes_leave_event", self.on_leave),
            canvas.mpl_connect("resize_event", self.on_resize),
            canvas.mpl_connect("close_event", self.on_close),
        ]

        self.vis.on_draw = self.redraw
        width, height = self._surface_size()
        if self.vis.mount(width, height):
            self.vis.attach_loop(
                FrameLoop(lambda ms: canvas.new_timer(interval=ms), self.vis.tick, self.vis.config.frame_interval_ms)
            )
        self.redraw()

    # ----- layout helpers -----
    def _add_button(self, rect, label, callback) -> Button:
        bax = self.fig.add_axes(rect)
        btn = Button(bax, label, **BUTTON_STYLE)
        btn.label.set_color(DEFAULT_PALETTE.text)
        btn.label.set_fontsize(8)
        btn.on_clicked(callback)
        self.buttons.append(btn)
        return btn

    def _layout_label(self) -> str:
        return "NN (Layered)" if self.vis.mode == LayoutMode.NN else "GNN (Graph)"

    def _surface_size(self):
        bbox = self.ax.get_window_extent()
        return float(bbox.width), float(bbox.height)

    # ----- drawing -----
    def redraw(self) -> None:
        sel = self.vis.controller.selected_id
        self.renderer.draw_simulation(self.vis.simulation, sel)
        self.log_text.set_text("KERNEL LOG\n" + "\n".join(self.vis.log.entries))

        info = self.vis.inspector()
        if info is None:
            self.inspector_text.set_visible(False)
        else:
            self.inspector_text.set_text(
                f"NODE_{info['id']}\nVAL:   {info['val']}\nLAYER: {info['layer']}\nACT:   {info['status']}"
            )
            self.inspector_text.set_visible(True)

        self.btn_run.label.set_text("Running" if self.vis.simulation.running else "Run")
        self.fig.canvas.draw_idle()

    # ----- widget callbacks -----
    def _on_toggle(self, _event) -> None:
        self.vis.toggle_layout()
        self.btn_layout.label.set_text(self._layout_label())
        self.redraw()

    def _on_run(self, _event) -> None:
        self.vis.run()
        self.redraw()

    def _on_reset(self, _event) -> None:
        self.vis.reset()
        self.redraw()

    # ----- pointer events -----
    def on_press(self, event) -> None:
        if event.inaxes is not self.ax or event.button != 1:
            return
        if event.xdata is None or event.ydata is None:
            return
        if self.vis.pointer_down(float(event.xdata), float(event.ydata)) is not None:
            self.redraw()

    def on_motion(self, event) -> None:
        if self.vis.controller.drag_id is None:
            return
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return
        self.vis.pointer_move(float(event.xdata), float(event.ydata))

    def on_release(self, _event) -> None:
        self.vis.pointer_up()

    def on_leave(self, event) -> None:
        if event.inaxes is self.ax:
            self.vis.controller.pointer_leave()

    # ----- lifecycle events -----
    def on_resize(self, _event) -> None:
        width, height = self._surface_size()
        if self.vis.resize(width, height):
            self.redraw()

    def on_close(self, _event) -> None:
        self.vis.teardown()
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Interactive commuter graph visualizer")
    p.add_argument("--mode", choices=[m.name for m in LayoutMode], default=LayoutMode.GNN.name)
    p.add_argument("--config", type=str, default="", help="Optional YAML config path")
    p.add_argument("--seed", type=int, default=None, help="Seed for reproducible layouts")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else (logging.INFO if args.verbose == 1 else logging.DEBUG)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")

    cfg = load_config(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        cfg.seed = args.seed
    vis = Visualizer(cfg, mode=LayoutMode[args.mode])
    shell = MatplotlibShell(vis)
    logger.info("Window open; mode %s", vis.mode.name)
    plt.show()
    # Keep a reference until the window closes
    del shell
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
