"""
Lifecycle and resize adapter.

`Visualizer` is the handle a UI shell owns and passes around: it wires the
generator, simulation, controller and event log together, (re)generates the
topology when the drawing surface is mounted or resized, and owns the frame
loop, the only resource with an explicit lifetime.

`FrameLoop` drives ``tick`` from a UI specific timer (for example
``figure.canvas.new_timer`` in matplotlib) and can be cancelled on teardown.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Optional

from .config import SimulationConfig
from .controller import InteractionController
from .enums import LayoutMode
from .events import EventLog
from .simulation import Simulation
from .topology import TopologyGenerator

logger = logging.getLogger(__name__)


class FrameLoop:
    """
    Repeating frame callback on top of a timer object.

    Args:
        timer_factory: Callable taking ``interval_ms`` and returning an object
            with ``add_callback(fn)``, ``start()`` and ``stop()``
        callback: Called once per frame
        interval_ms: Frame interval in milliseconds
    """

    def __init__(self, timer_factory: Callable[[int], Any], callback: Callable[[], None], interval_ms: int = 16):
        self.timer_factory = timer_factory
        self.callback = callback
        self.interval_ms = interval_ms
        self._timer: Any = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        """Start the loop, restarting it if it is already running."""
        self.cancel()
        self._timer = self.timer_factory(self.interval_ms)
        self._timer.add_callback(self.callback)
        self._timer.start()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer = None


class Visualizer:
    """
    Owning handle of one visualization instance.

    Attributes:
        config: Shared configuration
        simulation: Simulation state
        generator: Topology generator
        log: Event log sink
        controller: Interaction controller
        mounted: True once a surface of non-zero size has been attached
        on_draw: Optional callback invoked after every tick
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        rng: random.Random | None = None,
        mode: LayoutMode = LayoutMode.GNN,
    ):
        self.config = (config or SimulationConfig()).validate()
        rng = rng or random.Random(self.config.seed)
        self.generator = TopologyGenerator(self.config, rng)
        self.simulation = Simulation(config=self.config, rng=rng)
        self.log = EventLog(self.config.log_capacity, "> System Ready.")
        self.controller = InteractionController(self.simulation, self.generator, self.log, mode)
        self.mounted = False
        self.on_draw: Optional[Callable[[], None]] = None
        self._loop: Optional[FrameLoop] = None

    @property
    def width(self) -> float:
        return self.simulation.topology.width

    @property
    def height(self) -> float:
        return self.simulation.topology.height

    @property
    def mode(self) -> LayoutMode:
        return self.controller.mode

    # ----- lifecycle -----
    def mount(self, width: Optional[float], height: Optional[float]) -> bool:
        """
        Attach to a drawing surface and build the initial topology.

        A missing or zero-size surface skips initialization entirely.

        Returns:
            True if the visualizer was initialized
        """
        if not width or not height or width <= 0 or height <= 0:
            logger.warning("No drawing surface available (%r x %r); skipping init", width, height)
            return False
        self.controller.regenerate(width, height)
        self.mounted = True
        self.log.replace(
            "> Graph constructed.",
            f"> Mode: {self.mode.description}",
        )
        return True

    def resize(self, width: Optional[float], height: Optional[float]) -> bool:
        """
        React to a surface size change: full stop and regenerate.

        Returns:
            True if a new topology was generated
        """
        if not self.mounted:
            return self.mount(width, height)
        if not width or not height or width <= 0 or height <= 0:
            return False
        if float(width) == self.width and float(height) == self.height:
            return False
        logger.debug("Resize %sx%s -> %sx%s", self.width, self.height, width, height)
        self.controller.regenerate(width, height)
        return True

    def attach_loop(self, loop: FrameLoop) -> None:
        """Take ownership of a frame loop and start it."""
        if self._loop is not None:
            self._loop.cancel()
        self._loop = loop
        loop.start()

    def teardown(self) -> None:
        """Cancel the frame loop; the instance stays inspectable."""
        if self._loop is not None:
            self._loop.cancel()
            self._loop = None
        self.mounted = False

    @property
    def loop_running(self) -> bool:
        return self._loop is not None and self._loop.running

    # ----- frame -----
    def tick(self) -> None:
        """Advance one tick, then draw."""
        if not self.mounted:
            return
        self.simulation.advance()
        if self.on_draw is not None:
            self.on_draw()

    # ----- command surface -----
    def toggle_layout(self) -> None:
        self.controller.toggle_layout()

    def run(self) -> None:
        self.controller.run()

    def reset(self) -> None:
        self.controller.reset()

    def pointer_down(self, x: float, y: float) -> Optional[int]:
        return self.controller.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.controller.pointer_move(x, y)

    def pointer_up(self) -> None:
        self.controller.pointer_up()

    def inspector(self):
        return self.controller.inspector()
