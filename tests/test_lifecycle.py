"""
Tests for the Visualizer handle: mount, resize, frame loop and teardown.
"""

import random

import pytest

from commuter_core.config import SimulationConfig
from commuter_core.enums import LayoutMode
from commuter_core.lifecycle import FrameLoop, Visualizer


class FakeTimer:
    """Stand-in for a GUI timer; fires only when told to."""

    def __init__(self, interval):
        self.interval = interval
        self.callbacks = []
        self.started = False
        self.stopped = False

    def add_callback(self, fn):
        self.callbacks.append(fn)

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def fire(self):
        for fn in self.callbacks:
            fn()


@pytest.fixture
def timers():
    return []


@pytest.fixture
def factory(timers):
    def make(interval):
        t = FakeTimer(interval)
        timers.append(t)
        return t

    return make


@pytest.fixture
def vis():
    return Visualizer(SimulationConfig(), rng=random.Random(4), mode=LayoutMode.NN)


class TestMount:
    def test_initial_log(self, vis):
        assert vis.log.entries == ("> System Ready.",)
        assert not vis.mounted

    @pytest.mark.parametrize("size", [(0, 600), (800, 0), (None, None), (-1, 10)])
    def test_absent_surface_skips_init(self, vis, size):
        assert vis.mount(*size) is False
        assert not vis.mounted
        assert len(vis.simulation.topology.nodes) == 0

    def test_mount_generates_and_logs(self, vis):
        assert vis.mount(800, 600)
        assert vis.mounted
        assert len(vis.simulation.topology.nodes) == 23
        assert vis.log.entries == ("> Graph constructed.", "> Mode: Feed-Forward Network")

    def test_mount_gnn_mode_message(self):
        v = Visualizer(rng=random.Random(0))
        v.mount(640, 480)
        assert v.log.entries[1] == "> Mode: Graph Topology"

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            Visualizer(SimulationConfig(decay=1.5))


class TestResize:
    def test_resize_regenerates(self, vis):
        vis.mount(800, 600)
        vis.run()
        vis.pointer_down(160.0, 100.0)
        assert vis.resize(1024, 768)
        assert (vis.width, vis.height) == (1024.0, 768.0)
        assert not vis.simulation.running
        assert vis.simulation.packets == []
        assert vis.controller.selected_id is None

    def test_unchanged_size_is_ignored(self, vis):
        vis.mount(800, 600)
        topo = vis.simulation.topology
        assert not vis.resize(800, 600)
        assert vis.simulation.topology is topo

    def test_invalid_size_is_ignored(self, vis):
        vis.mount(800, 600)
        assert not vis.resize(0, 0)
        assert vis.width == 800.0

    def test_resize_before_mount_mounts(self, vis):
        assert vis.resize(300, 200)
        assert vis.mounted


class TestFrameLoop:
    def test_loop_start_and_cancel(self, factory, timers):
        calls = []
        loop = FrameLoop(factory, lambda: calls.append(1), interval_ms=16)
        loop.start()
        assert loop.running
        assert timers[0].interval == 16
        assert timers[0].started
        timers[0].fire()
        assert calls == [1]
        loop.cancel()
        assert not loop.running
        assert timers[0].stopped

    def test_restart_replaces_timer(self, factory, timers):
        loop = FrameLoop(factory, lambda: None)
        loop.start()
        loop.start()
        assert len(timers) == 2
        assert timers[0].stopped
        assert not timers[1].stopped

    def test_cancel_when_not_started(self, factory):
        FrameLoop(factory, lambda: None).cancel()


class TestVisualizerLoop:
    def test_tick_advances_and_draws(self, vis, factory, timers):
        draws = []
        vis.on_draw = lambda: draws.append(vis.simulation.t)
        vis.mount(800, 600)
        vis.attach_loop(FrameLoop(factory, vis.tick))
        vis.run()
        timers[0].fire()
        timers[0].fire()
        assert vis.simulation.t == 2
        assert draws == [1, 2]

    def test_tick_before_mount_is_noop(self, vis):
        vis.on_draw = lambda: pytest.fail("should not draw")
        vis.tick()

    def test_teardown_cancels_loop(self, vis, factory, timers):
        vis.mount(800, 600)
        vis.attach_loop(FrameLoop(factory, vis.tick))
        assert vis.loop_running
        vis.teardown()
        assert not vis.loop_running
        assert timers[0].stopped
        assert not vis.mounted
        # state stays inspectable
        assert len(vis.simulation.topology.nodes) == 23

    def test_attach_new_loop_cancels_old(self, vis, factory, timers):
        vis.attach_loop(FrameLoop(factory, vis.tick))
        vis.attach_loop(FrameLoop(factory, vis.tick))
        assert timers[0].stopped
        assert vis.loop_running


class TestCommandSurface:
    def test_toggle_then_reset(self, vis):
        vis.mount(800, 600)
        vis.toggle_layout()
        assert vis.mode == LayoutMode.GNN
        vis.run()
        vis.reset()
        assert vis.log.entries == ("> Kernel history cleared.", "> System ready.")

    def test_pointer_and_inspector(self, vis):
        vis.mount(800, 600)
        node = vis.simulation.topology.nodes[0]
        assert vis.pointer_down(node.x, node.y) == 0
        vis.pointer_move(10.0, 20.0)
        vis.pointer_up()
        assert (node.x, node.y) == (10.0, 20.0)
        assert vis.inspector()["id"] == 0
