"""
Tests for the metrics helpers built on simulation stats.
"""

import random

import pytest

from commuter_core.config import SimulationConfig
from commuter_core.enums import LayoutMode
from commuter_core.graph import Edge, Node, Topology
from commuter_core.metrics import (
    active_node_count,
    arrivals_by_node,
    completion_ratio,
    first_arrival_tick,
    packets_in_flight,
    ticks_to_arrival,
    total_arrivals,
)
from commuter_core.simulation import Simulation


def _fan_in():
    t = Topology(300, 300, LayoutMode.NN)
    t.add_node(Node(0, 50.0, 50.0, layer=0))
    t.add_node(Node(1, 50.0, 250.0, layer=0))
    t.add_node(Node(2, 250.0, 150.0, layer=1))
    t.add_edge(Edge(0, 2))
    t.add_edge(Edge(1, 2))
    cfg = SimulationConfig(speed_min=0.25, speed_max=0.25)
    return Simulation(t, config=cfg, rng=random.Random(0))


def test_ticks_to_arrival():
    assert ticks_to_arrival(0.02) == 50
    assert ticks_to_arrival(0.03) == 34
    assert ticks_to_arrival(1.0) == 1
    with pytest.raises(ValueError):
        ticks_to_arrival(0.0)


def test_counts_before_and_after_arrival():
    sim = _fan_in()
    assert completion_ratio(sim) == 1.0
    sim.run()
    assert packets_in_flight(sim) == 2
    assert completion_ratio(sim) == 0.0
    sim.step(4)
    assert packets_in_flight(sim) == 0
    assert total_arrivals(sim) == 2
    assert arrivals_by_node(sim) == {2: 2}
    assert first_arrival_tick(sim, 2) == 4
    assert first_arrival_tick(sim, 0) is None
    assert completion_ratio(sim) == 1.0


def test_active_node_count():
    sim = _fan_in()
    sim.run()
    sim.step(4)
    assert active_node_count(sim) == 1
    sim.reset()
    assert active_node_count(sim) == 0


def test_completion_after_reset_and_second_run():
    t = Topology(400, 200, LayoutMode.NN)
    t.add_node(Node(0, 100.0, 100.0, layer=0))
    t.add_node(Node(1, 300.0, 100.0, layer=1))
    t.add_edge(Edge(0, 1))
    sim = Simulation(t, config=SimulationConfig(speed_min=0.1, speed_max=0.1), rng=random.Random(0))
    sim.run()
    sim.step(3)
    sim.reset()
    assert sim.stats["packets_dropped"] == 1
    sim.run()
    assert completion_ratio(sim) == 0.0
    sim.step(20)
    assert sim.packets == []
    assert completion_ratio(sim) == 1.0
