#!/usr/bin/env python3
"""
Commuter CLI

Usage modes:
- Default run: generate a topology, start message passing, advance N ticks and
  print a snapshot summary (or write JSON)
- Validation: check the generated graph for backward, duplicate or dangling
  edges and print the issues
- Stats: print graph statistics
- Export: write GraphML for external tools or a PNG of the final frame
- Utility: show version
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List

# Allow running as ``python scripts/commuter_cli.py`` from a source checkout
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from commuter_core import LayoutMode, Simulation, TopologyGenerator  # noqa: E402
from commuter_core.config import SimulationConfig, load_config  # noqa: E402
from commuter_core.metrics import (  # noqa: E402
    active_node_count,
    completion_ratio,
    packets_in_flight,
)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Generate a commuter graph, animate packets headlessly and dump snapshot/metrics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")

    # Topology
    p.add_argument("--mode", type=str, default="GNN", help="Layout mode: NN or GNN")
    p.add_argument("--width", type=float, default=800.0, help="Surface width in pixels")
    p.add_argument("--height", type=float, default=600.0, help="Surface height in pixels")
    p.add_argument("--config", type=str, default="", help="Optional YAML config path")
    p.add_argument("--seed", type=int, default=None, help="Random seed (overrides the config)")

    # Execution
    p.add_argument("--ticks", type=int, default=60, help="Number of ticks to advance")
    p.add_argument(
        "--run",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Spawn packets before advancing (--no-run only generates)",
    )
    p.add_argument("--out", type=str, default="", help="Optional output JSON file path")

    # Analysis / export
    p.add_argument("--validate", action="store_true", help="Validate the generated graph and exit")
    p.add_argument("--stats", action="store_true", help="Print graph statistics")
    p.add_argument("--export-graphml", type=str, default="", help="Export the generated graph to GraphML at given path")
    p.add_argument("--render", type=str, default="", help="Render the final frame to a PNG at given path")

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    cfg = load_config(args.config) if args.config else SimulationConfig()
    if args.seed is not None:
        cfg.seed = int(args.seed)
    return cfg


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def summarize(sim: Simulation) -> Dict[str, Any]:
    """Compact summary of a simulation for JSON output."""
    snap = sim.snapshot()
    return {
        "t": snap["t"],
        "mode": snap["mode"],
        "running": snap["running"],
        "nodes": len(snap["nodes"]),
        "edges": len(snap["edges"]),
        "packets_in_flight": packets_in_flight(sim),
        "active_nodes": active_node_count(sim),
        "completion": completion_ratio(sim),
        "activation": {nid: round(n["activation"], 4) for nid, n in snap["nodes"].items()},
        "stats": snap["stats"],
    }


def main(argv: List[str] | None = None) -> int:
    from commuter_core import __version__ as commuter_version

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(commuter_version)
        return 0

    mode_name = args.mode.upper()
    if mode_name not in LayoutMode.__members__:
        print(f"error: unknown mode {args.mode!r} (expected NN or GNN)", file=sys.stderr)
        return 2
    if args.width <= 0 or args.height <= 0:
        print("error: --width and --height must be positive", file=sys.stderr)
        return 2
    if args.ticks < 0:
        print("error: --ticks must be non-negative", file=sys.stderr)
        return 2

    try:
        cfg = build_config(args)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    mode = LayoutMode[mode_name]
    logging.info("Generating %s topology for %gx%g", mode.name, args.width, args.height)
    gen = TopologyGenerator(cfg)
    topo = gen.generate(args.width, args.height, mode)

    if args.validate:
        issues = topo.validate_graph_integrity()
        if not topo.is_acyclic():
            issues.setdefault("cycles", []).append("Graph contains a directed cycle")
        total = sum(len(v) for v in issues.values())
        logging.info("Validation issues: %d", total)
        print(json.dumps({"total_issues": total, "results": issues}, indent=2))
        return 1 if total > 0 else 0

    if args.stats:
        print(json.dumps(topo.get_graph_statistics(), indent=2))

    if args.export_graphml:
        logging.info("Exporting GraphML to %s", args.export_graphml)
        topo.export_graphml(args.export_graphml)

    sim = Simulation(topo, config=cfg, rng=gen.rng)
    if args.run:
        sim.run()
    sim.step(args.ticks)

    if args.render:
        from viz.renderer import render_png

        logging.info("Rendering final frame to %s", args.render)
        render_png(sim, args.render)

    summary = summarize(sim)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(summary, f, indent=2)
    elif not args.stats:
        print(json.dumps(summary, indent=2))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
