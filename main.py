#!/usr/bin/env python3
"""Route a packet through a generated topology and play it hop by hop.

Usage:
    python main.py --topology ring --nodes 8 --source 1 --target 5
    python main.py --strategy bfs --topology random --nodes 12 --excess-links 6
    python main.py --debug    # Enable debug logging
"""

import argparse
import logging
import sys

from netroute_sim.core.controller import SimulationController
from netroute_sim.core.exceptions import NetworkSimError
from netroute_sim.core.playback import TraversalPlayer
from netroute_sim.core.routing_algorithms import route_latency, strategy_factory
from netroute_sim.topologies.generators import (
    line_topology,
    random_topology,
    ring_topology,
    star_topology,
)

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    logger.debug("Logging initialized at %s level", "DEBUG" if debug else "INFO")


def build_topology(args: argparse.Namespace):
    """Create the topology selected on the command line."""
    if args.topology == "line":
        return line_topology(args.nodes)
    if args.topology == "ring":
        return ring_topology(args.nodes, args.excess_links, seed=args.seed)
    if args.topology == "star":
        return star_topology(args.nodes)
    return random_topology(args.nodes, args.excess_links, seed=args.seed)


def main() -> int:
    """Main function to run a single packet simulation."""
    parser = argparse.ArgumentParser(description="Network Routing Simulator")
    parser.add_argument(
        "--strategy",
        choices=["bfs", "dijkstra"],
        default="dijkstra",
        help="Routing strategy",
    )
    parser.add_argument(
        "--topology",
        choices=["line", "ring", "star", "random"],
        default="random",
        help="Topology to generate",
    )
    parser.add_argument("--nodes", type=int, default=10, help="Number of devices")
    parser.add_argument(
        "--excess-links", type=int, default=5, help="Extra links for ring/random"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--source", default="1", help="Origin device id")
    parser.add_argument("--target", default=None, help="Destination device id")
    parser.add_argument(
        "--time-scale", type=float, default=1.0, help="Time units per ms of latency"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    setup_logging(args.debug)

    try:
        topology = build_topology(args)
        player = TraversalPlayer(time_scale=args.time_scale)
        controller = SimulationController(
            topology, player, strategy_factory(args.strategy)
        )
        target = args.target or str(args.nodes)

        player.register_hook(
            "packet_hop",
            lambda packet, current, following, now: logger.info(
                "t=%.3f %s -> %s", now, current.id, following.id
            ),
        )
        packet = controller.simulate_packet(args.source, target)
        logger.info(
            "%s route: %s (%d hops, %.3fms)",
            controller.strategy.name,
            " -> ".join(device.id for device in packet.route),
            packet.hop_count,
            route_latency(topology, packet.route),
        )
        player.run()
    except NetworkSimError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
