"""Topology generators for network simulation.

This module provides functions for building common topologies, including
line, ring, star and random mesh layouts. Device ids are the strings
"1" to "n" unless stated otherwise.
"""

from typing import List, Optional, Tuple

import numpy as np

from netroute_sim.core.device import Device
from netroute_sim.core.enums import DeviceKind
from netroute_sim.core.exceptions import InvalidArgumentError
from netroute_sim.core.topology import Topology


def _link_both(topology: Topology, a: Device, b: Device, latency: float) -> None:
    topology.connect(a, b, latency)
    topology.connect(b, a, latency)


def _numbered_devices(n: int, kind: DeviceKind) -> List[Device]:
    if n < 1:
        raise InvalidArgumentError("A topology needs at least one device.")
    return [Device(str(i), kind=kind) for i in range(1, n + 1)]


def line_topology(n: int, latency: float = 1.0) -> Topology:
    """Generate a chain of routers 1-2-...-n.

    Args:
        n: Number of devices.
        latency: Latency of every link in milliseconds.

    Returns:
        A topology with bidirectional links between consecutive devices.
    """
    topology = Topology()
    devices = _numbered_devices(n, DeviceKind.ROUTER)
    for device in devices:
        topology.add_device(device)
    for a, b in zip(devices, devices[1:]):
        _link_both(topology, a, b, latency)
    return topology


def ring_topology(
    n: int, cross_links: int = 0, latency: float = 1.0, seed: Optional[int] = None
) -> Topology:
    """Generate a ring of routers with optional cross connections.

    Args:
        n: Number of devices in the ring.
        cross_links: Number of additional links between non-adjacent devices.
        latency: Latency of every link in milliseconds.
        seed: Seed for choosing the cross links.

    Returns:
        A topology with bidirectional ring and cross links.
    """
    topology = Topology()
    devices = _numbered_devices(n, DeviceKind.ROUTER)
    for device in devices:
        topology.add_device(device)
    if n < 2:
        return topology

    edges: List[Tuple[int, int]] = [(i, (i + 1) % n) for i in range(n)]
    for i, j in edges:
        if i != j:
            _link_both(topology, devices[i], devices[j], latency)

    possible_crosses: List[Tuple[int, int]] = [
        (i, j)
        for i in range(n)
        for j in range(i + 2, n)
        if not (i == 0 and j == n - 1)
    ]
    rng = np.random.default_rng(seed)
    order = rng.permutation(len(possible_crosses))
    for index in order[:cross_links]:
        i, j = possible_crosses[index]
        _link_both(topology, devices[i], devices[j], latency)
    return topology


def star_topology(num_leaves: int, latency: float = 1.0) -> Topology:
    """Generate a switch with PCs attached to it.

    The switch has id "S" and the PCs have ids "1" to ``num_leaves``.

    Args:
        num_leaves: Number of PCs attached to the switch.
        latency: Latency of every link in milliseconds.

    Returns:
        A star topology.
    """
    topology = Topology()
    hub = Device("S", "Switch", DeviceKind.SWITCH)
    topology.add_device(hub)
    for leaf in _numbered_devices(num_leaves, DeviceKind.PC):
        _link_both(topology, hub, leaf, latency)
    return topology


def random_topology(
    num_devices: int,
    excess_links: int = 0,
    seed: Optional[int] = None,
    min_latency: float = 1.0,
    max_latency: float = 50.0,
    bidirectional: bool = True,
) -> Topology:
    """Generate a random topology with a spanning chain and excess links.

    The devices are shuffled and chained so every device is reachable when
    links are bidirectional; then ``excess_links`` further pairs are added.
    With ``bidirectional=False`` each pair gets a single link in a random
    direction, so some devices may be unreachable from others.

    Args:
        num_devices: Number of devices.
        excess_links: Number of additional links beyond the spanning chain.
        seed: Random seed for reproducibility.
        min_latency: Lower bound of link latencies in milliseconds.
        max_latency: Upper bound of link latencies in milliseconds.
        bidirectional: Whether each pair is linked in both directions.

    Returns:
        The generated topology.
    """
    if min_latency < 0 or max_latency < min_latency:
        raise InvalidArgumentError("Latency bounds must satisfy 0 <= min <= max.")
    rng = np.random.default_rng(seed)
    devices = _numbered_devices(num_devices, DeviceKind.ROUTER)
    topology = Topology()
    for device in devices:
        topology.add_device(device)

    nodes = [int(i) for i in rng.permutation(num_devices)]
    edges: List[Tuple[int, int]] = [
        (nodes[i], nodes[i + 1]) for i in range(num_devices - 1)
    ]

    chained = {frozenset(edge) for edge in edges}
    possible_edges: List[Tuple[int, int]] = [
        (i, j)
        for i in range(num_devices)
        for j in range(i + 1, num_devices)
        if frozenset((i, j)) not in chained
    ]
    order = rng.permutation(len(possible_edges))
    edges.extend(possible_edges[index] for index in order[:excess_links])

    latencies = rng.uniform(min_latency, max_latency, size=len(edges))
    for (i, j), latency in zip(edges, latencies):
        a, b = devices[i], devices[j]
        if bidirectional:
            _link_both(topology, a, b, float(latency))
        elif rng.random() < 0.5:
            topology.connect(a, b, float(latency))
        else:
            topology.connect(b, a, float(latency))
    return topology
