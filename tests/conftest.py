"""
Pytest configuration and shared fixtures for the routing simulator tests.
"""

from typing import List

import pytest

from netroute_sim.core.device import Device
from netroute_sim.core.enums import DeviceKind
from netroute_sim.core.playback import TraversalPlayer
from netroute_sim.core.topology import Topology


class RecordingListener:
    """Topology listener that counts notifications."""

    def __init__(self) -> None:
        self.calls = 0

    def on_topology_changed(self) -> None:
        self.calls += 1


# ============== Topology Fixtures ==============

@pytest.fixture
def empty_topology() -> Topology:
    """Create an empty topology."""
    return Topology()


@pytest.fixture
def scenario_topology() -> Topology:
    """Links 1->2 (5), 2->3 (1) and 1->3 (100)."""
    topology = Topology()
    d1, d2, d3 = Device("1"), Device("2", kind=DeviceKind.ROUTER), Device("3")
    topology.connect(d1, d2, 5)
    topology.connect(d2, d3, 1)
    topology.connect(d1, d3, 100)
    return topology


@pytest.fixture
def diamond_topology() -> Topology:
    """Two equal-hop paths A->B->D and A->C->D, the C branch being faster."""
    topology = Topology()
    a, b, c, d = (Device(x) for x in "ABCD")
    topology.connect(a, b, 10)
    topology.connect(a, c, 1)
    topology.connect(b, d, 10)
    topology.connect(c, d, 1)
    return topology


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def player() -> TraversalPlayer:
    return TraversalPlayer()


def ids(route: List[Device]) -> List[str]:
    """Return the ids of a route's devices."""
    return [device.id for device in route]
