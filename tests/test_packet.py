"""
Unit tests for the packet traversal state machine.
"""

import pytest

from netroute_sim.core.device import Device
from netroute_sim.core.exceptions import InvalidArgumentError
from netroute_sim.core.packet import Packet


@pytest.fixture
def route():
    return [Device("a"), Device("b"), Device("c"), Device("d")]


class TestPacket:
    """Tests for Packet class."""

    def test_starts_at_origin(self, route):
        packet = Packet(route[0], route[-1], route)
        assert packet.cursor == 0
        assert packet.current_device() == route[0]
        assert packet.next_device() == route[1]
        assert not packet.is_arrived()
        assert packet.hop_count == 3
        assert packet.remaining_hops == 3

    def test_advance_until_arrived(self, route):
        packet = Packet(route[0], route[-1], route)
        visited = [packet.current_device()]
        for _ in range(len(route) - 1):
            assert not packet.is_arrived()
            packet.advance_hop()
            visited.append(packet.current_device())
        assert visited == route
        assert packet.is_arrived()
        assert packet.next_device() is None
        assert packet.remaining_hops == 0

    def test_advance_is_idempotent_when_arrived(self, route):
        packet = Packet(route[0], route[-1], route)
        for _ in range(10):
            packet.advance_hop()
        assert packet.cursor == len(route) - 1
        assert packet.current_device() == route[-1]

    def test_single_device_route_is_arrived(self):
        device = Device("solo")
        packet = Packet(device, device, [device])
        assert packet.is_arrived()
        packet.advance_hop()
        assert packet.cursor == 0

    def test_route_is_a_snapshot(self, route):
        packet = Packet(route[0], route[-1], route)
        route.append(Device("e"))
        assert len(packet.route) == 4
        assert isinstance(packet.route, tuple)

    def test_fields_are_read_only(self, route):
        packet = Packet(route[0], route[-1], route)
        with pytest.raises(AttributeError):
            packet.cursor = 2
        with pytest.raises(AttributeError):
            packet.route = ()

    @pytest.mark.parametrize(
        "origin, destination, path",
        [
            (None, Device("b"), [Device("b")]),
            (Device("a"), None, [Device("a")]),
            (Device("a"), Device("b"), []),
            (Device("a"), Device("b"), None),
        ],
    )
    def test_invalid_construction(self, origin, destination, path):
        with pytest.raises(InvalidArgumentError):
            Packet(origin, destination, path)

    def test_ids_are_unique(self, route):
        first = Packet(route[0], route[-1], route)
        second = Packet(route[0], route[-1], route)
        assert first.id != second.id
