"""
Tests for the network and simulation controllers.

Tests:
- Command surface: add/remove/rename/kind change/connect/disconnect
- Error taxonomy surfaced to callers
- Route orchestration and strategy switching
- Import/export of topologies
"""

import pytest

from conftest import ids
from netroute_sim.core.controller import NetworkController, SimulationController
from netroute_sim.core.enums import DeviceKind
from netroute_sim.core.exceptions import (
    DeviceNotFoundError,
    DuplicateIdError,
    InvalidArgumentError,
    NoRouteFoundError,
    TopologyFormatError,
)
from netroute_sim.core.routing_algorithms import BfsStrategy, DijkstraStrategy
from netroute_sim.core.topology import Topology


@pytest.fixture
def network():
    return NetworkController(Topology())


@pytest.fixture
def office(network):
    """PC1 - R1 - R2 - PC2 with a slow direct R1 - PC2 link."""
    network.add_device(DeviceKind.PC, "PC1")
    network.add_device("Router", "R1")
    network.add_device("Router", "R2")
    network.add_device("PC", "PC2", "Reception")
    network.connect_devices("PC1", "R1", 1)
    network.connect_devices("R1", "R2", 2)
    network.connect_devices("R2", "PC2", 3)
    network.connect_devices("R1", "PC2", 50)
    return network


class TestNetworkController:
    """Tests for NetworkController class."""

    def test_add_device(self, network):
        device = network.add_device("Switch", "SW1", "Core")
        assert device in network.topology
        assert device.kind == DeviceKind.SWITCH
        assert device.name == "Core"

    def test_duplicate_id_rejected_ignoring_case(self, office):
        with pytest.raises(DuplicateIdError):
            office.add_device("PC", "pc1")
        assert office.topology.find_device("PC1").kind == DeviceKind.PC

    def test_blank_id_rejected(self, network):
        with pytest.raises(InvalidArgumentError):
            network.add_device("PC", "  ")

    def test_remove_device(self, office):
        office.remove_device("r2")
        assert office.topology.find_device("R2") is None
        r1 = office.topology.find_device("R1")
        assert [n.id for n in office.topology.neighbors(r1)] == ["PC1", "PC2"]

    def test_remove_unknown_device(self, office):
        with pytest.raises(DeviceNotFoundError) as excinfo:
            office.remove_device("R9")
        assert excinfo.value.device_id == "R9"

    def test_rename_notifies(self, office, listener):
        office.topology.add_listener(listener)
        office.rename_device("pc2", "Front desk")
        assert office.topology.find_device("PC2").name == "Front desk"
        assert listener.calls == 1

    def test_rename_blank(self, office, listener):
        office.topology.add_listener(listener)
        with pytest.raises(InvalidArgumentError):
            office.rename_device("PC2", "")
        assert office.topology.find_device("PC2").name == "Reception"
        assert listener.calls == 0

    def test_change_kind_keeps_links(self, office):
        office.change_device_kind("R2", "Switch")
        r2 = office.topology.find_device("R2")
        assert r2.kind == DeviceKind.SWITCH
        assert len(office.topology.links_from(r2)) == 2

    def test_change_kind_notifies(self, office, listener):
        office.topology.add_listener(listener)
        office.change_device_kind("R1", DeviceKind.SWITCH)
        assert listener.calls == 1

    def test_change_kind_rejects_none(self, office):
        with pytest.raises(InvalidArgumentError):
            office.change_device_kind("R2", None)

    def test_connect_is_bidirectional(self, office):
        topology = office.topology
        r1, r2 = topology.find_device("R1"), topology.find_device("R2")
        assert topology.latency_between(r1, r2) == 2
        assert topology.latency_between(r2, r1) == 2

    def test_connect_negative_latency(self, office):
        with pytest.raises(InvalidArgumentError):
            office.connect_devices("PC1", "R2", -1)
        pc1, r2 = office.topology.find_device("PC1"), office.topology.find_device("R2")
        assert r2 not in office.topology.neighbors(pc1)

    def test_connect_unknown_device(self, office):
        with pytest.raises(DeviceNotFoundError):
            office.connect_devices("PC1", "R9", 1)

    def test_disconnect_both_directions(self, office):
        office.disconnect_devices("R1", "PC2")
        topology = office.topology
        r1, pc2 = topology.find_device("R1"), topology.find_device("PC2")
        assert pc2 not in topology.neighbors(r1)
        assert r1 not in topology.neighbors(pc2)

    def test_new_topology(self, office):
        office.new_topology()
        assert len(office.topology) == 0

    def test_export_import_round_trip(self, office):
        data = office.export_topology()
        other = NetworkController(Topology())
        other.add_device("PC", "leftover")
        other.import_topology(data)
        assert other.topology.find_device("leftover") is None
        assert other.export_topology() == data
        assert other.topology.find_device("PC2").name == "Reception"

    def test_failed_import_keeps_topology(self, office):
        before = office.export_topology()
        with pytest.raises(TopologyFormatError):
            office.import_topology({"devices": [{"kind": "Toaster", "id": "T1"}]})
        assert office.export_topology() == before


class TestSimulationController:
    """Tests for SimulationController class."""

    def test_default_strategy_is_dijkstra(self, office):
        assert isinstance(SimulationController(office.topology).strategy, DijkstraStrategy)

    def test_compute_route(self, office):
        simulation = SimulationController(office.topology)
        assert ids(simulation.compute_route("pc1", "pc2")) == ["PC1", "R1", "R2", "PC2"]
        simulation.strategy = BfsStrategy()
        assert ids(simulation.compute_route("PC1", "PC2")) == ["PC1", "R1", "PC2"]

    def test_route_reflects_renamed_device(self, office):
        office.rename_device("R1", "Edge router")
        simulation = SimulationController(office.topology)
        route = simulation.compute_route("PC1", "PC2")
        assert route[1].name == "Edge router"
        assert route[1] is office.topology.find_device("R1")

    def test_toggle_strategy(self, office):
        simulation = SimulationController(office.topology)
        assert isinstance(simulation.toggle_strategy(), BfsStrategy)
        assert isinstance(simulation.toggle_strategy(), DijkstraStrategy)

    def test_null_strategy_rejected(self, office):
        simulation = SimulationController(office.topology)
        with pytest.raises(InvalidArgumentError):
            simulation.strategy = None

    def test_unknown_endpoint(self, office):
        simulation = SimulationController(office.topology)
        with pytest.raises(DeviceNotFoundError):
            simulation.simulate_packet("PC1", "PC9")

    def test_no_route(self, office):
        office.add_device("PC", "Isolated")
        simulation = SimulationController(office.topology)
        with pytest.raises(NoRouteFoundError) as excinfo:
            simulation.simulate_packet("PC1", "Isolated")
        assert excinfo.value.source_id == "PC1"
        assert excinfo.value.target_id == "Isolated"

    def test_simulate_packet_plays_to_completion(self, office, player):
        simulation = SimulationController(office.topology, player)
        finished = []
        packet = simulation.simulate_packet("PC1", "PC2", lambda: finished.append(True))
        assert packet.cursor == 0
        assert packet.origin.id == "PC1" and packet.destination.id == "PC2"
        player.run()
        assert packet.is_arrived()
        assert finished == [True]
        assert player.env.now == 6

    def test_strategy_swap_does_not_affect_in_flight_packet(self, office, player):
        simulation = SimulationController(office.topology, player)
        packet = simulation.simulate_packet("PC1", "PC2")
        simulation.toggle_strategy()
        player.run()
        assert ids(packet.route) == ["PC1", "R1", "R2", "PC2"]
        assert packet.is_arrived()

    def test_error_hierarchy(self):
        assert issubclass(DeviceNotFoundError, KeyError)
        assert issubclass(InvalidArgumentError, ValueError)
        assert str(DeviceNotFoundError("X")) == "No device with id = X"
