"""Controllers for network simulation.

This module defines the NetworkController, the command surface for editing
a topology, and the SimulationController, which turns a pair of device ids
into a routed packet ready for playback.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from netroute_sim.core.device import Device, make_device
from netroute_sim.core.enums import DeviceKind
from netroute_sim.core.exceptions import (
    DeviceNotFoundError,
    DuplicateIdError,
    InvalidArgumentError,
    NoRouteFoundError,
)
from netroute_sim.core.packet import Packet
from netroute_sim.core.playback import TraversalPlayer
from netroute_sim.core.routing_algorithms import (
    BfsStrategy,
    DijkstraStrategy,
    RoutingStrategy,
)
from netroute_sim.core.topology import Topology
from netroute_sim.utils.serialization import topology_from_dict, topology_to_dict

logger = logging.getLogger(__name__)


def _require_device(topology: Topology, device_id: Optional[str]) -> Device:
    device = topology.find_device(device_id)
    if device is None:
        raise DeviceNotFoundError(device_id)
    return device


class NetworkController:
    """Editing operations on a topology, addressed by device id.

    Ids are matched case-insensitively. Links created here are
    bidirectional: both directions are added or removed together.

    Attributes:
        topology: The topology being edited.
    """

    def __init__(self, topology: Topology) -> None:
        self.topology = topology

    def new_topology(self) -> None:
        """Remove every device and link."""
        for device in self.topology.all_devices():
            self.topology.remove_device(device)

    def add_device(
        self, kind: Union[DeviceKind, str], device_id: str, name: Optional[str] = None
    ) -> Device:
        """Create and register a new device.

        Args:
            kind: Kind of the new device.
            device_id: Unique identifier for the device.
            name: Descriptive name; blank falls back to the id.

        Returns:
            The created device.

        Raises:
            DuplicateIdError: If a device with the same id (ignoring case) exists.
        """
        if self.topology.find_device(device_id) is not None:
            raise DuplicateIdError(device_id)
        device = make_device(kind, device_id, name)
        self.topology.add_device(device)
        return device

    def remove_device(self, device_id: str) -> None:
        self.topology.remove_device(_require_device(self.topology, device_id))

    def rename_device(self, device_id: str, new_name: str) -> None:
        """Change a device's descriptive name.

        Raises:
            DeviceNotFoundError: If the id is unknown.
            InvalidArgumentError: If the new name is blank.
        """
        device = _require_device(self.topology, device_id)
        device.rename(new_name)
        self.topology.notify_change()

    def change_device_kind(
        self, device_id: str, kind: Union[DeviceKind, str]
    ) -> None:
        """Change a device's kind, keeping its links."""
        device = _require_device(self.topology, device_id)
        if kind is None:
            raise InvalidArgumentError("Device kind cannot be null.")
        device.kind = DeviceKind.parse(kind)
        self.topology.notify_change()

    def connect_devices(self, source_id: str, target_id: str, latency: float) -> None:
        """Link two devices in both directions with the same latency.

        Raises:
            DeviceNotFoundError: If either id is unknown.
            InvalidArgumentError: If the latency is negative.
        """
        source = _require_device(self.topology, source_id)
        target = _require_device(self.topology, target_id)
        if latency is None or latency < 0:
            raise InvalidArgumentError("Latency cannot be negative.")
        self.topology.connect(source, target, latency)
        self.topology.connect(target, source, latency)

    def disconnect_devices(self, source_id: str, target_id: str) -> None:
        """Remove the links between two devices in both directions."""
        source = _require_device(self.topology, source_id)
        target = _require_device(self.topology, target_id)
        self.topology.disconnect(source, target)
        self.topology.disconnect(target, source)

    def export_topology(self) -> Dict[str, Any]:
        return topology_to_dict(self.topology)

    def import_topology(self, data: Dict[str, Any]) -> None:
        """Replace the current topology with decoded data.

        The data is fully decoded before anything is replaced, so malformed
        input leaves the current topology untouched.

        Raises:
            TopologyFormatError: If the data cannot be decoded.
        """
        loaded = topology_from_dict(data)
        self.new_topology()
        for device in loaded.all_devices():
            self.topology.add_device(device)
        for link in loaded.all_links():
            self.topology.connect(link.source, link.target, link.latency)
        logger.info(
            "Imported topology with %d devices and %d links",
            len(loaded),
            len(loaded.all_links()),
        )


class SimulationController:
    """Starts packet simulations between devices using a routing strategy.

    Attributes:
        topology: The topology packets are routed through.
        player: Collaborator that plays packets once routed.
    """

    def __init__(
        self,
        topology: Topology,
        player: Optional[TraversalPlayer] = None,
        strategy: Optional[RoutingStrategy] = None,
    ) -> None:
        self.topology = topology
        self.player = player if player is not None else TraversalPlayer()
        self._strategy: RoutingStrategy = (
            strategy if strategy is not None else DijkstraStrategy()
        )

    @property
    def strategy(self) -> RoutingStrategy:
        return self._strategy

    @strategy.setter
    def strategy(self, strategy: RoutingStrategy) -> None:
        if strategy is None:
            raise InvalidArgumentError("Routing strategy cannot be null.")
        self._strategy = strategy

    def toggle_strategy(self) -> RoutingStrategy:
        """Switch between Dijkstra and BFS.

        Returns:
            The newly selected strategy.
        """
        if isinstance(self._strategy, DijkstraStrategy):
            self._strategy = BfsStrategy()
        else:
            self._strategy = DijkstraStrategy()
        return self._strategy

    def compute_route(self, source_id: str, target_id: str) -> List[Device]:
        """Resolve two ids and route between them with the current strategy.

        Returns:
            The non-empty route from source to target.

        Raises:
            DeviceNotFoundError: If either id is unknown.
            NoRouteFoundError: If the strategy finds no path.
        """
        origin = _require_device(self.topology, source_id)
        destination = _require_device(self.topology, target_id)
        route = self._strategy.calculate_path(self.topology, origin, destination)
        if not route:
            raise NoRouteFoundError(source_id, target_id, self._strategy.name)
        return route

    def simulate_packet(
        self,
        source_id: str,
        target_id: str,
        on_finished: Optional[Callable[[], None]] = None,
    ) -> Packet:
        """Route a packet between two devices and hand it to the player.

        Args:
            source_id: Id of the origin device.
            target_id: Id of the destination device.
            on_finished: Called once the packet reaches its destination.

        Returns:
            The packet handed to the player.
        """
        route = self.compute_route(source_id, target_id)
        packet = Packet(route[0], route[-1], route)
        logger.debug(
            "Simulating packet %d via %s: %s",
            packet.id,
            self._strategy.name,
            " -> ".join(device.id for device in route),
        )
        self.player.play(packet, self.topology, on_finished)
        return packet
