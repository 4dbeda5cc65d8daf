"""Topology graph for network simulation.

This module defines the Topology class, which owns the devices and directed
links of the simulated network, answers adjacency queries and notifies
registered listeners whenever it changes.
"""

import logging
from typing import Callable, List, Optional, Protocol, Union, runtime_checkable

import networkx as nx

from netroute_sim.core.device import Device
from netroute_sim.core.exceptions import InvalidArgumentError
from netroute_sim.core.link import Link

logger = logging.getLogger(__name__)


@runtime_checkable
class TopologyListener(Protocol):
    """Observer notified with a plain "topology changed" signal."""

    def on_topology_changed(self) -> None: ...


Listener = Union[TopologyListener, Callable[[], None]]


class Topology:
    """Directed, latency-weighted network topology.

    The adjacency structure is a NetworkX directed graph whose nodes are
    Device objects and whose edges carry a ``latency`` attribute. NetworkX
    keeps successor dicts in insertion order and updates existing edges in
    place, so neighbor iteration follows link insertion order.

    The topology is not synchronized; mutate it from a single thread.

    Attributes:
        graph: NetworkX directed graph holding devices and links.
    """

    def __init__(self) -> None:
        """Initialize an empty topology."""
        self.graph = nx.DiGraph()
        self._listeners: List[Listener] = []

    # Observers

    def add_listener(self, listener: Optional[Listener]) -> None:
        """Register a listener for topology changes.

        Args:
            listener: A zero-argument callable or an object implementing
                ``on_topology_changed``. None and duplicates are ignored.
        """
        if listener is not None and listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Unregister a previously registered listener."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_change(self) -> None:
        """Notify all listeners, in registration order, that the topology changed."""
        for listener in list(self._listeners):
            if isinstance(listener, TopologyListener):
                listener.on_topology_changed()
            else:
                listener()

    # Mutations

    def add_device(self, device: Device) -> None:
        """Add a device with no outgoing links.

        Adding a device whose id is already registered does nothing and
        fires no notification.

        Args:
            device: The device to add.
        """
        if device is None:
            raise InvalidArgumentError("Device cannot be null.")
        if device in self.graph:
            return
        self.graph.add_node(device, device=device)
        logger.debug("Added device %s", device.id)
        self.notify_change()

    def remove_device(self, device: Device) -> None:
        """Remove a device together with its outgoing and incoming links.

        Args:
            device: The device to remove. Absent devices are ignored.
        """
        if device is None:
            raise InvalidArgumentError("Device cannot be null.")
        if device not in self.graph:
            return
        self.graph.remove_node(device)
        logger.debug("Removed device %s", device.id)
        self.notify_change()

    def connect(self, source: Device, target: Device, latency: float) -> None:
        """Create or update the directed link source->target.

        Missing endpoints are registered first. If the link already exists
        only its latency changes, keeping its position among the source's
        outgoing links. Latency is stored as given; callers validate it.

        Args:
            source: Source device.
            target: Target device.
            latency: Link latency in milliseconds.
        """
        if source is None or target is None:
            raise InvalidArgumentError("Devices cannot be null.")
        for device in (source, target):
            if device not in self.graph:
                self.graph.add_node(device, device=device)
        source, target = self.registered(source), self.registered(target)
        self.graph.add_edge(source, target, latency=float(latency))
        logger.debug("Connected %s->%s (%sms)", source.id, target.id, latency)
        self.notify_change()

    def disconnect(self, source: Device, target: Device) -> None:
        """Remove the directed link source->target if it exists.

        The reverse link is left untouched.
        """
        if source is None or target is None:
            raise InvalidArgumentError("Devices cannot be null.")
        if not self.graph.has_edge(source, target):
            return
        self.graph.remove_edge(source, target)
        logger.debug("Disconnected %s->%s", source.id, target.id)
        self.notify_change()

    def clear(self) -> None:
        """Remove every device and link."""
        if self.graph.number_of_nodes() == 0:
            return
        self.graph.clear()
        logger.debug("Cleared topology")
        self.notify_change()

    # Queries

    def all_devices(self) -> List[Device]:
        return list(self.graph.nodes)

    def all_links(self) -> List[Link]:
        """Return every link, grouped by source in device insertion order."""
        return [
            Link(source, target, data["latency"])
            for source, target, data in self.graph.edges(data=True)
        ]

    def links_from(self, device: Device) -> List[Link]:
        """Return the outgoing links of a device, in insertion order.

        Args:
            device: Source device.

        Returns:
            The outgoing links, or an empty list for unknown devices.
        """
        if device not in self.graph:
            return []
        # Use the stored node so links reference the registered instance.
        source = self.registered(device)
        return [
            Link(source, target, data["latency"])
            for target, data in self.graph.succ[device].items()
        ]

    def neighbors(self, device: Device) -> List[Device]:
        """Return the targets of a device's outgoing links, in link order."""
        if device not in self.graph:
            return []
        return list(self.graph.succ[device])

    def latency_between(self, source: Device, target: Device) -> float:
        """Return the latency of the direct link source->target.

        Returns:
            The link latency, or infinity if there is no direct link.
        """
        if source not in self.graph:
            return float("inf")
        data = self.graph.succ[source].get(target)
        if data is None:
            return float("inf")
        return data["latency"]

    def contains(self, device: Optional[Device]) -> bool:
        return device is not None and device in self.graph

    def find_device(self, device_id: Optional[str]) -> Optional[Device]:
        """Find a registered device by id, ignoring case.

        Args:
            device_id: Identifier to look up.

        Returns:
            The registered device, or None if no device matches.
        """
        if device_id is None:
            return None
        wanted = str(device_id).lower()
        for device in self.graph.nodes:
            if device.id.lower() == wanted:
                return device
        return None

    def to_networkx(self) -> nx.DiGraph:
        """Return a copy of the topology as a DiGraph keyed by device id.

        Node attributes carry the device name and kind label; edges carry
        the latency.
        """
        graph = nx.DiGraph()
        for device in self.graph.nodes:
            graph.add_node(device.id, name=device.name, kind=device.kind.label)
        for source, target, data in self.graph.edges(data=True):
            graph.add_edge(source.id, target.id, latency=data["latency"])
        return graph

    def registered(self, device: Device) -> Device:
        """Return the registered instance equal to a device.

        Raises:
            KeyError: If no device with that id is registered.
        """
        return self.graph.nodes[device]["device"]

    def __contains__(self, device: object) -> bool:
        return isinstance(device, Device) and device in self.graph

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __repr__(self) -> str:
        return (
            f"Topology({self.graph.number_of_nodes()} devices, "
            f"{self.graph.number_of_edges()} links)"
        )
