"""Packet class for network simulation.

This module defines the Packet class, which tracks a routed packet's
progress along its route, one hop at a time.
"""

import itertools
from typing import Optional, Sequence, Tuple

from netroute_sim.core.device import Device
from netroute_sim.core.exceptions import InvalidArgumentError


class Packet:
    """Represents a network packet travelling along a computed route.

    The route is frozen at construction. The cursor starts at the origin
    and only moves forward, one hop per ``advance_hop`` call, until it
    reaches the destination; further advances are no-ops.

    Attributes:
        id: Unique identifier for the packet.
        origin: Device the packet starts from.
        destination: Device the packet is travelling to.
        route: Devices from origin to destination, inclusive.
        cursor: Index into the route of the device the packet is at.
    """

    _id_counter = itertools.count(1)

    def __init__(
        self, origin: Device, destination: Device, route: Sequence[Device]
    ) -> None:
        """Initialize a packet.

        Args:
            origin: Origin device.
            destination: Destination device.
            route: Non-empty ordered device sequence from origin to destination.

        Raises:
            InvalidArgumentError: If any argument is missing or the route is empty.
        """
        if origin is None or destination is None or not route:
            raise InvalidArgumentError(
                "Origin, destination and route cannot be null or empty."
            )
        self.id = next(Packet._id_counter)
        self._origin = origin
        self._destination = destination
        self._route: Tuple[Device, ...] = tuple(route)
        self._cursor = 0

    @property
    def origin(self) -> Device:
        return self._origin

    @property
    def destination(self) -> Device:
        return self._destination

    @property
    def route(self) -> Tuple[Device, ...]:
        return self._route

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def hop_count(self) -> int:
        """Number of hops from origin to destination."""
        return len(self._route) - 1

    @property
    def remaining_hops(self) -> int:
        return self.hop_count - self._cursor

    def advance_hop(self) -> None:
        """Move to the next device on the route, unless already arrived."""
        if not self.is_arrived():
            self._cursor += 1

    def is_arrived(self) -> bool:
        """Check whether the packet is at the last device of its route.

        Returns:
            True if the packet has arrived, False while in transit.
        """
        return self._cursor >= len(self._route) - 1

    def current_device(self) -> Device:
        return self._route[self._cursor]

    def next_device(self) -> Optional[Device]:
        """Get the device of the next hop.

        Returns:
            The next device, or None once the packet has arrived.
        """
        if self.is_arrived():
            return None
        return self._route[self._cursor + 1]

    def __repr__(self) -> str:
        return (
            f"Packet({self._origin.id}->{self._destination.id}, "
            f"hop={self._cursor}/{self.hop_count})"
        )
