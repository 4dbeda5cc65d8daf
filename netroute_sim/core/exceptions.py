"""Exceptions raised by the network simulator.

Every failure in the core is a reportable condition raised synchronously to
the immediate caller. Nothing here is retried or recovered automatically.
"""

from typing import Optional


class NetworkSimError(Exception):
    """Base class for all simulator errors."""


class InvalidArgumentError(NetworkSimError, ValueError):
    """A null/blank id, blank name, negative latency or missing strategy."""


class DuplicateIdError(NetworkSimError, ValueError):
    """A device with the same id is already registered."""

    def __init__(self, device_id: str) -> None:
        super().__init__(f"A device with id = {device_id} already exists")
        self.device_id = device_id


class DeviceNotFoundError(NetworkSimError, KeyError):
    """An id does not resolve to any device in the topology."""

    def __init__(self, device_id: Optional[str]) -> None:
        super().__init__(f"No device with id = {device_id}")
        self.device_id = device_id

    def __str__(self) -> str:
        return self.args[0]


class NoRouteFoundError(NetworkSimError):
    """A routing strategy found no path between two existing devices."""

    def __init__(self, source_id: str, target_id: str, strategy: str = "") -> None:
        message = f"No route exists between {source_id} and {target_id}"
        if strategy:
            message += f" ({strategy})"
        super().__init__(message)
        self.source_id = source_id
        self.target_id = target_id


class TopologyFormatError(NetworkSimError, ValueError):
    """Serialized topology data could not be decoded."""
