"""Device class for network simulation.

This module defines the Device class, which represents a network endpoint
(PC, router, switch) in the simulated topology.
"""

from typing import Optional, Union

from netroute_sim.core.enums import DeviceKind
from netroute_sim.core.exceptions import InvalidArgumentError


class Device:
    """Represents a network device (PC, router, switch).

    A single record with a kind tag; there is no subclass per kind. Equality
    and hashing depend on the id only, so a device keeps its identity while
    its name and kind change.

    Attributes:
        id: Unique identifier for the device.
        name: Human readable name (defaults to the id).
        kind: Kind of device.
    """

    __slots__ = ("_id", "name", "kind")

    def __init__(
        self,
        device_id: str,
        name: Optional[str] = None,
        kind: Union[DeviceKind, str] = DeviceKind.PC,
    ) -> None:
        """Initialize a network device.

        Args:
            device_id: Unique identifier for the device. Must not be blank.
            name: Descriptive name. Blank or None falls back to the id.
            kind: Kind of device, as a DeviceKind or its label.

        Raises:
            InvalidArgumentError: If the id is blank or the kind is unknown.
        """
        if device_id is None or not str(device_id).strip():
            raise InvalidArgumentError("Device id cannot be null or blank.")
        self._id = str(device_id)
        self.name = name if name and name.strip() else self._id
        self.kind = DeviceKind.parse(kind)

    @property
    def id(self) -> str:
        return self._id

    def rename(self, new_name: str) -> None:
        """Change the descriptive name of the device.

        Args:
            new_name: The new name.

        Raises:
            InvalidArgumentError: If the new name is blank.
        """
        if new_name is None or not new_name.strip():
            raise InvalidArgumentError("Device name cannot be null or blank.")
        self.name = new_name

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Device):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        """Return string representation of the device.

        Returns:
            String representation of the device.
        """
        return f"Device({self._id!r}, {self.kind.label})"


def make_device(
    kind: Union[DeviceKind, str], device_id: str, name: Optional[str] = None
) -> Device:
    """Factory function to create a device of the given kind.

    Args:
        kind: Kind of the device ("PC", "Router", "Switch" or a DeviceKind).
        device_id: Unique identifier for the device.
        name: Descriptive name; blank falls back to the id.

    Returns:
        The created Device.
    """
    if kind is None:
        raise InvalidArgumentError("Device kind cannot be null.")
    return Device(device_id, name, DeviceKind.parse(kind))
