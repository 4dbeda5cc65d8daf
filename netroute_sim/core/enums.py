"""Enumerations for network simulation.

This module defines enumerations used throughout the network simulator.
"""

from enum import Enum

from netroute_sim.core.exceptions import InvalidArgumentError


class DeviceKind(Enum):
    """Enum for the supported kinds of network device.

    Attributes:
        PC: End host or workstation.
        ROUTER: Device forwarding traffic between networks.
        SWITCH: Link-layer interconnection device.
    """

    PC = "PC"
    ROUTER = "Router"
    SWITCH = "Switch"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: "str | DeviceKind") -> "DeviceKind":
        """Resolve a kind from its label or member name, ignoring case.

        Args:
            text: A DeviceKind, a label such as "Router" or a name such as "ROUTER".

        Returns:
            The matching DeviceKind.

        Raises:
            InvalidArgumentError: If the text names no known kind.
        """
        if isinstance(text, cls):
            return text
        if text is None or not str(text).strip():
            raise InvalidArgumentError("Device kind cannot be blank.")
        wanted = str(text).strip().lower()
        for kind in cls:
            if wanted in (kind.name.lower(), kind.value.lower()):
                return kind
        raise InvalidArgumentError(f"Unsupported device kind: {text}")
