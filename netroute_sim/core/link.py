"""Link class for network simulation.

This module defines the Link class, which represents a directed network
link between two devices in the simulated topology.
"""

from dataclasses import dataclass

from netroute_sim.core.device import Device


@dataclass(frozen=True)
class Link:
    """Represents a directed, latency-weighted link between devices.

    A link a->b says nothing about b->a; bidirectional connectivity is two
    links. Instances are snapshots handed out by topology queries.

    Attributes:
        source: Source device.
        target: Target device.
        latency: Link latency in milliseconds.
    """

    source: Device
    target: Device
    latency: float

    def __repr__(self) -> str:
        """Return string representation of the link.

        Returns:
            String representation of the link.
        """
        return f"Link({self.source.id}->{self.target.id}, {self.latency:.1f}ms)"
