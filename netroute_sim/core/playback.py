"""Packet traversal playback for network simulation.

This module defines the TraversalPlayer class, which steps packets along
their routes in a SimPy environment, waiting each hop's link latency before
advancing the packet's cursor.
"""

import logging
from typing import Any, Callable, Dict, Generator, List, Optional

import simpy

from netroute_sim.core.packet import Packet
from netroute_sim.core.topology import Topology

logger = logging.getLogger(__name__)


class TraversalPlayer:
    """Plays packets hop by hop using link latency as pacing.

    The player only ever calls ``Packet.advance_hop``; it never moves a
    packet backwards or skips a hop. A link that disappears while a packet
    is travelling is not re-routed: the packet is reported as dropped.

    Attributes:
        env: SimPy environment driving the playback.
        time_scale: Simulation time units per millisecond of latency.
        hooks: Callbacks keyed by event type.
    """

    def __init__(
        self, env: Optional[simpy.Environment] = None, time_scale: float = 1.0
    ) -> None:
        """Initialize the player.

        Args:
            env: SimPy environment to schedule on (a new one if omitted).
            time_scale: Multiplier applied to each hop's latency.
        """
        if time_scale < 0:
            raise ValueError("time_scale cannot be negative.")
        self.env = env if env is not None else simpy.Environment()
        self.time_scale = time_scale
        self._processes: Dict[int, simpy.events.Process] = {}

        self.hooks: Dict[str, List[Callable[..., Any]]] = {
            "packet_hop": [],  # packet moves between devices
            "packet_arrived": [],  # packet reaches destination
            "packet_dropped": [],  # next link vanished mid-traversal
            "packet_cancelled": [],  # traversal cancelled by the caller
        }

    def register_hook(self, event_type: str, callback: Callable[..., Any]) -> None:
        """Register a callback function for a specific event type.

        Args:
            event_type: The type of event to register for.
            callback: The function to call when the event occurs.
        """
        if event_type not in self.hooks:
            raise ValueError(f"Unknown hook type: {event_type}")
        self.hooks[event_type].append(callback)

    def call_hooks(self, event_type: str, *args: Any, **kwargs: Any) -> None:
        """Call all registered callbacks for the given event type.

        Args:
            event_type: The type of event that occurred.
            *args, **kwargs: Arguments to pass to the callback functions.
        """
        if event_type in self.hooks:
            for callback in self.hooks[event_type]:
                callback(*args, **kwargs)

    def play(
        self,
        packet: Packet,
        topology: Topology,
        on_finished: Optional[Callable[[], None]] = None,
    ) -> simpy.events.Process:
        """Schedule a packet's traversal.

        Args:
            packet: The packet to play; its cursor is advanced in place.
            topology: Topology providing per-hop latencies.
            on_finished: Called once when the packet reaches its destination.

        Returns:
            SimPy process for the packet traversal.
        """

        def traversal() -> Generator[Any, Any, None]:
            try:
                while not packet.is_arrived():
                    current = packet.current_device()
                    following = packet.next_device()
                    latency = topology.latency_between(current, following)
                    if latency == float("inf"):
                        logger.warning(
                            "Packet %d dropped at %s: link to %s removed",
                            packet.id,
                            current.id,
                            following.id,
                        )
                        self.call_hooks(
                            "packet_dropped", packet, "Link removed", self.env.now
                        )
                        return
                    yield self.env.timeout(latency * self.time_scale)
                    packet.advance_hop()
                    self.call_hooks(
                        "packet_hop", packet, current, following, self.env.now
                    )

                logger.info(
                    "Packet %d arrived at %s at t=%.3f",
                    packet.id,
                    packet.destination.id,
                    self.env.now,
                )
                if on_finished is not None:
                    on_finished()
                self.call_hooks("packet_arrived", packet, self.env.now)
            except simpy.Interrupt as interrupt:
                logger.info("Packet %d cancelled: %s", packet.id, interrupt.cause)
                self.call_hooks(
                    "packet_cancelled", packet, interrupt.cause, self.env.now
                )
            finally:
                self._processes.pop(packet.id, None)

        process = self.env.process(traversal())
        self._processes[packet.id] = process
        return process

    def cancel(self, packet: Packet, reason: str = "Cancelled") -> bool:
        """Stop a packet's traversal where it currently is.

        Args:
            packet: The packet to stop.
            reason: Reason passed to the ``packet_cancelled`` hooks.

        Returns:
            True if a running traversal was interrupted, False otherwise.
        """
        process = self._processes.get(packet.id)
        if process is None or not process.is_alive:
            return False
        process.interrupt(reason)
        return True

    @property
    def active_packet_ids(self) -> List[int]:
        return list(self._processes)

    def run(self, until: Optional[float] = None) -> None:
        """Run the playback until no events remain or until the given time.

        Args:
            until: Simulation time to stop at (run to completion if None).
        """
        self.env.run(until=until)
