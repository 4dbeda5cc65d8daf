"""Routing strategies for network simulation.

This module defines the RoutingStrategy interface and its two
implementations: breadth-first search for minimum hop count and Dijkstra's
algorithm for minimum total latency.
"""

from abc import ABC, abstractmethod
from collections import deque
import heapq
import itertools
import logging
from typing import Deque, Dict, List, Optional, Sequence, Set, Tuple

from netroute_sim.core.device import Device
from netroute_sim.core.exceptions import InvalidArgumentError
from netroute_sim.core.topology import Topology

logger = logging.getLogger(__name__)


class RoutingStrategy(ABC):
    """Abstract base class for routing algorithms.

    Strategies are read-only over the topology and hold no per-call state,
    so they can be swapped at any time.
    """

    name = "Base Strategy"

    @abstractmethod
    def calculate_path(
        self, graph: Topology, origin: Device, destination: Device
    ) -> List[Device]:
        """
        Compute a route from origin to destination.

        Args:
            graph: The topology to search.
            origin: Device the route starts at.
            destination: Device the route ends at.

        Returns:
            The devices from origin to destination inclusive, or an empty
            list if either device is absent or no path exists.
        """
        pass

    @staticmethod
    def _check_arguments(
        graph: Topology, origin: Device, destination: Device
    ) -> bool:
        """Validate arguments; return False if either endpoint is not in the graph."""
        if graph is None or origin is None or destination is None:
            raise InvalidArgumentError("Graph, origin and destination cannot be null.")
        return graph.contains(origin) and graph.contains(destination)

    @staticmethod
    def _reconstruct(
        predecessor: Dict[Device, Optional[Device]], destination: Device
    ) -> List[Device]:
        route: List[Device] = []
        step: Optional[Device] = destination
        while step is not None:
            route.append(step)
            step = predecessor[step]
        route.reverse()
        return route

    def __repr__(self) -> str:
        return self.name


class BfsStrategy(RoutingStrategy):
    """Breadth-first search: the route with the fewest hops.

    Latencies are ignored. Among equally short routes the one found first
    in link insertion order is returned.
    """

    name = "BFS"

    def calculate_path(
        self, graph: Topology, origin: Device, destination: Device
    ) -> List[Device]:
        if not self._check_arguments(graph, origin, destination):
            return []
        origin, destination = graph.registered(origin), graph.registered(destination)

        queue: Deque[Device] = deque([origin])
        visited: Set[Device] = {origin}
        predecessor: Dict[Device, Optional[Device]] = {origin: None}

        found = False
        while queue:
            current = queue.popleft()
            # Stopping on dequeue, not enqueue, keeps the hop count minimal.
            if current == destination:
                found = True
                break
            for neighbour in graph.neighbors(current):
                if neighbour not in visited:
                    visited.add(neighbour)
                    predecessor[neighbour] = current
                    queue.append(neighbour)

        if not found:
            logger.debug("BFS found no route %s->%s", origin.id, destination.id)
            return []
        route = self._reconstruct(predecessor, destination)
        logger.debug("BFS route %s", [d.id for d in route])
        return route


class DijkstraStrategy(RoutingStrategy):
    """Dijkstra's algorithm: the route with the lowest total latency.

    Uses a binary heap with lazy deletion: improved distances are pushed as
    new entries and stale entries are skipped when popped. Latencies must be
    non-negative.
    """

    name = "Dijkstra"

    def calculate_path(
        self, graph: Topology, origin: Device, destination: Device
    ) -> List[Device]:
        if not self._check_arguments(graph, origin, destination):
            return []
        origin, destination = graph.registered(origin), graph.registered(destination)

        distances: Dict[Device, float] = {origin: 0.0}
        predecessor: Dict[Device, Optional[Device]] = {origin: None}
        # Heap entries are (distance, insertion sequence, device); the
        # sequence breaks ties so devices are never compared.
        counter = itertools.count()
        queue: List[Tuple[float, int, Device]] = [(0.0, next(counter), origin)]

        while queue:
            distance, _, current = heapq.heappop(queue)
            if distance > distances.get(current, float("inf")):
                continue
            if current == destination:
                break
            for link in graph.links_from(current):
                candidate = distance + link.latency
                if candidate < distances.get(link.target, float("inf")):
                    distances[link.target] = candidate
                    predecessor[link.target] = current
                    heapq.heappush(queue, (candidate, next(counter), link.target))

        if destination not in predecessor:
            logger.debug("Dijkstra found no route %s->%s", origin.id, destination.id)
            return []
        route = self._reconstruct(predecessor, destination)
        logger.debug(
            "Dijkstra route %s (%.3fms)", [d.id for d in route], distances[destination]
        )
        return route


def route_latency(graph: Topology, route: Sequence[Device]) -> float:
    """Sum the link latencies along a route.

    Args:
        graph: The topology the route runs through.
        route: Ordered devices of the route.

    Returns:
        The total latency, 0.0 for routes shorter than one hop, or infinity
        if a consecutive pair is not linked.
    """
    return sum(
        graph.latency_between(current, following)
        for current, following in zip(route, route[1:])
    )


def strategy_factory(strategy_type: str) -> RoutingStrategy:
    """
    Factory function to create the appropriate routing strategy.

    Args:
        strategy_type: Type of the strategy ("BFS" or "DIJKSTRA", any case).

    Returns:
        An instance of the selected routing strategy.
    """
    if strategy_type is None:
        raise InvalidArgumentError("Strategy type cannot be null.")
    key = strategy_type.strip().upper()
    if key == "BFS":
        return BfsStrategy()
    elif key == "DIJKSTRA":
        return DijkstraStrategy()
    raise InvalidArgumentError(f"Unknown routing strategy: {strategy_type}")
