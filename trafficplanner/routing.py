"""Route search over a transport network: single routes and round tours."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .geo import calculate_distance
from .network import Network, Node, NodeType


class TransportMode(Enum):
    """Ways of travelling between two nodes."""

    DRIVING = 0
    HIGH_SPEED_RAIL = 1
    FLIGHT = 2
    BUS = 3


_SPEED_KMH = {
    TransportMode.DRIVING: 60.0,
    TransportMode.HIGH_SPEED_RAIL: 250.0,
    TransportMode.FLIGHT: 800.0,
    TransportMode.BUS: 40.0,
}

_COST_PER_KM = {
    TransportMode.DRIVING: 0.8,
    TransportMode.HIGH_SPEED_RAIL: 0.4,
    TransportMode.FLIGHT: 0.6,
    TransportMode.BUS: 0.2,
}

_HUB_KIND = {
    TransportMode.FLIGHT: NodeType.AIRPORT,
    TransportMode.HIGH_SPEED_RAIL: NodeType.HSR_STATION,
}

LONG_BUS_KM = 300.0
LONG_BUS_SURCHARGE = 1.5

MAX_DISTANCE_KM = 6000.0
MAX_TRIP_TIME = MAX_DISTANCE_KM / _SPEED_KMH[TransportMode.BUS]
MAX_TRIP_COST = MAX_DISTANCE_KM * _COST_PER_KM[TransportMode.DRIVING]
MIN_HOP_KM = 0.1
MAX_TOUR_NODES = 10


@dataclass(frozen=True)
class TravelInfo:
    """Time and price of one hop."""

    time_hours: float
    cost_yuan: float


@dataclass(frozen=True)
class PathSegment:
    """One hop of a route between two nodes."""

    from_node_id: int
    to_node_id: int
    mode: TransportMode
    distance_km: float
    time_hours: float
    cost_yuan: float


@dataclass
class RoutePath:
    """An ordered list of hops with their totals."""

    segments: list[PathSegment] = field(default_factory=list)

    @property
    def segment_count(self) -> int:
        return len(self.segments)

    @property
    def total_time(self) -> float:
        return sum(segment.time_hours for segment in self.segments)

    @property
    def total_cost(self) -> float:
        return sum(segment.cost_yuan for segment in self.segments)

    @property
    def total_distance(self) -> float:
        return sum(segment.distance_km for segment in self.segments)

    def prepend(self, other: RoutePath) -> None:
        """Put the hops of ``other`` in front of this route's hops."""
        self.segments[:0] = other.segments


def travel_info(
    distance_km: float, mode: TransportMode, from_node: Node, to_node: Node
) -> Optional[TravelInfo]:
    """Return time and cost of travelling between two nodes, or None if the mode cannot."""
    intra_city = from_node.city_id == to_node.city_id

    hub = _HUB_KIND.get(mode)
    if hub is not None:
        if intra_city or from_node.kind is not hub or to_node.kind is not hub:
            return None
    elif intra_city:
        if from_node.kind is to_node.kind:
            return None
    elif from_node.kind is not NodeType.LANDMARK or to_node.kind is not NodeType.LANDMARK:
        return None

    cost = distance_km * _COST_PER_KM[mode]
    if mode is TransportMode.BUS and distance_km > LONG_BUS_KM:
        cost *= LONG_BUS_SURCHARGE
    return TravelInfo(distance_km / _SPEED_KMH[mode], cost)


def _weighted(time_hours: float, cost_yuan: float, time_weight: float, cost_weight: float) -> float:
    return (time_hours / MAX_TRIP_TIME) * time_weight + (cost_yuan / MAX_TRIP_COST) * cost_weight


def _distance(a: Node, b: Node) -> float:
    return calculate_distance(a.latitude, a.longitude, b.latitude, b.longitude)


def find_shortest_path(
    network: Network,
    start_node_id: int,
    end_node_id: int,
    time_weight: float,
    cost_weight: float,
) -> Optional[RoutePath]:
    """Find the route with the least weighted time and cost between two nodes.

    Returns None for unknown node ids or when the end cannot be reached.
    """
    nodes = network.nodes
    count = len(nodes)
    if not (0 <= start_node_id < count and 0 <= end_node_id < count):
        return None

    goal = nodes[end_node_id]
    per_km = (
        (1.0 / _SPEED_KMH[TransportMode.FLIGHT] / MAX_TRIP_TIME) * time_weight
        + (_COST_PER_KM[TransportMode.BUS] / MAX_TRIP_COST) * cost_weight
    )
    heuristic = [_distance(node, goal) * per_km for node in nodes]

    cost = [math.inf] * count
    predecessor: list[Optional[tuple[int, TransportMode]]] = [None] * count
    visited = [False] * count
    cost[start_node_id] = 0.0

    while True:
        frontier = (
            node.id for node in nodes if not visited[node.id] and cost[node.id] != math.inf
        )
        current = min(frontier, key=lambda j: cost[j] + heuristic[j], default=None)
        if current is None or current == end_node_id:
            break
        visited[current] = True

        source = nodes[current]
        for target in nodes:
            if visited[target.id]:
                continue
            distance = _distance(source, target)
            if distance <= MIN_HOP_KM:
                continue
            for mode in TransportMode:
                info = travel_info(distance, mode, source, target)
                if info is None:
                    continue
                candidate = cost[current] + _weighted(
                    info.time_hours, info.cost_yuan, time_weight, cost_weight
                )
                if candidate < cost[target.id]:
                    cost[target.id] = candidate
                    predecessor[target.id] = (current, mode)

    if predecessor[end_node_id] is None and start_node_id != end_node_id:
        return None

    segments: list[PathSegment] = []
    current = end_node_id
    while current != start_node_id and predecessor[current] is not None:
        previous, mode = predecessor[current]
        source, target = nodes[previous], nodes[current]
        distance = _distance(source, target)
        info = travel_info(distance, mode, source, target)
        segments.append(
            PathSegment(previous, current, mode, distance, info.time_hours, info.cost_yuan)
        )
        current = previous
    segments.reverse()
    return RoutePath(segments)


def _leg_cost(
    network: Network, start: int, end: int, time_weight: float, cost_weight: float
) -> float:
    path = find_shortest_path(network, start, end, time_weight, cost_weight)
    if path is None or path.total_distance <= 0:
        return math.inf
    return _weighted(path.total_time, path.total_cost, time_weight, cost_weight)


def solve_tsp(
    network: Network,
    node_ids: Iterable[int],
    time_weight: float,
    cost_weight: float,
) -> Optional[RoutePath]:
    """Find the cheapest round tour that starts at the first node, visits all, and returns.

    Returns None for fewer than two nodes or when no tour exists; raises
    ValueError for more than ``MAX_TOUR_NODES`` nodes.
    """
    ids = list(node_ids)
    n = len(ids)
    if n <= 1:
        return None
    if n > MAX_TOUR_NODES:
        raise ValueError(f"a tour can visit at most {MAX_TOUR_NODES} nodes, got {n}")

    matrix = [
        [
            0.0 if i == j else _leg_cost(network, a, b, time_weight, cost_weight)
            for j, b in enumerate(ids)
        ]
        for i, a in enumerate(ids)
    ]

    subsets = 1 << n
    full = subsets - 1
    best = [[math.inf] * n for _ in range(subsets)]
    came_from = [[0] * n for _ in range(subsets)]
    best[1][0] = 0.0

    for mask in range(1, subsets):
        for u in range(n):
            if not mask & (1 << u) or best[mask][u] == math.inf:
                continue
            for v in range(n):
                if mask & (1 << v) or matrix[u][v] == math.inf:
                    continue
                next_mask = mask | (1 << v)
                candidate = best[mask][u] + matrix[u][v]
                if candidate < best[next_mask][v]:
                    best[next_mask][v] = candidate
                    came_from[next_mask][v] = u

    tour_end: Optional[int] = None
    lowest = math.inf
    for i in range(1, n):
        if best[full][i] == math.inf or matrix[i][0] == math.inf:
            continue
        total = best[full][i] + matrix[i][0]
        if total < lowest:
            lowest = total
            tour_end = i

    if tour_end is None:
        return None

    tour = RoutePath()

    def add_leg(start: int, end: int) -> None:
        leg = find_shortest_path(network, start, end, time_weight, cost_weight)
        if leg is not None:
            tour.prepend(leg)

    add_leg(ids[tour_end], ids[0])
    current, mask = tour_end, full
    while current != 0:
        previous = came_from[mask][current]
        add_leg(ids[previous], ids[current])
        mask ^= 1 << current
        current = previous
    return tour