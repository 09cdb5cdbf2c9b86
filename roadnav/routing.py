"""Shortest and k-shortest routes over a road network."""

from __future__ import annotations

import heapq
import math
from collections.abc import Sequence
from dataclasses import dataclass

from roadnav.geometry import EPS
from roadnav.network import RoadNetwork


@dataclass(frozen=True)
class Path:
    """A route through the network as point indices with its length."""

    nodes: tuple[int, ...]
    cost: float

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes)


def _check_index(network: RoadNetwork, index: int) -> None:
    if not 0 <= index < len(network):
        raise IndexError(f"point index {index} out of range")


def _trace(prev: Sequence[int], goal: int) -> list[int]:
    nodes = []
    node = goal
    while node != -1:
        nodes.append(node)
        node = prev[node]
    nodes.reverse()
    return nodes


def _path_cost(network: RoadNetwork, nodes: Sequence[int]) -> float:
    return sum(network.distance(u, v) for u, v in zip(nodes, nodes[1:]))


def shortest_path(network: RoadNetwork, start: int, goal: int) -> Path | None:
    """Return the shortest route from ``start`` to ``goal``, or None.

    Among routes of equal length each point is reached from the
    lowest-numbered predecessor.
    """
    _check_index(network, start)
    _check_index(network, goal)

    count = len(network)
    dist = [math.inf] * count
    prev = [-1] * count
    done = [False] * count
    dist[start] = 0.0
    heap = [(0.0, start)]

    while heap:
        _, v = heapq.heappop(heap)
        if done[v]:
            continue
        done[v] = True
        for edge in network.neighbours(v):
            candidate = dist[v] + edge.cost
            if dist[edge.to] > candidate + EPS:
                dist[edge.to] = candidate
                prev[edge.to] = v
                heapq.heappush(heap, (candidate, edge.to))
            elif not done[edge.to] and abs(dist[edge.to] - candidate) < EPS:
                if prev[edge.to] == -1 or v < prev[edge.to]:
                    prev[edge.to] = v

    if math.isinf(dist[goal]):
        return None
    return Path(tuple(_trace(prev, goal)), dist[goal])


def _spur_search(
    network: RoadNetwork,
    start: int,
    goal: int,
    disabled_nodes: set[int],
    disabled_edges: set[tuple[int, int]],
) -> Path | None:
    if start in disabled_nodes or goal in disabled_nodes:
        return None

    count = len(network)
    dist = [math.inf] * count
    prev = [-1] * count
    done = [False] * count
    dist[start] = 0.0
    heap = [(0.0, start)]

    while heap:
        _, v = heapq.heappop(heap)
        if done[v]:
            continue
        done[v] = True
        if v == goal:
            break
        for position, edge in enumerate(network.neighbours(v)):
            if edge.to in disabled_nodes or (v, position) in disabled_edges:
                continue
            candidate = dist[v] + edge.cost
            if dist[edge.to] > candidate + EPS:
                dist[edge.to] = candidate
                prev[edge.to] = v
                heapq.heappush(heap, (candidate, edge.to))

    if math.isinf(dist[goal]):
        return None
    nodes = _trace(prev, goal)
    return Path(tuple(nodes), _path_cost(network, nodes))


def _edge_slot(network: RoadNetwork, u: int, v: int) -> tuple[int, int] | None:
    for position, edge in enumerate(network.neighbours(u)):
        if edge.to == v:
            return u, position
    return None


def k_shortest_paths(
    network: RoadNetwork, start: int, goal: int, k: int
) -> list[Path]:
    """Return up to ``k`` loopless routes from ``start`` to ``goal``.

    Routes come in order of increasing length, found by Yen's method.
    """
    _check_index(network, start)
    _check_index(network, goal)
    if k < 1:
        return []

    first = _spur_search(network, start, goal, set(), set())
    if first is None:
        return []

    found = [first]
    while len(found) < k:
        last = found[-1]
        candidates: list[Path] = []
        for i, spur in enumerate(last.nodes[:-1]):
            root = last.nodes[: i + 1]
            disabled_edges: set[tuple[int, int]] = set()
            for path in found:
                if len(path.nodes) > i + 1 and path.nodes[: i + 1] == root:
                    following = path.nodes[i + 1]
                    for slot in (
                        _edge_slot(network, spur, following),
                        _edge_slot(network, following, spur),
                    ):
                        if slot is not None:
                            disabled_edges.add(slot)
            disabled_nodes = set(root[:-1])

            spur_path = _spur_search(
                network, spur, goal, disabled_nodes, disabled_edges
            )
            if spur_path is None:
                continue
            nodes = root[:-1] + spur_path.nodes
            candidate = Path(nodes, _path_cost(network, nodes))
            duplicate = any(
                abs(other.cost - candidate.cost) < EPS
                and other.nodes == candidate.nodes
                for other in candidates
            )
            if not duplicate:
                candidates.append(candidate)

        if not candidates:
            break
        best = min(candidates, key=lambda path: path.cost)
        found.append(best)

    return found[:k]