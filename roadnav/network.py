"""Road networks: sites, road crossings and the graph joining them."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from roadnav.geometry import (
    EPS,
    Point,
    closest_point_on_segment,
    distance,
    same_point,
    segment_intersection,
    squared_distance,
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class Edge:
    """A directed half of an undirected road edge."""

    to: int
    cost: float


def _leading_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class RoadNetwork:
    """Points joined by straight road edges.

    The first ``site_count`` points are the given sites; every point added
    afterwards (crossings, attached points, connectors) follows them.
    """

    def __init__(self, sites: Iterable[Point]) -> None:
        self._points: list[Point] = [Point(*site) for site in sites]
        self.site_count = len(self._points)
        self._adjacency: list[list[Edge]] = [[] for _ in self._points]
        self._roads: list[list[int]] = []

    @property
    def points(self) -> tuple[Point, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self._points):
            raise IndexError(f"point index {index} out of range")

    def add_point(self, point: Point) -> int:
        """Return the index of an existing point at this place, or add it."""
        point = Point(*point)
        for index, existing in enumerate(self._points):
            if same_point(existing, point):
                return index
        self._points.append(point)
        self._adjacency.append([])
        return len(self._points) - 1

    def distance(self, u: int, v: int) -> float:
        """Return the straight-line distance between two points."""
        self._check(u)
        self._check(v)
        return distance(self._points[u], self._points[v])

    def add_edge(self, u: int, v: int) -> None:
        """Join two points with an undirected edge weighted by length."""
        cost = self.distance(u, v)
        self._adjacency[u].append(Edge(v, cost))
        self._adjacency[v].append(Edge(u, cost))

    def _remove_edge(self, u: int, v: int) -> None:
        for a, b in ((u, v), (v, u)):
            adjacency = self._adjacency[a]
            for position, edge in enumerate(adjacency):
                if edge.to == b:
                    del adjacency[position]
                    break

    def _add_road(self, chain: list[int]) -> None:
        self._roads.append(chain)
        for u, v in zip(chain, chain[1:]):
            self.add_edge(u, v)

    def neighbours(self, u: int) -> tuple[Edge, ...]:
        """Return the edges leaving point ``u`` in insertion order."""
        self._check(u)
        return tuple(self._adjacency[u])

    def edges(self) -> Iterator[tuple[int, int]]:
        """Yield every undirected edge once as ``(u, v)`` with ``u < v``."""
        for u, adjacency in enumerate(self._adjacency):
            for edge in adjacency:
                if u < edge.to:
                    yield u, edge.to

    def attach_point(self, point: Point) -> tuple[int, int]:
        """Connect a new point to the nearest place on the roads.

        The nearest place becomes a connector splitting the road it lies on,
        unless it coincides with an existing point. Returns the indices of
        the attached point and of its connector.
        """
        point = Point(*point)
        best: tuple[float, int, int, Point] | None = None
        for road, chain in enumerate(self._roads):
            for position, (u, v) in enumerate(zip(chain, chain[1:])):
                closest = closest_point_on_segment(
                    point, self._points[u], self._points[v]
                )
                d2 = squared_distance(point, closest)
                if best is None or d2 + EPS < best[0]:
                    best = (d2, road, position, closest)
        if best is None:
            raise ValueError("the network has no road to attach to")

        _, road, position, closest = best
        existing = len(self._points)
        site = self.add_point(point)
        connector = self.add_point(closest)
        if connector >= existing:
            chain = self._roads[road]
            u, v = chain[position], chain[position + 1]
            self._remove_edge(u, v)
            self.add_edge(u, connector)
            self.add_edge(connector, v)
            chain.insert(position + 1, connector)
        if site != connector:
            self._add_road([site, connector])
        return site, connector

    def label(self, index: int) -> str:
        """Return the name of a point: ``"3"`` for sites, ``"C2"`` otherwise."""
        self._check(index)
        if index < self.site_count:
            return str(index + 1)
        return f"C{index - self.site_count + 1}"

    def parse_label(self, text: str) -> int:
        """Return the point index named by ``text``.

        Raises ValueError if the name does not denote a point of the network.
        """
        text = text.strip()
        if text.startswith("C"):
            index = self.site_count + _leading_int(text[1:]) - 1
        else:
            index = _leading_int(text) - 1
        if not 0 <= index < len(self._points):
            raise ValueError(f"no point named {text!r}")
        return index

    def bounds(self) -> tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)`` over all points."""
        if not self._points:
            raise ValueError("the network has no points")
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return min(xs), min(ys), max(xs), max(ys)


def build_network(
    sites: Iterable[Point], roads: Iterable[tuple[int, int]]
) -> RoadNetwork:
    """Build a network from sites and roads given as 0-based site pairs.

    Roads that cross are split at the crossing, which becomes a new point.
    """
    network = RoadNetwork(sites)
    road_list = [(int(b), int(e)) for b, e in roads]
    for b, e in road_list:
        if not (0 <= b < network.site_count and 0 <= e < network.site_count):
            raise IndexError(f"road ({b}, {e}) refers to an unknown site")

    chains: list[list[int]] = [[b, e] for b, e in road_list]
    for i, (bi, ei) in enumerate(road_list):
        for j in range(i + 1, len(road_list)):
            bj, ej = road_list[j]
            crossing = segment_intersection(
                network[bi], network[ei], network[bj], network[ej]
            )
            if crossing is not None:
                index = network.add_point(crossing)
                chains[i].append(index)
                chains[j].append(index)

    for (b, _), chain in zip(road_list, chains):
        start = network[b]
        ordered = sorted(chain, key=lambda idx: squared_distance(network[idx], start))
        network._add_road(ordered)
    return network