import math

import pytest

from roadnav.geometry import Point
from roadnav.network import build_network
from roadnav.routing import Path, k_shortest_paths, shortest_path


@pytest.fixture
def square():
    sites = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
    return build_network(sites, [(0, 1), (1, 2), (2, 3), (3, 0)])


@pytest.fixture
def triangle():
    sites = [Point(0, 0), Point(2, 0), Point(1, 1)]
    return build_network(sites, [(0, 1), (0, 2), (2, 1)])


@pytest.fixture
def split():
    sites = [Point(0, 0), Point(1, 0), Point(5, 5), Point(6, 5)]
    return build_network(sites, [(0, 1), (2, 3)])


@pytest.fixture
def crossing():
    sites = [Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0)]
    return build_network(sites, [(0, 1), (2, 3)])


def _is_walk(network, path):
    return all(
        any(edge.to == v for edge in network.neighbours(u))
        for u, v in zip(path.nodes, path.nodes[1:])
    )


def _length(network, path):
    return sum(network.distance(u, v) for u, v in zip(path.nodes, path.nodes[1:]))


def test_shortest_path_prefers_lower_predecessor_on_tie(square):
    path = shortest_path(square, 0, 2)
    assert path.nodes == (0, 1, 2)
    assert math.isclose(path.cost, 2.0)


def test_shortest_path_cost_matches_route_length(triangle):
    path = shortest_path(triangle, 0, 1)
    assert path.nodes == (0, 1)
    assert math.isclose(path.cost, triangle.distance(0, 1))


def test_shortest_path_to_self(square):
    path = shortest_path(square, 3, 3)
    assert path == Path((3,), 0.0)


def test_shortest_path_unreachable(split):
    assert shortest_path(split, 0, 2) is None


def test_shortest_path_through_crossing(crossing):
    path = shortest_path(crossing, 0, 2)
    assert path.nodes[0] == 0 and path.nodes[-1] == 2
    assert len(crossing) - 1 in path.nodes
    assert _is_walk(crossing, path)
    assert math.isclose(path.cost, _length(crossing, path))


def test_shortest_path_bad_index(square):
    with pytest.raises(IndexError):
        shortest_path(square, 0, 10)
    with pytest.raises(IndexError):
        shortest_path(square, -1, 2)


def test_k_shortest_square_has_two_routes(square):
    paths = k_shortest_paths(square, 0, 2, 5)
    assert [p.nodes for p in paths] == [(0, 1, 2), (0, 3, 2)]


def test_k_shortest_ordered_by_cost(triangle):
    paths = k_shortest_paths(triangle, 0, 1, 3)
    assert [p.nodes for p in paths] == [(0, 1), (0, 2, 1)]
    assert paths[0].cost <= paths[1].cost


def test_k_shortest_paths_are_valid_and_distinct(crossing):
    paths = k_shortest_paths(crossing, 0, 3, 4)
    assert paths
    assert len({p.nodes for p in paths}) == len(paths)
    for path in paths:
        assert path.nodes[0] == 0 and path.nodes[-1] == 3
        assert len(set(path.nodes)) == len(path.nodes)
        assert _is_walk(crossing, path)
        assert math.isclose(path.cost, _length(crossing, path))
    costs = [p.cost for p in paths]
    assert costs == sorted(costs)


def test_k_shortest_first_matches_shortest(triangle):
    best = shortest_path(triangle, 2, 0)
    paths = k_shortest_paths(triangle, 2, 0, 2)
    assert math.isclose(paths[0].cost, best.cost)
    assert paths[0].nodes == best.nodes


def test_k_shortest_limited_by_k(square):
    paths = k_shortest_paths(square, 0, 2, 1)
    assert len(paths) == 1


def test_k_shortest_zero_k(square):
    assert k_shortest_paths(square, 0, 2, 0) == []


def test_k_shortest_unreachable(split):
    assert k_shortest_paths(split, 1, 3, 3) == []


def test_k_shortest_to_self(square):
    assert k_shortest_paths(square, 1, 1, 3) == [Path((1,), 0.0)]


def test_k_shortest_bad_index(square):
    with pytest.raises(IndexError):
        k_shortest_paths(square, 7, 0, 2)