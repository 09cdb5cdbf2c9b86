import math

import pytest

from roadnav.geometry import (
    EPS,
    Point,
    closest_point_on_segment,
    cross,
    distance,
    same_point,
    segment_intersection,
    squared_distance,
)


def _on_segment(p, a, b):
    return abs(cross(b.x - a.x, b.y - a.y, p.x - a.x, p.y - a.y)) < 1e-6


def test_cross_is_antisymmetric():
    assert cross(3.0, 1.5, -2.0, 4.0) == -cross(-2.0, 4.0, 3.0, 1.5)


def test_cross_of_parallel_vectors_is_zero():
    assert cross(2.0, 4.0, 1.0, 2.0) == 0.0


def test_same_point_within_tolerance():
    assert same_point(Point(1.0, 2.0), Point(1.0 + EPS / 10, 2.0 - EPS / 10))


def test_same_point_rejects_distinct_points():
    assert not same_point(Point(1.0, 2.0), Point(1.0, 2.001))


def test_distance_pythagorean():
    assert distance(Point(0.0, 0.0), Point(3.0, 4.0)) == pytest.approx(5.0)


def test_distance_matches_squared_distance():
    a, b = Point(-1.5, 2.25), Point(7.0, -3.5)
    assert distance(a, b) ** 2 == pytest.approx(squared_distance(a, b))
    assert distance(a, b) == pytest.approx(distance(b, a))


def test_crossing_segments_meet_on_both():
    a, b = Point(0.0, 0.0), Point(4.0, 2.0)
    c, d = Point(0.0, 3.0), Point(3.0, -1.0)
    p = segment_intersection(a, b, c, d)
    assert p is not None
    assert _on_segment(p, a, b)
    assert _on_segment(p, c, d)


def test_x_crossing_point():
    p = segment_intersection(Point(0, 0), Point(2, 2), Point(0, 2), Point(2, 0))
    assert p is not None
    assert p.x == pytest.approx(1.0)
    assert p.y == pytest.approx(1.0)


def test_intersection_is_symmetric():
    a, b = Point(0.0, 0.0), Point(5.0, 5.0)
    c, d = Point(0.0, 5.0), Point(5.0, 0.0)
    p = segment_intersection(a, b, c, d)
    q = segment_intersection(c, d, a, b)
    assert p is not None and q is not None
    assert same_point(p, q)


def test_parallel_segments_do_not_intersect():
    assert segment_intersection(Point(0, 0), Point(2, 0), Point(0, 1), Point(2, 1)) is None


def test_disjoint_segments_do_not_intersect():
    assert segment_intersection(Point(0, 0), Point(1, 1), Point(3, 0), Point(2, 1)) is None


def test_meeting_at_endpoint_is_not_a_crossing():
    assert segment_intersection(Point(0, 0), Point(2, 0), Point(2, 0), Point(2, 2)) is None


def test_t_junction_is_not_a_crossing():
    assert segment_intersection(Point(0, 0), Point(4, 0), Point(2, 0), Point(2, 3)) is None


def test_closest_point_before_start_is_start():
    a, b = Point(1.0, 1.0), Point(5.0, 1.0)
    assert closest_point_on_segment(Point(-3.0, 4.0), a, b) == a


def test_closest_point_past_end_is_end():
    a, b = Point(1.0, 1.0), Point(5.0, 1.0)
    assert closest_point_on_segment(Point(9.0, -2.0), a, b) == b


def test_closest_point_is_perpendicular_projection():
    a, b = Point(0.0, 0.0), Point(6.0, 3.0)
    p = Point(2.0, 5.0)
    c = closest_point_on_segment(p, a, b)
    assert _on_segment(c, a, b)
    dot = (p.x - c.x) * (b.x - a.x) + (p.y - c.y) * (b.y - a.y)
    assert dot == pytest.approx(0.0, abs=1e-9)


def test_closest_point_on_degenerate_segment_is_that_point():
    a = Point(2.0, 2.0)
    assert closest_point_on_segment(Point(7.0, -1.0), a, a) == a


def test_closest_point_is_no_farther_than_endpoints():
    a, b = Point(-2.0, 1.0), Point(4.0, 7.0)
    p = Point(3.0, -1.0)
    c = closest_point_on_segment(p, a, b)
    assert distance(p, c) <= min(distance(p, a), distance(p, b)) + 1e-12
    assert not math.isnan(c.x)