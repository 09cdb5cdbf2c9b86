"""Planar geometry helpers used to build road networks."""

from __future__ import annotations

import math
from typing import NamedTuple

EPS = 1e-8


class Point(NamedTuple):
    """A point in the plane."""

    x: float
    y: float


def cross(x1: float, y1: float, x2: float, y2: float) -> float:
    """Return the z component of the cross product of two 2D vectors."""
    return x1 * y2 - y1 * x2


def same_point(a: Point, b: Point) -> bool:
    """Return True if the two points coincide within the tolerance."""
    return abs(a.x - b.x) < EPS and abs(a.y - b.y) < EPS


def squared_distance(a: Point, b: Point) -> float:
    """Return the squared Euclidean distance between two points."""
    dx = a.x - b.x
    dy = a.y - b.y
    return dx * dx + dy * dy


def distance(a: Point, b: Point) -> float:
    """Return the Euclidean distance between two points."""
    return math.sqrt(squared_distance(a, b))


def segment_intersection(a: Point, b: Point, c: Point, d: Point) -> Point | None:
    """Return the proper crossing point of segments ab and cd.

    Parallel segments, segments that do not meet, and segments that only
    meet at one of the four endpoints give None.
    """
    ax, ay = b.x - a.x, b.y - a.y
    cx, cy = d.x - c.x, d.y - c.y
    ex, ey = c.x - a.x, c.y - a.y

    denom = cross(ax, ay, cx, cy)
    if abs(denom) < EPS:
        return None

    s = cross(ex, ey, cx, cy) / denom
    t = cross(ex, ey, ax, ay) / denom
    if s < -EPS or s > 1 + EPS or t < -EPS or t > 1 + EPS:
        return None

    point = Point(a.x + s * ax, a.y + s * ay)
    if any(same_point(point, end) for end in (a, b, c, d)):
        return None
    return point


def closest_point_on_segment(p: Point, a: Point, b: Point) -> Point:
    """Return the point of segment ab nearest to p."""
    vx, vy = b.x - a.x, b.y - a.y
    wx, wy = p.x - a.x, p.y - a.y
    c1 = vx * wx + vy * wy
    c2 = vx * vx + vy * vy
    t = c1 / c2 if c2 > EPS else 0.0
    if t <= 0.0:
        return Point(a.x, a.y)
    if t >= 1.0:
        return Point(b.x, b.y)
    return Point(a.x + t * vx, a.y + t * vy)