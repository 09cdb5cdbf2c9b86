"""Command line entry point: read a road map and answer route queries."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from roadnav.geometry import Point
from roadnav.network import RoadNetwork, build_network
from roadnav.routing import Path, k_shortest_paths, shortest_path


@dataclass(frozen=True)
class Query:
    """A request for up to ``k`` routes between two named points."""

    start: str
    goal: str
    k: int = 1


@dataclass(frozen=True)
class Problem:
    """Everything read from an input document."""

    sites: tuple[Point, ...]
    roads: tuple[tuple[int, int], ...]
    extra_points: tuple[Point, ...] = ()
    queries: tuple[Query, ...] = ()


@dataclass(frozen=True)
class QueryResult:
    """The routes found for one query; empty when there is none."""

    query: Query
    start: int | None
    goal: int | None
    paths: tuple[Path, ...] = field(default_factory=tuple)

    @property
    def found(self) -> bool:
        return bool(self.paths)


class _Tokens:
    def __init__(self, text: str) -> None:
        self._iter: Iterator[str] = iter(text.split())

    def word(self) -> str:
        try:
            return next(self._iter)
        except StopIteration:
            raise ValueError("unexpected end of input") from None

    def integer(self) -> int:
        token = self.word()
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, got {token!r}") from None

    def number(self) -> float:
        token = self.word()
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"expected a number, got {token!r}") from None

    def point(self) -> Point:
        return Point(self.number(), self.number())


def parse_input(text: str) -> Problem:
    """Parse ``N M P Q``, N sites, M roads, P extra points and Q queries.

    Roads are given as 1-based site numbers; queries as ``start goal k``.
    Raises ValueError on malformed or truncated input.
    """
    tokens = _Tokens(text)
    n, m, p, q = (tokens.integer() for _ in range(4))
    if min(n, m, p, q) < 0:
        raise ValueError("counts must not be negative")

    sites = tuple(tokens.point() for _ in range(n))
    roads = []
    for _ in range(m):
        b, e = tokens.integer(), tokens.integer()
        if not (1 <= b <= n and 1 <= e <= n):
            raise ValueError(f"road {b} {e} refers to an unknown site")
        roads.append((b - 1, e - 1))
    extra = tuple(tokens.point() for _ in range(p))
    queries = tuple(
        Query(tokens.word(), tokens.word(), tokens.integer()) for _ in range(q)
    )
    return Problem(sites, tuple(roads), extra, queries)


def solve(problem: Problem) -> tuple[RoadNetwork, list[QueryResult]]:
    """Build the network of a problem and answer each of its queries."""
    network = build_network(problem.sites, problem.roads)
    for point in problem.extra_points:
        network.attach_point(point)

    results = []
    for query in problem.queries:
        try:
            start = network.parse_label(query.start)
            goal = network.parse_label(query.goal)
        except ValueError:
            results.append(QueryResult(query, None, None))
            continue
        if query.k == 1:
            best = shortest_path(network, start, goal)
            paths: tuple[Path, ...] = (best,) if best is not None else ()
        else:
            paths = tuple(k_shortest_paths(network, start, goal, query.k))
        results.append(QueryResult(query, start, goal, paths))
    return network, results


def format_result(network: RoadNetwork, result: QueryResult) -> str:
    """Render a result: ``NA`` or, per route, its length and its point names."""
    if not result.paths:
        return "NA\n"
    lines = []
    for path in result.paths:
        lines.append(f"{path.cost:.5f}")
        lines.append(" ".join(network.label(node) for node in path.nodes))
    return "\n".join(lines) + "\n"


def run(text: str) -> str:
    """Answer every query of an input document and return the output text."""
    network, results = solve(parse_input(text))
    return "".join(format_result(network, result) for result in results)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="roadnav", description="Find routes over a road map."
    )
    parser.add_argument(
        "input", nargs="?", help="input file (standard input when omitted)"
    )
    args = parser.parse_args(argv)

    try:
        if args.input is None:
            text = sys.stdin.read()
        else:
            with open(args.input, encoding="utf-8") as handle:
                text = handle.read()
        output = run(text)
    except (OSError, ValueError, IndexError) as error:
        print(f"roadnav: {error}", file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())