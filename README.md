# roadnav

`roadnav` turns a set of sites and straight roads into a routable road
network, then answers route queries on it.

- Where two roads cross, a new point is created at the crossing and both
  roads are split there, so routes can turn at crossings.
- Extra points can be attached to the network: each one is joined by a new
  road to the nearest place on the existing roads, which splits the road it
  lies on unless it is already a point of the network.
- Queries ask for the shortest route between two points, or for the `k`
  shortest loop-free routes (Yen's method).
- An interactive map viewer, opened from Python, shows the network and lets
  you step through the routes that were found.

## Installation

```
pip install .
```

The viewer uses `pygame`, which is installed as a dependency.

## Command line

```
roadnav problem.txt
roadnav < problem.txt
```

The command reads the named file, or standard input when no file is given.
The input is whitespace separated:

```
N M P Q
x y            (N times: coordinates of the sites)
b e            (M times: a road from site b to site e, 1-based)
x y            (P times: extra points to attach to the network)
s t k          (Q times: a query from s to t, asking for k routes)
```

Points are named by label. Sites are `1` … `N`. Every other point — road
crossings, then attached points and their connectors — is named `C1`, `C2`,
… in the order it was added to the network.

For each query the command prints, for every route found, the route length
with five decimals on one line and the labels of the points along the route
on the next. It prints `NA` when the query names an unknown point, when no
route exists, or when `k` is less than 1.

Malformed or truncated input, or a road naming an unknown site, makes the
command print an error to standard error and exit with status 1.

## Library use

```python
from roadnav.geometry import Point
from roadnav.network import build_network
from roadnav.routing import shortest_path, k_shortest_paths

sites = [Point(0, 0), Point(10, 10), Point(0, 10), Point(10, 0)]
roads = [(0, 1), (2, 3)]          # 0-based site indices
network = build_network(sites, roads)   # the crossing at (5, 5) becomes "C1"

start = network.parse_label("1")
goal = network.parse_label("4")

best = shortest_path(network, start, goal)        # a Path, or None
routes = k_shortest_paths(network, start, goal, 3)  # a list of Path
print(best.cost, [network.label(n) for n in best.nodes])
```

- `roadnav.geometry`: `Point`, `distance`, `segment_intersection`,
  `closest_point_on_segment` and related helpers.
- `roadnav.network`: `RoadNetwork` (with `add_point`, `add_edge`,
  `attach_point`, `neighbours`, `edges`, `label`, `parse_label`, `bounds`)
  and `build_network`.
- `roadnav.routing`: `Path`, `shortest_path`, `k_shortest_paths`.
- `roadnav.cli`: the steps the command uses — `parse_input`, `solve`,
  `format_result`, `run` and `main`.

## Viewer

The command does not open a window. To view a network and its routes, call
the viewer from Python:

```python
from roadnav.cli import parse_input, solve
from roadnav.viewer import run_viewer

with open("problem.txt", encoding="utf-8") as handle:
    network, results = solve(parse_input(handle.read()))
run_viewer(network, results)
```

The window is resizable and shows a mini map in the top right corner.
Keys:

| Key        | Action                           |
|------------|----------------------------------|
| W A S D    | Move                             |
| + / -      | Zoom in / out (also mouse wheel) |
| m / M      | Toggle the mini map              |
| p          | Toggle the route overlay         |
| n / b      | Next / previous route            |
| e / q      | Next / previous query            |
| h          | Toggle the key help              |
| Esc        | Quit                             |

`ViewState` holds the camera, toggles and route selection, and can be used
without opening a window.

## Tests

```
pip install .[test]
pytest
```