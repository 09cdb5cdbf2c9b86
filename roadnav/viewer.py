"""Interactive map viewer for a road network and the routes found on it."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from roadnav.cli import QueryResult
from roadnav.geometry import Point
from roadnav.network import RoadNetwork
from roadnav.routing import Path

MAP_PAD_RATE = 0.05
MIN_ZOOM = 0.1
ZOOM_IN = 0.9
ZOOM_OUT = 1.1
ESCAPE = "\x1b"
MINI_MAP_SIZE = 200
MINI_MAP_PAD_RATE = 0.05
MINI_MAP_FRAME_RATE = 0.05

HELP_LINES = (
    "WASD : Move",
    "+ / - : Zoom In/Out",
    "M/m : Show Mini Map",
    "p : Show Shortest Path",
    "n/b : Next / Previous Path",
    "e/q : Next/Previous Query (pair)",
    "h : Show Help",
    "ESC  : Quit",
)

_BACKGROUND = (242, 242, 242)
_MINI_BACKGROUND = (242, 242, 242)
_ROAD = (77, 77, 77)
_CENTRE_LINE = (255, 255, 255)
_SITE = (204, 26, 26)
_OTHER = (26, 128, 26)
_OTHER_ALT = (26, 102, 204)
_LABEL = (0, 77, 0)
_TEXT = (0, 0, 0)
_WARNING = (255, 0, 0)
_PATH = (0, 204, 204)
_FRAME = (153, 153, 153)
_VIEW_BOX = (255, 128, 0)


class ViewState:
    """Camera, toggles and route selection of the map viewer."""

    def __init__(self, network: RoadNetwork, results: Sequence[QueryResult]) -> None:
        self.network = network
        self.results = list(results)

        min_x, min_y, max_x, max_y = network.bounds()
        pad_x = (max_x - min_x) * MAP_PAD_RATE
        pad_y = (max_y - min_y) * MAP_PAD_RATE
        self.map_bounds = (min_x - pad_x, min_y - pad_y, max_x + pad_x, max_y + pad_y)
        self.center_x = (self.map_bounds[0] + self.map_bounds[2]) / 2.0
        self.center_y = (self.map_bounds[1] + self.map_bounds[3]) / 2.0

        self.zoom = 0.5
        self.zoom_rate = 3.0
        self.window_width = 800
        self.window_height = 800
        self.show_minimap = True
        self.show_path = True
        self.show_help = True
        self.current_query = 0
        self.current_path = 0

    @property
    def map_width(self) -> float:
        return self.map_bounds[2] - self.map_bounds[0]

    @property
    def map_height(self) -> float:
        return self.map_bounds[3] - self.map_bounds[1]

    def _view_size(self) -> tuple[float, float]:
        width = max(self.map_width / self.zoom_rate * self.zoom, 1.0)
        height = max(self.map_height / self.zoom_rate * self.zoom, 1.0)
        return width, height

    def _path_count(self) -> int:
        if not self.results:
            return 0
        return len(self.results[self.current_query].paths)

    def handle_key(self, key: str) -> bool:
        """Apply a key press; return False when the viewer should close."""
        if key == "a":
            self.center_x -= self.zoom
        elif key == "d":
            self.center_x += self.zoom
        elif key == "w":
            self.center_y += self.zoom
        elif key == "s":
            self.center_y -= self.zoom
        elif key in ("+", "="):
            self.zoom = max(self.zoom * ZOOM_IN, MIN_ZOOM)
        elif key in ("-", "_"):
            self.zoom = min(self.zoom * ZOOM_OUT, self.zoom_rate)
        elif key in ("m", "M"):
            self.show_minimap = not self.show_minimap
        elif key == "p":
            self.show_path = not self.show_path
        elif key == "h":
            self.show_help = not self.show_help
        elif key == "q":
            if self.results:
                self.current_query = (self.current_query - 1) % len(self.results)
            self.current_path = 0
        elif key == "e":
            if self.results:
                self.current_query = (self.current_query + 1) % len(self.results)
            self.current_path = 0
        elif key == "n":
            count = self._path_count()
            if count:
                self.current_path = (self.current_path + 1) % count
        elif key == "b":
            count = self._path_count()
            if count:
                self.current_path = (self.current_path - 1) % count
        elif key == ESCAPE:
            return False
        return True

    def handle_wheel(self, up: bool) -> None:
        """Zoom in on a wheel step up, out on a step down."""
        if up:
            self.zoom = max(self.zoom * ZOOM_IN, MIN_ZOOM)
        else:
            self.zoom = min(self.zoom * ZOOM_OUT, self.zoom_rate)

    def clamp(self) -> None:
        """Keep the visible area inside the padded map."""
        width, height = self._view_size()
        min_x, min_y, max_x, max_y = self.map_bounds
        if self.center_x - width / 2 < min_x:
            self.center_x = min_x + width / 2
        if self.center_x + width / 2 > max_x:
            self.center_x = max_x - width / 2
        if self.center_y - height / 2 < min_y:
            self.center_y = min_y + height / 2
        if self.center_y + height / 2 > max_y:
            self.center_y = max_y - height / 2

    def visible_rect(self) -> tuple[float, float, float, float]:
        """Return ``(min_x, min_y, max_x, max_y)`` of the main view."""
        width, height = self._view_size()
        return (
            self.center_x - width / 2,
            self.center_y - height / 2,
            self.center_x + width / 2,
            self.center_y + height / 2,
        )

    def current_path(self) -> Path | None:
        """Return the selected route, or None when none is shown."""
        if not self.show_path or not self.results:
            return None
        paths = self.results[self.current_query].paths
        if not paths:
            return None
        return paths[self.current_path]

    def info_text(self) -> str:
        """Describe the selected query and route."""
        if not self.results:
            return "No query data loaded"
        result = self.results[self.current_query]
        start = (
            self.network.label(result.start)
            if result.start is not None
            else result.query.start
        )
        goal = (
            self.network.label(result.goal)
            if result.goal is not None
            else result.query.goal
        )
        if not result.paths:
            return f"No path from {start} to {goal}"
        cost = result.paths[self.current_path].cost
        return (
            f"From {start} to {goal} | Path {self.current_path + 1}/"
            f"{len(result.paths)} | Distance: {cost:.5f}"
        )

    def display_label(self, index: int) -> str:
        """Return the label drawn next to a point."""
        return self.network.label(index)


@dataclass(frozen=True)
class _Projection:
    world: tuple[float, float, float, float]
    screen: tuple[int, int, int, int]

    def _spans(self) -> tuple[float, float]:
        left, bottom, right, top = self.world
        return max(right - left, 1e-12), max(top - bottom, 1e-12)

    def to_screen(self, point: Point) -> tuple[int, int]:
        left, bottom, _, _ = self.world
        sx, sy, sw, sh = self.screen
        span_x, span_y = self._spans()
        px = sx + (point.x - left) / span_x * sw
        py = sy + sh - (point.y - bottom) / span_y * sh
        return round(px), round(py)

    def length(self, value: float) -> int:
        span_x, _ = self._spans()
        return max(1, round(value / span_x * self.screen[2]))


def _draw_map(pygame, surface, state: ViewState, projection: _Projection, font, main: bool) -> None:
    network = state.network
    dis_x, dis_y = state.map_width, state.map_height

    for width, colour in ((6, _ROAD), (1, _CENTRE_LINE)):
        for u, v in network.edges():
            pygame.draw.line(
                surface,
                colour,
                projection.to_screen(network[u]),
                projection.to_screen(network[v]),
                width,
            )

    offset = math.hypot(dis_x, dis_y) / 500
    for index, point in enumerate(network.points):
        if index < network.site_count:
            colour, radius = _SITE, dis_x * 0.005
        elif main or (index - network.site_count) % 2:
            colour, radius = _OTHER, dis_x * 0.003
        else:
            colour, radius = _OTHER_ALT, dis_x * 0.004
        pygame.draw.circle(
            surface, colour, projection.to_screen(point), projection.length(radius)
        )
        if main:
            text = font.render(state.display_label(index), True, _LABEL)
            surface.blit(
                text, projection.to_screen(Point(point.x + offset, point.y + offset))
            )

    path = state.current_path()
    if path is not None and len(path.nodes) >= 2:
        pygame.draw.lines(
            surface,
            _PATH,
            False,
            [projection.to_screen(network[node]) for node in path.nodes],
            3,
        )


def _rect_points(projection: _Projection, rect: tuple[float, float, float, float]):
    left, bottom, right, top = rect
    return [
        projection.to_screen(Point(left, bottom)),
        projection.to_screen(Point(right, bottom)),
        projection.to_screen(Point(right, top)),
        projection.to_screen(Point(left, top)),
    ]


def _draw(pygame, surface, state: ViewState, font, info_font) -> None:
    surface.fill(_BACKGROUND)
    width, height = state.window_width, state.window_height

    main = _Projection(state.visible_rect(), (0, 0, width, height))
    _draw_map(pygame, surface, state, main, font, True)

    if state.show_path and state.results:
        result = state.results[state.current_query]
        colour = _TEXT if result.paths else _WARNING
        text = info_font.render(state.info_text(), True, colour)
        surface.blit(text, (10, height - 30 - text.get_height()))

    if state.show_help:
        for row, line in enumerate(HELP_LINES):
            surface.blit(font.render(line, True, _TEXT), (10, 10 + row * 20))

    if not state.show_minimap:
        return

    min_x, min_y, max_x, max_y = state.map_bounds
    pad_x = state.map_width * MINI_MAP_PAD_RATE
    pad_y = state.map_height * MINI_MAP_PAD_RATE
    screen_rect = (width - MINI_MAP_SIZE, 0, MINI_MAP_SIZE, MINI_MAP_SIZE)
    mini = _Projection((min_x - pad_x, min_y - pad_y, max_x + pad_x, max_y + pad_y), screen_rect)
    frame_x = pad_x * MINI_MAP_FRAME_RATE
    frame_y = pad_y * MINI_MAP_FRAME_RATE
    frame = (min_x - frame_x, min_y - frame_y, max_x + frame_x, max_y + frame_y)

    surface.set_clip(pygame.Rect(*screen_rect))
    pygame.draw.polygon(surface, _MINI_BACKGROUND, _rect_points(mini, frame))
    _draw_map(pygame, surface, state, mini, font, False)
    pygame.draw.polygon(surface, _FRAME, _rect_points(mini, frame), 1)
    pygame.draw.polygon(surface, _VIEW_BOX, _rect_points(mini, state.visible_rect()), 1)
    surface.set_clip(None)


def run_viewer(network: RoadNetwork, results: Sequence[QueryResult]) -> None:
    """Open a window showing the network and the routes; return when closed."""
    import pygame

    state = ViewState(network, results)
    pygame.init()
    try:
        surface = pygame.display.set_mode(
            (state.window_width, state.window_height), pygame.RESIZABLE
        )
        pygame.display.set_caption("Map Viewer")
        font = pygame.font.SysFont(None, 16)
        info_font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    state.window_width, state.window_height = event.w, event.h
                    surface = pygame.display.set_mode(
                        (event.w, event.h), pygame.RESIZABLE
                    )
                elif event.type == pygame.MOUSEWHEEL:
                    if event.y:
                        state.handle_wheel(event.y > 0)
                elif event.type == pygame.KEYDOWN:
                    key = ESCAPE if event.key == pygame.K_ESCAPE else event.unicode
                    if key and not state.handle_key(key):
                        running = False
            state.clamp()
            _draw(pygame, surface, state, font, info_font)
            pygame.display.flip()
            clock.tick(30)
    finally:
        pygame.quit()