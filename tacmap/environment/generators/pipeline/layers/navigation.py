"""Navigation layer: an obstacle-aware grid graph.

Candidate nodes sit on a regular grid whose spacing grows with map width,
so node count stays bounded on large maps. A candidate survives unless it
lies within unit_radius of a blocking obstacle. Each survivor links to four
forward neighbors (right, down, down-right, down-left), which covers all
eight grid directions without storing any edge twice. An edge survives
unless its segment passes within unit_radius - NAV_EDGE_TOLERANCE of a
blocking obstacle.

Both scans go through a spatial hash of obstacle bounds first; exact
geometry only runs on obstacles whose padded bounds overlap the query.

The graph is not checked for connectivity. Isolated nodes and islands are
the consumer's problem.
"""

from __future__ import annotations

import math

import numpy as np

from tacmap import config
from tacmap.environment.generators.pipeline.context import GenerationContext
from tacmap.environment.generators.pipeline.layer import GenerationLayer
from tacmap.environment.map import NavGraph, Obstacle
from tacmap.types import EdgeIndex, Vec2
from tacmap.util.geometry import (
    Bounds,
    bounds_of,
    point_blocked_by,
    segment_intersects_obstacle,
)
from tacmap.util.spatial import SpatialHashGrid

# Grid offsets (dx, dy) each node links to. Their opposites are covered by
# the neighbor on the other end.
FORWARD_NEIGHBORS = ((1, 0), (0, 1), (1, 1), (-1, 1))

_NO_NODE = -1


def nav_step(width: float) -> int:
    """Grid spacing for a map of the given width."""
    return config.NAV_BASE_STEP + math.floor(
        (width - config.NAV_BASE_WIDTH) / config.NAV_WIDTH_PER_STEP
    )


def _axis(start: float, stop: float, step: int) -> list[float]:
    values: list[float] = []
    value = start
    while value < stop:
        values.append(value)
        value += step
    return values


class NavGraphLayer(GenerationLayer):
    """Builds the walkability graph from the final set of blocking obstacles.

    Must run last: anything added after it would not be reflected in the
    graph.
    """

    name = "navigation"

    def apply(self, ctx: GenerationContext) -> None:
        clearance = ctx.map_config.unit_radius or config.DEFAULT_UNIT_RADIUS
        step = nav_step(ctx.width)
        margin = config.MAP_BORDER_THICKNESS + config.NAV_MARGIN_EXTRA

        xs = _axis(margin, ctx.width - margin, step)
        ys = _axis(margin, ctx.height - margin, step)

        index = SpatialHashGrid[Obstacle](cell_size=step * 2)
        index.extend(ctx.blocking_obstacles())

        nodes, grid = self._place_nodes(xs, ys, index, clearance)
        edges = self._connect(nodes, grid, index, clearance)
        ctx.nav_graph = NavGraph(nodes=tuple(nodes), edges=tuple(edges))

    def _place_nodes(
        self,
        xs: list[float],
        ys: list[float],
        index: SpatialHashGrid[Obstacle],
        clearance: float,
    ) -> tuple[list[Vec2], np.ndarray]:
        """Keep every grid point that clears all blocking obstacles.

        Returns:
            The surviving nodes and a (len(xs), len(ys)) array mapping grid
            cells to node indices, _NO_NODE where the point was blocked.
        """
        nodes: list[Vec2] = []
        grid = np.full((len(xs), len(ys)), _NO_NODE, dtype=np.int32)

        for i, x in enumerate(xs):
            for j, y in enumerate(ys):
                p = Vec2(x, y)
                query_box = Bounds(x, y, x, y).expanded(clearance)
                if any(
                    point_blocked_by(p, obstacle, clearance)
                    for obstacle in index.query(query_box)
                ):
                    continue
                grid[i, j] = len(nodes)
                nodes.append(p)

        return nodes, grid

    def _connect(
        self,
        nodes: list[Vec2],
        grid: np.ndarray,
        index: SpatialHashGrid[Obstacle],
        clearance: float,
    ) -> list[EdgeIndex]:
        padding = clearance - config.NAV_EDGE_TOLERANCE
        cols, rows = grid.shape
        edges: list[EdgeIndex] = []

        for i in range(cols):
            for j in range(rows):
                u = int(grid[i, j])
                if u == _NO_NODE:
                    continue
                for di, dj in FORWARD_NEIGHBORS:
                    ni, nj = i + di, j + dj
                    if not (0 <= ni < cols and 0 <= nj < rows):
                        continue
                    v = int(grid[ni, nj])
                    if v == _NO_NODE:
                        continue
                    if not self._segment_clear(nodes[u], nodes[v], index, padding):
                        continue
                    edges.append((u, v))

        return edges

    def _segment_clear(
        self,
        a: Vec2,
        b: Vec2,
        index: SpatialHashGrid[Obstacle],
        padding: float,
    ) -> bool:
        query_box = bounds_of((a, b)).expanded(max(padding, 0.0))
        return not any(
            segment_intersects_obstacle(a, b, obstacle, padding)
            for obstacle in index.query(query_box)
        )
