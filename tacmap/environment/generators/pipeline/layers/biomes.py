"""Biome cluster layer: forests, ruins, rock fields and mud.

The usable area (map minus the safe margin) is cut into square cells. A
target number of clusters is split across the non-river biomes by weight,
the cells are shuffled, and each cluster takes the next cell. Clusters that
would land on top of a point of interest are dropped rather than moved.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from tacmap import config
from tacmap.environment.generators.pipeline.context import GenerationContext
from tacmap.environment.generators.pipeline.layer import GenerationLayer
from tacmap.environment.map import BiomeCluster, MapConfig, Obstacle, SpecialZone
from tacmap.types import BiomeType, Vec2
from tacmap.util.geometry import blob, distance, random_polygon, rect
from tacmap.util.rng import RNG

type ClusterBuilder = Callable[[GenerationContext, RNG, Vec2], None]


def target_cluster_count(cols: int, rows: int, density: float) -> int:
    """Clusters to place on a cols x rows grid, capped at MAX_CLUSTERS."""
    by_density = math.floor(cols * rows * density * config.CLUSTER_DENSITY_FACTOR)
    return min(config.MAX_CLUSTERS, by_density)


def assign_biomes(map_config: MapConfig, total: int) -> list[BiomeType]:
    """Split total clusters across non-river biomes in proportion to weight.

    Shares are rounded half up, so the result may be a little above or below
    total. Biomes appear in declaration order, grouped.
    """
    biomes = [b for b in BiomeType if b is not BiomeType.RIVER]
    total_weight = sum(map_config.weight(b) for b in biomes)
    if total_weight <= 0:
        return []

    assignments: list[BiomeType] = []
    for biome in biomes:
        share = map_config.weight(biome) / total_weight * total
        assignments.extend([biome] * math.floor(share + 0.5))
    return assignments


# =============================================================================
# Cluster builders
# =============================================================================


def build_forest(ctx: GenerationContext, rng: RNG, center: Vec2) -> None:
    """Blob-shaped forest zone with a few blocking trees inside it."""
    radius = rng.uniform(*config.FOREST_RADIUS_RANGE)
    outline = blob(
        rng,
        center,
        radius,
        config.FOREST_BLOB_POINTS,
        config.BLOB_VARIANCE_RANGE,
    )
    ctx.add_zone(
        SpecialZone.outline(
            ctx.next_id("forest"), BiomeType.FOREST, outline, center, radius
        )
    )

    for _ in range(rng.randint(*config.FOREST_TREE_COUNT_RANGE)):
        angle = rng.random() * math.tau
        # sqrt keeps trees evenly spread over the disc instead of bunching
        # at the middle
        dist = math.sqrt(rng.random()) * radius * config.FOREST_TREE_SPREAD
        tree_radius = rng.uniform(*config.FOREST_TREE_RADIUS_RANGE)
        position = Vec2(
            center.x + math.cos(angle) * dist, center.y + math.sin(angle) * dist
        )
        ctx.add_obstacle(
            Obstacle.circle(
                ctx.next_id("tree"), BiomeType.FOREST, position, tree_radius
            )
        )


def build_ruins(ctx: GenerationContext, rng: RNG, center: Vec2) -> None:
    """Two crossing blocking walls sharing one random rotation."""
    size = rng.uniform(*config.RUINS_SIZE_RANGE)
    angle = rng.random() * math.tau
    thickness = ctx.map_config.wall_thickness
    cos = math.cos(angle)
    sin = math.sin(angle)

    # (offset x, offset y, width, height) in the unrotated ruin frame
    walls = ((0.0, 0.0, size, thickness), (size / 2, size / 2, thickness, size))
    for offset_x, offset_y, w, h in walls:
        wall_center = Vec2(
            center.x + offset_x * cos - offset_y * sin,
            center.y + offset_x * sin + offset_y * cos,
        )
        ctx.add_obstacle(
            Obstacle.polygon(
                ctx.next_id("wall"),
                BiomeType.RUINS,
                rect(wall_center, w, h, angle),
            )
        )


def build_rocks(ctx: GenerationContext, rng: RNG, center: Vec2) -> None:
    """A handful of irregular blocking boulders around the center."""
    for _ in range(config.ROCKS_PER_CLUSTER):
        angle = rng.random() * math.tau
        dist = rng.uniform(0, config.ROCK_SCATTER_RADIUS)
        position = Vec2(
            center.x + math.cos(angle) * dist, center.y + math.sin(angle) * dist
        )
        radius = rng.uniform(*config.ROCK_RADIUS_RANGE)
        min_vertices, max_vertices = config.ROCK_VERTEX_RANGE
        outline = random_polygon(
            rng,
            position,
            radius,
            min_vertices,
            max_vertices,
            config.POLYGON_VARIANCE_RANGE,
        )
        ctx.add_obstacle(
            Obstacle.polygon(ctx.next_id("rock"), BiomeType.ROCKS, outline)
        )


def build_mud(ctx: GenerationContext, rng: RNG, center: Vec2) -> None:
    """Blob-shaped mud zone. Slows units but never blocks them."""
    radius = rng.uniform(*config.MUD_RADIUS_RANGE)
    outline = blob(
        rng, center, radius, config.MUD_BLOB_POINTS, config.BLOB_VARIANCE_RANGE
    )
    ctx.add_zone(
        SpecialZone.outline(ctx.next_id("mud"), BiomeType.MUD, outline, center, radius)
    )


CLUSTER_BUILDERS: dict[BiomeType, ClusterBuilder] = {
    BiomeType.FOREST: build_forest,
    BiomeType.RUINS: build_ruins,
    BiomeType.ROCKS: build_rocks,
    BiomeType.MUD: build_mud,
}


class BiomeClusterLayer(GenerationLayer):
    """Scatters biome clusters over a shuffled grid of cells.

    Must run after the landmark layer: clusters centered within
    POI_CLUSTER_CLEARANCE of a point of interest are skipped.
    """

    name = "biomes"

    def __init__(
        self,
        cell_size: float = config.CLUSTER_CELL_SIZE,
        poi_clearance: float = config.POI_CLUSTER_CLEARANCE,
    ) -> None:
        """Initialize the cluster layer.

        Args:
            cell_size: Side of each placement cell in world units.
            poi_clearance: Minimum distance from a cluster center to any POI.
        """
        self.cell_size = cell_size
        self.poi_clearance = poi_clearance

    def apply(self, ctx: GenerationContext) -> None:
        rng = ctx.rng.get("map.biomes")
        margin = config.SAFE_MARGIN
        cols = math.floor((ctx.width - margin * 2) / self.cell_size)
        rows = math.floor((ctx.height - margin * 2) / self.cell_size)
        if cols <= 0 or rows <= 0:
            return

        total = target_cluster_count(cols, rows, ctx.map_config.obstacle_density)
        assignments = assign_biomes(ctx.map_config, total)

        cells = [(c, r) for c in range(cols) for r in range(rows)]
        rng.shuffle(cells)

        half_cell = self.cell_size / 2
        jitter = config.CLUSTER_JITTER
        for (c, r), biome in zip(cells, assignments, strict=False):
            center = Vec2(
                margin + c * self.cell_size + half_cell + rng.uniform(-jitter, jitter),
                margin + r * self.cell_size + half_cell + rng.uniform(-jitter, jitter),
            )
            if any(distance(poi, center) < self.poi_clearance for poi in ctx.pois):
                continue

            CLUSTER_BUILDERS[biome](ctx, rng, center)
            ctx.clusters.append(BiomeCluster(biome, center))
