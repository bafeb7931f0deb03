"""Generation context for the pipeline map generator.

The GenerationContext is a mutable container that holds all state during map
generation. Each layer in the pipeline receives the same context and appends
to it. At the end of the run the context is frozen into a GeneratedMap.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field

from tacmap import config
from tacmap.environment.generators.base import GeneratedMap
from tacmap.environment.map import (
    BiomeCluster,
    MapConfig,
    NavGraph,
    Obstacle,
    SpecialZone,
)
from tacmap.types import Vec2
from tacmap.util.geometry import Bounds
from tacmap.util.rng import RNGProvider


@dataclass
class GenerationContext:
    """Mutable state container passed through the generation pipeline.

    Attributes:
        map_config: The configuration being generated.
        rng: Per-run provider of isolated random streams.
        pois: Points of interest.
        obstacles: Obstacles in placement order.
        zones: Zones in placement order.
        clusters: Biome clusters that were placed.
        nav_graph: Navigation graph, empty until the navigation layer runs.
        respawn: Respawn position.
    """

    map_config: MapConfig
    rng: RNGProvider
    pois: list[Vec2] = field(default_factory=list)
    obstacles: list[Obstacle] = field(default_factory=list)
    zones: list[SpecialZone] = field(default_factory=list)
    clusters: list[BiomeCluster] = field(default_factory=list)
    nav_graph: NavGraph = field(default_factory=NavGraph)
    respawn: Vec2 = Vec2(0.0, 0.0)
    _id_counters: defaultdict[str, int] = field(
        default_factory=lambda: defaultdict(int)
    )

    @classmethod
    def create(cls, map_config: MapConfig) -> GenerationContext:
        """Create an empty context with its own random streams.

        Args:
            map_config: The configuration to generate.

        Returns:
            A new GenerationContext ready for layer processing.
        """
        return cls(map_config=map_config, rng=RNGProvider(map_config.seed))

    @property
    def width(self) -> float:
        return self.map_config.width

    @property
    def height(self) -> float:
        return self.map_config.height

    @property
    def playable_bounds(self) -> Bounds:
        """The map minus its border on every side."""
        border = config.MAP_BORDER_THICKNESS
        return Bounds(border, border, self.width - border, self.height - border)

    def next_id(self, prefix: str) -> str:
        """Allocate the next identifier for a kind of feature.

        Counters are kept per prefix, so a layer that adds no features of a
        kind never shifts the identifiers other layers hand out.
        """
        number = self._id_counters[prefix]
        self._id_counters[prefix] += 1
        return f"{prefix}-{number}"

    def add_obstacle(self, obstacle: Obstacle) -> None:
        self.obstacles.append(obstacle)

    def add_zone(self, zone: SpecialZone) -> None:
        self.zones.append(zone)

    def blocking_obstacles(self) -> list[Obstacle]:
        return [obstacle for obstacle in self.obstacles if obstacle.blocking]

    def to_generated_map(self) -> GeneratedMap:
        """Freeze this context into a GeneratedMap."""
        return GeneratedMap(
            config=self.map_config,
            obstacles=tuple(self.obstacles),
            zones=tuple(self.zones),
            pois=tuple(self.pois),
            nav_graph=self.nav_graph,
            respawn=self.respawn,
            clusters=tuple(self.clusters),
        )
