"""Base classes for map generation."""

from __future__ import annotations

import abc
import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tacmap.types import BiomeType

if TYPE_CHECKING:
    from tacmap.environment.map import (
        BiomeCluster,
        MapConfig,
        NavGraph,
        Obstacle,
        SpecialZone,
    )
    from tacmap.types import Vec2


@dataclass(frozen=True)
class GeneratedMap:
    """A complete, immutable battle map.

    Produced in a single generation run. The only sanctioned change
    afterwards is moving the respawn point via with_respawn(), which
    returns a new map sharing every other field.

    Attributes:
        config: The configuration the map was generated from.
        obstacles: Physical features in generation order.
        zones: Biome zones in generation order.
        pois: Points of interest.
        nav_graph: Walkability graph avoiding blocking obstacles.
        respawn: Respawn position.
        clusters: Biome clusters that were actually placed.
    """

    config: MapConfig
    obstacles: tuple[Obstacle, ...]
    zones: tuple[SpecialZone, ...]
    pois: tuple[Vec2, ...]
    nav_graph: NavGraph
    respawn: Vec2
    clusters: tuple[BiomeCluster, ...] = ()

    def with_respawn(self, position: Vec2) -> GeneratedMap:
        """Return a copy of this map with the respawn point replaced."""
        return dataclasses.replace(self, respawn=position)

    def zones_of(self, biome: BiomeType) -> list[SpecialZone]:
        return [zone for zone in self.zones if zone.biome == biome]

    def obstacles_of(self, biome: BiomeType) -> list[Obstacle]:
        return [obstacle for obstacle in self.obstacles if obstacle.biome == biome]

    @property
    def river(self) -> SpecialZone | None:
        """The unified river zone, if hydrology produced one."""
        rivers = self.zones_of(BiomeType.RIVER)
        return rivers[0] if rivers else None


class BaseMapGenerator(abc.ABC):
    """Abstract base class for map generation algorithms."""

    def __init__(self, map_config: MapConfig) -> None:
        self.map_config = map_config

    @abc.abstractmethod
    def generate(self) -> GeneratedMap:
        """Generate a complete map from the configuration."""
        raise NotImplementedError
