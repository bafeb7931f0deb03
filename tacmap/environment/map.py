"""Data model for generated battle maps.

Shapes are a closed set of frozen variants (Circle, Polygon). Every object
that carries a shape also carries its precomputed Bounds, which must equal
the true bounds of the shape; use the factory classmethods to get that for
free.
"""

from __future__ import annotations

import dataclasses
import secrets
import string
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from tacmap import config
from tacmap.types import BiomeType, EdgeIndex, Ring, Vec2
from tacmap.util.geometry import Bounds, bounds_of, circle_bounds


@dataclass(frozen=True, slots=True)
class Circle:
    center: Vec2
    radius: float


@dataclass(frozen=True, slots=True)
class Polygon:
    vertices: Ring


type Shape = Circle | Polygon


def shape_bounds(shape: Shape) -> Bounds:
    """Tight bounds of a shape."""
    match shape:
        case Circle(center=center, radius=radius):
            return circle_bounds(center, radius)
        case Polygon(vertices=vertices):
            return bounds_of(vertices)
        case _:
            raise TypeError(f"Unknown shape: {shape!r}")


def shape_points(shape: Shape) -> list[Vec2]:
    """Extreme points of a shape: a polygon's vertices, a circle's axis extents."""
    match shape:
        case Circle(center=center, radius=radius):
            return [
                Vec2(center.x - radius, center.y),
                Vec2(center.x + radius, center.y),
                Vec2(center.x, center.y - radius),
                Vec2(center.x, center.y + radius),
            ]
        case Polygon(vertices=vertices):
            return list(vertices)
        case _:
            raise TypeError(f"Unknown shape: {shape!r}")


@dataclass(frozen=True, slots=True)
class Obstacle:
    """A physical map feature.

    Blocking obstacles keep nav-graph nodes away and cut edges; non-blocking
    ones are cosmetic.

    Attributes:
        id: Identifier, unique within one generated map.
        biome: The biome that produced this obstacle.
        shape: Circle or Polygon geometry.
        blocking: Whether navigation must avoid it.
        bounds: Precomputed bounds of shape.
    """

    id: str
    biome: BiomeType
    shape: Shape
    blocking: bool
    bounds: Bounds

    @classmethod
    def circle(
        cls,
        obstacle_id: str,
        biome: BiomeType,
        center: Vec2,
        radius: float,
        blocking: bool = True,
    ) -> Obstacle:
        shape = Circle(center, radius)
        return cls(obstacle_id, biome, shape, blocking, shape_bounds(shape))

    @classmethod
    def polygon(
        cls,
        obstacle_id: str,
        biome: BiomeType,
        vertices: Ring | list[Vec2],
        blocking: bool = True,
    ) -> Obstacle:
        shape = Polygon(tuple(vertices))
        return cls(obstacle_id, biome, shape, blocking, shape_bounds(shape))


@dataclass(frozen=True, slots=True)
class SpecialZone:
    """A biome-tagged area used for rendering and gameplay effects.

    Zones never block navigation.

    Attributes:
        id: Identifier, unique within one generated map.
        biome: Biome the zone belongs to.
        shape: Outline of the zone.
        bounds: Precomputed bounds of shape.
        center: Nominal anchor point of the zone.
        radius: Nominal radius the outline was sampled from (0 for rivers).
    """

    id: str
    biome: BiomeType
    shape: Shape
    bounds: Bounds
    center: Vec2
    radius: float

    @classmethod
    def outline(
        cls,
        zone_id: str,
        biome: BiomeType,
        vertices: Ring | list[Vec2],
        center: Vec2,
        radius: float = 0.0,
    ) -> SpecialZone:
        shape = Polygon(tuple(vertices))
        return cls(zone_id, biome, shape, shape_bounds(shape), center, radius)


@dataclass(frozen=True, slots=True)
class NavGraph:
    """Walkability graph stored as an index-addressed arena.

    Edges are undirected pairs of indices into nodes, each stored once.
    Connectivity is not guaranteed.
    """

    nodes: tuple[Vec2, ...] = ()
    edges: tuple[EdgeIndex, ...] = ()


@dataclass(frozen=True, slots=True)
class BiomeCluster:
    """Where a biome cluster was placed."""

    biome: BiomeType
    center: Vec2


def _default_biome_weights() -> dict[BiomeType, int]:
    return dict(config.DEFAULT_BIOME_WEIGHTS)


@dataclass(frozen=True)
class MapConfig:
    """Everything needed to generate one map.

    Values are trusted as given: range checks are the caller's job (see
    clamped()). Non-positive dimensions produce undefined geometry. The
    biome weights are copied into a read-only mapping, so a config (and
    every map that echoes it) can't be changed after construction.

    Attributes:
        width: Map width in world units.
        height: Map height in world units.
        seed: Seed string; identical configs generate identical maps.
        obstacle_density: Cluster density in [0.05, 0.8].
        biome_weights: Weight in [0, 10] per biome, River included.
        poi_count: Number of points of interest.
        unit_radius: Clearance kept between nav nodes and blocking obstacles.
        wall_thickness: Thickness of ruin walls.
        river_width: Reported for display; ribbon width is derived from the
            River weight.
        river_tributaries: Number of tributary branches to attempt.
        river_trib_width_ratio: Tributary width as a fraction of the main
            channel, in (0, 1).
        river_width_variation: Amplitude of the main channel width
            oscillation, >= 0.
        river_branch_angle: Angle in degrees between the flow direction and
            a departing tributary.
    """

    width: float = config.DEFAULT_MAP_SIZE
    height: float = config.DEFAULT_MAP_SIZE
    seed: str = config.DEFAULT_SEED
    obstacle_density: float = config.DEFAULT_OBSTACLE_DENSITY
    # Read-only after construction; left out of the hash
    biome_weights: Mapping[BiomeType, int] = field(
        default_factory=_default_biome_weights, hash=False
    )
    poi_count: int = config.DEFAULT_POI_COUNT
    unit_radius: float = config.DEFAULT_UNIT_RADIUS
    wall_thickness: float = config.DEFAULT_WALL_THICKNESS
    river_width: float = config.DEFAULT_RIVER_WIDTH
    river_tributaries: int = config.DEFAULT_RIVER_TRIBUTARIES
    river_trib_width_ratio: float = config.DEFAULT_RIVER_TRIB_WIDTH_RATIO
    river_width_variation: float = config.DEFAULT_RIVER_WIDTH_VARIATION
    river_branch_angle: float = config.DEFAULT_RIVER_BRANCH_ANGLE

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "biome_weights", MappingProxyType(dict(self.biome_weights))
        )

    def weight(self, biome: BiomeType) -> int:
        """Weight for biome, 0 when absent."""
        return self.biome_weights.get(biome, 0)

    def with_weight(self, biome: BiomeType, weight: int) -> MapConfig:
        """Copy of this config with one biome weight replaced."""
        weights = dict(self.biome_weights)
        weights[biome] = weight
        return dataclasses.replace(self, biome_weights=weights)

    def with_size(self, preset: str) -> MapConfig:
        """Copy of this config resized to a square size preset.

        Raises:
            ValueError: If the preset name is not recognized.
        """
        try:
            size = config.MAP_SIZE_PRESETS[preset.lower()]
        except KeyError:
            known = ", ".join(config.MAP_SIZE_PRESETS)
            raise ValueError(
                f"Unknown map size preset: {preset!r} (expected one of {known})"
            ) from None
        return dataclasses.replace(self, width=size, height=size)

    def clamped(self) -> MapConfig:
        """Copy of this config with every scalar pulled into its valid range."""
        low_w, high_w = config.BIOME_WEIGHT_RANGE
        low_d, high_d = config.OBSTACLE_DENSITY_RANGE
        weights = {
            biome: max(low_w, min(high_w, int(self.biome_weights.get(biome, 0))))
            for biome in BiomeType
        }
        return dataclasses.replace(
            self,
            obstacle_density=max(low_d, min(high_d, self.obstacle_density)),
            biome_weights=weights,
            poi_count=max(0, self.poi_count),
            river_tributaries=max(0, self.river_tributaries),
            river_trib_width_ratio=max(0.05, min(0.95, self.river_trib_width_ratio)),
            river_width_variation=max(0.0, self.river_width_variation),
        )


def new_seed(length: int = 6) -> str:
    """A fresh random seed string for "reroll" style regeneration."""
    alphabet = string.ascii_uppercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))
