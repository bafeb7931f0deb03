from __future__ import annotations

import pytest

from tacmap import config
from tacmap.environment.map import (
    Circle,
    MapConfig,
    Obstacle,
    Polygon,
    SpecialZone,
    new_seed,
    shape_bounds,
    shape_points,
)
from tacmap.types import BiomeType, Vec2
from tacmap.util.geometry import Bounds


class TestShapes:
    def test_circle_bounds(self) -> None:
        assert shape_bounds(Circle(Vec2(10, 20), 5)) == Bounds(5, 15, 15, 25)

    def test_polygon_bounds(self) -> None:
        poly = Polygon((Vec2(0, 0), Vec2(4, 1), Vec2(2, 6)))
        assert shape_bounds(poly) == Bounds(0, 0, 4, 6)

    def test_unknown_shape_raises(self) -> None:
        with pytest.raises(TypeError):
            shape_bounds("not a shape")  # type: ignore[arg-type]

    def test_circle_points_are_axis_extremes(self) -> None:
        points = shape_points(Circle(Vec2(0, 0), 3))
        assert set(points) == {Vec2(-3, 0), Vec2(3, 0), Vec2(0, -3), Vec2(0, 3)}

    def test_shapes_are_immutable(self) -> None:
        circle = Circle(Vec2(0, 0), 1)
        with pytest.raises(AttributeError):
            circle.radius = 2  # type: ignore[misc]


class TestFeatures:
    def test_obstacle_circle_factory_sets_bounds(self) -> None:
        obstacle = Obstacle.circle("tree-0", BiomeType.FOREST, Vec2(100, 100), 12)
        assert obstacle.blocking
        assert obstacle.shape == Circle(Vec2(100, 100), 12)
        assert obstacle.bounds == Bounds(88, 88, 112, 112)

    def test_obstacle_polygon_factory_copies_vertices(self) -> None:
        vertices = [Vec2(0, 0), Vec2(10, 0), Vec2(5, 8)]
        obstacle = Obstacle.polygon("rock-0", BiomeType.ROCKS, vertices)
        vertices.append(Vec2(100, 100))

        assert isinstance(obstacle.shape, Polygon)
        assert len(obstacle.shape.vertices) == 3
        assert obstacle.bounds == Bounds(0, 0, 10, 8)

    def test_non_blocking_obstacle(self) -> None:
        obstacle = Obstacle.circle(
            "bush-0", BiomeType.FOREST, Vec2(0, 0), 4, blocking=False
        )
        assert not obstacle.blocking

    def test_zone_outline(self) -> None:
        outline = [Vec2(0, 0), Vec2(50, 0), Vec2(50, 30)]
        zone = SpecialZone.outline(
            "mud-0", BiomeType.MUD, outline, center=Vec2(30, 10), radius=25
        )
        assert zone.bounds == Bounds(0, 0, 50, 30)
        assert zone.center == Vec2(30, 10)
        assert zone.radius == 25


class TestMapConfig:
    def test_defaults(self) -> None:
        cfg = MapConfig()
        assert cfg.seed == "NEXUS_ALPHA"
        assert (cfg.width, cfg.height) == (2000, 2000)
        assert cfg.obstacle_density == pytest.approx(0.32)
        assert cfg.weight(BiomeType.RIVER) == 6
        assert cfg.poi_count == 5

    def test_default_weights_are_not_shared(self) -> None:
        a = MapConfig()
        b = MapConfig()
        assert a.biome_weights == b.biome_weights
        assert a.biome_weights is not b.biome_weights
        assert a.biome_weights is not config.DEFAULT_BIOME_WEIGHTS

    def test_weights_are_read_only(self) -> None:
        cfg = MapConfig()
        with pytest.raises(TypeError):
            cfg.biome_weights[BiomeType.RIVER] = 0  # type: ignore[index]
        assert cfg.weight(BiomeType.RIVER) == 6

    def test_caller_weights_are_copied(self) -> None:
        """Changing the dict passed in doesn't reach the config."""
        weights = {BiomeType.FOREST: 3}
        cfg = MapConfig(biome_weights=weights)
        weights[BiomeType.FOREST] = 9
        assert cfg.weight(BiomeType.FOREST) == 3

    def test_derived_configs_stay_read_only(self) -> None:
        for derived in (
            MapConfig().with_weight(BiomeType.MUD, 1),
            MapConfig().with_size("standard"),
            MapConfig().clamped(),
        ):
            with pytest.raises(TypeError):
                derived.biome_weights[BiomeType.MUD] = 7  # type: ignore[index]

    def test_hashable(self) -> None:
        assert hash(MapConfig()) == hash(MapConfig())
        assert len({MapConfig(), MapConfig(), MapConfig(seed="OTHER")}) == 2

    def test_missing_weight_is_zero(self) -> None:
        cfg = MapConfig(biome_weights={BiomeType.FOREST: 3})
        assert cfg.weight(BiomeType.RIVER) == 0

    def test_with_weight(self) -> None:
        cfg = MapConfig()
        dry = cfg.with_weight(BiomeType.RIVER, 0)
        assert dry.weight(BiomeType.RIVER) == 0
        assert cfg.weight(BiomeType.RIVER) == 6
        assert dry.weight(BiomeType.FOREST) == cfg.weight(BiomeType.FOREST)

    def test_with_size(self) -> None:
        cfg = MapConfig().with_size("Compact")
        assert (cfg.width, cfg.height) == (1200, 1200)

    def test_with_size_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown map size preset"):
            MapConfig().with_size("colossal")

    def test_clamped(self) -> None:
        cfg = MapConfig(
            obstacle_density=2.0,
            biome_weights={BiomeType.FOREST: 15, BiomeType.MUD: -3},
            poi_count=-1,
            river_tributaries=-2,
            river_trib_width_ratio=1.5,
            river_width_variation=-0.5,
        ).clamped()

        assert cfg.obstacle_density == pytest.approx(0.8)
        assert cfg.weight(BiomeType.FOREST) == 10
        assert cfg.weight(BiomeType.MUD) == 0
        assert set(cfg.biome_weights) == set(BiomeType)
        assert cfg.poi_count == 0
        assert cfg.river_tributaries == 0
        assert cfg.river_trib_width_ratio == pytest.approx(0.95)
        assert cfg.river_width_variation == 0.0

    def test_clamped_leaves_valid_config_alone(self) -> None:
        cfg = MapConfig()
        assert cfg.clamped() == cfg


def test_new_seed() -> None:
    seed = new_seed()
    assert len(seed) == 6
    assert seed.isalnum()
    assert seed.upper() == seed
    assert len(new_seed(10)) == 10
