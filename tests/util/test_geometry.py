from __future__ import annotations

import math

import pytest

from tacmap.environment.map import Obstacle
from tacmap.types import BiomeType, Vec2
from tacmap.util import geometry
from tacmap.util.geometry import Bounds
from tacmap.util.rng import SeededRandom

UNIT_SQUARE = [Vec2(0, 0), Vec2(1, 0), Vec2(1, 1), Vec2(0, 1)]


class TestBounds:
    def test_width_height(self) -> None:
        b = Bounds(10, 20, 40, 80)
        assert b.width == 30
        assert b.height == 60

    def test_contains_is_inclusive(self) -> None:
        b = Bounds(0, 0, 10, 10)
        assert b.contains(Vec2(0, 0))
        assert b.contains(Vec2(10, 10))
        assert not b.contains(Vec2(10.01, 5))

    def test_intersects_touching_edges(self) -> None:
        assert Bounds(0, 0, 10, 10).intersects(Bounds(10, 0, 20, 10))
        assert not Bounds(0, 0, 10, 10).intersects(Bounds(11, 0, 20, 10))

    def test_expanded(self) -> None:
        assert Bounds(0, 0, 10, 10).expanded(5) == Bounds(-5, -5, 15, 15)

    def test_bounds_of(self) -> None:
        pts = [Vec2(3, -1), Vec2(-2, 4), Vec2(0, 0)]
        assert geometry.bounds_of(pts) == Bounds(-2, -1, 3, 4)

    def test_bounds_of_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            geometry.bounds_of([])

    def test_circle_bounds(self) -> None:
        assert geometry.circle_bounds(Vec2(5, 5), 2) == Bounds(3, 3, 7, 7)


class TestMeasures:
    def test_distance(self) -> None:
        assert geometry.distance(Vec2(0, 0), Vec2(3, 4)) == 5

    def test_polygon_area_sign(self) -> None:
        """Counter-clockwise rings are positive, clockwise rings negative."""
        assert geometry.polygon_area(UNIT_SQUARE) == pytest.approx(1.0)
        assert geometry.polygon_area(UNIT_SQUARE[::-1]) == pytest.approx(-1.0)

    def test_polygon_area_degenerate(self) -> None:
        assert geometry.polygon_area([Vec2(0, 0), Vec2(1, 1)]) == 0.0


class TestContainment:
    def test_point_in_polygon(self) -> None:
        assert geometry.point_in_polygon(Vec2(0.5, 0.5), UNIT_SQUARE)
        assert not geometry.point_in_polygon(Vec2(1.5, 0.5), UNIT_SQUARE)
        assert not geometry.point_in_polygon(Vec2(-0.5, 0.5), UNIT_SQUARE)

    def test_point_in_concave_polygon(self) -> None:
        """The notch of a U shape is outside."""
        u_shape = [
            Vec2(0, 0),
            Vec2(3, 0),
            Vec2(3, 3),
            Vec2(2, 3),
            Vec2(2, 1),
            Vec2(1, 1),
            Vec2(1, 3),
            Vec2(0, 3),
        ]
        assert geometry.point_in_polygon(Vec2(0.5, 2), u_shape)
        assert not geometry.point_in_polygon(Vec2(1.5, 2), u_shape)


class TestSegments:
    def test_crossing_segments(self) -> None:
        assert geometry.segments_intersect(
            Vec2(0, 0), Vec2(2, 2), Vec2(0, 2), Vec2(2, 0)
        )

    def test_disjoint_segments(self) -> None:
        assert not geometry.segments_intersect(
            Vec2(0, 0), Vec2(1, 0), Vec2(0, 1), Vec2(1, 1)
        )

    def test_segments_that_would_cross_if_extended(self) -> None:
        """Lines cross at (3, 3), outside both segments."""
        assert not geometry.segments_intersect(
            Vec2(0, 0), Vec2(1, 1), Vec2(6, 0), Vec2(5, 1)
        )

    def test_crossing_with_offset_origin(self) -> None:
        assert geometry.segments_intersect(
            Vec2(10, 0), Vec2(10, 20), Vec2(0, 5), Vec2(30, 5)
        )
        assert not geometry.segments_intersect(
            Vec2(10, 0), Vec2(10, 20), Vec2(12, 5), Vec2(30, 5)
        )

    def test_collinear_segments_never_intersect(self) -> None:
        assert not geometry.segments_intersect(
            Vec2(0, 0), Vec2(2, 0), Vec2(1, 0), Vec2(3, 0)
        )

    def test_point_segment_distance(self) -> None:
        assert geometry.point_segment_distance(
            Vec2(5, 3), Vec2(0, 0), Vec2(10, 0)
        ) == pytest.approx(3)
        # Past the end clamps to the endpoint.
        assert geometry.point_segment_distance(
            Vec2(13, 4), Vec2(0, 0), Vec2(10, 0)
        ) == pytest.approx(5)

    def test_point_segment_distance_zero_length(self) -> None:
        assert geometry.point_segment_distance(
            Vec2(3, 4), Vec2(0, 0), Vec2(0, 0)
        ) == pytest.approx(5)

    def test_segment_intersects_circle(self) -> None:
        c = Vec2(5, 5)
        assert geometry.segment_intersects_circle(Vec2(0, 5), Vec2(10, 5), c, 1)
        assert not geometry.segment_intersects_circle(Vec2(0, 0), Vec2(10, 0), c, 1)


class TestObstacleTests:
    def _rock(self) -> Obstacle:
        return Obstacle.circle("rock-0", BiomeType.ROCKS, Vec2(50, 50), 10)

    def _wall(self) -> Obstacle:
        square = [Vec2(0, 0), Vec2(20, 0), Vec2(20, 20), Vec2(0, 20)]
        return Obstacle.polygon("wall-0", BiomeType.RUINS, square)

    def test_point_blocked_by_circle(self) -> None:
        rock = self._rock()
        assert geometry.point_blocked_by(Vec2(55, 50), rock)
        assert not geometry.point_blocked_by(Vec2(65, 50), rock)
        assert geometry.point_blocked_by(Vec2(65, 50), rock, padding=10)

    def test_point_blocked_by_polygon(self) -> None:
        wall = self._wall()
        assert geometry.point_blocked_by(Vec2(10, 10), wall)
        assert not geometry.point_blocked_by(Vec2(25, 10), wall)
        assert geometry.point_blocked_by(Vec2(25, 10), wall, padding=6)

    def test_segment_through_circle(self) -> None:
        rock = self._rock()
        assert geometry.segment_intersects_obstacle(Vec2(0, 50), Vec2(100, 50), rock)
        assert not geometry.segment_intersects_obstacle(
            Vec2(0, 0), Vec2(100, 0), rock
        )

    def test_segment_padding_circle(self) -> None:
        rock = self._rock()
        assert not geometry.segment_intersects_obstacle(
            Vec2(0, 65), Vec2(100, 65), rock
        )
        assert geometry.segment_intersects_obstacle(
            Vec2(0, 65), Vec2(100, 65), rock, padding=8
        )

    def test_segment_through_polygon(self) -> None:
        wall = self._wall()
        assert geometry.segment_intersects_obstacle(Vec2(-10, 10), Vec2(30, 10), wall)
        assert not geometry.segment_intersects_obstacle(
            Vec2(-10, 30), Vec2(30, 30), wall
        )

    def test_segment_inside_polygon(self) -> None:
        """A segment wholly inside crosses no edge but is still blocked."""
        wall = self._wall()
        assert geometry.segment_intersects_obstacle(Vec2(5, 5), Vec2(15, 15), wall)

    def test_segment_padding_polygon(self) -> None:
        wall = self._wall()
        assert not geometry.segment_intersects_obstacle(
            Vec2(-10, 25), Vec2(30, 25), wall
        )
        assert geometry.segment_intersects_obstacle(
            Vec2(-10, 25), Vec2(30, 25), wall, padding=6
        )


class TestShapeSampling:
    def test_random_polygon_vertex_count_and_radius(self) -> None:
        rng = SeededRandom("poly")
        center = Vec2(100, 100)
        for _ in range(20):
            verts = geometry.random_polygon(rng, center, 40, 5, 8, (0.6, 1.0))
            assert 5 <= len(verts) <= 8
            for v in verts:
                assert 24 - 1e-9 <= geometry.distance(v, center) <= 40 + 1e-9

    def test_random_polygon_angles_are_sorted(self) -> None:
        """Vertices wind once around the center so the ring never crosses."""
        rng = SeededRandom("poly")
        verts = geometry.random_polygon(rng, Vec2(0, 0), 30, 6, 6)
        angles = [math.atan2(v.y, v.x) % math.tau for v in verts]
        assert angles == sorted(angles)

    def test_blob(self) -> None:
        rng = SeededRandom("blob")
        center = Vec2(0, 0)
        verts = geometry.blob(rng, center, 50, points=14)
        assert len(verts) == 14
        for v in verts:
            assert 35 - 1e-9 <= geometry.distance(v, center) <= 65 + 1e-9

    def test_rect_unrotated(self) -> None:
        corners = geometry.rect(Vec2(10, 10), 4, 2, 0.0)
        assert corners[0] == pytest.approx((8, 9))
        assert corners[2] == pytest.approx((12, 11))

    def test_rect_rotated_keeps_area(self) -> None:
        corners = geometry.rect(Vec2(0, 0), 30, 10, math.pi / 5)
        assert abs(geometry.polygon_area(corners)) == pytest.approx(300)


class TestSplines:
    def test_catmull_rom_endpoints(self) -> None:
        p = [Vec2(0, 0), Vec2(1, 2), Vec2(3, 1), Vec2(4, 4)]
        assert geometry.catmull_rom(*p, 0.0) == pytest.approx(p[1])

    def test_catmull_rom_collinear_midpoint(self) -> None:
        p = [Vec2(0, 0), Vec2(1, 0), Vec2(2, 0), Vec2(3, 0)]
        mid = geometry.catmull_rom(*p, 0.5)
        assert mid.x == pytest.approx(1.5)
        assert mid.y == pytest.approx(0.0)

    def test_smooth_path_point_count(self) -> None:
        control = [Vec2(0, 0), Vec2(100, 50), Vec2(200, 0), Vec2(300, 80)]
        path = geometry.smooth_path(control, 15)
        assert len(path) == 3 * 15 + 1

    def test_smooth_path_passes_through_ends(self) -> None:
        control = [Vec2(0, 0), Vec2(100, 50), Vec2(200, 0)]
        path = geometry.smooth_path(control, 6)
        assert path[0] == pytest.approx(control[0])
        assert path[-1] == control[-1]
        # Each span starts on its control point.
        assert path[6] == pytest.approx(control[1])
