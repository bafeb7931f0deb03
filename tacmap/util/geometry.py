"""Geometry primitives for continuous-space map generation.

Covers axis-aligned bounds, point and segment tests, obstacle occlusion,
random shape sampling, and Catmull-Rom spline evaluation. Points are Vec2
named tuples; rings are sequences of points with an implied closing edge.

Boundary semantics:
    point_in_polygon uses the even-odd rule. A point exactly on an edge or
    vertex may be reported either way; only strictly interior and strictly
    exterior points have a defined answer.

    segments_intersect returns False for parallel and collinear segments,
    even overlapping ones. Callers that need collinear overlap detected use
    a positive padding in segment_intersects_obstacle, which falls back to
    a distance test.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from tacmap.types import Vec2

if TYPE_CHECKING:
    from tacmap.environment.map import Obstacle
    from tacmap.util.rng import RNG


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding box in world units (inclusive on all edges)."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, p: Vec2) -> bool:
        return self.min_x <= p.x <= self.max_x and self.min_y <= p.y <= self.max_y

    def intersects(self, other: Bounds) -> bool:
        return (
            self.min_x <= other.max_x
            and self.max_x >= other.min_x
            and self.min_y <= other.max_y
            and self.max_y >= other.min_y
        )

    def expanded(self, padding: float) -> Bounds:
        """Return these bounds grown by padding on every side."""
        return Bounds(
            self.min_x - padding,
            self.min_y - padding,
            self.max_x + padding,
            self.max_y + padding,
        )


# =============================================================================
# BASIC MEASURES
# =============================================================================


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def bounds_of(points: Iterable[Vec2]) -> Bounds:
    """Compute the tight bounds of a non-empty point set."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for p in points:
        min_x = min(min_x, p.x)
        min_y = min(min_y, p.y)
        max_x = max(max_x, p.x)
        max_y = max(max_y, p.y)
    if min_x == math.inf:
        raise ValueError("Cannot compute bounds of an empty point set")
    return Bounds(min_x, min_y, max_x, max_y)


def circle_bounds(center: Vec2, radius: float) -> Bounds:
    return Bounds(
        center.x - radius, center.y - radius, center.x + radius, center.y + radius
    )


def point_in_bounds(p: Vec2, bounds: Bounds) -> bool:
    return bounds.contains(p)


def bounds_intersect(a: Bounds, b: Bounds) -> bool:
    return a.intersects(b)


def polygon_area(ring: Sequence[Vec2] | np.ndarray) -> float:
    """Signed shoelace area of a ring. Positive for counter-clockwise rings
    in a y-up frame."""
    pts = np.asarray(ring, dtype=np.float64)
    if len(pts) < 3:
        return 0.0
    x = pts[:, 0]
    y = pts[:, 1]
    return float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)) / 2.0


# =============================================================================
# CONTAINMENT & INTERSECTION
# =============================================================================


def point_in_polygon(p: Vec2, vertices: Sequence[Vec2]) -> bool:
    """Even-odd ray casting test. Boundary points are implementation-defined."""
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        if (yi > p.y) != (yj > p.y) and p.x < (xj - xi) * (p.y - yi) / (
            yj - yi
        ) + xi:
            inside = not inside
        j = i
    return inside


def segments_intersect(a: Vec2, b: Vec2, c: Vec2, d: Vec2) -> bool:
    """Parametric test for segments ab and cd. Parallel segments never
    intersect, including collinear overlapping ones."""
    denominator = (b.x - a.x) * (d.y - c.y) - (b.y - a.y) * (d.x - c.x)
    if denominator == 0:
        return False
    t = ((c.x - a.x) * (d.y - c.y) - (c.y - a.y) * (d.x - c.x)) / denominator
    u = ((c.x - a.x) * (b.y - a.y) - (c.y - a.y) * (b.x - a.x)) / denominator
    return 0 <= t <= 1 and 0 <= u <= 1


def point_segment_distance(p: Vec2, a: Vec2, b: Vec2) -> float:
    """Distance from p to the closest point on segment ab."""
    dx = b.x - a.x
    dy = b.y - a.y
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return distance(p, a)
    t = max(0.0, min(1.0, ((p.x - a.x) * dx + (p.y - a.y) * dy) / len_sq))
    return math.hypot(a.x + t * dx - p.x, a.y + t * dy - p.y)


def segment_distance(a: Vec2, b: Vec2, c: Vec2, d: Vec2) -> float:
    """Minimum distance between segments ab and cd."""
    if segments_intersect(a, b, c, d):
        return 0.0
    return min(
        point_segment_distance(a, c, d),
        point_segment_distance(b, c, d),
        point_segment_distance(c, a, b),
        point_segment_distance(d, a, b),
    )


def segment_intersects_circle(
    p1: Vec2, p2: Vec2, center: Vec2, radius: float
) -> bool:
    """True if the closest point of segment p1p2 is within radius of center."""
    return point_segment_distance(center, p1, p2) <= radius


def distance_to_ring(p: Vec2, vertices: Sequence[Vec2]) -> float:
    """Distance from p to the nearest edge of a closed ring."""
    count = len(vertices)
    return min(
        point_segment_distance(p, vertices[i], vertices[(i + 1) % count])
        for i in range(count)
    )


def point_blocked_by(p: Vec2, obstacle: Obstacle, padding: float = 0.0) -> bool:
    """True if p lies inside obstacle grown by padding."""
    from tacmap.environment.map import Circle, Polygon

    if not obstacle.bounds.expanded(padding).contains(p):
        return False

    match obstacle.shape:
        case Circle(center=center, radius=radius):
            return distance(p, center) < radius + padding
        case Polygon(vertices=vertices):
            if point_in_polygon(p, vertices):
                return True
            return padding > 0 and distance_to_ring(p, vertices) < padding
        case _:
            raise TypeError(f"Unknown obstacle shape: {obstacle.shape!r}")


def segment_intersects_obstacle(
    p1: Vec2, p2: Vec2, obstacle: Obstacle, padding: float = 0.0
) -> bool:
    """True if segment p1p2 passes within padding of obstacle.

    The obstacle's stored bounds (grown by padding) are checked against the
    segment's bounds before any exact geometry runs.
    """
    from tacmap.environment.map import Circle, Polygon

    if not bounds_of((p1, p2)).intersects(obstacle.bounds.expanded(padding)):
        return False

    match obstacle.shape:
        case Circle(center=center, radius=radius):
            return segment_intersects_circle(p1, p2, center, radius + padding)
        case Polygon(vertices=vertices):
            count = len(vertices)
            for i in range(count):
                v1 = vertices[i]
                v2 = vertices[(i + 1) % count]
                if segments_intersect(p1, p2, v1, v2):
                    return True
                if padding > 0 and segment_distance(p1, p2, v1, v2) < padding:
                    return True
            return point_in_polygon(p1, vertices) or point_in_polygon(p2, vertices)
        case _:
            raise TypeError(f"Unknown obstacle shape: {obstacle.shape!r}")


# =============================================================================
# SHAPE SAMPLING
# =============================================================================


def random_polygon(
    rng: RNG,
    center: Vec2,
    radius: float,
    min_vertices: int = 3,
    max_vertices: int = 6,
    variance: tuple[float, float] = (0.6, 1.0),
) -> list[Vec2]:
    """Sample an irregular star-shaped polygon around center.

    Vertex angles are drawn first and sorted so the ring never crosses
    itself; each vertex then gets its own radius in radius * variance.
    """
    count = rng.randint(min_vertices, max_vertices)
    angles = sorted(rng.random() * math.tau for _ in range(count))
    low, high = variance
    vertices: list[Vec2] = []
    for angle in angles:
        r = radius * (low + rng.random() * (high - low))
        vertices.append(
            Vec2(center.x + math.cos(angle) * r, center.y + math.sin(angle) * r)
        )
    return vertices


def blob(
    rng: RNG,
    center: Vec2,
    radius: float,
    points: int = 12,
    variance: tuple[float, float] = (0.7, 1.3),
) -> list[Vec2]:
    """Sample an organic blob: evenly spaced angles with jittered radii."""
    low, high = variance
    vertices: list[Vec2] = []
    for i in range(points):
        angle = (i / points) * math.tau
        r = radius * (low + rng.random() * (high - low))
        vertices.append(
            Vec2(center.x + math.cos(angle) * r, center.y + math.sin(angle) * r)
        )
    return vertices


def rect(center: Vec2, w: float, h: float, angle: float) -> list[Vec2]:
    """Corners of a w x h rectangle centered on center, rotated by angle."""
    cos = math.cos(angle)
    sin = math.sin(angle)
    half_w = w / 2
    half_h = h / 2
    corners = (
        (-half_w, -half_h),
        (half_w, -half_h),
        (half_w, half_h),
        (-half_w, half_h),
    )
    return [
        Vec2(center.x + x * cos - y * sin, center.y + x * sin + y * cos)
        for x, y in corners
    ]


# =============================================================================
# SPLINES
# =============================================================================


def catmull_rom(p0: Vec2, p1: Vec2, p2: Vec2, p3: Vec2, t: float) -> Vec2:
    """Evaluate a uniform Catmull-Rom spline between p1 and p2 at t in [0, 1)."""
    t2 = t * t
    t3 = t2 * t
    return Vec2(
        0.5
        * (
            2 * p1.x
            + (-p0.x + p2.x) * t
            + (2 * p0.x - 5 * p1.x + 4 * p2.x - p3.x) * t2
            + (-p0.x + 3 * p1.x - 3 * p2.x + p3.x) * t3
        ),
        0.5
        * (
            2 * p1.y
            + (-p0.y + p2.y) * t
            + (2 * p0.y - 5 * p1.y + 4 * p2.y - p3.y) * t2
            + (-p0.y + 3 * p1.y - 3 * p2.y + p3.y) * t3
        ),
    )


def smooth_path(control_points: Sequence[Vec2], segments: int) -> list[Vec2]:
    """Densify a control polyline with Catmull-Rom spans.

    The first and last control points are duplicated as phantom neighbors
    so the curve passes through both ends. Produces
    (len(control_points) - 1) * segments + 1 points.
    """
    padded = [control_points[0], *control_points, control_points[-1]]
    smoothed: list[Vec2] = []
    for i in range(1, len(padded) - 2):
        for k in range(segments):
            t = k / segments
            smoothed.append(
                catmull_rom(padded[i - 1], padded[i], padded[i + 1], padded[i + 2], t)
            )
    smoothed.append(control_points[-1])
    return smoothed
