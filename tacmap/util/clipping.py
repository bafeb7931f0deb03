"""Polygon boolean algebra behind a narrow interface.

Callers hand in rings (sequences of (x, y) pairs, open or closed) and get
back lists of rings. Shapely/GEOS does the work; nothing outside this
module touches shapely types, so the backend can change without touching
callers.

Result rings are open (no repeated closing vertex) and carry exteriors
only. Holes in a result are dropped, matching how every consumer treats a
region: as its outline.

Any backend failure is raised as GeometryError.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import shapely
from shapely.errors import ShapelyError
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from tacmap.types import Ring, Vec2

type RingLike = Sequence[Sequence[float]]


class GeometryError(Exception):
    """A polygon boolean operation failed or received unusable input."""


def union(polygons: Iterable[RingLike]) -> list[Ring]:
    """Merge rings into the smallest set of disjoint outlines."""
    try:
        merged = unary_union([_to_shape(ring) for ring in polygons])
    except (ShapelyError, ValueError) as exc:
        raise GeometryError(f"Polygon union failed: {exc}") from exc
    return _to_rings(merged)


def intersect(a: RingLike, b: RingLike) -> list[Ring]:
    """Outlines of the region covered by both a and b."""
    try:
        overlap = _to_shape(a).intersection(_to_shape(b))
    except (ShapelyError, ValueError) as exc:
        raise GeometryError(f"Polygon intersection failed: {exc}") from exc
    return _to_rings(overlap)


def clip_to_rect(
    polygons: Iterable[RingLike],
    min_x: float,
    min_y: float,
    max_x: float,
    max_y: float,
) -> list[Ring]:
    """Intersect the union of polygons with an axis-aligned rectangle."""
    frame = box(min_x, min_y, max_x, max_y)
    try:
        clipped = unary_union([_to_shape(ring) for ring in polygons]).intersection(
            frame
        )
    except (ShapelyError, ValueError) as exc:
        raise GeometryError(f"Rectangle clip failed: {exc}") from exc
    return _to_rings(clipped)


def overlap_area(a: RingLike, b: RingLike) -> float:
    """Area of the region covered by both a and b."""
    try:
        return float(_to_shape(a).intersection(_to_shape(b)).area)
    except (ShapelyError, ValueError) as exc:
        raise GeometryError(f"Polygon intersection failed: {exc}") from exc


def area(ring: RingLike) -> float:
    """Area enclosed by a ring after repair (self-overlaps counted once)."""
    try:
        return float(_to_shape(ring).area)
    except ShapelyError as exc:
        raise GeometryError(f"Ring repair failed: {exc}") from exc


def _to_shape(ring: RingLike) -> BaseGeometry:
    """Build a valid shapely geometry from a ring.

    Offset ribbons fold over themselves on tight bends; make_valid splits
    such rings into their valid pieces instead of letting GEOS raise a
    topology error later.
    """
    try:
        polygon = Polygon(ring)
    except (ShapelyError, ValueError) as exc:
        raise GeometryError(f"Invalid ring: {exc}") from exc
    if polygon.is_valid:
        return polygon
    repaired = shapely.make_valid(polygon)
    if isinstance(repaired, GeometryCollection):
        # Collapsed slivers come back as lines; only the areal parts matter
        repaired = unary_union(
            [g for g in repaired.geoms if isinstance(g, (Polygon, MultiPolygon))]
        )
    return repaired


def _to_rings(geometry: BaseGeometry) -> list[Ring]:
    """Flatten any geometry into exterior rings of its polygonal parts."""
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        coords = list(geometry.exterior.coords)[:-1]
        if len(coords) < 3:
            return []
        return [tuple(Vec2(float(x), float(y)) for x, y in coords)]
    # Multi-part geometries and collections. Lines and points left over from
    # degenerate overlaps carry no area and are skipped.
    parts = getattr(geometry, "geoms", ())
    return [ring for part in parts for ring in _to_rings(part)]
