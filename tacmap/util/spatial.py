"""
A spatial hash grid for bounding-box queries over map features.

This module provides a `SpatialHashGrid` that buckets objects by the grid
cells their bounds overlap. Queries for a box only look at the cells that
box touches, replacing linear scans over every obstacle with a handful of
candidates that then go through exact geometry tests.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable
from typing import Generic, Protocol, TypeVar

from tacmap.util.geometry import Bounds

# A type alias for cell coordinate tuples to improve readability.
type Cell = tuple[int, int]


class HasBounds(Protocol):
    """A protocol for objects that carry precomputed bounds."""

    @property
    def bounds(self) -> Bounds: ...


T = TypeVar("T", bound=HasBounds)


class SpatialHashGrid(Generic[T]):
    """
    A spatial hash grid over objects with bounds.

    The grid divides world space into square cells of a fixed size. An
    object is stored in every cell its bounds overlap, so a box query only
    needs to visit the cells the box itself overlaps. Results come back in
    insertion order with duplicates removed.
    """

    def __init__(self, cell_size: float = 128.0) -> None:
        if cell_size <= 0:
            raise ValueError("Cell size must be positive.")
        self.cell_size = cell_size
        self.grid: dict[Cell, list[int]] = defaultdict(list)
        self._objects: list[T] = []

    def __len__(self) -> int:
        return len(self._objects)

    def _hash(self, x: float, y: float) -> Cell:
        """Converts world coordinates to grid cell coordinates."""
        return math.floor(x / self.cell_size), math.floor(y / self.cell_size)

    def _cells(self, bounds: Bounds) -> Iterable[Cell]:
        cx1, cy1 = self._hash(bounds.min_x, bounds.min_y)
        cx2, cy2 = self._hash(bounds.max_x, bounds.max_y)
        return ((cx, cy) for cx in range(cx1, cx2 + 1) for cy in range(cy1, cy2 + 1))

    def add(self, obj: T) -> None:
        """Add an object to every cell its bounds overlap."""
        index = len(self._objects)
        self._objects.append(obj)
        for cell in self._cells(obj.bounds):
            self.grid[cell].append(index)

    def extend(self, objs: Iterable[T]) -> None:
        for obj in objs:
            self.add(obj)

    def query(self, bounds: Bounds) -> list[T]:
        """Get all objects whose bounds intersect the given box."""
        hits: set[int] = set()
        for cell in self._cells(bounds):
            hits.update(self.grid.get(cell, ()))
        return [
            self._objects[i]
            for i in sorted(hits)
            if self._objects[i].bounds.intersects(bounds)
        ]

    def clear(self) -> None:
        """Remove all objects from the index."""
        self.grid.clear()
        self._objects.clear()
