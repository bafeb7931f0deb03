"""Hydrology layer: one unified river body with tributaries.

The river is built as a set of ribbon polygons (a smoothed centerline
offset to both sides) that are merged with polygon booleans and clipped to
the playable rectangle:

1. Pick an orientation and two endpoints on opposite playable edges.
2. Jitter a control polyline between them and smooth it with Catmull-Rom
   spans into a dense centerline.
3. Offset the centerline into the main ribbon. Its half-width oscillates
   sinusoidally, scaled by the configured width variation.
4. Grow tributaries off random centerline points at the configured branch
   angle, tapering toward the tip. Candidates that leave the playable area,
   overlap an accepted tributary, or never leave the main channel get one
   shorter retry before being abandoned.
5. Union every ribbon, clip the union to the playable rectangle, and keep
   the largest piece if clipping split it.

A failure anywhere in the boolean geometry drops the river for this run
and logs a warning; the rest of the map is generated as usual.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from tacmap import config
from tacmap.environment.generators.pipeline.context import GenerationContext
from tacmap.environment.generators.pipeline.layer import GenerationLayer
from tacmap.environment.map import MapConfig, SpecialZone
from tacmap.types import BiomeType, Ring, Vec2
from tacmap.util import clipping
from tacmap.util.clipping import GeometryError
from tacmap.util.geometry import Bounds, polygon_area, smooth_path
from tacmap.util.rng import RNG

logger = logging.getLogger(__name__)


def river_half_width(weight: int) -> float:
    """Base half-width of the main channel for a River weight of 1 or more."""
    table = config.RIVER_WIDTH_MAP
    return float(table[min(weight - 1, len(table) - 1)])


def offset_ribbon(path: list[Vec2], half_widths: np.ndarray) -> np.ndarray:
    """Offset a centerline to both sides and close it into a ring.

    Each point moves along the normal of the chord between its neighbors
    (endpoints use the one chord they have). The ring runs down the left
    side and back up the right side.

    Args:
        path: Centerline points, at least two.
        half_widths: Offset distance per path point.

    Returns:
        An (2 * len(path), 2) array of ring vertices, not closed.
    """
    pts = np.asarray(path, dtype=np.float64)
    chords = np.vstack([pts[1:], pts[-1:]]) - np.vstack([pts[:1], pts[:-1]])
    lengths = np.hypot(chords[:, 0], chords[:, 1])
    lengths[lengths == 0] = 1.0
    normals = np.column_stack([-chords[:, 1], chords[:, 0]]) / lengths[:, None]
    offsets = normals * np.asarray(half_widths, dtype=np.float64)[:, None]
    return np.vstack([pts + offsets, (pts - offsets)[::-1]])


def clamped_path(
    rng: RNG,
    start: Vec2,
    end: Vec2,
    steps: int,
    jitter: float,
    rect: Bounds,
) -> list[Vec2]:
    """Interior control points between start and end, jittered and clamped.

    Produces steps - 1 points at even fractions of the straight line, each
    displaced by up to jitter on both axes and pulled back into rect.
    """
    points: list[Vec2] = []
    for i in range(1, steps):
        t = i / steps
        base_x = start.x + (end.x - start.x) * t
        base_y = start.y + (end.y - start.y) * t
        x = base_x + rng.uniform(-jitter, jitter)
        y = base_y + rng.uniform(-jitter, jitter)
        points.append(
            Vec2(
                max(rect.min_x, min(rect.max_x, x)),
                max(rect.min_y, min(rect.max_y, y)),
            )
        )
    return points


class HydrologyLayer(GenerationLayer):
    """Adds a single River zone when the River weight is positive.

    Draws only from the "map.hydrology" stream, so skipping the river
    leaves every other layer's output unchanged.
    """

    name = "hydrology"

    def apply(self, ctx: GenerationContext) -> None:
        weight = ctx.map_config.weight(BiomeType.RIVER)
        if weight <= 0:
            return

        rng = ctx.rng.get("map.hydrology")
        try:
            outline = self._build_water_body(
                rng, ctx.map_config, ctx.playable_bounds, weight
            )
        except GeometryError as exc:
            logger.warning("Hydrology skipped: %s", exc)
            return

        if outline is None:
            logger.warning("Hydrology produced an empty water body; river skipped")
            return

        ctx.add_zone(
            SpecialZone.outline(
                ctx.next_id("river"),
                BiomeType.RIVER,
                outline,
                center=Vec2(ctx.width / 2, ctx.height / 2),
            )
        )

    def _build_water_body(
        self, rng: RNG, cfg: MapConfig, rect: Bounds, weight: int
    ) -> Ring | None:
        base_width = river_half_width(weight)

        main_nodes = self._main_centerline(rng, cfg, rect)
        phase = np.arange(len(main_nodes)) * config.RIVER_WIDTH_FREQUENCY
        variation = (
            1
            + np.sin(phase) * cfg.river_width_variation * config.RIVER_WIDTH_AMPLITUDE
        )
        main_ribbon = offset_ribbon(main_nodes, base_width * variation)

        ribbons = [main_ribbon]
        ribbons.extend(
            self._tributaries(rng, cfg, rect, main_nodes, main_ribbon, base_width)
        )

        merged = clipping.union(ribbons)
        if not merged:
            return None
        pieces = clipping.clip_to_rect(
            merged, rect.min_x, rect.min_y, rect.max_x, rect.max_y
        )
        if not pieces:
            return None
        # Ring orientation varies, so compare magnitudes
        return max(pieces, key=lambda ring: abs(polygon_area(ring)))

    def _main_centerline(self, rng: RNG, cfg: MapConfig, rect: Bounds) -> list[Vec2]:
        """Smoothed centerline crossing the map between opposite edges."""
        inset = config.RIVER_ENDPOINT_INSET
        is_vertical = rng.random() > 0.5

        if is_vertical:
            low, high = rect.min_x + inset, rect.max_x - inset
            start = Vec2(rng.uniform(low, high), rect.min_y)
            end = Vec2(rng.uniform(low, high), rect.max_y)
        else:
            low, high = rect.min_y + inset, rect.max_y - inset
            start = Vec2(rect.min_x, rng.uniform(low, high))
            end = Vec2(rect.max_x, rng.uniform(low, high))

        # Fewer spline subdivisions on big maps keep the ribbon cheap
        if cfg.width > config.RIVER_LARGE_MAP_WIDTH:
            segments = config.RIVER_SMOOTH_SEGMENTS_LARGE
        else:
            segments = config.RIVER_SMOOTH_SEGMENTS

        control = [
            start,
            *clamped_path(
                rng,
                start,
                end,
                config.RIVER_CONTROL_STEPS,
                config.RIVER_CONTROL_JITTER,
                rect,
            ),
            end,
        ]
        return smooth_path(control, segments)

    def _tributaries(
        self,
        rng: RNG,
        cfg: MapConfig,
        rect: Bounds,
        main_nodes: list[Vec2],
        main_ribbon: np.ndarray,
        base_width: float,
    ) -> list[np.ndarray]:
        """Grow up to river_tributaries branches off the main channel."""
        target = cfg.river_tributaries
        accepted: list[np.ndarray] = []
        attempts = 0
        while (
            len(accepted) < target
            and attempts < target * config.TRIBUTARY_ATTEMPTS_PER_BRANCH
        ):
            attempts += 1
            branch = self._grow_branch(
                rng, cfg, rect, main_nodes, main_ribbon, base_width, accepted
            )
            if branch is not None:
                accepted.append(branch)

        if len(accepted) < target:
            logger.debug(
                "Placed %d of %d tributaries in %d attempts",
                len(accepted),
                target,
                attempts,
            )
        return accepted

    def _grow_branch(
        self,
        rng: RNG,
        cfg: MapConfig,
        rect: Bounds,
        main_nodes: list[Vec2],
        main_ribbon: np.ndarray,
        base_width: float,
        accepted: list[np.ndarray],
    ) -> np.ndarray | None:
        """One tributary attempt: a ribbon that fits, or None."""
        margin = config.TRIBUTARY_ATTACH_MARGIN
        attach_idx = rng.randint(margin, len(main_nodes) - margin)
        attach = main_nodes[attach_idx]
        prev = main_nodes[attach_idx - 1]

        flow_angle = math.atan2(attach.y - prev.y, attach.x - prev.x)
        side = 1 if rng.random() > 0.5 else -1
        angle = flow_angle + side * math.radians(cfg.river_branch_angle)
        direction = Vec2(math.cos(angle), math.sin(angle))
        tributary_width = base_width * cfg.river_trib_width_ratio

        length = rng.uniform(*config.TRIBUTARY_LENGTH_RANGE)
        for _ in range(config.TRIBUTARY_LENGTH_STEPS):
            control = [
                attach,
                Vec2(
                    attach.x + direction.x * length * 0.5,
                    attach.y + direction.y * length * 0.5,
                ),
                Vec2(attach.x + direction.x * length, attach.y + direction.y * length),
            ]
            nodes = smooth_path(control, config.TRIBUTARY_SMOOTH_SEGMENTS)
            # Full width at the junction, narrowing linearly to the tip
            progress = np.linspace(0.0, 1.0, len(nodes))
            taper = 1.0 - (1.0 - config.TRIBUTARY_TAPER_TIP) * progress
            ribbon = offset_ribbon(nodes, tributary_width * taper)

            if self._branch_fits(nodes, ribbon, rect, main_ribbon, accepted):
                return ribbon
            length *= config.TRIBUTARY_LENGTH_SHRINK
        return None

    def _branch_fits(
        self,
        nodes: list[Vec2],
        ribbon: np.ndarray,
        rect: Bounds,
        main_ribbon: np.ndarray,
        accepted: list[np.ndarray],
    ) -> bool:
        allowed = rect.expanded(config.TRIBUTARY_BOUNDS_TOLERANCE)
        if not all(allowed.contains(node) for node in nodes):
            return False

        if any(clipping.intersect(ribbon, other) for other in accepted):
            return False

        ribbon_area = clipping.area(ribbon)
        if ribbon_area <= 0:
            return False
        inside_main = clipping.overlap_area(ribbon, main_ribbon) / ribbon_area
        return inside_main <= config.TRIBUTARY_MAX_MAIN_OVERLAP
