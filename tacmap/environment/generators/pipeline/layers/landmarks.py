"""Landmark layer: points of interest and the respawn point."""

from __future__ import annotations

from tacmap import config
from tacmap.environment.generators.pipeline.context import GenerationContext
from tacmap.environment.generators.pipeline.layer import GenerationLayer
from tacmap.types import Vec2


class LandmarkLayer(GenerationLayer):
    """Scatters points of interest and sets the default respawn point.

    POIs are drawn uniformly from the map inset by the safe margin plus a
    further edge inset on each side. They run first because cluster
    placement steers clear of them. The respawn point defaults to the
    bottom-left corner of the safe area.
    """

    name = "landmarks"

    def apply(self, ctx: GenerationContext) -> None:
        rng = ctx.rng.get("map.landmarks")
        inset = config.SAFE_MARGIN + config.POI_EDGE_INSET

        for _ in range(ctx.map_config.poi_count):
            ctx.pois.append(
                Vec2(
                    rng.uniform(inset, ctx.width - inset),
                    rng.uniform(inset, ctx.height - inset),
                )
            )

        ctx.respawn = Vec2(config.SAFE_MARGIN, ctx.height - config.SAFE_MARGIN)
