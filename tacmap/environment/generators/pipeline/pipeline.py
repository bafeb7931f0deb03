"""Pipeline generator that orchestrates layer-based map generation.

The PipelineGenerator runs a sequence of GenerationLayers, each appending to
a shared GenerationContext. Generation is synchronous and all-or-nothing:
either a complete GeneratedMap comes back or the exception propagates.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from tacmap.environment.generators.base import BaseMapGenerator, GeneratedMap
from tacmap.util.performance import measure_block

from .context import GenerationContext

if TYPE_CHECKING:
    from tacmap.environment.map import MapConfig

    from .layer import GenerationLayer

logger = logging.getLogger(__name__)


class PipelineGenerator(BaseMapGenerator):
    """Map generator that runs layers sequentially on a shared context.

    Example:
        generator = PipelineGenerator(
            layers=[
                LandmarkLayer(),
                HydrologyLayer(),
                BiomeClusterLayer(),
                NavGraphLayer(),
            ],
            map_config=MapConfig(seed="NEXUS_ALPHA"),
        )
        battle_map = generator.generate()

    Attributes:
        layers: List of GenerationLayer instances to apply.
    """

    def __init__(self, layers: list[GenerationLayer], map_config: MapConfig) -> None:
        """Initialize the pipeline generator.

        Args:
            layers: List of GenerationLayer instances to apply in order.
            map_config: The configuration to generate.
        """
        super().__init__(map_config)
        self.layers = layers

    def generate(self) -> GeneratedMap:
        """Generate a map by running all layers in sequence.

        Every call builds a fresh context, so repeated calls with the same
        configuration return equal maps.
        """
        cfg = self.map_config
        logger.info(
            "Compiling terrain: seed=%s dim=%gx%g", cfg.seed, cfg.width, cfg.height
        )
        start_time = time.perf_counter()

        ctx = GenerationContext.create(cfg)
        for layer in self.layers:
            layer_start = time.perf_counter()
            with measure_block(f"mapgen.{layer.name}"):
                layer.apply(ctx)
            logger.debug(
                "Layer %s finished in %.2fms",
                layer.name,
                (time.perf_counter() - layer_start) * 1000,
            )

        battle_map = ctx.to_generated_map()
        logger.info(
            "Terrain compiled in %.2fms: %d obstacles, %d zones, %d nodes, %d edges",
            (time.perf_counter() - start_time) * 1000,
            len(battle_map.obstacles),
            len(battle_map.zones),
            len(battle_map.nav_graph.nodes),
            len(battle_map.nav_graph.edges),
        )
        return battle_map
