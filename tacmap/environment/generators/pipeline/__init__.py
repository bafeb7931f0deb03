"""Pipeline-based map generation system.

This package provides a layered architecture for compositional map
generation. Each layer appends to a shared GenerationContext, and the
pipeline freezes the result into an immutable GeneratedMap.

Example usage:
    from tacmap.environment.generators.pipeline import create_pipeline

    generator = create_pipeline("battlemap", MapConfig(seed="NEXUS_ALPHA"))
    battle_map = generator.generate()

The pipeline can also be assembled manually for custom configurations:
    from tacmap.environment.generators.pipeline import (
        PipelineGenerator,
        LandmarkLayer,
        BiomeClusterLayer,
        NavGraphLayer,
    )

    generator = PipelineGenerator(
        layers=[LandmarkLayer(), BiomeClusterLayer(), NavGraphLayer()],
        map_config=MapConfig(seed="DRY_RUN"),
    )
"""

from .context import GenerationContext
from .factory import create_battlemap_pipeline, create_pipeline, generate_map
from .layer import GenerationLayer
from .layers import BiomeClusterLayer, HydrologyLayer, LandmarkLayer, NavGraphLayer
from .pipeline import PipelineGenerator

__all__ = [
    "BiomeClusterLayer",
    "GenerationContext",
    "GenerationLayer",
    "HydrologyLayer",
    "LandmarkLayer",
    "NavGraphLayer",
    "PipelineGenerator",
    "create_battlemap_pipeline",
    "create_pipeline",
    "generate_map",
]
