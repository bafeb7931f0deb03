"""Factory functions for creating pre-configured pipelines.

These functions provide convenient ways to create common pipeline
configurations without needing to manually assemble layers.

Currently implemented:
- "battlemap": Tactical battle map with river, biome clusters and nav graph
"""

from __future__ import annotations

from tacmap.environment.generators.base import GeneratedMap
from tacmap.environment.map import MapConfig

from .layers import BiomeClusterLayer, HydrologyLayer, LandmarkLayer, NavGraphLayer
from .pipeline import PipelineGenerator


def create_pipeline(name: str, map_config: MapConfig) -> PipelineGenerator:
    """Create a pre-configured pipeline by name.

    Available pipelines:
    - "battlemap": Tactical battle map (see create_battlemap_pipeline)

    Args:
        name: Name of the pipeline configuration to use.
        map_config: The configuration to generate.

    Returns:
        A configured PipelineGenerator ready to generate maps.

    Raises:
        ValueError: If the pipeline name is not recognized.
    """
    if name == "battlemap":
        return create_battlemap_pipeline(map_config)
    raise ValueError(f"Unknown pipeline name: {name!r}")


def create_battlemap_pipeline(map_config: MapConfig) -> PipelineGenerator:
    """Create a battle map pipeline with default layers.

    The battle map pipeline generates:
    1. Points of interest and respawn point (LandmarkLayer)
    2. River and tributaries, if the River weight is positive (HydrologyLayer)
    3. Biome clusters away from points of interest (BiomeClusterLayer)
    4. Navigation graph over the final blocking obstacles (NavGraphLayer)

    Args:
        map_config: The configuration to generate.

    Returns:
        A configured PipelineGenerator.
    """
    layers = [
        # 1. POIs first: clusters keep clear of them
        LandmarkLayer(),
        # 2. Water body
        HydrologyLayer(),
        # 3. Obstacles and zones
        BiomeClusterLayer(),
        # 4. Must be last: reads the final obstacle set
        NavGraphLayer(),
    ]
    return PipelineGenerator(layers=layers, map_config=map_config)


def generate_map(map_config: MapConfig) -> GeneratedMap:
    """Generate a battle map with the default pipeline."""
    return create_battlemap_pipeline(map_config).generate()
