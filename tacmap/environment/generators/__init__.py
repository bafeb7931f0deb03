"""Map generation algorithms for tacmap.

Generation is pipeline-based: a battle map is built by composing layers
that each add one kind of feature to a shared context:
- Battle map: LandmarkLayer + HydrologyLayer + BiomeClusterLayer + NavGraphLayer
"""

from .base import BaseMapGenerator, GeneratedMap
from .pipeline import (
    BiomeClusterLayer,
    GenerationContext,
    GenerationLayer,
    HydrologyLayer,
    LandmarkLayer,
    NavGraphLayer,
    PipelineGenerator,
    create_battlemap_pipeline,
    create_pipeline,
    generate_map,
)

__all__ = [
    "BaseMapGenerator",
    "BiomeClusterLayer",
    "GeneratedMap",
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
