"""Generation layers for the pipeline map generator.

Each layer appends to the GenerationContext in a specific way:
- Landmark layer: Points of interest and the respawn point
- Hydrology layer: The unified river body
- Biome layer: Forest, ruins, rocks and mud clusters
- Navigation layer: The walkability graph over the final obstacles
"""

from .biomes import BiomeClusterLayer
from .hydrology import HydrologyLayer
from .landmarks import LandmarkLayer
from .navigation import NavGraphLayer

__all__ = [
    "BiomeClusterLayer",
    "HydrologyLayer",
    "LandmarkLayer",
    "NavGraphLayer",
]
