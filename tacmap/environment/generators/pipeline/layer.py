"""Abstract base class for generation layers.

Each layer in the pipeline implements the GenerationLayer interface and
transforms the GenerationContext in some way - adding points of interest,
zones, obstacles, or the navigation graph.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from .context import GenerationContext


class GenerationLayer(ABC):
    """Abstract base class for map generation layers.

    Layers are applied sequentially by the PipelineGenerator. Each layer
    receives a GenerationContext and modifies it in place.

    Subclasses must implement the apply() method to perform their specific
    generation logic, and set name for logging and timing.
    """

    name: ClassVar[str] = "layer"

    @abstractmethod
    def apply(self, ctx: GenerationContext) -> None:
        """Apply this layer's generation logic to the context.

        This method should modify the context in place. It may:
        - Add points of interest (ctx.pois)
        - Append zones and obstacles (ctx.add_zone, ctx.add_obstacle)
        - Set the navigation graph (ctx.nav_graph)
        - Draw from its own stream (ctx.rng.get(domain))

        Layers only append; nothing an earlier layer produced is changed.

        Args:
            ctx: The generation context to modify.
        """
        raise NotImplementedError
