from __future__ import annotations

from enum import Enum
from typing import NamedTuple

# =============================================================================
# SPATIAL TYPES
# =============================================================================

# Map coordinates are continuous world units, not tiles.
type WorldCoord = float  # Example: x=1240.5


class Vec2(NamedTuple):
    """A point or offset in world units."""

    x: WorldCoord
    y: WorldCoord


# A closed ring of vertices. The closing vertex is implied, never repeated.
type Ring = tuple[Vec2, ...]

# A graph edge as a pair of node indices.
type EdgeIndex = tuple[int, int]

# =============================================================================
# GENERATION TYPES
# =============================================================================

# Seed for deterministic generation. Descriptive strings like "NEXUS_ALPHA" are
# the norm; anything else is stringified before hashing.
type RandomSeed = str


class BiomeType(Enum):
    """Biome families a battle map is composed of.

    Declaration order is significant: cluster assignment walks biomes in this
    order, so reordering members changes generated maps.
    """

    FOREST = "Forest"
    ROCKS = "Rocks"
    RUINS = "Ruins"
    MUD = "Mud"
    RIVER = "River"
