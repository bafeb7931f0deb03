"""
Configuration constants.

Centralizes all magic numbers used by map generation, organized by
functional area. Values here are engine tuning, not per-map settings: a
single map is described by a MapConfig, whose defaults live at the bottom
of this module.
"""

from tacmap.types import BiomeType

# =============================================================================
# MAP FRAME
# =============================================================================

# Thickness of the map border. The playable rectangle is the map minus this
# border on every side; hydrology is clipped to it.
MAP_BORDER_THICKNESS = 40

# Margin kept free of biome clusters and points of interest.
SAFE_MARGIN = 140

# Extra inset from the playable edge for POI placement.
POI_EDGE_INSET = 100

# =============================================================================
# HYDROLOGY
# =============================================================================

# Base ribbon half-width indexed by River weight - 1 (weights 1..10).
RIVER_WIDTH_MAP = (30, 45, 60, 75, 90, 110, 130, 155, 185, 220)

# Human-readable river scale, indexed directly by River weight (0..10).
RIVER_SCALE_LABELS = (
    "None",
    "Creek",
    "Brook",
    "Stream",
    "Canal",
    "River",
    "Deep River",
    "Large River",
    "Wide Flow",
    "Massive",
    "Mega Flow",
)

# Start/end points keep this distance from the playable corners.
RIVER_ENDPOINT_INSET = 100

# Main channel control path
RIVER_CONTROL_STEPS = 5
RIVER_CONTROL_JITTER = 200.0

# Spline subdivisions per control span. Large maps get coarser smoothing.
RIVER_SMOOTH_SEGMENTS = 15
RIVER_SMOOTH_SEGMENTS_LARGE = 10
RIVER_LARGE_MAP_WIDTH = 2200

# Width oscillation along the main channel
RIVER_WIDTH_FREQUENCY = 0.4
RIVER_WIDTH_AMPLITUDE = 0.3

# Tributaries
TRIBUTARY_ATTACH_MARGIN = 10  # Nodes skipped at either end of the main channel
TRIBUTARY_ATTEMPTS_PER_BRANCH = 4
TRIBUTARY_LENGTH_RANGE = (150.0, 350.0)
TRIBUTARY_LENGTH_SHRINK = 0.6
TRIBUTARY_LENGTH_STEPS = 2  # Initial length plus one shrunk retry
TRIBUTARY_SMOOTH_SEGMENTS = 6
TRIBUTARY_TAPER_TIP = 0.4  # Half-width fraction left at the branch tip
TRIBUTARY_BOUNDS_TOLERANCE = 10.0
# A branch with more than this fraction of its area inside the main ribbon
# never leaves the channel and is rejected.
TRIBUTARY_MAX_MAIN_OVERLAP = 0.95

# =============================================================================
# BIOME CLUSTERS
# =============================================================================

CLUSTER_CELL_SIZE = 250
MAX_CLUSTERS = 55
CLUSTER_DENSITY_FACTOR = 1.5
CLUSTER_JITTER = 30.0

# Clusters centered closer than this to a point of interest are skipped.
POI_CLUSTER_CLEARANCE = 120.0

# Forest
FOREST_RADIUS_RANGE = (110.0, 160.0)
FOREST_BLOB_POINTS = 10
FOREST_TREE_COUNT_RANGE = (3, 5)
FOREST_TREE_RADIUS_RANGE = (10.0, 16.0)
FOREST_TREE_SPREAD = 0.8  # Trees stay within this fraction of the forest radius

# Mud
MUD_RADIUS_RANGE = (100.0, 150.0)
MUD_BLOB_POINTS = 8

# Ruins
RUINS_SIZE_RANGE = (120.0, 160.0)

# Rocks
ROCKS_PER_CLUSTER = 3
ROCK_SCATTER_RADIUS = 50.0
ROCK_RADIUS_RANGE = (25.0, 45.0)
ROCK_VERTEX_RANGE = (3, 5)

# Shape sampling
BLOB_VARIANCE_RANGE = (0.7, 1.3)
POLYGON_VARIANCE_RANGE = (0.6, 1.0)

# =============================================================================
# NAVIGATION
# =============================================================================

# Nodes keep this distance from the playable edge on top of the border.
NAV_MARGIN_EXTRA = 20

# Node spacing grows with map width: 1200 -> 65, 2000 -> 90, 2800 -> 115.
NAV_BASE_STEP = 65
NAV_BASE_WIDTH = 1200
NAV_WIDTH_PER_STEP = 32

# Edges are tested with slightly less clearance than nodes so that two nodes
# that just clear an obstacle can still be connected past it.
NAV_EDGE_TOLERANCE = 2.0

DEFAULT_UNIT_RADIUS = 18.0

# =============================================================================
# MAP SIZE PRESETS
# =============================================================================

# Maps are always square.
MAP_SIZE_PRESETS = {
    "compact": 1200,
    "standard": 1600,
    "tactical": 2000,
    "extended": 2400,
}

# =============================================================================
# INPUT RANGES
# =============================================================================

OBSTACLE_DENSITY_RANGE = (0.05, 0.8)
BIOME_WEIGHT_RANGE = (0, 10)

# =============================================================================
# DEFAULT MAP CONFIG
# =============================================================================

DEFAULT_SEED = "NEXUS_ALPHA"
DEFAULT_MAP_SIZE = MAP_SIZE_PRESETS["tactical"]
DEFAULT_OBSTACLE_DENSITY = 0.32
DEFAULT_BIOME_WEIGHTS = {
    BiomeType.FOREST: 5,
    BiomeType.ROCKS: 4,
    BiomeType.RUINS: 5,
    BiomeType.MUD: 3,
    BiomeType.RIVER: 6,
}
DEFAULT_POI_COUNT = 5
DEFAULT_WALL_THICKNESS = 12.0
DEFAULT_RIVER_WIDTH = 120.0
DEFAULT_RIVER_TRIBUTARIES = 3
DEFAULT_RIVER_TRIB_WIDTH_RATIO = 0.55
DEFAULT_RIVER_WIDTH_VARIATION = 0.4
DEFAULT_RIVER_BRANCH_ANGLE = 45.0
