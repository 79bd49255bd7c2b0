"""Polycap - vertex-count targeted polygon reduction.

This library reduces closed polygons to an exact number of vertices while
keeping the covered area as close to the original as it can, using Shapely
for geometry validation and repair.
"""


# Reduction functions
from .reduce import (
    simplify_ring,
    simplify_ring_with_stats,
    reduce_vertices,
)

# Engine building blocks
from .polygon import CyclicPolygon, Vertex, PolygonSnapshot
from .driver import ReductionStats, reduce_to_limit
from .cache import SimplificationCache, default_cache, reset_default_cache
from .orientation import turn_angle, polygon_orientation
from .cost import classify, removal_cost, convex_removal, concave_removal
from .repair import repair_ring

# Measurements
from .metrics import measure_reduction, vertex_count

# Configuration
from .config import ReductionConfig

# Core types (enums)
from .core import (
    Curvature,
    StallPolicy,
)

# Core exceptions
from .core import (
    PolycapError,
    ValidationError,
    ReductionError,
    NoRemovableVertexError,
    RepairError,
    ConfigurationError,
    StallWarning,
)

__all__ = [

    # Reduction
    'simplify_ring',
    'simplify_ring_with_stats',
    'reduce_vertices',

    # Engine
    'CyclicPolygon',
    'Vertex',
    'PolygonSnapshot',
    'ReductionStats',
    'reduce_to_limit',
    'SimplificationCache',
    'default_cache',
    'reset_default_cache',
    'turn_angle',
    'polygon_orientation',
    'classify',
    'removal_cost',
    'convex_removal',
    'concave_removal',
    'repair_ring',

    # Measurements
    'measure_reduction',
    'vertex_count',

    # Configuration
    'ReductionConfig',

    # Core types (enums)
    'Curvature',
    'StallPolicy',

    # Core exceptions
    'PolycapError',
    'ValidationError',
    'ReductionError',
    'NoRemovableVertexError',
    'RepairError',
    'ConfigurationError',
    'StallWarning',
]
