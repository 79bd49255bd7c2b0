"""Type definitions for polycap operations.

This module defines the enums used by the reduction engine.
"""

from enum import Enum


class Curvature(Enum):
    """Local turn direction of a vertex relative to the polygon winding.

    Attributes:
        CONVEX: Turns the same way as the polygon orientation
        CONCAVE: Turns against the orientation (or is collinear)

    Examples:
        >>> from polycap import CyclicPolygon, Curvature
        >>> square = CyclicPolygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> square.vertex_at(0).curvature is Curvature.CONVEX
        True
    """
    CONVEX = 'convex'
    CONCAVE = 'concave'


class StallPolicy(Enum):
    """What the reduction loop does when no vertex has a finite removal cost.

    Attributes:
        RAISE: Raise NoRemovableVertexError (default)
        EAR_CLIP_FIRST: Warn and ear-clip the lowest-index vertex

    Examples:
        >>> from polycap import ReductionConfig, StallPolicy
        >>> config = ReductionConfig(stall_policy=StallPolicy.EAR_CLIP_FIRST)
    """
    RAISE = 'raise'
    EAR_CLIP_FIRST = 'ear_clip_first'


__all__ = [
    'Curvature',
    'StallPolicy',
]
