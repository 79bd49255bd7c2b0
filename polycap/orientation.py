"""Turn angles and polygon winding orientation.

The orientation of a polygon is read off the turn direction at one of its
extreme vertices: at such a vertex the boundary always turns the way the
whole ring winds.
"""

import math
from typing import Sequence

import numpy as np

# -1: clockwise | 0: degenerate | 1: counter-clockwise
CLOCKWISE = -1
DEGENERATE = 0
COUNTERCLOCKWISE = 1


def turn_angle(a: Sequence[float], b: Sequence[float], c: Sequence[float]) -> float:
    """Signed rotation at the corner formed by the three points.

    Args:
        a: Start of the incoming edge
        b: Corner vertex
        c: End of the outgoing edge

    Returns:
        Angle in radians normalized to the (-pi, pi] range. Positive values
        turn left (counter-clockwise).

    Examples:
        >>> turn_angle((0, 0), (1, 0), (1, 1)) == math.pi / 2
        True
        >>> turn_angle((0, 0), (1, 0), (2, 0))
        0.0
    """
    ux, uy = b[0] - a[0], b[1] - a[1]
    vx, vy = c[0] - b[0], c[1] - b[1]

    r = math.atan2(vy, vx) - math.atan2(uy, ux)
    if r <= -math.pi:
        return r + 2 * math.pi
    if r > math.pi:
        return r - 2 * math.pi
    return r


def _extreme_order(a: Sequence[float], b: Sequence[float]) -> float:
    # Ordering is by x unless a lies on the x == y diagonal, then by y.
    return a[1] - b[1] if a[0] == a[1] else a[0] - b[0]


def extreme_vertex_index(points: np.ndarray) -> int:
    """Index of the first vertex that is minimal under the extreme ordering.

    The ordering compares x coordinates, except when the candidate vertex has
    equal x and y, in which case y coordinates are compared instead.
    """
    best = 0
    for i in range(1, len(points)):
        if _extreme_order(points[i], points[best]) < 0:
            best = i
    return best


def polygon_orientation(points: np.ndarray) -> int:
    """Winding sign of an open ring.

    Args:
        points: (N, 2) array of vertices without the closing duplicate, N >= 3

    Returns:
        1 for counter-clockwise, -1 for clockwise, 0 when the turn at the
        extreme vertex is degenerate (collinear neighbours)

    Examples:
        >>> polygon_orientation(np.array([[0, 0], [1, 0], [1, 1], [0, 1]]))
        1
        >>> polygon_orientation(np.array([[0, 0], [0, 1], [1, 1], [1, 0]]))
        -1
    """
    n = len(points)
    i = extreme_vertex_index(points)
    angle = turn_angle(points[(i - 1) % n], points[i], points[(i + 1) % n])
    return int(np.sign(angle))


__all__ = [
    'CLOCKWISE',
    'DEGENERATE',
    'COUNTERCLOCKWISE',
    'turn_angle',
    'extreme_vertex_index',
    'polygon_orientation',
]
