"""Vertex classification and removal costs.

Removing a vertex changes the covered area. The cost of a removal is the
area that changes hands:

- A concave vertex is clipped like an ear: its neighbours are connected
  directly and the cost is the area of the triangle it formed.
- A convex vertex is removed by sliding its two neighbours along their outer
  edges until the new edge between them passes through the removed corner.
  The cost is the area of the two slivers added on either side.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, NamedTuple, Tuple

import numpy as np

from .core.geometry_utils import edge_normal, triangle_area
from .core.types import Curvature
from .orientation import turn_angle

if TYPE_CHECKING:
    from .polygon import CyclicPolygon


class Removal(NamedTuple):
    """Outcome of removing the centre vertex of a window.

    Attributes:
        positions: New positions of the window without its centre vertex
        cost: Area-based removal cost, ``inf`` if the removal is degenerate
    """
    positions: Tuple[np.ndarray, ...]
    cost: float


def concave_removal(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> Removal:
    """Remove ``b`` by connecting ``a`` and ``c`` directly."""
    return Removal((a, c), triangle_area(a, b, c))


def convex_removal(
    a: np.ndarray,
    b: np.ndarray,
    c: np.ndarray,
    d: np.ndarray,
    e: np.ndarray,
    parallel_tolerance: float = 1e-12,
) -> Removal:
    """Remove ``c`` and slide ``b`` and ``d`` to keep the covered area.

    ``b`` moves along the (a, b) line and ``d`` along the (e, d) line until
    both reach the line through ``c`` parallel to (b, d). Each new position
    is the solution of a 2x2 linear system built from the edge normals.

    Args:
        a, b, c, d, e: Five consecutive vertices, ``c`` being removed
        parallel_tolerance: Sine of the angle between two lines at or below
            which they count as parallel and the removal is degenerate

    Returns:
        Removal with positions ``(a, b', d', e)``. Degenerate removals keep
        ``b`` and ``d`` and cost ``inf``.

    Examples:
        >>> square = [np.array(p, dtype=float) for p in
        ...           [(10, 10), (0, 10), (0, 0), (10, 0), (10, 10)]]
        >>> convex_removal(*square).cost
        100.0
    """
    left_normal = edge_normal(a, b)
    center_normal = edge_normal(b, d)
    right_normal = edge_normal(d, e)

    left_constant = left_normal @ a
    center_constant = center_normal @ c
    right_constant = right_normal @ e

    determinant_left = left_normal[0] * center_normal[1] - left_normal[1] * center_normal[0]
    determinant_right = right_normal[0] * center_normal[1] - right_normal[1] * center_normal[0]

    # |det| = |n1| |n2| sin(angle), compared relative to the normal lengths
    center_length = np.hypot(*center_normal)
    left_limit = parallel_tolerance * np.hypot(*left_normal) * center_length
    right_limit = parallel_tolerance * np.hypot(*right_normal) * center_length

    if abs(determinant_left) <= left_limit or abs(determinant_right) <= right_limit:
        return Removal((a, b, d, e), math.inf)

    new_b = np.array([
        (center_normal[1] * left_constant - left_normal[1] * center_constant) / determinant_left,
        (-center_normal[0] * left_constant + left_normal[0] * center_constant) / determinant_left,
    ])
    new_d = np.array([
        (center_normal[1] * right_constant - right_normal[1] * center_constant) / determinant_right,
        (-center_normal[0] * right_constant + right_normal[0] * center_constant) / determinant_right,
    ])

    cost = triangle_area(b, new_b, c) + triangle_area(d, new_d, c)
    if not (np.all(np.isfinite(new_b)) and np.all(np.isfinite(new_d)) and math.isfinite(cost)):
        return Removal((a, b, d, e), math.inf)

    return Removal((a, new_b, new_d, e), cost)


def classify(polygon: CyclicPolygon, index: int) -> Curvature:
    """Curvature of the vertex at ``index`` relative to the polygon winding."""
    angle = turn_angle(*polygon.positions_at(index, (-1, 0, 1)))
    if int(np.sign(angle)) == polygon.orientation:
        return Curvature.CONVEX
    return Curvature.CONCAVE


def removal_cost(polygon: CyclicPolygon, index: int) -> float:
    """Cost of removing the vertex at ``index``.

    A convex vertex only gets a finite cost when both of its neighbours are
    convex as well. Vertices with unknown curvature cost ``inf``.
    """
    curvature = polygon.curvature_at(index)

    if curvature is Curvature.CONVEX:
        neighbours = (polygon.curvature_at(index - 1), polygon.curvature_at(index + 1))
        if all(c is Curvature.CONVEX for c in neighbours):
            return convex_removal(
                *polygon.positions_at(index, (-2, -1, 0, 1, 2)),
                parallel_tolerance=polygon.parallel_tolerance,
            ).cost
        return math.inf

    if curvature is Curvature.CONCAVE:
        return concave_removal(*polygon.positions_at(index, (-1, 0, 1))).cost

    return math.inf


__all__ = [
    'Removal',
    'concave_removal',
    'convex_removal',
    'classify',
    'removal_cost',
]
