"""Vertex-count targeted polygon reduction.

This module provides the public entry points of the library. They accept
closed rings (first coordinate repeated at the end) or Shapely polygons and
return the same kind of object with the requested number of vertices.

The reduction itself is the greedy edge-sliding algorithm of
:mod:`polycap.driver`; the result is passed through the zero-margin buffer
repair of :mod:`polycap.repair` to get rid of any self-intersections the
edge sliding may have introduced.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from shapely.geometry import Polygon, MultiPolygon
from shapely.geometry.base import BaseGeometry
from simplification.cutil import simplify_coords as _rdp_simplify

from .cache import SimplificationCache, default_cache
from .config import ReductionConfig, resolve_config
from .core.errors import ValidationError
from .core.geometry_utils import as_points, close_ring, content_hash, open_ring
from .driver import ReductionStats, reduce_to_limit
from .polygon import CyclicPolygon
from .repair import repair_ring

logger = logging.getLogger(__name__)

Ring = List[Tuple[float, float]]


# ============================================================================
# Private helpers (work with numpy arrays)
# ============================================================================

def _validate_target(target: int) -> None:
    if isinstance(target, bool) or not isinstance(target, (int, np.integer)):
        raise ValidationError(f"target must be an integer, got {target!r}")
    if target < 3:
        raise ValidationError(
            f"simplification vertex count target cannot be less than 3, got {target}"
        )


def _pre_simplify(points: np.ndarray, epsilon: float, target: int) -> np.ndarray:
    """Thin an open ring with Ramer-Douglas-Peucker if enough vertices remain."""
    thinned = open_ring(np.asarray(_rdp_simplify(close_ring(points), epsilon), dtype=float))

    if len(thinned) < max(3, target):
        logger.debug(
            "Skipping RDP pre-thinning: %d -> %d vertices is below target %d",
            len(points), len(thinned), target,
        )
        return points

    logger.debug("RDP pre-thinning: %d -> %d vertices", len(points), len(thinned))
    return thinned


def _to_ring(points: np.ndarray) -> Ring:
    return [(float(x), float(y)) for x, y in close_ring(points)]


def _simplify(
    ring: Sequence[Sequence[float]],
    target: int,
    config: Optional[ReductionConfig],
    cache: Optional[SimplificationCache],
    stacklevel: int,
) -> Tuple[Ring, ReductionStats]:
    config = resolve_config(config)

    points = open_ring(as_points(ring))
    if len(points) < 3:
        raise ValidationError(f"polygons need at least 3 vertices, got {len(points)}")
    _validate_target(target)

    if config.pre_simplify_epsilon is not None:
        points = _pre_simplify(points, config.pre_simplify_epsilon, target)

    if cache is None:
        cache = default_cache(config.cache_size)

    polygon = CyclicPolygon(points, parallel_tolerance=config.parallel_tolerance)
    stats = reduce_to_limit(
        polygon,
        target,
        digest=content_hash(points),
        cache=cache,
        config=config,
        stacklevel=stacklevel,
    )

    cleaned = repair_ring(
        polygon.coordinates,
        margin=config.repair_margin,
        orientation=polygon.orientation,
    )
    return _to_ring(cleaned), stats


# ============================================================================
# Public API
# ============================================================================

def simplify_ring_with_stats(
    ring: Sequence[Sequence[float]],
    target: int,
    config: Optional[ReductionConfig] = None,
    cache: Optional[SimplificationCache] = None,
) -> Tuple[Ring, ReductionStats]:
    """Like :func:`simplify_ring`, also returning the driver's statistics."""
    return _simplify(ring, target, config, cache, stacklevel=4)


def simplify_ring(
    ring: Sequence[Sequence[float]],
    target: int,
    config: Optional[ReductionConfig] = None,
    cache: Optional[SimplificationCache] = None,
) -> Ring:
    """Reduce a closed ring to exactly ``target`` vertices.

    Vertices are removed greedily, cheapest first. Concave vertices are
    clipped off; convex vertices are removed by sliding both neighbours along
    their outer edges so the lost corner area is compensated on both sides.
    Rings that already have ``target`` vertices or fewer are returned as is.

    Args:
        ring: Closed ring of 2D coordinates (first coordinate repeated last).
            Z values are dropped.
        target: Requested vertex count, at least 3
        config: Reduction settings (defaults when None)
        cache: Memoization store; the process-wide cache when None

    Returns:
        Closed ring as a list of (x, y) tuples

    Raises:
        ValidationError: If the ring has fewer than 3 vertices or target < 3
        NoRemovableVertexError: If the reduction stalls with the default
            stall policy
        RepairError: If the buffer repair of the result fails

    Examples:
        >>> square = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        >>> len(simplify_ring(square, 3))
        4
    """
    result, _ = _simplify(ring, target, config, cache, stacklevel=4)
    return result


def reduce_vertices(
    geometry: Union[Polygon, MultiPolygon],
    max_vertices: int,
    config: Optional[ReductionConfig] = None,
    preserve_holes: bool = False,
    cache: Optional[SimplificationCache] = None,
) -> BaseGeometry:
    """Cap the exterior vertex count of every polygon in ``geometry``.

    Each exterior ring with more than ``max_vertices`` vertices is reduced
    with :func:`simplify_ring`; smaller exteriors are kept as they are.

    Args:
        geometry: Shapely Polygon or MultiPolygon
        max_vertices: Maximum number of exterior vertices, at least 3
        config: Reduction settings (defaults when None)
        preserve_holes: Keep interior rings that still lie inside the reduced
            exterior. Holes are dropped otherwise.
        cache: Memoization store; the process-wide cache when None

    Returns:
        New geometry of the same type

    Examples:
        >>> import numpy as np
        >>> t = np.linspace(0, 2 * np.pi, 100, endpoint=False)
        >>> circle = Polygon(zip(np.cos(t), np.sin(t)))
        >>> len(reduce_vertices(circle, 8).exterior.coords) - 1
        8
    """
    _validate_target(max_vertices)

    def _reduce_polygon(polygon: Polygon) -> Polygon:
        if polygon.is_empty:
            return polygon

        exterior = list(polygon.exterior.coords)
        if len(exterior) - 1 > max_vertices:
            exterior, _ = _simplify(exterior, max_vertices, config, cache, stacklevel=5)

        if not preserve_holes:
            return Polygon(exterior)

        shell = Polygon(exterior)
        holes = [
            interior.coords for interior in polygon.interiors
            if shell.contains(Polygon(interior))
        ]
        return Polygon(exterior, holes=holes)

    geom_type = geometry.geom_type

    if geom_type == 'Polygon':
        return _reduce_polygon(geometry)

    elif geom_type == 'MultiPolygon':
        parts = []
        for polygon in geometry.geoms:
            parts.append(_reduce_polygon(polygon))
        return MultiPolygon(parts)

    else:
        raise TypeError("Input geometry must be a Polygon or MultiPolygon.")


__all__ = [
    'Ring',
    'simplify_ring',
    'simplify_ring_with_stats',
    'reduce_vertices',
]
