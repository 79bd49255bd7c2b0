"""Greedy vertex reduction loop.

The loop repeatedly removes the vertex with the lowest removal cost until the
polygon has the requested number of vertices. Only the slots whose position
was rewritten by a removal are reclassified afterwards; every other slot
keeps its cached curvature and cost.
"""

from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .cache import SimplificationCache
from .config import ReductionConfig, resolve_config
from .core.errors import NoRemovableVertexError, StallWarning, ValidationError
from .core.types import Curvature, StallPolicy
from .cost import concave_removal, convex_removal
from .polygon import CyclicPolygon

logger = logging.getLogger(__name__)


@dataclass
class ReductionStats:
    """Bookkeeping for one run of :func:`reduce_to_limit`.

    Attributes:
        initial_vertices: Vertex count handed to the driver
        final_vertices: Vertex count when the driver returned
        removals: Vertices removed by this run (cache restores excluded)
        cost_evaluations: Removal costs computed by this run
        resumed_from: Vertex count of the cached state the run started from
        cache_hit: True when the exact target was found in the cache
        forced_removals: Removals made by the stall fallback
        chosen_costs: Cost of each removed vertex, in removal order
    """

    initial_vertices: int
    final_vertices: int
    removals: int = 0
    cost_evaluations: int = 0
    resumed_from: Optional[int] = None
    cache_hit: bool = False
    forced_removals: int = 0
    chosen_costs: List[float] = field(default_factory=list)


def cache_digest(digest: str, polygon: CyclicPolygon, config: ReductionConfig) -> str:
    """Cache key prefix for ``digest`` reduced under these settings.

    States reached with a different parallel tolerance or stall policy are
    not interchangeable, so both are part of the key.
    """
    return f"{digest}:{polygon.parallel_tolerance!r}:{config.stall_policy.value}"


def cheapest_vertex(polygon: CyclicPolygon) -> Tuple[Optional[int], float]:
    """Index and cost of the first vertex with the lowest removal cost.

    Returns:
        ``(None, inf)`` when no vertex has a finite cost
    """
    costs = polygon.costs
    index = int(np.argmin(costs))
    cost = float(costs[index])
    if not math.isfinite(cost):
        return None, math.inf
    return index, cost


def apply_convex_removal(polygon: CyclicPolygon, i: int) -> None:
    """Remove vertex ``i`` and slide its neighbours along their outer edges."""
    a, new_b, new_d, e = convex_removal(
        *polygon.positions_at(i, (-2, -1, 0, 1, 2)),
        parallel_tolerance=polygon.parallel_tolerance,
    ).positions

    # a and e keep their position but need reclassification
    polygon.set_position(i - 2, a)
    polygon.set_position(i - 1, new_b)
    polygon.set_position(i + 1, new_d)
    polygon.set_position(i + 2, e)

    polygon.remove_at(i)


def apply_concave_removal(polygon: CyclicPolygon, i: int) -> None:
    """Remove vertex ``i`` by connecting its neighbours directly."""
    a, c = concave_removal(*polygon.positions_at(i, (-1, 0, 1))).positions

    # Unchanged positions, rewritten to force reclassification
    polygon.set_position(i - 1, a)
    polygon.set_position(i + 1, c)

    polygon.remove_at(i)


def reduce_to_limit(
    polygon: CyclicPolygon,
    limit: int,
    digest: Optional[str] = None,
    cache: Optional[SimplificationCache] = None,
    config: Optional[ReductionConfig] = None,
    stacklevel: int = 2,
) -> ReductionStats:
    """Reduce ``polygon`` in place until it has at most ``limit`` vertices.

    Args:
        polygon: Polygon to reduce; mutated in place
        limit: Target vertex count, at least 3
        digest: Content hash of the sequence the polygon was built from.
            Required for memoization.
        cache: Store for intermediate states; no memoization when None
        config: Reduction settings, defaults when None
        stacklevel: Passed to :func:`warnings.warn` for the stall warning so
            that it points at the caller of the public entry point

    Returns:
        ReductionStats describing the run

    Raises:
        ValidationError: If ``limit`` is below 3
        NoRemovableVertexError: If every vertex has an infinite cost before
            the limit is reached and the stall policy is ``RAISE``
    """
    config = resolve_config(config)
    if limit < 3:
        raise ValidationError(
            f"simplification vertex count target cannot be less than 3, got {limit}"
        )

    stats = ReductionStats(initial_vertices=len(polygon), final_vertices=len(polygon))
    evaluations_before = polygon.cost_evaluations

    memoize = cache is not None and digest is not None and config.cache_size > 0
    if memoize:
        digest = cache_digest(digest, polygon, config)

    if memoize and len(polygon) > limit:
        found = cache.closest(digest, limit, len(polygon))
        if found is not None:
            length, snapshot = found
            polygon.restore(snapshot)
            stats.resumed_from = length
            stats.cache_hit = length == limit
            logger.debug("Resuming %s at %d vertices (target %d)", digest[:12], length, limit)

    while len(polygon) > limit:
        index, cost = cheapest_vertex(polygon)

        if index is None:
            if config.stall_policy is StallPolicy.RAISE:
                raise NoRemovableVertexError(len(polygon), limit)
            warnings.warn(
                f"No vertex with a finite removal cost at {len(polygon)} vertices; "
                "ear-clipping the first vertex",
                StallWarning,
                stacklevel=stacklevel,
            )
            apply_concave_removal(polygon, 0)
            stats.forced_removals += 1
        elif polygon.curvature_at(index) is Curvature.CONVEX:
            apply_convex_removal(polygon, index)
        else:
            apply_concave_removal(polygon, index)

        stats.removals += 1
        stats.chosen_costs.append(cost)

        polygon.refresh_curvatures()
        polygon.refresh_costs()

        if memoize and len(polygon) <= config.cache_threshold:
            cache.put(digest, len(polygon), polygon.snapshot())

    stats.final_vertices = len(polygon)
    stats.cost_evaluations = polygon.cost_evaluations - evaluations_before
    return stats


__all__ = [
    'ReductionStats',
    'cache_digest',
    'cheapest_vertex',
    'apply_convex_removal',
    'apply_concave_removal',
    'reduce_to_limit',
]
