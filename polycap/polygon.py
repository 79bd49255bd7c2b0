"""Mutable, circularly indexed polygon with cached vertex classification.

Vertices live in a flat arena: one row per slot in a positions array, plus
per-slot curvature and removal cost caches. Each cache has an explicit dirty
flag. Writing a position marks both caches of that slot dirty; nothing else
is invalidated automatically, so callers must rewrite every slot whose
neighbourhood they changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .cost import classify, removal_cost
from .core.errors import ValidationError
from .core.geometry_utils import as_points
from .core.types import Curvature
from .orientation import polygon_orientation


@dataclass(frozen=True)
class Vertex:
    """Read-only view of one polygon slot.

    ``curvature`` and ``removal_cost`` are ``None`` while the slot is dirty.
    """

    position: Tuple[float, float]
    curvature: Optional[Curvature]
    removal_cost: Optional[float]


@dataclass(frozen=True)
class PolygonSnapshot:
    """Copy of the full arena state of a CyclicPolygon."""

    positions: np.ndarray
    curvatures: Tuple[Optional[Curvature], ...]
    costs: np.ndarray
    curvature_dirty: np.ndarray
    cost_dirty: np.ndarray
    orientation: int

    def __len__(self) -> int:
        return len(self.positions)


class CyclicPolygon:
    """Polygon whose vertex indices wrap around modulo its length.

    Args:
        points: Open ring of at least 3 vertices (no closing duplicate)
        orientation: Winding sign to use instead of computing one
        parallel_tolerance: Sine threshold below which convex removals treat
            two lines as parallel

    Examples:
        >>> polygon = CyclicPolygon([(0, 0), (4, 0), (4, 4), (0, 4)])
        >>> polygon.orientation
        1
        >>> polygon.position_at(-1)
        (0.0, 4.0)
    """

    def __init__(
        self,
        points: Sequence[Sequence[float]],
        orientation: Optional[int] = None,
        parallel_tolerance: float = 1e-12,
    ):
        positions = as_points(points)
        if len(positions) < 3:
            raise ValidationError(
                f"polygons need at least 3 vertices, got {len(positions)}"
            )

        n = len(positions)
        self._positions = positions.copy()
        self._curvatures: List[Optional[Curvature]] = [None] * n
        self._costs = np.full(n, np.inf)
        self._curvature_dirty = np.ones(n, dtype=bool)
        self._cost_dirty = np.ones(n, dtype=bool)

        self.parallel_tolerance = parallel_tolerance
        self.cost_evaluations = 0
        self._orientation = (
            polygon_orientation(self._positions) if orientation is None else int(orientation)
        )

        self.refresh_curvatures()
        self.refresh_costs()

    @classmethod
    def from_snapshot(
        cls,
        snapshot: PolygonSnapshot,
        parallel_tolerance: float = 1e-12,
    ) -> "CyclicPolygon":
        """Rebuild a polygon with exactly the cached state of ``snapshot``."""
        polygon = cls.__new__(cls)
        polygon.parallel_tolerance = parallel_tolerance
        polygon.cost_evaluations = 0
        polygon.restore(snapshot)
        return polygon

    def restore(self, snapshot: PolygonSnapshot) -> None:
        """Replace the whole arena with the state held by ``snapshot``."""
        self._positions = snapshot.positions.copy()
        self._curvatures = list(snapshot.curvatures)
        self._costs = snapshot.costs.copy()
        self._curvature_dirty = snapshot.curvature_dirty.copy()
        self._cost_dirty = snapshot.cost_dirty.copy()
        self._orientation = snapshot.orientation

    def snapshot(self) -> PolygonSnapshot:
        return PolygonSnapshot(
            positions=self._positions.copy(),
            curvatures=tuple(self._curvatures),
            costs=self._costs.copy(),
            curvature_dirty=self._curvature_dirty.copy(),
            cost_dirty=self._cost_dirty.copy(),
            orientation=self._orientation,
        )

    def __len__(self) -> int:
        return len(self._positions)

    def __repr__(self) -> str:
        return f"CyclicPolygon({len(self)} vertices, orientation={self._orientation})"

    @property
    def orientation(self) -> int:
        """Winding sign fixed at construction: 1 CCW, -1 CW, 0 degenerate."""
        return self._orientation

    @property
    def coordinates(self) -> np.ndarray:
        """Copy of the vertex positions as an (N, 2) array."""
        return self._positions.copy()

    @property
    def costs(self) -> np.ndarray:
        """Removal costs of all slots; dirty slots read as ``inf``."""
        return np.where(self._cost_dirty, np.inf, self._costs)

    def index(self, i: int) -> int:
        """Wrap ``i`` into ``range(len(self))``."""
        n = len(self._positions)
        return ((i % n) + n) % n

    def position_at(self, i: int) -> Tuple[float, float]:
        x, y = self._positions[self.index(i)]
        return float(x), float(y)

    def positions_at(self, i: int, offsets: Sequence[int]) -> List[np.ndarray]:
        """Positions of the slots at ``i + offset`` for every offset."""
        return [self._positions[self.index(i + o)].copy() for o in offsets]

    def curvature_at(self, i: int) -> Optional[Curvature]:
        j = self.index(i)
        if self._curvature_dirty[j]:
            return None
        return self._curvatures[j]

    def cost_at(self, i: int) -> Optional[float]:
        j = self.index(i)
        if self._cost_dirty[j]:
            return None
        return float(self._costs[j])

    def vertex_at(self, i: int) -> Vertex:
        return Vertex(self.position_at(i), self.curvature_at(i), self.cost_at(i))

    def vertices_at(self, i: int, offsets: Sequence[int]) -> List[Vertex]:
        return [self.vertex_at(i + o) for o in offsets]

    def set_position(self, i: int, position: Sequence[float]) -> None:
        """Move the slot at ``i`` and mark its curvature and cost unknown."""
        j = self.index(i)
        self._positions[j] = position[0], position[1]
        self._curvature_dirty[j] = True
        self._cost_dirty[j] = True

    def remove_at(self, i: int) -> None:
        """Delete the slot at ``i``; later slots shift down by one."""
        if len(self._positions) <= 3:
            raise ValidationError("cannot remove a vertex from a triangle")
        j = self.index(i)
        self._positions = np.delete(self._positions, j, axis=0)
        del self._curvatures[j]
        self._costs = np.delete(self._costs, j)
        self._curvature_dirty = np.delete(self._curvature_dirty, j)
        self._cost_dirty = np.delete(self._cost_dirty, j)

    def refresh_curvatures(self) -> None:
        """Classify every slot whose curvature is unknown."""
        for j in np.flatnonzero(self._curvature_dirty):
            self._curvatures[j] = classify(self, int(j))
            self._curvature_dirty[j] = False

    def refresh_costs(self) -> None:
        """Compute the removal cost of every slot whose cost is unknown."""
        for j in np.flatnonzero(self._cost_dirty):
            self._costs[j] = removal_cost(self, int(j))
            self._cost_dirty[j] = False
            self.cost_evaluations += 1


__all__ = [
    'Vertex',
    'PolygonSnapshot',
    'CyclicPolygon',
]
