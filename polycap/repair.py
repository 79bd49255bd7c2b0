"""Ring repair using the buffer(0) trick.

Edge sliding can make a reduced ring cross itself. Buffering the ring's
polygon by a zero (or small positive) margin rebuilds a simple boundary
covering the same area.
"""

from typing import Optional

import numpy as np
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from .core.errors import RepairError
from .core.geometry_utils import open_ring, to_single_polygon


def repair_ring(
    points: np.ndarray,
    margin: float = 0.0,
    orientation: Optional[int] = None,
) -> np.ndarray:
    """Return a simple ring covering ``points`` expanded by ``margin``.

    A ring that already forms a valid polygon is returned untouched when the
    margin is zero. Otherwise the polygon is buffered, the largest resulting
    piece is kept and its exterior is returned.

    Args:
        points: Open ring, (N, 2) array without the closing duplicate
        margin: Non-negative buffer distance
        orientation: Winding the repaired exterior should follow
            (1 counter-clockwise, -1 clockwise, 0 or None to keep GEOS output)

    Returns:
        Open ring as an (M, 2) array

    Raises:
        RepairError: If buffering fails or leaves nothing behind

    Examples:
        >>> bowtie = np.array([[0, 0], [2, 2], [2, 0], [0, 2]], dtype=float)
        >>> len(repair_ring(bowtie)) >= 3
        True
    """
    if margin < 0:
        raise RepairError(f"Buffer margin must be non-negative, got {margin}")

    try:
        polygon = Polygon(points)
        if margin == 0 and polygon.is_valid:
            return np.asarray(points, dtype=float)

        fixed = to_single_polygon(polygon.buffer(margin))
    except Exception as e:
        raise RepairError(f"Buffer repair failed: {e}") from e

    if fixed.is_empty:
        raise RepairError("Buffer produced no valid polygons")

    if orientation:
        fixed = orient(fixed, sign=1.0 if orientation > 0 else -1.0)

    ring = open_ring(np.asarray(fixed.exterior.coords, dtype=float)[:, :2])
    if len(ring) < 3:
        raise RepairError(f"Buffer produced a degenerate ring with {len(ring)} vertices")
    return ring


__all__ = ['repair_ring']
