"""Distortion measurements between a polygon and its reduced form.

Reduction trades vertices for shape fidelity. These helpers quantify what was
lost so callers can pick a vertex budget or check a result.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Union

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

PolygonLike = Union[BaseGeometry, Sequence[Sequence[float]]]


def _as_geometry(value: PolygonLike) -> BaseGeometry:
    if isinstance(value, BaseGeometry):
        return value
    return Polygon(value)


def vertex_count(geometry: PolygonLike) -> int:
    """Number of distinct exterior vertices (closing duplicates excluded)."""
    geometry = _as_geometry(geometry)
    if geometry.is_empty:
        return 0
    if isinstance(geometry, Polygon):
        return len(geometry.exterior.coords) - 1
    if isinstance(geometry, MultiPolygon):
        return sum(len(p.exterior.coords) - 1 for p in geometry.geoms)
    raise TypeError("Input geometry must be a Polygon or MultiPolygon.")


def _safe_hausdorff(a: BaseGeometry, b: BaseGeometry) -> Optional[float]:
    try:
        return a.hausdorff_distance(b)
    except Exception:
        return None


def measure_reduction(
    original: PolygonLike,
    reduced: PolygonLike,
) -> Dict[str, Optional[float]]:
    """Compare ``reduced`` against ``original``.

    Both arguments may be Shapely polygons or closed coordinate rings.

    Returns:
        Dictionary with ``original_vertices``, ``reduced_vertices``,
        ``original_area``, ``reduced_area``, ``area_ratio`` (None when the
        original has no area), ``symmetric_difference_area`` and
        ``hausdorff_distance``.

    Examples:
        >>> square = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
        >>> measure_reduction(square, square)["area_ratio"]
        1.0
    """
    original = _as_geometry(original)
    reduced = _as_geometry(reduced)

    original_area = original.area
    reduced_area = reduced.area
    area_ratio: Optional[float] = None
    if original_area > 0:
        area_ratio = reduced_area / original_area

    return {
        "original_vertices": vertex_count(original),
        "reduced_vertices": vertex_count(reduced),
        "original_area": original_area,
        "reduced_area": reduced_area,
        "area_ratio": area_ratio,
        "symmetric_difference_area": original.symmetric_difference(reduced).area,
        "hausdorff_distance": _safe_hausdorff(original, reduced),
    }


__all__ = [
    "vertex_count",
    "measure_reduction",
]
