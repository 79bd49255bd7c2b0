"""Common geometry utilities shared by the reduction engine.

Coordinates are handled as float64 numpy arrays of shape (N, 2). Rings follow
the GeoJSON/Shapely convention where a closed ring repeats its first vertex
at the end.
"""

import hashlib
from typing import Sequence

import numpy as np
from shapely.geometry import Polygon, MultiPolygon, GeometryCollection
from shapely.geometry.base import BaseGeometry

from .errors import ValidationError


def as_points(coordinates: Sequence[Sequence[float]]) -> np.ndarray:
    """Convert a coordinate sequence to an (N, 2) float array.

    Only the first two components of every coordinate are kept, so 3D input
    is flattened onto the plane.

    Raises:
        ValidationError: If the coordinates are not finite 2D pairs
    """
    try:
        points = np.asarray(coordinates, dtype=float)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"coordinates must be numeric pairs: {e}") from e

    if len(points) == 0:
        return np.empty((0, 2), dtype=float)

    if points.ndim != 2 or points.shape[1] < 2:
        raise ValidationError(
            f"coordinates must be 2D pairs, got array of shape {points.shape}"
        )

    points = points[:, :2]
    if not np.all(np.isfinite(points)):
        raise ValidationError("coordinates must be finite")

    return np.ascontiguousarray(points)


def open_ring(points: np.ndarray) -> np.ndarray:
    """Strip the duplicate closing vertex of a closed ring.

    Rings whose last vertex does not repeat the first are returned unchanged.

    Examples:
        >>> open_ring(np.array([[0, 0], [1, 0], [1, 1], [0, 0]])).tolist()
        [[0, 0], [1, 0], [1, 1]]
    """
    if len(points) > 1 and np.array_equal(points[0], points[-1]):
        return points[:-1]
    return points


def close_ring(points: np.ndarray) -> np.ndarray:
    """Append the first vertex to the end of an open ring."""
    if len(points) == 0:
        return points
    return np.vstack([points, points[:1]])


def triangle_area(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> float:
    """Unsigned area of the triangle (a, b, c)."""
    return float(abs(0.5 * (
        a[0] * (c[1] - b[1])
        + b[0] * (a[1] - c[1])
        + c[0] * (b[1] - a[1])
    )))


def edge_normal(p: np.ndarray, q: np.ndarray) -> np.ndarray:
    """Left-hand normal of the edge p -> q (not normalized)."""
    return np.array([p[1] - q[1], q[0] - p[0]], dtype=float)


def content_hash(points: np.ndarray) -> str:
    """Deterministic fingerprint of a vertex sequence.

    Two sequences hash equal only if they hold the same float64 coordinates
    in the same order.
    """
    data = np.ascontiguousarray(points, dtype=np.float64)
    digest = hashlib.sha1(str(data.shape).encode())
    digest.update(data.tobytes())
    return digest.hexdigest()


def to_single_polygon(geometry: BaseGeometry) -> Polygon:
    """Convert geometry to a single Polygon by taking the largest piece.

    If the geometry is already a Polygon, returns it unchanged.
    If it's a MultiPolygon, returns the largest polygon by area.
    If it's a GeometryCollection, extracts polygons and returns the largest.
    Anything else yields an empty Polygon.

    Examples:
        >>> poly = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        >>> to_single_polygon(poly).equals(poly)
        True
    """
    if isinstance(geometry, Polygon):
        return geometry
    elif isinstance(geometry, MultiPolygon):
        return max(geometry.geoms, key=lambda p: p.area)
    elif isinstance(geometry, GeometryCollection):
        polygons = []
        for part in geometry.geoms:
            if isinstance(part, Polygon):
                polygons.append(part)
            elif isinstance(part, MultiPolygon):
                polygons.extend(part.geoms)
        if polygons:
            return max(polygons, key=lambda p: p.area)
    return Polygon()


__all__ = [
    'as_points',
    'open_ring',
    'close_ring',
    'triangle_area',
    'edge_normal',
    'content_hash',
    'to_single_polygon',
]
