"""Tests for the metrics module."""

import pytest
from shapely.geometry import LineString, MultiPolygon, Polygon

from polycap import simplify_ring
from polycap.metrics import measure_reduction, vertex_count

SQUARE = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]


class TestVertexCount:
    """Tests for vertex_count()."""

    def test_ring(self):
        """Closed rings count without the closing duplicate."""
        assert vertex_count(SQUARE) == 4

    def test_polygon(self):
        """Shapely polygons count exterior vertices."""
        assert vertex_count(Polygon(SQUARE)) == 4

    def test_multipolygon(self):
        """Parts are summed."""
        other = Polygon([(20, 0), (30, 0), (25, 5)])
        assert vertex_count(MultiPolygon([Polygon(SQUARE), other])) == 7

    def test_empty(self):
        assert vertex_count(Polygon()) == 0

    def test_other_types(self):
        """Non-polygon geometries are rejected."""
        with pytest.raises(TypeError):
            vertex_count(LineString([(0, 0), (1, 1)]))


class TestMeasureReduction:
    """Tests for measure_reduction()."""

    def test_identical(self):
        """Identical shapes show no distortion."""
        metrics = measure_reduction(SQUARE, SQUARE)

        assert metrics["area_ratio"] == 1.0
        assert metrics["symmetric_difference_area"] == pytest.approx(0.0)
        assert metrics["hausdorff_distance"] == pytest.approx(0.0)

    def test_square_to_triangle(self):
        """Reducing a square doubles its area."""
        metrics = measure_reduction(SQUARE, simplify_ring(SQUARE, 3))

        assert metrics["original_vertices"] == 4
        assert metrics["reduced_vertices"] == 3
        assert metrics["original_area"] == pytest.approx(100.0)
        assert metrics["reduced_area"] == pytest.approx(200.0)
        assert metrics["area_ratio"] == pytest.approx(2.0)
        assert metrics["symmetric_difference_area"] == pytest.approx(100.0)
        assert metrics["hausdorff_distance"] > 0

    def test_empty_original(self):
        """Area ratio is undefined without an original area."""
        metrics = measure_reduction(Polygon(), Polygon(SQUARE))
        assert metrics["area_ratio"] is None
