"""Tests for turn angles and polygon orientation."""

import math

import numpy as np
import pytest

from polycap.orientation import (
    CLOCKWISE,
    COUNTERCLOCKWISE,
    DEGENERATE,
    extreme_vertex_index,
    polygon_orientation,
    turn_angle,
)


class TestTurnAngle:
    """Tests for turn_angle()."""

    def test_left_turn(self):
        """Left turns are positive."""
        assert turn_angle((0, 0), (1, 0), (1, 1)) == pytest.approx(math.pi / 2)

    def test_right_turn(self):
        """Right turns are negative."""
        assert turn_angle((0, 0), (1, 0), (1, -1)) == pytest.approx(-math.pi / 2)

    def test_straight(self):
        assert turn_angle((0, 0), (1, 0), (2, 0)) == 0.0

    def test_backtrack_is_positive_pi(self):
        """A full reversal lands on the closed end of (-pi, pi]."""
        assert turn_angle((0, 0), (1, 0), (0, 0)) == pytest.approx(math.pi)

    def test_wraps_across_negative_x_axis(self):
        """Headings on both sides of the -x axis still give a small angle."""
        angle = turn_angle((1, -0.1), (0, 0), (-1, -0.1))
        assert angle == pytest.approx(2 * math.atan2(0.1, 1))

    def test_range(self):
        """Angles stay within (-pi, pi]."""
        rng = np.random.default_rng(42)
        for a, b, c in rng.uniform(-10, 10, size=(200, 3, 2)):
            angle = turn_angle(a, b, c)
            assert -math.pi < angle <= math.pi


class TestExtremeVertex:
    """Tests for the extreme vertex ordering."""

    def test_minimum_x(self):
        """The extreme vertex has the smallest x."""
        points = np.array([[3, 0], [5, 2], [-1, 4], [2, 7]])
        assert extreme_vertex_index(points) == 2

    def test_first_minimum_wins(self):
        """Ties keep the earliest vertex."""
        points = np.array([[0, 3], [4, 1], [0, 5]])
        assert extreme_vertex_index(points) == 0

    def test_diagonal_vertex_compares_by_y(self):
        """A candidate with x == y is ordered by y, not by x."""
        points = np.array([[2, 0], [1, 1], [3, 4]])
        assert extreme_vertex_index(points) == 0


class TestPolygonOrientation:
    """Tests for polygon_orientation()."""

    def test_counterclockwise_square(self):
        points = np.array([[0, 0], [1, 0], [1, 1], [0, 1]], dtype=float)
        assert polygon_orientation(points) == COUNTERCLOCKWISE

    def test_clockwise_square(self):
        points = np.array([[0, 0], [0, 1], [1, 1], [1, 0]], dtype=float)
        assert polygon_orientation(points) == CLOCKWISE

    def test_independent_of_start_vertex(self):
        """Rotating the ring does not change the winding."""
        points = np.array([[0, 0], [4, 0], [5, 3], [2, 5], [-1, 2]], dtype=float)
        for shift in range(len(points)):
            assert polygon_orientation(np.roll(points, shift, axis=0)) == COUNTERCLOCKWISE

    def test_reversed_polygon_flips(self):
        """Reversing the ring flips the winding."""
        points = np.array([[0, 0], [4, 0], [5, 3], [2, 5], [-1, 2]], dtype=float)
        assert polygon_orientation(points[::-1]) == CLOCKWISE

    def test_collinear_extreme_vertex_is_degenerate(self):
        """The first leftmost vertex may sit in the middle of a straight edge."""
        points = np.array([[0, 2], [0, 1], [2, 1], [2, 3], [0, 3]], dtype=float)
        assert polygon_orientation(points) == DEGENERATE
