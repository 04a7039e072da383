"""Tests for the honeycomb lattice generator."""
import pytest
import numpy

from hexmosaic._grid import point_grid, row_counts

R = 80
SX = R * 2.728
SY = R * 2.3625


class TestPointGrid:
    """Tests for point_grid() row staggering and viewport coverage."""

    def test_800x600_row_and_column_counts(self):
        """The reference viewport yields five rows of five centres."""
        points = point_grid(800, 600, SX, SY)
        assert row_counts(points) == [5, 5, 5, 5, 5]
        assert len(points) == 25

    def test_reproducible(self):
        """The lattice is a pure function of its arguments."""
        assert point_grid(800, 600, SX, SY) == point_grid(800, 600, SX, SY)

    def test_odd_rows_offset_by_half_spacing(self):
        """Odd rows start half a horizontal spacing after even rows."""
        points = point_grid(800, 600, SX, SY)
        ys = sorted({y for _, y in points})
        for k, y in enumerate(ys):
            first_x = min(x for x, yy in points if yy == y)
            expected = 0.0 if k % 2 == 0 else SX / 2
            assert first_x == pytest.approx(expected)

    def test_rows_spaced_vertically(self):
        """Rows sit at multiples of the vertical spacing."""
        points = point_grid(800, 600, SX, SY)
        ys = sorted({y for _, y in points})
        numpy.testing.assert_allclose(numpy.diff(ys), SY)

    def test_covers_viewport_with_overshoot(self):
        """Centres reach past the viewport but by less than one spacing."""
        points = numpy.array(point_grid(800, 600, SX, SY))
        assert points[:, 0].min() == 0.0
        assert points[:, 1].min() == 0.0
        assert points[:, 0].max() >= 800
        assert points[:, 1].max() >= 600
        assert points[:, 0].max() < 800 + SX
        assert points[:, 1].max() < 600 + SY

    def test_zero_viewport_is_minimal(self):
        """A zero sized viewport still gets the single origin centre."""
        assert point_grid(0, 0, 10, 10) == [(0.0, 0.0)]

    def test_negative_viewport_is_empty(self):
        """Negative dimensions beyond one spacing produce no centres."""
        assert point_grid(-100, -100, 10, 10) == []

    def test_non_positive_spacing_is_empty(self):
        """Degenerate spacing yields an empty lattice instead of looping."""
        assert point_grid(100, 100, 0, 10) == []
        assert point_grid(100, 100, 10, -1) == []


class TestRowCounts:
    """Tests for row_counts()."""

    def test_counts_consecutive_rows(self):
        assert row_counts([(0, 0), (1, 0), (0.5, 1), (0, 2)]) == [2, 1, 1]

    def test_empty(self):
        assert row_counts([]) == []
