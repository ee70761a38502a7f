"""Unit tests for path validation."""

import pytest
from mathgrid.core.validator import (
    alternates,
    can_extend_line,
    is_adjacent,
    is_valid_path,
    linear_path,
    ray,
)


class TestLinearPath:
    """Tests for drag path recomputation."""

    def test_horizontal(self):
        assert linear_path((1, 1), (1, 4)) == [(1, 1), (1, 2), (1, 3), (1, 4)]
        assert linear_path((1, 3), (1, 1)) == [(1, 3), (1, 2), (1, 1)]

    def test_vertical(self):
        assert linear_path((0, 2), (2, 2)) == [(0, 2), (1, 2), (2, 2)]
        assert linear_path((4, 0), (2, 0)) == [(4, 0), (3, 0), (2, 0)]

    def test_off_axis_collapses_to_start(self):
        assert linear_path((0, 0), (2, 3)) == [(0, 0)]

    def test_endpoint_on_start(self):
        assert linear_path((2, 2), (2, 2)) == [(2, 2)]


class TestPathChecks:
    """Tests for geometry checks."""

    def test_is_adjacent(self):
        assert is_adjacent((0, 0), (0, 1))
        assert is_adjacent((2, 2), (1, 2))
        assert not is_adjacent((0, 0), (1, 1))
        assert not is_adjacent((0, 0), (0, 2))

    def test_is_valid_path(self):
        assert is_valid_path([(0, 0)])
        assert is_valid_path([(0, 0), (0, 1), (0, 2)])
        assert is_valid_path([(3, 1), (2, 1), (1, 1)])
        assert not is_valid_path([(0, 0), (0, 2)])
        assert not is_valid_path([(0, 0), (0, 1), (1, 1)])

    def test_alternates(self, sample_board, authored_board):
        assert alternates(sample_board, [(0, 0), (0, 1), (0, 2)])
        assert not alternates(sample_board, [(0, 1), (0, 2)])
        assert not alternates(authored_board, [(0, 0), (0, 1), (0, 2)])

    def test_can_extend_line(self):
        assert can_extend_line([], (3, 3))
        assert can_extend_line([(0, 0)], (1, 0))
        assert can_extend_line([(0, 0), (0, 1)], (0, 2))
        # direction change
        assert not can_extend_line([(0, 0), (0, 1)], (1, 1))
        # not touching the last cell
        assert not can_extend_line([(0, 0), (0, 1)], (0, 3))
        # already selected
        assert not can_extend_line([(0, 0), (0, 1)], (0, 0))

    def test_ray(self, sample_board):
        assert ray(sample_board, (0, 0), (1, 1), 3) == [(0, 0), (1, 1), (2, 2)]
        assert ray(sample_board, (0, 3), (0, 1), 3) is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
