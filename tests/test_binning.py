"""
Tests for bin size selection.
"""

import pytest

from epics_archiver.processing import select_bin_size


@pytest.mark.unit
class TestSelectBinSize:
    """Test cases for select_bin_size."""

    def test_floor_division(self):
        assert select_bin_size(600, 100) == 6

    def test_fractional_ratio_is_floored(self):
        assert select_bin_size(650, 100) == 6
        assert select_bin_size(199.9, 100) == 1

    def test_short_range_is_raw(self):
        assert select_bin_size(50, 100) is None

    def test_exactly_one_second_bins(self):
        assert select_bin_size(100, 100) == 1

    def test_disable_binning_always_raw(self):
        assert select_bin_size(600, 100, disable_binning=True) is None
        assert select_bin_size(365 * 86400, 10, disable_binning=True) is None

    def test_year_range(self):
        assert select_bin_size(365 * 86400, 1000) == 31536

    @pytest.mark.parametrize("max_points", [0, -5])
    def test_non_positive_max_points_is_raw(self, max_points):
        assert select_bin_size(600, max_points) is None

    def test_returns_int(self):
        assert isinstance(select_bin_size(600.0, 100), int)
