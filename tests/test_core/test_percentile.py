"""Tests for percentile finder module."""

import math
import pytest
import numpy as np

from imgnorm.core.errors import InvalidArgumentError, UnsupportedEncodingError
from imgnorm.core.percentile import PercentileRange, find_percentile_index, percentile_range


class TestFindPercentileIndex:
    """Tests for find_percentile_index function."""

    def test_zero_percentile_is_first_index(self):
        """Test that the 0th percentile is index 0."""
        assert find_percentile_index([1, 1, 1, 1], 0) == 0
        assert find_percentile_index([0, 0, 5, 0], 0) == 0

    def test_hundredth_percentile_is_last_index(self):
        """Test that the 100th percentile is the last index."""
        assert find_percentile_index([1, 1, 1, 1], 100) == 3
        assert find_percentile_index([3, 0, 2, 7], 100) == 3

    def test_tie_resolves_to_earlier_bin(self):
        """Test that reaching the target exactly stops at that bin."""
        assert find_percentile_index([1, 1, 1, 1], 50) == 1
        assert find_percentile_index([0, 0, 5, 0, 0], 100) == 2

    @pytest.mark.parametrize("percentile", range(1, 101))
    def test_integer_percentiles_of_unit_counts(self, percentile):
        """Test that an exact integer threshold is not pushed into the next bin."""
        assert find_percentile_index([1] * 100, percentile) == percentile - 1

    def test_crossing(self):
        """Test that the first bin crossing the target is returned."""
        assert find_percentile_index([10, 10, 10, 10], 26) == 1
        assert find_percentile_index([10, 10, 10, 10], 99) == 3

    def test_accepts_numpy(self):
        """Test that numpy counts are accepted."""
        counts = np.array([5, 0, 5], dtype=np.int64)
        result = find_percentile_index(counts, 50)
        assert result == 0
        assert isinstance(result, int)

    def test_all_zero_counts(self):
        """Test that all-zero counts resolve to index 0."""
        assert find_percentile_index([0, 0, 0], 99) == 0

    def test_empty_counts(self):
        """Test that empty counts are rejected."""
        with pytest.raises(InvalidArgumentError):
            find_percentile_index([], 50)

    @pytest.mark.parametrize("percentile", [-0.1, 100.5])
    def test_percentile_out_of_range(self, percentile):
        """Test that percentiles outside [0, 100] are rejected."""
        with pytest.raises(InvalidArgumentError):
            find_percentile_index([1, 2, 3], percentile)

    def test_negative_counts(self):
        """Test that negative counts are rejected."""
        with pytest.raises(InvalidArgumentError):
            find_percentile_index([1, -1, 3], 50)


class TestPercentileRange:
    """Tests for percentile_range function."""

    def test_uint16_ramp(self, ramp_image):
        """Test percentiles of a 16-bit 0-1000 ramp."""
        result = percentile_range(ramp_image, 1, 99)
        assert isinstance(result, PercentileRange)
        assert result == (10.0, 990.0)
        assert 0 <= result.low < result.high <= 1000

    def test_uint8_full_range(self):
        """Test 0 and 100 percentiles of an 8-bit buffer."""
        img = np.array([[0, 64, 128, 255]], dtype=np.uint8)
        assert percentile_range(img, 0, 100) == (0.0, 255.0)

    def test_constant_uint16(self):
        """Test a constant buffer gives an equal pair."""
        img = np.full((10, 10), 700, dtype=np.uint16)
        assert percentile_range(img, 1, 99) == (700.0, 700.0)

    def test_monotonic(self, sample_grayscale_image):
        """Test that a lower percentile never gives a higher value."""
        for low_pct, high_pct in [(0, 100), (1, 99), (25, 75), (49, 51)]:
            low, high = percentile_range(sample_grayscale_image, low_pct, high_pct)
            assert low <= high

    def test_float_all_nan(self, all_nan_image):
        """Test that an all-NaN buffer gives a NaN pair."""
        low, high = percentile_range(all_nan_image, 1, 99)
        assert math.isnan(low)
        assert math.isnan(high)

    def test_float_ramp_bin_edges(self):
        """Test that float percentiles are bin lower edges."""
        img = np.arange(256, dtype=np.float32).reshape(16, 16)
        low, high = percentile_range(img, 0, 100)
        assert low == 0.0
        assert high == pytest.approx(255 * 255 / 256)

    def test_float_with_nan(self, sample_float_image):
        """Test that NaN samples do not break float percentiles."""
        low, high = percentile_range(sample_float_image, 1, 99)
        assert 0.0 <= low < high < 1.0

    def test_float_negative_values(self):
        """Test that negative float values are included in the range."""
        img = np.linspace(-100, 100, 201, dtype=np.float32).reshape(1, 201)
        low, high = percentile_range(img, 0, 100)
        assert low == -100.0
        assert high <= 100.0
        assert high > 99.0

    def test_int32(self, sample_int32_image):
        """Test that 32-bit integer buffers use the float histogram."""
        low, high = percentile_range(sample_int32_image, 1, 99)
        assert sample_int32_image.min() <= low < high <= sample_int32_image.max()

    def test_multi_channel_rejected(self, sample_bgr_image):
        """Test that multi-channel buffers are rejected."""
        with pytest.raises(UnsupportedEncodingError):
            percentile_range(sample_bgr_image, 1, 99)

    def test_unsupported_dtype(self):
        """Test that float64 buffers are rejected."""
        with pytest.raises(UnsupportedEncodingError):
            percentile_range(np.zeros((2, 2), dtype=np.float64), 1, 99)

    def test_float_with_infinite_sample(self):
        """Test that an infinite sample leaves a finite ordered range."""
        img = np.arange(100, dtype=np.float32).reshape(10, 10)
        img[9, 9] = np.inf
        low, high = percentile_range(img, 1, 99)
        assert low == 0.0
        assert math.isfinite(high)
        assert low <= high <= 98.0
