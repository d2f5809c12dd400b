"""Percentile lookup on histograms and percentile ranges of buffers."""

from typing import NamedTuple, Sequence, Union
import math
import numpy as np

from imgnorm.core.encoding import Encoding, require_single_channel
from imgnorm.core.errors import InvalidArgumentError, UnsupportedEncodingError
from imgnorm.core.histogram import DEFAULT_FLOAT_BINS, hist_float, hist_int
from imgnorm.core.stats import compute_finite_min_max


class PercentileRange(NamedTuple):
    """Pair of values in the buffer's own value domain."""
    low: float
    high: float


def find_percentile_index(counts: Union[Sequence[int], np.ndarray],
                          percentile: float) -> int:
    """
    Find the first bin where the cumulative count reaches a percentile.

    Args:
        counts: Non-negative histogram counts
        percentile: Percentile to find, 0 to 100

    Returns:
        Index of the first bin whose running sum is >= percentile/100 * total

    Raises:
        InvalidArgumentError: For empty or negative counts, or a percentile
            outside [0, 100]
    """
    counts = np.asarray(counts)
    if counts.size == 0:
        raise InvalidArgumentError("find_percentile_index: counts is empty")
    if not 0.0 <= percentile <= 100.0:
        raise InvalidArgumentError(
            f"find_percentile_index: percentile must be in [0, 100], got {percentile}"
        )
    if (counts < 0).any():
        raise InvalidArgumentError("find_percentile_index: counts must be non-negative")

    cumulative = np.cumsum(counts, dtype=np.float64)
    # multiply first so integer thresholds stay exact
    target = percentile * cumulative[-1] / 100.0
    index = int(np.searchsorted(cumulative, target, side='left'))
    return min(index, counts.size - 1)


def percentile_range(img: np.ndarray, low_pct: float, high_pct: float) -> PercentileRange:
    """
    Compute two percentiles of a single-channel buffer.

    8-bit and 16-bit buffers use the exact histogram. 32-bit buffers use a
    256-bin uniform histogram from 0 (or the buffer minimum, if negative) to
    the largest finite sample and report bin lower edges.

    Args:
        img: Single-channel buffer
        low_pct: Lower percentile, 0 to 100
        high_pct: Upper percentile, 0 to 100

    Returns:
        PercentileRange, (nan, nan) if the buffer has no finite samples

    Raises:
        UnsupportedEncodingError: For multi-channel buffers or unsupported dtypes
    """
    encoding = require_single_channel(img, "percentile_range")

    if encoding in (Encoding.UINT8, Encoding.UINT16):
        counts = hist_int(img)
        return PercentileRange(float(find_percentile_index(counts, low_pct)),
                               float(find_percentile_index(counts, high_pct)))

    if encoding in (Encoding.INT32, Encoding.FLOAT32):
        min_val, max_val = compute_finite_min_max(img)
        if math.isnan(max_val):
            return PercentileRange(math.nan, math.nan)
        hist = hist_float(img, DEFAULT_FLOAT_BINS, min(0.0, min_val), max_val)
        return PercentileRange(float(hist.bins[find_percentile_index(hist.counts, low_pct)]),
                               float(hist.bins[find_percentile_index(hist.counts, high_pct)]))

    raise UnsupportedEncodingError(f"percentile_range: {encoding.label} buffers are not handled")
