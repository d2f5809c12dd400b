"""Exact integer histograms and uniform float histograms."""

from dataclasses import dataclass, field
from typing import Optional
import math
import numpy as np

from imgnorm.core.encoding import Encoding, require_single_channel
from imgnorm.core.errors import InvalidArgumentError, UnsupportedEncodingError
from imgnorm.core.stats import compute_finite_min_max

# Fraction of a bin added past max_val so a sample equal to max_val is counted.
UPPER_BOUND_MARGIN = 0.1

DEFAULT_FLOAT_BINS = 256


@dataclass(frozen=True, eq=False)
class Histogram:
    """Uniform histogram identified by bin lower edges.

    ``min_val``/``max_val`` are the range the histogram was computed over,
    after defaults were resolved (NaN when unresolvable).
    """
    bins: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))
    counts: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.int64))
    min_val: float = math.nan
    max_val: float = math.nan

    def __len__(self) -> int:
        return len(self.counts)

    @property
    def is_empty(self) -> bool:
        return len(self.counts) == 0

    @property
    def total(self) -> int:
        return int(self.counts.sum())


def hist_int(img: np.ndarray, shift: int = 0) -> np.ndarray:
    """
    Exact histogram of an 8-bit or 16-bit buffer.

    Bin width is a power of two given by a bit shift, so sample ``v`` is
    counted in slot ``v >> shift``.

    Args:
        img: Single-channel UINT8 or UINT16 buffer
        shift: Bit-shift divisor for bin width (default 0, one bin per value)

    Returns:
        int64 counts array of length ``256 >> shift`` or ``65536 >> shift``

    Raises:
        UnsupportedEncodingError: For other encodings or multi-channel buffers
        InvalidArgumentError: If shift is outside [0, bit depth)
    """
    encoding = require_single_channel(img, "hist_int")
    if encoding not in (Encoding.UINT8, Encoding.UINT16):
        raise UnsupportedEncodingError(
            f"hist_int: {encoding.label} buffers are not handled"
        )
    if not 0 <= shift < encoding.bit_depth:
        raise InvalidArgumentError(
            f"hist_int: shift must be in [0, {encoding.bit_depth - 1}], got {shift}"
        )

    slot_count = (1 << encoding.bit_depth) >> shift
    values = img.ravel()
    if shift:
        values = values >> shift
    return np.bincount(values, minlength=slot_count).astype(np.int64)


def hist_float(img: np.ndarray, bin_count: int = DEFAULT_FLOAT_BINS,
               min_val: Optional[float] = None,
               max_val: Optional[float] = None) -> Histogram:
    """
    Uniform histogram of any supported buffer, using float bins.

    If ``max_val <= min_val``, or a bound is infinite, the bin count is
    ignored and a single bin at ``min_val`` with count 0 is returned. If the
    maximum cannot be resolved (no finite samples) the histogram is empty.

    Args:
        img: Single-channel buffer of any supported encoding
        bin_count: Number of bins
        min_val: Bottom of the first bin. None or NaN means 0.
        max_val: Top of the last bin. None or NaN means the largest finite sample.

    Returns:
        Histogram with bin lower edges and counts

    Raises:
        InvalidArgumentError: If bin_count is not positive
    """
    require_single_channel(img, "hist_float")
    if bin_count <= 0:
        raise InvalidArgumentError(f"hist_float: bin_count must be positive, got {bin_count}")

    if min_val is None or math.isnan(min_val):
        min_val = 0.0
    if max_val is None or math.isnan(max_val):
        max_val = compute_finite_min_max(img)[1]
    min_val = float(min_val)
    max_val = float(max_val)

    # no finite samples
    if math.isnan(max_val):
        return Histogram(min_val=min_val, max_val=max_val)

    if max_val <= min_val or not math.isfinite(max_val - min_val):
        return Histogram(
            bins=np.array([min_val], dtype=np.float64),
            counts=np.zeros(1, dtype=np.int64),
            min_val=min_val,
            max_val=max_val,
        )

    bin_size = (max_val - min_val) / bin_count
    bins = min_val + np.arange(bin_count, dtype=np.float64) * bin_size

    # upper bound is exclusive but max_val may be the buffer maximum
    upper = max_val + UPPER_BOUND_MARGIN * bin_size

    values = img.ravel().astype(np.float64)
    values = values[(values >= min_val) & (values < upper)]
    indices = np.floor((values - min_val) / bin_size).astype(np.int64)
    np.clip(indices, 0, bin_count - 1, out=indices)
    counts = np.bincount(indices, minlength=bin_count).astype(np.int64)

    return Histogram(bins=bins, counts=counts, min_val=min_val, max_val=max_val)
