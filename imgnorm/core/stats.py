"""Descriptive statistics over single-channel buffers."""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple
import math
import numpy as np

from imgnorm.core.encoding import Encoding, channel_count, encoding_of, require_single_channel
from imgnorm.core.errors import InternalInconsistencyError
from imgnorm.core.logging_utils import get_logger


@dataclass(frozen=True)
class BufferStats:
    """Statistics of a buffer.

    For multi-channel buffers only encoding, size and channel count are
    populated. ``nonzero_count`` is only meaningful for integer encodings.
    """
    encoding: Encoding
    width: int
    height: int
    channels: int = 1
    nonzero_count: int = 0
    sum: float = 0.0
    min_val: float = math.nan
    max_val: float = math.nan

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary (NaN becomes None)."""
        data = asdict(self)
        data['encoding'] = self.encoding.label
        for key in ('sum', 'min_val', 'max_val'):
            if math.isnan(data[key]):
                data[key] = None
        return data


def compute_min_max(img: np.ndarray) -> Tuple[float, float]:
    """
    Find min and max of a single-channel buffer, ignoring NaN samples.

    The bulk reduction is tried first. If it reports NaN, float buffers are
    scanned row by row for valid samples before concluding there are none.

    Args:
        img: Single-channel buffer of any supported encoding

    Returns:
        Tuple of (min, max) as floats, (nan, nan) if there are no valid samples

    Raises:
        InternalInconsistencyError: If the reduction gives NaN on an integer buffer
    """
    encoding = require_single_channel(img, "compute_min_max")
    if img.size == 0:
        return math.nan, math.nan

    low_val = float(img.min())
    high_val = float(img.max())

    if math.isnan(low_val) or math.isnan(high_val):
        if not encoding.is_float:
            raise InternalInconsistencyError(
                f"min/max reduction gave NaN on a {encoding.label} buffer"
            )
        get_logger().debug("min/max reduction gave NaN, scanning for valid samples")
        low_val, high_val = _scan_min_max(img)

    return low_val, high_val


def _scan_min_max(img: np.ndarray) -> Tuple[float, float]:
    low_val = math.inf
    high_val = -math.inf

    for row in np.asarray(img):
        valid = row[~np.isnan(row)]
        if valid.size:
            low_val = min(low_val, float(valid.min()))
            high_val = max(high_val, float(valid.max()))

    # all NaN
    if high_val < low_val:
        return math.nan, math.nan
    return low_val, high_val


def compute_finite_min_max(img: np.ndarray) -> Tuple[float, float]:
    """
    Find min and max of a single-channel buffer over its finite samples.

    Infinite samples are skipped along with NaN, so the result can be used
    as a value range. Integer buffers give the same result as compute_min_max.

    Returns:
        Tuple of (min, max) as floats, (nan, nan) if there are no finite samples
    """
    encoding = require_single_channel(img, "compute_finite_min_max")
    if not encoding.is_float:
        return compute_min_max(img)

    data = np.asarray(img)
    finite = data[np.isfinite(data)]
    if finite.size == 0:
        return math.nan, math.nan
    return float(finite.min()), float(finite.max())


def compute_stats(img: np.ndarray) -> BufferStats:
    """
    Compute basic statistics on a buffer.

    Multi-channel buffers are not analyzed; the returned record only carries
    their encoding and size.

    Args:
        img: Buffer of any supported encoding

    Returns:
        BufferStats record
    """
    encoding = encoding_of(img)
    channels = channel_count(img)
    height, width = img.shape[:2]

    if channels != 1:
        return BufferStats(encoding=encoding, width=width, height=height,
                           channels=channels)

    if img.size == 0:
        return BufferStats(encoding=encoding, width=width, height=height)

    nonzero_count = int(np.count_nonzero(img)) if encoding.is_integer else 0
    total = float(np.sum(img, dtype=np.float64))
    min_val, max_val = compute_min_max(img)

    return BufferStats(
        encoding=encoding,
        width=width,
        height=height,
        nonzero_count=nonzero_count,
        sum=total,
        min_val=min_val,
        max_val=max_val,
    )


def profile(img: np.ndarray, vertical: bool = True) -> np.ndarray:
    """
    Sum a single-channel buffer along rows or columns.

    Args:
        img: Single-channel buffer
        vertical: If True, sum each column (length = width), otherwise
            sum each row (length = height)

    Returns:
        float32 array of sums
    """
    require_single_channel(img, "profile")
    axis = 0 if vertical else 1
    return np.sum(img, axis=axis, dtype=np.float64).astype(np.float32)
