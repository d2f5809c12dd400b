"""Image processing utilities for rescaling to 8-bit."""

from typing import Optional, Tuple
import math
import numpy as np

from imgnorm.core.encoding import Encoding, channel_count, encoding_of
from imgnorm.core.errors import InvalidArgumentError, UnsupportedEncodingError
from imgnorm.core.percentile import percentile_range
from imgnorm.core.stats import compute_finite_min_max


def rescale_to_byte_range(img: np.ndarray, low_val: float = 0.0, high_val: float = 0.0,
                          dst: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Linearly map a value range onto 0-255 uint8.

    ``low_val`` is pinned to 0 and ``high_val`` to 255; values outside the
    range saturate. NaN samples become 0.

    Args:
        img: Input buffer (any supported encoding)
        low_val: Value mapped to 0. If high_val <= low_val the range is
            treated as unset and the finite min/max of the buffer is used.
        high_val: Value mapped to 255
        dst: Optional uint8 output buffer with the same shape as img

    Returns:
        Rescaled uint8 buffer (dst if given)
    """
    encoding_of(img)
    if dst is not None and (dst.dtype != np.uint8 or dst.shape != img.shape):
        raise InvalidArgumentError(
            f"dst must be uint8 with shape {img.shape}, got {dst.dtype} {dst.shape}"
        )
    if dst is None:
        dst = np.empty(img.shape, dtype=np.uint8)

    if not high_val > low_val:
        # range not specified so use min/max
        low_val, high_val = compute_finite_min_max(img)

    if not high_val > low_val:
        # constant or no valid samples
        dst[...] = 0
        return dst

    scale = 255.0 / (high_val - low_val)
    offset = -scale * low_val

    scaled = img.astype(np.float64) * scale + offset
    np.nan_to_num(scaled, copy=False, nan=0.0)
    np.rint(scaled, out=scaled)
    np.clip(scaled, 0, 255, out=scaled)
    dst[...] = scaled.astype(np.uint8)
    return dst


def normalize_image(img: np.ndarray, percentile: Tuple[float, float] = (1, 99)) -> np.ndarray:
    """
    Normalize image to 0-255 uint8 using percentile-based scaling.

    More robust to outliers than min-max normalization.

    Args:
        img: Single-channel input image
        percentile: Percentiles for scaling (default: (1, 99))

    Returns:
        Normalized image (uint8, 0-255)
    """
    p_low, p_high = percentile_range(img, percentile[0], percentile[1])
    if math.isnan(p_low) or math.isnan(p_high):
        return np.zeros(img.shape, dtype=np.uint8)
    return rescale_to_byte_range(img, p_low, p_high)


def image_to_rgb(img8u: np.ndarray) -> np.ndarray:
    """
    Replicate an 8-bit single-channel image into interleaved RGB.

    Args:
        img8u: uint8 image of shape (h, w)

    Returns:
        uint8 image of shape (h, w, 3)
    """
    if encoding_of(img8u) is not Encoding.UINT8 or channel_count(img8u) != 1:
        raise UnsupportedEncodingError("image_to_rgb expects a single-channel uint8 image")
    gray = img8u.reshape(img8u.shape[:2])
    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)
