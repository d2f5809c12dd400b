"""Pixel encodings supported by the statistics and normalization core.

A buffer is a numpy array of shape ``(height, width)`` or
``(height, width, channels)``; its dtype selects the encoding.
"""

from enum import Enum
from typing import Tuple
import numpy as np

from imgnorm.core.errors import UnsupportedEncodingError


class Encoding(Enum):
    """Numeric representation of a single pixel sample."""

    UINT8 = "8U"
    UINT16 = "16U"
    INT32 = "32S"
    FLOAT32 = "32F"

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(_DTYPES[self])

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_integer(self) -> bool:
        return self is not Encoding.FLOAT32

    @property
    def is_float(self) -> bool:
        return self is Encoding.FLOAT32

    @property
    def bit_depth(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def value_range(self) -> Tuple[float, float]:
        """Smallest and largest representable sample value."""
        if self.is_float:
            info = np.finfo(self.dtype)
        else:
            info = np.iinfo(self.dtype)
        return float(info.min), float(info.max)

    @classmethod
    def from_dtype(cls, dtype) -> "Encoding":
        """Map a numpy dtype onto an encoding.

        Raises:
            UnsupportedEncodingError: If the dtype is not one of the four
                supported encodings.
        """
        # byte order does not change the encoding, e.g. big-endian MRC data
        dtype = np.dtype(dtype).newbyteorder('=')
        for encoding, supported in _DTYPES.items():
            if dtype == supported:
                return encoding
        raise UnsupportedEncodingError(f"Unsupported pixel dtype: {dtype}")


_DTYPES = {
    Encoding.UINT8: np.uint8,
    Encoding.UINT16: np.uint16,
    Encoding.INT32: np.int32,
    Encoding.FLOAT32: np.float32,
}


def encoding_of(img: np.ndarray) -> Encoding:
    """Get the encoding of a buffer."""
    return Encoding.from_dtype(img.dtype)


def channel_count(img: np.ndarray) -> int:
    """Get the number of channels of a 2D or 3D buffer."""
    if img.ndim == 2:
        return 1
    if img.ndim == 3:
        return img.shape[2]
    raise UnsupportedEncodingError(
        f"Expected a 2D or 3D buffer, got ndim={img.ndim}"
    )


def require_single_channel(img: np.ndarray, operation: str) -> Encoding:
    """Check that a buffer is single-channel and return its encoding.

    Args:
        img: Buffer to check
        operation: Name of the calling operation, used in the error message

    Returns:
        The buffer's encoding

    Raises:
        UnsupportedEncodingError: For multi-channel buffers or unsupported dtypes
    """
    encoding = encoding_of(img)
    channels = channel_count(img)
    if channels != 1:
        raise UnsupportedEncodingError(
            f"{operation}: expected a single-channel buffer, got {channels} channels"
        )
    return encoding
