"""Conversion of buffers before saving to, or after loading from, a file format.

Not every output format can hold every encoding, so a buffer may need to be
rescaled, cast, or have its channel layout changed first. Formats are
identified by their file extension, with or without the period.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Tuple
import cv2
import numpy as np

from imgnorm.core.encoding import Encoding, channel_count, encoding_of
from imgnorm.core.errors import UnsupportedConversionError
from imgnorm.core.image_processing import image_to_rgb, rescale_to_byte_range
from imgnorm.core.logging_utils import get_logger
from imgnorm.core.percentile import percentile_range

DEFAULT_PERCENTILES = (1.0, 99.0)


class FormatFamily(Enum):
    """Groups of output formats sharing the same encoding constraints."""

    WIDE = "wide"            # lossless, holds 16-bit and float data
    RGB_ONLY = "rgb_only"    # needs 3-channel 8-bit
    GRAY_ONLY = "gray_only"  # needs 1-channel 8-bit
    GENERIC = "generic"


class ConversionStep(Enum):
    """Single operation planned by the conversion policy."""

    RESCALE_TO_BYTE = "rescale_to_byte"
    CAST_TO_FLOAT32 = "cast_to_float32"
    GRAY_TO_BGR = "gray_to_bgr"
    BGRA_TO_BGR = "bgra_to_bgr"
    COLOR_TO_GRAY = "color_to_gray"


def normalize_ext(ext: str) -> str:
    """Lower-case a file extension and strip the leading period."""
    return ext.strip().lstrip('.').lower()


def _ext_set(exts: Iterable[str]) -> FrozenSet[str]:
    return frozenset(normalize_ext(e) for e in exts)


@dataclass(frozen=True)
class ConversionPolicy:
    """Extensions belonging to each constrained format family.

    Extensions not listed in any family are generic formats.
    """
    wide: FrozenSet[str] = field(default_factory=lambda: frozenset({'tif', 'tiff'}))
    rgb_only: FrozenSet[str] = field(default_factory=lambda: frozenset({'ppm'}))
    gray_only: FrozenSet[str] = field(default_factory=lambda: frozenset({'pbm', 'pgm'}))

    @classmethod
    def from_lists(cls, wide: Iterable[str], rgb_only: Iterable[str],
                   gray_only: Iterable[str]) -> "ConversionPolicy":
        return cls(wide=_ext_set(wide), rgb_only=_ext_set(rgb_only),
                   gray_only=_ext_set(gray_only))

    def family_of(self, ext: str) -> FormatFamily:
        ext = normalize_ext(ext)
        if ext in self.wide:
            return FormatFamily.WIDE
        if ext in self.rgb_only:
            return FormatFamily.RGB_ONLY
        if ext in self.gray_only:
            return FormatFamily.GRAY_ONLY
        return FormatFamily.GENERIC


DEFAULT_POLICY = ConversionPolicy()


def plan_conversion(encoding: Encoding, channels: int,
                    family: FormatFamily) -> Tuple[ConversionStep, ...]:
    """
    Decide which steps a buffer needs before it can be saved.

    Single-channel 16-bit, 32-bit integer and float buffers are rescaled to
    8-bit for every non-wide family; 32-bit integer buffers are cast to float
    for wide formats. Layout rules of the RGB-only and gray-only families are
    then applied to the (possibly rescaled) buffer.

    Args:
        encoding: Encoding of the buffer
        channels: Number of channels of the buffer
        family: Target format family

    Returns:
        Steps in execution order, empty for a no-op

    Raises:
        UnsupportedConversionError: If the family cannot take the buffer
    """
    steps = []

    if channels == 1 and encoding is not Encoding.UINT8:
        if family is FormatFamily.WIDE:
            if encoding is Encoding.INT32:
                return (ConversionStep.CAST_TO_FLOAT32,)
            return ()
        steps.append(ConversionStep.RESCALE_TO_BYTE)
        encoding = Encoding.UINT8

    if family is FormatFamily.RGB_ONLY:
        if encoding is not Encoding.UINT8:
            raise UnsupportedConversionError(
                f"Unhandled {encoding.label} buffer with {channels} channels for {family.value} output"
            )
        if channels == 1:
            steps.append(ConversionStep.GRAY_TO_BGR)
        elif channels == 4:
            steps.append(ConversionStep.BGRA_TO_BGR)
        elif channels != 3:
            raise UnsupportedConversionError(
                f"Unhandled {channels}-channel buffer for {family.value} output"
            )
    elif family is FormatFamily.GRAY_ONLY:
        if encoding is not Encoding.UINT8:
            raise UnsupportedConversionError(
                f"Unhandled {encoding.label} buffer with {channels} channels for {family.value} output"
            )
        if channels in (3, 4):
            steps.append(ConversionStep.COLOR_TO_GRAY)
        elif channels != 1:
            raise UnsupportedConversionError(
                f"Unhandled {channels}-channel buffer for {family.value} output"
            )

    return tuple(steps)


def _apply_step(img: np.ndarray, step: ConversionStep,
                percentiles: Tuple[float, float]) -> np.ndarray:
    if step is ConversionStep.RESCALE_TO_BYTE:
        low_val, high_val = percentile_range(img, percentiles[0], percentiles[1])
        return rescale_to_byte_range(img, low_val, high_val)
    if step is ConversionStep.CAST_TO_FLOAT32:
        return img.astype(np.float32)
    if step is ConversionStep.GRAY_TO_BGR:
        return image_to_rgb(img)
    if step is ConversionStep.BGRA_TO_BGR:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR)
    if step is ConversionStep.COLOR_TO_GRAY:
        code = cv2.COLOR_BGRA2GRAY if channel_count(img) == 4 else cv2.COLOR_BGR2GRAY
        return cv2.cvtColor(img, code)
    raise UnsupportedConversionError(f"Unknown conversion step: {step}")


def prepare_for_output_format(img: np.ndarray, target_format: str,
                              policy: Optional[ConversionPolicy] = None,
                              percentiles: Tuple[float, float] = DEFAULT_PERCENTILES
                              ) -> Tuple[np.ndarray, bool]:
    """
    Convert a buffer so it can be saved in the given format.

    Args:
        img: Buffer to convert
        target_format: Output file extension, with or without the period
        policy: Format families to use (default: DEFAULT_POLICY)
        percentiles: Percentile range used when rescaling to 8-bit

    Returns:
        Tuple of (converted buffer, was_changed). When nothing needs to be
        done the input buffer itself is returned with was_changed False.

    Raises:
        UnsupportedEncodingError: If the buffer dtype is not supported
        UnsupportedConversionError: If the format cannot take the buffer
    """
    policy = policy or DEFAULT_POLICY
    encoding = encoding_of(img)
    channels = channel_count(img)
    family = policy.family_of(target_format)

    steps = plan_conversion(encoding, channels, family)
    if not steps:
        return img, False

    logger = get_logger()
    logger.debug(
        f"{encoding.label}x{channels} -> {normalize_ext(target_format)} ({family.value}): "
        + ", ".join(step.value for step in steps)
    )

    dst = img
    for step in steps:
        dst = _apply_step(dst, step, percentiles)
    return dst, True


def convert_after_load(img: np.ndarray, source_format: str) -> Tuple[np.ndarray, bool]:
    """
    Fix up channel order of an image just loaded from the given format.

    TIFF color images come in swapped, and alpha is dropped.

    Args:
        img: Loaded image
        source_format: Extension of the file it came from

    Returns:
        Tuple of (image, was_changed)
    """
    if normalize_ext(source_format) not in ('tif', 'tiff'):
        return img, False
    if img.dtype != np.uint8 or img.ndim != 3:
        return img, False

    channels = channel_count(img)
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGB), True
    if channels == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2BGR), True
    return img, False
