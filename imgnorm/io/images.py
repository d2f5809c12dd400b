"""Saving images in formats that may not hold their native encoding."""

from pathlib import Path
from typing import Optional, Tuple
import cv2
import numpy as np

from imgnorm.core.conversion import ConversionPolicy, DEFAULT_PERCENTILES, prepare_for_output_format


def save_image(img: np.ndarray, output_path: Path,
               policy: Optional[ConversionPolicy] = None,
               percentiles: Tuple[float, float] = DEFAULT_PERCENTILES) -> bool:
    """
    Convert an image for its output format and write it.

    Args:
        img: Image to save
        output_path: Destination file; the extension selects the format
        policy: Format families to use
        percentiles: Percentile range used when rescaling to 8-bit

    Returns:
        True if the image had to be converted before writing

    Raises:
        OSError: If OpenCV could not write the file
    """
    converted, was_changed = prepare_for_output_format(
        img, output_path.suffix, policy=policy, percentiles=percentiles
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        written = cv2.imwrite(str(output_path), converted)
    except cv2.error as e:
        raise OSError(f"Could not write image {output_path}: {e}") from e
    if not written:
        raise OSError(f"Could not write image: {output_path}")
    return was_changed
