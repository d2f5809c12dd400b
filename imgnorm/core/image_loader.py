"""Image loading utilities."""

from pathlib import Path
from typing import List, Optional
import numpy as np
import cv2
import mrcfile

from imgnorm.core.conversion import convert_after_load
from imgnorm.core.logging_utils import get_logger

# Supported image extensions
IMAGE_EXTENSIONS = {'.mrc', '.tif', '.tiff', '.png', '.jpg', '.jpeg',
                    '.bmp', '.ppm', '.pgm', '.pbm'}


def load_image(file_path: Path) -> Optional[np.ndarray]:
    """
    Load an image keeping its native encoding and channels.

    MRC files are read with mrcfile (first slice of a volume), everything
    else with OpenCV. TIFF color images have their channel order fixed.

    Args:
        file_path: Path to the image file

    Returns:
        Loaded image as numpy array, or None if loading failed
    """
    logger = get_logger()
    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        return None

    if file_path.suffix.lower() == '.mrc':
        try:
            with mrcfile.open(file_path, mode='r', permissive=True) as mrc:
                data = np.asarray(mrc.data)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading MRC file {file_path}: {e}")
            return None
        if data is None or data.size == 0:
            logger.error(f"MRC file has no data: {file_path}")
            return None
        # Handle 3D volumes
        if data.ndim == 3:
            data = data[0]
        # OpenCV only accepts native byte order
        return np.ascontiguousarray(data, dtype=data.dtype.newbyteorder('='))

    img = cv2.imread(str(file_path), cv2.IMREAD_UNCHANGED)
    if img is None:
        logger.error(f"Error reading image file: {file_path}")
        return None

    img, _ = convert_after_load(img, file_path.suffix)
    return img


def get_image_files(folder: Path, extensions: Optional[set] = None) -> List[Path]:
    """
    Get all image files from folder, excluding hidden files.

    Args:
        folder: Directory to search for image files
        extensions: Set of file extensions to search for (default: IMAGE_EXTENSIONS)

    Returns:
        Sorted list of image file paths
    """
    if extensions is None:
        extensions = IMAGE_EXTENSIONS
    extensions = {e.lower() for e in extensions}

    files = []
    for item in folder.iterdir():
        # Skip hidden files and directories
        if item.name.startswith('.'):
            continue
        if item.is_file() and item.suffix.lower() in extensions:
            files.append(item)

    return sorted(files)
