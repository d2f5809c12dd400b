"""Shared pytest fixtures for imgnorm tests."""

import pytest
import numpy as np
from pathlib import Path
import tempfile


# =============================================================================
# Image Fixtures
# =============================================================================

@pytest.fixture
def sample_grayscale_image():
    """Generate a 256x256 16-bit test image with realistic detector values."""
    np.random.seed(42)
    return np.random.randint(20000, 45000, (256, 256), dtype=np.uint16)


@pytest.fixture
def sample_uint8_image():
    """Generate a 64x64 8-bit test image."""
    np.random.seed(7)
    return np.random.randint(0, 256, (64, 64), dtype=np.uint8)


@pytest.fixture
def sample_float_image():
    """Generate a 64x64 float image in [0, 1) with a few NaN samples."""
    np.random.seed(3)
    img = np.random.rand(64, 64).astype(np.float32)
    img[0, 0] = np.nan
    img[10, 20] = np.nan
    return img


@pytest.fixture
def sample_int32_image():
    """Generate a 32x32 signed 32-bit image spanning negative and positive values."""
    np.random.seed(5)
    return np.random.randint(-5000, 100000, (32, 32), dtype=np.int32)


@pytest.fixture
def all_nan_image():
    """Float image where every sample is NaN."""
    return np.full((8, 8), np.nan, dtype=np.float32)


@pytest.fixture
def ramp_image():
    """16-bit ramp from 0 to 1000, one sample per value."""
    return np.arange(1001, dtype=np.uint16).reshape(1, 1001)


@pytest.fixture
def sample_bgr_image(sample_uint8_image):
    """Generate a 3-channel 8-bit image."""
    gray = sample_uint8_image
    return np.stack([gray, gray // 2, 255 - gray], axis=-1)


@pytest.fixture
def sample_bgra_image(sample_bgr_image):
    """Generate a 4-channel 8-bit image with opaque alpha."""
    alpha = np.full(sample_bgr_image.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([sample_bgr_image, alpha], axis=-1)


# =============================================================================
# File System Fixtures
# =============================================================================

@pytest.fixture
def temp_output_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_image_file(temp_output_dir, sample_grayscale_image):
    """Write the 16-bit test image to a PNG file."""
    import cv2
    img_path = temp_output_dir / "test_image.png"
    cv2.imwrite(str(img_path), sample_grayscale_image)
    return img_path


@pytest.fixture
def temp_mrc_file(temp_output_dir):
    """Create a small float32 MRC volume."""
    import mrcfile
    mrc_path = temp_output_dir / "volume.mrc"
    data = np.arange(2 * 16 * 16, dtype=np.float32).reshape(2, 16, 16)
    with mrcfile.new(str(mrc_path)) as mrc:
        mrc.set_data(data)
    return mrc_path


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return {
        'percentiles': {
            'low': 5,
            'high': 95,
        },
        'formats': {
            'wide': ['tif', 'tiff', 'exr'],
        },
    }


@pytest.fixture
def temp_config_file(temp_output_dir, sample_config):
    """Create a temporary config YAML file."""
    import yaml
    config_path = temp_output_dir / "config.yaml"
    with open(config_path, 'w') as f:
        yaml.dump(sample_config, f)
    return config_path


# =============================================================================
# Skip Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "benchmark: mark test as a performance benchmark"
    )
