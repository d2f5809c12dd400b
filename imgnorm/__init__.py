"""
imgnorm

Image statistics, histograms, percentile ranges and 8-bit normalization
for 8-bit, 16-bit, 32-bit integer and float raster buffers.
"""

__version__ = "0.1.0"
__author__ = "imgnorm Contributors"

__all__ = [
    "compute_min_max",
    "compute_stats",
    "hist_int",
    "hist_float",
    "percentile_range",
    "rescale_to_byte_range",
    "prepare_for_output_format",
    "load_image",
]

_CORE_NAMES = {
    "compute_min_max",
    "compute_stats",
    "hist_int",
    "hist_float",
    "percentile_range",
    "rescale_to_byte_range",
    "prepare_for_output_format",
}


def __getattr__(name):
    """Lazy import for heavy modules to speed up CLI startup."""
    if name in _CORE_NAMES:
        import imgnorm.core
        return getattr(imgnorm.core, name)
    elif name == "load_image":
        from imgnorm.core.image_loader import load_image
        return load_image
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
