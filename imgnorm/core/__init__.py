"""Core statistics, histogram and normalization functionality."""

from imgnorm.core.encoding import Encoding, encoding_of, channel_count
from imgnorm.core.errors import (
    ImageNormError,
    UnsupportedEncodingError,
    UnsupportedConversionError,
    InvalidArgumentError,
    InternalInconsistencyError,
)
from imgnorm.core.stats import (
    BufferStats,
    compute_finite_min_max,
    compute_min_max,
    compute_stats,
    profile,
)
from imgnorm.core.histogram import Histogram, hist_int, hist_float
from imgnorm.core.percentile import PercentileRange, find_percentile_index, percentile_range
from imgnorm.core.image_processing import rescale_to_byte_range, normalize_image, image_to_rgb
from imgnorm.core.conversion import (
    ConversionPolicy,
    ConversionStep,
    FormatFamily,
    DEFAULT_POLICY,
    plan_conversion,
    prepare_for_output_format,
    convert_after_load,
    normalize_ext,
)

__all__ = [
    "Encoding",
    "encoding_of",
    "channel_count",
    "ImageNormError",
    "UnsupportedEncodingError",
    "UnsupportedConversionError",
    "InvalidArgumentError",
    "InternalInconsistencyError",
    "BufferStats",
    "compute_finite_min_max",
    "compute_min_max",
    "compute_stats",
    "profile",
    "Histogram",
    "hist_int",
    "hist_float",
    "PercentileRange",
    "find_percentile_index",
    "percentile_range",
    "rescale_to_byte_range",
    "normalize_image",
    "image_to_rgb",
    "ConversionPolicy",
    "ConversionStep",
    "FormatFamily",
    "DEFAULT_POLICY",
    "plan_conversion",
    "prepare_for_output_format",
    "convert_after_load",
    "normalize_ext",
]
