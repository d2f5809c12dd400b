"""Statistics report handling utilities."""

from pathlib import Path
from typing import Dict, Optional
import json
import math
from datetime import datetime

from imgnorm.core.histogram import Histogram
from imgnorm.core.percentile import PercentileRange
from imgnorm.core.stats import BufferStats
from imgnorm.core.logging_utils import get_logger


def _finite_or_none(value: float) -> Optional[float]:
    return None if math.isnan(value) else value


def build_report(image_name: str, stats: BufferStats,
                 percentiles: Optional[Dict[str, float]] = None,
                 value_range: Optional[PercentileRange] = None,
                 histogram: Optional[Histogram] = None) -> Dict:
    """
    Assemble a JSON-serializable report for one image.

    Args:
        image_name: Name of the analyzed image
        stats: Statistics of the image
        percentiles: The requested percentiles, e.g. {'low': 1, 'high': 99}
        value_range: Values found at those percentiles
        histogram: Optional float histogram to include

    Returns:
        Report dictionary
    """
    report = {
        'image_name': image_name,
        'created': datetime.now().isoformat(timespec='seconds'),
        'stats': stats.to_dict(),
    }

    if value_range is not None:
        report['percentile_range'] = {
            'percentiles': dict(percentiles or {}),
            'low': _finite_or_none(value_range.low),
            'high': _finite_or_none(value_range.high),
        }

    if histogram is not None:
        report['histogram'] = {
            'min_val': _finite_or_none(histogram.min_val),
            'max_val': _finite_or_none(histogram.max_val),
            'bins': [float(b) for b in histogram.bins],
            'counts': [int(c) for c in histogram.counts],
        }

    return report


def save_report(report: Dict, output_path: Path) -> None:
    """
    Save report to JSON file.

    Args:
        report: Report dictionary to save
        output_path: Path to output JSON file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2, ensure_ascii=False)


def load_report(report_path: Path) -> Optional[Dict]:
    """
    Load report from JSON file.

    Args:
        report_path: Path to report JSON file

    Returns:
        Loaded report dictionary, or None if loading failed
    """
    if not report_path.exists():
        return None

    try:
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        get_logger().error(f"Error loading report from {report_path}: {e}")
        return None
