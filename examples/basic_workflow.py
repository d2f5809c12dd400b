#!/usr/bin/env python3
"""
Example workflow: Load -> Analyze -> Convert

This script demonstrates how to use the imgnorm package programmatically
to compute statistics and percentile ranges for a folder of images and
save 8-bit previews of them.
"""

from pathlib import Path

from imgnorm.config import load_config
from imgnorm.core import compute_stats, hist_float, percentile_range
from imgnorm.core.image_loader import get_image_files, load_image
from imgnorm.core.logging_utils import get_logger
from imgnorm.io import build_report, save_image, save_report


def main():
    """Run complete analysis workflow."""

    # Configuration
    image_folder = Path("data/images")
    cfg = load_config()
    output_folder = Path(cfg.get('output.folder'))
    low_pct, high_pct = cfg.percentiles()
    policy = cfg.conversion_policy()

    logger = get_logger()
    logger.header("imgnorm Workflow")

    files = get_image_files(image_folder, cfg.get('image.extensions'))
    for i, path in enumerate(files, start=1):
        logger.progress(i, len(files), path.name)

        img = load_image(path)
        if img is None:
            continue

        # Step 1: Statistics and percentile range
        stats = compute_stats(img)
        value_range = None
        hist = None
        if stats.channels == 1:
            value_range = percentile_range(img, low_pct, high_pct)
            hist = hist_float(img, cfg.get('histogram.float_bin_count'))
        report = build_report(path.name, stats, {'low': low_pct, 'high': high_pct},
                              value_range, hist)
        save_report(report, output_folder / f"{path.stem}_stats.json")

        # Step 2: 8-bit preview
        was_changed = save_image(img, output_folder / f"{path.stem}.png",
                                 policy=policy, percentiles=(low_pct, high_pct))
        logger.success(f"{path.name} ({stats.encoding.label}, "
                       f"{'rescaled' if was_changed else 'unchanged'})", indent=2)

    logger.separator()
    logger.success("Workflow complete!")


if __name__ == "__main__":
    main()
