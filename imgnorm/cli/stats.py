"""CLI for image statistics."""

import sys
import click
from pathlib import Path
from typing import Optional

from imgnorm.config import load_config
from imgnorm.core.logging_utils import get_logger


@click.command()
@click.argument('image', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--low', type=float, default=None,
              help='Lower percentile for the value range (default from config: 1)')
@click.option('--high', type=float, default=None,
              help='Upper percentile for the value range (default from config: 99)')
@click.option('--bins', type=int, default=None,
              help='Number of bins of the float histogram (default from config: 256)')
@click.option('--json', 'json_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Save a JSON report to this file')
@click.option('--plot', 'plot_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Save a histogram plot to this file')
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
@click.option('--quiet', '-q', is_flag=True, help='Only print errors and results')
@click.option('--debug', is_flag=True, help='Print diagnostic messages')
def main(image: Path, low: Optional[float], high: Optional[float], bins: Optional[int],
         json_path: Optional[Path], plot_path: Optional[Path], config: Optional[Path],
         quiet: bool, debug: bool):
    """
    Print statistics and a percentile value range of an image.

    Single-channel images also get a uniform float histogram, which can be
    saved in a JSON report (--json) or plotted (--plot). Multi-channel images
    only report their encoding and size.
    """
    cfg = load_config(config)
    logger = get_logger(verbose=not quiet)
    logger.set_debug(debug)

    low_pct, high_pct = cfg.percentiles()
    low_pct = low if low is not None else low_pct
    high_pct = high if high is not None else high_pct
    bin_count = bins if bins is not None else int(cfg.get('histogram.float_bin_count', 256))
    shift = int(cfg.get('histogram.int_bin_shift', 0))

    # Lazy import to speed up CLI startup
    from imgnorm.core import (
        Encoding,
        ImageNormError,
        compute_stats,
        hist_float,
        hist_int,
        percentile_range,
    )
    from imgnorm.core.image_loader import load_image
    from imgnorm.io.report import build_report, save_report

    img = load_image(image)
    if img is None:
        sys.exit(1)

    value_range = None
    hist = None
    exact_counts = None
    try:
        stats = compute_stats(img)
        if stats.channels == 1:
            value_range = percentile_range(img, low_pct, high_pct)
            hist = hist_float(img, bin_count)
            if stats.encoding in (Encoding.UINT8, Encoding.UINT16):
                exact_counts = hist_int(img, shift)
    except ImageNormError as e:
        logger.error(f"{image.name}: {e}")
        sys.exit(1)

    logger.header(image.name)
    click.echo(f"encoding: {stats.encoding.label}")
    click.echo(f"size: {stats.width}x{stats.height}, channels: {stats.channels}")
    if stats.channels == 1:
        click.echo(f"min: {stats.min_val:g}  max: {stats.max_val:g}")
        click.echo(f"sum: {stats.sum:g}")
        if stats.encoding.is_integer:
            click.echo(f"nonzero: {stats.nonzero_count}")
        click.echo(f"p{low_pct:g}: {value_range.low:g}  p{high_pct:g}: {value_range.high:g}")
        if exact_counts is not None:
            logger.info(f"occupied bins: {int((exact_counts > 0).sum())} of {len(exact_counts)}")
    else:
        logger.info("Multi-channel image: statistics not computed")

    if json_path:
        report = build_report(
            image_name=image.name,
            stats=stats,
            percentiles={'low': low_pct, 'high': high_pct},
            value_range=value_range,
            histogram=hist,
        )
        save_report(report, json_path)
        logger.success(f"Report saved: {json_path}")

    if plot_path:
        if hist is None:
            logger.warning("No histogram for multi-channel image, plot skipped")
        else:
            from imgnorm.io.plot import save_histogram_plot
            save_histogram_plot(hist, plot_path, value_range=value_range, title=image.name)
            logger.success(f"Plot saved: {plot_path}")


if __name__ == '__main__':
    main()
