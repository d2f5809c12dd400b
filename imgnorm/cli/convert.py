"""CLI for converting images to formats that cannot hold their encoding."""

import sys
import click
from pathlib import Path
from typing import Optional

from imgnorm.config import load_config
from imgnorm.core.logging_utils import get_logger


@click.command()
@click.argument('input_path', metavar='INPUT',
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('output_path', metavar='OUTPUT',
                type=click.Path(dir_okay=False, path_type=Path))
@click.option('--config', type=click.Path(exists=True, path_type=Path),
              help='Path to config file')
@click.option('--quiet', '-q', is_flag=True, help='Only print errors')
@click.option('--debug', is_flag=True, help='Print diagnostic messages')
def main(input_path: Path, output_path: Path, config: Optional[Path],
         quiet: bool, debug: bool):
    """
    Save INPUT as OUTPUT, converting it for the output format.

    16-bit, 32-bit integer and float images are rescaled to 8-bit using a
    percentile range unless the output format can hold them (TIFF).
    PPM output is made 3-channel and PBM/PGM output 1-channel.
    """
    cfg = load_config(config)
    logger = get_logger(verbose=not quiet)
    logger.set_debug(debug)

    # Lazy import to speed up CLI startup
    from imgnorm.core import ImageNormError, encoding_of
    from imgnorm.core.image_loader import load_image
    from imgnorm.io.images import save_image

    img = load_image(input_path)
    if img is None:
        sys.exit(1)

    try:
        was_changed = save_image(
            img,
            output_path,
            policy=cfg.conversion_policy(),
            percentiles=cfg.percentiles(),
        )
    except (ImageNormError, OSError) as e:
        logger.error(f"{input_path.name}: {e}")
        sys.exit(1)

    if was_changed:
        logger.success(f"Converted {encoding_of(img).label} image and saved: {output_path}")
    else:
        logger.success(f"Saved: {output_path}")


if __name__ == '__main__':
    main()
