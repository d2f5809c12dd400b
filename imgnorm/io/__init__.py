"""I/O utilities for reports, plots and converted images."""

from imgnorm.io.report import (
    build_report,
    save_report,
    load_report,
)
from imgnorm.io.plot import save_histogram_plot
from imgnorm.io.images import save_image

__all__ = [
    "build_report",
    "save_report",
    "load_report",
    "save_histogram_plot",
    "save_image",
]
