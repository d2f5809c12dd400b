"""Histogram plotting with matplotlib."""

from pathlib import Path
from typing import Optional

from matplotlib.figure import Figure

from imgnorm.core.histogram import Histogram
from imgnorm.core.percentile import PercentileRange


def save_histogram_plot(hist: Histogram, output_path: Path,
                        value_range: Optional[PercentileRange] = None,
                        title: Optional[str] = None,
                        figsize: tuple = (8.0, 4.0), dpi: int = 100) -> Path:
    """
    Render a histogram as a bar plot and save it.

    Uses the object-oriented Figure API so no GUI backend is needed.

    Args:
        hist: Histogram to plot
        output_path: Image file to write (format from extension)
        value_range: Optional percentile range drawn as vertical lines
        title: Optional plot title
        figsize: Figure size in inches
        dpi: Output resolution

    Returns:
        The output path
    """
    fig = Figure(figsize=figsize, dpi=dpi)
    ax = fig.add_subplot(1, 1, 1)

    if hist.is_empty:
        ax.text(0.5, 0.5, "no valid samples", ha='center', va='center',
                transform=ax.transAxes)
    else:
        if len(hist) > 1:
            width = float(hist.bins[1] - hist.bins[0])
        else:
            width = 1.0
        ax.bar(hist.bins, hist.counts, width=width, align='edge', color='0.3')

    if value_range is not None:
        for value in value_range:
            ax.axvline(value, color='tab:red', linestyle='--', linewidth=1)

    ax.set_xlabel("value")
    ax.set_ylabel("count")
    if title:
        ax.set_title(title)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(output_path))
    return output_path
