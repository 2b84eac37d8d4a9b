import io
import re

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .config import FIG_H, FIG_W, LINE_COLOR, MARKER_THRESHOLD
from .models import AxisRange, DataSeries, PlotConfig


def _pinned(rng: AxisRange, low: str, high: str) -> dict:
    """Only pin the bounds the user actually set; the rest autoscale."""
    kwargs = {}
    if rng.min is not None:
        kwargs[low] = rng.min
    if rng.max is not None:
        kwargs[high] = rng.max
    return kwargs


def render_chart(series: DataSeries, config: PlotConfig, *, figsize=(FIG_W, FIG_H)):
    """Line chart of the full series with the labels/ranges from ``config``."""
    fig, ax = plt.subplots(figsize=figsize)
    xs = [p.x for p in series]
    ys = [p.y for p in series]
    marker = "o" if len(series) < MARKER_THRESHOLD else None
    ax.plot(xs, ys, color=LINE_COLOR, linewidth=2, marker=marker, markersize=3)

    ax.set_title(config.title, fontsize=12, pad=8)
    ax.set_xlabel(config.x_label, fontweight="bold")
    ax.set_ylabel(config.y_label, fontweight="bold")
    ax.grid(True, linestyle="--", color="#e5e7eb")

    xlim = _pinned(config.x_range, "left", "right")
    if xlim:
        ax.set_xlim(**xlim)
    ylim = _pinned(config.y_range, "bottom", "top")
    if ylim:
        ax.set_ylim(**ylim)
    fig.tight_layout()
    return fig


def figure_to_png(fig, *, dpi: int = 150) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, facecolor="white")
    return buf.getvalue()


def export_filename(title: str) -> str:
    return re.sub(r"\s+", "_", title) + "_plot.png"
