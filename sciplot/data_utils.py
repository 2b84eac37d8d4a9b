"""
Parsing, statistics and downsampling for two-column numeric data.

The three core functions are pure: they never mutate their input and
always return fresh tuples / dataclasses, so the Streamlit reruns can
call them freely.
"""

import logging
import math
import re
from typing import Iterable

import numpy as np
import pandas as pd

from .config import DEFAULT_MAX_POINTS
from .errors import ConfigurationError, ParseFailure
from .models import DataPoint, DataSeries, DataStats

logger = logging.getLogger(__name__)

_DELIMITERS = re.compile(r"[, \t]+")
# Plain decimal or scientific notation only; float() alone would also
# take "inf", "nan", "1_000" and non-ASCII digits.
_NUMBER = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


# ================== DECODING ==================
def decode_upload(raw: bytes) -> str:
    """Decode uploaded bytes as UTF-8 (BOM tolerated).

    Raises ``ParseFailure`` for anything that is not readable text.
    """
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseFailure(f"File is not valid UTF-8 text: {e.reason}", {"position": e.start}) from e
    if "\x00" in text:
        raise ParseFailure("File looks like binary data")
    return text


# ================== PARSER ==================
def _to_number(token: str):
    if not _NUMBER.fullmatch(token):
        return None
    value = float(token)
    return value if math.isfinite(value) else None


def parse_file_content(content: str) -> DataSeries:
    """Turn ``x y`` / ``x,y`` / ``x<TAB>y`` lines into data points.

    Lines without two leading numbers are skipped; extra columns are
    ignored. An empty result is valid, the caller decides if that is an
    error.
    """
    points = []
    skipped = 0
    for line in content.strip().split("\n"):
        parts = _DELIMITERS.split(line.strip())
        if len(parts) >= 2:
            x, y = _to_number(parts[0]), _to_number(parts[1])
            if x is not None and y is not None:
                points.append(DataPoint(x, y))
                continue
        skipped += 1
    if skipped:
        logger.debug("Skipped %d line(s) without two numeric columns", skipped)
    return tuple(points)


# ================== STATISTICS ==================
def calculate_stats(series: DataSeries) -> DataStats:
    if not series:
        return DataStats.empty()

    xs = np.fromiter((p.x for p in series), dtype=float, count=len(series))
    ys = np.fromiter((p.y for p in series), dtype=float, count=len(series))
    min_y, max_y = float(ys.min()), float(ys.max())
    # Population std (ddof=0): divide by N, not N - 1.
    std_y = float(np.std(ys, ddof=0))
    # Summation rounding can push the mean a ULP outside the data range.
    mean_y = min(max(float(ys.mean()), min_y), max_y)

    return DataStats(
        count=len(series),
        min_x=float(xs.min()),
        max_x=float(xs.max()),
        min_y=min_y,
        max_y=max_y,
        mean_y=mean_y,
        std_y=std_y,
    )


# ================== DOWNSAMPLING ==================
def downsample_data(series: DataSeries, max_points: int = DEFAULT_MAX_POINTS) -> DataSeries:
    """Keep every ``ceil(n / max_points)``-th point, starting at index 0."""
    if max_points <= 0:
        raise ConfigurationError(f"max_points must be positive, got {max_points!r}", setting="max_points")
    if len(series) <= max_points:
        return series
    stride = math.ceil(len(series) / max_points)
    return tuple(series[::stride])


# ================== HELPERS ==================
def series_to_frame(series: Iterable[DataPoint], x_label: str = "x", y_label: str = "y") -> pd.DataFrame:
    if x_label == y_label:
        y_label = f"{y_label} (y)"
    rows = list(series)
    return pd.DataFrame(rows, columns=[x_label, y_label]) if rows else pd.DataFrame(columns=[x_label, y_label])


def format_series(series: Iterable[DataPoint]) -> str:
    """One ``x,y`` line per point, using repr so floats survive a re-parse."""
    return "\n".join(f"{p.x!r},{p.y!r}" for p in series)
