"""
Page state as an immutable value plus a reducer.

The Streamlit script keeps exactly one ``AppState`` in ``st.session_state``
and replaces it with ``reduce(state, event)`` on every user action.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from .data_utils import calculate_stats
from .models import AxisRange, DataSeries, DataStats, PlotConfig

NO_VALID_DATA = "No valid data points found. Ensure file is CSV or space/tab separated."
PARSE_ERROR = "Error parsing file. Please check the format."


@dataclass(frozen=True)
class AppState:
    pending: DataSeries = ()
    data: DataSeries = ()
    config: PlotConfig = field(default_factory=PlotConfig)
    error: Optional[str] = None
    analysis: Optional[str] = None

    @property
    def can_plot(self) -> bool:
        return len(self.pending) > 0

    @property
    def has_data(self) -> bool:
        return len(self.data) > 0


# ================== EVENTS ==================
@dataclass(frozen=True)
class FileParsed:
    series: DataSeries


@dataclass(frozen=True)
class FileFailed:
    pass


@dataclass(frozen=True)
class PlotRequested:
    pass


@dataclass(frozen=True)
class ConfigChanged:
    config: PlotConfig


@dataclass(frozen=True)
class ZoomApplied:
    left: float
    right: float


@dataclass(frozen=True)
class ZoomReset:
    pass


@dataclass(frozen=True)
class AnalysisReceived:
    text: str


Event = Union[FileParsed, FileFailed, PlotRequested, ConfigChanged, ZoomApplied, ZoomReset, AnalysisReceived]


# ================== REDUCER ==================
def reduce(state: AppState, event: Event) -> AppState:
    if isinstance(event, FileParsed):
        if not event.series:
            return replace(state, pending=(), error=NO_VALID_DATA)
        return replace(state, pending=tuple(event.series), error=None)

    if isinstance(event, FileFailed):
        return replace(state, pending=(), error=PARSE_ERROR)

    if isinstance(event, PlotRequested):
        if not state.pending:
            return state
        config = replace(state.config, x_range=AxisRange(), y_range=AxisRange())
        return replace(state, data=state.pending, config=config, analysis=None)

    if isinstance(event, ConfigChanged):
        return replace(state, config=event.config)

    if isinstance(event, ZoomApplied):
        if event.left == event.right:
            return state
        lo, hi = sorted((float(event.left), float(event.right)))
        return replace(state, config=replace(state.config, x_range=AxisRange(lo, hi)))

    if isinstance(event, ZoomReset):
        return replace(state, config=replace(state.config, x_range=AxisRange(), y_range=AxisRange()))

    if isinstance(event, AnalysisReceived):
        return replace(state, analysis=event.text)

    raise TypeError(f"Unknown event: {event!r}")


def stats(state: AppState) -> DataStats:
    return calculate_stats(state.data)


def parse_bound(text) -> Optional[float]:
    """Text box value -> axis bound. Blank or non-numeric means unset."""
    if text is None:
        return None
    s = str(text).strip()
    if not s:
        return None
    try:
        value = float(s)
    except ValueError:
        return None
    return value if math.isfinite(value) else None
