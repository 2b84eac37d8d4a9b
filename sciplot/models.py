"""
Value types shared by the parser, the chart and the app.

Everything here is immutable. A new upload or a config edit produces a
new value; nothing is patched in place.
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple


class DataPoint(NamedTuple):
    x: float
    y: float


DataSeries = Tuple[DataPoint, ...]


@dataclass(frozen=True)
class DataStats:
    count: int
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    mean_y: float
    std_y: float

    @classmethod
    def empty(cls) -> "DataStats":
        return cls(count=0, min_x=0.0, max_x=0.0, min_y=0.0, max_y=0.0, mean_y=0.0, std_y=0.0)


@dataclass(frozen=True)
class AxisRange:
    """Axis bounds; ``None`` leaves that end of the axis on autoscale."""
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def is_set(self) -> bool:
        return self.min is not None or self.max is not None


@dataclass(frozen=True)
class PlotConfig:
    title: str = "Data Visualization"
    x_label: str = "X-Axis"
    y_label: str = "Y-Axis"
    x_range: AxisRange = field(default_factory=AxisRange)
    y_range: AxisRange = field(default_factory=AxisRange)

    @property
    def is_zoomed(self) -> bool:
        return self.x_range.is_set
