# file: src/overconsumption/encoding.py
"""
Declarative chart encoding.

Everything a renderer needs to draw a chart without knowing what the data
means: frame and margins, domains, axis ticks in pixels, path geometry and
overlay primitives. Coordinates are pixels inside the plot area (origin at
the top-left corner of the inner frame, y growing downwards).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Mapping, NamedTuple, Optional, Sequence, Tuple

from src.overconsumption.normalize import TimeSeriesPoint

OVERLAY_KINDS = ("guide-line", "banded-rect", "text-label")
GEOMETRY_KINDS = ("line", "area")
AXIS_ORIENTS = ("bottom", "left", "right")


class Margin(NamedTuple):
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class ChartFrame:
    key: str
    title: str
    width: float
    height: float
    margin: Margin
    subtitle: Optional[str] = None
    note: Optional[str] = None
    # Canvas y (from the top edge) of the title, subtitle and note baselines
    title_y: float = 25.0
    subtitle_y: float = 55.0
    note_y: Optional[float] = None

    @property
    def inner_width(self) -> float:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> float:
        return self.height - self.margin.top - self.margin.bottom


@dataclass(frozen=True)
class SeriesLayer:
    """One series drawn as a line and/or area against a named y scale."""
    name: str
    points: Sequence[TimeSeriesPoint]
    scale: str = "y"
    geometries: Tuple[str, ...] = ("line",)
    stroke: str = "#2980b9"
    stroke_width: float = 3.0
    fill: Optional[str] = None


@dataclass(frozen=True)
class AxisSpec:
    orient: str
    scale: str
    label: str
    tick_format: str = "number"


@dataclass(frozen=True)
class Tick:
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    orient: str
    label: str
    tick_format: str
    ticks: Tuple[Tick, ...]
    # Pixel offset of the axis line across its direction (x for left/right, y for bottom)
    offset: float = 0.0


@dataclass(frozen=True)
class PathGeometry:
    series: str
    kind: str
    d: str
    points: Tuple[Tuple[float, float], ...]
    stroke: Optional[str] = None
    stroke_width: float = 0.0
    fill: Optional[str] = None


@dataclass(frozen=True)
class Overlay:
    """
    A drawing primitive tagged with its behaviour.

    guide-line:  segment (x0, y0) -> (x1, y1)
    banded-rect: rectangle with corners (x0, y0) and (x1, y1)
    text-label:  `text` anchored at (x0, y0)
    """
    kind: str
    x0: float
    y0: float
    x1: Optional[float] = None
    y1: Optional[float] = None
    text: Optional[str] = None
    style: Mapping[str, object] = field(default_factory=dict)

    @classmethod
    def guide_line(cls, x0: float, y0: float, x1: float, y1: float, **style) -> "Overlay":
        return cls("guide-line", x0, y0, x1, y1, style=style)

    @classmethod
    def band(cls, x0: float, y0: float, x1: float, y1: float, **style) -> "Overlay":
        return cls("banded-rect", x0, y0, x1, y1, style=style)

    @classmethod
    def label(cls, x: float, y: float, text: str, **style) -> "Overlay":
        return cls("text-label", x, y, text=text, style=style)


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str


@dataclass(frozen=True)
class ChartEncoding:
    frame: ChartFrame
    x_domain: Tuple[date, date]
    y_domains: Dict[str, Tuple[float, float]]
    axes: Tuple[Axis, ...]
    paths: Tuple[PathGeometry, ...]
    overlays: Tuple[Overlay, ...] = ()
    legend: Tuple[LegendEntry, ...] = ()

    def axis(self, orient: str) -> Axis:
        for axis in self.axes:
            if axis.orient == orient:
                return axis
        raise KeyError(f"No {orient} axis in chart {self.frame.key}")

    def overlays_of(self, kind: str) -> Tuple[Overlay, ...]:
        return tuple(o for o in self.overlays if o.kind == kind)
