# src/overconsumption/annotations.py
from __future__ import annotations

from datetime import date
from typing import List, NamedTuple, Sequence, Tuple

from src.overconsumption.encoding import Overlay
from src.overconsumption.normalize import FoundingRecord
from src.overconsumption.scales import TimeScale


class EventMarker(NamedTuple):
    """Historical event drawn as a dashed guide on the percent chart."""
    date: date
    label: str
    # Label y in pixels relative to the top of the plot area (negative = above)
    vertical_offset: float


class Phase(NamedTuple):
    start_year: int
    end_year: int
    name: str


KEY_EVENTS: Tuple[EventMarker, ...] = (
    EventMarker(date(2005, 7, 15), "Amazon Prime Launch", -10),
    EventMarker(date(2007, 6, 29), "iPhone Launch", -30),
    EventMarker(date(2011, 10, 1), "Mobile Shopping Boom", -10),
    EventMarker(date(2020, 3, 11), "COVID-19 Pandemic", -30),
)

PHASES: Tuple[Phase, ...] = (
    Phase(1994, 2000, "Early Pioneers"),
    Phase(2000, 2007, "Growth Phase"),
    Phase(2007, 2015, "Mobile Revolution"),
    Phase(2015, 2025, "Ubiquitous Commerce"),
)

CATEGORY10: Tuple[str, ...] = (
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
)

EVENT_STROKE = "rgba(231, 76, 60, 0.5)"
FOUNDING_COLOR = "#8e44ad"

# Founding labels cycle through three heights so clustered dates stay legible
LABEL_BASE_OFFSET = -45.0
LABEL_STEP = 20.0
LABEL_LEVELS = 3

# Phase bands sit below the x axis
PHASE_BAND_GAP = 55.0
PHASE_BAND_HEIGHT = 24.0


def events_in_range(
    start: date,
    end: date,
    events: Sequence[EventMarker] = KEY_EVENTS,
) -> List[EventMarker]:
    """Events dated inside [start, end], both ends inclusive."""
    return [event for event in events if start <= event.date <= end]


def staggered_offset(
    index: int,
    base: float = LABEL_BASE_OFFSET,
    step: float = LABEL_STEP,
    levels: int = LABEL_LEVELS,
) -> float:
    return base - (index % levels) * step


def event_overlays(
    x_scale: TimeScale,
    inner_height: float,
    events: Sequence[EventMarker],
) -> List[Overlay]:
    overlays: List[Overlay] = []
    for event in events:
        x = x_scale(event.date)
        overlays.append(Overlay.guide_line(
            x, inner_height, x, 0.0,
            stroke=EVENT_STROKE, stroke_width=1, dash="3,3",
        ))
        overlays.append(Overlay.label(
            x, event.vertical_offset, event.label,
            anchor="middle", font_size=10, font_weight="bold",
        ))
    return overlays


def founding_overlays(
    x_scale: TimeScale,
    inner_height: float,
    founding: Sequence[FoundingRecord],
) -> List[Overlay]:
    """Full-height guide plus a staggered "<company> (<year>)" label per record."""
    lines: List[Overlay] = []
    labels: List[Overlay] = []
    for i, record in enumerate(founding):
        x = x_scale(record.founded_date)
        lines.append(Overlay.guide_line(
            x, 0.0, x, inner_height,
            stroke=FOUNDING_COLOR, stroke_width=2, dash="5,5",
        ))
        labels.append(Overlay.label(
            x, staggered_offset(i), f"{record.company} ({record.founded_date.year})",
            anchor="middle", font_size=12, font_weight="bold", color=FOUNDING_COLOR,
        ))
    return lines + labels


def phase_overlays(
    x_scale: TimeScale,
    inner_height: float,
    phases: Sequence[Phase] = PHASES,
) -> List[Overlay]:
    """
    Era bands spanning [Jan 1 start_year, Jan 1 end_year].

    Bands ignore the data extent: a phase outside the x domain is still
    emitted, positioned beyond the plot edges.
    """
    top = inner_height + PHASE_BAND_GAP
    bands: List[Overlay] = []
    labels: List[Overlay] = []
    for i, phase in enumerate(phases):
        x0 = x_scale(date(phase.start_year, 1, 1))
        x1 = x_scale(date(phase.end_year, 1, 1))
        bands.append(Overlay.band(
            x0, top, x1, top + PHASE_BAND_HEIGHT,
            fill=CATEGORY10[i % len(CATEGORY10)], opacity=0.7,
        ))
        labels.append(Overlay.label(
            x0 + (x1 - x0) / 2, top + PHASE_BAND_HEIGHT / 2, phase.name,
            anchor="middle", font_size=11, font_weight="bold", color="white",
        ))
    return bands + labels
