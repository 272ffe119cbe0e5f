# file: src/overconsumption/scales.py
"""
Scales, extents and axis ticks.

A scale maps a data domain (dates or numbers) to a pixel range. Ticks use
the usual 1/2/5 x 10^k "nice" increments so axes read naturally.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Tuple, TypeVar

import numpy as np
import pandas as pd

T = TypeVar("T")

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

TICK_FORMATS = ("year", "number", "percent")


def extent(values: Iterable[T]) -> Tuple[T, T]:
    """[min, max] of a non-empty sequence of comparable values."""
    items = list(values)
    if not items:
        raise ValueError("Cannot compute the extent of an empty sequence")
    return min(items), max(items)


def shift_years(value: date, years: int) -> date:
    """Calendar-year shift (Feb 29 lands on Feb 28 in non-leap years)."""
    return (pd.Timestamp(value) + pd.DateOffset(years=years)).date()


def tick_step(start: float, stop: float, count: int = 10) -> float:
    """Nice tick increment giving roughly `count` ticks over [start, stop]."""
    raw = abs(stop - start) / max(count, 1)
    if raw == 0 or not math.isfinite(raw):
        return 0.0
    power = math.floor(math.log10(raw))
    error = raw / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    return factor * 10.0 ** power


def linear_ticks(start: float, stop: float, count: int = 10) -> List[float]:
    lo, hi = min(start, stop), max(start, stop)
    step = tick_step(lo, hi, count)
    if step == 0:
        return [float(lo)]
    i0 = math.ceil(lo / step - 1e-9)
    i1 = math.floor(hi / step + 1e-9)
    return (np.arange(i0, i1 + 1) * step).round(12).tolist()


def year_ticks(start: date, end: date, count: int = 10) -> List[date]:
    """January 1st of evenly spaced years inside [start, end]."""
    start, end = min(start, end), max(start, end)
    span = end.year - start.year
    step = max(1, int(tick_step(0, span, count))) if span else 1

    first = start.year if (start.month, start.day) == (1, 1) else start.year + 1
    first += -first % step
    ticks = [date(year, 1, 1) for year in range(first, end.year + 1, step)]
    # Spans shorter than a year may not contain a January 1st
    return ticks or [start, end]


def _decimals(step: float) -> int:
    if step <= 0:
        return 0
    return max(0, -math.floor(math.log10(step)))


def format_tick(kind: str, value, step: float = 1.0) -> str:
    """
    Format one tick label.

    kind:
        year    -> "2015"
        number  -> "1,250" (precision follows the tick step)
        percent -> "12.5%"
    """
    if kind == "year":
        return value.strftime("%Y")
    decimals = _decimals(step)
    if kind == "number":
        return f"{value:,.{decimals}f}"
    if kind == "percent":
        return f"{value:.{decimals}f}%"
    raise ValueError(f"Unknown tick format: {kind}. Available: {TICK_FORMATS}")


@dataclass(frozen=True)
class LinearScale:
    domain: Tuple[float, float]
    range: Tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        t = (value - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def ticks(self, count: int = 10) -> List[float]:
        return linear_ticks(self.domain[0], self.domain[1], count)

    def step(self, count: int = 10) -> float:
        return tick_step(self.domain[0], self.domain[1], count)


@dataclass(frozen=True)
class TimeScale:
    domain: Tuple[date, date]
    range: Tuple[float, float]

    def __call__(self, value: date) -> float:
        d0, d1 = (d.toordinal() for d in self.domain)
        r0, r1 = self.range
        span = d1 - d0
        t = (value.toordinal() - d0) / span if span else 0.5
        return r0 + t * (r1 - r0)

    def ticks(self, count: int = 10) -> List[date]:
        return year_ticks(self.domain[0], self.domain[1], count)


def headroom_domain(values: Iterable[float], headroom: float = 1.1) -> Tuple[float, float]:
    """[0, headroom * max(values)] value domain."""
    return 0.0, headroom * max(values)
