# file: src/overconsumption/normalize.py
"""
Typed projection of parsed records.

Each dataset becomes either a sequence of TimeSeriesPoint (sales, loans,
percent) or FoundingRecord (founding dates). Rows that cannot be typed are
dropped and counted rather than passed through as NaN.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd

from src.overconsumption.datasets import FOUNDING, DatasetInfo, get_dataset_info
from src.overconsumption.dsv import RawRecord

logger = logging.getLogger(__name__)

# "1.234,56": dot-grouped thousands ahead of a decimal comma
THOUSANDS_GROUPED = r"[-+]?\d{1,3}(?:\.\d{3})+,\d+"


@dataclass(frozen=True)
class TimeSeriesPoint:
    date: date
    value: float


@dataclass(frozen=True)
class FoundingRecord:
    company: str
    founded_date: date


Record = Union[TimeSeriesPoint, FoundingRecord]


@dataclass(frozen=True)
class NormalizedDataset:
    """Typed records for one dataset plus how many input rows were dropped."""
    name: str
    records: Tuple[Record, ...]
    skipped: int = 0


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse ISO-like date strings to timezone-naive timestamps (NaT on failure)."""
    parsed = pd.to_datetime(values, errors="coerce", utc=True, format="ISO8601")
    return parsed.dt.tz_localize(None)


def parse_decimal_comma(values: pd.Series) -> pd.Series:
    """
    Convert numeric strings that may use a decimal comma.

    "12,5" -> 12.5 and "1.234,56" -> 1234.56. Dots are only stripped when
    they group thousands ahead of the decimal comma; anything else just has
    its comma swapped for a point, so "1,234.5" becomes NaN and is dropped.
    """
    text = values.astype(str).str.strip()
    grouped = text.str.fullmatch(THOUSANDS_GROUPED)
    swapped = text.str.replace(",", ".", n=1, regex=False)
    ungrouped = text.str.replace(".", "", regex=False).str.replace(",", ".", n=1, regex=False)
    return pd.to_numeric(swapped.where(~grouped, ungrouped), errors="coerce")


def parse_plain_number(values: pd.Series) -> pd.Series:
    return pd.to_numeric(values.astype(str).str.strip(), errors="coerce")


def _to_frame(records: Sequence[RawRecord], required: Sequence[str], name: str) -> pd.DataFrame:
    frame = pd.DataFrame.from_records(list(records))
    missing = [col for col in required if col not in frame.columns]
    if missing:
        raise ValueError(
            f"[normalize] {name}: missing required columns {missing}, "
            f"got {frame.columns.tolist()}"
        )
    return frame


def _report_skipped(name: str, total: int, kept: int) -> int:
    skipped = total - kept
    if skipped:
        logger.warning("[normalize] %s: dropped %d of %d rows (unparseable)", name, skipped, total)
    return skipped


def normalize_observations(
    records: Sequence[RawRecord],
    info: DatasetInfo,
    name: str,
) -> NormalizedDataset:
    """
    Project observation rows to TimeSeriesPoint.

    Steps:
    1. Parse the date field
    2. Parse the value field (decimal-comma aware when the dataset needs it)
    3. Drop rows with an invalid date or a non-finite value
    """
    if info.value_field is None:
        raise ValueError(f"[normalize] {name}: dataset has no value field")
    if not records:
        return NormalizedDataset(name=name, records=())

    frame = _to_frame(records, [info.date_field, info.value_field], name)

    dates = parse_dates(frame[info.date_field])
    raw_values = frame[info.value_field]
    values = parse_decimal_comma(raw_values) if info.decimal_comma else parse_plain_number(raw_values)

    valid = dates.notna() & np.isfinite(values.astype(float))
    points = tuple(
        TimeSeriesPoint(date=ts.date(), value=float(v))
        for ts, v in zip(dates[valid], values[valid])
    )

    skipped = _report_skipped(name, len(frame), len(points))
    return NormalizedDataset(name=name, records=points, skipped=skipped)


def normalize_founding(records: Sequence[RawRecord], name: str = FOUNDING) -> NormalizedDataset:
    """Project founding rows to FoundingRecord, dropping blank companies and bad dates."""
    info = get_dataset_info(FOUNDING)
    if not records:
        return NormalizedDataset(name=name, records=())

    frame = _to_frame(records, ["company", info.date_field], name)

    dates = parse_dates(frame[info.date_field])
    companies = frame["company"].astype(str)

    valid = dates.notna() & (companies.str.strip() != "")
    founding = tuple(
        FoundingRecord(company=company, founded_date=ts.date())
        for company, ts in zip(companies[valid], dates[valid])
    )

    skipped = _report_skipped(name, len(frame), len(founding))
    return NormalizedDataset(name=name, records=founding, skipped=skipped)


def normalize_dataset(name: str, records: Sequence[RawRecord]) -> NormalizedDataset:
    """Dispatch to the projection rule registered for the dataset."""
    if name == FOUNDING:
        return normalize_founding(records, name=name)
    return normalize_observations(records, get_dataset_info(name), name)


def to_frame(points: Sequence[TimeSeriesPoint]) -> pd.DataFrame:
    """Tidy [ds, y] frame for inspection and export."""
    return pd.DataFrame({
        "ds": pd.to_datetime([p.date for p in points]),
        "y": [p.value for p in points],
    })
