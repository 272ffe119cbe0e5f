"""Shared fixtures for the overconsumption tests."""

from datetime import date
from pathlib import Path

import pytest

from src.overconsumption.config import VizConfig
from src.overconsumption.normalize import FoundingRecord, TimeSeriesPoint

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_config() -> VizConfig:
    """Config pointing at the bundled sample CSVs."""
    return VizConfig(asset_base=str(FIXTURES_DIR))


@pytest.fixture
def sales():
    return [
        TimeSeriesPoint(date(2010, 1, 1), 100.0),
        TimeSeriesPoint(date(2015, 1, 1), 250.0),
        TimeSeriesPoint(date(2020, 1, 1), 400.0),
    ]


@pytest.fixture
def loans():
    return [
        TimeSeriesPoint(date(2010, 1, 1), 50.0),
        TimeSeriesPoint(date(2020, 1, 1), 90.0),
    ]


@pytest.fixture
def founding():
    return [
        FoundingRecord("A", date(1994, 1, 1)),
        FoundingRecord("B", date(1995, 1, 1)),
        FoundingRecord("C", date(1996, 1, 1)),
        FoundingRecord("D", date(1997, 1, 1)),
    ]
