# src/overconsumption/datasets.py
from __future__ import annotations

from typing import NamedTuple, Optional


class DatasetInfo(NamedTuple):
    """Where a dataset lives and how to read its fields."""
    filename: str
    delimiter: str
    date_field: str
    # Founding dates carry a company name instead of an observation value.
    value_field: Optional[str] = None
    decimal_comma: bool = False


SALES = "sales"
LOANS = "loans"
PERCENT = "percent"
FOUNDING = "founding"

DATASETS: dict[str, DatasetInfo] = {
    # US Census Bureau, e-commerce retail sales ($ millions)
    SALES: DatasetInfo(
        filename="retailSales.csv",
        delimiter=";",
        date_field="observation_date",
        value_field="ECOMSA",
    ),
    # Federal Reserve, consumer loans ($ billions); exported with decimal commas
    LOANS: DatasetInfo(
        filename="loans.csv",
        delimiter=";",
        date_field="observation_date",
        value_field="CCLACBW027SBOG",
        decimal_comma=True,
    ),
    # US Census Bureau, e-commerce share of total retail (%)
    PERCENT: DatasetInfo(
        filename="percentOfTotal.csv",
        delimiter=";",
        date_field="observation_date",
        value_field="ECOMPCTSA",
        decimal_comma=True,
    ),
    FOUNDING: DatasetInfo(
        filename="foundingDates.csv",
        delimiter=",",
        date_field="founded_date",
    ),
}


def list_datasets() -> list[str]:
    return list(DATASETS.keys())


def get_dataset_info(name: str) -> DatasetInfo:
    return DATASETS[name]
