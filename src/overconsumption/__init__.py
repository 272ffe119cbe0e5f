"""
E-commerce Overconsumption Charts

Step-by-step pipeline:
1. dsv - Parse comma/semicolon delimited text into records
2. normalize - Typed TimeSeriesPoint / FoundingRecord projection
3. store - Concurrent load of the four datasets into a LoadResult
4. charts - Growth, percent and timeline chart encodings
5. render - Draw an encoding with Plotly

Usage (Python):
    from src.overconsumption import load_config, SeriesStore, encode_all
    result = SeriesStore(load_config()).load()
    encodings = encode_all(result)

Usage (Dashboard):
    streamlit run src/overconsumption/dashboard.py
"""

from .charts import compose_chart, encode_all, encode_growth, encode_percent, encode_timeline
from .config import VizConfig, load_config
from .dsv import parse_delimited
from .normalize import FoundingRecord, TimeSeriesPoint, normalize_dataset
from .store import LoadResult, SeriesStore, load_series

__all__ = [
    "VizConfig",
    "load_config",
    "parse_delimited",
    "TimeSeriesPoint",
    "FoundingRecord",
    "normalize_dataset",
    "LoadResult",
    "SeriesStore",
    "load_series",
    "compose_chart",
    "encode_growth",
    "encode_percent",
    "encode_timeline",
    "encode_all",
]
