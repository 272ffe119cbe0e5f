# src/overconsumption/store.py
from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from src.overconsumption.config import VizConfig
from src.overconsumption.datasets import (FOUNDING, LOANS, PERCENT, SALES,
                                          get_dataset_info, list_datasets)
from src.overconsumption.dsv import parse_delimited
from src.overconsumption.normalize import (FoundingRecord, NormalizedDataset,
                                           TimeSeriesPoint, normalize_dataset)

logger = logging.getLogger(__name__)

FetchText = Callable[[str], str]


class AssetFetcher:
    """
    Read dataset files from the base asset path.

    Local directories are read from disk; http(s) bases go through a
    requests Session. Retries default to 0 (a failed fetch is reported, not
    retried) but can be raised through VizConfig.max_retries.
    """

    def __init__(self, config: VizConfig):
        self.config = config
        self.session = self._create_session() if config.is_remote() else None

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        retries = Retry(
            total=self.config.max_retries,
            backoff_factor=0.5,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=frozenset(["GET"]),
        )
        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    def __call__(self, filename: str) -> str:
        location = self.config.asset_url(filename)
        if self.session is None:
            return location.read_text(encoding="utf-8")

        resp = self.session.get(location, timeout=self.config.request_timeout)
        resp.raise_for_status()
        return resp.text


@dataclass(frozen=True)
class LoadResult:
    """
    Outcome of loading all four datasets.

    A dataset that failed to load is an empty tuple with its message in
    `errors`; `skipped` counts rows dropped during normalization.
    """
    sales: Tuple[TimeSeriesPoint, ...] = ()
    loans: Tuple[TimeSeriesPoint, ...] = ()
    percent: Tuple[TimeSeriesPoint, ...] = ()
    founding: Tuple[FoundingRecord, ...] = ()
    errors: Dict[str, str] = field(default_factory=dict)
    skipped: Dict[str, int] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def has(self, name: str) -> bool:
        """True when the dataset loaded and holds at least one record."""
        return len(getattr(self, name)) > 0

    def counts(self) -> Dict[str, int]:
        return {name: len(getattr(self, name)) for name in list_datasets()}


def load_dataset(name: str, fetch: FetchText) -> NormalizedDataset:
    """Fetch, parse and normalize one dataset."""
    info = get_dataset_info(name)
    text = fetch(info.filename)
    records = parse_delimited(text, info.delimiter)
    return normalize_dataset(name, records)


def load_series(
    config: VizConfig,
    fetch: Optional[FetchText] = None,
) -> LoadResult:
    """
    Load all datasets concurrently and join the results.

    Each dataset is an independent task: a failure in one is logged and
    recorded in LoadResult.errors without affecting the others.
    """
    fetch = fetch or AssetFetcher(config)
    names = list_datasets()

    loaded: Dict[str, NormalizedDataset] = {}
    errors: Dict[str, str] = {}

    logger.info("[load] base=%s datasets=%s", config.asset_base, names)

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        futures = {executor.submit(load_dataset, name, fetch): name for name in names}
        for future in as_completed(futures):
            name = futures[future]
            try:
                dataset = future.result()
            except Exception as e:
                errors[name] = f"{type(e).__name__}: {e}"
                logger.exception("[load][FAIL] %s: %s", name, errors[name])
                continue

            loaded[name] = dataset
            logger.info("[load][OK] %s: %d records", name, len(dataset.records))

    if errors:
        logger.warning("[load] partial load: %d/%d datasets failed", len(errors), len(names))

    def records(name: str) -> tuple:
        return loaded[name].records if name in loaded else ()

    return LoadResult(
        sales=records(SALES),
        loans=records(LOANS),
        percent=records(PERCENT),
        founding=records(FOUNDING),
        errors=errors,
        skipped={name: ds.skipped for name, ds in loaded.items()},
    )


class SeriesStore:
    """
    Write-once holder for the loaded datasets.

    `ready` flips to True after the first load completes, whether or not
    every dataset succeeded. Later load() calls return the same result.
    """

    def __init__(self, config: VizConfig, fetch: Optional[FetchText] = None):
        self.config = config
        self._fetch = fetch
        self._result: Optional[LoadResult] = None
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self._result is not None

    @property
    def result(self) -> LoadResult:
        if self._result is None:
            raise RuntimeError("SeriesStore has not been loaded; call load() first")
        return self._result

    def load(self) -> LoadResult:
        with self._lock:
            if self._result is not None:
                logger.warning("[load] store already loaded, returning existing result")
                return self._result
            self._result = load_series(self.config, fetch=self._fetch)
        return self._result
