"""
Series repository tests.

Tests:
- Loading the bundled sample files from a local asset directory
- Per-dataset failure isolation (partial load)
- Write-once store semantics
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
import requests

from src.overconsumption.config import VizConfig
from src.overconsumption.store import AssetFetcher, LoadResult, SeriesStore, load_series

SAMPLE_FILES = {
    "retailSales.csv": "observation_date;ECOMSA\n2010-01-01;100\n2020-01-01;400\n",
    "loans.csv": "observation_date;CCLACBW027SBOG\n2010-01-01;50,0\n2020-01-01;90,0\n",
    "percentOfTotal.csv": "observation_date;ECOMPCTSA\n2010-01-01;4,2\n",
    "foundingDates.csv": "company,founded_date\nAmazon,1994-07-05\n",
}


def fake_fetch(files=SAMPLE_FILES, fail=()):
    def fetch(filename: str) -> str:
        if filename in fail:
            raise requests.ConnectionError(f"cannot reach {filename}")
        return files[filename]
    return fetch


@pytest.mark.smoke
class TestLoadFromDisk:
    """Sample CSVs under tests/overconsumption/fixtures"""

    def test_all_datasets_load(self, fixtures_config):
        result = load_series(fixtures_config)

        assert result.ok
        assert result.counts() == {"sales": 6, "loans": 5, "percent": 5, "founding": 5}

    def test_skipped_rows_reported(self, fixtures_config):
        result = load_series(fixtures_config)

        assert result.skipped["loans"] == 1
        assert result.skipped["sales"] == 0

    def test_loans_decimal_comma_from_file(self, fixtures_config):
        result = load_series(fixtures_config)

        assert result.loans[0].value == pytest.approx(548.2)
        assert result.loans[3].value == pytest.approx(1266.7)

    def test_missing_directory_is_reported(self, tmp_path):
        result = load_series(VizConfig(asset_base=str(tmp_path / "nowhere")))

        assert set(result.errors) == {"sales", "loans", "percent", "founding"}
        assert result.counts() == {"sales": 0, "loans": 0, "percent": 0, "founding": 0}


class TestLoadSeries:
    def test_typed_results(self):
        result = load_series(VizConfig(), fetch=fake_fetch())

        assert result.sales[1].date == date(2020, 1, 1)
        assert result.sales[1].value == 400.0
        assert result.loans[1].value == pytest.approx(90.0)
        assert result.founding[0].company == "Amazon"

    @pytest.mark.fail_loud
    def test_partial_failure_isolated(self):
        result = load_series(VizConfig(), fetch=fake_fetch(fail={"loans.csv"}))

        assert not result.ok
        assert list(result.errors) == ["loans"]
        assert "ConnectionError" in result.errors["loans"]
        assert result.loans == ()
        assert result.has("sales")
        assert result.has("percent")
        assert result.has("founding")

    @pytest.mark.fail_loud
    def test_unexpected_error_isolated(self):
        """A bytes payload blows up in the parser; the other datasets still load"""
        files = dict(SAMPLE_FILES, **{"loans.csv": b"observation_date;CCLACBW027SBOG\n"})
        result = load_series(VizConfig(), fetch=fake_fetch(files))

        assert list(result.errors) == ["loans"]
        assert result.errors["loans"].startswith("TypeError")
        assert result.counts() == {"sales": 2, "loans": 0, "percent": 1, "founding": 1}

    @pytest.mark.fail_loud
    def test_normalization_failure_isolated(self):
        files = dict(SAMPLE_FILES, **{"percentOfTotal.csv": "date;other\n2020-01-01;1\n"})
        result = load_series(VizConfig(), fetch=fake_fetch(files))

        assert list(result.errors) == ["percent"]
        assert result.has("sales")

    def test_empty_dataset_is_not_an_error(self):
        files = dict(SAMPLE_FILES, **{"retailSales.csv": "observation_date;ECOMSA\n"})
        result = load_series(VizConfig(), fetch=fake_fetch(files))

        assert result.ok
        assert not result.has("sales")


class TestSeriesStore:
    def test_not_ready_before_load(self):
        store = SeriesStore(VizConfig(), fetch=fake_fetch())

        assert store.ready is False
        with pytest.raises(RuntimeError):
            _ = store.result

    def test_ready_after_load_even_with_failures(self):
        store = SeriesStore(VizConfig(), fetch=fake_fetch(fail=set(SAMPLE_FILES)))
        result = store.load()

        assert store.ready is True
        assert len(result.errors) == 4

    def test_load_happens_once(self):
        fetch = MagicMock(side_effect=fake_fetch())
        store = SeriesStore(VizConfig(), fetch=fetch)

        first = store.load()
        second = store.load()

        assert first is second
        assert fetch.call_count == 4


class TestAssetFetcher:
    def test_local_read(self, tmp_path):
        (tmp_path / "loans.csv").write_text("a;b\n", encoding="utf-8")
        fetcher = AssetFetcher(VizConfig(asset_base=str(tmp_path)))

        assert fetcher.session is None
        assert fetcher("loans.csv") == "a;b\n"

    def test_remote_uses_session(self):
        cfg = VizConfig(asset_base="https://example.org/data/", request_timeout=5.0)
        fetcher = AssetFetcher(cfg)

        response = MagicMock()
        response.text = "company,founded_date\n"
        fetcher.session = MagicMock()
        fetcher.session.get.return_value = response

        assert fetcher("foundingDates.csv") == "company,founded_date\n"
        fetcher.session.get.assert_called_once_with(
            "https://example.org/data/foundingDates.csv", timeout=5.0
        )
        response.raise_for_status.assert_called_once()


def test_load_result_defaults():
    result = LoadResult()
    assert result.ok
    assert result.counts() == {"sales": 0, "loans": 0, "percent": 0, "founding": 0}
