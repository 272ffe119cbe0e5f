# file: src/overconsumption/config.py
"""
Configuration for the overconsumption charts.

Keep OVERCONSUMPTION_ASSET_BASE in env (prod) / .env (local).
The base may be a local directory or an http(s) URL serving the CSV files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

ASSET_BASE_ENV = "OVERCONSUMPTION_ASSET_BASE"
LOG_LEVEL_ENV = "OVERCONSUMPTION_LOG_LEVEL"


@dataclass(frozen=True)
class VizConfig:
    # IO
    asset_base: str = "data"

    # HTTP fetch (only used when asset_base is a URL)
    request_timeout: Optional[float] = 30.0
    max_retries: int = 0

    # Load orchestration: one worker per dataset
    max_workers: int = 4

    log_level: str = "INFO"

    def is_remote(self) -> bool:
        return self.asset_base.startswith(("http://", "https://"))

    def asset_url(self, name: str) -> Union[str, Path]:
        """Resolve a dataset file name against the base asset path."""
        if self.is_remote():
            return f"{self.asset_base.rstrip('/')}/{name}"
        return Path(self.asset_base) / name


def load_config(
    asset_base: Optional[str] = None,
    request_timeout: Optional[float] = 30.0,
    max_retries: int = 0,
) -> VizConfig:
    """
    Load config from environment.

    Explicit arguments win over OVERCONSUMPTION_ASSET_BASE, which wins over
    the default "data" directory.
    """
    load_dotenv()

    base = asset_base or os.getenv(ASSET_BASE_ENV) or "data"
    log_level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()

    return VizConfig(
        asset_base=base,
        request_timeout=request_timeout,
        max_retries=max_retries,
        log_level=log_level,
    )
