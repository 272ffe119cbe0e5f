# file: src/overconsumption/cli.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from src.overconsumption.charts import encode_all
from src.overconsumption.config import load_config
from src.overconsumption.datasets import list_datasets
from src.overconsumption.render import render_figure
from src.overconsumption.store import SeriesStore

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")
app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main():
    """E-commerce overconsumption charts."""


@app.command()
def export(
    out_dir: str = "charts",
    asset_base: Optional[str] = None,
    request_timeout: float = 30.0,
    max_retries: int = 0,
):
    """Load the datasets and write each drawable chart to <out_dir>/<chart>.html."""
    cfg = load_config(asset_base=asset_base, request_timeout=request_timeout, max_retries=max_retries)
    logging.getLogger().setLevel(cfg.log_level)

    result = SeriesStore(cfg).load()

    table = Table(title="Datasets")
    table.add_column("Dataset", style="cyan")
    table.add_column("Records", style="green")
    table.add_column("Skipped", style="yellow")
    table.add_column("Error", style="red")

    counts = result.counts()
    for name in list_datasets():
        table.add_row(
            name,
            str(counts[name]),
            str(result.skipped.get(name, 0)),
            result.errors.get(name, ""),
        )
    console.print(table)

    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    written = 0
    for key, encoding in encode_all(result).items():
        if encoding is None:
            console.print(f"[yellow]skip[/yellow] {key}: required data missing")
            continue
        path = out / f"{key}.html"
        render_figure(encoding).write_html(str(path), include_plotlyjs="cdn")
        console.print(f"[green]wrote[/green] {path}")
        written += 1

    if written == 0:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
