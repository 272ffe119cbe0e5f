"""
Streamlit page: The E-commerce Effect

Run with:
    streamlit run src/overconsumption/dashboard.py

Displays:
- Growth of e-commerce sales vs consumer loans
- E-commerce share of total retail with key events
- Company founding timeline with sales overlay
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import streamlit as st

from src.overconsumption.charts import encode_all
from src.overconsumption.config import load_config
from src.overconsumption.normalize import to_frame
from src.overconsumption.render import render_figure
from src.overconsumption.store import LoadResult, SeriesStore

st.set_page_config(
    page_title="The E-commerce Effect",
    page_icon="🛒",
    layout="centered",
)

CAPTIONS = {
    "growth": (
        "This visualization demonstrates the parallel rise of e-commerce sales and consumer "
        "loans in the United States. As online shopping platforms became more prevalent, "
        "consumer borrowing increased dramatically, suggesting that e-commerce may enable and "
        "encourage spending beyond consumers' immediate financial means."
    ),
    "percent": (
        "The growing share of retail happening online shows how consumer habits have "
        "fundamentally shifted. E-commerce's convenience, 24/7 availability, and frictionless "
        "payment systems have made impulse purchases easier than ever before, potentially "
        "contributing to overconsumption."
    ),
    "timeline": (
        "This timeline shows how the founding of major e-commerce platforms coincided with "
        "significant sales growth. Each company introduced innovations that reduced friction in "
        "the purchasing process: one-click ordering, free shipping, mobile shopping apps, and "
        "subscription services that all make consumption easier and more frequent."
    ),
}


def load_result() -> LoadResult:
    """Load all datasets once per session."""
    if "series_store" not in st.session_state:
        config = load_config()
        logging.basicConfig(level=config.log_level, format="%(asctime)s | %(levelname)s | %(message)s")
        st.session_state["series_store"] = SeriesStore(config)
    return st.session_state["series_store"].load()


def render_load_status(result: LoadResult):
    """Console-level report of failed or thinned datasets"""
    for name, message in result.errors.items():
        st.warning(f"Could not load {name}: {message}")
    dropped = {name: n for name, n in result.skipped.items() if n}
    if dropped:
        st.caption(f"Rows skipped as unparseable: {dropped}")


def render_data_preview(result: LoadResult):
    with st.expander("Data Preview"):
        for name in ("sales", "loans", "percent"):
            points = getattr(result, name)
            st.write(f"{name}: {len(points):,} rows")
            if points:
                st.dataframe(to_frame(points).tail(5))


def main():
    st.title("The E-commerce Effect: How Online Shopping Drives Overconsumption")

    result = load_result()
    render_load_status(result)

    encodings = encode_all(result)
    if not any(encodings.values()):
        st.error("No data available to draw the charts.")
        return

    for key, encoding in encodings.items():
        if encoding is None:
            continue
        st.plotly_chart(render_figure(encoding), use_container_width=False)
        st.markdown(CAPTIONS[key])
        st.divider()

    render_data_preview(result)

    st.caption(
        "**Data Sources:** Retail sales and e-commerce percentage data from US Census Bureau, "
        "consumer loans data from Federal Reserve, company founding dates from public records."
    )


if __name__ == "__main__":
    main()
