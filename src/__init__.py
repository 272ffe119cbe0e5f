"""
E-commerce Overconsumption - data ingestion and chart encoding

Modules:
- overconsumption: Parse, normalize and load the four datasets, encode the
  growth / percent / timeline charts, render them with Plotly or Streamlit
"""
