"""
Test Suite

Tests organized by package:
- overconsumption/test_dsv.py — delimited-text parser
- overconsumption/test_normalize.py — typed projection, dropped rows
- overconsumption/test_store.py — concurrent load, partial failure
- overconsumption/test_scales.py — scales, ticks, curve geometry
- overconsumption/test_charts.py — growth / percent / timeline encoders
- overconsumption/test_render.py — Plotly smoke tests (sample data)
"""
