# file: src/overconsumption/charts.py
"""
Chart encoders for the three overconsumption views.

1. Growth   - e-commerce sales vs consumer loans on two y axes
2. Percent  - e-commerce share of retail with key event markers
3. Timeline - sales with company founding markers and phase bands

Every encoder is a pure function of its series and returns None when a
required series is empty. compose_chart() holds the shared scaffolding.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Sequence, Union

from src.overconsumption.annotations import (event_overlays, events_in_range,
                                             founding_overlays, phase_overlays)
from src.overconsumption.curves import area_path, monotone_x_path
from src.overconsumption.encoding import (Axis, AxisSpec, ChartEncoding,
                                          ChartFrame, LegendEntry, Margin,
                                          Overlay, PathGeometry, SeriesLayer,
                                          Tick)
from src.overconsumption.normalize import FoundingRecord, TimeSeriesPoint
from src.overconsumption.scales import (LinearScale, TimeScale, extent,
                                        format_tick, headroom_domain,
                                        shift_years)
from src.overconsumption.store import LoadResult

logger = logging.getLogger(__name__)

HEADROOM = 1.1
TIMELINE_LOOKBACK_YEARS = 2

SALES_AXIS_LABEL = "E-commerce Sales ($ millions)"

GROWTH_FRAME = ChartFrame(
    key="growth",
    title="Parallel Growth of E-commerce Sales and Consumer Loans",
    width=800,
    height=400,
    margin=Margin(top=50, right=100, bottom=80, left=80),
    note="Note: The similar growth trends suggest a correlation between e-commerce and consumer debt",
    note_y=390.0,
)

PERCENT_FRAME = ChartFrame(
    key="percent",
    title="Growing Market Share of E-commerce in Total Retail Sales",
    width=800,
    height=400,
    margin=Margin(top=50, right=50, bottom=80, left=80),
    note=(
        "Note: As e-commerce becomes more accessible, consumer spending habits "
        "shift toward online purchases"
    ),
    note_y=390.0,
)

TIMELINE_FRAME = ChartFrame(
    key="timeline",
    title="E-commerce Company Timeline and Sales Growth",
    subtitle="How major platforms have shaped and accelerated online consumption",
    width=800,
    height=550,
    margin=Margin(top=80, right=50, bottom=120, left=80),
    note=(
        "Note: Each new platform introduced novel ways to simplify purchasing, "
        "accelerating consumption patterns"
    ),
    title_y=30.0,
    subtitle_y=55.0,
    note_y=525.0,
)

Scale = Union[TimeScale, LinearScale]


def _encode_axis(spec: AxisSpec, scale: Scale, frame: ChartFrame) -> Axis:
    if isinstance(scale, TimeScale):
        ticks = tuple(Tick(scale(d), format_tick(spec.tick_format, d)) for d in scale.ticks())
    else:
        step = scale.step()
        ticks = tuple(Tick(scale(v), format_tick(spec.tick_format, v, step)) for v in scale.ticks())

    offsets = {"bottom": frame.inner_height, "left": 0.0, "right": frame.inner_width}
    return Axis(
        orient=spec.orient,
        label=spec.label,
        tick_format=spec.tick_format,
        ticks=ticks,
        offset=offsets[spec.orient],
    )


def _encode_layer(
    layer: SeriesLayer,
    x_scale: TimeScale,
    y_scale: LinearScale,
    baseline: float,
) -> list[PathGeometry]:
    pixels = tuple((x_scale(p.date), y_scale(p.value)) for p in layer.points)
    paths = []
    # Areas first so lines draw on top
    if "area" in layer.geometries:
        paths.append(PathGeometry(
            series=layer.name, kind="area", d=area_path(pixels, baseline),
            points=pixels, fill=layer.fill,
        ))
    if "line" in layer.geometries:
        paths.append(PathGeometry(
            series=layer.name, kind="line", d=monotone_x_path(pixels),
            points=pixels, stroke=layer.stroke, stroke_width=layer.stroke_width,
        ))
    return paths


def compose_chart(
    frame: ChartFrame,
    x_scale: TimeScale,
    y_scales: Mapping[str, LinearScale],
    layers: Sequence[SeriesLayer],
    axes: Sequence[AxisSpec],
    overlays: Sequence[Overlay] = (),
    legend: Sequence[LegendEntry] = (),
) -> ChartEncoding:
    """
    Build a ChartEncoding from scales, series layers, axis specs and overlays.

    Axis specs name the scale they read ("x" or a key of y_scales); layers
    name their y scale the same way.
    """
    scales: Dict[str, Scale] = {"x": x_scale, **y_scales}

    paths: list[PathGeometry] = []
    for layer in layers:
        paths.extend(_encode_layer(layer, x_scale, y_scales[layer.scale], frame.inner_height))

    return ChartEncoding(
        frame=frame,
        x_domain=x_scale.domain,
        y_domains={key: scale.domain for key, scale in y_scales.items()},
        axes=tuple(_encode_axis(spec, scales[spec.scale], frame) for spec in axes),
        paths=tuple(paths),
        overlays=tuple(overlays),
        legend=tuple(legend),
    )


def _y_scale(points: Sequence[TimeSeriesPoint], frame: ChartFrame) -> LinearScale:
    return LinearScale(
        domain=headroom_domain((p.value for p in points), HEADROOM),
        range=(frame.inner_height, 0.0),
    )


def encode_growth(
    sales: Sequence[TimeSeriesPoint],
    loans: Sequence[TimeSeriesPoint],
) -> Optional[ChartEncoding]:
    """Sales (left axis) vs loans (right axis) over a shared time axis."""
    if not sales or not loans:
        return None

    frame = GROWTH_FRAME
    x_scale = TimeScale(
        domain=extent([p.date for p in sales] + [p.date for p in loans]),
        range=(0.0, frame.inner_width),
    )
    y_scales = {"sales": _y_scale(sales, frame), "loans": _y_scale(loans, frame)}

    return compose_chart(
        frame,
        x_scale,
        y_scales,
        layers=[
            SeriesLayer("E-commerce Sales", sales, scale="sales", stroke="#2980b9"),
            SeriesLayer("Consumer Loans", loans, scale="loans", stroke="#e74c3c"),
        ],
        axes=[
            AxisSpec("bottom", "x", "Year", tick_format="year"),
            AxisSpec("left", "sales", SALES_AXIS_LABEL),
            AxisSpec("right", "loans", "Consumer Loans ($ billions)"),
        ],
        legend=[
            LegendEntry("E-commerce Sales", "#2980b9"),
            LegendEntry("Consumer Loans", "#e74c3c"),
        ],
    )


def encode_percent(percent: Sequence[TimeSeriesPoint]) -> Optional[ChartEncoding]:
    """Share of retail as area + line, with events inside the data's date range."""
    if not percent:
        return None

    frame = PERCENT_FRAME
    start, end = extent(p.date for p in percent)
    x_scale = TimeScale(domain=(start, end), range=(0.0, frame.inner_width))

    events = events_in_range(start, end)
    logger.debug("[charts] percent: %d events in [%s, %s]", len(events), start, end)

    return compose_chart(
        frame,
        x_scale,
        {"y": _y_scale(percent, frame)},
        layers=[
            SeriesLayer(
                "E-commerce Share", percent, geometries=("area", "line"),
                stroke="#2980b9", fill="rgba(52, 152, 219, 0.6)",
            ),
        ],
        axes=[
            AxisSpec("bottom", "x", "Year", tick_format="year"),
            AxisSpec("left", "y", "Percentage of Total Retail Sales", tick_format="percent"),
        ],
        overlays=event_overlays(x_scale, frame.inner_height, events),
    )


def encode_timeline(
    founding: Sequence[FoundingRecord],
    sales: Sequence[TimeSeriesPoint],
) -> Optional[ChartEncoding]:
    """Sales with founding markers; the time axis starts two years before the first date."""
    if not founding or not sales:
        return None

    frame = TIMELINE_FRAME
    start, end = extent([p.date for p in sales] + [r.founded_date for r in founding])
    x_scale = TimeScale(
        domain=(shift_years(start, -TIMELINE_LOOKBACK_YEARS), end),
        range=(0.0, frame.inner_width),
    )

    overlays = founding_overlays(x_scale, frame.inner_height, founding)
    overlays += phase_overlays(x_scale, frame.inner_height)

    return compose_chart(
        frame,
        x_scale,
        {"y": _y_scale(sales, frame)},
        layers=[
            SeriesLayer(
                "E-commerce Sales", sales, geometries=("area", "line"),
                stroke="#27ae60", fill="rgba(46, 204, 113, 0.2)",
            ),
        ],
        axes=[
            AxisSpec("bottom", "x", "Year", tick_format="year"),
            AxisSpec("left", "y", SALES_AXIS_LABEL),
        ],
        overlays=overlays,
    )


def encode_all(result: LoadResult) -> Dict[str, Optional[ChartEncoding]]:
    """All three encodings keyed by chart; None where inputs are missing."""
    return {
        "growth": encode_growth(result.sales, result.loans),
        "percent": encode_percent(result.percent),
        "timeline": encode_timeline(result.founding, result.sales),
    }
