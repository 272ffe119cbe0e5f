# file: src/overconsumption/render.py
"""
Plotly renderer for ChartEncoding.

The figure's axes are hidden and set to the chart's pixel canvas, so the
encoding's pixel geometry (SVG paths, guide lines, bands, labels, axes) is
drawn as-is. The renderer knows nothing about the data behind the chart.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import plotly.graph_objects as go

from src.overconsumption.encoding import Axis, ChartEncoding, Overlay

TICK_SIZE = 6
AXIS_COLOR = "#333333"
FONT_FAMILY = "Arial, sans-serif"


def _dash(pattern: Optional[str]) -> Optional[str]:
    """SVG dash array ("3,3") to Plotly's pixel list ("3px,3px")."""
    if not pattern:
        return None
    return ",".join(f"{part.strip()}px" for part in str(pattern).split(","))


def _text(x: float, y: float, text: str, *, size: float = 12, color: str = AXIS_COLOR,
          bold: bool = False, italic: bool = False, angle: float = 0,
          anchor: str = "middle") -> Dict:
    if bold:
        text = f"<b>{text}</b>"
    if italic:
        text = f"<i>{text}</i>"
    return dict(
        x=x, y=y, xref="x", yref="y", text=text, showarrow=False,
        textangle=angle,
        xanchor={"middle": "center", "start": "left", "end": "right"}.get(anchor, "center"),
        yanchor="middle",
        font=dict(size=size, color=color, family=FONT_FAMILY),
    )


def _line(x0: float, y0: float, x1: float, y1: float, *, color: str = AXIS_COLOR,
          width: float = 1, dash: Optional[str] = None) -> Dict:
    return dict(
        type="line", xref="x", yref="y", x0=x0, y0=y0, x1=x1, y1=y1,
        line=dict(color=color, width=width, dash=_dash(dash)),
    )


def _overlay_items(overlay: Overlay) -> tuple[List[Dict], List[Dict]]:
    """(shapes, annotations) for one overlay."""
    style = overlay.style
    if overlay.kind == "guide-line":
        return [_line(
            overlay.x0, overlay.y0, overlay.x1, overlay.y1,
            color=style.get("stroke", AXIS_COLOR),
            width=style.get("stroke_width", 1),
            dash=style.get("dash"),
        )], []
    if overlay.kind == "banded-rect":
        return [dict(
            type="rect", xref="x", yref="y",
            x0=overlay.x0, y0=overlay.y0, x1=overlay.x1, y1=overlay.y1,
            fillcolor=style.get("fill", "#cccccc"),
            opacity=style.get("opacity", 1.0),
            line=dict(width=0),
        )], []
    if overlay.kind == "text-label":
        return [], [_text(
            overlay.x0, overlay.y0, overlay.text or "",
            size=style.get("font_size", 12),
            color=style.get("color", AXIS_COLOR),
            bold=style.get("font_weight") == "bold",
            anchor=style.get("anchor", "middle"),
        )]
    raise ValueError(f"Unknown overlay kind: {overlay.kind}")


def _axis_items(axis: Axis, encoding: ChartEncoding) -> tuple[List[Dict], List[Dict]]:
    frame = encoding.frame
    shapes: List[Dict] = []
    annotations: List[Dict] = []

    if axis.orient == "bottom":
        shapes.append(_line(0, axis.offset, frame.inner_width, axis.offset))
        for tick in axis.ticks:
            shapes.append(_line(tick.position, axis.offset, tick.position, axis.offset + TICK_SIZE))
            annotations.append(_text(tick.position, axis.offset + TICK_SIZE + 12, tick.label))
        annotations.append(_text(frame.inner_width / 2, axis.offset + 40, axis.label, size=14))
        return shapes, annotations

    # left / right axes
    direction = -1 if axis.orient == "left" else 1
    shapes.append(_line(axis.offset, 0, axis.offset, frame.inner_height))
    for tick in axis.ticks:
        shapes.append(_line(axis.offset, tick.position, axis.offset + direction * TICK_SIZE, tick.position))
        annotations.append(_text(
            axis.offset + direction * (TICK_SIZE + 3), tick.position, tick.label,
            anchor="end" if direction < 0 else "start",
        ))
    annotations.append(_text(
        axis.offset + direction * 60, frame.inner_height / 2, axis.label,
        size=14, angle=direction * 90,
    ))
    return shapes, annotations


def _frame_text(encoding: ChartEncoding) -> List[Dict]:
    """Title, subtitle and note, positioned on the full canvas like the page does."""
    frame = encoding.frame
    m = frame.margin
    cx = frame.width / 2 - m.left
    items = [_text(cx, frame.title_y - m.top, frame.title, size=18, bold=True)]
    if frame.subtitle:
        items.append(_text(cx, frame.subtitle_y - m.top, frame.subtitle, size=14, italic=True))
    if frame.note:
        note_y = frame.note_y if frame.note_y is not None else frame.height - 10
        items.append(_text(cx, note_y - m.top, frame.note, size=14, italic=True))
    return items


def _legend_items(encoding: ChartEncoding) -> tuple[List[Dict], List[Dict]]:
    x = encoding.frame.inner_width + 10
    shapes: List[Dict] = []
    annotations: List[Dict] = []
    for i, entry in enumerate(encoding.legend):
        y = i * 20
        shapes.append(_line(x, y, x + 20, y, color=entry.color, width=3))
        annotations.append(_text(x + 25, y, entry.label, anchor="start"))
    return shapes, annotations


def render_figure(encoding: ChartEncoding) -> go.Figure:
    """Draw a ChartEncoding onto a fixed-size Plotly figure."""
    frame = encoding.frame
    m = frame.margin

    shapes: List[Dict] = []
    annotations: List[Dict] = []

    for path in encoding.paths:
        shapes.append(dict(
            type="path", xref="x", yref="y", path=path.d,
            fillcolor=path.fill if path.kind == "area" else None,
            line=dict(
                color=path.stroke or "rgba(0,0,0,0)",
                width=path.stroke_width,
            ),
            layer="below" if path.kind == "area" else "above",
        ))

    for axis in encoding.axes:
        s, a = _axis_items(axis, encoding)
        shapes += s
        annotations += a

    for overlay in encoding.overlays:
        s, a = _overlay_items(overlay)
        shapes += s
        annotations += a

    s, a = _legend_items(encoding)
    shapes += s
    annotations += a
    annotations += _frame_text(encoding)

    fig = go.Figure()
    fig.update_layout(
        width=frame.width,
        height=frame.height,
        margin=dict(l=0, r=0, t=0, b=0),
        plot_bgcolor="white",
        paper_bgcolor="white",
        showlegend=False,
        shapes=shapes,
        annotations=annotations,
        # Canvas coordinates with the plot-area origin at (0, 0) and y pointing down
        xaxis=dict(range=[-m.left, frame.width - m.left], visible=False, fixedrange=True),
        yaxis=dict(range=[frame.height - m.top, -m.top], visible=False, fixedrange=True),
    )
    return fig
