"""
Path geometry for series layers.

Lines use monotone cubic (PCHIP) interpolation in x: the curve passes through
every point and never overshoots between neighbours, so a rising series never
appears to dip. Output is an SVG path string in pixel coordinates.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from scipy.interpolate import PchipInterpolator

Point = Tuple[float, float]


def _fmt(v: float) -> str:
    text = f"{v:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _pair(x: float, y: float) -> str:
    return f"{_fmt(x)},{_fmt(y)}"


def _bezier(p0: Point, p1: Point, t0: float, t1: float) -> str:
    dx = (p1[0] - p0[0]) / 3
    return (
        f"C {_pair(p0[0] + dx, p0[1] + dx * t0)} "
        f"{_pair(p1[0] - dx, p1[1] - dx * t1)} "
        f"{_pair(*p1)}"
    )


def _dedupe(points: Sequence[Point]) -> List[Point]:
    out: List[Point] = []
    for point in points:
        if out and out[-1] == tuple(point):
            continue
        out.append((float(point[0]), float(point[1])))
    return out


def _runs(points: Sequence[Point]) -> List[List[Point]]:
    """Split into runs of strictly increasing x."""
    runs: List[List[Point]] = []
    for point in points:
        if runs and point[0] > runs[-1][-1][0]:
            runs[-1].append(point)
        else:
            runs.append([point])
    return runs


def tangents(run: Sequence[Point]) -> np.ndarray:
    """dy/dx of the PCHIP interpolant at each point of a strictly increasing run."""
    x = np.array([p[0] for p in run], dtype=float)
    y = np.array([p[1] for p in run], dtype=float)
    return PchipInterpolator(x, y).derivative()(x)


def monotone_segments(points: Sequence[Point]) -> List[str]:
    """Path commands (M, L, C) for a monotone-x curve through `points`."""
    pts = _dedupe(points)
    if not pts:
        return []

    commands = [f"M {_pair(*pts[0])}"]
    for i, run in enumerate(_runs(pts)):
        # x went backwards or stalled: jump straight to the next run
        if i:
            commands.append(f"L {_pair(*run[0])}")
        if len(run) == 2:
            commands.append(f"L {_pair(*run[1])}")
        elif len(run) > 2:
            slopes = tangents(run)
            for j in range(1, len(run)):
                commands.append(_bezier(run[j - 1], run[j], float(slopes[j - 1]), float(slopes[j])))
    return commands


def monotone_x_path(points: Sequence[Point]) -> str:
    """SVG path for a line; a single point is a closed zero-length path."""
    commands = monotone_segments(points)
    if len(commands) == 1:
        commands.append("Z")
    return " ".join(commands)


def area_path(points: Sequence[Point], baseline: float) -> str:
    """SVG path for the area between the monotone curve and a horizontal baseline."""
    pts = _dedupe(points)
    if not pts:
        return ""
    commands = monotone_segments(pts)
    commands.append(f"L {_pair(pts[-1][0], baseline)}")
    commands.append(f"L {_pair(pts[0][0], baseline)}")
    commands.append("Z")
    return " ".join(commands)
