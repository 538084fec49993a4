# logjam/core/labels.py
"""
Text label placement for scattered points.

Each label gets a compass-style alignment and an offset pointing into open
space: away from the other point for pairs, and for larger sets either away
from an isolated point's nearest neighbor or into the widest angular gap
between its Delaunay neighbors.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np
from scipy.spatial import Delaunay, QhullError

from logjam.core.config import (
    AXIS_HOFFSET_EXTRA,
    AXIS_VOFFSET_EXTRA,
    DEFAULT_MIN_DIST_RATIO,
    DEFAULT_OFFSET_AMT,
    JOGGLE_QHULL_OPTIONS,
    SECTOR_BOUNDS,
    SECTOR_WIDTH_DEG,
)
from logjam.core.types import Alignment, HAlign, LabelPlacement, Offset, VAlign

logger = logging.getLogger(__name__)

_SECTOR_EDGES = np.array(SECTOR_BOUNDS, dtype=float) * SECTOR_WIDTH_DEG


def bearing_deg(p0: tuple[float, float], p1: tuple[float, float]) -> float:
    """Angle in degrees from p0 to p1, in (-180, 180]."""
    return math.degrees(math.atan2(p1[1] - p0[1], p1[0] - p0[0]))


def _distance(p0: tuple[float, float], p1: tuple[float, float]) -> float:
    return math.hypot(p1[0] - p0[0], p1[1] - p0[1])


def best_fit(ang: float, delta: float) -> tuple[Alignment, Offset]:
    """
    Alignment and offset for a label that should sit in direction ang (degrees).

    The circle is cut into E, NE, N, NW, W, SW, S, SE sectors. Pure east/west
    and north/south labels get a larger offset (delta + 3 horizontally,
    delta + 2 vertically) than diagonal ones (delta).
    """
    ang = float(ang) % 360.0
    if ang >= 360.0:
        # Tiny negative bearings round up to exactly 360 under the modulo.
        ang = 0.0
    # 1-based sector: rng[idx] <= ang < rng[idx + 1]
    idx = int(np.searchsorted(_SECTOR_EDGES, ang, side="right"))

    if idx in (4, 5, 6):
        halign = HAlign.RIGHT
    elif idx in (3, 7):
        halign = HAlign.CENTER
    else:
        halign = HAlign.LEFT

    if idx in (2, 3, 4):
        valign = VAlign.BOTTOM
    elif idx in (1, 5, 9):
        valign = VAlign.CENTER
    else:
        valign = VAlign.TOP

    h_axis = delta + AXIS_HOFFSET_EXTRA
    v_axis = delta + AXIS_VOFFSET_EXTRA

    hoffset = 0.0
    if valign is VAlign.CENTER and halign is HAlign.LEFT:
        hoffset = h_axis
    elif valign is VAlign.CENTER and halign is HAlign.RIGHT:
        hoffset = -h_axis
    elif halign is HAlign.LEFT:
        hoffset = delta
    elif halign is HAlign.RIGHT:
        hoffset = -delta

    voffset = 0.0
    if halign is HAlign.CENTER and valign is VAlign.BOTTOM:
        voffset = v_axis
    elif halign is HAlign.CENTER and valign is VAlign.TOP:
        voffset = -v_axis
    elif valign is VAlign.BOTTOM:
        voffset = delta
    elif valign is VAlign.TOP:
        voffset = -delta

    return (halign, valign), (float(hoffset), float(voffset))


def _triangulate(pts: np.ndarray) -> Delaunay:
    try:
        return Delaunay(pts)
    except QhullError:
        # Collinear or otherwise flat input: joggle so every point gets neighbors.
        logger.debug("Degenerate triangulation for %d points; retrying with %s", len(pts), JOGGLE_QHULL_OPTIONS)
        return Delaunay(pts, qhull_options=JOGGLE_QHULL_OPTIONS)


def delaunay_neighbors(pts: np.ndarray) -> list[list[int]]:
    """Neighbor indices of every point in the Delaunay triangulation of pts (N, 2)."""
    tri = _triangulate(pts)
    indptr, indices = tri.vertex_neighbor_vertices
    return [
        [int(j) for j in indices[indptr[i]:indptr[i + 1]] if j != i]
        for i in range(len(pts))
    ]


def widest_gap_bearing(angles: list[float]) -> float:
    """
    Bisector of the largest angular gap between sorted bearings, wrapping at +/-180.
    """
    ang = sorted(angles)
    bounded = [-180.0, *ang, 180.0]
    steps = [b - a for a, b in zip(bounded[:-1], bounded[1:])]
    gaps = steps[1:-1] + [steps[0] + steps[-1]]
    k = int(np.argmax(gaps))
    return ang[k] + gaps[k] / 2.0


def _is_isolated(d: list[float], min_dist_ratio: float) -> bool:
    if d[1] / d[0] > min_dist_ratio:
        return True
    return len(d) > 2 and d[2] / (d[0] + d[1]) > min_dist_ratio


def _cluster_bearing(
    i: int,
    pts: list[tuple[float, float]],
    neighbors: list[int],
    min_dist_ratio: float,
) -> float | None:
    """Label bearing for point i given its neighbors; None when it has no neighbors."""
    # Joggled triangulations can keep exact duplicates as separate vertices.
    neighbors = [j for j in neighbors if _distance(pts[i], pts[j]) > 0.0]
    if not neighbors:
        return None
    if len(neighbors) == 1:
        return bearing_deg(pts[i], pts[neighbors[0]]) - 180.0
    d = [_distance(pts[i], pts[j]) for j in neighbors]
    order = sorted(range(len(d)), key=d.__getitem__)
    d = [d[k] for k in order]
    idx = [neighbors[k] for k in order]
    if _is_isolated(d, min_dist_ratio):
        return bearing_deg(pts[i], pts[idx[0]]) - 180.0
    return widest_gap_bearing([bearing_deg(pts[i], pts[j]) for j in idx])


def align_text(
    x: Any,
    y: Any,
    offset_amt: float = DEFAULT_OFFSET_AMT,
    min_dist_ratio: float = DEFAULT_MIN_DIST_RATIO,
) -> LabelPlacement:
    """
    Alignment and offset for a text label at each point (x[i], y[i]).

    x and y may be scalars or sequences; they are paired element-wise.
    - One point: (left, bottom) with offset (offset_amt, offset_amt).
    - Two points: each label points away from the other point.
    - Three or more: an isolated point (d2/d1 > min_dist_ratio, or
      d3/(d1 + d2) > min_dist_ratio over its sorted neighbor distances) points
      away from its nearest neighbor; otherwise the label goes into the widest
      angular gap between its Delaunay neighbors.
    """
    xs = np.atleast_1d(np.asarray(x, dtype=float))
    ys = np.atleast_1d(np.asarray(y, dtype=float))
    pts = [(float(a), float(b)) for a, b in zip(xs, ys)]

    out = LabelPlacement()
    if not pts:
        return out

    if len(pts) == 1:
        out.align.append((HAlign.LEFT, VAlign.BOTTOM))
        out.offset.append((float(offset_amt), float(offset_amt)))
        return out

    if len(pts) == 2:
        ang = bearing_deg(pts[0], pts[1])
        for bearing in (ang - 180.0, ang):
            align, offset = best_fit(bearing, offset_amt)
            out.align.append(align)
            out.offset.append(offset)
        return out

    neighbors = delaunay_neighbors(np.array(pts))
    for i in range(len(pts)):
        bearing = _cluster_bearing(i, pts, neighbors[i], min_dist_ratio)
        if bearing is None:
            # Exact duplicate of another point; qhull leaves it out.
            out.align.append((HAlign.LEFT, VAlign.BOTTOM))
            out.offset.append((float(offset_amt), float(offset_amt)))
            continue
        align, offset = best_fit(bearing, offset_amt)
        out.align.append(align)
        out.offset.append(offset)
    return out
