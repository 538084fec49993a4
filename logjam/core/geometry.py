# logjam/core/geometry.py
"""
Geometry helpers: bounding boxes of lon/lat point sets, point-in-box and
box-in-box tests, Web Mercator projection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Sequence

import numpy as np
from shapely.geometry import Point, box

from logjam.core.config import LAT_RANGE, LON_RANGE, BBox


def map_bbox(
    x: Sequence[float],
    y: Sequence[float],
    xexpand: float = 0.0,
    yexpand: float = 0.0,
) -> tuple[BBox, BBox]:
    """
    Bounding box of lon/lat points, expanded by a fraction of its span on each side.

    NaN values are ignored. Longitudes are clamped to [-180, 180]; latitudes are
    kept strictly inside (-90, 90), falling back to the data extrema when the
    expansion would reach a pole.
    Returns (expanded_limits, original_limits), each ((xmin, xmax), (ymin, ymax)).
    """
    if len(x) != len(y):
        raise ValueError("'x' and 'y' must have the same length.")
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)

    xmin, xmax = float(np.nanmin(xs)), float(np.nanmax(xs))
    ymin, ymax = float(np.nanmin(ys)), float(np.nanmax(ys))
    limits0 = ((xmin, xmax), (ymin, ymax))

    xoffset = (xmax - xmin) * xexpand
    yoffset = (ymax - ymin) * yexpand
    xmin -= xoffset
    xmax += xoffset
    ymin -= yoffset
    ymax += yoffset

    xmin = max(xmin, LON_RANGE[0])
    xmax = min(xmax, LON_RANGE[1])

    margin = float(np.sqrt(np.finfo(float).eps))
    if ymin <= LAT_RANGE[0]:
        ymin = max(LAT_RANGE[0] + margin, float(np.nanmin(ys)))
    if ymax >= LAT_RANGE[1]:
        ymax = min(LAT_RANGE[1] - margin, float(np.nanmax(ys)))

    return ((xmin, xmax), (ymin, ymax)), limits0


def _bbox_polygon(bbox: BBox):
    (xmin, xmax), (ymin, ymax) = bbox
    return box(xmin, ymin, xmax, ymax)


def is_point_in_bbox(pt: Any, bbox: BBox) -> bool:
    """True if pt = (x, y) lies inside bbox or on its boundary."""
    if not isinstance(pt, (tuple, list, np.ndarray)) or len(pt) != 2:
        raise ValueError("The point 'pt' must be a tuple or vector with exactly two elements (x, y).")
    return bool(_bbox_polygon(bbox).covers(Point(float(pt[0]), float(pt[1]))))


def bbox_within(inner: BBox, outer: BBox) -> bool:
    """True if box inner lies entirely inside box outer (shared edges allowed)."""
    (xmin0, xmax0), (ymin0, ymax0) = inner
    (xmin, xmax), (ymin, ymax) = outer
    return xmin0 >= xmin and xmax0 <= xmax and ymin0 >= ymin and ymax0 <= ymax


@lru_cache(maxsize=1)
def _mercator_transformer():
    from pyproj import Transformer

    return Transformer.from_crs("EPSG:4326", "EPSG:3857", always_xy=True)


def project_lonlat(lon: Any, lat: Any) -> tuple[np.ndarray, np.ndarray]:
    """
    Project lon/lat degrees to Web Mercator (EPSG:3857) metres.
    Non-finite entries stay NaN so they keep breaking polylines.
    """
    lon_arr = np.atleast_1d(np.asarray(lon, dtype=float))
    lat_arr = np.atleast_1d(np.asarray(lat, dtype=float))
    px = np.full(lon_arr.shape, np.nan)
    py = np.full(lat_arr.shape, np.nan)
    ok = np.isfinite(lon_arr) & np.isfinite(lat_arr)
    if ok.any():
        tx, ty = _mercator_transformer().transform(lon_arr[ok], lat_arr[ok])
        px[ok] = tx
        py[ok] = ty
    return px, py


def projected_limits(bbox: BBox) -> tuple[tuple[float, float], tuple[float, float]]:
    """Axis limits in Mercator metres for a lon/lat bbox."""
    (xmin, xmax), (ymin, ymax) = bbox
    px, py = project_lonlat([xmin, xmax], [ymin, ymax])
    return (float(px[0]), float(px[1])), (float(py[0]), float(py[1]))
