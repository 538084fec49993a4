# tests/test_geometry.py
"""
Deterministic tests for geometry: map_bbox, is_point_in_bbox, bbox_within,
Web Mercator projection.
"""

from __future__ import annotations

import math

import numpy as np
import pytest

from logjam.core.config import CUS_LIMITS, US_LIMITS, WORLD_LIMITS
from logjam.core.geometry import (
    bbox_within,
    is_point_in_bbox,
    map_bbox,
    project_lonlat,
    projected_limits,
)


def test_limit_constants() -> None:
    assert WORLD_LIMITS == ((-180, 180), (-75, 75))
    assert US_LIMITS == ((-180, -65), (15, 72))
    assert CUS_LIMITS == ((-125, -65), (24, 50))


def test_map_bbox_expands() -> None:
    x = [-80.0, -75.0, -78.0]
    y = [35.0, 40.0, 38.0]
    expanded, original = map_bbox(x, y, xexpand=0.1, yexpand=0.1)
    assert original == ((-80.0, -75.0), (35.0, 40.0))
    (xmin, xmax), (ymin, ymax) = expanded
    assert xmin < -80.0 and xmax > -75.0
    assert ymin < 35.0 and ymax > 40.0
    assert xmin == pytest.approx(-80.5) and ymax == pytest.approx(40.5)


def test_map_bbox_no_expansion_is_data_extent() -> None:
    expanded, original = map_bbox((1.0, 3.0), (2.0, 5.0))
    assert expanded == original == ((1.0, 3.0), (2.0, 5.0))


def test_map_bbox_length_mismatch() -> None:
    with pytest.raises(ValueError):
        map_bbox([1.0, 2.0], [1.0])


def test_map_bbox_ignores_nan() -> None:
    _, original = map_bbox([1.0, float("nan"), 4.0], [float("nan"), 2.0, 3.0])
    assert original == ((1.0, 4.0), (2.0, 3.0))


def test_map_bbox_clamps_longitude() -> None:
    expanded, _ = map_bbox([-179.0, 179.0], [0.0, 10.0], xexpand=0.5)
    assert expanded[0] == (-180.0, 180.0)


def test_map_bbox_latitude_stays_off_the_poles() -> None:
    expanded, _ = map_bbox([0.0, 10.0], [80.0, 89.0], yexpand=0.5)
    assert expanded[1][1] == 89.0
    assert expanded[1][0] == pytest.approx(75.5)
    expanded, _ = map_bbox([0.0, 10.0], [-89.0, -80.0], yexpand=0.5)
    assert expanded[1][0] == -89.0


def test_map_bbox_latitude_at_pole_uses_epsilon() -> None:
    expanded, _ = map_bbox([0.0, 10.0], [0.0, 90.0])
    assert 89.99 < expanded[1][1] < 90.0


def test_is_point_in_bbox() -> None:
    bbox = ((-180, 180), (-90, 90))
    assert is_point_in_bbox((0, 0), bbox) is True
    assert is_point_in_bbox((200, 100), bbox) is False
    assert is_point_in_bbox([180, -90], bbox) is True
    assert is_point_in_bbox(np.array([10.0, 95.0]), bbox) is False


@pytest.mark.parametrize("pt", [(5,), (1, 2, 3), 5.0, "ab"])
def test_is_point_in_bbox_rejects_bad_point(pt: object) -> None:
    with pytest.raises(ValueError):
        is_point_in_bbox(pt, ((0, 10), (0, 15)))


def test_bbox_within() -> None:
    assert bbox_within(((-80, -75), (35, 40)), CUS_LIMITS)
    assert not bbox_within(((-158, -155), (19, 22)), CUS_LIMITS)
    assert bbox_within(((-158, -155), (19, 22)), US_LIMITS)
    assert bbox_within(CUS_LIMITS, CUS_LIMITS)


def test_project_lonlat_origin_and_antimeridian() -> None:
    px, py = project_lonlat([0.0, 180.0], [0.0, 0.0])
    assert px[0] == pytest.approx(0.0, abs=1e-6)
    assert py[0] == pytest.approx(0.0, abs=1e-6)
    assert px[1] == pytest.approx(20037508.34, rel=1e-6)


def test_project_lonlat_keeps_nan_breaks() -> None:
    px, py = project_lonlat([0.0, float("nan"), 10.0], [0.0, float("nan"), 10.0])
    assert math.isnan(px[1]) and math.isnan(py[1])
    assert np.isfinite(px[[0, 2]]).all()


def test_project_lonlat_scalar() -> None:
    px, py = project_lonlat(10.0, 45.0)
    assert px.shape == (1,) and py.shape == (1,)
    assert py[0] > 0


def test_projected_limits_increasing() -> None:
    (x0, x1), (y0, y1) = projected_limits(CUS_LIMITS)
    assert x0 < x1 and y0 < y1
