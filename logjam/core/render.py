# logjam/core/render.py
"""
Matplotlib map figures: country borders, U.S. state borders and NHS roads on a
Web Mercator axis, plus point labels placed with align_text.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Any, Sequence

import matplotlib
import matplotlib.patheffects as path_effects
import matplotlib.pyplot as plt
import numpy as np

from logjam.core.config import (
    COUNTRIES_TABLE,
    COUNTRY_STYLE,
    CUS_LIMITS,
    DEFAULT_DPI,
    DEFAULT_MIN_DIST_RATIO,
    DEFAULT_OFFSET_AMT,
    DEFAULT_XEXPAND,
    DEFAULT_YEXPAND,
    FIGURE_SIZE_IN,
    GRID_STYLE,
    LABEL_FONT_SIZE_PT,
    LABEL_HALO_WIDTH,
    MAX_ROAD_LAT_SPAN,
    ROAD_STYLE,
    ROADS_TABLE,
    STATE_STYLE,
    STATE_WITH_COUNTRY_STYLE,
    STATES_TABLE,
    US_LIMITS,
    WORLD_LIMITS,
    BBox,
)
from logjam.core.geometry import bbox_within, map_bbox, project_lonlat, projected_limits
from logjam.core.io import load_lines
from logjam.core.labels import align_text
from logjam.core.types import Backend, LabelPlacement, MapView, Region

logger = logging.getLogger(__name__)


def _check_coords(name: str, v: Any) -> None:
    if v is not None and (np.isscalar(v) or len(v) < 2):
        raise ValueError(f"{name} must be vector with at least two elements if not None.")


def activate_backend(backend: Backend | str) -> Backend:
    """Switch matplotlib to backend if it is not already active."""
    backend = Backend.parse(backend)
    if matplotlib.get_backend().lower() != backend.value:
        plt.switch_backend(backend.value)
    return backend


def region_layers(region: Region) -> tuple[BBox, bool, bool]:
    """(limits, draw_country_borders, draw_state_borders) for a predefined region."""
    if region is Region.WORLD:
        return WORLD_LIMITS, True, False
    if region is Region.US:
        return US_LIMITS, True, True
    if region is Region.CUS:
        return CUS_LIMITS, False, True
    raise ValueError(f"Unhandled region: {region!r}")


def extent_layers(limits0: BBox) -> tuple[bool, bool]:
    """(draw_country_borders, draw_state_borders) for a data extent."""
    if bbox_within(limits0, CUS_LIMITS):
        return False, True
    if bbox_within(limits0, US_LIMITS):
        return True, True
    return True, False


def _plot_lines(ax: plt.Axes, name: str, data_dir: str | Path | None, style: dict) -> Any:
    lon, lat = load_lines(name, data_dir)
    px, py = project_lonlat(lon, lat)
    (line,) = ax.plot(px, py, **style)
    return line


def make_map(
    x: Sequence[float] | None = None,
    y: Sequence[float] | None = None,
    *,
    region: Region | str = Region.WORLD,
    backend: Backend | str = Backend.AGG,
    xexpand: float = DEFAULT_XEXPAND,
    yexpand: float = DEFAULT_YEXPAND,
    do_road_background: bool = True,
    max_road_lat_span: float = MAX_ROAD_LAT_SPAN,
    data_dir: str | Path | None = None,
) -> MapView:
    """
    Mercator map of a predefined region, or of the extent of lon/lat points x, y.

    With points, only state borders are drawn when the points fall inside the
    continental U.S., state and country borders inside the wider U.S. limits,
    and country borders otherwise. Roads are added under everything when the
    map spans at most max_road_lat_span degrees of latitude.
    Layers are returned in drawing order: roads, state borders, country borders.
    """
    _check_coords("x", x)
    _check_coords("y", y)
    region = Region.parse(region)
    activate_backend(backend)

    if x is None and y is None:
        limits, do_country, do_states = region_layers(region)
    elif x is None or y is None:
        raise ValueError("x and y must be given together.")
    else:
        limits, limits0 = map_bbox(x, y, xexpand=xexpand, yexpand=yexpand)
        do_country, do_states = extent_layers(limits0)
    logger.debug("make_map limits=%s country=%s states=%s", limits, do_country, do_states)

    fig, ax = plt.subplots(figsize=FIGURE_SIZE_IN)
    layers: list[Any] = []

    lat_span = abs(limits[1][1] - limits[1][0])
    if do_road_background and lat_span <= max_road_lat_span:
        layers.append(_plot_lines(ax, ROADS_TABLE, data_dir, ROAD_STYLE))

    if do_states:
        style = dict(STATE_STYLE)
        if do_country:
            style.update(STATE_WITH_COUNTRY_STYLE)
        layers.append(_plot_lines(ax, STATES_TABLE, data_dir, style))

    if do_country:
        layers.append(_plot_lines(ax, COUNTRIES_TABLE, data_dir, COUNTRY_STYLE))

    xlim, ylim = projected_limits(limits)
    ax.set_xlim(*xlim)
    ax.set_ylim(*ylim)
    ax.set_aspect("equal", adjustable="box")
    ax.grid(True, **GRID_STYLE)
    ax.set_xticklabels([])
    ax.set_yticklabels([])

    return MapView(fig=fig, ax=ax, layers=layers, limits=limits)


def label_points(
    view: MapView,
    lon: Sequence[float],
    lat: Sequence[float],
    texts: Sequence[str],
    offset_amt: float = DEFAULT_OFFSET_AMT,
    min_dist_ratio: float = DEFAULT_MIN_DIST_RATIO,
    halo: bool = True,
    **text_kw: Any,
) -> tuple[LabelPlacement, list[Any]]:
    """
    Annotate each (lon[i], lat[i]) with texts[i], aligned by align_text.
    Placement runs in projected coordinates so neighbor bearings match what is drawn.
    """
    px, py = view.project(lon, lat)
    placement = align_text(px, py, offset_amt=offset_amt, min_dist_ratio=min_dist_ratio)
    text_kw.setdefault("fontsize", LABEL_FONT_SIZE_PT)
    if halo:
        text_kw.setdefault(
            "path_effects", [path_effects.withStroke(linewidth=LABEL_HALO_WIDTH, foreground="white")]
        )
    annotations = []
    for i, text in enumerate(list(texts)[: len(placement)]):
        annotations.append(
            view.ax.annotate(text, (px[i], py[i]), **placement.text_kwargs(i), **text_kw)
        )
    return placement, annotations


def scatter_points(view: MapView, lon: Sequence[float], lat: Sequence[float], **kw: Any) -> Any:
    px, py = view.project(lon, lat)
    kw.setdefault("s", 12)
    kw.setdefault("color", "red")
    kw.setdefault("zorder", 3)
    return view.ax.scatter(px, py, **kw)


def save_map(view: MapView, output_path: str | Path, dpi: int = DEFAULT_DPI) -> Path:
    """Write the figure to output_path and close it."""
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message=".*tight_layout.*", category=UserWarning)
        view.fig.savefig(out, dpi=dpi, facecolor="white", bbox_inches="tight")
    plt.close(view.fig)
    return out
