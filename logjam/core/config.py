# logjam/core/config.py
"""
Central configuration for map drawing, label placement and reference data.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations

import os
from pathlib import Path

BBox = tuple[tuple[float, float], tuple[float, float]]

# ----- Map limits ((lon_min, lon_max), (lat_min, lat_max)) -----
WORLD_LIMITS: BBox = ((-180, 180), (-75, 75))
"""World map; latitude trimmed to keep Mercator readable."""

US_LIMITS: BBox = ((-180, -65), (15, 72))
"""United States including Alaska and Hawaii."""

CUS_LIMITS: BBox = ((-125, -65), (24, 50))
"""Continental United States (no Alaska or Hawaii)."""

LON_RANGE: tuple[float, float] = (-180.0, 180.0)
LAT_RANGE: tuple[float, float] = (-90.0, 90.0)

# ----- make_map defaults -----
DEFAULT_XEXPAND: float = 0.3
DEFAULT_YEXPAND: float = 0.1
MAX_ROAD_LAT_SPAN: float = 2.5
"""Roads are drawn only when the map spans at most this many degrees of latitude."""

FIGURE_SIZE_IN: tuple[float, float] = (8.0, 6.0)
DEFAULT_DPI: int = 150

# ----- Line styles -----
ROAD_STYLE: dict = {"color": "grey", "linewidth": 0.5, "alpha": 0.5, "label": "NHS Roads"}
STATE_STYLE: dict = {"color": "blue", "linewidth": 0.75, "label": "US State Borders"}
STATE_WITH_COUNTRY_STYLE: dict = {"linestyle": "--", "alpha": 0.5}
"""Applied on top of STATE_STYLE when country borders are drawn too."""
COUNTRY_STYLE: dict = {"color": "blue", "linewidth": 0.75, "label": "Country Borders"}
GRID_STYLE: dict = {"linestyle": ":", "linewidth": 0.5}

# ----- Label placement -----
DEFAULT_OFFSET_AMT: float = 1.0
"""Base offset (pt) pushing a label off its point."""

DEFAULT_MIN_DIST_RATIO: float = 1.5
"""Neighbor distance ratio above which a point counts as isolated."""

AXIS_HOFFSET_EXTRA: float = 3.0
"""Added to the base offset for pure east/west labels."""

AXIS_VOFFSET_EXTRA: float = 2.0
"""Added to the base offset for pure north/south labels."""

SECTOR_WIDTH_DEG: float = 22.5
SECTOR_BOUNDS: tuple[int, ...] = (0, 1, 3, 5, 7, 9, 11, 13, 15, 16)
"""Compass sector boundaries in units of SECTOR_WIDTH_DEG (E, NE, N, NW, W, SW, S, SE, E)."""

JOGGLE_QHULL_OPTIONS: str = "QJ"
"""Qhull options used to retry a degenerate (e.g. collinear) triangulation."""

LABEL_FONT_SIZE_PT: float = 8.0
LABEL_HALO_WIDTH: float = 2.0

# ----- Reference data -----
DEFAULT_DATA_DIR: Path = Path(__file__).resolve().parent.parent.parent / "data"
DATA_DIR_ENV: str = "LOGJAM_DATA_DIR"
DATA_SUFFIX: str = ".pkl"

COUNTRIES_TABLE: str = "countries"
STATES_TABLE: str = "usstates"
ROADS_TABLE: str = "nhsroads"

# ----- Reports -----
REPORTS_DIR: str = "reports"
SCHEMA_VERSION: str = "1.0"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
