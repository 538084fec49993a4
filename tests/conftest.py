# tests/conftest.py
"""
Tiny reference tables written to a temp data directory; LOGJAM_DATA_DIR points at it.
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from logjam.core.census import TABLE_COLUMNS


def _lines(lon: list[float], lat: list[float]) -> pd.DataFrame:
    return pd.DataFrame({"LON": lon, "LAT": lat})


def write_reference_tables(root: Path) -> Path:
    """Write border/road line sets and a small usplace table into root."""
    root.mkdir(parents=True, exist_ok=True)
    nan = np.nan
    _lines([-120.0, -100.0, -80.0, nan, 0.0, 10.0, 20.0], [30.0, 40.0, 35.0, nan, 45.0, 50.0, 48.0]).to_pickle(
        root / "countries.pkl"
    )
    _lines([-84.0, -75.5, nan, -81.0, -81.0], [36.5, 36.5, nan, 34.0, 36.5]).to_pickle(root / "usstates.pkl")
    _lines([-80.8, -78.6, -77.9, nan, -79.8, -79.0], [35.2, 35.8, 34.2, nan, 36.1, 36.0]).to_pickle(
        root / "nhsroads.pkl"
    )
    places = pd.DataFrame({
        "STFIP": [37, 37, 37, 37, 51],
        "PLFIP": [12000, 55000, 19000, 75000, 67000],
        "NAME": ["Charlotte", "Raleigh", "Durham", "Wilmington", "Richmond"],
        "ST": ["NC", "NC", "NC", "NC", "VA"],
        "LAT": [35.21, 35.83, 35.98, 34.21, 37.53],
        "LON": [-80.83, -78.64, -78.90, -77.89, -77.48],
        "POP": [874579, 467665, 283506, 115451, 226610],
        "ALAND": [308.0, 147.0, 116.0, 52.0, 60.0],
        "AWATER": [1.5, 1.0, 0.8, 1.9, 2.4],
        "LSAD": [25, 25, 25, 25, 25],
        "FUNCSTAT": ["A", "A", "A", "A", "A"],
        "CBSA": [16740, 39580, 20500, 48900, 40060],
        "ISCUS": [True, True, True, True, True],
    })
    assert tuple(places.columns) == TABLE_COLUMNS["usplace"]
    places.to_pickle(root / "usplace.pkl")
    return root


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    root = write_reference_tables(tmp_path / "data")
    monkeypatch.setenv("LOGJAM_DATA_DIR", str(root))
    return root
