# logjam/core/io.py
"""
Load pre-packaged reference tables (census tables, border and road line sets).
Each table is a pickled pandas DataFrame ``<data_dir>/<name>.pkl``.
The data directory comes from the caller, else LOGJAM_DATA_DIR, else repo ``data/``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import numpy as np
import pandas as pd

from logjam.core.config import DATA_DIR_ENV, DATA_SUFFIX, DEFAULT_DATA_DIR

logger = logging.getLogger(__name__)


def resolve_data_dir(data_dir: str | Path | None = None) -> Path:
    """Explicit data_dir, then $LOGJAM_DATA_DIR, then the repo-level data/ directory."""
    if data_dir is not None:
        return Path(data_dir)
    env = os.environ.get(DATA_DIR_ENV, "").strip()
    if env:
        return Path(env)
    return DEFAULT_DATA_DIR


def table_path(name: str, data_dir: str | Path | None = None) -> Path:
    return resolve_data_dir(data_dir) / f"{name}{DATA_SUFFIX}"


def load_table(name: str, data_dir: str | Path | None = None) -> pd.DataFrame:
    """
    Deserialize the named table.
    Logs and re-raises the underlying error (missing file, bad pickle) on failure.
    """
    path = table_path(name, data_dir)
    try:
        df = pd.read_pickle(path)
    except Exception as exc:
        logger.error("Failed to load data %r from %s: %s", name, path, exc)
        raise
    logger.debug("Loaded %s: %d rows", name, len(df))
    return df


def load_lines(name: str, data_dir: str | Path | None = None) -> tuple[np.ndarray, np.ndarray]:
    """
    Load a line-set table with LON and LAT columns; NaN rows separate polylines.
    Returns (lon, lat) float arrays ready for ax.plot.
    """
    df = load_table(name, data_dir)
    missing = [c for c in ("LON", "LAT") if c not in df.columns]
    if missing:
        raise ValueError(f"Line table {name!r} is missing column(s): {', '.join(missing)}")
    return df["LON"].to_numpy(dtype=float), df["LAT"].to_numpy(dtype=float)
