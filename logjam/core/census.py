# logjam/core/census.py
"""
U.S. census reference tables (2020 Census / Gazetteer derived) and state FIPS lookup.

Tables exclude U.S. territories. LAT/LON are centers of population except for
places and ZCTA5s, which use an interior point. Areas are in square miles.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping

import pandas as pd

from logjam.core.io import load_table

logger = logging.getLogger(__name__)


TABLE_COLUMNS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    # City, town or census-designated place.
    "usplace": ("STFIP", "PLFIP", "NAME", "ST", "LAT", "LON", "POP", "ALAND", "AWATER",
                "LSAD", "FUNCSTAT", "CBSA", "ISCUS"),
    "uscounty": ("STFIP", "COFIP", "NAME", "ST", "LAT", "LON", "POP", "ALAND", "AWATER", "CBSA"),
    "uscentract": ("STFIP", "COFIP", "TRFIP", "ST", "LAT", "LON", "POP", "ALAND", "AWATER", "ISCUS"),
    "uscenblkgrp": ("STFIP", "COFIP", "TRFIP", "BGFIP", "LAT", "LON", "POP", "ALAND", "AWATER"),
    "uszcta5": ("ZCTA5", "LAT", "LON", "POP", "ALAND", "AWATER", "ISCUS"),
    # Aggregated from uszcta5; LAT/LON is the population-weighted centroid.
    "uszcta3": ("ZCTA3", "LAT", "LON", "POP", "ALAND", "AWATER", "ISCUS"),
    # Aggregated from counties.
    "uscbsa": ("CBSA", "NAME", "LAT", "LON", "POP", "ALAND", "AWATER", "M_MSA", "CSA", "ISCUS"),
    # Aggregated from CBSAs.
    "uscsa": ("CSA", "NAME", "LAT", "LON", "POP", "ALAND", "AWATER"),
})


STATE_FIPS: Mapping[str, int] = MappingProxyType({
    "AL": 1, "AK": 2, "AZ": 4, "AR": 5, "CA": 6,
    "CO": 8, "CT": 9, "DE": 10, "FL": 12, "GA": 13,
    "HI": 15, "ID": 16, "IL": 17, "IN": 18, "IA": 19,
    "KS": 20, "KY": 21, "LA": 22, "ME": 23, "MD": 24,
    "MA": 25, "MI": 26, "MN": 27, "MS": 28, "MO": 29,
    "MT": 30, "NE": 31, "NV": 32, "NH": 33, "NJ": 34,
    "NM": 35, "NY": 36, "NC": 37, "ND": 38, "OH": 39,
    "OK": 40, "OR": 41, "PA": 42, "RI": 44, "SC": 45,
    "SD": 46, "TN": 47, "TX": 48, "UT": 49, "VT": 50,
    "VA": 51, "WA": 53, "WV": 54, "WI": 55, "WY": 56,
    "DC": 11, "AS": 60, "GU": 66, "MP": 69, "PR": 72,
    "VI": 78,
})


def _fips(state: str) -> int:
    key = str(state).strip().upper()
    if key not in STATE_FIPS:
        valid = ", ".join(sorted(STATE_FIPS))
        raise ValueError(f"{state!r} is not a valid US state or territory symbol. Valid symbols: {valid}")
    return STATE_FIPS[key]


def st2fips(state: str | Iterable[str]) -> int | list[int]:
    """
    FIPS code for a two-letter state/territory abbreviation, e.g. st2fips("NC") == 37.
    An iterable of abbreviations gives a list of codes.
    """
    if isinstance(state, str):
        return _fips(state)
    return [_fips(s) for s in state]


def _census_table(name: str, data_dir: str | Path | None = None) -> pd.DataFrame:
    df = load_table(name, data_dir)
    missing = [c for c in TABLE_COLUMNS[name] if c not in df.columns]
    if missing:
        logger.warning("Table %s is missing expected column(s): %s", name, ", ".join(missing))
    return df


def usplace(data_dir: str | Path | None = None) -> pd.DataFrame:
    """Places (cities, towns, CDPs) with population, area, CBSA and ISCUS flag."""
    return _census_table("usplace", data_dir)


def uscounty(data_dir: str | Path | None = None) -> pd.DataFrame:
    """Counties with center of population, area and CBSA."""
    return _census_table("uscounty", data_dir)


def uscentract(data_dir: str | Path | None = None) -> pd.DataFrame:
    return _census_table("uscentract", data_dir)


def uscenblkgrp(data_dir: str | Path | None = None) -> pd.DataFrame:
    return _census_table("uscenblkgrp", data_dir)


def uszcta5(data_dir: str | Path | None = None) -> pd.DataFrame:
    """5-digit ZIP Code Tabulation Areas."""
    return _census_table("uszcta5", data_dir)


def uszcta3(data_dir: str | Path | None = None) -> pd.DataFrame:
    """3-digit ZCTAs aggregated from uszcta5."""
    return _census_table("uszcta3", data_dir)


def uscbsa(data_dir: str | Path | None = None) -> pd.DataFrame:
    """Core-Based Statistical Areas; M_MSA tells metropolitan from micropolitan."""
    return _census_table("uscbsa", data_dir)


def uscsa(data_dir: str | Path | None = None) -> pd.DataFrame:
    """Combined Statistical Areas."""
    return _census_table("uscsa", data_dir)
