# logjam/core/reporting.py
"""
Create reports/<run_name>/ and write labels.json and run_metadata.json.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from logjam.core.config import (
    AXIS_HOFFSET_EXTRA,
    AXIS_VOFFSET_EXTRA,
    DEFAULT_MIN_DIST_RATIO,
    DEFAULT_OFFSET_AMT,
    MAX_ROAD_LAT_SPAN,
    REPORTS_DIR,
    SCHEMA_VERSION,
)
from logjam.core.types import LabelPlacement


def placement_to_dict(
    names: Sequence[str],
    lon: Sequence[float],
    lat: Sequence[float],
    placement: LabelPlacement,
) -> dict:
    """Structure for labels.json: one entry per labeled point, in input order."""
    labels = []
    for i, ((ha, va), (dx, dy)) in enumerate(zip(placement.align, placement.offset)):
        labels.append({
            "name": str(names[i]),
            "lon": float(lon[i]),
            "lat": float(lat[i]),
            "ha": ha.value,
            "va": va.value,
            "dx": float(dx),
            "dy": float(dy),
        })
    return {
        "schema_version": SCHEMA_VERSION,
        "count": len(labels),
        "labels": labels,
    }


def run_metadata_dict(run_name: str, inputs: dict[str, Any]) -> dict:
    """Timestamp, CLI inputs and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "inputs": inputs,
        "config": {
            "DEFAULT_OFFSET_AMT": DEFAULT_OFFSET_AMT,
            "DEFAULT_MIN_DIST_RATIO": DEFAULT_MIN_DIST_RATIO,
            "AXIS_HOFFSET_EXTRA": AXIS_HOFFSET_EXTRA,
            "AXIS_VOFFSET_EXTRA": AXIS_VOFFSET_EXTRA,
            "MAX_ROAD_LAT_SPAN": MAX_ROAD_LAT_SPAN,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_labels_json(
    report_dir: Path,
    names: Sequence[str],
    lon: Sequence[float],
    lat: Sequence[float],
    placement: LabelPlacement,
) -> Path:
    """Write labels.json to report_dir. Returns path to file."""
    path = report_dir / "labels.json"
    data = placement_to_dict(names, lon, lat, placement)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(report_dir: Path, run_name: str, inputs: dict[str, Any]) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, inputs)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path
