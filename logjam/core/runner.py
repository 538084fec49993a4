# logjam/core/runner.py
"""
CLI entrypoint: load points, draw the map, place labels, save map.png,
labels.json and run_metadata.json under reports/<run_name>/.

Points come from a CSV file (NAME, LON, LAT columns) or from usplace()
filtered by state and minimum population.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd

from logjam.core.census import st2fips, usplace
from logjam.core.config import (
    DEFAULT_DPI,
    DEFAULT_MIN_DIST_RATIO,
    DEFAULT_OFFSET_AMT,
    DEFAULT_XEXPAND,
    DEFAULT_YEXPAND,
    LOG_LEVEL,
    REPORTS_DIR,
)
from logjam.core.error_codes import DATA_ERRORS, NO_POINTS, error_key_for, user_message
from logjam.core.render import label_points, make_map, save_map, scatter_points
from logjam.core.reporting import (
    ensure_report_dir,
    write_labels_json,
    write_run_metadata_json,
)
from logjam.core.types import Backend, Region

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Draw a map and label points without overlap.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--points", type=str, default=None, help="CSV with NAME, LON, LAT columns")
    src.add_argument("--state", type=str, default=None, help="Label places of this state, e.g. NC")
    p.add_argument("--min-pop", type=int, default=100_000, dest="min_pop", help="Minimum place population (--state)")
    p.add_argument("--region", type=str, default=Region.WORLD.value, help="World, US or CUS (used without points)")
    p.add_argument("--backend", type=str, default=Backend.AGG.value, help="matplotlib backend")
    p.add_argument("--offset", type=float, default=DEFAULT_OFFSET_AMT, help="Base label offset (pt)")
    p.add_argument("--min-dist-ratio", type=float, default=DEFAULT_MIN_DIST_RATIO, dest="min_dist_ratio")
    p.add_argument("--xexpand", type=float, default=DEFAULT_XEXPAND)
    p.add_argument("--yexpand", type=float, default=DEFAULT_YEXPAND)
    p.add_argument("--no-roads", action="store_false", dest="roads", help="Never draw NHS roads")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--data-dir", type=str, default=None, dest="data_dir", help="Reference data directory")
    p.add_argument("--dpi", type=int, default=DEFAULT_DPI)
    return p.parse_args(argv)


def load_points(args: argparse.Namespace) -> pd.DataFrame:
    """NAME, LON, LAT frame from --points or from usplace() for --state."""
    if args.points:
        df = pd.read_csv(args.points)
        missing = [c for c in ("NAME", "LON", "LAT") if c not in df.columns]
        if missing:
            raise ValueError(f"Points file is missing column(s): {', '.join(missing)}")
        return df[["NAME", "LON", "LAT"]].dropna(subset=["LON", "LAT"]).reset_index(drop=True)
    fips = st2fips(args.state)
    places = usplace(args.data_dir)
    sel = places[(places["STFIP"] == fips) & (places["POP"] > args.min_pop)]
    return sel[["NAME", "LON", "LAT"]].reset_index(drop=True)


def run(args: argparse.Namespace) -> list[Path]:
    """Run one labeling job; returns the written file paths."""
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()
    points = load_points(args)
    if points.empty:
        raise ValueError(user_message(NO_POINTS))

    lon = points["LON"].to_numpy(dtype=float)
    lat = points["LAT"].to_numpy(dtype=float)
    if len(points) >= 2:
        view = make_map(
            lon, lat,
            backend=args.backend,
            xexpand=args.xexpand,
            yexpand=args.yexpand,
            do_road_background=args.roads,
            data_dir=args.data_dir,
        )
    else:
        view = make_map(region=args.region, backend=args.backend, do_road_background=args.roads, data_dir=args.data_dir)
    scatter_points(view, lon, lat)
    placement, _ = label_points(view, lon, lat, points["NAME"].tolist(), offset_amt=args.offset, min_dist_ratio=args.min_dist_ratio)
    logger.info("Placed %d labels", len(placement))

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    map_path = save_map(view, report_dir / "map.png", dpi=args.dpi)
    labels_path = write_labels_json(report_dir, points["NAME"].tolist(), lon, lat, placement)
    meta_path = write_run_metadata_json(report_dir, args.run_name, vars(args))
    return [map_path, labels_path, meta_path]


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    args = _parse_args(argv)
    try:
        paths = run(args)
    except (ValueError, *DATA_ERRORS) as exc:
        logger.debug("Run failed", exc_info=True)
        raise SystemExit(f"error: {exc}\n{user_message(error_key_for(exc))}") from exc
    for p in paths:
        print(p)


if __name__ == "__main__":
    main()
