"""
Command-line entry point for the NaviSound bunker-sounding calculator.

Example:

    python -m navisound_app.main --drafts 5.55 5.59 5.85 6.47 6.78 6.84 \
        --tables calibration.xlsx --readings readings.csv

The readings CSV has columns Tank, Value (sounding in m, or volume in m³ for
manual gauge tanks), and optionally Temperature and Density.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List, Sequence

import pandas as pd

from navisound_app.config.reference_vessel import REF_VESSEL_NAME, REFERENCE_DRAFTS, REFERENCE_SHIP, REFERENCE_TANKS
from navisound_app.config.settings import Settings, init_logging
from navisound_app.models import Drafts, TankCalculationResult
from navisound_app.reports import build_sounding_summary_text
from navisound_app.services.attitude import compute_attitude
from navisound_app.services.calibration_import import apply_calibration, parse_calibration_file
from navisound_app.services.calibration_tables import CalibrationTableError
from navisound_app.services.tank_calculation import TankCalculator, TankInputError, TankReading, UnknownTankError

logger = logging.getLogger(__name__)


def _coerce_float(val, default: float | None) -> float | None:
    """Form-style coercion: blank, unparseable or non-finite input becomes the default."""
    if val is None:
        return default
    if isinstance(val, str):
        val = val.strip().replace(",", ".")
        if not val:
            return default
    try:
        result = float(val)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(result):
        return default
    return result


def read_readings(path: Path) -> List[TankReading]:
    """Read operator readings from CSV. Unparseable values are taken as 0."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip().lower() for c in df.columns]
    if "tank" not in df.columns or "value" not in df.columns:
        raise ValueError(f"Readings file needs Tank and Value columns. Found: {list(df.columns)}")

    readings: List[TankReading] = []
    for _, r in df.iterrows():
        tank_id = str(r["tank"]).strip()
        if not tank_id:
            continue
        temperature = _coerce_float(r.get("temperature"), 15.0)
        readings.append(
            TankReading(
                tank_id=tank_id,
                raw_input=_coerce_float(r["value"], 0.0),
                temperature_c=temperature,
                specific_gravity=_coerce_float(r.get("density"), None),
            )
        )
    return readings


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="navisound",
        description="Bunker sounding: trim/heel from drafts, tank volumes and weights from soundings.",
    )
    p.add_argument(
        "--drafts",
        type=float,
        nargs=6,
        metavar=("FORE_P", "FORE_S", "MID_P", "MID_S", "AFT_P", "AFT_S"),
        help="Draft readings in metres (default: last reference readings)",
    )
    p.add_argument("--tables", type=Path, help="Calibration workbook (.xlsx or .csv)")
    p.add_argument("--readings", type=Path, help="Tank readings CSV")
    p.add_argument("--vessel", default=REF_VESSEL_NAME, help="Vessel name for the report header")
    p.add_argument("--date", default=date.today().isoformat(), help="Report date (YYYY-MM-DD)")
    p.add_argument("-v", "--verbose", action="store_true", help="Log to stderr as well as the log file")
    return p


def run(argv: Sequence[str] | None = None, settings: Settings | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = settings or Settings.default()
    init_logging(settings, console=args.verbose)

    drafts = Drafts(*args.drafts) if args.drafts else REFERENCE_DRAFTS
    attitude = compute_attitude(drafts, REFERENCE_SHIP)

    tanks = REFERENCE_TANKS
    tables_path = args.tables or settings.calibration_path
    try:
        if tables_path is not None:
            tanks = apply_calibration(tanks, parse_calibration_file(tables_path))
        readings = read_readings(args.readings) if args.readings else []
        calculator = TankCalculator(tanks)
        results: Dict[str, TankCalculationResult] = {
            res.tank_id: res for res in calculator.calculate_all(readings, attitude)
        }
    except (OSError, ValueError, CalibrationTableError, TankInputError, UnknownTankError) as exc:
        logger.error("Sounding calculation failed: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(build_sounding_summary_text(args.vessel, args.date, drafts, attitude, tanks, results))
    return 0


def main() -> None:
    """Bootstraps the NaviSound command-line calculator."""
    sys.exit(run())


if __name__ == "__main__":
    main()
