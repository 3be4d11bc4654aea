"""
Import tank calibration tables from Excel or CSV.

Layout: one row per sounding, with columns
    Tank      tank id (optional in Excel when each sheet is one tank)
    Table     "sounding" (volumes in m³) or "heel" (corrections in cm)
    Sounding  sounding in metres
followed by one column per trim (m) or heel angle (deg), headed by the
number itself, e.g. "-2.0", "0.5", "Even", "1.0 m", "-1.5°".
Header names are case-insensitive. Rows without a numeric sounding are skipped.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

import pandas as pd

from navisound_app.config.limits import HEEL_CORRECTION_CM_PER_M
from navisound_app.models import HeelCorrectionRow, HeelTable, SoundingRow, SoundingTable, TankKind, TankSpec
from navisound_app.services.calibration_tables import (
    CalibrationTableError,
    build_heel_table,
    build_sounding_table,
)

logger = logging.getLogger(__name__)

_TANK_ALIASES = ("tank", "tank id", "tank no", "tank no.", "tank name", "id")
_TABLE_ALIASES = ("table", "table type", "type")
_SOUNDING_ALIASES = ("sounding", "sounding (m)", "sounding(m)", "sounding m", "depth", "depth (m)", "snd")

_SOUNDING_TABLE_NAMES = ("sounding", "volume", "snd", "capacity")
_HEEL_TABLE_NAMES = ("heel", "heel correction", "list", "list correction")

_EVEN_NAMES = ("even", "0", "0.0")
_AXIS_RE = re.compile(r"^([-+]?\d+(?:\.\d+)?)\s*(?:m|deg|°)?$")


@dataclass(frozen=True, slots=True)
class TankTables:
    heel_table: HeelTable = ()
    sounding_table: SoundingTable = ()


def _flatten_column_name(c) -> str:
    """Flatten MultiIndex or tuple column to single string."""
    if hasattr(c, "__iter__") and not isinstance(c, str):
        try:
            return " ".join(str(x).strip() for x in c).strip()
        except TypeError:
            pass
    return str(c).strip()


def _column_key(c) -> str:
    key = _flatten_column_name(c).lower().replace("\n", " ").replace("\r", " ").replace("\t", " ")
    return re.sub(r"\s+", " ", key).strip()


def _axis_value(key: str) -> float | None:
    """Trim/heel value encoded in a header, or None when the header is not an axis column."""
    if key in _EVEN_NAMES:
        return 0.0
    m = _AXIS_RE.match(key)
    if m is None:
        return None
    return float(m.group(1))


def _normalize_columns(df: pd.DataFrame) -> Tuple[pd.DataFrame, Dict[str, float]]:
    """
    Rename tank/table/sounding columns to canonical names and collect the axis columns.

    Returns the renamed frame and a mapping column name -> axis value.
    """
    if hasattr(df.columns, "levels"):
        df = df.copy()
        df.columns = [_flatten_column_name(c) for c in df.columns]
    rename = {}
    axis: Dict[str, float] = {}
    for c in df.columns:
        key = _column_key(c)
        if key in _TANK_ALIASES:
            rename[c] = "tank"
        elif key in _TABLE_ALIASES:
            rename[c] = "table"
        elif key in _SOUNDING_ALIASES:
            rename[c] = "sounding_m"
        else:
            value = _axis_value(key)
            if value is not None:
                axis[str(c)] = value
    df = df.rename(columns=rename)
    df.columns = [str(c) for c in df.columns]
    return df, axis


def _safe_float(val) -> float | None:
    """Convert value to float; None for NaN, None, empty string, or invalid."""
    if val is None:
        return None
    if isinstance(val, str):
        val = val.strip().replace(",", ".")
        if not val:
            return None
    try:
        result = float(val)
    except (TypeError, ValueError):
        return None
    if pd.isna(result):
        return None
    return result


def _table_kind(value) -> str | None:
    key = str(value).strip().lower() if value is not None and not pd.isna(value) else ""
    if key in _SOUNDING_TABLE_NAMES:
        return "sounding"
    if key in _HEEL_TABLE_NAMES:
        return "heel"
    return None


def _parse_rows(
    tank_key: str,
    df: pd.DataFrame,
    axis: Dict[str, float],
) -> Tuple[List[HeelCorrectionRow], List[SoundingRow]]:
    heel_rows: List[HeelCorrectionRow] = []
    sounding_rows: List[SoundingRow] = []
    for idx, r in df.iterrows():
        kind = _table_kind(r.get("table"))
        sounding = _safe_float(r.get("sounding_m"))
        if kind is None or sounding is None:
            logger.warning("Tank %s: skipping row %s (table=%r, sounding=%r)", tank_key, idx, r.get("table"), r.get("sounding_m"))
            continue
        values = {}
        for col, axis_value in axis.items():
            v = _safe_float(r.get(col))
            if v is not None:
                values[axis_value] = v
        if kind == "heel":
            heel_rows.append(
                HeelCorrectionRow(
                    sounding_m=sounding,
                    corrections={a: v / HEEL_CORRECTION_CM_PER_M for a, v in values.items()},
                )
            )
        else:
            sounding_rows.append(SoundingRow(sounding_m=sounding, volumes=values))
    return heel_rows, sounding_rows


_PendingRows = Dict[str, Tuple[List[HeelCorrectionRow], List[SoundingRow]]]


def _collect_rows(tank_key: str, df: pd.DataFrame, axis: Dict[str, float], pending: _PendingRows) -> None:
    heel_rows, sounding_rows = _parse_rows(tank_key, df, axis)
    if tank_key in pending:
        logger.debug("Tank %s: merging rows from another sheet", tank_key)
    heel_acc, sounding_acc = pending.setdefault(tank_key, ([], []))
    heel_acc.extend(heel_rows)
    sounding_acc.extend(sounding_rows)


def _build_tank_tables(
    tank_key: str,
    heel_rows: List[HeelCorrectionRow],
    sounding_rows: List[SoundingRow],
) -> TankTables:
    heel_rows = sorted(heel_rows, key=lambda x: x.sounding_m)
    sounding_rows = sorted(sounding_rows, key=lambda x: x.sounding_m)
    try:
        return TankTables(
            heel_table=build_heel_table(heel_rows),
            sounding_table=build_sounding_table(sounding_rows),
        )
    except CalibrationTableError as exc:
        raise CalibrationTableError(f"Tank {tank_key}: {exc.message}", row_index=exc.row_index) from exc


def _read_frame(
    frame_name: str,
    df: pd.DataFrame,
    pending: _PendingRows,
    require_tank_column: bool,
) -> None:
    """Collect one sheet/CSV frame's rows into pending. Groups by tank column when present."""
    df, axis = _normalize_columns(df)
    if "table" not in df.columns or "sounding_m" not in df.columns:
        raise ValueError(
            f"{frame_name}: missing columns. Expected at least: Table, Sounding. Found: {list(df.columns)}"
        )
    if not axis:
        raise ValueError(f"{frame_name}: no trim/heel columns found. Found: {list(df.columns)}")

    if "tank" in df.columns:
        df = df.copy()
        df["tank"] = df["tank"].ffill()
        for tank_name, group in df.groupby("tank", dropna=True, sort=False):
            key = str(tank_name).strip()
            if not key:
                continue
            _collect_rows(key, group, axis, pending)
        return
    if require_tank_column:
        raise ValueError(f"{frame_name}: missing Tank column.")
    _collect_rows(frame_name.strip(), df, axis, pending)


def parse_calibration_file(file_path: str | Path) -> Dict[str, TankTables]:
    """
    Parse calibration tables for one or more tanks from Excel (.xlsx) or CSV.

    - Excel: each sheet is one tank (sheet name is the tank id) unless the
      sheet has a Tank column, in which case rows are grouped by it. A tank
      may be spread over several sheets (e.g. "Heel" and "Sounding"); its
      rows are merged before the tables are built.
    - CSV: a Tank column is required.

    Raises FileNotFoundError, ValueError for unsupported formats or missing
    columns, and CalibrationTableError for unsorted or duplicate soundings.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    pending: _PendingRows = {}
    suffix = path.suffix.lower()
    if suffix in (".xlsx", ".xls"):
        all_sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl")
        for sheet_name, df in all_sheets.items():
            _read_frame(str(sheet_name), df, pending, require_tank_column=False)
    elif suffix == ".csv":
        df = pd.read_csv(path)
        _read_frame(path.name, df, pending, require_tank_column=True)
    else:
        raise ValueError(f"Unsupported format: {path.suffix}. Use .xlsx or .csv.")

    result = {key: _build_tank_tables(key, heel, snd) for key, (heel, snd) in pending.items()}
    logger.info("Loaded calibration tables for %d tanks from %s", len(result), path)
    return result


def apply_calibration(tanks: Iterable[TankSpec], tables: Dict[str, TankTables]) -> Tuple[TankSpec, ...]:
    """Return tank specs with imported tables attached to the sounded tanks."""
    updated: List[TankSpec] = []
    used = set()
    for tank in tanks:
        if tank.kind is not TankKind.TABLE_DRIVEN:
            updated.append(tank)
            continue
        tank_tables = tables.get(tank.id)
        if tank_tables is None:
            logger.warning("No calibration tables for sounded tank %s; volumes will read 0", tank.id)
            updated.append(tank)
            continue
        used.add(tank.id)
        updated.append(
            dataclasses.replace(
                tank,
                heel_table=tank_tables.heel_table,
                sounding_table=tank_tables.sounding_table,
            )
        )
    for key in sorted(set(tables) - used):
        logger.warning("Calibration tables for '%s' do not match any sounded tank", key)
    return tuple(updated)
