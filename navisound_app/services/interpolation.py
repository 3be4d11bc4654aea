"""
Table interpolation for tank calibration data.

Both calibration tables are two-dimensional: rows keyed by sounding, and
within each row a second axis (heel angle or trim). Lookups interpolate
linearly along the row first, then across the two bracketing soundings.
Values outside the calibrated range are clamped to the nearest edge (flat
extrapolation) on both axes.
"""

from __future__ import annotations

from typing import Mapping, Sequence, Tuple, TypeVar

from navisound_app.config.limits import LERP_EPS
from navisound_app.models import HeelCorrectionRow, SoundingRow

RowT = TypeVar("RowT", HeelCorrectionRow, SoundingRow)


def lerp(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    """Linear interpolation; returns y0 when x0 and x1 coincide."""
    if abs(x1 - x0) < LERP_EPS:
        return y0
    return y0 + (x - x0) * (y1 - y0) / (x1 - x0)


def select_rows(key: float, table: Sequence[RowT]) -> Tuple[RowT, RowT]:
    """
    Return the (lower, upper) rows bracketing key by sounding.

    At or beyond either end the edge row is returned for both bounds. The
    table must be non-empty and sorted by ascending sounding.
    """
    first, last = table[0], table[-1]
    if key <= first.sounding_m:
        return first, first
    if key >= last.sounding_m:
        return last, last
    for lower, upper in zip(table, table[1:]):
        # Half-open bracket: a key on a row's sounding evaluates at that row
        if lower.sounding_m <= key < upper.sounding_m:
            return lower, upper
    # Only reachable for an unsorted table
    return last, last


def interpolate_row(values: Mapping[float, float], key: float) -> float:
    """Interpolate along one row's secondary axis, clamped to the row's key range."""
    if not values:
        return 0.0
    keys = sorted(values)
    if key <= keys[0]:
        return values[keys[0]]
    if key >= keys[-1]:
        return values[keys[-1]]
    for k0, k1 in zip(keys, keys[1:]):
        if k0 <= key < k1:
            return lerp(key, k0, k1, values[k0], values[k1])
    return values[keys[-1]]


def _heel_row_correction(row: HeelCorrectionRow, heel_deg: float) -> float:
    """
    Correction along one heel row.

    Within the row's range (given angles plus the upright 0.0) this is plain
    interpolation. Beyond it the correction at the outermost given angle on
    that side is used, so a row printed for one side only still yields its
    first column rather than the upright zero.
    """
    if not row.table_angles:
        return 0.0
    angles = list(row.corrections)
    if heel_deg < angles[0]:
        return row.corrections[row.table_angles[0]]
    if heel_deg > angles[-1]:
        return row.corrections[row.table_angles[-1]]
    return interpolate_row(row.corrections, heel_deg)


def heel_correction_lookup(sounding_m: float, heel_deg: float, table: Sequence[HeelCorrectionRow]) -> float:
    """
    Sounding correction (m) for the given heel, interpolated in both sounding and angle.

    Every row carries a zero correction at 0.0 deg, so an upright ship always
    gets 0 regardless of table contents. An empty table gives 0.
    """
    if not table:
        return 0.0
    lower, upper = select_rows(sounding_m, table)
    corr_lower = _heel_row_correction(lower, heel_deg)
    corr_upper = _heel_row_correction(upper, heel_deg)
    return lerp(sounding_m, lower.sounding_m, upper.sounding_m, corr_lower, corr_upper)


def volume_lookup(corrected_sounding_m: float, trim_m: float, table: Sequence[SoundingRow]) -> float:
    """
    Tank volume (m³) at a corrected sounding and trim.

    Returns 0 for an empty table or a negative sounding; otherwise clamps to
    the first/last calibrated row and to each row's trim range.
    """
    if not table or corrected_sounding_m < 0:
        return 0.0
    lower, upper = select_rows(corrected_sounding_m, table)
    vol_lower = interpolate_row(lower.volumes, trim_m)
    vol_upper = interpolate_row(upper.volumes, trim_m)
    return lerp(corrected_sounding_m, lower.sounding_m, upper.sounding_m, vol_lower, vol_upper)
