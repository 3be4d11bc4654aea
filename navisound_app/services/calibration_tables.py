"""
Builders and structural checks for tank calibration tables.

Printed calibration booklets list each sounding with a fixed set of eight
columns; the builders map those positions to trim / heel-angle keys. Tables
are validated once, when built, so lookups can assume sorted rows.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple, TypeVar

from navisound_app.config.limits import HEEL_CORRECTION_CM_PER_M, HEEL_TABLE_ANGLES, SOUNDING_TABLE_TRIMS
from navisound_app.models import HeelCorrectionRow, HeelTable, SoundingRow, SoundingTable

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", HeelCorrectionRow, SoundingRow)


class CalibrationTableError(ValueError):
    def __init__(self, message: str, row_index: int | None = None) -> None:
        self.message = message
        self.row_index = row_index
        super().__init__(message)


def _check_width(kind: str, depth: float, values: Sequence[float], expected: int) -> None:
    if len(values) != expected:
        raise CalibrationTableError(
            f"{kind} row at {depth} m has {len(values)} values, expected {expected}."
        )


def sounding_row(depth_m: float, volumes: Sequence[float]) -> SoundingRow:
    """Sounding row from booklet order: Even, -2.0, -1.0, 1.0, 2.0, 3.0, 4.0, 5.0 m trim."""
    _check_width("Sounding", depth_m, volumes, len(SOUNDING_TABLE_TRIMS))
    return SoundingRow(
        sounding_m=float(depth_m),
        volumes=dict(zip(SOUNDING_TABLE_TRIMS, (float(v) for v in volumes))),
    )


def heel_row(depth_m: float, corrections_cm: Sequence[float]) -> HeelCorrectionRow:
    """Heel row from booklet order: -2.0 ... -0.5, 0.5 ... 2.0 deg, values in cm."""
    _check_width("Heel correction", depth_m, corrections_cm, len(HEEL_TABLE_ANGLES))
    return HeelCorrectionRow(
        sounding_m=float(depth_m),
        corrections={
            angle: float(c) / HEEL_CORRECTION_CM_PER_M
            for angle, c in zip(HEEL_TABLE_ANGLES, corrections_cm)
        },
    )


def _validate_rows(kind: str, rows: Sequence[RowT]) -> None:
    previous: float | None = None
    for i, row in enumerate(rows):
        if row.sounding_m < 0:
            raise CalibrationTableError(
                f"{kind} table row {i}: negative sounding {row.sounding_m} m.", row_index=i
            )
        if previous is not None and row.sounding_m <= previous:
            what = "duplicate" if row.sounding_m == previous else "descending"
            raise CalibrationTableError(
                f"{kind} table row {i}: {what} sounding {row.sounding_m} m after {previous} m.",
                row_index=i,
            )
        previous = row.sounding_m


def build_heel_table(rows: Iterable[HeelCorrectionRow]) -> HeelTable:
    """Validate and freeze a heel-correction table."""
    table: Tuple[HeelCorrectionRow, ...] = tuple(rows)
    _validate_rows("Heel correction", table)
    logger.debug("Built heel-correction table with %d rows", len(table))
    return table


def build_sounding_table(rows: Iterable[SoundingRow]) -> SoundingTable:
    """Validate and freeze a sounding-to-volume table."""
    table: Tuple[SoundingRow, ...] = tuple(rows)
    _validate_rows("Sounding", table)
    logger.debug("Built sounding table with %d rows", len(table))
    return table
