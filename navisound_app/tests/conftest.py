"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on path when running tests
_project_root = Path(__file__).resolve().parents[2]
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from navisound_app.config.settings import Settings
from navisound_app.models import (
    Drafts,
    HeelCorrectionRow,
    ShipAttitude,
    SoundingRow,
    TankCategory,
    TankKind,
    TankSpec,
)
from navisound_app.services.calibration_tables import build_heel_table, build_sounding_table, heel_row


@pytest.fixture
def reference_drafts():
    """Drafts from the reference vessel's last sounding sheet."""
    return Drafts(fore_p=5.55, fore_s=5.59, mid_p=5.85, mid_s=6.47, aft_p=6.78, aft_s=6.84)


@pytest.fixture
def volume_table():
    """Three soundings, three trims; values chosen to interpolate exactly."""
    return build_sounding_table(
        [
            SoundingRow(0.0, {-1.0: 0.0, 0.0: 0.0, 1.0: 0.0}),
            SoundingRow(1.0, {-1.0: 90.0, 0.0: 100.0, 1.0: 110.0}),
            SoundingRow(2.0, {-1.0: 230.0, 0.0: 250.0, 1.0: 270.0}),
        ]
    )


@pytest.fixture
def heel_table():
    """Booklet-style heel table (cm), two soundings."""
    return build_heel_table(
        [
            heel_row(1.0, [-4, -3, -2, -1, 1, 2, 3, 4]),
            heel_row(2.0, [-8, -6, -4, -2, 2, 4, 6, 8]),
        ]
    )


@pytest.fixture
def sounded_tank(heel_table, volume_table):
    return TankSpec(
        id="1P",
        name="NO.1 FUEL OIL TANK (P)",
        category=TankCategory.FUEL_OIL,
        kind=TankKind.TABLE_DRIVEN,
        max_volume_m3=390.2,
        reference_density=0.9887,
        max_sounding_reference_m=21.01,
        heel_table=heel_table,
        sounding_table=volume_table,
    )


@pytest.fixture
def manual_tank():
    return TankSpec(
        id="SETT",
        name="F.O. SETTLING TANK",
        category=TankCategory.FUEL_OIL,
        kind=TankKind.MANUAL_GAUGE,
        max_volume_m3=30.0,
        reference_density=0.9887,
    )


@pytest.fixture
def diesel_manual_tank():
    return TankSpec(
        id="DO_SERV",
        name="D.O. SERVICE TANK",
        category=TankCategory.DIESEL_OIL,
        kind=TankKind.MANUAL_GAUGE,
        max_volume_m3=15.0,
        reference_density=0.9,
    )


@pytest.fixture
def upright():
    """Even keel, no list."""
    return ShipAttitude(trim_m=0.0, heel_deg=0.0)


@pytest.fixture
def temp_settings(tmp_path):
    """Settings writing logs into a temporary directory."""
    return Settings(project_root=tmp_path, data_dir=tmp_path, log_path=tmp_path / "navisound.log")


@pytest.fixture
def steep_negative_heel_table():
    """Heel table whose corrections exceed the sounding near the bottom."""
    return build_heel_table(
        [
            HeelCorrectionRow(0.0, {1.0: -0.5}),
            HeelCorrectionRow(1.0, {1.0: -0.5}),
        ]
    )
