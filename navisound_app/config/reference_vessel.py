"""
Reference vessel particulars and bunker tank list.

Source: LOWLANDS HOPE tank calibration booklet (sounding and heel-correction
tables per tank). The tables themselves are loaded from the calibration
workbook (see services.calibration_import); the specs below carry empty tables
until one is applied.
"""

from __future__ import annotations

from navisound_app.models import Drafts, Ship, TankCategory, TankKind, TankSpec

REF_VESSEL_NAME = "LOWLANDS HOPE"

# Moulded breadth (m), used for heel from the midship draft marks
REF_BREADTH_M = 32.26

# Simple calculation method factor from the calibration booklet
REF_TRIM_FACTOR = 1.0829

# Density at 15°C from the last bunker delivery notes
REF_DENSITY_HFO_HIGH = 0.9887
REF_DENSITY_HFO_LOW = 0.9818
REF_DENSITY_DO = 0.9000

REFERENCE_SHIP = Ship(
    name=REF_VESSEL_NAME,
    breadth_m=REF_BREADTH_M,
    trim_factor=REF_TRIM_FACTOR,
)

# Drafts pre-filled on a new sounding sheet
REFERENCE_DRAFTS = Drafts(
    fore_p=5.55,
    fore_s=5.59,
    mid_p=5.85,
    mid_s=6.47,
    aft_p=6.78,
    aft_s=6.84,
)


def _table_tank(
    tank_id: str,
    name: str,
    category: TankCategory,
    max_volume_m3: float,
    density: float,
    sounding_reference_m: float,
) -> TankSpec:
    return TankSpec(
        id=tank_id,
        name=name,
        category=category,
        kind=TankKind.TABLE_DRIVEN,
        max_volume_m3=max_volume_m3,
        reference_density=density,
        max_sounding_reference_m=sounding_reference_m,
    )


def _manual_tank(tank_id: str, name: str, category: TankCategory, max_volume_m3: float, density: float) -> TankSpec:
    return TankSpec(
        id=tank_id,
        name=name,
        category=category,
        kind=TankKind.MANUAL_GAUGE,
        max_volume_m3=max_volume_m3,
        reference_density=density,
    )


_FO = TankCategory.FUEL_OIL
_DO = TankCategory.DIESEL_OIL

REFERENCE_TANKS: tuple[TankSpec, ...] = (
    # Fuel oil, sounded
    _table_tank("1P", "NO.1 FUEL OIL TANK (P)", _FO, 390.2, REF_DENSITY_HFO_HIGH, 21.01),
    _table_tank("1S", "NO.1 FUEL OIL TANK (S)", _FO, 406.5, REF_DENSITY_HFO_HIGH, 21.01),
    _table_tank("2P", "NO.2 FUEL OIL TANK (P)", _FO, 260.0, REF_DENSITY_HFO_HIGH, 20.361),
    _table_tank("2S", "NO.2 FUEL OIL TANK (S)", _FO, 260.0, REF_DENSITY_HFO_HIGH, 20.512),
    _table_tank("3P", "NO.3 FUEL OIL TANK (P)", _FO, 162.0, REF_DENSITY_HFO_LOW, 20.368),
    _table_tank("3S", "NO.3 FUEL OIL TANK (S)", _FO, 162.0, REF_DENSITY_HFO_LOW, 20.379),
    _table_tank("4S", "NO.4 FUEL OIL TANK (S)", _FO, 158.8, REF_DENSITY_HFO_LOW, 3.77),
    _table_tank("FO_OVER", "F.O. OVERFLOW TANK", _FO, 22.3, REF_DENSITY_HFO_HIGH, 3.872),
    # Fuel oil, manual gauge
    _manual_tank("SETT", "F.O. SETTLING TANK", _FO, 30.0, REF_DENSITY_HFO_HIGH),
    _manual_tank("SER1", "F.O. SERVICE TANK 1", _FO, 20.0, REF_DENSITY_HFO_HIGH),
    _manual_tank("SER2", "F.O. SERVICE TANK 2", _FO, 20.0, REF_DENSITY_HFO_HIGH),
    # Diesel oil, sounded
    _table_tank("DOP", "DIESEL OIL TANK (P)", _DO, 242.4, REF_DENSITY_DO, 3.761),
    _table_tank("DOS", "DIESEL OIL TANK (S)", _DO, 83.6, REF_DENSITY_DO, 3.755),
    # Diesel oil, manual gauge
    _manual_tank("DO_SETT", "D.O. SETTLING TANK", _DO, 15.0, REF_DENSITY_DO),
    _manual_tank("DO_SERV", "D.O. SERVICE TANK", _DO, 15.0, REF_DENSITY_DO),
)
