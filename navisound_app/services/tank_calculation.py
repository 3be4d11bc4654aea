"""
Per-tank sounding calculation: raw reading -> corrected sounding -> volume -> weight.

Each tank is evaluated independently from its own reading and the shared
ship attitude, so tanks can be recalculated in any order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from navisound_app.config.limits import DENSITY_TEMP_COEFFICIENT, REFERENCE_TEMPERATURE_C
from navisound_app.models import (
    RawInput,
    ShipAttitude,
    Sounding,
    TankCalculationResult,
    TankKind,
    TankSpec,
    Volume,
)
from navisound_app.services.interpolation import heel_correction_lookup, volume_lookup

logger = logging.getLogger(__name__)


class TankInputError(ValueError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnknownTankError(KeyError):
    def __init__(self, tank_id: str) -> None:
        self.tank_id = tank_id
        super().__init__(tank_id)

    def __str__(self) -> str:
        return f"Unknown tank '{self.tank_id}'."


def to_raw_input(tank: TankSpec, value: float | RawInput) -> RawInput:
    """Tag a plain number according to how the tank is gauged."""
    if isinstance(value, (Sounding, Volume)):
        return value
    if tank.kind is TankKind.MANUAL_GAUGE:
        return Volume(float(value))
    return Sounding(float(value))


def correct_specific_gravity(specific_gravity: float, temperature_c: float) -> float:
    """Density at the observed temperature from density at 15°C (linear approximation)."""
    temp_diff = temperature_c - REFERENCE_TEMPERATURE_C
    return specific_gravity - temp_diff * DENSITY_TEMP_COEFFICIENT


def compute_tank_result(
    tank: TankSpec,
    raw_input: float | RawInput,
    temperature_c: float,
    specific_gravity: float,
    attitude: ShipAttitude,
) -> TankCalculationResult:
    """
    Corrected sounding, volume and weight for one tank.

    Sounded tanks: the heel correction is added to the sounding (clamped at 0)
    and the volume is read from the sounding table at the current trim.
    Manual gauge tanks: the entered volume is used as is.
    """
    reading = to_raw_input(tank, raw_input)

    if isinstance(reading, Volume):
        if tank.kind is not TankKind.MANUAL_GAUGE:
            raise TankInputError(f"Tank {tank.id} is sounded; a volume reading is not accepted.")
        measured = 0.0
        heel_corr = 0.0
        corrected = 0.0
        volume = reading.value_m3
    else:
        if tank.kind is not TankKind.TABLE_DRIVEN:
            raise TankInputError(f"Tank {tank.id} is gauged manually; enter a volume, not a sounding.")
        measured = reading.value_m
        heel_corr = heel_correction_lookup(measured, attitude.heel_deg, tank.heel_table)
        corrected = max(0.0, measured + heel_corr)
        volume = volume_lookup(corrected, attitude.trim_m, tank.sounding_table)

    corrected_sg = correct_specific_gravity(specific_gravity, temperature_c)
    weight = volume * corrected_sg

    logger.debug(
        "Tank %s: sounding %.3f m, heel corr %.3f m, volume %.2f m3, weight %.2f t",
        tank.id,
        measured,
        heel_corr,
        volume,
        weight,
    )
    return TankCalculationResult(
        tank_id=tank.id,
        category=tank.category,
        measured_sounding_m=measured,
        heel_correction_m=heel_corr,
        corrected_sounding_m=corrected,
        volume_m3=volume,
        weight_t=weight,
        temperature_c=temperature_c,
        specific_gravity=specific_gravity,
        corrected_specific_gravity=corrected_sg,
        max_volume_m3=tank.max_volume_m3,
    )


@dataclass(slots=True)
class TankReading:
    """Operator input for one tank. specific_gravity None means the tank's reference density."""
    tank_id: str
    raw_input: float | RawInput = 0.0
    temperature_c: float = REFERENCE_TEMPERATURE_C
    specific_gravity: float | None = None


class TankCalculator:
    """Evaluates readings against an injected, read-only set of tank specs."""

    def __init__(self, tanks: Iterable[TankSpec]) -> None:
        by_id: Dict[str, TankSpec] = {}
        for tank in tanks:
            if tank.id in by_id:
                raise ValueError(f"Duplicate tank id '{tank.id}'.")
            by_id[tank.id] = tank
        self._tanks: Mapping[str, TankSpec] = MappingProxyType(by_id)

    @property
    def tanks(self) -> Mapping[str, TankSpec]:
        return self._tanks

    def get_tank(self, tank_id: str) -> TankSpec:
        tank = self._tanks.get(tank_id)
        if tank is None:
            raise UnknownTankError(tank_id)
        return tank

    def calculate(self, reading: TankReading, attitude: ShipAttitude) -> TankCalculationResult:
        tank = self.get_tank(reading.tank_id)
        sg = reading.specific_gravity if reading.specific_gravity is not None else tank.reference_density
        return compute_tank_result(tank, reading.raw_input, reading.temperature_c, sg, attitude)

    def calculate_all(self, readings: Iterable[TankReading], attitude: ShipAttitude) -> List[TankCalculationResult]:
        return [self.calculate(r, attitude) for r in readings]
