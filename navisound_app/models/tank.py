from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Tuple, Union


class TankCategory(Enum):
    FUEL_OIL = "Fuel Oil"
    DIESEL_OIL = "Diesel Oil"


class TankKind(Enum):
    # Sounding is converted through the tank's calibration tables
    TABLE_DRIVEN = auto()
    # Operator enters the volume directly; no tables exist
    MANUAL_GAUGE = auto()


def _frozen_mapping(values: Mapping[float, float]) -> Mapping[float, float]:
    return MappingProxyType({float(k): float(v) for k, v in values.items()})


def _with_zero_angle(corrections: Mapping[float, float]) -> Mapping[float, float]:
    """Upright ship needs no correction: angle 0.0 always maps to 0.0."""
    values = {float(k): float(v) for k, v in corrections.items()}
    values[0.0] = 0.0
    return MappingProxyType(dict(sorted(values.items())))


@dataclass(frozen=True, slots=True)
class HeelCorrectionRow:
    """
    One sounding of a heel-correction table: heel angle (deg) -> correction (m).

    Printed tables usually omit the upright column; the row is normalized on
    construction so its angle set always contains 0.0 with a zero correction.
    `table_angles` keeps the angles actually given, ascending; a heel outside
    the row's range takes the correction at the outermost of these.
    """
    sounding_m: float
    corrections: Mapping[float, float] = field(default_factory=dict)
    table_angles: Tuple[float, ...] = field(init=False, default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "table_angles", tuple(sorted(float(k) for k in self.corrections)))
        object.__setattr__(self, "corrections", _with_zero_angle(self.corrections))


@dataclass(frozen=True, slots=True)
class SoundingRow:
    """One sounding of a sounding-to-volume table: trim (m) -> volume (m³)."""
    sounding_m: float
    volumes: Mapping[float, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "volumes", _frozen_mapping(self.volumes))


HeelTable = Tuple[HeelCorrectionRow, ...]
SoundingTable = Tuple[SoundingRow, ...]


@dataclass(frozen=True, slots=True)
class TankSpec:
    """
    Static configuration of one bunker tank.

    Table-driven tanks carry a heel-correction table and a sounding table;
    manual gauge tanks carry empty tables and take the volume as entered.
    """
    id: str
    name: str = ""
    category: TankCategory = TankCategory.FUEL_OIL
    kind: TankKind = TankKind.TABLE_DRIVEN
    max_volume_m3: float = 0.0
    # Density at 15°C, used as the default specific gravity for readings
    reference_density: float = 0.0
    # Sounding pipe length (ullage reference)
    max_sounding_reference_m: float = 0.0
    heel_table: HeelTable = ()
    sounding_table: SoundingTable = ()

    @property
    def is_manual(self) -> bool:
        return self.kind is TankKind.MANUAL_GAUGE


@dataclass(frozen=True, slots=True)
class Sounding:
    """Measured sounding in metres."""
    value_m: float


@dataclass(frozen=True, slots=True)
class Volume:
    """Volume in m³ read from a manual gauge."""
    value_m3: float


RawInput = Union[Sounding, Volume]


@dataclass(frozen=True, slots=True)
class TankCalculationResult:
    tank_id: str
    category: TankCategory
    measured_sounding_m: float
    heel_correction_m: float
    corrected_sounding_m: float
    volume_m3: float
    weight_t: float
    temperature_c: float
    specific_gravity: float
    corrected_specific_gravity: float
    max_volume_m3: float = 0.0

    @property
    def fill_pct(self) -> float:
        """Volume as a percentage of tank capacity (0 when capacity is unknown)."""
        if self.max_volume_m3 <= 0.0:
            return 0.0
        return 100.0 * self.volume_m3 / self.max_volume_m3
