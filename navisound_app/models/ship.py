from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TrimState(Enum):
    BY_HEAD = "By Head"
    BY_STERN = "By Stern"
    EVEN = "Even"


class ListState(Enum):
    PORT = "Port"
    STARBOARD = "Starboard"
    EVEN = "Even"


@dataclass(slots=True)
class Ship:
    """Vessel particulars needed to turn draft readings into trim and heel."""
    name: str = ""
    breadth_m: float = 0.0
    # Relates draft-mark separation to true trim for this hull
    trim_factor: float = 1.0


@dataclass(slots=True)
class Drafts:
    """Draft readings in metres, read at the fore, mid and aft marks on each side."""
    fore_p: float = 0.0
    fore_s: float = 0.0
    mid_p: float = 0.0
    mid_s: float = 0.0
    aft_p: float = 0.0
    aft_s: float = 0.0

    @property
    def mean_fore(self) -> float:
        return (self.fore_p + self.fore_s) / 2

    @property
    def mean_mid(self) -> float:
        return (self.mid_p + self.mid_s) / 2

    @property
    def mean_aft(self) -> float:
        return (self.aft_p + self.aft_s) / 2


@dataclass(frozen=True, slots=True)
class ShipAttitude:
    """
    Trim and heel derived from one set of drafts.

    trim_m is positive by the stern, heel_deg positive to starboard. Both are
    already rounded to millimetre precision.
    """
    trim_m: float = 0.0
    heel_deg: float = 0.0
    trim_state: TrimState = TrimState.EVEN
    list_state: ListState = ListState.EVEN
    mean_fore_m: float = 0.0
    mean_mid_m: float = 0.0
    mean_aft_m: float = 0.0
