"""
Domain models for the NaviSound bunker-sounding engine.

These are plain immutable data classes; all calculations live in services.
"""

from navisound_app.models.ship import Drafts, ListState, Ship, ShipAttitude, TrimState
from navisound_app.models.tank import (
    HeelCorrectionRow,
    HeelTable,
    RawInput,
    Sounding,
    SoundingRow,
    SoundingTable,
    TankCalculationResult,
    TankCategory,
    TankKind,
    TankSpec,
    Volume,
)

__all__ = [
    "Drafts",
    "ListState",
    "Ship",
    "ShipAttitude",
    "TrimState",
    "HeelCorrectionRow",
    "HeelTable",
    "RawInput",
    "Sounding",
    "SoundingRow",
    "SoundingTable",
    "TankCalculationResult",
    "TankCategory",
    "TankKind",
    "TankSpec",
    "Volume",
]
