"""
Ship attitude from draft readings.

Simplified method from the calibration booklet:
    trim = (mean aft draft - mean fore draft) * trim factor
    heel = (mid draft S - mid draft P) / breadth, in degrees
No hydrostatic tables are involved and readings are not validated.
"""

from __future__ import annotations

import logging
import math

from navisound_app.config.limits import ATTITUDE_DEAD_BAND, ATTITUDE_DECIMALS
from navisound_app.config.reference_vessel import REFERENCE_SHIP
from navisound_app.models import Drafts, ListState, Ship, ShipAttitude, TrimState

logger = logging.getLogger(__name__)

# Breadth below this is treated as unset (heel reported as 0)
EPS = 1e-9


def _safe_div(a: float, b: float, default: float = 0.0) -> float:
    """Avoid zero divisions."""
    if abs(b) < EPS:
        return default
    return a / b


def classify_trim(trim_m: float) -> TrimState:
    if trim_m > ATTITUDE_DEAD_BAND:
        return TrimState.BY_STERN
    if trim_m < -ATTITUDE_DEAD_BAND:
        return TrimState.BY_HEAD
    return TrimState.EVEN


def classify_list(heel_deg: float) -> ListState:
    if heel_deg > ATTITUDE_DEAD_BAND:
        return ListState.STARBOARD
    if heel_deg < -ATTITUDE_DEAD_BAND:
        return ListState.PORT
    return ListState.EVEN


def compute_attitude(drafts: Drafts, ship: Ship = REFERENCE_SHIP) -> ShipAttitude:
    """
    Trim (m, + by stern) and heel (deg, + starboard) for one set of drafts.

    Both values are rounded to 3 decimals before classification.
    """
    mean_fore = drafts.mean_fore
    mean_aft = drafts.mean_aft

    trim = (mean_aft - mean_fore) * ship.trim_factor
    # Small-angle approximation across the beam
    heel = math.degrees(_safe_div(drafts.mid_s - drafts.mid_p, ship.breadth_m))

    trim = round(trim, ATTITUDE_DECIMALS)
    heel = round(heel, ATTITUDE_DECIMALS)

    attitude = ShipAttitude(
        trim_m=trim,
        heel_deg=heel,
        trim_state=classify_trim(trim),
        list_state=classify_list(heel),
        mean_fore_m=mean_fore,
        mean_mid_m=drafts.mean_mid,
        mean_aft_m=mean_aft,
    )
    logger.debug(
        "Attitude: trim %.3f m (%s), heel %.3f deg (%s)",
        trim,
        attitude.trim_state.value,
        heel,
        attitude.list_state.value,
    )
    return attitude
