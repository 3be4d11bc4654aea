"""
Numeric constants for the sounding calculations.

Values follow the vessel's bunker-sounding procedure: simplified trim from
draft marks, small-angle heel, and an ASTM 54B-style linear density correction.
"""

from __future__ import annotations

# Trim/heel magnitude (m / deg) below which the ship is reported as Even.
# Suppresses Even-but-not-quite states caused by draft-reading jitter.
ATTITUDE_DEAD_BAND = 0.05

# Trim and heel are reported to millimetre precision
ATTITUDE_DECIMALS = 3

# Two calibration points closer than this are treated as the same point
LERP_EPS = 1e-5

# Reference temperature (°C) for density at standard conditions
REFERENCE_TEMPERATURE_C = 15.0

# Density change per °C away from the reference temperature
DENSITY_TEMP_COEFFICIENT = 0.00064

# Heel-correction tables are published in centimetres
HEEL_CORRECTION_CM_PER_M = 100.0

# Fixed column order of the vessel's printed calibration tables
SOUNDING_TABLE_TRIMS = (0.0, -2.0, -1.0, 1.0, 2.0, 3.0, 4.0, 5.0)
HEEL_TABLE_ANGLES = (-2.0, -1.5, -1.0, -0.5, 0.5, 1.0, 1.5, 2.0)
