"""
Angle-of-incidence geometry.

All angles are radians. Degrees from user input are converted once, on
PanelConfiguration / IrradianceSample, before reaching this module.

    cos θ = cos(Z)·cos(β) + sin(Z)·sin(β)·cos(γs − γ)

Z: solar zenith, β: panel tilt, γs: solar azimuth, γ: surface azimuth.
"""

import math

from pvyield.config import NORTHERN_DEFAULT_AZIMUTH, SOUTHERN_DEFAULT_AZIMUTH


def angle_of_incidence(
    tilt: float,
    surface_azimuth: float,
    solar_zenith: float,
    solar_azimuth: float,
) -> float:
    """Angle between the sun's rays and the panel normal, in radians."""
    cos_theta = (
        math.cos(solar_zenith) * math.cos(tilt)
        + math.sin(solar_zenith) * math.sin(tilt) * math.cos(solar_azimuth - surface_azimuth)
    )
    # Floating-point drift can push cos θ just outside arccos' domain
    cos_theta = max(-1.0, min(1.0, cos_theta))
    return math.acos(cos_theta)


def default_surface_azimuth(latitude: float) -> float:
    """Equator-facing azimuth: south (180°) in the north, north (0°) in the south."""
    if latitude >= 0:
        return NORTHERN_DEFAULT_AZIMUTH
    return SOUTHERN_DEFAULT_AZIMUTH
