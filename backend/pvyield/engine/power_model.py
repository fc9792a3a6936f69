"""
Plane-of-array irradiance and instantaneous panel power.

Isotropic sky model:
  Beam:             Gb = DNI · cos θ
  Sky diffuse:      Gd = DHI · (1 + cos β) / 2
  Ground reflected: Gr = ρ · GHI · (1 − cos β) / 2
  POA:              Gt = max(0, Gb + Gd + Gr)
  Power:            P  = Gt · A · η

θ (angle of incidence) and β (tilt) are radians.
"""

import math

from pvyield.config import GROUND_REFLECTANCE, PANEL_AREA_M2, PANEL_EFFICIENCY
from pvyield.models.estimate import PoaComponents


def poa_components(
    theta: float,
    ghi: float,
    dhi: float,
    dni: float,
    tilt: float,
    albedo: float = GROUND_REFLECTANCE,
) -> PoaComponents:
    """Split plane-of-array irradiance into beam, sky diffuse and ground terms."""
    beam = dni * math.cos(theta)
    sky_diffuse = dhi * (1.0 + math.cos(tilt)) / 2.0
    ground_reflected = albedo * ghi * (1.0 - math.cos(tilt)) / 2.0

    # Beam goes negative once the sun is behind the panel (θ > 90°)
    total = beam + sky_diffuse + ground_reflected
    if total < 0.0:
        total = 0.0

    return PoaComponents(
        beam=beam,
        sky_diffuse=sky_diffuse,
        ground_reflected=ground_reflected,
        total=total,
    )


def panel_power(
    theta: float,
    ghi: float,
    dhi: float,
    dni: float,
    tilt: float,
    area: float = PANEL_AREA_M2,
    efficiency: float = PANEL_EFFICIENCY,
) -> float:
    """Raw (un-derated) panel power in W for the given irradiance and geometry."""
    poa = poa_components(theta, ghi, dhi, dni, tilt)
    return poa.total * area * efficiency
