"""
Clear-sky optimal tilt search.

A purely geometric estimate: it depends on latitude only and is not
calibrated against measured irradiance. For each candidate tilt the daily
tilted irradiation of a simplified clear-sky model is summed over a 365-day
year (Duffie & Beckman, daily isotropic-sky formulation):

  δ     = 23.45° · sin(360/365 · (284 + n))
  HSR   = arccos(−tan φ · tan δ)                      sunrise hour angle
  HSRC  = min(HSR, arccos(−tan(φ − β) · tan δ))       collector sunrise
  H0    = (24/π)·Isc·(1 + 0.034 cos(360n/365))
          ·(cos φ cos δ sin HSR + HSR sin φ sin δ)
  H     = H0 · exp(−k / sin HSR)                      clear-sky horizontal
  Hd    = 0.3 · H
  Rb    = [cos(φ−β) cos δ sin HSRC + HSRC sin(φ−β) sin δ]
          / [cos φ cos δ sin HSR + HSR sin φ sin δ]
  HT    = (H − Hd)·Rb + Hd·(1 + cos β)/2 + ρ·H·(1 − cos β)/2

The panel is assumed to face the equator, so only |φ| matters.
"""

import numpy as np
from scipy.optimize import minimize_scalar

from pvyield.config import (
    DAYS_PER_YEAR,
    DIFFUSE_FRACTION,
    EXTINCTION_COEFFICIENT,
    GROUND_REFLECTANCE,
    SOLAR_CONSTANT,
    TILT_SEARCH_MAX,
    TILT_SEARCH_MIN,
)

# At |φ| = 90° every sunlit day is polar day (HSR = π, sin HSR = 0) and the
# extinction term wipes out all irradiance, so the pole itself is evaluated
# just short of it.
MAX_EFFECTIVE_LATITUDE = 89.9

_DAYS = np.arange(1, DAYS_PER_YEAR + 1)


def solar_declination(day_of_year):
    """Declination (radians) for a day number or array of day numbers, 1-365."""
    return np.radians(23.45) * np.sin(2.0 * np.pi * (284 + day_of_year) / DAYS_PER_YEAR)


def _effective_latitude(latitude: float) -> float:
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"Latitude must be between -90 and 90, got {latitude}")
    return np.radians(min(abs(latitude), MAX_EFFECTIVE_LATITUDE))


def _sunrise_hour_angle(lat_rad, declination):
    # Clipping covers polar day (π) and polar night (0)
    return np.arccos(np.clip(-np.tan(lat_rad) * np.tan(declination), -1.0, 1.0))


def daily_tilted_irradiation(latitude: float, tilt: float) -> np.ndarray:
    """
    Clear-sky daily irradiation on the tilted plane for days 1..365.

    Args:
        latitude: Site latitude (°)
        tilt: Panel tilt (°), may be fractional

    Returns:
        Array of 365 daily values (Wh/m²/day).
    """
    phi = _effective_latitude(latitude)
    beta = np.radians(tilt)
    delta = solar_declination(_DAYS)

    hsr = _sunrise_hour_angle(phi, delta)
    hsrc = np.minimum(hsr, _sunrise_hour_angle(phi - beta, delta))

    horizontal_geometry = (
        np.cos(phi) * np.cos(delta) * np.sin(hsr)
        + hsr * np.sin(phi) * np.sin(delta)
    )
    tilted_geometry = (
        np.cos(phi - beta) * np.cos(delta) * np.sin(hsrc)
        + hsrc * np.sin(phi - beta) * np.sin(delta)
    )

    eccentricity = 1.0 + 0.034 * np.cos(2.0 * np.pi * _DAYS / DAYS_PER_YEAR)
    h0 = (24.0 / np.pi) * SOLAR_CONSTANT * eccentricity * horizontal_geometry

    with np.errstate(divide="ignore", invalid="ignore"):
        sin_hsr = np.sin(hsr)
        transmittance = np.where(
            sin_hsr > 0, np.exp(-EXTINCTION_COEFFICIENT / sin_hsr), 0.0
        )
        rb = np.where(
            horizontal_geometry > 0, tilted_geometry / horizontal_geometry, 0.0
        )

    h = h0 * transmittance
    hd = DIFFUSE_FRACTION * h

    return (
        (h - hd) * rb
        + hd * (1.0 + np.cos(beta)) / 2.0
        + GROUND_REFLECTANCE * h * (1.0 - np.cos(beta)) / 2.0
    )


def annual_tilted_irradiation(latitude: float, tilt: float) -> float:
    """Annual clear-sky irradiation on the tilted plane (Wh/m²)."""
    return float(np.sum(daily_tilted_irradiation(latitude, tilt)))


def tilt_profile(latitude: float) -> list[tuple[int, float]]:
    """Annual irradiation for every integer tilt in the search range."""
    return [
        (tilt, annual_tilted_irradiation(latitude, tilt))
        for tilt in range(TILT_SEARCH_MIN, TILT_SEARCH_MAX + 1)
    ]


def optimal_tilt(latitude: float) -> float:
    """
    Integer tilt (°) that maximises annual clear-sky irradiation.

    The search ascends from 0° and only replaces the best on a strict
    improvement, so ties keep the lowest tilt.
    """
    best_total = 0.0
    best_tilt = TILT_SEARCH_MIN
    for tilt, total in tilt_profile(latitude):
        if total > best_total:
            best_total = total
            best_tilt = tilt
    return round(float(best_tilt), 2)


def refine_optimal_tilt(latitude: float) -> float:
    """
    Continuous optimum within ±1° of the integer optimum.

    Uses bounded scalar minimisation of the negative annual irradiation.
    """
    coarse = optimal_tilt(latitude)
    lower = max(float(TILT_SEARCH_MIN), coarse - 1.0)
    upper = min(float(TILT_SEARCH_MAX), coarse + 1.0)

    result = minimize_scalar(
        lambda tilt: -annual_tilted_irradiation(latitude, tilt),
        bounds=(lower, upper),
        method="bounded",
    )
    refined = float(result.x)

    # Never report something worse than the integer answer
    if annual_tilted_irradiation(latitude, refined) < annual_tilted_irradiation(latitude, coarse):
        refined = coarse
    return round(refined, 2)
