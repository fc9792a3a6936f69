"""
Pydantic models for sun position results.
"""

from pydantic import BaseModel, ConfigDict


class SunPosition(BaseModel):
    """Sun angles in radians. Azimuth measured from north, clockwise, [0, 2π)."""

    model_config = ConfigDict(frozen=True)

    azimuth: float
    altitude: float


class SunPathPoint(BaseModel):
    """Sun angles for one hour of a day, in degrees."""
    hour: int
    azimuth: float
    altitude: float
