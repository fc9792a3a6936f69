"""
Pydantic model for the panel configuration passed into every calculation.
"""

import math

from pydantic import BaseModel, ConfigDict, Field


class PanelConfiguration(BaseModel):
    """Panel orientation and derate inputs. Immutable; degrees at the boundary."""

    model_config = ConfigDict(frozen=True)

    tilt: float = Field(..., ge=0.0, le=90.0, description="Inclination from horizontal (°)")
    surface_azimuth: float = Field(
        ..., ge=0.0, lt=360.0,
        description="Facing direction (°, north = 0, clockwise)",
    )
    shading_percent: float = Field(0.0, ge=0.0, le=100.0, description="Shaded share (%)")
    soiling_fraction: float = Field(0.0, ge=0.0, le=1.0, description="Soiling loss (0-1)")

    @property
    def tilt_rad(self) -> float:
        return math.radians(self.tilt)

    @property
    def surface_azimuth_rad(self) -> float:
        return math.radians(self.surface_azimuth)
