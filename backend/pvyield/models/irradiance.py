"""
Pydantic models for irradiance samples, tables and provider requests.
"""

import math
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pvyield.config import Resolution


class IrradianceSample(BaseModel):
    """One provider observation: irradiance plus sun angles at a timestamp."""

    model_config = ConfigDict(frozen=True)

    key: str
    timestamp: datetime
    ghi: float = Field(..., ge=0.0)
    dni: float = Field(..., ge=0.0)
    dhi: float = Field(..., ge=0.0)
    solar_zenith: float = Field(..., ge=0.0, le=180.0)   # degrees
    solar_azimuth: float = Field(..., ge=0.0, lt=360.0)  # degrees

    @property
    def zenith_rad(self) -> float:
        return math.radians(self.solar_zenith)

    @property
    def azimuth_rad(self) -> float:
        return math.radians(self.solar_azimuth)

    @property
    def hour(self) -> int:
        return self.timestamp.hour

    @property
    def month_index(self) -> int:
        """Zero-based month (0 = January)."""
        return self.timestamp.month - 1


class DroppedSample(BaseModel):
    """A provider record removed by sample-level error recovery."""

    model_config = ConfigDict(frozen=True)

    key: str
    reason: str  # error kind name, e.g. "MissingFieldError"
    timestamp: Optional[datetime] = None


class IrradianceTable(BaseModel):
    """Chronological, read-only set of samples for one queried period."""

    model_config = ConfigDict(frozen=True)

    resolution: Resolution = Resolution.HOURLY
    samples: list[IrradianceSample] = Field(default_factory=list)
    dropped: list[DroppedSample] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.samples) == 0


class ProviderRequest(BaseModel):
    """Query for the upstream irradiance provider."""

    model_config = ConfigDict(frozen=True)

    start_date: str = Field(..., pattern=r"^\d{8}$", description="YYYYMMDD")
    end_date: str = Field(..., pattern=r"^\d{8}$", description="YYYYMMDD")
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    resolution: Resolution = Resolution.HOURLY
