"""
Pydantic models for PV system sizing.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field

from pvyield.config import DEFAULT_DATA_YEAR, HouseType, Season
from pvyield.models.estimate import EstimateStatus


class SizingInput(BaseModel):
    """Sizing request. Supply a provider payload to skip the fetch."""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    house_type: HouseType = HouseType.URBAN
    season: Season = Season.SUMMER
    year: int = Field(DEFAULT_DATA_YEAR, ge=1981, le=2100)
    payload: Optional[dict[str, Any]] = None


class SystemSize(BaseModel):
    system_size_kw: float
    panel_count: int


class SizingOutput(BaseModel):
    status: EstimateStatus
    message: Optional[str] = None
    daily_consumption: float   # kWh/day
    annual_consumption: float  # kWh/year
    peak_sun_hours: Optional[float] = None
    grid_system: Optional[SystemSize] = None
    off_grid_system: Optional[SystemSize] = None
