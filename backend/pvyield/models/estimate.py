"""
Pydantic models for power estimates: components, aggregates and API I/O.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from pvyield.config import (
    DEFAULT_DATA_YEAR,
    Resolution,
    Season,
    ZenithMode,
)
from pvyield.models.panel import PanelConfiguration


class EstimateStatus(str, Enum):
    OK = "ok"
    NO_DATA = "no_data"
    UPSTREAM_ERROR = "upstream_error"
    DATA_ERROR = "data_error"


class SeriesKind(str, Enum):
    PEAK = "peak"
    AVERAGE = "average"


class PoaComponents(BaseModel):
    """Plane-of-array irradiance split into its three terms (W/m²)."""

    model_config = ConfigDict(frozen=True)

    beam: float
    sky_diffuse: float
    ground_reflected: float
    total: float  # clamped at zero


class HourlyPowerSeries(BaseModel):
    """24 power values (W) indexed by hour of day."""
    kind: SeriesKind
    values: list[float] = Field(..., min_length=24, max_length=24)
    samples_considered: int
    samples_used: int


class MonthlyEnergyRecord(BaseModel):
    """Average daily energy for one month; None when no sample was usable."""
    month: int = Field(..., ge=0, le=11)  # 0 = January
    average_daily_energy: Optional[float]  # kWh/day
    samples_considered: int
    samples_used: int


# ─── API inputs ───


class EstimateInput(BaseModel):
    """Site and panel inputs for estimates that fetch provider data.

    Tilt and surface azimuth default to the clear-sky optimum and the
    equator-facing direction for the latitude.
    """
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    tilt: Optional[float] = Field(None, ge=0.0, le=90.0)
    surface_azimuth: Optional[float] = Field(None, ge=0.0, lt=360.0)
    shading_percent: float = Field(0.0, ge=0.0, le=100.0)
    soiling_fraction: float = Field(0.0, ge=0.0, le=1.0)
    season: Season = Season.SUMMER
    year: int = Field(DEFAULT_DATA_YEAR, ge=1981, le=2100)
    month: int = Field(6, ge=1, le=12, description="Calendar month for typical-day averages")
    zenith_mode: ZenithMode = ZenithMode.CONSTANT


class TableEstimateInput(BaseModel):
    """Estimate from a provider payload supplied by the caller (no fetch)."""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    panel: PanelConfiguration
    payload: dict[str, Any]
    resolution: Optional[Resolution] = Field(
        None, description="Inferred from the key width (YYYYMMDD daily, YYYYMMDDHH hourly) when omitted"
    )
    zenith_mode: ZenithMode = ZenithMode.CONSTANT


# ─── API outputs ───


class EstimateOutput(BaseModel):
    """Result of a pipeline run. Status tells no-data and errors apart."""
    status: EstimateStatus
    message: Optional[str] = None
    latitude: float
    longitude: float
    panel: Optional[PanelConfiguration] = None
    period: Optional[str] = None  # "YYYYMMDD-YYYYMMDD"
    peak_power: Optional[float] = None  # W
    hourly: Optional[HourlyPowerSeries] = None
    monthly: list[MonthlyEnergyRecord] = Field(default_factory=list)
    samples_dropped: int = 0


class OptimalTiltOutput(BaseModel):
    latitude: float
    optimal_tilt: float
    refined_tilt: Optional[float] = None
    default_surface_azimuth: float


class TiltProfilePoint(BaseModel):
    tilt: int
    annual_irradiation: float  # Wh/m² per year, clear-sky estimate
