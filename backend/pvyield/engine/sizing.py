"""
PV system sizing from a day of measured irradiance.

Peak sun hours (PSH) are the day's total horizontal irradiation expressed
in hours of 1000 W/m²:

    PSH        = Σ GHI [Wh/m²] / 1000           (hourly table)
    PSH        = mean GHI [kWh/m²/day]          (daily table)
    size [kW]  = daily consumption [kWh] / (PSH × system efficiency)
    panels     = ceil(size / module rating)
"""

import math

from pvyield.config import (
    DAILY_CONSUMPTION_KWH,
    DAYS_PER_YEAR,
    GRID_EFFICIENCY,
    OFF_GRID_EFFICIENCY,
    PANEL_RATING_KW,
    PEAK_SUN_IRRADIANCE,
    HouseType,
    Resolution,
)
from pvyield.errors import EmptyTableError
from pvyield.models.estimate import EstimateStatus
from pvyield.models.irradiance import IrradianceTable
from pvyield.models.sizing import SizingOutput, SystemSize


def peak_sun_hours(table: IrradianceTable) -> float:
    """
    Equivalent hours of 1000 W/m² per day.

    Hourly tables carry Wh/m² per hour, so the total GHI is divided by 1000.
    Daily tables already carry kWh/m²/day, which is numerically the peak sun
    hours of that day; the mean across days is returned.
    """
    if table.is_empty:
        raise EmptyTableError()
    total = sum(s.ghi for s in table.samples)
    if table.resolution == Resolution.DAILY:
        return total / len(table.samples)
    return total / PEAK_SUN_IRRADIANCE


def system_size(
    daily_energy_kwh: float,
    sun_hours: float,
    efficiency: float,
    panel_rating_kw: float = PANEL_RATING_KW,
) -> SystemSize:
    """Array size and module count needed to cover a daily consumption."""
    if sun_hours <= 0:
        raise ValueError("Peak sun hours must be positive to size a system.")
    if not 0 < efficiency <= 1:
        raise ValueError(f"Efficiency must be in (0, 1], got {efficiency}")

    size_kw = daily_energy_kwh / (sun_hours * efficiency)
    return SystemSize(
        system_size_kw=round(size_kw, 4),
        panel_count=math.ceil(size_kw / panel_rating_kw),
    )


def calculate_system_requirements(
    table: IrradianceTable,
    house_type: HouseType,
) -> SizingOutput:
    """Size grid-tied and off-grid systems for a household type."""
    daily = DAILY_CONSUMPTION_KWH[house_type]
    psh = peak_sun_hours(table)

    return SizingOutput(
        status=EstimateStatus.OK,
        daily_consumption=daily,
        annual_consumption=daily * DAYS_PER_YEAR,
        peak_sun_hours=round(psh, 4),
        grid_system=system_size(daily, psh, GRID_EFFICIENCY),
        off_grid_system=system_size(daily, psh, OFF_GRID_EFFICIENCY),
    )
