"""
PV Yield configuration and constants.
"""

import os
from enum import Enum


class Resolution(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"


class Season(str, Enum):
    SUMMER = "summer"
    WINTER = "winter"


class HouseType(str, Enum):
    RURAL = "rural"
    URBAN = "urban"


class ZenithMode(str, Enum):
    CONSTANT = "constant"  # 90° − site elevation angle, same for every hour
    SOLAR = "solar"        # per-hour zenith from the sun position provider


# Panel model
PANEL_AREA_M2 = 4.0        # m², roughly a 1 kW array
PANEL_EFFICIENCY = 0.20    # fraction
GROUND_REFLECTANCE = 0.2   # albedo

# Clear-sky tilt model
SOLAR_CONSTANT = 1367.0        # W/m²
EXTINCTION_COEFFICIENT = 0.1   # β in exp(−β / sin(HSR))
DIFFUSE_FRACTION = 0.3         # share of horizontal irradiation that is diffuse
DAYS_PER_YEAR = 365
TILT_SEARCH_MIN = 0            # degrees
TILT_SEARCH_MAX = 90           # degrees

# Shading model seams (percent)
SHADING_SEAMS = (20.0, 50.0)
SHADING_SEAM_TOLERANCE = 1e-9

# Calendar reference for day counts (Gregorian, non-leap)
NON_LEAP_REFERENCE_YEAR = 2023
HOURS_PER_DAY = 24
MONTHS_PER_YEAR = 12

# Upstream irradiance provider (NASA POWER)
NASA_POWER_URL = os.environ.get(
    "PVYIELD_NASA_POWER_URL",
    "https://power.larc.nasa.gov/api/temporal/{resolution}/point",
)
REQUEST_TIMEOUT_S = float(os.environ.get("PVYIELD_REQUEST_TIMEOUT", "60"))
NASA_POWER_COMMUNITY = "re"
NASA_POWER_TIME_STANDARD = "lst"

PARAM_GHI = "ALLSKY_SFC_SW_DWN"
PARAM_DNI = "ALLSKY_SFC_SW_DNI"
PARAM_DHI = "ALLSKY_SFC_SW_DIFF"
IRRADIANCE_PARAMETERS = (PARAM_GHI, PARAM_DNI, PARAM_DHI)

# Reference year for solstice and annual queries
DEFAULT_DATA_YEAR = 2023

# Solstice dates as MMDD, keyed by hemisphere then season
SOLSTICE_DATES = {
    "northern": {
        Season.SUMMER: "0621",
        Season.WINTER: "1221",
    },
    "southern": {
        Season.SUMMER: "1221",
        Season.WINTER: "0621",
    },
}

# Surface azimuth facing the equator (degrees, north = 0, clockwise)
NORTHERN_DEFAULT_AZIMUTH = 180.0
SOUTHERN_DEFAULT_AZIMUTH = 0.0

# System sizing
PANEL_RATING_KW = 0.4          # 400 W module
GRID_EFFICIENCY = 0.75
OFF_GRID_EFFICIENCY = 0.65     # battery losses included
PEAK_SUN_IRRADIANCE = 1000.0   # W/m² defining one peak sun hour
DAILY_CONSUMPTION_KWH = {
    HouseType.RURAL: 4.0,
    HouseType.URBAN: 35.0,
}
