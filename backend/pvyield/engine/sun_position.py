"""
Sun position provider.

The engine only relies on the `SunPositionProvider.position` contract:
given a local date-time and coordinates, return the sun's azimuth and
altitude in radians. The default implementation delegates to pvlib's
solar position algorithm.
"""

import logging
import math
from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

import pandas as pd
from pvlib import solarposition

from pvyield.config import HOURS_PER_DAY
from pvyield.models.sun import SunPathPoint, SunPosition

logger = logging.getLogger(__name__)


class SunPositionProvider(ABC):
    """Base class for sun position providers."""

    @abstractmethod
    def position(self, when: datetime, latitude: float, longitude: float) -> SunPosition:
        """Return the sun's azimuth and altitude (radians) at `when`."""
        ...


class PvlibSunPositionProvider(SunPositionProvider):
    """
    pvlib-backed provider.

    Naive timestamps are local standard time (NASA POWER `time-standard=lst`)
    and are localised with a fixed UTC offset. When no offset is configured
    it is taken from the longitude as round(longitude / 15) hours.
    """

    def __init__(self, utc_offset_hours: Optional[float] = None):
        self.utc_offset_hours = utc_offset_hours

    def _tzinfo(self, longitude: float) -> timezone:
        offset = self.utc_offset_hours
        if offset is None:
            offset = round(longitude / 15.0)
        return timezone(timedelta(hours=offset))

    def position(self, when: datetime, latitude: float, longitude: float) -> SunPosition:
        stamp = pd.Timestamp(when)
        if stamp.tzinfo is None:
            stamp = stamp.tz_localize(self._tzinfo(longitude))

        solpos = solarposition.get_solarposition(
            pd.DatetimeIndex([stamp]), latitude, longitude
        )
        azimuth_deg = float(solpos["azimuth"].iloc[0]) % 360.0
        altitude_deg = float(solpos["apparent_elevation"].iloc[0])

        return SunPosition(
            azimuth=math.radians(azimuth_deg),
            altitude=math.radians(altitude_deg),
        )


def sun_path(
    latitude: float,
    longitude: float,
    day: date,
    provider: Optional[SunPositionProvider] = None,
) -> list[SunPathPoint]:
    """Hourly sun azimuth and altitude (degrees) across one day."""
    provider = provider or PvlibSunPositionProvider()
    points = []
    for hour in range(HOURS_PER_DAY):
        pos = provider.position(datetime.combine(day, time(hour)), latitude, longitude)
        points.append(SunPathPoint(
            hour=hour,
            azimuth=round(math.degrees(pos.azimuth), 2),
            altitude=round(math.degrees(pos.altitude), 2),
        ))
    return points
