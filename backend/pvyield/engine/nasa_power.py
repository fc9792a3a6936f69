"""
NASA POWER point API client.

Fetches hourly or daily all-sky GHI, DNI and DHI for a location. Hourly
values are Wh/m² per hour, daily values kWh/m²/day, both in local standard
time. Failures surface as UpstreamFetchError; there is no retry, the caller
decides.
"""

import calendar
import logging
from datetime import date
from typing import Optional

import requests

from pvyield.config import (
    IRRADIANCE_PARAMETERS,
    NASA_POWER_COMMUNITY,
    NASA_POWER_TIME_STANDARD,
    NASA_POWER_URL,
    REQUEST_TIMEOUT_S,
)
from pvyield.errors import UpstreamFetchError
from pvyield.models.irradiance import ProviderRequest

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%Y%m%d"


def day_range(day: date) -> tuple[str, str]:
    """Start and end (YYYYMMDD) covering a single day."""
    stamp = day.strftime(_DATE_FORMAT)
    return stamp, stamp


def month_range(year: int, month: int) -> tuple[str, str]:
    """Start and end (YYYYMMDD) covering a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return (
        date(year, month, 1).strftime(_DATE_FORMAT),
        date(year, month, last_day).strftime(_DATE_FORMAT),
    )


def year_range(year: int) -> tuple[str, str]:
    """Start and end (YYYYMMDD) covering a calendar year."""
    return f"{year}0101", f"{year}1231"


class NasaPowerClient:
    """Blocking client for the NASA POWER temporal point endpoint."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = NASA_POWER_URL,
        timeout: float = REQUEST_TIMEOUT_S,
    ):
        self.session = session or requests.Session()
        self.base_url = base_url
        self.timeout = timeout

    def build_url(self, request: ProviderRequest) -> str:
        return self.base_url.format(resolution=request.resolution.value)

    def build_params(self, request: ProviderRequest) -> dict:
        return {
            "start": request.start_date,
            "end": request.end_date,
            "latitude": request.latitude,
            "longitude": request.longitude,
            "community": NASA_POWER_COMMUNITY,
            "parameters": ",".join(IRRADIANCE_PARAMETERS),
            "format": "JSON",
            "time-standard": NASA_POWER_TIME_STANDARD,
        }

    def fetch(self, request: ProviderRequest) -> dict:
        """
        Fetch the raw provider payload.

        Raises:
            UpstreamFetchError: network error, non-2xx status, or a body that
                is not a JSON object.
        """
        url = self.build_url(request)
        params = self.build_params(request)
        logger.info(
            "Fetching %s irradiance %s-%s for (%.4f, %.4f)",
            request.resolution.value,
            request.start_date,
            request.end_date,
            request.latitude,
            request.longitude,
        )

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise UpstreamFetchError(f"Irradiance provider request failed: {e}") from e
        except ValueError as e:
            raise UpstreamFetchError(f"Irradiance provider returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise UpstreamFetchError("Irradiance provider returned an unexpected body.")
        return payload
