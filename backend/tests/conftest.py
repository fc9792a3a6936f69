"""
Shared fixtures: deterministic sun positions, provider payloads and a fake
upstream client so no test touches the network.
"""

import math

import pytest

from pvyield.config import PARAM_DHI, PARAM_DNI, PARAM_GHI
from pvyield.engine.sun_position import SunPositionProvider
from pvyield.errors import UpstreamFetchError
from pvyield.models.sun import SunPosition


class FixedSunProvider(SunPositionProvider):
    """Returns the same sun position for every timestamp."""

    def __init__(self, azimuth_deg: float = 180.0, altitude_deg: float = 60.0):
        self.azimuth_deg = azimuth_deg
        self.altitude_deg = altitude_deg
        self.calls = []

    def position(self, when, latitude, longitude):
        self.calls.append((when, latitude, longitude))
        return SunPosition(
            azimuth=math.radians(self.azimuth_deg),
            altitude=math.radians(self.altitude_deg),
        )


class FakeClient:
    """Stands in for NasaPowerClient: returns a canned payload or raises."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.requests = []

    def fetch(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.payload


def build_payload(ghi: dict, dni: dict, dhi: dict, elevation: float = 60.0) -> dict:
    """NASA POWER shaped response from three key → value mappings."""
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [18.86, -33.93, elevation]},
        "properties": {
            "parameter": {
                PARAM_GHI: ghi,
                PARAM_DNI: dni,
                PARAM_DHI: dhi,
            }
        },
    }


def hourly_day_payload(day: str = "20230621", elevation: float = 60.0) -> dict:
    """24 hourly records with a bell-shaped daylight profile."""
    ghi, dni, dhi = {}, {}, {}
    for hour in range(24):
        key = f"{day}{hour:02d}"
        daylight = max(0.0, 1.0 - abs(hour - 12) / 6.0)
        ghi[key] = round(800.0 * daylight, 2)
        dni[key] = round(600.0 * daylight, 2)
        dhi[key] = round(150.0 * daylight, 2)
    return build_payload(ghi, dni, dhi, elevation)


@pytest.fixture
def fixed_sun():
    return FixedSunProvider()


@pytest.fixture
def noon_sun():
    """Sun due north: faces a north-pointing (southern hemisphere) panel."""
    return FixedSunProvider(azimuth_deg=0.0, altitude_deg=70.0)


@pytest.fixture
def day_payload():
    return hourly_day_payload()


@pytest.fixture
def fake_client_factory():
    def _make(payload=None, error=None):
        return FakeClient(payload=payload, error=error)
    return _make


@pytest.fixture
def upstream_error():
    return UpstreamFetchError("connection refused")
