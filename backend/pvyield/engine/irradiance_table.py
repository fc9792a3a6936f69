"""
Irradiance table builder.

Normalises a NASA POWER point response into an IrradianceTable of
per-timestamp samples {ghi, dni, dhi, zenith, azimuth}.

Response shape (GeoJSON Feature):
    geometry.coordinates        [longitude, latitude, elevation]
    properties.parameter        {ALLSKY_SFC_SW_DWN: {key: value, ...},
                                 ALLSKY_SFC_SW_DNI: {...},
                                 ALLSKY_SFC_SW_DIFF: {...}}

Keys are YYYYMMDDHH (hourly) or YYYYMMDD (daily, taken at 12:00 local
solar-noon reference). Records with a missing field, a fill value or an
unparseable key are dropped and recorded on the table; the build goes on.
"""

import logging
import math
from datetime import datetime
from typing import Any, Optional

from pvyield.config import (
    PARAM_DHI,
    PARAM_DNI,
    PARAM_GHI,
    Resolution,
    ZenithMode,
)
from pvyield.engine.sun_position import PvlibSunPositionProvider, SunPositionProvider
from pvyield.errors import (
    MalformedPayloadError,
    MalformedTimestampError,
    MissingFieldError,
)
from pvyield.models.irradiance import DroppedSample, IrradianceSample, IrradianceTable

logger = logging.getLogger(__name__)

_HOURLY_KEY_LEN = 10
_DAILY_KEY_LEN = 8
_DAILY_REFERENCE_HOUR = 12


def parse_timestamp_key(key: str) -> datetime:
    """
    Parse a provider key (YYYYMMDDHH or YYYYMMDD) into a naive datetime.

    Raises MalformedTimestampError for anything that is not a valid
    fixed-width date-hour string.
    """
    if not isinstance(key, str) or not key.isdigit():
        raise MalformedTimestampError(str(key), "expected digits only")
    if len(key) not in (_HOURLY_KEY_LEN, _DAILY_KEY_LEN):
        raise MalformedTimestampError(key, f"expected 8 or 10 digits, got {len(key)}")

    year = int(key[0:4])
    month = int(key[4:6])
    day = int(key[6:8])
    hour = int(key[8:10]) if len(key) == _HOURLY_KEY_LEN else _DAILY_REFERENCE_HOUR

    try:
        return datetime(year, month, day, hour)
    except ValueError as e:
        raise MalformedTimestampError(key, str(e)) from e


def extract_site_elevation(payload: dict) -> float:
    """Return the scalar elevation angle carried in geometry.coordinates[2]."""
    try:
        return float(payload["geometry"]["coordinates"][2])
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise MalformedPayloadError(
            f"Provider response has no site elevation: {e!r}"
        ) from e


def extract_parameters(payload: dict) -> dict[str, dict[str, Any]]:
    """Return the GHI/DNI/DHI field mappings, failing if any is absent."""
    try:
        parameters = payload["properties"]["parameter"]
    except (KeyError, TypeError) as e:
        raise MalformedPayloadError(
            f"Provider response has no properties.parameter: {e!r}"
        ) from e

    if not isinstance(parameters, dict):
        raise MalformedPayloadError("properties.parameter must be a mapping.")

    missing = [p for p in (PARAM_GHI, PARAM_DNI, PARAM_DHI) if not isinstance(parameters.get(p), dict)]
    if missing:
        raise MalformedPayloadError(
            f"Provider response lacks irradiance fields: {', '.join(missing)}"
        )
    return parameters


def _field_value(mapping: dict[str, Any], key: str, field: str) -> float:
    """Look up one irradiance value, rejecting absent, non-numeric and fill values."""
    if key not in mapping:
        raise MissingFieldError(key, field)
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MissingFieldError(key, field)
    value = float(value)
    # Negative values include the provider fill value (-999)
    if math.isnan(value) or value < 0:
        raise MissingFieldError(key, field)
    return value


def _clamp_zenith(zenith: float, source: str) -> float:
    if 0.0 <= zenith <= 180.0:
        return zenith
    clamped = max(0.0, min(180.0, zenith))
    logger.warning(
        "Zenith %.2f° from %s is outside [0, 180]; clamped to %.2f°",
        zenith, source, clamped,
    )
    return clamped


def _infer_resolution(keys: list[str]) -> Resolution:
    for key in keys:
        if isinstance(key, str) and len(key) == _DAILY_KEY_LEN:
            return Resolution.DAILY
        if isinstance(key, str) and len(key) == _HOURLY_KEY_LEN:
            return Resolution.HOURLY
    return Resolution.HOURLY


def build_irradiance_table(
    payload: dict,
    latitude: float,
    longitude: float,
    sun_provider: Optional[SunPositionProvider] = None,
    zenith_mode: ZenithMode = ZenithMode.CONSTANT,
    resolution: Optional[Resolution] = None,
) -> IrradianceTable:
    """
    Build an IrradianceTable from a raw provider payload.

    Args:
        payload: Decoded provider JSON
        latitude: Query latitude (°)
        longitude: Query longitude (°)
        sun_provider: Sun position provider (default: pvlib)
        zenith_mode: CONSTANT uses 90° − site elevation angle for every
            sample; SOLAR uses the provider's per-hour altitude
        resolution: Table resolution; inferred from key width when omitted

    Returns:
        IrradianceTable, possibly empty. Dropped records are listed on
        `table.dropped`.
    """
    elevation = extract_site_elevation(payload)
    parameters = extract_parameters(payload)
    sun_provider = sun_provider or PvlibSunPositionProvider()

    constant_zenith = _clamp_zenith(90.0 - elevation, "site elevation")

    ghi_map = parameters[PARAM_GHI]
    dni_map = parameters[PARAM_DNI]
    dhi_map = parameters[PARAM_DHI]

    keys = list(dhi_map.keys())
    if resolution is None:
        resolution = _infer_resolution(keys)

    samples: list[IrradianceSample] = []
    dropped: list[DroppedSample] = []

    for key in keys:
        timestamp = None
        try:
            timestamp = parse_timestamp_key(key)
            ghi = _field_value(ghi_map, key, PARAM_GHI)
            dni = _field_value(dni_map, key, PARAM_DNI)
            dhi = _field_value(dhi_map, key, PARAM_DHI)
        except MalformedTimestampError as e:
            logger.warning("Skipping sample: %s", e)
            dropped.append(DroppedSample(key=str(key), reason=type(e).__name__))
            continue
        except MissingFieldError as e:
            logger.warning("Skipping sample: %s", e)
            dropped.append(DroppedSample(
                key=key, reason=type(e).__name__, timestamp=timestamp,
            ))
            continue

        pos = sun_provider.position(timestamp, latitude, longitude)
        azimuth = round(math.degrees(pos.azimuth), 2) % 360.0

        if zenith_mode == ZenithMode.SOLAR:
            zenith = _clamp_zenith(90.0 - math.degrees(pos.altitude), "sun position")
        else:
            zenith = constant_zenith

        samples.append(IrradianceSample(
            key=key,
            timestamp=timestamp,
            ghi=ghi,
            dni=dni,
            dhi=dhi,
            solar_zenith=zenith,
            solar_azimuth=azimuth,
        ))

    samples.sort(key=lambda s: s.timestamp)

    if dropped:
        logger.info(
            "Built irradiance table: %d samples, %d dropped", len(samples), len(dropped)
        )

    return IrradianceTable(resolution=resolution, samples=samples, dropped=dropped)
