"""
Tests for building irradiance tables from provider payloads.
"""

from datetime import datetime

import pytest

from conftest import FixedSunProvider, build_payload
from pvyield.config import Resolution, ZenithMode
from pvyield.engine.irradiance_table import (
    build_irradiance_table,
    extract_parameters,
    extract_site_elevation,
    parse_timestamp_key,
)
from pvyield.errors import MalformedPayloadError, MalformedTimestampError


def _build(payload, provider=None, **kwargs):
    return build_irradiance_table(
        payload, -33.93, 18.86, sun_provider=provider or FixedSunProvider(), **kwargs
    )


# ---------------------------------------------------------------------------
# Timestamp keys
# ---------------------------------------------------------------------------

class TestParseTimestampKey:
    def test_hourly_key(self):
        assert parse_timestamp_key("2023062113") == datetime(2023, 6, 21, 13)

    def test_daily_key_taken_at_noon(self):
        assert parse_timestamp_key("20230621") == datetime(2023, 6, 21, 12)

    @pytest.mark.parametrize("key", ["2023062", "202306211", "abcdefghij", "2023-06-21", ""])
    def test_wrong_shape_raises(self, key):
        with pytest.raises(MalformedTimestampError):
            parse_timestamp_key(key)

    @pytest.mark.parametrize("key", ["2023023112", "2023130112", "2023062125"])
    def test_impossible_date_raises(self, key):
        with pytest.raises(MalformedTimestampError, match=key):
            parse_timestamp_key(key)


# ---------------------------------------------------------------------------
# Payload structure
# ---------------------------------------------------------------------------

class TestPayloadStructure:
    def test_elevation_read_from_coordinates(self):
        assert extract_site_elevation(build_payload({}, {}, {}, elevation=42.5)) == 42.5

    def test_missing_geometry_raises(self):
        with pytest.raises(MalformedPayloadError, match="elevation"):
            extract_site_elevation({"properties": {}})

    def test_short_coordinates_raise(self):
        with pytest.raises(MalformedPayloadError):
            extract_site_elevation({"geometry": {"coordinates": [18.86, -33.93]}})

    def test_missing_parameter_block_raises(self):
        payload = build_payload({}, {}, {})
        del payload["properties"]
        with pytest.raises(MalformedPayloadError, match="properties.parameter"):
            extract_parameters(payload)

    def test_missing_field_mapping_named(self):
        payload = build_payload({}, {}, {})
        del payload["properties"]["parameter"]["ALLSKY_SFC_SW_DNI"]
        with pytest.raises(MalformedPayloadError, match="ALLSKY_SFC_SW_DNI"):
            extract_parameters(payload)

    def test_structural_error_propagates_from_build(self):
        with pytest.raises(MalformedPayloadError):
            _build({"geometry": {"coordinates": [0, 0, 60]}})


# ---------------------------------------------------------------------------
# Table construction
# ---------------------------------------------------------------------------

class TestBuildIrradianceTable:
    def test_one_sample_per_valid_key(self, day_payload):
        table = _build(day_payload)
        assert len(table.samples) == 24
        assert table.dropped == []
        assert table.resolution == Resolution.HOURLY

    def test_samples_are_chronological(self):
        keys = ["2023062114", "2023062109", "2023062112"]
        values = {k: 100.0 for k in keys}
        table = _build(build_payload(values, values, values))
        assert [s.key for s in table.samples] == sorted(keys)

    def test_constant_zenith_from_site_elevation(self):
        table = _build(build_payload(
            {"2023062112": 500.0}, {"2023062112": 400.0}, {"2023062112": 100.0},
            elevation=70.0,
        ))
        assert table.samples[0].solar_zenith == pytest.approx(20.0)

    def test_azimuth_from_provider_rounded(self):
        provider = FixedSunProvider(azimuth_deg=123.4567)
        table = _build(build_payload(
            {"2023062112": 1.0}, {"2023062112": 1.0}, {"2023062112": 1.0}
        ), provider)
        assert table.samples[0].solar_azimuth == 123.46

    def test_provider_called_with_timestamp_and_site(self):
        provider = FixedSunProvider()
        _build(build_payload(
            {"2023062108": 1.0}, {"2023062108": 1.0}, {"2023062108": 1.0}
        ), provider)
        assert provider.calls == [(datetime(2023, 6, 21, 8), -33.93, 18.86)]

    def test_solar_zenith_mode_uses_sun_altitude(self):
        provider = FixedSunProvider(altitude_deg=35.0)
        table = _build(build_payload(
            {"2023062112": 1.0}, {"2023062112": 1.0}, {"2023062112": 1.0}
        ), provider, zenith_mode=ZenithMode.SOLAR)
        assert table.samples[0].solar_zenith == pytest.approx(55.0)

    def test_out_of_range_zenith_clamped(self):
        table = _build(build_payload(
            {"2023062112": 1.0}, {"2023062112": 1.0}, {"2023062112": 1.0},
            elevation=-120.0,
        ))
        assert table.samples[0].solar_zenith == 180.0

    def test_daily_resolution_inferred(self):
        values = {"20230101": 6.5, "20230102": 7.1}
        table = _build(build_payload(values, values, values))
        assert table.resolution == Resolution.DAILY
        assert all(s.timestamp.hour == 12 for s in table.samples)

    def test_explicit_resolution_wins(self):
        values = {"2023010112": 1.0}
        table = _build(build_payload(values, values, values), resolution=Resolution.DAILY)
        assert table.resolution == Resolution.DAILY

    def test_empty_payload_gives_empty_table(self):
        table = _build(build_payload({}, {}, {}))
        assert table.is_empty
        assert table.dropped == []


class TestSampleErrorRecovery:
    def test_fill_value_dropped(self):
        payload = build_payload(
            {"2023062111": 500.0, "2023062112": -999.0},
            {"2023062111": 400.0, "2023062112": 300.0},
            {"2023062111": 100.0, "2023062112": 90.0},
        )
        table = _build(payload)
        assert [s.key for s in table.samples] == ["2023062111"]
        assert len(table.dropped) == 1
        dropped = table.dropped[0]
        assert dropped.key == "2023062112"
        assert dropped.reason == "MissingFieldError"
        assert dropped.timestamp == datetime(2023, 6, 21, 12)

    def test_key_absent_from_one_field_dropped(self):
        payload = build_payload(
            {"2023062111": 500.0},
            {"2023062111": 400.0, "2023062112": 300.0},
            {"2023062111": 100.0, "2023062112": 90.0},
        )
        table = _build(payload)
        assert len(table.samples) == 1
        assert table.dropped[0].reason == "MissingFieldError"

    @pytest.mark.parametrize("bad", [None, "n/a", True, float("nan")])
    def test_non_numeric_value_dropped(self, bad):
        payload = build_payload(
            {"2023062112": bad}, {"2023062112": 1.0}, {"2023062112": 1.0}
        )
        table = _build(payload)
        assert table.is_empty
        assert table.dropped[0].reason == "MissingFieldError"

    def test_malformed_key_dropped_without_timestamp(self):
        values = {"2023062112": 1.0, "20230621XX": 1.0}
        table = _build(build_payload(values, values, values))
        assert len(table.samples) == 1
        assert table.dropped[0].key == "20230621XX"
        assert table.dropped[0].reason == "MalformedTimestampError"
        assert table.dropped[0].timestamp is None

    def test_zero_irradiance_is_valid(self):
        values = {"2023062102": 0.0}
        table = _build(build_payload(values, values, values))
        assert len(table.samples) == 1
        assert table.samples[0].ghi == 0.0
