"""
Tests for the angle-of-incidence engine.
"""

import math

import pytest

from pvyield.engine.geometry import angle_of_incidence, default_surface_azimuth


class TestAngleOfIncidence:
    @pytest.mark.parametrize("tilt_deg", [0.0, 15.0, 34.0, 60.0, 90.0])
    @pytest.mark.parametrize("solar_az_deg", [0.0, 90.0, 200.0, 359.0])
    def test_sun_overhead_reduces_to_tilt_within_rounding(self, tilt_deg, solar_az_deg):
        """Zenith 0: the incidence angle is the panel's own tilt.

        acos(cos(β)) can differ from β by an ulp, so equality is checked to 1e-12.
        """
        tilt = math.radians(tilt_deg)
        theta = angle_of_incidence(tilt, math.radians(180.0), 0.0, math.radians(solar_az_deg))
        assert theta == pytest.approx(tilt, abs=1e-12)

    def test_sun_on_panel_normal_is_zero(self):
        tilt = math.radians(30.0)
        az = math.radians(180.0)
        theta = angle_of_incidence(tilt, az, tilt, az)
        assert theta == pytest.approx(0.0, abs=1e-7)

    def test_flat_panel_equals_zenith(self):
        zenith = math.radians(40.0)
        theta = angle_of_incidence(0.0, 0.0, zenith, math.radians(123.0))
        assert theta == pytest.approx(zenith)

    def test_sun_behind_panel_exceeds_ninety(self):
        """Vertical south-facing panel, low sun due north."""
        theta = angle_of_incidence(
            math.radians(90.0), math.radians(180.0), math.radians(80.0), 0.0
        )
        assert theta > math.pi / 2

    def test_floating_point_drift_is_clamped(self):
        """Inputs whose cosine lands a hair above 1 must not produce NaN."""
        angle = 1e-9
        theta = angle_of_incidence(angle, 0.0, angle, 0.0)
        assert not math.isnan(theta)
        assert theta == pytest.approx(0.0, abs=1e-6)

    def test_result_in_radians_range(self):
        theta = angle_of_incidence(
            math.radians(45.0), math.radians(90.0), math.radians(120.0), math.radians(270.0)
        )
        assert 0.0 <= theta <= math.pi


class TestDefaultSurfaceAzimuth:
    def test_northern_hemisphere_faces_south(self):
        assert default_surface_azimuth(51.5) == 180.0

    def test_southern_hemisphere_faces_north(self):
        assert default_surface_azimuth(-33.93) == 0.0

    def test_equator_counts_as_northern(self):
        assert default_surface_azimuth(0.0) == 180.0
