"""
Tests for the shading and soiling derate model.
"""

import pytest

from pvyield.engine.derate import (
    apply_derate,
    shading_discontinuities,
    shading_factor,
    soiling_factor,
)
from pvyield.models.panel import PanelConfiguration


def _panel(shading: float = 0.0, soiling: float = 0.0) -> PanelConfiguration:
    return PanelConfiguration(
        tilt=30.0, surface_azimuth=180.0, shading_percent=shading, soiling_fraction=soiling
    )


# ---------------------------------------------------------------------------
# Shading
# ---------------------------------------------------------------------------

class TestShadingFactor:
    @pytest.mark.parametrize("shading", [0.0, 20.0, 50.0, 100.0])
    def test_within_unit_interval(self, shading):
        assert 0.0 <= shading_factor(shading) <= 1.0

    def test_monotonically_non_increasing(self):
        grid = [s / 2 for s in range(0, 201)]
        factors = [shading_factor(s) for s in grid]
        assert all(a >= b for a, b in zip(factors, factors[1:]))

    def test_no_shading_is_unity(self):
        assert shading_factor(0.0) == 1.0

    def test_light_branch(self):
        assert shading_factor(10.0) == pytest.approx(0.95)
        assert shading_factor(20.0) == pytest.approx(0.90)

    def test_moderate_branch(self):
        assert shading_factor(30.0) == pytest.approx(0.60)
        assert shading_factor(50.0) == pytest.approx(0.40)

    def test_heavy_branch(self):
        assert shading_factor(60.0) == pytest.approx(0.30)
        assert shading_factor(90.0) == pytest.approx(0.0)

    def test_full_shading_clamped_to_zero(self):
        """The heavy branch would go to -0.1 at 100%."""
        assert shading_factor(100.0) == 0.0

    @pytest.mark.parametrize("bad", [-1.0, 100.5])
    def test_out_of_range_raises(self, bad):
        with pytest.raises(ValueError, match="between 0 and 100"):
            shading_factor(bad)


class TestShadingSeams:
    def test_seam_at_50_is_continuous(self):
        assert shading_factor(50.0) == pytest.approx(shading_factor(50.0 + 1e-9), abs=1e-6)

    def test_seam_at_20_jumps(self):
        """Light and moderate branches disagree by 20 points at 20%."""
        assert shading_factor(20.0) - shading_factor(20.0 + 1e-9) == pytest.approx(0.2, abs=1e-6)

    def test_discontinuities_reported(self):
        jumps = shading_discontinuities()
        assert [j["seam"] for j in jumps] == [20.0]
        assert jumps[0]["jump"] == pytest.approx(0.2, abs=1e-6)

    def test_large_tolerance_hides_jump(self):
        assert shading_discontinuities(tolerance=0.5) == []


# ---------------------------------------------------------------------------
# Soiling and combined derate
# ---------------------------------------------------------------------------

class TestSoilingFactor:
    def test_linear(self):
        assert soiling_factor(0.0) == 1.0
        assert soiling_factor(0.25) == pytest.approx(0.75)
        assert soiling_factor(1.0) == 0.0

    def test_out_of_range_raises(self):
        with pytest.raises(ValueError, match="between 0 and 1"):
            soiling_factor(1.5)


class TestApplyDerate:
    def test_clean_unshaded_panel_unchanged(self):
        assert apply_derate(500.0, _panel()) == 500.0

    def test_combined_factors(self):
        panel = _panel(shading=10.0, soiling=0.1)
        assert apply_derate(1000.0, panel) == pytest.approx(1000.0 * 0.9 * 0.95)

    def test_order_independent(self):
        panel = _panel(shading=35.0, soiling=0.2)
        expected = 400.0 * shading_factor(35.0) * soiling_factor(0.2)
        assert apply_derate(400.0, panel) == pytest.approx(expected)

    def test_floored_at_zero(self):
        assert apply_derate(-5.0, _panel()) == 0.0

    def test_fully_soiled_panel_produces_nothing(self):
        assert apply_derate(800.0, _panel(soiling=1.0)) == 0.0

    def test_panel_is_not_mutated(self):
        panel = _panel(shading=40.0, soiling=0.3)
        apply_derate(100.0, panel)
        assert panel.shading_percent == 40.0
        assert panel.soiling_fraction == 0.3
