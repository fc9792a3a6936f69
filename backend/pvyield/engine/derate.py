"""
Shading and soiling derate factors.

Both factors are multiplicative and independent of application order:

    P_derated = max(0, P_raw × soiling_factor × shading_factor)

Shading is piecewise in the shaded percentage s:
  s ≤ 20:       1 − s/200                (up to 10% loss)
  20 < s ≤ 50:  1 − (0.3 + (s − 20)/100) (30-60% loss)
  s > 50:       1 − (0.6 + (s − 50)/100) (60-110% loss, clamped to 0)
"""

from pvyield.config import SHADING_SEAMS, SHADING_SEAM_TOLERANCE
from pvyield.models.panel import PanelConfiguration


def soiling_factor(soiling_fraction: float) -> float:
    """Linear soiling factor for a loss fraction in [0, 1]."""
    if not 0.0 <= soiling_fraction <= 1.0:
        raise ValueError(
            f"Soiling fraction must be between 0 and 1, got {soiling_fraction}"
        )
    return 1.0 - soiling_fraction


def _shading_branch(shading_percent: float) -> float:
    if shading_percent <= 20.0:
        return 1.0 - shading_percent / 200.0
    elif shading_percent <= 50.0:
        return 1.0 - (0.3 + (shading_percent - 20.0) / 100.0)
    else:
        return 1.0 - (0.6 + (shading_percent - 50.0) / 100.0)


def shading_factor(shading_percent: float) -> float:
    """Piecewise shading factor for a shaded percentage in [0, 100], within [0, 1]."""
    if not 0.0 <= shading_percent <= 100.0:
        raise ValueError(
            f"Shading percent must be between 0 and 100, got {shading_percent}"
        )
    return max(0.0, min(1.0, _shading_branch(shading_percent)))


def shading_discontinuities(
    tolerance: float = SHADING_SEAM_TOLERANCE,
) -> list[dict]:
    """
    Compare the left and right limits of the shading model at each seam.

    Returns one entry per seam whose jump exceeds `tolerance`, with keys
    seam, left, right, jump.
    """
    eps = 1e-9
    jumps = []
    for seam in SHADING_SEAMS:
        left = shading_factor(seam)
        right = shading_factor(seam + eps)
        if abs(left - right) > tolerance + eps:
            jumps.append({
                "seam": seam,
                "left": left,
                "right": right,
                "jump": left - right,
            })
    return jumps


def apply_derate(raw_power: float, panel: PanelConfiguration) -> float:
    """Apply soiling and shading to raw power, floored at zero."""
    derated = (
        raw_power
        * soiling_factor(panel.soiling_fraction)
        * shading_factor(panel.shading_percent)
    )
    if derated < 0.0:
        return 0.0
    return derated
