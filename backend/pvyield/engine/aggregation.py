"""
Aggregation of per-sample power into hourly and monthly statistics.

Every reducer tracks how many samples it considered separately from how many
it actually used, so a period of genuine zero irradiance (polar night) is
distinguishable from a period with no usable data.
"""

import calendar
import math

import numpy as np

from pvyield.config import HOURS_PER_DAY, MONTHS_PER_YEAR, NON_LEAP_REFERENCE_YEAR
from pvyield.engine.derate import apply_derate
from pvyield.engine.geometry import angle_of_incidence
from pvyield.engine.power_model import panel_power
from pvyield.errors import EmptyTableError
from pvyield.models.estimate import HourlyPowerSeries, MonthlyEnergyRecord, SeriesKind
from pvyield.models.irradiance import IrradianceSample, IrradianceTable
from pvyield.models.panel import PanelConfiguration


def sample_power(sample: IrradianceSample, panel: PanelConfiguration) -> float:
    """
    Derated panel power for one sample.

    Units follow the sample: Wh/m² hourly values give W, kWh/m²/day daily
    values give kWh/day.
    """
    theta = angle_of_incidence(
        panel.tilt_rad,
        panel.surface_azimuth_rad,
        sample.zenith_rad,
        sample.azimuth_rad,
    )
    raw = panel_power(theta, sample.ghi, sample.dhi, sample.dni, panel.tilt_rad)
    return apply_derate(raw, panel)


def days_in_month(month: int) -> int:
    """Day count for a 1-based month, Gregorian non-leap convention."""
    return calendar.monthrange(NON_LEAP_REFERENCE_YEAR, month)[1]


def _require_samples(table: IrradianceTable) -> None:
    if table.is_empty:
        raise EmptyTableError()


def hourly_peak_series(
    table: IrradianceTable,
    panel: PanelConfiguration,
) -> HourlyPowerSeries:
    """
    Maximum derated power per hour-of-day bucket.

    Several samples landing in the same bucket keep the largest, never the
    sum. Hours without a sample stay at 0 W.
    """
    _require_samples(table)

    values = np.zeros(HOURS_PER_DAY)
    used = 0
    for sample in table.samples:
        power = sample_power(sample, panel)
        if not math.isfinite(power):
            continue
        values[sample.hour] = max(values[sample.hour], power)
        used += 1

    return HourlyPowerSeries(
        kind=SeriesKind.PEAK,
        values=[float(v) for v in values],
        samples_considered=len(table.samples) + len(table.dropped),
        samples_used=used,
    )


def hourly_average_series(
    table: IrradianceTable,
    panel: PanelConfiguration,
) -> HourlyPowerSeries:
    """
    Typical-day profile for one calendar month.

    Derated power is summed per hour-of-day bucket across every day in the
    table and divided by the number of days in that month (28/30/31).
    """
    _require_samples(table)

    months = {s.timestamp.month for s in table.samples}
    if len(months) > 1:
        raise ValueError(
            f"Hourly average needs samples from a single month, got months {sorted(months)}"
        )
    divisor = days_in_month(months.pop())

    sums = np.zeros(HOURS_PER_DAY)
    used = 0
    for sample in table.samples:
        power = sample_power(sample, panel)
        if not math.isfinite(power):
            continue
        sums[sample.hour] += power
        used += 1

    return HourlyPowerSeries(
        kind=SeriesKind.AVERAGE,
        values=[float(v) for v in sums / divisor],
        samples_considered=len(table.samples) + len(table.dropped),
        samples_used=used,
    )


def monthly_energy(
    table: IrradianceTable,
    panel: PanelConfiguration,
) -> list[MonthlyEnergyRecord]:
    """
    Average daily energy per calendar month from a daily-resolution table.

    Each month's total is divided by the count of usable samples observed in
    that month, not by its calendar day count. Dropped records count as
    considered but never as used; a month with no usable sample reports
    `average_daily_energy=None`. Records whose key could not be parsed have
    no month, so they are left out of every month's `samples_considered`
    and only show up in the table's `dropped` list.
    """
    _require_samples(table)

    totals = np.zeros(MONTHS_PER_YEAR)
    used = np.zeros(MONTHS_PER_YEAR, dtype=int)
    considered = np.zeros(MONTHS_PER_YEAR, dtype=int)

    for sample in table.samples:
        month = sample.month_index
        considered[month] += 1
        power = sample_power(sample, panel)
        if not math.isfinite(power):
            continue
        totals[month] += power
        used[month] += 1

    for dropped in table.dropped:
        if dropped.timestamp is not None:
            considered[dropped.timestamp.month - 1] += 1

    records = []
    for month in range(MONTHS_PER_YEAR):
        average = float(totals[month] / used[month]) if used[month] > 0 else None
        records.append(MonthlyEnergyRecord(
            month=month,
            average_daily_energy=average,
            samples_considered=int(considered[month]),
            samples_used=int(used[month]),
        ))
    return records


def peak_power(table: IrradianceTable, panel: PanelConfiguration) -> float:
    """Largest derated power across the table (W)."""
    _require_samples(table)
    powers = [sample_power(s, panel) for s in table.samples]
    finite = [p for p in powers if math.isfinite(p)]
    return max(finite) if finite else 0.0
