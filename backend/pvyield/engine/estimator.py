"""
Estimation pipeline orchestration.

location → provider fetch → irradiance table → angle of incidence → power
→ derate → aggregation. Table- and fetch-level failures are reported as an
explicit EstimateStatus on the result rather than raised, so callers can tell
"no data" apart from an upstream or data error. The pipeline is stateless:
identical inputs give identical outputs.
"""

import logging
from datetime import date
from typing import Callable, Optional

from pvyield.config import (
    DAILY_CONSUMPTION_KWH,
    DAYS_PER_YEAR,
    SOLSTICE_DATES,
    Resolution,
    Season,
    ZenithMode,
)
from pvyield.engine.aggregation import (
    hourly_average_series,
    hourly_peak_series,
    monthly_energy,
    peak_power,
)
from pvyield.engine.geometry import default_surface_azimuth
from pvyield.engine.irradiance_table import build_irradiance_table
from pvyield.engine.nasa_power import NasaPowerClient, day_range, month_range, year_range
from pvyield.engine.sizing import calculate_system_requirements
from pvyield.engine.sun_position import PvlibSunPositionProvider, SunPositionProvider
from pvyield.engine.tilt_optimizer import optimal_tilt
from pvyield.errors import EmptyTableError, PvYieldError, UpstreamFetchError
from pvyield.models.estimate import EstimateInput, EstimateOutput, EstimateStatus
from pvyield.models.irradiance import IrradianceTable, ProviderRequest
from pvyield.models.panel import PanelConfiguration
from pvyield.models.sizing import SizingInput, SizingOutput

logger = logging.getLogger(__name__)


def solstice_date(latitude: float, season: Season, year: int) -> date:
    """Representative day for a season: the solstice of that hemisphere."""
    hemisphere = "northern" if latitude > 0 else "southern"
    mmdd = SOLSTICE_DATES[hemisphere][season]
    return date(year, int(mmdd[:2]), int(mmdd[2:]))


def resolve_panel(inputs: EstimateInput) -> PanelConfiguration:
    """Fill in the clear-sky optimal tilt and equator-facing azimuth when omitted."""
    tilt = inputs.tilt
    if tilt is None:
        tilt = optimal_tilt(inputs.latitude)
    surface_azimuth = inputs.surface_azimuth
    if surface_azimuth is None:
        surface_azimuth = default_surface_azimuth(inputs.latitude)

    return PanelConfiguration(
        tilt=tilt,
        surface_azimuth=surface_azimuth,
        shading_percent=inputs.shading_percent,
        soiling_fraction=inputs.soiling_fraction,
    )


class PvEstimator:
    """Runs the estimation pipeline against an irradiance provider."""

    def __init__(
        self,
        client: Optional[NasaPowerClient] = None,
        sun_provider: Optional[SunPositionProvider] = None,
    ):
        self.client = client or NasaPowerClient()
        self.sun_provider = sun_provider or PvlibSunPositionProvider()

    def _load_table(
        self,
        request: ProviderRequest,
        zenith_mode: ZenithMode,
    ) -> IrradianceTable:
        payload = self.client.fetch(request)
        return build_irradiance_table(
            payload,
            request.latitude,
            request.longitude,
            sun_provider=self.sun_provider,
            zenith_mode=zenith_mode,
            resolution=request.resolution,
        )

    def _run(
        self,
        latitude: float,
        longitude: float,
        panel: Optional[PanelConfiguration],
        period: Optional[str],
        load: Callable[[], IrradianceTable],
        compute: Callable[[IrradianceTable, EstimateOutput], None],
    ) -> EstimateOutput:
        result = EstimateOutput(
            status=EstimateStatus.OK,
            latitude=latitude,
            longitude=longitude,
            panel=panel,
            period=period,
        )
        try:
            table = load()
            result.samples_dropped = len(table.dropped)
            compute(table, result)
        except UpstreamFetchError as e:
            logger.warning("Upstream fetch failed for (%.4f, %.4f): %s", latitude, longitude, e)
            result.status = EstimateStatus.UPSTREAM_ERROR
            result.message = str(e)
        except EmptyTableError as e:
            result.status = EstimateStatus.NO_DATA
            result.message = str(e)
        except PvYieldError as e:
            logger.warning("Provider data error for (%.4f, %.4f): %s", latitude, longitude, e)
            result.status = EstimateStatus.DATA_ERROR
            result.message = str(e)
        return result

    def estimate_from_payload(
        self,
        payload: dict,
        latitude: float,
        longitude: float,
        panel: PanelConfiguration,
        resolution: Optional[Resolution] = None,
        zenith_mode: ZenithMode = ZenithMode.CONSTANT,
    ) -> EstimateOutput:
        """
        Estimate from a payload already in hand.

        Hourly tables yield the peak series and peak power; daily tables
        yield the twelve monthly energy records.
        """
        def load() -> IrradianceTable:
            return build_irradiance_table(
                payload,
                latitude,
                longitude,
                sun_provider=self.sun_provider,
                zenith_mode=zenith_mode,
                resolution=resolution,
            )

        def compute(table: IrradianceTable, result: EstimateOutput) -> None:
            if table.resolution == Resolution.DAILY:
                result.monthly = monthly_energy(table, panel)
            else:
                result.hourly = hourly_peak_series(table, panel)
                result.peak_power = peak_power(table, panel)

        return self._run(latitude, longitude, panel, None, load, compute)

    def estimate_day(self, inputs: EstimateInput) -> EstimateOutput:
        """Hourly peak profile and peak power on the season's solstice."""
        panel = resolve_panel(inputs)
        start, end = day_range(solstice_date(inputs.latitude, inputs.season, inputs.year))
        request = ProviderRequest(
            start_date=start,
            end_date=end,
            latitude=inputs.latitude,
            longitude=inputs.longitude,
            resolution=Resolution.HOURLY,
        )

        def compute(table: IrradianceTable, result: EstimateOutput) -> None:
            result.hourly = hourly_peak_series(table, panel)
            result.peak_power = peak_power(table, panel)

        return self._run(
            inputs.latitude, inputs.longitude, panel, f"{start}-{end}",
            lambda: self._load_table(request, inputs.zenith_mode), compute,
        )

    def estimate_monthly(self, inputs: EstimateInput) -> EstimateOutput:
        """Average daily energy per month over a full year of daily data."""
        panel = resolve_panel(inputs)
        start, end = year_range(inputs.year)
        request = ProviderRequest(
            start_date=start,
            end_date=end,
            latitude=inputs.latitude,
            longitude=inputs.longitude,
            resolution=Resolution.DAILY,
        )

        def compute(table: IrradianceTable, result: EstimateOutput) -> None:
            result.monthly = monthly_energy(table, panel)

        return self._run(
            inputs.latitude, inputs.longitude, panel, f"{start}-{end}",
            lambda: self._load_table(request, inputs.zenith_mode), compute,
        )

    def estimate_typical_day(self, inputs: EstimateInput) -> EstimateOutput:
        """Hourly average profile across every day of one calendar month."""
        panel = resolve_panel(inputs)
        start, end = month_range(inputs.year, inputs.month)
        request = ProviderRequest(
            start_date=start,
            end_date=end,
            latitude=inputs.latitude,
            longitude=inputs.longitude,
            resolution=Resolution.HOURLY,
        )

        def compute(table: IrradianceTable, result: EstimateOutput) -> None:
            result.hourly = hourly_average_series(table, panel)
            result.peak_power = max(result.hourly.values)

        return self._run(
            inputs.latitude, inputs.longitude, panel, f"{start}-{end}",
            lambda: self._load_table(request, inputs.zenith_mode), compute,
        )

    def size_system(self, inputs: SizingInput) -> SizingOutput:
        """Grid and off-grid system sizes from the season's solstice day."""
        daily = DAILY_CONSUMPTION_KWH[inputs.house_type]
        try:
            if inputs.payload is not None:
                table = build_irradiance_table(
                    inputs.payload,
                    inputs.latitude,
                    inputs.longitude,
                    sun_provider=self.sun_provider,
                )
            else:
                start, end = day_range(
                    solstice_date(inputs.latitude, inputs.season, inputs.year)
                )
                table = self._load_table(
                    ProviderRequest(
                        start_date=start,
                        end_date=end,
                        latitude=inputs.latitude,
                        longitude=inputs.longitude,
                        resolution=Resolution.HOURLY,
                    ),
                    ZenithMode.CONSTANT,
                )
            return calculate_system_requirements(table, inputs.house_type)
        except UpstreamFetchError as e:
            status, message = EstimateStatus.UPSTREAM_ERROR, str(e)
        except EmptyTableError as e:
            status, message = EstimateStatus.NO_DATA, str(e)
        except PvYieldError as e:
            status, message = EstimateStatus.DATA_ERROR, str(e)

        return SizingOutput(
            status=status,
            message=message,
            daily_consumption=daily,
            annual_consumption=daily * DAYS_PER_YEAR,
        )
