"""
API routes for panel power estimates.
"""

from fastapi import APIRouter, Depends, HTTPException

from pvyield.api.deps import get_estimator, raise_for_status
from pvyield.engine.estimator import PvEstimator
from pvyield.models.estimate import EstimateInput, EstimateOutput, TableEstimateInput

router = APIRouter(prefix="/api/v1", tags=["estimate"])


@router.post("/estimate/table", response_model=EstimateOutput)
def estimate_from_table(
    body: TableEstimateInput,
    estimator: PvEstimator = Depends(get_estimator),
):
    """
    Estimate from a provider payload supplied in the request body.

    Hourly payloads return the hourly peak series and peak power; daily
    payloads return the twelve monthly energy records.
    """
    try:
        result = estimator.estimate_from_payload(
            payload=body.payload,
            latitude=body.latitude,
            longitude=body.longitude,
            panel=body.panel,
            resolution=body.resolution,
            zenith_mode=body.zenith_mode,
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    raise_for_status(result.status, result.message)
    return result


@router.post("/estimate/day", response_model=EstimateOutput)
def estimate_day(
    body: EstimateInput,
    estimator: PvEstimator = Depends(get_estimator),
):
    """Hourly peak power profile on the solstice of the chosen season."""
    try:
        result = estimator.estimate_day(body)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    raise_for_status(result.status, result.message)
    return result


@router.post("/estimate/monthly", response_model=EstimateOutput)
def estimate_monthly(
    body: EstimateInput,
    estimator: PvEstimator = Depends(get_estimator),
):
    """Average daily energy (kWh/day) for each month of the chosen year."""
    try:
        result = estimator.estimate_monthly(body)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    raise_for_status(result.status, result.message)
    return result


@router.post("/estimate/typical-day", response_model=EstimateOutput)
def estimate_typical_day(
    body: EstimateInput,
    estimator: PvEstimator = Depends(get_estimator),
):
    """Hourly average power profile for a typical day of the chosen month."""
    try:
        result = estimator.estimate_typical_day(body)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    raise_for_status(result.status, result.message)
    return result
