"""
API routes for PV system sizing.
"""

from fastapi import APIRouter, Depends, HTTPException

from pvyield.api.deps import get_estimator, raise_for_status
from pvyield.engine.estimator import PvEstimator
from pvyield.models.sizing import SizingInput, SizingOutput

router = APIRouter(prefix="/api/v1", tags=["sizing"])


@router.post("/sizing", response_model=SizingOutput)
def size_system(
    body: SizingInput,
    estimator: PvEstimator = Depends(get_estimator),
):
    """Grid-tied and off-grid system size and panel count for a household."""
    try:
        result = estimator.size_system(body)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Calculation error: {str(e)}")

    raise_for_status(result.status, result.message)
    return result
