"""
API routes for sun path data.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from pvyield.api.deps import get_estimator
from pvyield.engine.estimator import PvEstimator
from pvyield.engine.sun_position import sun_path
from pvyield.models.sun import SunPathPoint

router = APIRouter(prefix="/api/v1", tags=["sun"])


@router.get("/sun/path", response_model=list[SunPathPoint])
def get_sun_path(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    day: date = Query(..., description="Local date, YYYY-MM-DD"),
    estimator: PvEstimator = Depends(get_estimator),
):
    """Hourly sun azimuth and altitude for one day, for sun-path diagrams."""
    try:
        return sun_path(latitude, longitude, day, provider=estimator.sun_provider)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
