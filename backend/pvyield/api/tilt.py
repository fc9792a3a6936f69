"""
API routes for the clear-sky optimal tilt search.
"""

from fastapi import APIRouter, HTTPException, Query

from pvyield.engine.geometry import default_surface_azimuth
from pvyield.engine.tilt_optimizer import optimal_tilt, refine_optimal_tilt, tilt_profile
from pvyield.models.estimate import OptimalTiltOutput, TiltProfilePoint

router = APIRouter(prefix="/api/v1", tags=["tilt"])


@router.get("/tilt/optimal", response_model=OptimalTiltOutput)
def get_optimal_tilt(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    refine: bool = Query(False, description="Also return a continuous refinement"),
):
    """Optimal fixed tilt for a latitude, plus the equator-facing azimuth."""
    try:
        return OptimalTiltOutput(
            latitude=latitude,
            optimal_tilt=optimal_tilt(latitude),
            refined_tilt=refine_optimal_tilt(latitude) if refine else None,
            default_surface_azimuth=default_surface_azimuth(latitude),
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/tilt/profile", response_model=list[TiltProfilePoint])
def get_tilt_profile(latitude: float = Query(..., ge=-90.0, le=90.0)):
    """Annual clear-sky irradiation for every integer tilt 0-90°."""
    try:
        return [
            TiltProfilePoint(tilt=tilt, annual_irradiation=round(total, 2))
            for tilt, total in tilt_profile(latitude)
        ]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
