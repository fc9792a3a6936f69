"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from pvyield.api.estimate import router as estimate_router
from pvyield.api.tilt import router as tilt_router
from pvyield.api.sizing import router as sizing_router
from pvyield.api.sun import router as sun_router

router = APIRouter()
router.include_router(estimate_router)
router.include_router(tilt_router)
router.include_router(sizing_router)
router.include_router(sun_router)
