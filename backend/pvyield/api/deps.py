"""
Shared route dependencies.
"""

from functools import lru_cache
from typing import Optional

from fastapi import HTTPException

from pvyield.engine.estimator import PvEstimator
from pvyield.models.estimate import EstimateStatus


@lru_cache(maxsize=1)
def get_estimator() -> PvEstimator:
    """Process-wide estimator (stateless, safe to share)."""
    return PvEstimator()


def raise_for_status(status: EstimateStatus, message: Optional[str]) -> None:
    """Map pipeline failures to HTTP errors. NO_DATA is a valid 200 result."""
    if status == EstimateStatus.UPSTREAM_ERROR:
        raise HTTPException(status_code=502, detail=message)
    if status == EstimateStatus.DATA_ERROR:
        raise HTTPException(status_code=422, detail=message)
