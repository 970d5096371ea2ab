"""
Health check endpoint.

Used by:
  - Docker HEALTHCHECK instruction
  - Load balancers / orchestrators
  - Front-end to check API connectivity

Reports whether the X trends API is configured and whether a live
snapshot is currently cached, so callers can tell "API down" apart from
"API up but serving fallback data".
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from globe_api.services.snapshot_cache import SnapshotCache, get_snapshot_cache

logger = logging.getLogger(__name__)
router = APIRouter()


class HealthResponse(BaseModel):
    status: str  # Always "ok" if the API process is alive
    version: str
    environment: str
    upstream: str  # "configured" | "unconfigured"
    cache: str  # "warm" | "cold"


@router.get("", response_model=HealthResponse, summary="API health check")
async def health_check(cache: SnapshotCache = Depends(get_snapshot_cache)) -> HealthResponse:
    """
    Returns the liveness status of the API.

    Always HTTP 200 while the process is alive, even without X credentials;
    the trends endpoint degrades to fallback data in that case.
    """
    from globe_api.core.config import settings

    return HealthResponse(
        status="ok",
        version="0.1.0",
        environment=settings.environment,
        upstream="configured" if cache.aggregator.enabled else "unconfigured",
        cache="warm" if cache.is_warm else "cold",
    )
