"""
trends.py — Trend hotspot routes for the globe.

Routes:
  GET  /api/trends            — red hotspots + blue emerging zones
  GET  /api/trends/locations  — the polled location registry

HOW THE DATA FLOWS
──────────────────
1. The globe frontend calls GET /api/trends on load and on a timer.
2. SnapshotCache serves the held snapshot while it is younger than
   TRENDS_CACHE_TTL_SECONDS (source="cache").
3. Otherwise HotspotAggregator polls the X trends API for every registry
   location, scores and ranks them (source="api").
4. Without X_API_KEY, or when nothing usable came back, the embedded
   fallback dataset is served (source="fallback").

This endpoint never returns an error status: the globe always gets data,
and `source` says how live it is.

TESTING YOUR CHANGES
─────────────────────
  pytest tests/test_trends_routes.py -v

  curl http://localhost:8000/api/trends
  curl http://localhost:8000/api/trends/locations
"""

import logging

from fastapi import APIRouter, Depends

from globe_api.models.hotspot import HotspotSnapshot, Location
from globe_api.services.fallback_data import fallback_snapshot
from globe_api.services.snapshot_cache import SnapshotCache, get_snapshot_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trends", tags=["trends"])


@router.get("", response_model=HotspotSnapshot)
async def get_trends(cache: SnapshotCache = Depends(get_snapshot_cache)):
    """
    Return the current hotspot snapshot.

    Response shape (HotspotSnapshot):
      redHotspots : top locations by tweet volume (volume = tweet count)
      blueZones   : top remaining locations by velocity (volume = velocity score)
      lastUpdated : ISO-8601 time the snapshot was computed
      source      : "api" | "cache" | "fallback"
    """
    try:
        return await cache.get_snapshot()
    except Exception:
        # Last-resort safety net — the globe should still render something.
        logger.exception("Trends endpoint failed, serving fallback data")
        return fallback_snapshot()


@router.get("/locations", response_model=list[Location])
async def get_locations(cache: SnapshotCache = Depends(get_snapshot_cache)):
    """Return every location polled for trends, in registry order."""
    return cache.aggregator.registry.all()
