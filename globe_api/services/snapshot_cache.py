"""
snapshot_cache.py — Process-wide TTL cache in front of the hotspot aggregator.

One snapshot for the whole service. States:

  Fresh  a snapshot is held and now - stored_at < TTL
         → serve it with source="cache"
  Stale  nothing held, or the TTL has elapsed
         → recompute, store, serve with source="api"

Refreshes are single-flight: an asyncio.Lock guards the
check/recompute/store sequence, and freshness is checked again once the
lock is held, so requests that pile up during a refresh are served the
result of that one refresh, success or failure, instead of each re-polling
~30 locations.

Degradation rules:
  - No X_API_KEY        → fallback dataset, cache left untouched.
  - Refresh fails, times out (TRENDS_REFRESH_DEADLINE_SECONDS) or raises
                        → keep the previous snapshot and serve it as
                          "cache"; with nothing held, serve the fallback
                          dataset and leave the cache empty.

`now` is a time.monotonic() reading in seconds; tests pass it explicitly.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from globe_api.core.config import settings
from globe_api.models.hotspot import HotspotSnapshot
from globe_api.services.fallback_data import fallback_snapshot
from globe_api.services.hotspot_aggregator import HotspotAggregator
from globe_api.services.locations import location_registry
from globe_api.services.x_trends_adapter import XTrendsAdapter

logger = logging.getLogger(__name__)


class SnapshotCache:
    def __init__(
        self,
        aggregator: HotspotAggregator,
        ttl: Optional[float] = None,
        refresh_deadline: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.aggregator = aggregator
        self.ttl = settings.trends_cache_ttl_seconds if ttl is None else ttl
        self.refresh_deadline = refresh_deadline or settings.trends_refresh_deadline_seconds
        self._clock = clock
        self._snapshot: Optional[HotspotSnapshot] = None
        self._stored_at = 0.0
        # Bumped after every refresh attempt, successful or not.
        self._generation = 0
        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None

        if not self.aggregator.enabled:
            logger.warning(
                "X_API_KEY not set — live trends disabled. "
                "GET /api/trends will serve the static fallback dataset."
            )

    @property
    def is_warm(self) -> bool:
        return self._snapshot is not None

    def clear(self) -> None:
        self._snapshot = None
        self._stored_at = 0.0

    def _is_fresh(self, now: float) -> bool:
        return self._snapshot is not None and (now - self._stored_at) < self.ttl

    def _cached(self) -> HotspotSnapshot:
        return self._snapshot.model_copy(update={"source": "cache"})

    def _degraded(self) -> HotspotSnapshot:
        """Previous snapshot if one is held, else the fallback dataset."""
        if self._snapshot is not None:
            return self._cached()
        return fallback_snapshot()

    def _refresh_lock(self) -> asyncio.Lock:
        # asyncio.Lock binds to the loop it first waits on; the module
        # singleton can outlive a loop (tests run one loop per test).
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def get_snapshot(self, now: Optional[float] = None) -> HotspotSnapshot:
        if not self.aggregator.enabled:
            return fallback_snapshot()

        if now is None:
            now = self._clock()

        if self._is_fresh(now):
            return self._cached()

        generation = self._generation
        async with self._refresh_lock():
            # Another request may have refreshed while we waited.
            if self._is_fresh(now):
                return self._cached()
            if self._generation != generation:
                # The refresh we queued behind failed; share its outcome.
                return self._degraded()

            snapshot = await self._refresh()
            self._generation += 1
            if snapshot is None:
                if self._snapshot is not None:
                    logger.warning("Trends refresh failed — serving previous snapshot")
                return self._degraded()

            self._snapshot = snapshot
            self._stored_at = now
            return snapshot

    async def _refresh(self) -> Optional[HotspotSnapshot]:
        try:
            return await asyncio.wait_for(
                self.aggregator.compute_snapshot(),
                timeout=self.refresh_deadline,
            )
        except asyncio.TimeoutError:
            logger.warning("Trends refresh exceeded %.1fs deadline", self.refresh_deadline)
            return None
        except Exception as exc:
            logger.error("Trends refresh failed: %s", exc, exc_info=True)
            return None


# Module-level singleton
snapshot_cache = SnapshotCache(HotspotAggregator(XTrendsAdapter(), location_registry))


def get_snapshot_cache() -> SnapshotCache:
    """FastAPI dependency — tests override this with their own cache."""
    return snapshot_cache
