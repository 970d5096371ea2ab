"""
hotspot_aggregator.py — Fan-out over the registry, then rank into red/blue.

HOW A REFRESH RUNS
──────────────────
1. Locations are fetched in batches of TRENDS_BATCH_SIZE. Requests within
   a batch run concurrently and the batch waits for all of them; a short
   TRENDS_BATCH_DELAY_SECONDS pause separates batches to go easy on the
   upstream rate limit.
2. Locations that failed (None) are dropped for this cycle.
3. rank_hotspots() picks the RED set (top K by total volume) and then the
   BLUE set (top M by velocity among the locations not already red).

Results come back from asyncio.gather in submission order, so ranking
always sees candidates in registry order and exact score ties resolve the
same way on every refresh.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from globe_api.core.config import settings
from globe_api.models.hotspot import BlueZone, HotspotSnapshot, RedHotspot, TrendSample
from globe_api.services.locations import LocationRegistry
from globe_api.services.x_trends_adapter import XTrendsAdapter

logger = logging.getLogger(__name__)


def rank_hotspots(
    samples: Sequence[TrendSample],
    registry: LocationRegistry,
    red_limit: int,
    blue_limit: int,
) -> tuple[list[RedHotspot], list[BlueZone]]:
    """
    Partition samples into red hotspots and blue zones.

    A location placed in red is never also placed in blue. Both sorts are
    stable, so ties keep the order of `samples`.
    """
    by_volume = sorted(samples, key=lambda s: s.total_volume, reverse=True)
    red_samples = by_volume[:red_limit]
    red_ids = {s.location_id for s in red_samples}

    by_velocity = sorted(
        (s for s in samples if s.location_id not in red_ids),
        key=lambda s: s.velocity_score,
        reverse=True,
    )
    blue_samples = by_velocity[:blue_limit]

    red_hotspots: list[RedHotspot] = []
    for sample in red_samples:
        location = registry.get(sample.location_id)
        if location is None:
            logger.error("Sample for unknown WOEID %s dropped", sample.location_id)
            continue
        red_hotspots.append(RedHotspot(
            name=location.name,
            lat=location.lat,
            lng=location.lng,
            volume=sample.total_volume,
            topTrend=sample.top_trend,
        ))

    blue_zones: list[BlueZone] = []
    for sample in blue_samples:
        location = registry.get(sample.location_id)
        if location is None:
            logger.error("Sample for unknown WOEID %s dropped", sample.location_id)
            continue
        blue_zones.append(BlueZone(
            name=location.name,
            lat=location.lat,
            lng=location.lng,
            volume=sample.velocity_score,
            topTrend=sample.emerging_trend,
        ))

    return red_hotspots, blue_zones


class HotspotAggregator:
    """Computes a fresh HotspotSnapshot from the live trends API."""

    def __init__(
        self,
        adapter: XTrendsAdapter,
        registry: LocationRegistry,
        batch_size: Optional[int] = None,
        batch_delay: Optional[float] = None,
        red_limit: Optional[int] = None,
        blue_limit: Optional[int] = None,
    ) -> None:
        self.adapter = adapter
        self.registry = registry
        self.batch_size = batch_size or settings.trends_batch_size
        self.batch_delay = settings.trends_batch_delay_seconds if batch_delay is None else batch_delay
        self.red_limit = settings.red_hotspot_limit if red_limit is None else red_limit
        self.blue_limit = settings.blue_zone_limit if blue_limit is None else blue_limit

    @property
    def enabled(self) -> bool:
        return self.adapter.enabled

    async def collect_samples(self) -> list[TrendSample]:
        """Fetch every registry location in batches; failures are skipped."""
        locations = self.registry.all()
        samples: list[TrendSample] = []

        async with self.adapter.open_client() as client:
            for start in range(0, len(locations), self.batch_size):
                batch = locations[start:start + self.batch_size]
                results = await asyncio.gather(
                    *(self.adapter.fetch_trend_sample(loc, client) for loc in batch),
                    return_exceptions=True,
                )

                for loc, result in zip(batch, results):
                    if isinstance(result, BaseException):
                        logger.error("Unexpected error fetching trends for %s: %r", loc.name, result)
                    elif result is not None:
                        samples.append(result)

                if start + self.batch_size < len(locations) and self.batch_delay > 0:
                    await asyncio.sleep(self.batch_delay)

        logger.debug("Collected %d/%d trend samples", len(samples), len(locations))
        return samples

    async def compute_snapshot(self) -> Optional[HotspotSnapshot]:
        """
        Return a ranked snapshot with source="api", or None when no
        location produced usable data.
        """
        samples = await self.collect_samples()
        if not samples:
            logger.warning("No trends data received from any location")
            return None

        red_hotspots, blue_zones = rank_hotspots(
            samples, self.registry, self.red_limit, self.blue_limit
        )
        return HotspotSnapshot(
            redHotspots=red_hotspots,
            blueZones=blue_zones,
            lastUpdated=datetime.now(tz=timezone.utc).isoformat(),
            source="api",
        )
