"""
test_hotspot_aggregator.py — Ranking, partition and batched fan-out tests.

rank_hotspots() is tested directly with hand-built samples; the batched
fan-out runs the real XTrendsAdapter against httpx.MockTransport.
"""

import asyncio

import httpx
import pytest

from globe_api.models.hotspot import Location, TrendSample
from globe_api.services.hotspot_aggregator import HotspotAggregator, rank_hotspots
from globe_api.services.locations import LocationRegistry, location_registry
from globe_api.services.x_trends_adapter import XTrendsAdapter


def _registry(n):
    return LocationRegistry(
        Location(location_id=i, name=f"City {i}", lat=float(i % 90), lng=float(i % 180))
        for i in range(1, n + 1)
    )


def _sample(location_id, volume, velocity):
    return TrendSample(
        location_id=location_id,
        total_volume=volume,
        velocity_score=velocity,
        top_trend=f"top-{location_id}",
        emerging_trend=f"new-{location_id}",
    )


def _woeid(request):
    return int(request.url.path.rsplit("/", 1)[-1])


def _varied_payload(woeid):
    """Deterministic but varied trend list for a WOEID."""
    k = woeid % 97
    data = [{"trend_name": f"{woeid}-top", "tweet_count": 20_000 + k * 1_000}]
    for rank in range(1, 10):
        count = 500 if rank <= k % 9 else 60_000
        data.append({"trend_name": f"{woeid}-{rank}", "tweet_count": count})
    return {"data": data}


def _aggregator(handler, registry=location_registry, **kwargs):
    adapter = XTrendsAdapter(
        api_key="test-token",
        base_url="https://api.x.test/2",
        transport=httpx.MockTransport(handler),
    )
    kwargs.setdefault("batch_delay", 0)
    return HotspotAggregator(adapter, registry, **kwargs)


# ── rank_hotspots ─────────────────────────────────────────────────────────────

class TestRankHotspots:

    def test_red_takes_top_volume(self):
        registry = _registry(4)
        samples = [_sample(1, 10, 0), _sample(2, 40, 0), _sample(3, 30, 0), _sample(4, 20, 0)]

        red, _ = rank_hotspots(samples, registry, red_limit=2, blue_limit=2)

        assert [h.name for h in red] == ["City 2", "City 3"]
        assert [h.volume for h in red] == [40, 30]
        assert all(h.type == "red" for h in red)
        assert red[0].topTrend == "top-2"

    def test_blue_excludes_red_and_sorts_by_velocity(self):
        registry = _registry(4)
        samples = [
            _sample(1, 100, 900.0),   # red despite the highest velocity
            _sample(2, 50, 10.0),
            _sample(3, 40, 300.0),
            _sample(4, 30, 200.0),
        ]

        red, blue = rank_hotspots(samples, registry, red_limit=1, blue_limit=2)

        assert [h.name for h in red] == ["City 1"]
        assert [z.name for z in blue] == ["City 3", "City 4"]
        assert [z.velocity for z in blue] == [300.0, 200.0]
        assert blue[0].topTrend == "new-3"
        assert all(z.type == "blue" for z in blue)

    def test_fewer_samples_than_limits(self):
        registry = _registry(3)
        samples = [_sample(i, i, i) for i in range(1, 4)]

        red, blue = rank_hotspots(samples, registry, red_limit=15, blue_limit=15)

        assert len(red) == 3
        assert blue == []

    def test_ties_keep_input_order(self):
        registry = _registry(5)
        samples = [_sample(i, 100, 5.0) for i in (3, 1, 5, 2, 4)]

        red, blue = rank_hotspots(samples, registry, red_limit=2, blue_limit=3)

        assert [h.name for h in red] == ["City 3", "City 1"]
        assert [z.name for z in blue] == ["City 5", "City 2", "City 4"]

    def test_unknown_location_dropped(self):
        registry = _registry(2)
        samples = [_sample(99, 1_000, 1.0), _sample(1, 10, 1.0)]

        red, _ = rank_hotspots(samples, registry, red_limit=2, blue_limit=0)

        assert [h.name for h in red] == ["City 1"]

    def test_red_location_copies_coordinates(self):
        registry = location_registry
        red, _ = rank_hotspots([_sample(1118370, 5, 1.0)], registry, 1, 1)
        assert (red[0].name, red[0].lat, red[0].lng) == ("Tokyo", 35.6895, 139.6917)


# ── compute_snapshot ──────────────────────────────────────────────────────────

class TestComputeSnapshot:

    async def test_full_registry_snapshot_invariants(self):
        def handler(request):
            return httpx.Response(200, json=_varied_payload(_woeid(request)))

        snapshot = await _aggregator(handler).compute_snapshot()

        assert snapshot.source == "api"
        assert len(snapshot.redHotspots) == 15
        assert len(snapshot.blueZones) == 15

        red_names = {h.name for h in snapshot.redHotspots}
        blue_names = {z.name for z in snapshot.blueZones}
        assert red_names.isdisjoint(blue_names)

        red_volumes = [h.volume for h in snapshot.redHotspots]
        blue_volumes = [z.volume for z in snapshot.blueZones]
        assert red_volumes == sorted(red_volumes, reverse=True)
        assert blue_volumes == sorted(blue_volumes, reverse=True)

    async def test_failed_locations_are_skipped(self):
        def handler(request):
            woeid = _woeid(request)
            if woeid == 44418:
                return httpx.Response(503)
            if woeid == 1118370:
                raise httpx.ConnectError("boom", request=request)
            return httpx.Response(200, json=_varied_payload(woeid))

        snapshot = await _aggregator(handler).compute_snapshot()

        names = {h.name for h in snapshot.redHotspots} | {z.name for z in snapshot.blueZones}
        assert "London" not in names
        assert "Tokyo" not in names
        assert len(names) == 28

    async def test_all_failures_returns_none(self):
        def handler(request):
            return httpx.Response(500)

        assert await _aggregator(handler).compute_snapshot() is None

    async def test_unexpected_adapter_error_skips_location(self):
        def handler(request):
            return httpx.Response(200, json=_varied_payload(_woeid(request)))

        aggregator = _aggregator(handler, registry=_registry(3))
        original = aggregator.adapter.fetch_trend_sample

        async def flaky(location, client=None):
            if location.location_id == 2:
                raise RuntimeError("bug")
            return await original(location, client)

        aggregator.adapter.fetch_trend_sample = flaky
        snapshot = await aggregator.compute_snapshot()

        names = [h.name for h in snapshot.redHotspots]
        assert "City 2" not in names
        assert len(names) == 2

    async def test_requests_are_batched(self):
        in_flight = 0
        peak = 0

        async def handler(request):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return httpx.Response(200, json=_varied_payload(_woeid(request)))

        await _aggregator(handler, batch_size=10).compute_snapshot()

        assert peak == 10

    async def test_every_location_is_polled_once(self):
        polled = []

        def handler(request):
            polled.append(_woeid(request))
            return httpx.Response(200, json=_varied_payload(_woeid(request)))

        await _aggregator(handler, batch_size=7).compute_snapshot()

        assert sorted(polled) == sorted(location_registry.ids())

    @pytest.mark.parametrize("red_limit,blue_limit", [(5, 3), (0, 10), (30, 15)])
    async def test_cardinality_bounds(self, red_limit, blue_limit):
        def handler(request):
            return httpx.Response(200, json=_varied_payload(_woeid(request)))

        snapshot = await _aggregator(
            handler, red_limit=red_limit, blue_limit=blue_limit
        ).compute_snapshot()

        assert len(snapshot.redHotspots) == red_limit
        assert len(snapshot.blueZones) == min(blue_limit, 30 - red_limit)
