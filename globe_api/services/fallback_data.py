"""
fallback_data.py — Static snapshot shown when live trends are unavailable.

Served when X_API_KEY is not configured, or when a refresh produced no
usable data and there is no earlier snapshot to fall back on. The globe
always has something to render.

Volumes are plausible fixed numbers, not measurements.
"""

from datetime import datetime, timezone

from globe_api.models.hotspot import BlueZone, HotspotSnapshot, RedHotspot

_RED_HOTSPOTS: list[RedHotspot] = [
    RedHotspot(name="New York",  lat=40.7128,  lng=-74.006,  volume=100000),
    RedHotspot(name="London",    lat=51.5074,  lng=-0.1276,  volume=95000),
    RedHotspot(name="Tokyo",     lat=35.6895,  lng=139.6917, volume=90000),
    RedHotspot(name="São Paulo", lat=-23.5505, lng=-46.6333, volume=85000),
    RedHotspot(name="Mumbai",    lat=19.076,   lng=72.8777,  volume=80000),
]

_BLUE_ZONES: list[BlueZone] = [
    BlueZone(name="Paris",       lat=48.8566,  lng=2.3522,    volume=75000),
    BlueZone(name="Los Angeles", lat=34.0522,  lng=-118.2437, volume=70000),
    BlueZone(name="Seoul",       lat=37.5665,  lng=126.978,   volume=68000),
    BlueZone(name="Jakarta",     lat=-6.2088,  lng=106.8456,  volume=65000),
    BlueZone(name="Mexico City", lat=19.4326,  lng=-99.1332,  volume=62000),
    BlueZone(name="Cairo",       lat=30.0444,  lng=31.2357,   volume=60000),
    BlueZone(name="Berlin",      lat=52.52,    lng=13.405,    volume=58000),
    BlueZone(name="Delhi",       lat=28.6139,  lng=77.209,    volume=55000),
    BlueZone(name="Sydney",      lat=-33.8688, lng=151.2093,  volume=52000),
    BlueZone(name="Lagos",       lat=6.5244,   lng=3.3792,    volume=50000),
    BlueZone(name="Toronto",     lat=43.6532,  lng=-79.3832,  volume=48000),
    BlueZone(name="Moscow",      lat=55.7558,  lng=37.6173,   volume=45000),
    BlueZone(name="Singapore",   lat=1.3521,   lng=103.8198,  volume=42000),
    BlueZone(name="Hong Kong",   lat=22.3193,  lng=114.1694,  volume=40000),
    BlueZone(name="Dubai",       lat=25.2048,  lng=55.2708,   volume=38000),
]


def fallback_snapshot() -> HotspotSnapshot:
    """Fresh copy of the fallback dataset, stamped with the current time."""
    return HotspotSnapshot(
        redHotspots=[h.model_copy() for h in _RED_HOTSPOTS],
        blueZones=[z.model_copy() for z in _BLUE_ZONES],
        lastUpdated=datetime.now(tz=timezone.utc).isoformat(),
        source="fallback",
    )
