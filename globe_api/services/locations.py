"""
locations.py — Location Registry for the trend hotspot engine.

~30 major cities sampled for trends. The list is kept small on purpose:
every refresh costs one upstream request per location.

Each entry is keyed by its WOEID (Where On Earth ID), the identifier the
X trends API uses. Coordinates are only for placing markers on the globe;
they play no part in scoring.

The embedded table can be replaced without code changes by pointing
LOCATIONS_FILE at a JSON array of objects with the same fields:

    [{"location_id": 44418, "name": "London", "lat": 51.5074, "lng": -0.1276}]
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from globe_api.core.config import settings
from globe_api.models.hotspot import Location

logger = logging.getLogger(__name__)


_LOCATIONS: list[Location] = [
    # Americas
    Location(location_id=2459115, name="New York",      lat=40.7128,  lng=-74.006,   country="USA"),
    Location(location_id=2442047, name="Los Angeles",   lat=34.0522,  lng=-118.2437, country="USA"),
    Location(location_id=2514815, name="Washington DC", lat=38.9072,  lng=-77.0369,  country="USA"),
    Location(location_id=4118,    name="Toronto",       lat=43.6532,  lng=-79.3832,  country="Canada"),
    Location(location_id=468739,  name="Mexico City",   lat=19.4326,  lng=-99.1332,  country="Mexico"),
    Location(location_id=455819,  name="Buenos Aires",  lat=-34.6037, lng=-58.3816,  country="Argentina"),
    Location(location_id=455825,  name="São Paulo",     lat=-23.5505, lng=-46.6333,  country="Brazil"),

    # Europe
    Location(location_id=44418,   name="London",        lat=51.5074,  lng=-0.1276,   country="UK"),
    Location(location_id=615702,  name="Paris",         lat=48.8566,  lng=2.3522,    country="France"),
    Location(location_id=638242,  name="Berlin",        lat=52.52,    lng=13.405,    country="Germany"),
    Location(location_id=727232,  name="Madrid",        lat=40.4168,  lng=-3.7038,   country="Spain"),
    Location(location_id=721943,  name="Rome",          lat=41.9028,  lng=12.4964,   country="Italy"),
    Location(location_id=2122265, name="Moscow",        lat=55.7558,  lng=37.6173,   country="Russia"),
    Location(location_id=610264,  name="Pau",           lat=43.2951,  lng=-0.3708,   country="France"),

    # Middle East & Africa
    Location(location_id=1521894, name="Cairo",         lat=30.0444,  lng=31.2357,   country="Egypt"),
    Location(location_id=1940345, name="Dubai",         lat=25.2048,  lng=55.2708,   country="UAE"),
    Location(location_id=1580913, name="Lagos",         lat=6.5244,   lng=3.3792,    country="Nigeria"),
    Location(location_id=1582504, name="Johannesburg",  lat=-26.2041, lng=28.0473,   country="South Africa"),

    # Asia
    Location(location_id=1118370, name="Tokyo",         lat=35.6895,  lng=139.6917,  country="Japan"),
    Location(location_id=1132599, name="Seoul",         lat=37.5665,  lng=126.978,   country="South Korea"),
    Location(location_id=2151330, name="Sydney",        lat=-33.8688, lng=151.2093,  country="Australia"),
    Location(location_id=1047378, name="Singapore",     lat=1.3521,   lng=103.8198,  country="Singapore"),
    Location(location_id=2295019, name="Hong Kong",     lat=22.3193,  lng=114.1694,  country="Hong Kong"),
    Location(location_id=1252431, name="Delhi",         lat=28.6139,  lng=77.209,    country="India"),
    Location(location_id=2295411, name="Mumbai",        lat=19.076,   lng=72.8777,   country="India"),
    Location(location_id=1225448, name="Jakarta",       lat=-6.2088,  lng=106.8456,  country="Indonesia"),
    Location(location_id=2151849, name="Manila",        lat=14.5995,  lng=120.9842,  country="Philippines"),
    Location(location_id=1166140, name="Bangkok",       lat=13.7563,  lng=100.5018,  country="Thailand"),
    Location(location_id=2161838, name="Beijing",       lat=39.9042,  lng=116.4074,  country="China"),

    # Oceania
    Location(location_id=2348079, name="Auckland",      lat=-36.8485, lng=174.7633,  country="New Zealand"),
]


class LocationRegistry:
    """Immutable lookup table of polled locations, in insertion order."""

    def __init__(self, locations: Iterable[Location]) -> None:
        self._locations = tuple(locations)
        self._by_id: dict[int, Location] = {}
        for loc in self._locations:
            if loc.location_id in self._by_id:
                raise ValueError(f"Duplicate location_id in registry: {loc.location_id}")
            self._by_id[loc.location_id] = loc

    def get(self, location_id: int) -> Optional[Location]:
        return self._by_id.get(location_id)

    def all(self) -> list[Location]:
        return list(self._locations)

    def ids(self) -> list[int]:
        return [loc.location_id for loc in self._locations]

    def __len__(self) -> int:
        return len(self._locations)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._locations)


def load_registry(path: str = "") -> LocationRegistry:
    """
    Build the registry from a JSON file, or from the embedded table when
    no path is given. A bad file is a configuration error and raises.
    """
    if not path:
        return LocationRegistry(_LOCATIONS)

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    registry = LocationRegistry(Location.model_validate(item) for item in raw)
    logger.info("Loaded %d locations from %s", len(registry), path)
    return registry


# Module-level singleton
location_registry = load_registry(settings.locations_file)
