"""
test_locations.py — Tests for the location registry.
"""

import json

import pytest

from globe_api.models.hotspot import Location
from globe_api.services.locations import LocationRegistry, load_registry, location_registry


class TestDefaultRegistry:

    def test_has_thirty_locations(self):
        assert len(location_registry) == 30

    def test_ids_are_unique(self):
        ids = location_registry.ids()
        assert len(ids) == len(set(ids))

    def test_lookup_by_woeid(self):
        london = location_registry.get(44418)
        assert london.name == "London"
        assert london.lat == pytest.approx(51.5074)

    def test_unknown_woeid_is_none(self):
        assert location_registry.get(1) is None

    def test_ids_in_registry_order(self):
        assert location_registry.ids()[0] == 2459115  # New York
        assert location_registry.ids()[-1] == 2348079  # Auckland


class TestRegistryConstruction:

    def test_duplicate_ids_rejected(self):
        loc = Location(location_id=7, name="A", lat=0, lng=0)
        with pytest.raises(ValueError):
            LocationRegistry([loc, loc.model_copy(update={"name": "B"})])

    def test_load_from_json_file(self, tmp_path):
        path = tmp_path / "locations.json"
        path.write_text(json.dumps([
            {"location_id": 1, "name": "Alpha", "lat": 10.0, "lng": 20.0},
            {"location_id": 2, "name": "Beta", "lat": -10.0, "lng": -20.0, "country": "Nowhere"},
        ]))

        registry = load_registry(str(path))

        assert registry.ids() == [1, 2]
        assert registry.get(2).country == "Nowhere"

    def test_empty_path_uses_embedded_table(self):
        assert len(load_registry("")) == 30

    def test_invalid_coordinates_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"location_id": 1, "name": "X", "lat": 123, "lng": 0}]))
        with pytest.raises(ValueError):
            load_registry(str(path))
