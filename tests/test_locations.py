import json

import pytest

from locations import DEFAULT_LOCATIONS, LocationTable, load_locations


def test_default_table():
    table = load_locations()
    assert len(table) == 12
    assert table.resolve("Warehouse A") == (13.0827, 80.2707)
    assert table.resolve("Hospital B") == (13.0604, 80.2496)
    assert "Factory I" in table


def test_unknown_location():
    assert LocationTable().resolve("Atlantis") is None


def test_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_LOCATIONS["Atlantis"] = (0.0, 0.0)


def test_as_dict():
    data = LocationTable({"Pad": (1.5, 2.5)}).as_dict()
    assert data == {"Pad": {"lat": 1.5, "lng": 2.5}}


def test_from_geojson(tmp_path):
    """Named points are loaded; unnamed or non-point features are skipped."""
    path = tmp_path / "sites.geojson"
    path.write_text(json.dumps({
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "Rooftop Pad"},
                "geometry": {"type": "Point", "coordinates": [80.25, 13.05]},
            },
            {
                "type": "Feature",
                "properties": {"name": "Corridor"},
                "geometry": {"type": "LineString", "coordinates": [[80.2, 13.0], [80.3, 13.1]]},
            },
            {
                "type": "Feature",
                "properties": {"name": None},
                "geometry": {"type": "Point", "coordinates": [80.0, 13.0]},
            },
        ],
    }))

    table = load_locations(str(path))
    assert len(table) == 1
    assert table.resolve("Rooftop Pad") == pytest.approx((13.05, 80.25))
    assert table.resolve("Corridor") is None


def test_from_geojson_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        LocationTable.from_geojson(str(tmp_path / "nope.geojson"))
