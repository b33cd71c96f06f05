import pytest

from geoshapes.domain.geometry import Geometry

KINDS = [
    "point",
    "multiPoint",
    "lineString",
    "multiLineString",
    "polygon",
    "multiPolygon",
    "geometryCollection",
    "circle",
]


@pytest.mark.parametrize("kind", KINDS)
def test_serialize_is_exact_inverse_of_parse(samples, kind):
    payload = samples[kind]
    assert Geometry.parse(payload).serialize() == payload


@pytest.mark.parametrize("kind", KINDS)
def test_parse_of_serialize_is_structurally_equal(samples, kind):
    geometry = Geometry.parse(samples[kind])
    again = Geometry.parse(geometry.serialize())

    assert again == geometry
    assert again.center == geometry.center


def test_point_and_circle_emit_flat_pairs(samples):
    assert Geometry.parse(samples["point"]).serialize()["coordinates"] == [-105.01621, 39.57422]

    circle = Geometry.parse(samples["circle"]).serialize()
    assert circle["coordinates"] == [-0.1276, 51.5072]
    assert circle["radius"] == 250.0


def test_circle_without_radius_serializes_the_default():
    out = Geometry.parse({"type": "circle", "coordinates": [1.0, 2.0]}).serialize()
    assert out == {"type": "circle", "coordinates": [1.0, 2.0], "radius": 1609.344}


def test_collection_emits_geometries_not_coordinates(samples):
    out = Geometry.parse(samples["geometryCollection"]).serialize()
    assert "coordinates" not in out
    assert out["geometries"] == samples["geometryCollection"]["geometries"]


def test_unknown_serializes_to_type_only():
    assert Geometry.parse({"type": "nope", "coordinates": [1, 2]}).serialize() == {"type": "unknown"}


def test_serialize_returns_fresh_lists(samples):
    geometry = Geometry.parse(samples["lineString"])
    first = geometry.serialize()
    first["coordinates"].append([0.0, 0.0])
    first["coordinates"][0][0] = 999.0

    assert geometry.serialize() == samples["lineString"]
