import pytest

from geoshapes.domain.geometry import Geometry
from geoshapes.domain.position import CoordinateOrder
from geoshapes.shapes.adapters import Circle, PointShape, Polygon, Polyline, shapes_for


def test_polygon_with_hole_yields_one_shape_with_one_interior_ring(samples):
    shapes = shapes_for(Geometry.parse(samples["polygon"]), CoordinateOrder.LAT_LNG)

    assert len(shapes) == 1
    polygon = shapes[0]
    assert isinstance(polygon, Polygon)
    assert len(polygon.interior_polygons) == 1
    assert polygon.point_count == 176


def test_multi_polygon_yields_one_shape_per_polygon(samples):
    shapes = shapes_for(Geometry.parse(samples["multiPolygon"]), CoordinateOrder.LAT_LNG)

    assert len(shapes) == 2
    assert all(isinstance(s, Polygon) for s in shapes)
    assert [len(s.interior_polygons) for s in shapes] == [1, 1]


def test_points_become_point_shapes_in_requested_order(samples):
    shapes = shapes_for(Geometry.parse(samples["multiPoint"]), CoordinateOrder.LAT_LNG)
    assert shapes == [
        PointShape(coordinate=(39.57422, -105.01621)),
        PointShape(coordinate=(35.0539943, -80.6665134)),
    ]

    lng_lat = shapes_for(Geometry.parse(samples["point"]), CoordinateOrder.LNG_LAT)
    assert lng_lat == [PointShape(coordinate=(-105.01621, 39.57422))]


def test_lines_become_polylines(samples):
    line = shapes_for(Geometry.parse(samples["lineString"]), "lngLat")
    assert len(line) == 1
    assert isinstance(line[0], Polyline)
    assert line[0].point_count == 3

    multi = shapes_for(Geometry.parse(samples["multiLineString"]), "lngLat")
    assert [s.point_count for s in multi] == [2, 3]


def test_circle_keeps_its_radius(samples):
    shapes = shapes_for(Geometry.parse(samples["circle"]), CoordinateOrder.LAT_LNG)
    assert shapes == [Circle(center=(51.5072, -0.1276), radius=250.0)]


def test_collection_concatenates_child_shapes(samples):
    shapes = shapes_for(Geometry.parse(samples["geometryCollection"]), CoordinateOrder.LNG_LAT)
    assert [type(s) for s in shapes] == [PointShape, Polyline]


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "polygon", "coordinates": []},
        {"type": "multiPolygon", "coordinates": [[], []]},
        {"type": "lineString", "coordinates": 3},
        {"type": "nonsense"},
    ],
)
def test_empty_or_dropped_geometries_yield_no_shapes(payload):
    assert shapes_for(Geometry.parse(payload), CoordinateOrder.LAT_LNG) == []


def test_default_order_comes_from_settings(samples, monkeypatch, fresh_settings):
    monkeypatch.setenv("GEOSHAPES_COORDINATE_ORDER", "lngLat")
    shapes = shapes_for(Geometry.parse(samples["point"]))
    assert shapes == [PointShape(coordinate=(-105.01621, 39.57422))]
