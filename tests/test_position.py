import pytest

from geoshapes.domain.position import CoordinateOrder, EmptyPositionsError, Position


def test_from_coordinates_reads_lon_then_lat():
    position = Position.from_coordinates([10, 20])
    assert position.longitude == 10
    assert position.latitude == 20


def test_from_coordinates_defaults_missing_components_and_ignores_altitude():
    assert Position.from_coordinates([]) == Position(longitude=0.0, latitude=0.0)
    assert Position.from_coordinates([5]) == Position(longitude=5.0, latitude=0.0)
    assert Position.from_coordinates([1, 2, 300]) == Position(longitude=1.0, latitude=2.0)


def test_values_are_not_normalized():
    position = Position.from_coordinates([190.0, 95.0])
    assert position.longitude == 190.0
    assert position.latitude == 95.0


def test_serialize_is_geojson_order():
    assert Position(longitude=10, latitude=20).serialize() == [10, 20]


def test_project_lng_lat_and_lat_lng():
    position = Position(longitude=10, latitude=20)
    assert position.project(CoordinateOrder.LNG_LAT) == (10, 20)
    assert position.project(CoordinateOrder.LAT_LNG) == (20, 10)
    # String values are accepted too (they come from YAML/CLI).
    assert position.project("latLng") == (20, 10)


def test_project_rejects_unknown_order():
    with pytest.raises(ValueError):
        Position(longitude=1, latitude=2).project("xy")


def test_center_of_single_position_is_that_position():
    position = Position(longitude=3.5, latitude=-7.25)
    assert Position.center([position]) is position


def test_center_is_bounding_box_midpoint():
    positions = [
        Position.from_coordinates([120, 30]),
        Position.from_coordinates([100, -30]),
        Position.from_coordinates([-100, 50]),
        Position.from_coordinates([-100, -30]),
        Position.from_coordinates([-170, 50]),
    ]
    center = Position.center(positions)
    assert center.latitude == 10
    assert center.longitude == -25


def test_center_is_not_a_centroid():
    # Three points clustered near the origin and one far away: a mean would be pulled
    # towards the cluster, the bounding-box midpoint is not.
    positions = [Position(0, 0), Position(0.1, 0), Position(0, 0.1), Position(10, 10)]
    assert Position.center(positions) == Position(longitude=5.0, latitude=5.0)


def test_center_of_nothing_raises():
    with pytest.raises(EmptyPositionsError, match="at least one position"):
        Position.center([])


def test_empty_positions_error_is_a_value_error():
    assert issubclass(EmptyPositionsError, ValueError)
