from __future__ import annotations

import copy
import math

import pytest

from geoshapes.config.settings import get_settings


def closed_ring(center_lon: float, center_lat: float, radius_deg: float, count: int) -> list[list[float]]:
    """A closed ring of `count` points (the last point repeats the first)."""
    points = []
    for i in range(count - 1):
        angle = 2 * math.pi * i / (count - 1)
        points.append([center_lon + radius_deg * math.cos(angle), center_lat + radius_deg * math.sin(angle)])
    points.append(list(points[0]))
    return points


def polygon_with_hole(center_lon: float = -84.0, center_lat: float = 34.5) -> list[list[list[float]]]:
    # 176-point exterior boundary plus one small interior ring.
    return [
        closed_ring(center_lon, center_lat, 0.5, 176),
        closed_ring(center_lon, center_lat, 0.1, 12),
    ]


SAMPLES: dict[str, dict] = {
    "point": {"type": "point", "coordinates": [-105.01621, 39.57422]},
    "multiPoint": {
        "type": "multiPoint",
        "coordinates": [[-105.01621, 39.57422], [-80.6665134, 35.0539943]],
    },
    "lineString": {
        "type": "lineString",
        "coordinates": [[-101.744384765625, 39.32155002466662], [-99.5, 39.1], [-97.635498046875, 38.87392853923629]],
    },
    "multiLineString": {
        "type": "multiLineString",
        "coordinates": [
            [[-105.0214433670044, 39.57805759162015], [-105.02150774002075, 39.57780951131517]],
            [[-105.01989841461182, 39.574997872470354], [-105.01959800720215, 39.57489863362460], [-105.0, 39.5]],
        ],
    },
    "polygon": {"type": "polygon", "coordinates": polygon_with_hole()},
    "multiPolygon": {
        "type": "multiPolygon",
        "coordinates": [polygon_with_hole(-84.0, 34.5), polygon_with_hole(-80.0, 36.0)],
    },
    "geometryCollection": {
        "type": "geometryCollection",
        "geometries": [
            {"type": "point", "coordinates": [100.0, 0.0]},
            {"type": "lineString", "coordinates": [[101.0, 0.0], [102.0, 1.0]]},
        ],
    },
    "circle": {"type": "circle", "coordinates": [-0.1276, 51.5072], "radius": 250.0},
}


@pytest.fixture
def samples() -> dict[str, dict]:
    # Deep copy so a test can never leak mutations into another.
    return copy.deepcopy(SAMPLES)


@pytest.fixture
def square_polygon() -> dict:
    return {
        "type": "polygon",
        "coordinates": [[[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0], [0.0, 0.0]]],
    }


@pytest.fixture
def fresh_settings():
    # Settings are cached process-wide; clear around tests that change env/config.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
