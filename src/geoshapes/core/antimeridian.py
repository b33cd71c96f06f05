"""
Antimeridian helpers.

Longitudes are stored exactly as parsed. Callers that need values inside
(-180, 180] (e.g., for map widgets that cannot wrap) apply these explicitly.
"""

from __future__ import annotations

import math
from dataclasses import replace

from geoshapes.domain.geometry import Geometry, Ring
from geoshapes.domain.position import Position


def mapped_longitude(longitude: float) -> float:
    """Wrap a longitude into (-180, 180] by whole turns of 360 degrees."""
    value = float(longitude)
    if not math.isfinite(value):
        raise ValueError(f"longitude must be finite, got {longitude!r}")

    # fmod is exact, so this equals repeated +/-360 steps without the loop.
    value = math.fmod(value, 360.0)
    if value > 180:
        value -= 360
    elif value <= -180:
        value += 360
    return value


def mapped_position(position: Position) -> Position:
    """Return `position` with its longitude wrapped; latitude is untouched."""
    return Position(longitude=mapped_longitude(position.longitude), latitude=position.latitude)


def _mapped_ring(ring: Ring) -> Ring:
    return tuple(mapped_position(p) for p in ring)


def mapped_geometry(geometry: Geometry) -> Geometry:
    """Wrap every longitude in `geometry`; the center is re-derived from the new values."""
    if geometry.children is not None:
        return replace(geometry, children=tuple(mapped_geometry(c) for c in geometry.children))
    if geometry.coordinates is not None:
        return replace(geometry, coordinates=_mapped_ring(geometry.coordinates))
    if geometry.ring_coordinates is not None:
        return replace(
            geometry, ring_coordinates=tuple(_mapped_ring(r) for r in geometry.ring_coordinates)
        )
    if geometry.polygon_coordinates is not None:
        return replace(
            geometry,
            polygon_coordinates=tuple(
                tuple(_mapped_ring(r) for r in polygon) for polygon in geometry.polygon_coordinates
            ),
        )
    return geometry
