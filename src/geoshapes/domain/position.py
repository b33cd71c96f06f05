"""
Position: the leaf coordinate type.

A `Position` is a longitude/latitude pair in decimal degrees, stored exactly as
given. Antimeridian wrapping lives in `geoshapes.core.antimeridian` and is opt-in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence


class EmptyPositionsError(ValueError):
    """Raised when a center is requested for zero positions."""


class CoordinateOrder(str, Enum):
    """Pair order requested by consumers that want explicit tuples.

    `LNG_LAT` yields `(longitude, latitude)`, `LAT_LNG` yields `(latitude, longitude)`.
    """

    LAT_LNG = "latLng"
    LNG_LAT = "lngLat"


@dataclass(frozen=True)
class Position:
    """A longitude/latitude pair in decimal degrees."""

    longitude: float
    latitude: float

    @classmethod
    def from_coordinates(cls, values: Sequence[float]) -> "Position":
        """Build from a GeoJSON coordinate array (`[lon, lat, alt?]`).

        Missing components default to 0.0; altitude is ignored.
        """
        longitude = float(values[0]) if len(values) > 0 else 0.0
        latitude = float(values[1]) if len(values) > 1 else 0.0
        return cls(longitude=longitude, latitude=latitude)

    @staticmethod
    def center(positions: Iterable["Position"]) -> "Position":
        """Bounding-box midpoint of `positions`.

        A single position is returned unchanged. This is not a centroid: only the
        min/max extents on each axis contribute.
        """
        items = list(positions)
        if not items:
            raise EmptyPositionsError("Position.center requires at least one position")
        if len(items) == 1:
            return items[0]

        longitudes = [p.longitude for p in items]
        latitudes = [p.latitude for p in items]
        return Position(
            longitude=(max(longitudes) + min(longitudes)) * 0.5,
            latitude=(max(latitudes) + min(latitudes)) * 0.5,
        )

    def project(self, order: CoordinateOrder | str) -> tuple[float, float]:
        """Return the pair in the requested order."""
        if CoordinateOrder(order) is CoordinateOrder.LAT_LNG:
            return (self.latitude, self.longitude)
        return (self.longitude, self.latitude)

    def serialize(self) -> list[float]:
        """GeoJSON order: `[longitude, latitude]`."""
        return [self.longitude, self.latitude]
