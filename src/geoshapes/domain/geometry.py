"""
Geometry: a tagged variant over the GeoJSON geometry kinds (plus `circle`).

Each instance populates exactly one of:
- `coordinates`          point, multiPoint, lineString, circle (its center)
- `ring_coordinates`     multiLineString, polygon (first ring exterior, rest holes)
- `polygon_coordinates`  multiPolygon
- `children`             geometryCollection

The nesting depth of the incoming `coordinates` array is chosen from the declared
`type`, never guessed from the array itself. Arrays that do not match the expected
depth leave the field unpopulated instead of raising.

Instances are frozen. `append` and `parse` always build a new value, and `center`
is derived once in `__post_init__`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Mapping, Sequence

from pydantic import Strict, TypeAdapter, ValidationError

from geoshapes.domain.position import Position

logger = logging.getLogger(__name__)

DEFAULT_CIRCLE_RADIUS_M = 1609.344

Ring = tuple[Position, ...]
PolygonRings = tuple[Ring, ...]


class GeometryType(str, Enum):
    POINT = "point"
    MULTI_POINT = "multiPoint"
    LINE_STRING = "lineString"
    MULTI_LINE_STRING = "multiLineString"
    POLYGON = "polygon"
    MULTI_POLYGON = "multiPolygon"
    GEOMETRY_COLLECTION = "geometryCollection"
    CIRCLE = "circle"
    UNKNOWN = "unknown"


_TYPES_BY_NAME: dict[str, GeometryType] = {t.value: t for t in GeometryType}

# Ints are accepted as numbers; numeric strings are not coerced.
_Number = Annotated[float, Strict()]

_COORDINATE_DEPTH: dict[GeometryType, int] = {
    GeometryType.POINT: 1,
    GeometryType.CIRCLE: 1,
    GeometryType.MULTI_POINT: 2,
    GeometryType.LINE_STRING: 2,
    GeometryType.MULTI_LINE_STRING: 3,
    GeometryType.POLYGON: 3,
    GeometryType.MULTI_POLYGON: 4,
}

_ADAPTERS_BY_DEPTH: dict[int, TypeAdapter] = {
    1: TypeAdapter(list[_Number]),
    2: TypeAdapter(list[list[_Number]]),
    3: TypeAdapter(list[list[list[_Number]]]),
    4: TypeAdapter(list[list[list[list[_Number]]]]),
}


def _positions(values: Sequence[Sequence[float]]) -> Ring:
    return tuple(Position.from_coordinates(v) for v in values)


def _parse_coordinates(geo_type: GeometryType, raw: Any) -> dict[str, Any]:
    """Map a raw `coordinates` array onto the field the declared type uses."""
    if raw is None:
        return {}
    depth = _COORDINATE_DEPTH[geo_type]
    try:
        values = _ADAPTERS_BY_DEPTH[depth].validate_python(raw)
    except ValidationError as exc:
        logger.debug(
            "Ignoring %s coordinates: expected nesting depth %d (%d validation errors)",
            geo_type.value,
            depth,
            exc.error_count(),
        )
        return {}

    if depth == 1:
        return {"coordinates": (Position.from_coordinates(values),)}
    if depth == 2:
        return {"coordinates": _positions(values)}
    if depth == 3:
        return {"ring_coordinates": tuple(_positions(ring) for ring in values)}
    return {
        "polygon_coordinates": tuple(
            tuple(_positions(ring) for ring in polygon) for polygon in values
        )
    }


def _parse_children(raw: Any) -> tuple["Geometry", ...] | None:
    if not isinstance(raw, (list, tuple)):
        logger.debug("Ignoring geometryCollection without a `geometries` array")
        return None
    return tuple(Geometry.parse(child) for child in raw)


def _circle_radius(raw: Any) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    return DEFAULT_CIRCLE_RADIUS_M


def _center_of(positions: Sequence[Position]) -> Position | None:
    # Empty rings contribute nothing rather than failing the whole geometry.
    return Position.center(positions) if positions else None


def _rings_center(rings: Sequence[Ring]) -> Position | None:
    centers = [c for c in (_center_of(ring) for ring in rings) if c is not None]
    return _center_of(centers)


def _polygons_center(polygons: Sequence[PolygonRings]) -> Position | None:
    centers = [c for c in (_rings_center(rings) for rings in polygons) if c is not None]
    return _center_of(centers)


def _serialize_ring(ring: Ring) -> list[list[float]]:
    return [p.serialize() for p in ring]


def _same_lengths(a: Sequence[Any], b: Sequence[Any]) -> bool:
    if len(a) != len(b):
        return False
    for left, right in zip(a, b):
        if isinstance(left, tuple) and isinstance(right, tuple) and not _same_lengths(left, right):
            return False
    return True


@dataclass(frozen=True)
class Geometry:
    """A parsed geometry value. Build one with `Geometry.parse`."""

    type: GeometryType
    coordinates: Ring | None = None
    ring_coordinates: tuple[Ring, ...] | None = None
    polygon_coordinates: tuple[PolygonRings, ...] | None = None
    children: tuple["Geometry", ...] | None = None
    radius: float = 0.0
    center: Position | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        populated = [
            name
            for name in ("coordinates", "ring_coordinates", "polygon_coordinates", "children")
            if getattr(self, name) is not None
        ]
        if len(populated) > 1:
            raise ValueError(f"Geometry may populate only one coordinate field, got {populated}")
        object.__setattr__(self, "center", self._derive_center())

    def _derive_center(self) -> Position | None:
        if self.coordinates is not None:
            return _center_of(self.coordinates)
        if self.ring_coordinates is not None:
            return _rings_center(self.ring_coordinates)
        if self.polygon_coordinates is not None:
            return _polygons_center(self.polygon_coordinates)
        return None

    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> "Geometry":
        """Build a geometry from a GeoJSON-shaped mapping.

        Unknown or missing `type` values produce an `unknown` geometry. Coordinate
        arrays with the wrong nesting for the declared type are dropped.
        """
        if not isinstance(data, Mapping):
            logger.debug("Ignoring non-mapping geometry payload of type %s", type(data).__name__)
            return cls(type=GeometryType.UNKNOWN)

        type_name = data.get("type")
        geo_type = _TYPES_BY_NAME.get(type_name) if isinstance(type_name, str) else None
        if geo_type is None or geo_type is GeometryType.UNKNOWN:
            logger.debug("Unrecognized geometry type %r", type_name)
            return cls(type=GeometryType.UNKNOWN)

        if geo_type is GeometryType.GEOMETRY_COLLECTION:
            return cls(type=geo_type, children=_parse_children(data.get("geometries")))

        fields = _parse_coordinates(geo_type, data.get("coordinates"))
        radius = _circle_radius(data.get("radius")) if geo_type is GeometryType.CIRCLE else 0.0
        return cls(type=geo_type, radius=radius, **fields)

    def serialize(self) -> dict[str, Any]:
        """Canonical GeoJSON-shaped mapping; the exact inverse of `parse`."""
        out: dict[str, Any] = {"type": self.type.value}

        if self.children is not None:
            out["geometries"] = [child.serialize() for child in self.children]
        elif self.coordinates is not None:
            if self.type in (GeometryType.POINT, GeometryType.CIRCLE):
                if self.coordinates:
                    out["coordinates"] = self.coordinates[0].serialize()
            else:
                out["coordinates"] = _serialize_ring(self.coordinates)
        elif self.ring_coordinates is not None:
            out["coordinates"] = [_serialize_ring(ring) for ring in self.ring_coordinates]
        elif self.polygon_coordinates is not None:
            out["coordinates"] = [
                [_serialize_ring(ring) for ring in polygon] for polygon in self.polygon_coordinates
            ]

        if self.type is GeometryType.CIRCLE:
            out["radius"] = self.radius
        return out

    def roughly_equal(self, other: "Geometry") -> bool:
        """Cheap structural comparison, not value equality.

        Same type, same nested lengths for every field both sides populate, and
        identical centers. Coordinate values are never compared, so two shapes
        with the same lengths and the same bounding-box midpoint compare equal.
        Circles and collections never compare equal.
        """
        if self.type is not other.type:
            return False

        pairs = (
            (self.coordinates, other.coordinates),
            (self.ring_coordinates, other.ring_coordinates),
            (self.polygon_coordinates, other.polygon_coordinates),
            (self.children, other.children),
        )
        for mine, theirs in pairs:
            if mine is not None and theirs is not None and not _same_lengths(mine, theirs):
                return False

        if self.type is GeometryType.CIRCLE:
            return False
        return self.center is not None and other.center is not None and self.center == other.center

    def append(self, position: Position) -> "Geometry":
        """Return a new geometry with `position` added.

        point/multiPoint become a multiPoint; lineString grows; multiLineString
        grows its last line; polygon gets the position just before the closing
        point of its last ring. Other kinds come back unchanged.
        """
        data = self.serialize()
        new_point = position.serialize()

        if self.type in (GeometryType.POINT, GeometryType.MULTI_POINT):
            data["type"] = GeometryType.MULTI_POINT.value
            data["coordinates"] = _serialize_ring(self.coordinates or ()) + [new_point]
        elif self.type is GeometryType.LINE_STRING:
            data["coordinates"] = _serialize_ring(self.coordinates or ()) + [new_point]
        elif self.type is GeometryType.MULTI_LINE_STRING and self.ring_coordinates:
            data["coordinates"][-1].append(new_point)
        elif self.type is GeometryType.POLYGON and self.ring_coordinates:
            last_ring = data["coordinates"][-1]
            last_ring.insert(max(len(last_ring) - 1, 0), new_point)

        return Geometry.parse(data)

    def aggregate_center(self) -> Position | None:
        """Center of a collection's child centers (or `center` for other kinds).

        Collections carry no `center` of their own; callers that want one ask
        for it here.
        """
        if self.type is not GeometryType.GEOMETRY_COLLECTION:
            return self.center
        centers = [c for c in (child.aggregate_center() for child in self.children or ()) if c is not None]
        return _center_of(centers)
