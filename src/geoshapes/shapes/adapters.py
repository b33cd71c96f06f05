"""
Shape adapters: turn a parsed `Geometry` into plain drawable primitives.

The primitives are toolkit-neutral (pairs of floats in a chosen coordinate order),
so a map widget, a plotting library or an exporter can consume them without the
geometry model knowing about any of those.

Mapping per kind:
- point / multiPoint      -> one `PointShape` per position
- lineString              -> one `Polyline`
- multiLineString         -> one `Polyline` per line
- polygon                 -> one `Polygon` (rings after the first become interior polygons)
- multiPolygon            -> one `Polygon` per polygon entry
- geometryCollection      -> children's shapes, in order
- circle                  -> one `Circle`
- unknown / unpopulated   -> nothing
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from geoshapes.config.settings import get_settings
from geoshapes.domain.geometry import Geometry, GeometryType, Ring
from geoshapes.domain.position import CoordinateOrder, Position

Pair = tuple[float, float]


@dataclass(frozen=True)
class PointShape:
    coordinate: Pair


@dataclass(frozen=True)
class Polyline:
    coordinates: tuple[Pair, ...]

    @property
    def point_count(self) -> int:
        return len(self.coordinates)


@dataclass(frozen=True)
class Polygon:
    coordinates: tuple[Pair, ...]
    interior_polygons: tuple["Polygon", ...] = ()

    @property
    def point_count(self) -> int:
        return len(self.coordinates)


@dataclass(frozen=True)
class Circle:
    center: Pair
    radius: float


Shape = Union[PointShape, Polyline, Polygon, Circle]


def _project(ring: Sequence[Position], order: CoordinateOrder) -> tuple[Pair, ...]:
    return tuple(p.project(order) for p in ring)


def point_shape(position: Position, order: CoordinateOrder) -> PointShape:
    return PointShape(coordinate=position.project(order))


def polyline(ring: Ring, order: CoordinateOrder) -> Polyline:
    return Polyline(coordinates=_project(ring, order))


def polygon(rings: Sequence[Ring], order: CoordinateOrder) -> Polygon | None:
    """First ring is the exterior; the rest are holes. Returns None for no rings."""
    if not rings:
        return None
    exterior, *holes = rings
    return Polygon(
        coordinates=_project(exterior, order),
        interior_polygons=tuple(Polygon(coordinates=_project(hole, order)) for hole in holes),
    )


def circle(center: Position, radius: float, order: CoordinateOrder) -> Circle:
    return Circle(center=center.project(order), radius=radius)


def shapes_for(geometry: Geometry, order: CoordinateOrder | str | None = None) -> list[Shape]:
    """Build the drawable primitives for `geometry`.

    `order` defaults to `settings.shapes.coordinate_order`.
    """
    resolved = CoordinateOrder(order or get_settings().shapes.coordinate_order)
    kind = geometry.type

    if kind in (GeometryType.POINT, GeometryType.MULTI_POINT):
        return [point_shape(p, resolved) for p in geometry.coordinates or ()]

    if kind is GeometryType.LINE_STRING:
        return [polyline(geometry.coordinates, resolved)] if geometry.coordinates is not None else []

    if kind is GeometryType.MULTI_LINE_STRING:
        return [polyline(ring, resolved) for ring in geometry.ring_coordinates or ()]

    if kind is GeometryType.POLYGON:
        shape = polygon(geometry.ring_coordinates or (), resolved)
        return [shape] if shape is not None else []

    if kind is GeometryType.MULTI_POLYGON:
        shapes = (polygon(rings, resolved) for rings in geometry.polygon_coordinates or ())
        return [s for s in shapes if s is not None]

    if kind is GeometryType.GEOMETRY_COLLECTION:
        out: list[Shape] = []
        for child in geometry.children or ():
            out.extend(shapes_for(child, resolved))
        return out

    if kind is GeometryType.CIRCLE:
        if not geometry.coordinates:
            return []
        return [circle(geometry.coordinates[0], geometry.radius, resolved)]

    return []
