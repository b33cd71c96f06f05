"""
geoshapes CLI entrypoint.

Small commands for inspecting GeoJSON files from a terminal:
- `show`     type, center and shape counts (or canonical JSON)
- `append`   append a position to a geometry and print the result
- `compare`  the cheap structural `roughly_equal` check
- `summary`  offline report of what the parser kept and dropped
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from geoshapes.config.settings import get_settings
from geoshapes.core.antimeridian import mapped_geometry, mapped_position
from geoshapes.core.logging import configure_logging
from geoshapes.domain.feature import Feature, FeatureCollection
from geoshapes.domain.geometry import Geometry
from geoshapes.domain.position import CoordinateOrder, Position
from geoshapes.ingestion.loader import Document, load_document, load_geometry
from geoshapes.quality.report import build_summary
from geoshapes.shapes.adapters import shapes_for

logger = logging.getLogger(__name__)


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=get_settings().output.json_indent)


def _normalize_requested(args: argparse.Namespace) -> bool:
    return bool(args.normalize_longitude or get_settings().output.normalize_longitude)


def _document_geometries(document: Document) -> list[Geometry]:
    if isinstance(document, FeatureCollection):
        return [f.geometry for f in document.features]
    if isinstance(document, Feature):
        return [document.geometry]
    return [document]


def _describe(geometry: Geometry, order: CoordinateOrder) -> str:
    """Render a compact single-line description of a geometry."""
    center = geometry.aggregate_center()
    center_text = "none" if center is None else "(%s, %s)" % center.project(order)
    shapes = shapes_for(geometry, order)
    kinds = sorted({type(s).__name__ for s in shapes})
    return f"type={geometry.type.value} center[{order.value}]={center_text} shapes={len(shapes)} {','.join(kinds)}".rstrip()


def _cmd_show(args: argparse.Namespace) -> int:
    """Handle the `show` subcommand."""
    document = load_document(args.path)
    geometries = _document_geometries(document)
    if _normalize_requested(args):
        geometries = [mapped_geometry(g) for g in geometries]

    if args.json:
        print(_dump([g.serialize() for g in geometries]))
        return 0

    order = CoordinateOrder(args.order or get_settings().shapes.coordinate_order)
    for i, geometry in enumerate(geometries, start=1):
        print(f"{i:>3}. {_describe(geometry, order)}")
    return 0


def _cmd_append(args: argparse.Namespace) -> int:
    """Handle the `append` subcommand."""
    geometry = load_geometry(args.path)
    position = Position(longitude=float(args.lon), latitude=float(args.lat))
    if _normalize_requested(args):
        geometry = mapped_geometry(geometry)
        position = mapped_position(position)

    result = geometry.append(position)
    if result.type is not geometry.type:
        logger.info("Append promoted %s to %s", geometry.type.value, result.type.value)
    print(_dump(result.serialize()))
    return 0


def _cmd_compare(args: argparse.Namespace) -> int:
    """Handle the `compare` subcommand; exit code 0 means roughly equal."""
    left = load_geometry(args.left)
    right = load_geometry(args.right)
    equal = left.roughly_equal(right)
    print("roughly equal" if equal else "different")
    return 0 if equal else 1


def _cmd_summary(args: argparse.Namespace) -> int:
    print(_dump(build_summary(load_document(args.path))))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the geoshapes CLI."""
    parser = argparse.ArgumentParser(prog="geoshapes")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Describe the geometries in a GeoJSON file.")
    show.add_argument("path")
    show.add_argument("--json", action="store_true", help="Print canonical serialized geometries.")
    show.add_argument(
        "--order",
        choices=[o.value for o in CoordinateOrder],
        default=None,
        help="Pair order for printed centers (default from config).",
    )
    show.add_argument("--normalize-longitude", action="store_true", help="Wrap longitudes into (-180, 180].")
    show.set_defaults(func=_cmd_show)

    app = sub.add_parser("append", help="Append a position to a geometry and print the result.")
    app.add_argument("path")
    app.add_argument("--lon", required=True, type=float)
    app.add_argument("--lat", required=True, type=float)
    app.add_argument("--normalize-longitude", action="store_true", help="Wrap longitudes into (-180, 180].")
    app.set_defaults(func=_cmd_append)

    cmp_ = sub.add_parser("compare", help="Cheap structural comparison of two geometry files.")
    cmp_.add_argument("left")
    cmp_.add_argument("right")
    cmp_.set_defaults(func=_cmd_compare)

    summ = sub.add_parser("summary", help="Offline report of what was parsed from a file.")
    summ.add_argument("path")
    summ.set_defaults(func=_cmd_summary)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geoshapes.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
