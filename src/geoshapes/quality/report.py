"""
Offline document summary.

Goal: a deterministic, side-effect-free view of "what did we actually parse?"
Used by the CLI `summary` command. It reports what the parser dropped (unknown
types, coordinates with the wrong nesting) rather than validating GeoJSON rules.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterator

from geoshapes.domain.feature import Feature, FeatureCollection
from geoshapes.domain.geometry import Geometry, GeometryType
from geoshapes.ingestion.loader import Document


@dataclass(frozen=True)
class Issue:
    severity: str  # "info" | "warning" | "error"
    code: str
    message: str
    count: int = 1
    sample: list[str] | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity,
            "code": self.code,
            "message": self.message,
            "count": int(self.count),
            "sample": list(self.sample or []),
        }


def _walk(geometry: Geometry, label: str) -> Iterator[tuple[str, Geometry]]:
    yield label, geometry
    for i, child in enumerate(geometry.children or ()):
        yield from _walk(child, f"{label}.geometries[{i}]")


def iter_geometries(document: Document) -> Iterator[tuple[str, Geometry]]:
    """Yield `(label, geometry)` for every geometry in the document, depth first."""
    if isinstance(document, FeatureCollection):
        for i, feature in enumerate(document.features):
            yield from _walk(feature.geometry, f"features[{i}]")
    elif isinstance(document, Feature):
        yield from _walk(document.geometry, "geometry")
    else:
        yield from _walk(document, "geometry")


def _is_unpopulated(geometry: Geometry) -> bool:
    if geometry.type is GeometryType.UNKNOWN:
        return False
    return (
        geometry.coordinates is None
        and geometry.ring_coordinates is None
        and geometry.polygon_coordinates is None
        and geometry.children is None
    )


def _has_wrapped_longitude(geometry: Geometry) -> bool:
    positions = list(geometry.coordinates or ())
    for ring in geometry.ring_coordinates or ():
        positions.extend(ring)
    for polygon in geometry.polygon_coordinates or ():
        for ring in polygon:
            positions.extend(ring)
    return any(not (-180 < p.longitude <= 180) for p in positions)


def document_issues(document: Document) -> list[Issue]:
    issues: list[Issue] = []
    entries = list(iter_geometries(document))

    unknown = [label for label, g in entries if g.type is GeometryType.UNKNOWN]
    if unknown:
        issues.append(
            Issue(
                severity="warning",
                code="GEOMETRY_UNKNOWN_TYPE",
                message="Some geometries have a missing or unrecognized `type`.",
                count=len(unknown),
                sample=unknown[:8],
            )
        )

    unpopulated = [label for label, g in entries if _is_unpopulated(g)]
    if unpopulated:
        issues.append(
            Issue(
                severity="warning",
                code="GEOMETRY_COORDINATES_DROPPED",
                message="Some geometries had coordinates that did not match their declared type.",
                count=len(unpopulated),
                sample=unpopulated[:8],
            )
        )

    wrapped = [label for label, g in entries if _has_wrapped_longitude(g)]
    if wrapped:
        issues.append(
            Issue(
                severity="info",
                code="GEOMETRY_LONGITUDE_OUTSIDE_RANGE",
                message="Some longitudes fall outside (-180, 180]; see --normalize-longitude.",
                count=len(wrapped),
                sample=wrapped[:8],
            )
        )

    return issues


def build_summary(document: Document) -> dict[str, Any]:
    entries = list(iter_geometries(document))
    counts = Counter(g.type.value for _, g in entries)
    issues = document_issues(document)

    severity_rank = {"error": 3, "warning": 2, "info": 1}
    worst = "info"
    for i in issues:
        if severity_rank.get(i.severity, 0) > severity_rank.get(worst, 0):
            worst = i.severity

    top_level = [g for label, g in entries if label.count(".") == 0]
    centers = [g.aggregate_center() for g in top_level]

    return {
        "overall": {"severity": worst, "issue_count": len(issues)},
        "document": type(document).__name__,
        "geometry_count": len(entries),
        "types": dict(sorted(counts.items())),
        "centers": [c.serialize() if c is not None else None for c in centers],
        "issues": [i.as_dict() for i in issues],
    }
