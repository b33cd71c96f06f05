"""
GeoJSON file loader.

Reads a local JSON file and hands the decoded mapping to the matching domain
constructor. Relative paths are resolved against the project root so the CLI
behaves the same from any working directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

from geoshapes.core.env import resolve_project_path
from geoshapes.domain.feature import Feature, FeatureCollection
from geoshapes.domain.geometry import Geometry

logger = logging.getLogger(__name__)

Document = Union[Geometry, Feature, FeatureCollection]


def read_json_object(path: str | Path) -> dict[str, Any]:
    """Read a JSON file whose root must be an object."""
    resolved = resolve_project_path(path)
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Invalid GeoJSON root in {resolved}; expected an object.")
    return payload


def parse_document(payload: dict[str, Any]) -> Document:
    """Dispatch on the root `type`: Feature, FeatureCollection, else a geometry."""
    kind = payload.get("type")
    if kind == "FeatureCollection":
        collection = FeatureCollection.from_dict(payload)
        if collection is None:
            raise ValueError("FeatureCollection is missing a `features` array.")
        return collection
    if kind == "Feature":
        feature = Feature.from_dict(payload)
        if feature is None:
            raise ValueError("Feature requires `geometry` and `properties` objects.")
        return feature
    return Geometry.parse(payload)


def load_document(path: str | Path) -> Document:
    """Load a geometry, feature or feature collection from a JSON file."""
    document = parse_document(read_json_object(path))
    logger.info("Loaded %s from %s", type(document).__name__, path)
    return document


def load_geometry(path: str | Path) -> Geometry:
    """Load a file and return its geometry (a Feature's geometry is unwrapped)."""
    document = load_document(path)
    if isinstance(document, Feature):
        return document.geometry
    if isinstance(document, FeatureCollection):
        raise ValueError(f"{path} holds a FeatureCollection, not a single geometry.")
    return document
