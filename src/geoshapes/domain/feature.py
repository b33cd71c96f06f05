"""
Feature / FeatureCollection wrappers.

These are thin property bags around `Geometry`; all geometry logic stays in
`geoshapes.domain.geometry`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from geoshapes.domain.geometry import Geometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Feature:
    """A geometry plus an open mapping of properties."""

    geometry: Geometry
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Feature | None":
        """Return None unless both `geometry` and `properties` are mappings."""
        if not isinstance(data, Mapping):
            return None
        geometry = data.get("geometry")
        properties = data.get("properties")
        if not isinstance(geometry, Mapping) or not isinstance(properties, Mapping):
            return None
        return cls(geometry=Geometry.parse(geometry), properties=dict(properties))

    def serialize(self) -> dict[str, Any]:
        return {
            "type": "Feature",
            "geometry": self.geometry.serialize(),
            "properties": dict(self.properties),
        }


@dataclass(frozen=True)
class FeatureCollection:
    features: tuple[Feature, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeatureCollection | None":
        """Parse a collection, silently dropping entries that are not valid features."""
        if not isinstance(data, Mapping):
            return None
        raw_features = data.get("features")
        if not isinstance(raw_features, list):
            return None

        features: list[Feature] = []
        for raw in raw_features:
            feature = Feature.from_dict(raw)
            if feature is None:
                logger.debug("Skipping feature without geometry/properties mappings")
                continue
            features.append(feature)
        return cls(features=tuple(features))

    def serialize(self) -> dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [f.serialize() for f in self.features],
        }
