"""
Pydantic Models for MennoMap.

This module defines the core data models used throughout the atlas:
- Feature: A single geographic feature (colony polygon or migration line)
- FeatureCollection: The ordered features of one map layer
- FeatureStore: Both layers, loaded once at startup and read-only afterwards
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mennomap.utils.converters import make_feature_id, to_year


class FeatureLoadError(Exception):
    """Raised when a feature document cannot be fetched or parsed."""


class FeatureLayer(str, Enum):
    """The two independently structured layers of the atlas."""
    COLONIES = "colonies"
    ARROWS = "arrows"

    @property
    def year_attribute(self) -> str:
        """Name of the property holding the establishment year."""
        if self is FeatureLayer.COLONIES:
            return "Est_date"
        return "Est-Year"


class Feature(BaseModel):
    """
    A geographic feature with its attributes.

    Colonies carry Name, Country, Est_date, Area_ha and Article.
    Migration arrows carry Est-Year.
    """
    model_config = ConfigDict(frozen=True)

    feature_id: str = Field(..., description="Stable identifier (<layer>-<index>)")
    layer: FeatureLayer = Field(..., description="Layer the feature belongs to")
    geometry: Optional[Dict[str, Any]] = Field(
        None,
        description="GeoJSON geometry mapping"
    )
    properties: Dict[str, Any] = Field(
        default_factory=dict,
        description="Feature attributes"
    )

    @property
    def year(self) -> Optional[int]:
        """Establishment year as int, or None when missing or malformed."""
        return to_year(self.properties.get(self.layer.year_attribute))

    def to_geojson(self) -> Dict[str, Any]:
        """Convert to a GeoJSON Feature mapping for rendering."""
        return {
            "type": "Feature",
            "id": self.feature_id,
            "geometry": self.geometry,
            "properties": dict(self.properties),
        }


class FeatureCollection(BaseModel):
    """The ordered features of one layer."""
    model_config = ConfigDict(frozen=True)

    layer: FeatureLayer
    features: Tuple[Feature, ...] = ()

    @property
    def feature_ids(self) -> Tuple[str, ...]:
        """Feature ids in document order."""
        return tuple(f.feature_id for f in self.features)

    @classmethod
    def from_geojson(cls, layer: FeatureLayer, document: Any) -> "FeatureCollection":
        """
        Build a collection from a GeoJSON FeatureCollection document.

        Args:
            layer: Layer the features belong to
            document: Parsed GeoJSON document

        Returns:
            FeatureCollection with features in document order

        Raises:
            FeatureLoadError: If the document is not a FeatureCollection or a
                feature is malformed
        """
        if not isinstance(document, dict) or document.get("type") != "FeatureCollection":
            raise FeatureLoadError(
                f"{layer.value} document is not a GeoJSON FeatureCollection"
            )

        raw_features = document.get("features") or []
        if not isinstance(raw_features, list):
            raise FeatureLoadError(f"{layer.value} document has no feature list")

        features: List[Feature] = []
        for index, raw in enumerate(raw_features):
            if not isinstance(raw, dict):
                raise FeatureLoadError(
                    f"{layer.value} feature {index} is not a GeoJSON object"
                )
            try:
                features.append(Feature(
                    feature_id=make_feature_id(layer.value, index),
                    layer=layer,
                    geometry=raw.get("geometry"),
                    properties=raw.get("properties") or {},
                ))
            except ValidationError as e:
                raise FeatureLoadError(
                    f"{layer.value} feature {index} is malformed: {e}"
                ) from e

        return cls(layer=layer, features=tuple(features))

    def to_geojson(self, features: Optional[Tuple[Feature, ...]] = None) -> Dict[str, Any]:
        """Convert (a subset of) the collection back to GeoJSON."""
        selected = self.features if features is None else features
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in selected],
        }


class FeatureStore(BaseModel):
    """
    Both feature collections of the atlas.

    Loaded once at startup; read-only thereafter.
    """
    model_config = ConfigDict(frozen=True)

    colonies: FeatureCollection = Field(
        default_factory=lambda: FeatureCollection(layer=FeatureLayer.COLONIES)
    )
    arrows: FeatureCollection = Field(
        default_factory=lambda: FeatureCollection(layer=FeatureLayer.ARROWS)
    )

    @classmethod
    def from_documents(cls, colonies_document: Any, arrows_document: Any) -> "FeatureStore":
        """Build a store from the two parsed GeoJSON documents."""
        return cls(
            colonies=FeatureCollection.from_geojson(FeatureLayer.COLONIES, colonies_document),
            arrows=FeatureCollection.from_geojson(FeatureLayer.ARROWS, arrows_document),
        )

    def get(self, feature_id: str) -> Optional[Feature]:
        """Look up a feature by id in either layer."""
        for collection in (self.colonies, self.arrows):
            for feature in collection.features:
                if feature.feature_id == feature_id:
                    return feature
        return None

    def years(self) -> List[int]:
        """Sorted distinct known years across both layers."""
        known = {
            f.year
            for collection in (self.colonies, self.arrows)
            for f in collection.features
            if f.year is not None
        }
        return sorted(known)

    def counts(self) -> Dict[str, int]:
        """Feature counts per layer."""
        return {
            FeatureLayer.COLONIES.value: len(self.colonies.features),
            FeatureLayer.ARROWS.value: len(self.arrows.features),
        }
