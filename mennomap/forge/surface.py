"""
Leaflet Surface - Rendering surface backed by a NiceGUI leaflet map.

Each attached feature is its own L.geoJSON layer so features can be
attached and detached individually.
"""

from typing import Dict

from nicegui import ui
from nicegui.elements.leaflet.leaflet_layer import Layer

from mennomap.data.schemas.models import Feature, FeatureLayer
from mennomap.forge.dashboard.components import (
    colony_hover_handlers,
    colony_popup_html,
    colony_tooltip_html,
    layer_options,
)
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


class LeafletSurface:
    """
    RenderingSurface over a ui.leaflet element.
    """

    def __init__(self, leaflet: ui.leaflet):
        """
        Initialize the surface.

        Args:
            leaflet: Map to draw on
        """
        self._map = leaflet
        self._layers: Dict[str, Layer] = {}

    def attach(self, feature: Feature) -> None:
        """Draw a feature on the map."""
        if feature.feature_id in self._layers:
            return

        layer = self._map.generic_layer(
            name="geoJSON",
            args=[feature.to_geojson(), layer_options(feature)],
        )
        if feature.layer is FeatureLayer.COLONIES:
            layer.run_method(
                "bindTooltip",
                colony_tooltip_html(feature.properties),
                {"sticky": True, "className": "tooltip"},
            )
            layer.run_method("bindPopup", colony_popup_html(feature.properties))
            # ":" makes Leaflet evaluate the argument as JavaScript.
            layer.run_method(":on", colony_hover_handlers())

        self._layers[feature.feature_id] = layer
        logger.debug(f"Drew {feature.feature_id} as layer {layer.id}")

    def detach(self, feature_id: str) -> None:
        """Remove a feature from the map."""
        layer = self._layers.pop(feature_id, None)
        if layer is not None:
            self._map.remove_layer(layer)
