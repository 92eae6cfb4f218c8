"""
Shared Components - Legend and feature presentation for the MennoMap dashboard.

This module provides the temporal legend and the tooltip, popup, hover and style
content bound to features when they are drawn on the map.
"""

import json
from html import escape
from typing import Any, Dict, Mapping, Optional, Protocol

from mennomap.data.schemas.models import Feature, FeatureLayer
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


COLONY_STYLE: Dict[str, Any] = {
    "fillColor": "red",
    "fillOpacity": 0.5,
    "color": "red",
    "weight": 0.5,
    "opacity": 0.7,
}

COLONY_HOVER_FILL = "yellow"

ARROW_STYLE: Dict[str, Any] = {
    "color": "tan",
    "dashArray": "3, 6",
    "weight": 5.0,
    "opacity": 0.75,
}

ARROWHEADS: Dict[str, Any] = {
    "yawn": 40,
    "size": "10px",
    "frequency": "endonly",
}


class TextTarget(Protocol):
    """Anything with set_text, e.g. a NiceGUI label."""

    def set_text(self, text: str) -> None: ...


def format_legend(year: Any) -> str:
    """Legend text for a year."""
    return f"Year: {year}"


class LegendDisplay:
    """
    Temporal legend showing the selected year.
    """

    def __init__(self, target: Optional[TextTarget] = None):
        self._target = target
        self._text = ""

    @property
    def text(self) -> str:
        return self._text

    def bind(self, target: TextTarget) -> None:
        """Attach the legend to a display element."""
        self._target = target
        if self._text:
            target.set_text(self._text)

    def render(self, year: Any) -> str:
        """Write the legend for a year and return the text."""
        self._text = format_legend(year)
        if self._target is not None:
            self._target.set_text(self._text)
        return self._text


def _prop(properties: Mapping[str, Any], key: str) -> str:
    value = properties.get(key)
    return escape("" if value is None else str(value))


def colony_tooltip_html(properties: Mapping[str, Any]) -> str:
    """Tooltip content for a colony."""
    return (
        f"<b>{_prop(properties, 'Name')} Colony, {_prop(properties, 'Country')}</b>"
        "<hr>Click here for more information"
    )


def colony_popup_html(properties: Mapping[str, Any]) -> str:
    """Popup content for a colony, linking its GAMEO article."""
    return (
        f"<b>{_prop(properties, 'Name')} Colony, {_prop(properties, 'Country')}</b><br>"
        f"Year established: {_prop(properties, 'Est_date')}<br>"
        f"{_prop(properties, 'Area_ha')} hectares<hr>"
        "To open the Global Anabaptist<br>Mennonite Encyclopedia Online<br>"
        f"page for this colony, <a target=\"_blank\" href=\"{_prop(properties, 'Article')}\">"
        "click here</a>"
    )


def layer_options(feature: Feature) -> Dict[str, Any]:
    """Leaflet GeoJSON layer options for a feature."""
    if feature.layer is FeatureLayer.COLONIES:
        return {"style": dict(COLONY_STYLE)}
    return {"style": dict(ARROW_STYLE), "arrowheads": dict(ARROWHEADS)}


def colony_hover_handlers() -> str:
    """
    JavaScript event map for a colony layer's `on` method.

    The fill turns yellow while the pointer is over the colony and goes back
    to the colony fill on mouseout.
    """
    hover = json.dumps({"fillColor": COLONY_HOVER_FILL})
    rest = json.dumps({"fillColor": COLONY_STYLE["fillColor"]})
    return (
        "{"
        f"mouseover: (e) => e.target.setStyle({hover}), "
        f"mouseout: (e) => e.target.setStyle({rest})"
        "}"
    )
