"""
Dashboard module - Presentation components for MennoMap.

This module contains:
- components: Temporal legend plus feature tooltips, popups, hover and styles
"""

from mennomap.forge.dashboard.components import (
    LegendDisplay,
    format_legend,
    colony_tooltip_html,
    colony_popup_html,
    colony_hover_handlers,
    layer_options,
)

__all__ = [
    "LegendDisplay",
    "format_legend",
    "colony_tooltip_html",
    "colony_popup_html",
    "colony_hover_handlers",
    "layer_options",
]
