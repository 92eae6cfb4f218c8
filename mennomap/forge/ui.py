"""
NiceGUI App - Interactive atlas UI for MennoMap.

This module provides the map page: a Leaflet map with the colony and
migration arrow layers, a year slider, a year form, the temporal legend
and a layer control with two base maps and the colony overlay.
"""

from typing import Any, Dict, Optional

from nicegui import app, ui
from nicegui.elements.leaflet.leaflet_layer import Layer

from mennomap.atlas.loader import load_feature_store
from mennomap.atlas.reconcile import Reconciler
from mennomap.atlas.state import create_context
from mennomap.config import MennoMapConfig, get_config
from mennomap.data.schemas.models import FeatureLoadError
from mennomap.forge.app import attach_store, create_app as create_api
from mennomap.forge.controller import SliderFormController
from mennomap.forge.dashboard.components import LegendDisplay, format_legend
from mennomap.forge.surface import LeafletSurface
from mennomap.utils.converters import to_year
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)

# Arrowheads needs GeometryUtil loaded first.
LEAFLET_PLUGINS = [
    "https://unpkg.com/leaflet-geometryutil@0.10.3/src/leaflet.geometryutil.js",
    "https://unpkg.com/leaflet-arrowheads@1.4.0/src/leaflet-arrowheads.js",
]

VOYAGER = "Carto Voyager"
IMAGERY = "Esri Imagery"
COLONY_OVERLAY = "Mennonite Colonies"

BASE_ATTRIBUTIONS = {
    VOYAGER: (
        '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> '
        'contributors &copy; <a href="https://carto.com/attributions">CARTO</a>'
    ),
    IMAGERY: (
        "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
        "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
    ),
}


class AtlasUI:
    """
    Main atlas UI component.

    Owns the page elements; all year logic lives in SliderFormController.
    """

    def __init__(self, config: Optional[MennoMapConfig] = None):
        """Initialize the UI components."""
        self.config = config or get_config()
        self.legend = LegendDisplay()
        self.controller: Optional[SliderFormController] = None

        # UI element references
        self.map_component = None
        self.slider = None
        self.year_input = None
        self.legend_label = None
        self.error_label = None
        self._base_layer: Optional[Layer] = None

    def build(self) -> None:
        """Build the page layout."""
        ui.add_css('''
            .temporal-legend {
                font-weight: bold;
                font-size: 1.25rem;
            }
            .tooltip {
                font-size: 0.85rem;
            }
        ''')

        with ui.header().classes('items-center justify-between'):
            ui.label(self.config.ui.title).classes('text-2xl font-bold')

        with ui.row().classes('w-full no-wrap gap-4 p-4'):
            with ui.column().classes('w-1/4 gap-4'):
                self._build_timeline_panel()
                self._build_layer_panel()

            with ui.column().classes('w-3/4 gap-4'):
                self._build_map_panel()

    def _build_timeline_panel(self) -> None:
        """Build the legend, year slider and year form."""
        timeline = self.config.timeline
        with ui.card().classes('w-full'):
            self.legend_label = ui.label(
                format_legend(timeline.default_year)
            ).classes('temporal-legend')
            self.legend.bind(self.legend_label)

            self.slider = ui.slider(
                min=timeline.min_year,
                max=timeline.max_year,
                step=timeline.step,
                value=timeline.default_year,
                on_change=lambda e: self._on_slider(e.value)
            ).props('label').classes('slider w-full')

            with ui.row().classes('w-full items-center no-wrap gap-2'):
                self.year_input = ui.number(
                    label='Year',
                    value=timeline.default_year,
                    min=timeline.min_year,
                    max=timeline.max_year,
                    step=timeline.step,
                    format='%d'
                ).classes('flex-grow')
                self.year_input.on('keydown.enter', self._on_submit)
                ui.button('Go', on_click=self._on_submit)

            self.error_label = ui.label('').classes('text-negative')
            self.error_label.set_visibility(False)

    def _build_layer_panel(self) -> None:
        """Build the layer control: base maps and the colony overlay."""
        with ui.card().classes('w-full'):
            ui.label('Base map').classes('font-bold')
            ui.radio(
                [VOYAGER, IMAGERY],
                value=VOYAGER,
                on_change=lambda e: self._set_base_layer(e.value)
            )
            ui.label('Overlays').classes('font-bold')
            ui.checkbox(
                COLONY_OVERLAY,
                value=True,
                on_change=lambda e: self._on_overlay(e.value)
            )

    def _build_map_panel(self) -> None:
        """Build the map with the default base layer."""
        map_config = self.config.map
        self.map_component = ui.leaflet(
            center=map_config.center,
            zoom=map_config.zoom,
            additional_resources=LEAFLET_PLUGINS,
        ).classes('w-full').style('height: 80vh')
        self.map_component.clear_layers()
        self._set_base_layer(VOYAGER)

    def _base_url(self, name: str) -> str:
        if name == IMAGERY:
            return self.config.map.imagery_url
        return self.config.map.voyager_url

    def _set_base_layer(self, name: str) -> None:
        """Swap the base tile layer."""
        if self._base_layer is not None:
            self.map_component.remove_layer(self._base_layer)

        options: Dict[str, Any] = {"attribution": BASE_ATTRIBUTIONS[name]}
        if name == VOYAGER:
            options.update({"subdomains": "abcd", "maxZoom": 20})

        self._base_layer = self.map_component.tile_layer(
            url_template=self._base_url(name),
            options=options,
        )

    # Event handlers

    async def load(self) -> bool:
        """
        Fetch both feature documents and wire the controller.

        Returns:
            True if the layers were constructed
        """
        try:
            store = await load_feature_store(
                self.config.data.colonies_source,
                self.config.data.arrows_source,
            )
        except FeatureLoadError as e:
            logger.error(f"Feature load error: {e}", exc_info=True)
            self.error_label.set_text(f'Could not load map data: {e}')
            self.error_label.set_visibility(True)
            ui.notify('Could not load map data', type='negative')
            return False

        await self.map_component.initialized()

        context = create_context(store, self.slider.value)
        reconciler = Reconciler(LeafletSurface(self.map_component))
        self.controller = SliderFormController(
            context=context,
            legend=self.legend,
            reconciler=reconciler,
            slider=self.slider,
        )
        self.controller.start()
        logger.info(
            f"Atlas ready at year {context.selected_year}: "
            f"{len(reconciler.attached)} features drawn"
        )
        return True

    def _on_slider(self, value: Any) -> None:
        if self.controller is None:
            year = to_year(value)
            if year is not None:
                self.legend.render(year)
            return
        before = self.controller.context
        self.controller.on_slider_change(value)
        # Unchanged while a form submit is moving the slider.
        if self.controller.context is not before:
            self.year_input.set_value(self.controller.selected_year)

    def _on_submit(self) -> None:
        value = self.year_input.value
        if self.controller is None:
            ui.notify('Map data is still loading', type='warning')
            return
        self.controller.on_form_submit(value)
        self.year_input.set_value(self.controller.selected_year)

    def _on_overlay(self, show: bool) -> None:
        if self.controller is not None:
            self.controller.on_overlay_toggle(show)


def create_app() -> None:
    """
    Register the atlas page and mount the REST API under /api.
    """
    api = create_api()
    app.mount('/api', api)

    async def load_api_store() -> None:
        try:
            attach_store(api, await load_feature_store())
        except FeatureLoadError as e:
            logger.error(f"API feature load error: {e}")

    app.on_startup(load_api_store)

    @ui.page('/')
    async def main_page():
        atlas_ui = AtlasUI()
        atlas_ui.build()
        await ui.context.client.connected()
        await atlas_ui.load()


def run_app(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False
) -> None:
    """
    Run the NiceGUI application.

    Args:
        host: Host to bind to
        port: Port to bind to
        reload: Enable auto-reload for development
    """
    config = get_config()

    host = host or config.ui.host
    port = port or config.ui.port
    reload = reload or config.ui.reload

    logger.info(f"Starting MennoMap UI at http://{host}:{port}")

    ui.run(
        host=host,
        port=port,
        title=config.ui.title,
        reload=reload,
        dark=config.ui.dark_mode
    )
