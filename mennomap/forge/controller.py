"""
Slider/Form Controller - Translates UI events into atlas state updates.

Two input channels (the year slider and the year form) feed one Selected
Year. Both converge on the same downstream steps, in order: render the
legend, compute the new context, reconcile the map.
"""

from typing import Any, Optional, Protocol

from mennomap.atlas.reconcile import ReconcilePlan, Reconciler
from mennomap.atlas.state import AtlasContext, apply_year, set_colony_overlay
from mennomap.forge.dashboard.components import LegendDisplay
from mennomap.utils.converters import to_year
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


class SliderHandle(Protocol):
    """The year slider, e.g. a NiceGUI slider."""

    def set_value(self, value: Any) -> None: ...


class SliderFormController:
    """
    Owns the atlas context and reacts to slider and form input.

    No debouncing and no range validation: any year the slider or field can
    express is applied.
    """

    def __init__(
        self,
        context: AtlasContext,
        legend: LegendDisplay,
        reconciler: Reconciler,
        slider: Optional[SliderHandle] = None
    ):
        """
        Initialize the controller.

        Args:
            context: Initial atlas context
            legend: Legend to update on every change
            reconciler: Reconciler of the map surface
            slider: Slider to keep in sync with form submissions
        """
        self._context = context
        self._legend = legend
        self._reconciler = reconciler
        self._slider = slider
        self._syncing_slider = False

    @property
    def context(self) -> AtlasContext:
        return self._context

    @property
    def selected_year(self) -> int:
        return self._context.selected_year

    def start(self) -> ReconcilePlan:
        """Initial pass so the map and legend agree on first paint."""
        return self._apply(self._context.selected_year)

    def on_slider_change(self, value: Any) -> AtlasContext:
        """Slider input/change event."""
        if self._syncing_slider:
            return self._context
        self._apply(value)
        return self._context

    def on_form_submit(self, value: Any) -> AtlasContext:
        """
        Year form submission.

        The slider is moved to the submitted year before the update runs.
        An empty field leaves the state unchanged.
        """
        year = to_year(value)
        if year is None:
            logger.warning(f"Ignoring form submission with year {value!r}")
            return self._context

        if self._slider is not None:
            self._syncing_slider = True
            try:
                self._slider.set_value(year)
            finally:
                self._syncing_slider = False

        self._apply(year)
        return self._context

    def on_overlay_toggle(self, show: bool) -> AtlasContext:
        """Colony overlay checkbox of the layer control."""
        self._context = set_colony_overlay(self._context, bool(show))
        self._reconciler.reconcile(self._context)
        return self._context

    def _apply(self, value: Any) -> ReconcilePlan:
        year = to_year(value)
        if year is None:
            logger.warning(f"Ignoring non-numeric year {value!r}")
            return ReconcilePlan()

        self._legend.render(year)
        self._context = apply_year(self._context, year)
        plan = self._reconciler.reconcile(self._context)
        logger.debug(f"Selected year {year}: {plan.to_dict()}")
        return plan
