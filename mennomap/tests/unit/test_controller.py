"""Unit tests for the slider/form controller."""

import pytest

from mennomap.atlas.reconcile import Reconciler
from mennomap.atlas.state import create_context
from mennomap.forge.controller import SliderFormController
from mennomap.forge.dashboard.components import LegendDisplay

from conftest import FakeSlider


@pytest.fixture
def wired(store, surface, label):
    """Controller wired to a fake slider that re-enters the slider channel."""
    slider = FakeSlider(value=1927)
    controller = SliderFormController(
        context=create_context(store, slider.value),
        legend=LegendDisplay(label),
        reconciler=Reconciler(surface),
        slider=slider,
    )
    slider.on_change = controller.on_slider_change
    controller.start()
    return controller, slider


class TestStart:
    """Test the initial pass."""

    def test_initial_state_matches_legend(self, wired, surface, label):
        controller, _ = wired
        assert label.text == "Year: 1927"
        assert set(surface.attached) == {"colonies-0", "arrows-0"}
        assert controller.selected_year == 1927


class TestSliderChannel:
    """Test slider input."""

    def test_slider_updates_legend_and_layers(self, wired, surface, label):
        controller, _ = wired
        controller.on_slider_change(1930)
        assert label.text == "Year: 1930"
        assert set(surface.attached) == {"colonies-0", "colonies-1", "arrows-1"}

    def test_slider_float_value(self, wired, label):
        controller, _ = wired
        controller.on_slider_change(1935.0)
        assert controller.selected_year == 1935
        assert label.text == "Year: 1935"

    def test_out_of_range_year_empties_sets(self, wired, surface, label):
        controller, _ = wired
        controller.on_slider_change(1800)
        assert label.text == "Year: 1800"
        assert surface.attached == {}

    def test_repeat_is_idempotent(self, wired, surface):
        controller, _ = wired
        controller.on_slider_change(1930)
        surface.calls.clear()
        controller.on_slider_change(1930)
        assert surface.calls == []


class TestFormChannel:
    """Test year form submissions."""

    def test_submit_1932(self, wired, surface, label):
        controller, slider = wired
        controller.on_form_submit(1932)
        assert str(slider.value) == "1932"
        assert label.text == "Year: 1932"
        # Colonies <= 1932, arrows == 1932
        assert controller.context.visible.colonies == {"colonies-0", "colonies-1"}
        assert controller.context.visible.arrows == frozenset()
        assert set(surface.attached) == {"colonies-0", "colonies-1"}

    def test_submit_does_not_reenter_slider_channel(self, wired, surface):
        controller, _ = wired
        surface.calls.clear()
        controller.on_form_submit(1930)
        assert surface.calls == [
            ("detach", "arrows-0"),
            ("attach", "colonies-1"),
            ("attach", "arrows-1"),
        ]

    def test_submit_string_value(self, wired):
        controller, slider = wired
        controller.on_form_submit("1930")
        assert slider.value == 1930
        assert controller.selected_year == 1930

    def test_empty_field_leaves_state(self, wired, label):
        controller, slider = wired
        context = controller.context
        assert controller.on_form_submit(None) is context
        assert slider.value == 1927
        assert label.text == "Year: 1927"

    def test_legend_follows_latest_channel(self, wired, label):
        controller, _ = wired
        controller.on_form_submit(1935)
        controller.on_slider_change(1928)
        assert label.text == "Year: 1928"
        controller.on_form_submit(1930)
        assert label.text == "Year: 1930"

    def test_submit_without_slider(self, store, surface, label):
        controller = SliderFormController(
            context=create_context(store, 1927),
            legend=LegendDisplay(label),
            reconciler=Reconciler(surface),
        )
        controller.on_form_submit(1930)
        assert label.text == "Year: 1930"


class TestOverlayToggle:
    """Test the colony overlay switch."""

    def test_hide_and_show_colonies(self, wired, surface):
        controller, _ = wired
        controller.on_slider_change(1930)

        controller.on_overlay_toggle(False)
        assert set(surface.attached) == {"arrows-1"}

        controller.on_slider_change(1935)
        assert surface.attached == {}

        controller.on_overlay_toggle(True)
        assert set(surface.attached) == {"colonies-0", "colonies-1", "colonies-2"}
