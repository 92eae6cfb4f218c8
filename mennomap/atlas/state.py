"""
Atlas State - The explicit context passed between filter, legend and UI.

The context bundles the read-only feature store with the Selected Year and
its derived Visible Sets. Updates return a new context; nothing is mutated.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Tuple

from mennomap.atlas.temporal import VisibleSets, compute_visible_sets
from mennomap.data.schemas.models import Feature, FeatureStore
from mennomap.utils.converters import to_year
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AtlasContext:
    """
    Current state of the atlas.

    visible is always compute_visible_sets(store, selected_year).
    show_colonies is the colony overlay switch of the layer control; it
    decides what gets attached, not what is visible in time.
    """
    store: FeatureStore
    selected_year: int
    show_colonies: bool = True
    visible: VisibleSets = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.visible is None or self.visible.year != self.selected_year:
            object.__setattr__(
                self, "visible", compute_visible_sets(self.store, self.selected_year)
            )

    def attached_ids(self) -> FrozenSet[str]:
        """Feature ids that should be on the rendering surface."""
        if self.show_colonies:
            return self.visible.all_ids()
        return self.visible.arrows

    def ordered_ids(self) -> Tuple[str, ...]:
        """All feature ids in store order, colonies first."""
        return self.store.colonies.feature_ids + self.store.arrows.feature_ids

    def features_for(self, ids: Tuple[str, ...]) -> Tuple[Feature, ...]:
        """Resolve feature ids to features, skipping unknown ids."""
        features = []
        for feature_id in ids:
            feature = self.store.get(feature_id)
            if feature is not None:
                features.append(feature)
        return tuple(features)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "selected_year": self.selected_year,
            "show_colonies": self.show_colonies,
            "visible_colonies": sorted(self.visible.colonies),
            "visible_arrows": sorted(self.visible.arrows),
        }


def create_context(store: FeatureStore, year: Any, show_colonies: bool = True) -> AtlasContext:
    """
    Create the initial context for a store.

    Args:
        store: Loaded feature store
        year: Initial selected year (the slider default)
        show_colonies: Initial state of the colony overlay

    Returns:
        AtlasContext with its Visible Sets computed
    """
    selected = to_year(year)
    if selected is None:
        raise ValueError(f"Invalid initial year: {year!r}")
    return AtlasContext(store=store, selected_year=selected, show_colonies=show_colonies)


def apply_year(context: AtlasContext, year: Any) -> AtlasContext:
    """
    Return the context for a newly selected year.

    A value that is not a whole number leaves the context unchanged.
    """
    selected = to_year(year)
    if selected is None:
        logger.warning(f"Ignoring non-numeric year {year!r}")
        return context
    if selected == context.selected_year:
        return context
    return replace(context, selected_year=selected, visible=None)


def set_colony_overlay(context: AtlasContext, show: bool) -> AtlasContext:
    """Return the context with the colony overlay switched on or off."""
    if context.show_colonies == show:
        return context
    return replace(context, show_colonies=show)
