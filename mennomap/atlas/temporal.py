"""
Temporal Filter - Year-based visibility for the atlas layers.

Colonies are persistent settlements: once established they stay visible
for every later year. Migration arrows are point-in-time events: they are
visible only in their exact year.

All functions here are pure. Attaching features to a map is done by
mennomap.atlas.reconcile.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, FrozenSet, Iterable, Tuple

from mennomap.data.schemas.models import Feature, FeatureLayer, FeatureStore
from mennomap.utils.converters import to_year
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


class CompareOp(str, Enum):
    """How a feature year is compared to the selected year."""
    CUMULATIVE = "cumulative"  # feature year <= selected year
    EXACT = "exact"            # feature year == selected year

    @classmethod
    def for_layer(cls, layer: FeatureLayer) -> "CompareOp":
        if layer is FeatureLayer.COLONIES:
            return cls.CUMULATIVE
        return cls.EXACT


@dataclass(frozen=True)
class VisibleSets:
    """Ids of the visible features of each layer for one selected year."""
    year: int
    colonies: FrozenSet[str] = frozenset()
    arrows: FrozenSet[str] = frozenset()

    def all_ids(self) -> FrozenSet[str]:
        return self.colonies | self.arrows


def passes(feature_year: Any, year: Any, op: CompareOp) -> bool:
    """
    Check a feature year against the selected year.

    Both sides are normalized to int first; a missing or malformed year on
    either side never passes.
    """
    feature_year = to_year(feature_year)
    year = to_year(year)
    if feature_year is None or year is None:
        return False

    if op is CompareOp.CUMULATIVE:
        return feature_year <= year
    return feature_year == year


def filter_features(
    features: Iterable[Feature],
    year: Any,
    op: CompareOp
) -> Tuple[Feature, ...]:
    """
    Select the features visible in a year.

    Args:
        features: Features to filter (order is preserved)
        year: Selected year
        op: Comparison to apply

    Returns:
        Tuple of the features that pass
    """
    selected = []
    for feature in features:
        if feature.year is None:
            logger.debug(
                f"{feature.feature_id} has no usable {feature.layer.year_attribute}; hidden"
            )
            continue
        if passes(feature.year, year, op):
            selected.append(feature)
    return tuple(selected)


def visible_colonies(store: FeatureStore, year: Any) -> Tuple[Feature, ...]:
    """Colonies established in or before the year."""
    return filter_features(
        store.colonies.features, year, CompareOp.for_layer(store.colonies.layer)
    )


def visible_arrows(store: FeatureStore, year: Any) -> Tuple[Feature, ...]:
    """Migration arrows of exactly the year."""
    return filter_features(
        store.arrows.features, year, CompareOp.for_layer(store.arrows.layer)
    )


def compute_visible_sets(store: FeatureStore, year: int) -> VisibleSets:
    """Compute both Visible Sets for a selected year."""
    return VisibleSets(
        year=year,
        colonies=frozenset(f.feature_id for f in visible_colonies(store, year)),
        arrows=frozenset(f.feature_id for f in visible_arrows(store, year)),
    )
