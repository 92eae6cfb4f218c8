"""
Reconciliation - Sync a rendering surface with the atlas context.

The Visible Sets are computed purely; this module diffs what is currently
attached to the map against what should be attached and applies only the
difference through a RenderingSurface.
"""

from dataclasses import dataclass
from typing import AbstractSet, Dict, Iterable, List, Protocol, Set, Tuple

from mennomap.atlas.state import AtlasContext
from mennomap.data.schemas.models import Feature
from mennomap.utils.logger import get_logger

logger = get_logger(__name__)


class RenderingSurface(Protocol):
    """A map canvas that features can be attached to and detached from."""

    def attach(self, feature: Feature) -> None: ...

    def detach(self, feature_id: str) -> None: ...


@dataclass(frozen=True)
class ReconcilePlan:
    """Features to attach and detach, in application order."""
    attach: Tuple[str, ...] = ()
    detach: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.attach and not self.detach

    def to_dict(self) -> Dict[str, List[str]]:
        return {"attach": list(self.attach), "detach": list(self.detach)}


def plan_reconcile(
    previous: AbstractSet[str],
    target: AbstractSet[str],
    ordered_ids: Iterable[str]
) -> ReconcilePlan:
    """
    Diff the attached ids against the target ids.

    Args:
        previous: Ids currently attached
        target: Ids that should be attached
        ordered_ids: All ids in store order; both tuples follow this order

    Returns:
        ReconcilePlan
    """
    ordered = list(ordered_ids)
    return ReconcilePlan(
        attach=tuple(i for i in ordered if i in target and i not in previous),
        detach=tuple(i for i in ordered if i in previous and i not in target),
    )


class Reconciler:
    """
    Keeps a rendering surface in sync with successive contexts.
    """

    def __init__(self, surface: RenderingSurface):
        """
        Initialize the reconciler.

        Args:
            surface: Surface to attach features to
        """
        self._surface = surface
        self._attached: Set[str] = set()

    @property
    def attached(self) -> frozenset:
        """Ids currently attached to the surface."""
        return frozenset(self._attached)

    def reconcile(self, context: AtlasContext) -> ReconcilePlan:
        """
        Apply the difference between the surface and the context.

        Args:
            context: Context to render

        Returns:
            The plan that was applied
        """
        plan = plan_reconcile(self._attached, context.attached_ids(), context.ordered_ids())
        if plan.is_empty:
            return plan

        for feature_id in plan.detach:
            self._surface.detach(feature_id)
            self._attached.discard(feature_id)

        for feature in context.features_for(plan.attach):
            self._surface.attach(feature)
            self._attached.add(feature.feature_id)

        logger.debug(
            f"Year {context.selected_year}: attached {len(plan.attach)}, "
            f"detached {len(plan.detach)}"
        )
        return plan
