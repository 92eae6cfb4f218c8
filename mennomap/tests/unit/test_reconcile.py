"""Unit tests for the atlas context and surface reconciliation."""

import pytest

from mennomap.atlas.reconcile import ReconcilePlan, Reconciler, plan_reconcile
from mennomap.atlas.state import apply_year, create_context, set_colony_overlay


class TestAtlasContext:
    """Test the explicit context object."""

    def test_create_context_computes_visible_sets(self, store):
        context = create_context(store, "1930")
        assert context.selected_year == 1930
        assert context.visible.colonies == {"colonies-0", "colonies-1"}
        assert context.visible.arrows == {"arrows-1"}

    def test_create_context_rejects_non_numeric_year(self, store):
        with pytest.raises(ValueError):
            create_context(store, "soon")

    def test_apply_year_returns_new_context(self, store):
        context = create_context(store, 1927)
        updated = apply_year(context, 1935)
        assert updated is not context
        assert context.selected_year == 1927
        assert updated.selected_year == 1935
        assert updated.visible.colonies == {"colonies-0", "colonies-1", "colonies-2"}
        assert updated.visible.arrows == frozenset()

    def test_apply_same_year_is_noop(self, store):
        context = create_context(store, 1930)
        assert apply_year(context, "1930") is context

    def test_apply_non_numeric_year_keeps_context(self, store):
        context = create_context(store, 1930)
        assert apply_year(context, None) is context

    def test_visible_sets_are_pure_function_of_year(self, store):
        via_history = apply_year(apply_year(create_context(store, 1935), 1927), 1930)
        direct = create_context(store, 1930)
        assert via_history.visible == direct.visible

    def test_overlay_hides_colonies_from_attached_ids(self, store):
        context = set_colony_overlay(create_context(store, 1930), False)
        assert context.attached_ids() == {"arrows-1"}
        # The overlay switch leaves the Visible Set alone
        assert context.visible.colonies == {"colonies-0", "colonies-1"}

    def test_ordered_ids(self, store):
        context = create_context(store, 1930)
        assert context.ordered_ids() == (
            "colonies-0", "colonies-1", "colonies-2", "arrows-0", "arrows-1"
        )

    def test_to_dict(self, store):
        assert create_context(store, 1930).to_dict() == {
            "selected_year": 1930,
            "show_colonies": True,
            "visible_colonies": ["colonies-0", "colonies-1"],
            "visible_arrows": ["arrows-1"],
        }


class TestPlanReconcile:
    """Test the attach/detach diff."""

    def test_diff_follows_store_order(self):
        plan = plan_reconcile({"b", "c"}, {"a", "c", "d"}, ["a", "b", "c", "d"])
        assert plan == ReconcilePlan(attach=("a", "d"), detach=("b",))

    def test_no_difference(self):
        plan = plan_reconcile({"a"}, {"a"}, ["a"])
        assert plan.is_empty
        assert plan.to_dict() == {"attach": [], "detach": []}


class TestReconciler:
    """Test applying contexts to a surface."""

    def test_initial_reconcile_attaches_visible(self, store, surface):
        reconciler = Reconciler(surface)
        plan = reconciler.reconcile(create_context(store, 1930))
        assert plan.attach == ("colonies-0", "colonies-1", "arrows-1")
        assert set(surface.attached) == {"colonies-0", "colonies-1", "arrows-1"}
        assert reconciler.attached == {"colonies-0", "colonies-1", "arrows-1"}

    def test_year_change_applies_only_difference(self, store, surface):
        reconciler = Reconciler(surface)
        reconciler.reconcile(create_context(store, 1930))
        surface.calls.clear()

        reconciler.reconcile(create_context(store, 1927))
        assert surface.calls == [
            ("detach", "colonies-1"),
            ("detach", "arrows-1"),
            ("attach", "arrows-0"),
        ]
        assert set(surface.attached) == {"colonies-0", "arrows-0"}

    def test_reconcile_twice_is_idempotent(self, store, surface):
        reconciler = Reconciler(surface)
        context = create_context(store, 1930)
        reconciler.reconcile(context)
        surface.calls.clear()

        assert reconciler.reconcile(context).is_empty
        assert surface.calls == []

    def test_features_are_never_lost(self, store, surface):
        reconciler = Reconciler(surface)
        reconciler.reconcile(create_context(store, 1900))
        assert surface.attached == {}
        reconciler.reconcile(create_context(store, 2000))
        assert set(surface.attached) == {"colonies-0", "colonies-1", "colonies-2"}
