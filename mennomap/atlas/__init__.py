"""
Atlas module - Time-filtering core of MennoMap.

This module contains:
- loader: Concurrent fetch of the colony and migration arrow documents
- temporal: Pure year filter for both layers
- state: Explicit context holding the Selected Year and Visible Sets
- reconcile: Diffing the Visible Sets against a rendering surface
"""

from mennomap.atlas.loader import load_feature_store
from mennomap.atlas.temporal import CompareOp, VisibleSets, compute_visible_sets
from mennomap.atlas.state import AtlasContext, apply_year, create_context
from mennomap.atlas.reconcile import Reconciler, RenderingSurface

__all__ = [
    "load_feature_store",
    "CompareOp",
    "VisibleSets",
    "compute_visible_sets",
    "AtlasContext",
    "apply_year",
    "create_context",
    "Reconciler",
    "RenderingSurface",
]
