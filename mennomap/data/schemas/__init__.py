"""
Data Schemas for MennoMap.

This module exports the core Pydantic models and enums used throughout
the atlas.
"""

from mennomap.data.schemas.models import (
    # Enums
    FeatureLayer,

    # Models
    Feature,
    FeatureCollection,
    FeatureStore,

    # Errors
    FeatureLoadError,
)

__all__ = [
    # Enums
    'FeatureLayer',

    # Models
    'Feature',
    'FeatureCollection',
    'FeatureStore',

    # Errors
    'FeatureLoadError',
]
