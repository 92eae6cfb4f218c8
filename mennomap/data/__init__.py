"""
Data module - Storage layer for MennoMap.

This module contains:
- schemas: Pydantic models for features and the feature store
- sample: Bundled GeoJSON documents (colonies and migration arrows)
"""
