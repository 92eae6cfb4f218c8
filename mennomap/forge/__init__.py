"""
Forge module - UI/API layer for MennoMap.

This module contains:
- ui: NiceGUI atlas page (imports the NiceGUI stack)
- app: REST API for the colonies and migration arrows visible in a year
- controller: Slider/form controller, free of NiceGUI
- surface: Leaflet rendering surface
- dashboard: Legend and feature presentation components
"""
