"""
Configuration module for MennoMap.

Centralizes configuration management and environment variable handling.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

SAMPLE_DATA_DIR = Path(__file__).parent / "data" / "sample"


@dataclass
class DataConfig:
    """Sources of the two feature documents (local paths or http(s) URLs)."""
    colonies_source: str = field(
        default_factory=lambda: os.getenv(
            "COLONIES_SOURCE",
            str(SAMPLE_DATA_DIR / "latin-america-mennonite-colonies.geojson")
        )
    )
    arrows_source: str = field(
        default_factory=lambda: os.getenv(
            "ARROWS_SOURCE",
            str(SAMPLE_DATA_DIR / "la-colony-migration-arrows.geojson")
        )
    )
    fetch_timeout: float = field(
        default_factory=lambda: float(os.getenv("FETCH_TIMEOUT", "30"))
    )


@dataclass
class MapConfig:
    """Initial view and base layers."""
    center_lat: float = field(default_factory=lambda: float(os.getenv("MAP_CENTER_LAT", "-10")))
    center_lon: float = field(default_factory=lambda: float(os.getenv("MAP_CENTER_LON", "-80")))
    zoom: int = field(default_factory=lambda: int(os.getenv("MAP_ZOOM", "4")))
    voyager_url: str = field(
        default_factory=lambda: os.getenv(
            "VOYAGER_TILES_URL",
            "https://{s}.basemaps.cartocdn.com/rastertiles/voyager/{z}/{x}/{y}{r}.png"
        )
    )
    imagery_url: str = field(
        default_factory=lambda: os.getenv(
            "IMAGERY_TILES_URL",
            "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}"
        )
    )

    @property
    def center(self) -> tuple:
        return (self.center_lat, self.center_lon)


@dataclass
class TimelineConfig:
    """Year slider range."""
    min_year: int = field(default_factory=lambda: int(os.getenv("YEAR_MIN", "1920")))
    max_year: int = field(default_factory=lambda: int(os.getenv("YEAR_MAX", "2000")))
    default_year: int = field(default_factory=lambda: int(os.getenv("YEAR_DEFAULT", "1927")))
    step: int = field(default_factory=lambda: int(os.getenv("YEAR_STEP", "1")))


@dataclass
class UIConfig:
    """NiceGUI configuration."""
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8080")))
    title: str = field(
        default_factory=lambda: os.getenv("UI_TITLE", "Mennonite Colonies in Latin America")
    )
    dark_mode: bool = field(default_factory=lambda: os.getenv("UI_DARK_MODE", "false").lower() == "true")
    reload: bool = field(default_factory=lambda: os.getenv("UI_RELOAD", "false").lower() == "true")


@dataclass
class MennoMapConfig:
    """Main configuration class for MennoMap."""
    data: DataConfig = field(default_factory=DataConfig)
    map: MapConfig = field(default_factory=MapConfig)
    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    ui: UIConfig = field(default_factory=UIConfig)


# Global configuration instance
config = MennoMapConfig()


def get_config() -> MennoMapConfig:
    """Get the global configuration instance."""
    return config


def reload_config() -> MennoMapConfig:
    """Reload configuration from environment variables."""
    global config
    load_dotenv(override=True)
    config = MennoMapConfig()
    return config
