"""Shared fixtures and configuration for MennoMap tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from mennomap.config import MennoMapConfig, DataConfig, TimelineConfig
from mennomap.data.schemas.models import Feature, FeatureStore

SAMPLE_DATA_DIR = Path(__file__).parent.parent / "data" / "sample"


def colony_feature(name: str, year: Any, country: str = "Paraguay") -> Dict[str, Any]:
    """GeoJSON colony feature with a unit-square polygon."""
    return {
        "type": "Feature",
        "properties": {
            "Name": name,
            "Country": country,
            "Est_date": year,
            "Area_ha": 1000,
            "Article": f"https://gameo.org/index.php?title={name}",
        },
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[-60, -22], [-59, -22], [-59, -21], [-60, -21], [-60, -22]]],
        },
    }


def arrow_feature(year: Any) -> Dict[str, Any]:
    """GeoJSON migration arrow feature."""
    return {
        "type": "Feature",
        "properties": {"Est-Year": year},
        "geometry": {"type": "LineString", "coordinates": [[-58.4, -34.6], [-60.0, -22.5]]},
    }


def feature_collection(features: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": features}


class FakeSurface:
    """Rendering surface that records attach/detach calls."""

    def __init__(self):
        self.attached: Dict[str, Feature] = {}
        self.calls: List[tuple] = []

    def attach(self, feature: Feature) -> None:
        self.calls.append(("attach", feature.feature_id))
        self.attached[feature.feature_id] = feature

    def detach(self, feature_id: str) -> None:
        self.calls.append(("detach", feature_id))
        self.attached.pop(feature_id, None)


class FakeLabel:
    """Stand-in for a NiceGUI label."""

    def __init__(self):
        self.text: Optional[str] = None
        self.visible = True

    def set_text(self, text: str) -> None:
        self.text = text

    def set_visibility(self, visible: bool) -> None:
        self.visible = visible


class FakeSlider:
    """Stand-in for a NiceGUI slider that fires its change handler like the real one."""

    def __init__(self, value: Any, on_change=None):
        self.value = value
        self.on_change = on_change

    def set_value(self, value: Any) -> None:
        self.value = value
        if self.on_change is not None:
            self.on_change(value)


class FakeNumber:
    """Stand-in for a NiceGUI number input."""

    def __init__(self, value: Any):
        self.value = value

    def set_value(self, value: Any) -> None:
        self.value = value


class FakeLayer:
    """Layer handle returned by FakeLeaflet; records run_method calls."""

    def __init__(self, layer_id: str, name: str, args: List[Any]):
        self.id = layer_id
        self.name = name
        self.args = args
        self.methods: List[tuple] = []

    def run_method(self, name: str, *args: Any) -> None:
        self.methods.append((name, *args))


class FakeLeaflet:
    """Stand-in for ui.leaflet keeping the layers currently on the map."""

    def __init__(self):
        self.layers: List[FakeLayer] = []
        self.created = 0
        self.initialized_calls = 0

    def generic_layer(self, name: str, args: List[Any]) -> FakeLayer:
        layer = FakeLayer(f"layer-{self.created}", name, args)
        self.created += 1
        self.layers.append(layer)
        return layer

    def remove_layer(self, layer: FakeLayer) -> None:
        self.layers.remove(layer)

    async def initialized(self) -> None:
        self.initialized_calls += 1


@pytest.fixture
def colonies_document() -> Dict[str, Any]:
    return feature_collection([
        colony_feature("Menno", 1927),
        colony_feature("Fernheim", 1930),
        colony_feature("Friesland", 1935),
    ])


@pytest.fixture
def arrows_document() -> Dict[str, Any]:
    return feature_collection([
        arrow_feature(1927),
        arrow_feature(1930),
    ])


@pytest.fixture
def store(colonies_document, arrows_document) -> FeatureStore:
    """Store with colonies 1927/1930/1935 and arrows 1927/1930."""
    return FeatureStore.from_documents(colonies_document, arrows_document)


@pytest.fixture
def geojson_files(tmp_path, colonies_document, arrows_document) -> Dict[str, str]:
    """The store documents written to temporary files."""
    colonies_path = tmp_path / "colonies.geojson"
    arrows_path = tmp_path / "arrows.geojson"
    colonies_path.write_text(json.dumps(colonies_document), encoding="utf-8")
    arrows_path.write_text(json.dumps(arrows_document), encoding="utf-8")
    return {"colonies": str(colonies_path), "arrows": str(arrows_path)}


@pytest.fixture
def test_config(geojson_files) -> MennoMapConfig:
    """Configuration pointing at the temporary documents."""
    return MennoMapConfig(
        data=DataConfig(
            colonies_source=geojson_files["colonies"],
            arrows_source=geojson_files["arrows"],
            fetch_timeout=5.0,
        ),
        timeline=TimelineConfig(
            min_year=1920,
            max_year=1940,
            default_year=1927,
            step=1,
        ),
    )


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def label() -> FakeLabel:
    return FakeLabel()
