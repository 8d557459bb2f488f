"""Tests for GeometryLayerSync - one GeoJSON source/fill layer, created at load."""

import copy

from draggable_markers.constants import Defaults, GeoJSONConfig
from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.core.geometry import fill_layer_spec
from draggable_markers.engine.deck_map import DeckMap, DeckMapEngine
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.store import HostStateStore
from tests.conftest import CONTAINER, TOKEN

POLYGON_B = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[-122.40, 37.70], [-122.45, 37.70], [-122.45, 37.75], [-122.40, 37.70]]],
            },
        }
    ],
}


class TestLayerCreation:
    """Source and layer exist iff the map loaded with a GeoJSON object present."""

    def test_nothing_before_load(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        assert deck_map.sources == {}
        assert deck_map.layers == {}
        assert not component.is_loaded

    def test_one_source_and_fill_layer_after_load(self, loaded_component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Load creates exactly one source and one fill layer, then marks loaded."""
        assert list(deck_map.sources) == [GeoJSONConfig.SOURCE_ID]
        assert list(deck_map.layers) == [GeoJSONConfig.LAYER_ID]

        layer = deck_map.get_layer(GeoJSONConfig.LAYER_ID)
        assert layer["type"] == "fill"
        assert layer["source"] == GeoJSONConfig.SOURCE_ID
        assert layer["paint"] == {"fill-color": "#0080ff", "fill-opacity": 0.5}
        assert deck_map.get_source(GeoJSONConfig.SOURCE_ID).data == Defaults.GEOJSON
        assert loaded_component.is_loaded

    def test_no_geojson_at_load_means_no_layer(self) -> None:
        store = HostStateStore(initial={BindingName.ACCESS_TOKEN: TOKEN, BindingName.GEOJSON: None})
        component = DraggableMarkersMap(store=store, engine=DeckMapEngine())
        component.mount(CONTAINER)

        component.map.finish_load()

        assert component.is_loaded
        assert component.map.sources == {}
        assert component.map.layers == {}

    def test_layer_spec(self) -> None:
        assert fill_layer_spec() == {
            "id": "geojson-polygon-layer",
            "type": "fill",
            "source": "geojson-polygon",
            "layout": {},
            "paint": {"fill-color": "#0080ff", "fill-opacity": 0.5},
        }


class TestGeometryUpdates:
    """After load, changes replace data in place; before load they are dropped."""

    def test_update_after_load_keeps_identities(self, loaded_component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Same source/layer objects persist, only the data reference changes."""
        source = deck_map.get_source(GeoJSONConfig.SOURCE_ID)
        layer = deck_map.get_layer(GeoJSONConfig.LAYER_ID)

        loaded_component.store.set(BindingName.GEOJSON, POLYGON_B)

        assert deck_map.get_source(GeoJSONConfig.SOURCE_ID) is source
        assert deck_map.get_layer(GeoJSONConfig.LAYER_ID) is layer
        assert source.data is POLYGON_B
        assert source.version == 1
        assert len(deck_map.sources) == 1 and len(deck_map.layers) == 1

    def test_update_before_load_is_dropped(self, component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Nothing is created or queued; load later reads the current value."""
        component.store.set(BindingName.GEOJSON, POLYGON_B)
        assert deck_map.sources == {}

        deck_map.finish_load()

        source = deck_map.get_source(GeoJSONConfig.SOURCE_ID)
        assert source.data is POLYGON_B
        assert source.version == 0

    def test_update_without_source_is_dropped(self) -> None:
        """No GeoJSON at load: later objects do not create a layer."""
        store = HostStateStore(initial={BindingName.ACCESS_TOKEN: TOKEN, BindingName.GEOJSON: None})
        component = DraggableMarkersMap(store=store, engine=DeckMapEngine())
        component.mount(CONTAINER)
        component.map.finish_load()

        store.set(BindingName.GEOJSON, copy.deepcopy(POLYGON_B))

        assert component.map.sources == {}
        assert component.map.layers == {}

    def test_cleared_geojson_keeps_last_data(self, loaded_component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        """Setting None after load leaves the layer as it was."""
        loaded_component.store.set(BindingName.GEOJSON, None)
        assert deck_map.get_source(GeoJSONConfig.SOURCE_ID).data == Defaults.GEOJSON

    def test_repeated_load_does_not_duplicate(self, loaded_component: DraggableMarkersMap, deck_map: DeckMap) -> None:
        deck_map.finish_load()
        assert len(deck_map.sources) == 1
        assert len(deck_map.layers) == 1
