"""GeometryLayerSync - Mirrors the host GeoJSON object into one fill layer.

The source/layer pair is created once, on the map's initial "load", and only
if a GeoJSON object is present at that moment. Later changes replace the
source data in place. Changes arriving before load are dropped, not queued.
"""

import logging
from typing import Any

from draggable_markers.constants import GeoJSONConfig, MapEvents
from draggable_markers.core.lifecycle import MapLifecycle
from draggable_markers.engine.base import MapHandle
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.store import ChangeOrigin, HostStateStore

logger = logging.getLogger(__name__)


def fill_layer_spec() -> dict[str, Any]:
    """Layer spec of the single GeoJSON fill layer."""
    return {
        "id": GeoJSONConfig.LAYER_ID,
        "type": GeoJSONConfig.LAYER_TYPE,
        "source": GeoJSONConfig.SOURCE_ID,
        "layout": {},
        "paint": dict(GeoJSONConfig.PAINT),
    }


class GeometryLayerSync:
    def __init__(self, store: HostStateStore, lifecycle: MapLifecycle) -> None:
        self.store = store
        self.lifecycle = lifecycle

    def attach(self, map_handle: MapHandle) -> None:
        """Register the load handler on a freshly created map."""
        map_handle.on(MapEvents.LOAD, self._on_load)

    def detach(self, map_handle: MapHandle) -> None:
        map_handle.off(MapEvents.LOAD, self._on_load)

    def _on_load(self) -> None:
        map_handle = self.lifecycle.map
        geojson = self.store.get(BindingName.GEOJSON)
        if map_handle is None or geojson is None:
            logger.debug("[GEOJSON] No GeoJSON at load, geometry layer stays inert")
            return
        map_handle.add_source(GeoJSONConfig.SOURCE_ID, geojson)
        map_handle.add_layer(fill_layer_spec())
        logger.info(f"[GEOJSON] Created source '{GeoJSONConfig.SOURCE_ID}' and layer '{GeoJSONConfig.LAYER_ID}'")

    def on_geojson_changed(self, value: Any, _origin: ChangeOrigin) -> None:
        """Push a changed GeoJSON object into the existing source."""
        if not self.lifecycle.is_loaded:
            logger.debug("[GEOJSON] Map not loaded yet, dropping GeoJSON update")
            return
        if value is None:
            return
        source = self.lifecycle.map.get_source(GeoJSONConfig.SOURCE_ID)
        if source is None:
            logger.debug("[GEOJSON] No geometry source (none at load), dropping GeoJSON update")
            return
        source.set_data(value)
        logger.info("[GEOJSON] Source data updated")
