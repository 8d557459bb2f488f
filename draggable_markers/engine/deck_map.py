"""DeckMap - Pydeck-backed map engine.

Keeps the full map scene in Python (camera, markers, sources, layers) and
builds a pdk.Deck from it on every render:
- GeoJsonLayer per fill layer (source data, paint converted to RGBA)
- IconLayer with all live markers
- ViewState from the camera
- Mapbox base map keyed with the access token (passed per deck, no global)

deck.gl has no draggable markers and reports no camera events to Python, so
gestures enter through explicit methods that fire the same lifecycle events a
browser map would:
- finish_load(): initial style/tiles loaded -> "load"
- pan_to(): user pan/zoom settled -> "moveend"
- rotate_to(): user rotation settled -> "rotateend"
- drag_marker(): user dropped a marker -> marker "dragend"

Conventions:
- [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Any

import pydeck as pdk

from draggable_markers.constants import MapConfig, MapEvents, MarkerConfig
from draggable_markers.engine.base import (
    DragEvent,
    DragHandler,
    GeoJSONSource,
    LonLat,
    MapEngine,
    MapEventHandler,
    MapHandle,
    MarkerHandle,
    MarkerIcon,
)

logger = logging.getLogger(__name__)


def hex_to_rgba(hex_color: str, opacity: float = 1.0) -> list[int]:
    """Convert '#RRGGBB' plus opacity (0-1) to a Pydeck [R, G, B, A] list."""
    value = hex_color.lstrip("#")
    r, g, b = (int(value[i : i + 2], 16) for i in (0, 2, 4))
    return [r, g, b, round(opacity * 255)]


def _same_position(a: LonLat, b: LonLat) -> bool:
    # NaN never equals anything, so a NaN target always counts as a move
    return a[0] == b[0] and a[1] == b[1]


class DeckSource(GeoJSONSource):
    """In-memory GeoJSON source."""

    def __init__(self, source_id: str, data: Any) -> None:
        self._source_id = source_id
        self._data = data
        self.version = 0

    @property
    def source_id(self) -> str:
        return self._source_id

    @property
    def data(self) -> Any:
        return self._data

    def set_data(self, data: Any) -> None:
        self._data = data
        self.version += 1
        logger.debug(f"[DECK] Source '{self._source_id}' data replaced (v{self.version})")


class DeckMarker(MarkerHandle):
    """In-memory marker. Removal detaches it from the map and drops its handlers."""

    def __init__(
        self,
        owner: DeckMap,
        element_id: str,
        lng_lat: LonLat,
        icon: MarkerIcon,
        draggable: bool,
    ) -> None:
        self._owner = owner
        self._element_id = element_id
        self._lng_lat = lng_lat
        self._draggable = draggable
        self._removed = False
        self._handlers: dict[str, list[DragHandler]] = defaultdict(list)
        self.icon = icon

    @property
    def element_id(self) -> str:
        return self._element_id

    @property
    def lng_lat(self) -> LonLat:
        return self._lng_lat

    @property
    def draggable(self) -> bool:
        return self._draggable

    @property
    def is_removed(self) -> bool:
        return self._removed

    def on_drag_end(self, handler: DragHandler) -> None:
        self._handlers[MapEvents.DRAG_END].append(handler)

    def remove(self) -> None:
        if self._removed:
            return
        self._removed = True
        self._handlers.clear()
        self._owner._detach_marker(self)

    def finish_drag(self, lng_lat: LonLat) -> None:
        """Move to lng_lat and fire dragend. Ignored once removed or if not draggable."""
        if self._removed or not self._draggable:
            logger.debug(f"[DECK] Ignoring drag of inactive marker {self._element_id}")
            return
        self._lng_lat = lng_lat
        event = DragEvent(target=self)
        for handler in list(self._handlers[MapEvents.DRAG_END]):
            handler(event)

    def to_datum(self) -> dict[str, Any]:
        """Row for the IconLayer."""
        return {
            "id": self._element_id,
            "position": [self._lng_lat[0], self._lng_lat[1]],
            "icon": {
                "url": self.icon.url,
                "width": self.icon.width,
                "height": self.icon.height,
                "anchorY": self.icon.height,  # Pin tip at the coordinate
            },
        }


class DeckMap(MapHandle):
    """Map instance rendered with Pydeck.

    Example:
        m = DeckMapEngine().create_map("map", token, style, (-122.4, 37.7), 9)
        m.finish_load()
        deck = m.render()
    """

    def __init__(
        self,
        container: str,
        access_token: str,
        style: str,
        center: LonLat,
        zoom: float,
        attribution_control: bool = False,
    ) -> None:
        self.container = container
        self.access_token = access_token
        self.style = style
        self.attribution_control = attribution_control
        self._center: LonLat = center
        self._zoom = zoom
        self._bearing = 0.0
        self._loaded = False
        self._handlers: dict[str, list[MapEventHandler]] = defaultdict(list)
        self._markers: list[DeckMarker] = []
        self._sources: dict[str, DeckSource] = {}
        self._layers: dict[str, dict[str, Any]] = {}
        self.resize_count = 0

    # =========================================================================
    # MapHandle
    # =========================================================================

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get_center(self) -> LonLat:
        return self._center

    def get_zoom(self) -> float:
        return self._zoom

    def get_bearing(self) -> float:
        return self._bearing

    def set_center(self, center: LonLat) -> None:
        if _same_position(self._center, center):
            return
        self._center = center
        self._fire(MapEvents.MOVE_END)

    def set_style(self, style: str) -> None:
        logger.info(f"[DECK] Style {self.style} -> {style}")
        self.style = style

    def resize(self) -> None:
        self.resize_count += 1

    def on(self, event: str, handler: MapEventHandler) -> None:
        self._handlers[event].append(handler)

    def off(self, event: str, handler: MapEventHandler) -> None:
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def add_source(self, source_id: str, data: Any) -> DeckSource:
        if source_id in self._sources:
            raise ValueError(f"Source '{source_id}' already exists")
        source = DeckSource(source_id=source_id, data=data)
        self._sources[source_id] = source
        return source

    def get_source(self, source_id: str) -> DeckSource | None:
        return self._sources.get(source_id)

    def add_layer(self, layer: dict[str, Any]) -> None:
        layer_id = layer["id"]
        if layer_id in self._layers:
            raise ValueError(f"Layer '{layer_id}' already exists")
        if layer["source"] not in self._sources:
            raise ValueError(f"Layer '{layer_id}' references unknown source '{layer['source']}'")
        self._layers[layer_id] = dict(layer)

    def get_layer(self, layer_id: str) -> dict[str, Any] | None:
        return self._layers.get(layer_id)

    def add_marker(
        self,
        element_id: str,
        lng_lat: LonLat,
        icon: MarkerIcon,
        draggable: bool = True,
    ) -> DeckMarker:
        marker = DeckMarker(
            owner=self,
            element_id=element_id,
            lng_lat=lng_lat,
            icon=icon,
            draggable=draggable,
        )
        self._markers.append(marker)
        return marker

    # =========================================================================
    # Scene inspection
    # =========================================================================

    @property
    def markers(self) -> list[DeckMarker]:
        """Live markers in creation order."""
        return list(self._markers)

    @property
    def sources(self) -> dict[str, DeckSource]:
        return dict(self._sources)

    @property
    def layers(self) -> dict[str, dict[str, Any]]:
        return dict(self._layers)

    def find_marker(self, element_id: str) -> DeckMarker | None:
        """Live marker with this element id, or None."""
        for marker in self._markers:
            if marker.element_id == element_id:
                return marker
        return None

    def handler_count(self, event: str) -> int:
        return len(self._handlers[event])

    # =========================================================================
    # Gestures (user interaction entry points)
    # =========================================================================

    def finish_load(self) -> None:
        """Initial load completed. Fires "load" once."""
        if self._loaded:
            return
        self._loaded = True
        logger.info(f"[DECK] Map in '{self.container}' loaded")
        self._fire(MapEvents.LOAD)

    def pan_to(self, lon: float, lat: float, zoom: float | None = None) -> None:
        """User pan/zoom settled at (lon, lat, zoom). Fires "moveend"."""
        self._center = (lon, lat)
        if zoom is not None:
            self._zoom = zoom
        self._fire(MapEvents.MOVE_END)

    def rotate_to(self, bearing: float) -> None:
        """User rotation settled at bearing (degrees). Fires "rotateend"."""
        self._bearing = bearing % 360.0
        self._fire(MapEvents.ROTATE_END)

    def drag_marker(self, element_id: str, lon: float, lat: float) -> bool:
        """User dropped the marker with element_id at (lon, lat).

        Returns:
            True if a live marker was dragged.
        """
        marker = self.find_marker(element_id)
        if marker is None:
            logger.debug(f"[DECK] No live marker {element_id} to drag")
            return False
        marker.finish_drag((lon, lat))
        return True

    # =========================================================================
    # Rendering
    # =========================================================================

    def render(self, height: int = MapConfig.HEIGHT_PX) -> pdk.Deck:
        """Build the Pydeck deck for the current scene. Fires "render" first."""
        self._fire(MapEvents.RENDER)

        layers: list[pdk.Layer] = []
        for layer in self._layers.values():
            layers.append(self._create_fill_layer(layer))
        if self._markers:
            layers.append(self._create_marker_layer())

        lon, lat = self._center
        view_state = pdk.ViewState(
            longitude=0.0 if math.isnan(lon) else lon,
            latitude=0.0 if math.isnan(lat) else lat,
            zoom=self._zoom,
            bearing=self._bearing,
        )
        return pdk.Deck(
            layers=layers,
            initial_view_state=view_state,
            map_style=self.style,
            map_provider="mapbox",
            api_keys={"mapbox": self.access_token},
            height=height,
            tooltip={"text": "{id}"},
        )

    def _create_fill_layer(self, layer: dict[str, Any]) -> pdk.Layer:
        paint = layer.get("paint", {})
        fill = hex_to_rgba(
            paint.get("fill-color", "#000000"),
            opacity=paint.get("fill-opacity", 1.0),
        )
        return pdk.Layer(
            "GeoJsonLayer",
            data=self._sources[layer["source"]].data,
            id=layer["id"],
            filled=True,
            stroked=False,
            get_fill_color=fill,
            pickable=False,
        )

    def _create_marker_layer(self) -> pdk.Layer:
        return pdk.Layer(
            "IconLayer",
            data=[marker.to_datum() for marker in self._markers],
            id=MarkerConfig.LAYER_ID,
            get_icon="icon",
            get_position="position",
            get_size=MarkerConfig.HEIGHT_PX,
            size_units="pixels",
            pickable=True,
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _fire(self, event: str) -> None:
        for handler in list(self._handlers[event]):
            handler()

    def _detach_marker(self, marker: DeckMarker) -> None:
        if marker in self._markers:
            self._markers.remove(marker)


class DeckMapEngine(MapEngine):
    """Creates DeckMap instances and remembers them."""

    def __init__(self) -> None:
        self.created: list[DeckMap] = []

    def create_map(
        self,
        container: str,
        access_token: str,
        style: str,
        center: LonLat,
        zoom: float,
        attribution_control: bool = False,
    ) -> DeckMap:
        deck_map = DeckMap(
            container=container,
            access_token=access_token,
            style=style,
            center=center,
            zoom=zoom,
            attribution_control=attribution_control,
        )
        self.created.append(deck_map)
        logger.info(f"[DECK] Created map #{len(self.created)} in '{container}'")
        return deck_map
