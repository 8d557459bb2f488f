"""DraggableMarkersMap - Wires camera, overlays and geometry to the host state.

Subscriptions (host binding -> handler):
    accessToken                          -> initialize (retry map creation)
    longitude, latitude                  -> CameraController.on_center_changed
    mapStyle                             -> CameraController.on_style_changed
    points, longitude/latitudeFieldName  -> OverlayReconciler.on_points_changed
    geoJSON                              -> GeometryLayerSync.on_geojson_changed

Map lifecycle handlers (registered once the map exists):
    load      -> geometry source/layer, then lifecycle finish_load
    moveend   -> camera write-back + "on-viewport-changed"
    rotateend -> camera write-back + "on-rotate-end"
    render    -> camera resize

Everything runs synchronously inside the callback that triggered it.
"""

import logging
from collections.abc import Callable
from typing import Any

from draggable_markers.constants import MapEvents, MarkerConfig
from draggable_markers.core.camera import CameraController
from draggable_markers.core.geometry import GeometryLayerSync
from draggable_markers.core.lifecycle import MapContext, MapLifecycle
from draggable_markers.core.overlays import DEFAULT_ICON, Overlay, OverlayReconciler
from draggable_markers.engine.base import MapEngine, MapHandle, MarkerIcon
from draggable_markers.engine.deck_map import DeckMapEngine
from draggable_markers.model.viewport import Viewport
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import ChangeOrigin, HostStateStore

logger = logging.getLogger(__name__)


class DraggableMarkersMap:
    """Map component with draggable markers synced to a host state store.

    Example:
        store = HostStateStore(initial={"accessToken": "pk.eyJ1..."})
        component = DraggableMarkersMap(store=store)
        component.mount("map")
        deck = component.render()
    """

    def __init__(
        self,
        store: HostStateStore | None = None,
        events: EventEmitter | None = None,
        engine: MapEngine | None = None,
        icon: MarkerIcon = DEFAULT_ICON,
        preserve_extra_fields: bool = MarkerConfig.PRESERVE_EXTRA_FIELDS,
    ) -> None:
        """Initialize component and subscribe to the host bindings.

        Args:
            store: Host state (creates one with defaults if None)
            events: Notification emitter (creates one if None)
            engine: Render engine (DeckMapEngine if None)
            icon: Marker image and size
            preserve_extra_fields: Keep extra fields of dragged point records
        """
        self.store = store or HostStateStore()
        self.events = events or EventEmitter()
        self.engine = engine or DeckMapEngine()
        self.lifecycle = MapLifecycle(context=MapContext())

        self.camera = CameraController(
            store=self.store,
            events=self.events,
            engine=self.engine,
            lifecycle=self.lifecycle,
        )
        self.overlays = OverlayReconciler(
            store=self.store,
            events=self.events,
            lifecycle=self.lifecycle,
            icon=icon,
            preserve_extra_fields=preserve_extra_fields,
        )
        self.geometry = GeometryLayerSync(store=self.store, lifecycle=self.lifecycle)

        self._unsubscribers: list[Callable[[], None]] = [
            self.store.subscribe(BindingName.ACCESS_TOKEN, self._on_access_token_changed),
            self.store.subscribe(BindingName.LONGITUDE, self.camera.on_center_changed),
            self.store.subscribe(BindingName.LATITUDE, self.camera.on_center_changed),
            self.store.subscribe(BindingName.MAP_STYLE, self.camera.on_style_changed),
            self.store.subscribe(BindingName.POINTS, self.overlays.on_points_changed),
            self.store.subscribe(BindingName.LONGITUDE_FIELD_NAME, self.overlays.on_points_changed),
            self.store.subscribe(BindingName.LATITUDE_FIELD_NAME, self.overlays.on_points_changed),
            self.store.subscribe(BindingName.GEOJSON, self.geometry.on_geojson_changed),
        ]

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def map(self) -> MapHandle | None:
        return self.lifecycle.map

    @property
    def is_loaded(self) -> bool:
        return self.lifecycle.is_loaded

    @property
    def viewport(self) -> Viewport | None:
        return self.camera.viewport

    @property
    def live_overlays(self) -> list[Overlay]:
        return self.overlays.overlays

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def mount(self, container: str) -> bool:
        """Attach the mount target and try to create the map.

        Returns:
            True if the map was created by this call.
        """
        self.lifecycle.context.container = container
        return self.initialize()

    def initialize(self) -> bool:
        """Create the map once and wire everything that depends on it.

        Safe to call repeatedly; only the first call with a mount target and
        a non-blank access token creates a map.
        """
        if not self.camera.initialize():
            return False
        map_handle = self.map
        self.geometry.attach(map_handle)
        map_handle.on(MapEvents.LOAD, self._on_load)
        self.overlays.reconcile()
        return True

    def render(self) -> Any:
        """Draw one frame (a pdk.Deck with the Pydeck engine), or None without a map."""
        if self.map is None:
            return None
        return self.map.render()

    def unmount(self) -> None:
        """Retire overlays, drop map listeners and the map reference."""
        if self.map is not None:
            self.overlays.retire_all()
            self.camera.detach()
            self.geometry.detach(self.map)
            self.map.off(MapEvents.LOAD, self._on_load)
            self.lifecycle.unmount()
        self.lifecycle.context.container = None

    def close(self) -> None:
        """Unmount and stop listening to the host store."""
        self.unmount()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # =========================================================================
    # Handlers
    # =========================================================================

    def _on_access_token_changed(self, _value: object, _origin: ChangeOrigin) -> None:
        self.initialize()

    def _on_load(self) -> None:
        self.lifecycle.finish_load()
