"""CameraController - Binds host viewport scalars to the live map camera.

Directions:
- Host -> camera: longitude/latitude changes re-center the camera and
  republish the viewport snapshot. Style changes switch the map style.
- Camera -> host: on moveend/rotateend the camera center and zoom are written
  back (fixed 6-decimal strings for longitude/latitude, number for zoom), the
  viewport snapshot is republished and a notification event is emitted.

Feedback loop:
    Write-backs are tagged ChangeOrigin.COMPONENT and ignored by the
    host -> camera handler. Host changes that land within CENTER_EPSILON of the
    live camera center are not sent to the camera either.

The map is created here, at most once per mount, the first time both a mount
target and a non-blank access token are available.
"""

import logging

from draggable_markers.constants import EventNames, MapConfig, MapEvents
from draggable_markers.core.lifecycle import MapLifecycle
from draggable_markers.engine.base import LonLat, MapEngine, MapHandle
from draggable_markers.model.message import validate_access_token
from draggable_markers.model.point import format_coordinate, parse_coordinate
from draggable_markers.model.viewport import Viewport
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import ChangeOrigin, HostStateStore

logger = logging.getLogger(__name__)


class CameraController:
    """Owns the map instance and keeps it in sync with the host's viewport state.

    Example:
        camera = CameraController(store=store, events=events, engine=engine, lifecycle=lifecycle)
        lifecycle.context.container = "map"
        camera.initialize()
    """

    def __init__(
        self,
        store: HostStateStore,
        events: EventEmitter,
        engine: MapEngine,
        lifecycle: MapLifecycle,
    ) -> None:
        self.store = store
        self.events = events
        self.engine = engine
        self.lifecycle = lifecycle

    @property
    def map(self) -> MapHandle | None:
        return self.lifecycle.map

    def _requested_center(self) -> LonLat:
        return (
            parse_coordinate(self.store.get(BindingName.LONGITUDE)),
            parse_coordinate(self.store.get(BindingName.LATITUDE)),
        )

    # =========================================================================
    # Initialization
    # =========================================================================

    def initialize(self) -> bool:
        """Create the map if possible and not yet done.

        Returns:
            True if a new map was created by this call.
        """
        token = self.store.get(BindingName.ACCESS_TOKEN)
        if validate_access_token(token) is not None:
            logger.warning("[CAMERA] No Mapbox Access Token provided. Please provide one in the component settings.")
            return False

        if self.lifecycle.map is not None:
            return False  # Initialize map only once

        container = self.lifecycle.context.container
        if container is None:
            logger.debug("[CAMERA] No mount target yet, deferring map creation")
            return False

        center = self._requested_center()
        zoom = self.store.get(BindingName.ZOOM)
        map_handle = self.engine.create_map(
            container=container,
            access_token=token.strip(),
            style=self.store.get(BindingName.MAP_STYLE),
            center=center,
            zoom=zoom,
            attribution_control=MapConfig.ATTRIBUTION_CONTROL,
        )
        self.lifecycle.create(map_handle=map_handle)

        map_handle.on(MapEvents.RENDER, self._on_render)
        map_handle.on(MapEvents.MOVE_END, self._on_move_end)
        map_handle.on(MapEvents.ROTATE_END, self._on_rotate_end)

        logger.info(f"[CAMERA] Map created at center={center}, zoom={zoom}")
        return True

    def detach(self) -> None:
        """Stop listening to the map's camera events."""
        if self.map is None:
            return
        self.map.off(MapEvents.RENDER, self._on_render)
        self.map.off(MapEvents.MOVE_END, self._on_move_end)
        self.map.off(MapEvents.ROTATE_END, self._on_rotate_end)

    # =========================================================================
    # Host -> camera
    # =========================================================================

    def on_center_changed(self, _value: object, origin: ChangeOrigin) -> None:
        """Host changed longitude or latitude: re-center the camera."""
        if origin is ChangeOrigin.COMPONENT:
            logger.debug("[CAMERA] Ignoring center change written back by the camera")
            return
        if self.map is None:
            return

        lon, lat = self._requested_center()
        self.publish_viewport(Viewport(longitude=lon, latitude=lat, zoom=self.store.get(BindingName.ZOOM)))

        current_lon, current_lat = self.map.get_center()
        if abs(lon - current_lon) <= MapConfig.CENTER_EPSILON and abs(lat - current_lat) <= MapConfig.CENTER_EPSILON:
            logger.debug(f"[CAMERA] Center ({lon}, {lat}) already live, not moving")
            return

        logger.info(f"[CAMERA] Re-centering to ({lon}, {lat})")
        self.map.set_center((lon, lat))

    def on_style_changed(self, value: str, _origin: ChangeOrigin) -> None:
        """Host changed the style identifier."""
        if self.map is None:
            return
        self.map.set_style(value)

    # =========================================================================
    # Camera -> host
    # =========================================================================

    def _on_render(self) -> None:
        # Container size changes are not observable otherwise
        if self.map is not None:
            self.map.resize()

    def _on_move_end(self) -> None:
        self.write_back()
        self.events.emit(EventNames.VIEWPORT_CHANGED)

    def _on_rotate_end(self) -> None:
        self.write_back()
        self.events.emit(EventNames.ROTATE_END)

    def write_back(self) -> Viewport | None:
        """Copy the live camera center/zoom into the host bindings.

        Returns:
            The published Viewport, or None without a map.
        """
        if self.map is None:
            return None
        lon, lat = self.map.get_center()
        zoom = self.map.get_zoom()

        origin = ChangeOrigin.COMPONENT
        self.store.set(BindingName.LONGITUDE, format_coordinate(lon, MapConfig.COORDINATE_DECIMALS), origin=origin)
        self.store.set(BindingName.LATITUDE, format_coordinate(lat, MapConfig.COORDINATE_DECIMALS), origin=origin)
        self.store.set(BindingName.ZOOM, zoom, origin=origin)

        viewport = Viewport(longitude=lon, latitude=lat, zoom=zoom)
        self.publish_viewport(viewport)
        logger.info(f"[CAMERA] Viewport written back: {viewport}")
        return viewport

    def publish_viewport(self, viewport: Viewport) -> None:
        self.store.set(BindingName.VIEWPORT, viewport.to_dict(), origin=ChangeOrigin.COMPONENT)

    @property
    def viewport(self) -> Viewport | None:
        """Last published viewport snapshot."""
        value = self.store.get(BindingName.VIEWPORT)
        if value is None:
            return None
        return Viewport(**value)
