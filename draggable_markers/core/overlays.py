"""OverlayReconciler - One draggable marker per host point record.

Reconciliation is destroy-and-recreate: on every point-list change, all
tracked markers are removed from the map before any marker for the new list
is built. Removal detaches drag handlers, so a stale marker can never write
into a newer list.

Each Overlay carries its list index as a field. The marker element id
("marker-<index>") is only the visual tag, identity never comes from it.

Drag completion copies the current list, replaces the dragged entry and
submits the full new list (copy-on-write), then emits "on-drag-end".
"""

import functools
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from draggable_markers.constants import EventNames, MarkerConfig
from draggable_markers.core.lifecycle import MapLifecycle
from draggable_markers.engine.base import DragEvent, MarkerHandle, MarkerIcon
from draggable_markers.model.point import PointFields, replace_point
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import ChangeOrigin, HostStateStore

logger = logging.getLogger(__name__)

DEFAULT_ICON = MarkerIcon(
    url=MarkerConfig.ICON_URL,
    width=MarkerConfig.WIDTH_PX,
    height=MarkerConfig.HEIGHT_PX,
)


def overlay_tag(index: int) -> str:
    """Visual element id for the marker at index, e.g. 'marker-2'."""
    return f"{MarkerConfig.TAG_PREFIX}{index}"


@dataclass(frozen=True)
class Overlay:
    """A live marker bound to the point record at index."""

    index: int
    marker: MarkerHandle

    @property
    def tag(self) -> str:
        return overlay_tag(self.index)


class OverlayReconciler:
    """Keeps exactly one overlay per entry of the host point list."""

    def __init__(
        self,
        store: HostStateStore,
        events: EventEmitter,
        lifecycle: MapLifecycle,
        icon: MarkerIcon = DEFAULT_ICON,
        preserve_extra_fields: bool = MarkerConfig.PRESERVE_EXTRA_FIELDS,
    ) -> None:
        """Initialize reconciler.

        Args:
            store: Host state holding points and field names
            events: Notification emitter for drag end
            lifecycle: Provides the shared map instance
            icon: Marker image and size
            preserve_extra_fields: Keep non-coordinate fields of a dragged record.
                False replaces the record with only longitude/latitude.
        """
        self.store = store
        self.events = events
        self.lifecycle = lifecycle
        self.icon = icon
        self.preserve_extra_fields = preserve_extra_fields
        self._overlays: list[Overlay] = []

    @property
    def overlays(self) -> list[Overlay]:
        return list(self._overlays)

    @property
    def fields(self) -> PointFields:
        """Field names as currently configured by the host."""
        return PointFields(
            longitude=self.store.get(BindingName.LONGITUDE_FIELD_NAME),
            latitude=self.store.get(BindingName.LATITUDE_FIELD_NAME),
        )

    def on_points_changed(self, _value: object, _origin: ChangeOrigin) -> None:
        self.reconcile()

    def reconcile(self) -> list[Overlay]:
        """Retire every tracked overlay, then build one per current point.

        Returns:
            The new overlays in list order (empty without a map).
        """
        map_handle = self.lifecycle.map
        if map_handle is None:
            return []

        self.retire_all()

        points = self.store.get(BindingName.POINTS) or []
        fields = self.fields
        overlays: list[Overlay] = []
        try:
            for index, point in enumerate(points):
                marker = map_handle.add_marker(
                    element_id=overlay_tag(index),
                    lng_lat=fields.lon_lat(point),
                    icon=self.icon,
                    draggable=True,
                )
                overlay = Overlay(index=index, marker=marker)
                overlays.append(overlay)
                marker.on_drag_end(functools.partial(self.handle_drag_end, overlay))
        finally:
            # Markers already on the map stay tracked even if building fails
            self._overlays = overlays
        logger.info(f"[OVERLAY] Reconciled {len(overlays)} markers")
        return self.overlays

    def retire_all(self) -> None:
        """Remove every tracked marker from the map."""
        for overlay in self._overlays:
            overlay.marker.remove()
        if self._overlays:
            logger.debug(f"[OVERLAY] Retired {len(self._overlays)} markers")
        self._overlays = []

    def handle_drag_end(self, overlay: Overlay, event: DragEvent) -> None:
        """Write the dragged marker's final position back into the host point list."""
        points = self.store.get(BindingName.POINTS) or []
        if overlay.index >= len(points):
            logger.warning(f"[OVERLAY] Drag of {overlay.tag} has no matching point (list has {len(points)})")
            return

        lon, lat = event.target.lng_lat
        base = points[overlay.index] if self.preserve_extra_fields else None
        if not isinstance(base, Mapping):
            base = None
        record = self.fields.make_record(lon=lon, lat=lat, base=base)
        new_points = replace_point(points, overlay.index, record)

        logger.info(f"[OVERLAY] {overlay.tag} dragged to ({lon}, {lat})")
        self.store.set(BindingName.POINTS, new_points, origin=ChangeOrigin.COMPONENT)
        self.events.emit(EventNames.DRAG_END)
