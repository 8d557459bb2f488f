"""Draggable Markers - Map markers and viewport synced with host state.

Keeps a list of draggable map markers and the map viewport in two-way sync
with an externally owned state store:
- Host state changes move the camera, restyle the map, rebuild markers and
  update the GeoJSON fill layer
- Map interaction (pan, zoom, rotate, marker drag) writes back into host state
  and emits notification events

Modules:
    model: Data structures (point records, Viewport, messages)
    state: Host bindings, change-notifying store, notification events
    engine: Render engine boundary and the Pydeck implementation
    core: Camera controller, overlay reconciler, geometry sync, wiring
    ui: Streamlit host integration

Example:
    from draggable_markers.core import DraggableMarkersMap
    from draggable_markers.state import HostStateStore
"""

from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import HostStateStore

__all__ = ["DraggableMarkersMap", "HostStateStore", "EventEmitter"]
