"""Synchronization core: camera, overlays, geometry layer and their wiring.

Modules:
    lifecycle: MapLifecycle state machine (inert -> created -> loaded)
    camera: CameraController (viewport <-> camera)
    overlays: OverlayReconciler (points <-> draggable markers)
    geometry: GeometryLayerSync (GeoJSON -> fill layer)
    component: DraggableMarkersMap (wiring)
"""

from draggable_markers.core.camera import CameraController
from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.core.geometry import GeometryLayerSync, fill_layer_spec
from draggable_markers.core.lifecycle import MapContext, MapLifecycle
from draggable_markers.core.overlays import Overlay, OverlayReconciler, overlay_tag

__all__ = [
    "CameraController",
    "DraggableMarkersMap",
    "GeometryLayerSync",
    "MapContext",
    "MapLifecycle",
    "Overlay",
    "OverlayReconciler",
    "fill_layer_spec",
    "overlay_tag",
]
