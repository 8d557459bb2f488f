"""Render engine boundary - what the core needs from a map renderer.

The renderer is an opaque capability: camera control, marker placement,
source/layer rendering, and lifecycle events (load, moveend, rotateend,
render, dragend). The core only talks to these interfaces, so any renderer
that implements them can be plugged in.

Coordinates are always (lon, lat) - GeoJSON/Pydeck order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

LonLat = tuple[float, float]  # (lon, lat)
MapEventHandler = Callable[[], None]


@dataclass(frozen=True)
class MarkerIcon:
    """Visual element of a marker: image URL and pixel size."""

    url: str
    width: int
    height: int


@dataclass(frozen=True)
class DragEvent:
    """Finished drag of a marker. The marker already holds its final position."""

    target: MarkerHandle


DragHandler = Callable[[DragEvent], None]


class MarkerHandle(ABC):
    """A live marker placed on a map."""

    @property
    @abstractmethod
    def element_id(self) -> str:
        """Id of the marker's visual element."""
        ...

    @property
    @abstractmethod
    def lng_lat(self) -> LonLat:
        """Current (lon, lat) position."""
        ...

    @property
    @abstractmethod
    def draggable(self) -> bool: ...

    @property
    @abstractmethod
    def is_removed(self) -> bool: ...

    @abstractmethod
    def on_drag_end(self, handler: DragHandler) -> None:
        """Register a drag-completion handler."""
        ...

    @abstractmethod
    def remove(self) -> None:
        """Remove from the map and detach all handlers."""
        ...


class GeoJSONSource(ABC):
    """A render source holding GeoJSON data."""

    @property
    @abstractmethod
    def source_id(self) -> str: ...

    @property
    @abstractmethod
    def data(self) -> Any: ...

    @abstractmethod
    def set_data(self, data: Any) -> None:
        """Replace the source data in place."""
        ...


class MapHandle(ABC):
    """A live map instance with one camera."""

    @property
    @abstractmethod
    def loaded(self) -> bool:
        """True once the initial load event has fired."""
        ...

    @abstractmethod
    def get_center(self) -> LonLat: ...

    @abstractmethod
    def get_zoom(self) -> float: ...

    @abstractmethod
    def get_bearing(self) -> float: ...

    @abstractmethod
    def set_center(self, center: LonLat) -> None:
        """Jump the camera to center. Fires moveend only if the camera moved."""
        ...

    @abstractmethod
    def set_style(self, style: str) -> None:
        """Switch visual style. Center and zoom are unchanged."""
        ...

    @abstractmethod
    def resize(self) -> None:
        """Re-measure the map container."""
        ...

    @abstractmethod
    def on(self, event: str, handler: MapEventHandler) -> None: ...

    @abstractmethod
    def off(self, event: str, handler: MapEventHandler) -> None: ...

    @abstractmethod
    def add_source(self, source_id: str, data: Any) -> GeoJSONSource: ...

    @abstractmethod
    def get_source(self, source_id: str) -> GeoJSONSource | None: ...

    @abstractmethod
    def add_layer(self, layer: dict[str, Any]) -> None:
        """Add a layer spec with at least 'id', 'type' and 'source'."""
        ...

    @abstractmethod
    def get_layer(self, layer_id: str) -> dict[str, Any] | None: ...

    @abstractmethod
    def render(self) -> Any:
        """Draw one frame. Fires "render" before drawing."""
        ...

    @abstractmethod
    def add_marker(
        self,
        element_id: str,
        lng_lat: LonLat,
        icon: MarkerIcon,
        draggable: bool = True,
    ) -> MarkerHandle: ...


class MapEngine(ABC):
    """Factory for map instances."""

    @abstractmethod
    def create_map(
        self,
        container: str,
        access_token: str,
        style: str,
        center: LonLat,
        zoom: float,
        attribution_control: bool = False,
    ) -> MapHandle:
        """Create a map. The credential is passed explicitly, never set globally."""
        ...
