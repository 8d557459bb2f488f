"""Render engine boundary and its Pydeck implementation."""

from draggable_markers.engine.base import (
    DragEvent,
    GeoJSONSource,
    LonLat,
    MapEngine,
    MapHandle,
    MarkerHandle,
    MarkerIcon,
)
from draggable_markers.engine.deck_map import DeckMap, DeckMapEngine, DeckMarker, DeckSource

__all__ = [
    "DeckMap",
    "DeckMapEngine",
    "DeckMarker",
    "DeckSource",
    "DragEvent",
    "GeoJSONSource",
    "LonLat",
    "MapEngine",
    "MapHandle",
    "MarkerHandle",
    "MarkerIcon",
]
