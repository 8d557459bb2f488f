"""Sidebar UI renderer for draggable markers.

Renders the left sidebar with:
- Binding inspector: one input per editable host binding (the hidden
  viewport binding is shown read-only on the main page instead)
- Gesture controls standing in for browser interaction: pan/zoom, rotate,
  and dropping a marker at a new position

Inputs are re-synced from the host store before they are drawn, so camera and
drag write-backs show up immediately. User edits reach the store through
on_change callbacks, which run before the script on the next rerun.
"""

import json
import logging
import math
from typing import Any, cast

import streamlit as st

from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.engine.deck_map import DeckMap
from draggable_markers.model.point import parse_coordinate
from draggable_markers.state.bindings import BINDINGS, BindingKind, BindingName
from draggable_markers.ui.infra import reset_component

logger = logging.getLogger(__name__)

JSON_ERROR_KEY = "_json_error"


def widget_key(name: str) -> str:
    """Session key of the sidebar input for a binding."""
    return f"input_{name}"


def _to_widget_value(kind: str, value: Any) -> Any:
    if kind == BindingKind.NUMBER:
        return float(value) if value is not None else 0.0
    if kind in (BindingKind.ARRAY, BindingKind.OBJECT):
        return "" if value is None else json.dumps(value, indent=2)
    return "" if value is None else str(value)


class SidebarRenderer:
    """Renders the sidebar and writes user edits into the host store."""

    def __init__(self, component: DraggableMarkersMap) -> None:
        self.component = component
        self.store = component.store

    @property
    def deck_map(self) -> DeckMap | None:
        return cast(DeckMap | None, self.component.map)

    def render(self) -> None:
        with st.sidebar:
            st.header("Bindings")
            self._render_bindings()
            st.divider()
            st.header("Gestures")
            self._render_gestures()
            st.divider()
            if st.button("Reset to defaults"):
                reset_component()

    # =========================================================================
    # Binding inspector
    # =========================================================================

    def _render_bindings(self) -> None:
        error = st.session_state.pop(JSON_ERROR_KEY, None)
        if error:
            st.error(error)

        for spec in BINDINGS:
            if spec.hidden:
                continue
            key = widget_key(spec.name)
            st.session_state[key] = _to_widget_value(spec.kind, self.store.get(spec.name))

            if spec.kind == BindingKind.NUMBER:
                st.number_input(spec.label, key=key, help=spec.description, on_change=self._on_number_changed, args=(spec.name,))
            elif spec.kind in (BindingKind.ARRAY, BindingKind.OBJECT):
                st.text_area(spec.label, key=key, help=spec.description, on_change=self._on_json_changed, args=(spec.name,))
            else:
                input_type = "password" if spec.name == BindingName.ACCESS_TOKEN else "default"
                st.text_input(
                    spec.label,
                    key=key,
                    help=spec.description,
                    type=input_type,
                    on_change=self._on_text_changed,
                    args=(spec.name,),
                )

    def _on_text_changed(self, name: str) -> None:
        self.store.set(name, st.session_state[widget_key(name)])

    def _on_number_changed(self, name: str) -> None:
        self.store.set(name, st.session_state[widget_key(name)])

    def _on_json_changed(self, name: str) -> None:
        raw = st.session_state[widget_key(name)].strip()
        if raw == "":
            self.store.set(name, None)
            return
        try:
            value = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.info(f"[UI] Rejected invalid JSON for {name}: {e}")
            st.session_state[JSON_ERROR_KEY] = f"Invalid JSON for {name}: {e}"
            return
        self.store.set(name, value)

    # =========================================================================
    # Gestures
    # =========================================================================

    def _render_gestures(self) -> None:
        if self.deck_map is None:
            st.caption("Gestures are available once the map exists.")
            return

        lon, lat = (0.0 if math.isnan(v) else v for v in self.deck_map.get_center())
        st.number_input("Pan to longitude", value=lon, format="%.6f", key="gesture_lon")
        st.number_input("Pan to latitude", value=lat, format="%.6f", key="gesture_lat")
        st.number_input("Zoom", value=float(self.deck_map.get_zoom()), key="gesture_zoom")
        st.button("Pan / zoom", on_click=self._on_pan)

        st.slider("Bearing", min_value=0, max_value=359, value=int(self.deck_map.get_bearing()), key="gesture_bearing")
        st.button("Rotate", on_click=self._on_rotate)

        tags = [overlay.tag for overlay in self.component.live_overlays]
        if not tags:
            st.caption("No markers to drag.")
            return
        st.selectbox("Marker", options=tags, key="gesture_marker")
        st.text_input("Drop at longitude", key="gesture_drop_lon")
        st.text_input("Drop at latitude", key="gesture_drop_lat")
        st.button("Drop marker", on_click=self._on_drop)

    def _on_pan(self) -> None:
        if self.deck_map is None:
            return
        self.deck_map.pan_to(
            lon=st.session_state["gesture_lon"],
            lat=st.session_state["gesture_lat"],
            zoom=st.session_state["gesture_zoom"],
        )

    def _on_rotate(self) -> None:
        if self.deck_map is None:
            return
        self.deck_map.rotate_to(float(st.session_state["gesture_bearing"]))

    def _on_drop(self) -> None:
        if self.deck_map is None:
            return
        self.deck_map.drag_marker(
            element_id=st.session_state["gesture_marker"],
            lon=parse_coordinate(st.session_state.get("gesture_drop_lon")),
            lat=parse_coordinate(st.session_state.get("gesture_drop_lat")),
        )
