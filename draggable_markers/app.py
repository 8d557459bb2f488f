"""Draggable Markers - Interactive demo host.

Hosts one DraggableMarkersMap in a Streamlit page. Host state lives in the
session (SessionStateStore); the sidebar edits the bindings and drives map
gestures; the page shows the map, the viewport snapshot, the points and the
notification event log.

Run: streamlit run draggable_markers/app.py
"""

import logging
import os

import streamlit as st

from draggable_markers.constants import AppConfig, MapConfig
from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.engine.deck_map import DeckMap
from draggable_markers.model.message import validate_access_token, validate_coordinate
from draggable_markers.model.point import parse_coordinate
from draggable_markers.state.bindings import BindingName
from draggable_markers.ui.infra import COMPONENT_KEY
from draggable_markers.ui.session_store import SessionStateStore
from draggable_markers.ui.sidebar import SidebarRenderer

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

MAP_CONTAINER = "map-container"


# =============================================================================
# SESSION STATE
# =============================================================================


def init_session_state() -> DraggableMarkersMap:
    """Create the component once per session and mount it."""
    if COMPONENT_KEY not in st.session_state:
        store = SessionStateStore(initial={BindingName.ACCESS_TOKEN: os.environ.get(AppConfig.TOKEN_ENV_VAR, "")})
        component = DraggableMarkersMap(store=store)
        component.mount(MAP_CONTAINER)
        st.session_state[COMPONENT_KEY] = component
        logger.info("[UI] Created DraggableMarkersMap for new session")
    return st.session_state[COMPONENT_KEY]


def finish_initial_load(component: DraggableMarkersMap) -> None:
    """A browser map fires "load" once its style is in; the deck is ready at first render."""
    deck_map = component.map
    if isinstance(deck_map, DeckMap) and not deck_map.loaded:
        deck_map.finish_load()


# =============================================================================
# MAIN PAGE
# =============================================================================


def render_messages(component: DraggableMarkersMap) -> None:
    store = component.store
    message = validate_access_token(store.get(BindingName.ACCESS_TOKEN))
    if message is not None:
        message.display()
        return
    for name in (BindingName.LONGITUDE, BindingName.LATITUDE):
        raw = store.get(name)
        message = validate_coordinate(field_name=name, raw_value=raw, parsed=parse_coordinate(raw))
        if message is not None:
            message.display()


def render_map(component: DraggableMarkersMap) -> None:
    deck = component.render()
    if deck is None:
        st.caption("The map appears once an access token is set.")
        return
    st.pydeck_chart(deck, height=MapConfig.HEIGHT_PX)


def render_state_panels(component: DraggableMarkersMap) -> None:
    col_viewport, col_points, col_events = st.columns(3)
    with col_viewport:
        st.subheader("Viewport")
        st.json(component.store.get(BindingName.VIEWPORT) or {})
    with col_points:
        st.subheader("Points")
        st.json(component.store.get(BindingName.POINTS) or [])
    with col_events:
        st.subheader("Events")
        history = component.events.history
        if history:
            st.write(list(reversed(history[-10:])))
        else:
            st.caption("No events yet.")


def main() -> None:
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    st.title(f"{AppConfig.ICON} {AppConfig.TITLE}")

    component = init_session_state()
    finish_initial_load(component)

    SidebarRenderer(component=component).render()
    render_messages(component)
    render_map(component)
    render_state_panels(component)


main()
