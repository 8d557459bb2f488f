"""Shared pytest fixtures for draggable_markers tests.

All tests run against the Pydeck engine (DeckMapEngine). It keeps the map
scene in memory and exposes gesture methods (finish_load, pan_to, rotate_to,
drag_marker), so no browser or network access is needed.

COORDINATES:
    Defaults are the San Francisco values from MapConfig/Defaults:
    center (-122.4376, 37.7577), zoom 9, three points.
"""

import pytest

from draggable_markers.core.component import DraggableMarkersMap
from draggable_markers.engine.deck_map import DeckMap, DeckMapEngine
from draggable_markers.state.bindings import BindingName
from draggable_markers.state.events import EventEmitter
from draggable_markers.state.store import HostStateStore

TOKEN = "pk.test-token"
CONTAINER = "map"

SINGLE_POINT = [{"longitude": "-122.4194", "latitude": "37.7949"}]


# =============================================================================
# HOST STATE FIXTURES
# =============================================================================


@pytest.fixture
def store() -> HostStateStore:
    """Host store with a valid token and all other bindings at defaults."""
    return HostStateStore(initial={BindingName.ACCESS_TOKEN: TOKEN})


@pytest.fixture
def events() -> EventEmitter:
    return EventEmitter()


@pytest.fixture
def engine() -> DeckMapEngine:
    return DeckMapEngine()


# =============================================================================
# COMPONENT FIXTURES
# =============================================================================


@pytest.fixture
def component(store: HostStateStore, events: EventEmitter, engine: DeckMapEngine) -> DraggableMarkersMap:
    """Mounted component with a created (not yet loaded) map."""
    component = DraggableMarkersMap(store=store, events=events, engine=engine)
    component.mount(CONTAINER)
    return component


@pytest.fixture
def deck_map(component: DraggableMarkersMap) -> DeckMap:
    """The component's map instance."""
    assert isinstance(component.map, DeckMap)
    return component.map


@pytest.fixture
def loaded_component(component: DraggableMarkersMap, deck_map: DeckMap) -> DraggableMarkersMap:
    """Mounted component whose map fired its initial load."""
    deck_map.finish_load()
    return component


@pytest.fixture
def single_point_component(events: EventEmitter, engine: DeckMapEngine) -> DraggableMarkersMap:
    """Mounted component with one point at (-122.4194, 37.7949)."""
    store = HostStateStore(
        initial={
            BindingName.ACCESS_TOKEN: TOKEN,
            BindingName.POINTS: [dict(point) for point in SINGLE_POINT],
        }
    )
    component = DraggableMarkersMap(store=store, events=events, engine=engine)
    component.mount(CONTAINER)
    return component
